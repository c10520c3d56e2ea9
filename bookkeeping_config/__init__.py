"""
Chart-of-accounts configuration (``bookkeeping_config``).

Responsibility
--------------
Single entrypoint through which a chart of accounts is loaded from
YAML, validated, and turned into a kernel ``MappingChartOfAccounts``.

Architecture position
---------------------
**Config layer** -- sits outside the kernel.  The kernel never imports
this package; this package imports the kernel only to build its
runtime chart via ``bookkeeping_config.bridges``.

Invariants enforced
-------------------
* A chart with validation errors is never returned.
* Every successful load emits a ``chart_of_accounts_loaded`` trace
  carrying the config id, version and checksum.

Failure modes
-------------
* ``FileNotFoundError`` -- the YAML file does not exist.
* ``yaml.YAMLError`` -- the YAML file is malformed.
* ``KeyError`` -- a required key is missing from an entry.
* ``ValueError`` -- validation failed; the message lists every error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bookkeeping_config.bridges import build_chart_of_accounts
from bookkeeping_config.loader import load_chart_config
from bookkeeping_config.validator import validate_chart
from bookkeeping_kernel.domain.chart_of_accounts import MappingChartOfAccounts

_logger = logging.getLogger("bookkeeping.config")

DEFAULT_CHART_PATH = Path(__file__).parent / "charts" / "default.yaml"


def load_chart_of_accounts(path: Path | str | None = None) -> MappingChartOfAccounts:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned chart has passed ``validate_chart``.
        - A ``chart_of_accounts_loaded`` log entry is emitted on every
          successful call; validation warnings are logged at WARNING.

    Args:
        path: YAML file to load. Defaults to the bundled
            ``charts/default.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If validation fails.
    """
    chart_path = Path(path) if path is not None else DEFAULT_CHART_PATH
    config = load_chart_config(chart_path)

    validation = validate_chart(config)
    if not validation.is_valid:
        raise ValueError(
            "Chart of accounts validation failed:\n"
            + "\n".join(f"  - {e}" for e in validation.errors)
        )
    for warning in validation.warnings:
        _logger.warning(
            "chart_of_accounts_warning",
            extra={"config_id": config.config_id, "warning": warning},
        )

    chart = build_chart_of_accounts(config)

    _logger.info(
        "chart_of_accounts_loaded",
        extra={
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "path": str(chart_path),
            "ledger_count": len(config.ledgers),
            "account_count": len(config.accounts),
            "account_class_count": len(config.account_classes),
        },
    )

    return chart


__all__ = ["DEFAULT_CHART_PATH", "load_chart_of_accounts"]
