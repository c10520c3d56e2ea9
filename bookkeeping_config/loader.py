"""
Configuration Loader (``bookkeeping_config.loader``).

Responsibility
--------------
Loads chart-of-accounts YAML files and parses them into typed
``bookkeeping_config.schema`` dataclass instances. Callers should go
through ``bookkeeping_config.load_chart_of_accounts()``, which also
validates and bridges the result.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Top-level document that is not a mapping  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from bookkeeping_config.schema import (
    DEFAULT_ACCOUNT_ID_FORMAT,
    AccountClassDef,
    AccountDef,
    ChartOfAccountsConfig,
    LedgerDef,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def parse_account_class(data: dict[str, Any]) -> AccountClassDef:
    """Parse an AccountClassDef from a dict."""
    return AccountClassDef(
        id=str(data["id"]),
        name=data["name"],
        natural_balance=str(data["natural_balance"]).lower(),
        parent_id=str(data["parent_id"]) if data.get("parent_id") is not None else None,
    )


def parse_ledger(data: dict[str, Any]) -> LedgerDef:
    """Parse a LedgerDef from a dict."""
    return LedgerDef(key=data["key"], name_template=data["name"])


def parse_account(data: dict[str, Any]) -> AccountDef:
    """Parse an AccountDef from a dict."""
    return AccountDef(
        key=data["key"],
        name_template=data["name"],
        class_id=str(data["class"]),
    )


def parse_chart(data: dict[str, Any], default_config_id: str = "chart") -> ChartOfAccountsConfig:
    """
    Parse a complete ChartOfAccountsConfig from a loaded YAML document.

    The checksum is computed over the raw document, so formatting-only
    edits to the YAML file do not change it.
    """
    return ChartOfAccountsConfig(
        config_id=data.get("config_id", default_config_id),
        version=int(data.get("version", 1)),
        account_classes=tuple(parse_account_class(c) for c in data.get("account_classes", ())),
        ledgers=tuple(parse_ledger(item) for item in data.get("ledgers", ())),
        accounts=tuple(parse_account(a) for a in data.get("accounts", ())),
        account_id_format=data.get("account_id_format", DEFAULT_ACCOUNT_ID_FORMAT),
        checksum=compute_checksum(data),
    )


def load_chart_config(path: Path) -> ChartOfAccountsConfig:
    """Load and parse a chart-of-accounts YAML file (no validation)."""
    return parse_chart(load_yaml_file(path), default_config_id=path.stem)


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Returns a hex-encoded SHA-256 hash string.
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
