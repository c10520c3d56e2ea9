"""
Pytest configuration and shared fixtures.

The kernel is pure and in-memory, so fixtures hand out value objects
(account classes, heads, charts) rather than sessions or clocks.
"""

import json
import logging
from io import StringIO

import pytest

from bookkeeping_kernel.domain.chart_of_accounts import AccountTemplate, MappingChartOfAccounts
from bookkeeping_kernel.domain.values import AccountClass, AccountHead
from bookkeeping_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session", autouse=True)
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture bookkeeping logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, acme_ledger):
            acme_ledger.post(entry)
            logs = captured_logs()
            assert any(r["message"] == "journal_entry_posted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("bookkeeping")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# ---------------------------------------------------------------------------
# Account classes and heads
# ---------------------------------------------------------------------------


@pytest.fixture
def asset_class() -> AccountClass:
    return AccountClass(id="A", parent_id=None, name="Asset", natural_balance="debit")


@pytest.fixture
def current_asset_class() -> AccountClass:
    return AccountClass(id="CA", parent_id="A", name="Current Asset", natural_balance="debit")


@pytest.fixture
def equity_class() -> AccountClass:
    return AccountClass(id="OE", parent_id=None, name="Owner's Equity", natural_balance="credit")


@pytest.fixture
def liability_class() -> AccountClass:
    return AccountClass(id="L", parent_id=None, name="Liability", natural_balance="credit")


@pytest.fixture
def cash(current_asset_class) -> AccountHead:
    return AccountHead(name="cash/CA", account_class=current_asset_class)


@pytest.fixture
def deposits(equity_class) -> AccountHead:
    return AccountHead(name="deposits/OE", account_class=equity_class)


@pytest.fixture
def unspent_cash(liability_class) -> AccountHead:
    return AccountHead(name="unspent_cash/L", account_class=liability_class)


# ---------------------------------------------------------------------------
# Chart of accounts
# ---------------------------------------------------------------------------


@pytest.fixture
def chart(current_asset_class, equity_class, liability_class) -> MappingChartOfAccounts:
    """In-memory chart mirroring bookkeeping_config/charts/default.yaml."""
    return MappingChartOfAccounts(
        ledgers={"acme": "acme", "user": "user({0})"},
        accounts={
            "cash": AccountTemplate("cash/CA", current_asset_class),
            "deposits": AccountTemplate("deposits/OE", equity_class),
            "unspent_cash": AccountTemplate("unspent_cash({0})/L", liability_class),
        },
    )
