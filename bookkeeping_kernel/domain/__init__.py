"""
Pure domain layer.

This module contains the immutable bookkeeping value objects and the
pure functions over them, with NO dependencies on:
- Database or persistence
- Time/clock
- I/O
- Configuration files

All domain objects are immutable and deterministic.
"""

from bookkeeping_kernel.domain.account import Account
from bookkeeping_kernel.domain.chart_of_accounts import (
    AccountTemplate,
    ChartOfAccounts,
    MappingChartOfAccounts,
    Term,
)
from bookkeeping_kernel.domain.interledger_entry import InterledgerEntry
from bookkeeping_kernel.domain.journal_entry import JournalEntry
from bookkeeping_kernel.domain.journalizer import Journalizer, LedgerSection
from bookkeeping_kernel.domain.ledger import Ledger
from bookkeeping_kernel.domain.naive_state import NaiveState
from bookkeeping_kernel.domain.operation import (
    Operation,
    credit,
    debit,
    to_delta_amount,
)
from bookkeeping_kernel.domain.values import AccountClass, AccountHead, Direction

__all__ = [
    # Values
    "Direction",
    "AccountClass",
    "AccountHead",
    # Operations
    "Operation",
    "credit",
    "debit",
    "to_delta_amount",
    # Accounts and ledgers
    "Account",
    "JournalEntry",
    "Ledger",
    # Multi-ledger
    "InterledgerEntry",
    "NaiveState",
    # Chart of accounts and builder
    "ChartOfAccounts",
    "MappingChartOfAccounts",
    "AccountTemplate",
    "Term",
    "Journalizer",
    "LedgerSection",
]
