"""
Kernel Invariants Contract.

These invariants are structural law. They are enforced by the value
objects and posting functions of ``bookkeeping_kernel.domain``. No chart
of accounts or configuration file may override them.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across Operation, Account, JournalEntry,
Ledger and NaiveState.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Each value names one structural guarantee that the kernel provides
    unconditionally. A chart of accounts may influence *which* accounts
    get posted to, but never *whether* these rules apply.
    """

    NON_NEGATIVE_AMOUNT = "non_negative_amount"
    """Every constructed Operation carries an amount >= 0; the sign is
    expressed by the direction. Enforced by Operation.debit/credit and
    Operation.__post_init__."""

    ACCOUNT_IDENTITY = "account_identity"
    """An operation is only ever applied to (or merged with) the account
    it names. Enforced by Account.post and Operation.merge."""

    BALANCE_CONSERVATION = "balance_conservation"
    """An account's balance equals the sum of the net deltas of every
    operation posted to it. Enforced by Operation.to_delta_amount being
    the single source of sign arithmetic."""

    DOUBLE_ENTRY_BALANCE = "double_entry_balance"
    """Debit-labelled amounts equal credit-labelled amounts in a balanced
    journal entry. Checked by JournalEntry.is_balanced and enforced on
    demand by Journalizer.journalize_balanced."""

    ATOMIC_POSTING = "atomic_posting"
    """A journal entry or interledger entry is applied completely or not
    at all. Enforced by posting onto draft copies in Ledger.post and
    NaiveState.post."""

    KEYED_BY_NAME = "keyed_by_name"
    """Accounts are keyed by their head name and ledgers by their ledger
    name. Enforced by Ledger.__post_init__ and NaiveState.__post_init__."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "bookkeeping_config",
    "yaml",
)
