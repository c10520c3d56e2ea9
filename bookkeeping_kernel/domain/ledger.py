"""
Ledger -- Named collection of accounts.

Responsibility:
    Holds the accounts of one ledger keyed by account name and posts
    journal entries into them, creating accounts on first use. Also
    provides the whole-ledger trial balance check.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Consumes JournalEntry and Account; consumed by NaiveState.

Invariants enforced:
    KEYED_BY_NAME  -- every account is stored under account.head.name
    ATOMIC_POSTING -- post() applies every operation of an entry or none

Failure modes:
    - AccountMismatchError from Account.post when an operation's head has
      the name of a stored account but a different class
    - ValueError on construction with a mis-keyed accounts mapping

Audit relevance:
    is_trial_balanced() is a global conservation check over the whole
    ledger: the balances of debit-normal accounts must sum to the balances
    of credit-normal accounts. It is distinct from JournalEntry.is_balanced(),
    which checks one transaction's debit/credit labels.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bookkeeping_kernel.domain.account import Account
from bookkeeping_kernel.domain.journal_entry import JournalEntry
from bookkeeping_kernel.domain.operation import Operation
from bookkeeping_kernel.domain.values import AccountHead, Direction
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("domain.ledger")


def _account_for(accounts: Mapping[str, Account], head: AccountHead) -> Account:
    """Stored account for head.name, or a fresh zero-balance account for head."""
    account = accounts.get(head.name)
    if account is None:
        return Account.new(head)
    return account


@dataclass(frozen=True)
class Ledger:
    """
    A ledger: a name and its accounts keyed by account name.

    Contract:
        Posting returns a new Ledger; accounts that were not touched are
        shared with the previous ledger value.

    Guarantees:
        - Immutable (frozen dataclass, accounts frozen as MappingProxyType)
        - ``accounts[name].head.name == name`` for every entry (KEYED_BY_NAME)

    Non-goals:
        - Does NOT keep history; only current balances
        - Does NOT lock; callers serialise writers per ledger
    """

    name: str
    accounts: Mapping[str, Account] = field(default_factory=dict)

    # Holds a mapping; compared by value, never hashed.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Ledger name must be a non-empty string")
        # INVARIANT: KEYED_BY_NAME
        for key, account in self.accounts.items():
            if account.head.name != key:
                raise ValueError(
                    f"Account {account.head.name!r} stored under key {key!r} "
                    f"in ledger {self.name!r}"
                )
        if not isinstance(self.accounts, MappingProxyType):
            object.__setattr__(self, "accounts", MappingProxyType(dict(self.accounts)))

    @classmethod
    def new(cls, name: str) -> Ledger:
        """Create an empty ledger."""
        return cls(name=name)

    @classmethod
    def from_accounts(cls, name: str, accounts: Iterable[Account]) -> Ledger:
        """Collect accounts into a ledger; a later account with the same name wins."""
        return cls(name=name, accounts={account.head.name: account for account in accounts})

    def get_account(self, head: AccountHead) -> Account:
        """
        Return the stored account for ``head.name``, or a fresh zero-balance
        account with ``head`` when the ledger has none. Never fails.
        """
        return _account_for(self.accounts, head)

    def post(self, entry: JournalEntry) -> Ledger:
        """
        Post a journal entry, upserting accounts as needed.

        Operations are applied in entry order as a left fold: a later
        operation on the same account sees the effect of earlier ones.

        Preconditions:
            - Every operation's head is consistent (same class) with any
              stored account of the same name.

        Postconditions:
            - Returns a new Ledger; ``self`` is unchanged.
            - On failure nothing is applied (ATOMIC_POSTING).

        Raises:
            AccountMismatchError: If an operation cannot be applied to the
                stored account of the same name.
        """
        # INVARIANT: ATOMIC_POSTING -- fold onto a draft, swap in on success
        draft = dict(self.accounts)
        for op in entry.operations:
            account = _account_for(draft, op.account_head)
            draft[op.account_head.name] = account.post(op)

        logger.debug(
            "journal_entry_posted",
            extra={
                "ledger": self.name,
                "operation_count": len(entry.operations),
                "account_count": len(draft),
            },
        )
        return Ledger(name=self.name, accounts=draft)

    def post_operation(self, operation: Operation) -> Ledger:
        """Post a single operation (see post())."""
        return self.post(JournalEntry.new([operation]))

    # ------------------------------------------------------------------
    # Trial balance
    # ------------------------------------------------------------------

    def debit_balance_total(self) -> int:
        """Sum of balances of accounts whose class is debit-normal."""
        return sum(
            account.balance
            for account in self.accounts.values()
            if account.head.account_class.natural_balance is Direction.DEBIT
        )

    def credit_balance_total(self) -> int:
        """Sum of balances of accounts whose class is credit-normal."""
        return sum(
            account.balance
            for account in self.accounts.values()
            if account.head.account_class.natural_balance is Direction.CREDIT
        )

    def is_trial_balanced(self) -> bool:
        """
        Check that debit-normal balances sum to credit-normal balances.

        A balanced ledger holds data integrity (expected pairing of debits
        and credits), which says nothing about whether the accounts are
        well designed.
        """
        return self.debit_balance_total() == self.credit_balance_total()

    def __len__(self) -> int:
        return len(self.accounts)

    def __contains__(self, account_name: object) -> bool:
        return account_name in self.accounts
