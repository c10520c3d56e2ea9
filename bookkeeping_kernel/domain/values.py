"""
Values -- Immutable identity and classification value objects.

Responsibility:
    Provides the leaf value types every other domain module is built on:
    Direction (debit/credit label), AccountClass (static classification
    carrying the natural balance direction) and AccountHead (the identity
    used to find or create an account in a ledger).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module. No outward dependencies.

Invariants enforced:
    KEYED_BY_NAME -- AccountHead.name is a non-empty string, the key under
                     which a ledger stores the account.

Failure modes:
    - ValueError on construction with an empty account name or class id
    - TypeError when natural_balance / account_class have the wrong type

Audit relevance:
    The natural balance of an AccountClass decides the sign of every
    posting. Auditors rely on it being fixed per class and travelling with
    the AccountHead by value, never looked up at posting time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """
    Which side of the books an operation is recorded on.

    Contract:
        Exactly two values: DEBIT and CREDIT. Their effect on a balance
        depends on comparison against an account class's natural balance.
    """

    DEBIT = "debit"
    CREDIT = "credit"

    @property
    def opposite(self) -> Direction:
        """The other direction."""
        return Direction.CREDIT if self is Direction.DEBIT else Direction.DEBIT


@dataclass(frozen=True, slots=True)
class AccountClass:
    """
    Static classification of accounts (asset, liability, equity, ...).

    Contract:
        Identified by ``id``; ``parent_id`` optionally points at a broader
        class (e.g. "CA" current assets under "A" assets). The
        ``natural_balance`` is the direction in which balances of accounts
        of this class increase.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - natural_balance is always a Direction (strings are coerced)

    Non-goals:
        - Does NOT validate that parent_id exists (the chart of accounts
          configuration does that at load time)
    """

    id: str
    parent_id: str | None
    name: str
    natural_balance: Direction

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("AccountClass id is required")
        if isinstance(self.natural_balance, str) and not isinstance(
            self.natural_balance, Direction
        ):
            object.__setattr__(self, "natural_balance", Direction(self.natural_balance))
        elif not isinstance(self.natural_balance, Direction):
            raise TypeError(
                f"natural_balance must be Direction or str, got {type(self.natural_balance)}"
            )

    @property
    def is_debit_normal(self) -> bool:
        return self.natural_balance is Direction.DEBIT

    def __str__(self) -> str:
        return f"{self.id} ({self.name})"


@dataclass(frozen=True, slots=True)
class AccountHead:
    """
    Identity of an account: a unique name plus its class.

    Contract:
        Two heads refer to the same account iff their names match. The
        class must be consistent for a given name within a ledger; that is
        the caller's responsibility and is not checked structurally here.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - name is always a non-empty string
    """

    name: str
    account_class: AccountClass

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("AccountHead name must be a non-empty string")
        if not isinstance(self.account_class, AccountClass):
            raise TypeError(
                f"account_class must be AccountClass, got {type(self.account_class)}"
            )

    @property
    def natural_balance(self) -> Direction:
        """Shortcut to the natural balance of the account's class."""
        return self.account_class.natural_balance

    def __str__(self) -> str:
        return self.name
