"""
Account -- Balance holder for a single account head.

Responsibility:
    Holds the current balance of one account and applies operations to it
    by replacement: posting returns a new Account, the original is left
    untouched.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Consumes Operation; consumed by Ledger.

Invariants enforced:
    ACCOUNT_IDENTITY     -- only operations naming this account are applied
    BALANCE_CONSERVATION -- balance moves by exactly to_delta_amount()

Failure modes:
    - AccountMismatchError when the operation's head differs from the
      account's head
    - TypeError when balance is not an int
"""

from __future__ import annotations

from dataclasses import dataclass

from bookkeeping_kernel.domain.operation import Operation
from bookkeeping_kernel.domain.values import AccountHead
from bookkeeping_kernel.exceptions import AccountMismatchError


@dataclass(frozen=True, slots=True)
class Account:
    """
    State of an account: its head and its balance.

    Contract:
        ``balance`` is in the smallest currency unit. It may go negative;
        that is allowed (though usually a modelling smell) and not an
        error.

    Guarantees:
        - Immutable (frozen dataclass with slots)
        - post() never mutates; it returns a new Account
    """

    head: AccountHead
    balance: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.balance, bool) or not isinstance(self.balance, int):
            raise TypeError(f"balance must be an int, got {type(self.balance).__name__}")

    @classmethod
    def new(cls, head: AccountHead, balance: int = 0) -> Account:
        """Create an account, with a zero balance unless one is given."""
        return cls(head=head, balance=balance)

    @property
    def name(self) -> str:
        return self.head.name

    def post(self, operation: Operation) -> Account:
        """
        Apply an operation to this account.

        Preconditions:
            - ``operation.account_head == self.head``

        Postconditions:
            - Returns a new Account with
              ``balance == self.balance + operation.to_delta_amount()``
            - ``self`` is unchanged

        Raises:
            AccountMismatchError: If the operation names another account.
        """
        # INVARIANT: ACCOUNT_IDENTITY -- never misapply an amount
        if operation.account_head != self.head:
            raise AccountMismatchError(
                expected_account=self.head.name,
                received_account=operation.account_head.name,
            )
        return Account(head=self.head, balance=self.balance + operation.to_delta_amount())
