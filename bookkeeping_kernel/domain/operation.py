"""
Operation -- Signed change request against a single account.

Responsibility:
    Defines the Operation value object and the arithmetic over it:
    construction with sign normalisation, conversion to a balance delta
    driven by the account's natural balance, pairwise and n-ary merge,
    per-account deduplication (uniq), canonical ordering (sort) and
    reversal.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends only on the domain values (AccountHead, Direction) and the
    kernel exception hierarchy.

Invariants enforced:
    NON_NEGATIVE_AMOUNT  -- a constructed Operation always has amount >= 0
    ACCOUNT_IDENTITY     -- merge() only combines operations on one head
    BALANCE_CONSERVATION -- to_delta_amount() is the only place where the
                            sign of a balance change is decided

Failure modes:
    - AccountMismatchError when merging operations on different heads
    - EmptyMergeInputError when merge_all() receives no operations
    - ValueError on direct construction with a negative amount
    - TypeError when amount is not an int (bool and float are rejected)

Audit relevance:
    merge() may change the direction/amount representation depending on
    argument order, but never the net delta: for any ordering of a merge
    over one account, the net delta of the result equals the sum of the
    net deltas of the inputs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import reduce

from bookkeeping_kernel.domain.values import AccountHead, Direction
from bookkeeping_kernel.exceptions import AccountMismatchError, EmptyMergeInputError

# debit sorts before credit
_DIRECTION_RANK = {Direction.DEBIT: 0, Direction.CREDIT: 1}


def _require_int(amount: object) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(
            f"amount must be an int in the smallest currency unit, got {type(amount).__name__}"
        )
    return amount


@dataclass(frozen=True, slots=True)
class Operation:
    """
    A debit or credit of an amount against one account head.

    Contract:
        ``amount`` is expressed in the smallest unit of the currency (e.g.
        cents) and is never negative; the direction carries the sign.
        Use ``Operation.debit`` / ``Operation.credit`` to construct from a
        possibly negative amount.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount is always a non-negative int (NON_NEGATIVE_AMOUNT)
        - direction is always a Direction (strings are coerced)

    Non-goals:
        - Does NOT know which ledger it belongs to (JournalEntry scoping
          and InterledgerEntry pairing do that)
    """

    direction: Direction
    account_head: AccountHead
    amount: int

    def __post_init__(self) -> None:
        if not isinstance(self.direction, Direction):
            object.__setattr__(self, "direction", Direction(self.direction))
        _require_int(self.amount)
        # INVARIANT: NON_NEGATIVE_AMOUNT -- direction carries the sign
        if self.amount < 0:
            raise ValueError(
                "Operation amount must be non-negative; use Operation.debit/credit "
                "to normalise negative amounts"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def debit(cls, head: AccountHead, amount: int) -> Operation:
        """
        Create a debit operation.

        Preconditions:
            - ``amount`` is an int (may be negative).

        Postconditions:
            - A negative amount produces a CREDIT of ``-amount``.
            - The returned operation has ``amount >= 0``.
        """
        if _require_int(amount) < 0:
            return cls(direction=Direction.CREDIT, account_head=head, amount=-amount)
        return cls(direction=Direction.DEBIT, account_head=head, amount=amount)

    @classmethod
    def credit(cls, head: AccountHead, amount: int) -> Operation:
        """
        Create a credit operation.

        Preconditions:
            - ``amount`` is an int (may be negative).

        Postconditions:
            - A negative amount produces a DEBIT of ``-amount``.
            - The returned operation has ``amount >= 0``.
        """
        if _require_int(amount) < 0:
            return cls(direction=Direction.DEBIT, account_head=head, amount=-amount)
        return cls(direction=Direction.CREDIT, account_head=head, amount=amount)

    @classmethod
    def of(cls, direction: Direction | str, head: AccountHead, amount: int) -> Operation:
        """Create an operation in the given direction, normalising the sign."""
        if Direction(direction) is Direction.DEBIT:
            return cls.debit(head, amount)
        return cls.credit(head, amount)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def account_name(self) -> str:
        return self.account_head.name

    @property
    def is_debit(self) -> bool:
        return self.direction is Direction.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.direction is Direction.CREDIT

    @property
    def is_empty(self) -> bool:
        """An operation with a zero amount has no effect."""
        return self.amount == 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def to_delta_amount(self) -> int:
        """
        Signed change this operation causes on its account's balance.

        Postconditions:
            - ``+amount`` when the direction matches the account class's
              natural balance, ``-amount`` otherwise.
        """
        # INVARIANT: BALANCE_CONSERVATION -- single source of sign arithmetic
        if self.direction is self.account_head.account_class.natural_balance:
            return self.amount
        return -self.amount

    def merge(self, other: Operation) -> Operation:
        """
        Combine two operations on the same account into one.

        Same direction: amounts are summed. Different directions: the
        result keeps this operation's direction with ``self.amount -
        other.amount``, flipped to the other direction if negative.

        Preconditions:
            - ``other.account_head == self.account_head``

        Postconditions:
            - ``result.to_delta_amount() == self.to_delta_amount() +
              other.to_delta_amount()``
            - ``result.amount >= 0``

        Raises:
            AccountMismatchError: If the heads differ.
        """
        # INVARIANT: ACCOUNT_IDENTITY -- never merge across accounts
        if other.account_head != self.account_head:
            raise AccountMismatchError(
                expected_account=self.account_head.name,
                received_account=other.account_head.name,
            )
        if other.direction is self.direction:
            return replace(self, amount=self.amount + other.amount)
        return Operation.of(self.direction, self.account_head, self.amount - other.amount)

    def reverse(self) -> Operation:
        """Flip the direction, keeping the amount. ``op.reverse().reverse() == op``."""
        return replace(self, direction=self.direction.opposite)

    def sort_key(self) -> tuple[int, str, int]:
        """Canonical ordering key: debit first, account name ascending, amount descending."""
        return (_DIRECTION_RANK[self.direction], self.account_head.name, -self.amount)

    # ------------------------------------------------------------------
    # Collections of operations
    # ------------------------------------------------------------------

    @staticmethod
    def merge_all(operations: Iterable[Operation]) -> Operation:
        """
        Left fold of merge() over a non-empty sequence of operations.

        Raises:
            EmptyMergeInputError: If ``operations`` is empty.
            AccountMismatchError: If the operations touch different heads.
        """
        ops = list(operations)
        if not ops:
            raise EmptyMergeInputError("operations")
        return reduce(Operation.merge, ops)

    @staticmethod
    def uniq(operations: Iterable[Operation]) -> list[Operation]:
        """
        Merge operations touching the same account into one per account.

        Groups by account name in order of first occurrence, then merges
        each group with merge_all().

        Postconditions:
            - Exactly one operation per distinct account name in the input.
        """
        groups: dict[str, list[Operation]] = {}
        for op in operations:
            groups.setdefault(op.account_head.name, []).append(op)
        return [Operation.merge_all(group) for group in groups.values()]

    @staticmethod
    def sort(operations: Iterable[Operation]) -> list[Operation]:
        """Sort operations by their canonical key (see sort_key())."""
        return sorted(operations, key=Operation.sort_key)

    def __str__(self) -> str:
        return f"{self.direction.value} {self.account_head.name} {self.amount}"


def debit(head: AccountHead, amount: int) -> Operation:
    """Create a debit operation (see Operation.debit)."""
    return Operation.debit(head, amount)


def credit(head: AccountHead, amount: int) -> Operation:
    """Create a credit operation (see Operation.credit)."""
    return Operation.credit(head, amount)


def to_delta_amount(operation: Operation) -> int:
    """Signed balance change of ``operation`` (see Operation.to_delta_amount)."""
    return operation.to_delta_amount()
