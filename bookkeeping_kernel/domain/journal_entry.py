"""
JournalEntry -- Operations applied atomically to a single ledger.

Responsibility:
    Records the operations of one financial transaction within one ledger
    and provides the algorithms over them: balance check, emptiness,
    concatenating merge, pruning to one operation per account in canonical
    order, and reversal. For transactions spanning multiple ledgers, see
    InterledgerEntry.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Consumes Operation; consumed by Ledger.post and InterledgerEntry.

Invariants enforced:
    DOUBLE_ENTRY_BALANCE -- is_balanced() compares direction-label sums,
                            independent of any account's natural balance

Failure modes:
    - TypeError when constructed with something other than Operations
    - EmptyMergeInputError when merge_all() receives no entries

Construction never deduplicates. Operations touching the same account
stay separate until prune() is called explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bookkeeping_kernel.domain.operation import Operation
from bookkeeping_kernel.domain.values import Direction
from bookkeeping_kernel.exceptions import EmptyMergeInputError


@dataclass(frozen=True)
class JournalEntry:
    """
    Ordered collection of operations scoped to one ledger.

    Contract:
        Order of ``operations`` is the order in which they are posted.
        The same account may appear more than once; after prune() it
        appears at most once.

    Guarantees:
        - Immutable (frozen dataclass, operations stored as a tuple)
        - merge()/prune()/reverse() return new entries

    Non-goals:
        - Does NOT know its ledger name (InterledgerEntry pairs it)
        - Does NOT enforce balance; callers check is_balanced()
    """

    operations: tuple[Operation, ...] = ()

    def __post_init__(self) -> None:
        ops = tuple(self.operations)
        for op in ops:
            if not isinstance(op, Operation):
                raise TypeError(f"JournalEntry accepts Operations only, got {type(op).__name__}")
        object.__setattr__(self, "operations", ops)

    @classmethod
    def new(cls, operations: Iterable[Operation] = ()) -> JournalEntry:
        """Create a journal entry from operations, as given (no dedupe)."""
        return cls(operations=tuple(operations))

    def __iter__(self):
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def to_operations(self) -> list[Operation]:
        return list(self.operations)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def total_debits(self) -> int:
        """Sum of debit-labelled amounts."""
        return sum(op.amount for op in self.operations if op.direction is Direction.DEBIT)

    def total_credits(self) -> int:
        """Sum of credit-labelled amounts."""
        return sum(op.amount for op in self.operations if op.direction is Direction.CREDIT)

    def imbalance(self) -> int:
        """Debits minus credits; zero when balanced."""
        return self.total_debits() - self.total_credits()

    def is_balanced(self) -> bool:
        """
        Check that debit-labelled amounts equal credit-labelled amounts.

        This is a per-transaction check on the direction labels. For the
        whole-ledger natural balance check, see Ledger.is_trial_balanced().
        """
        # INVARIANT: DOUBLE_ENTRY_BALANCE
        return self.total_debits() == self.total_credits()

    def is_empty(self) -> bool:
        """True when there are no operations or every amount is zero."""
        return all(op.is_empty for op in self.operations)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def merge(self, other: JournalEntry) -> JournalEntry:
        """
        Concatenate two entries, preserving order, without deduplicating.

        Call prune() on the result for one operation per account.
        """
        return JournalEntry(operations=self.operations + other.operations)

    @staticmethod
    def merge_all(entries: Iterable[JournalEntry]) -> JournalEntry:
        """
        Concatenate a non-empty sequence of entries.

        Raises:
            EmptyMergeInputError: If ``entries`` is empty.
        """
        entries = list(entries)
        if not entries:
            raise EmptyMergeInputError("journal entries")
        operations: list[Operation] = []
        for entry in entries:
            operations.extend(entry.operations)
        return JournalEntry(operations=tuple(operations))

    def prune(self) -> JournalEntry:
        """
        Reduce to one operation per account, in canonical order.

        Equivalent to ``Operation.sort(Operation.uniq(operations))``.
        Idempotent: ``e.prune().prune() == e.prune()``.

        Raises:
            AccountMismatchError: If two heads share a name but differ in class.
        """
        return JournalEntry(operations=tuple(Operation.sort(Operation.uniq(self.operations))))

    def reverse(self) -> JournalEntry:
        """
        Undo entry: every operation reversed, in reverse order.

        ``e.reverse().reverse() == e``.
        """
        return JournalEntry(operations=tuple(op.reverse() for op in reversed(self.operations)))
