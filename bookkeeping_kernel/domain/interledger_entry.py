"""
InterledgerEntry -- Journal entries spanning multiple ledgers.

Responsibility:
    Pairs journal entries with the name of the ledger they target, for
    transactions that touch accounts in more than one ledger (e.g. the
    company ledger and a per-user ledger). Provides balance and emptiness
    checks, pruning per ledger, and reversal.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Consumes JournalEntry; consumed by NaiveState.post. Produced by the
    Journalizer builder or constructed directly.

Invariants enforced:
    DOUBLE_ENTRY_BALANCE -- is_balanced() requires every contained entry
                            to be balanced on its own

Failure modes:
    - TypeError when a pair does not hold (str, JournalEntry)
    - ValueError when a ledger name is empty
    - AccountMismatchError from prune() when heads sharing a name differ

Ordering:
    A ledger name may appear several times. Pairs keep their relative
    order, and NaiveState.post applies them in that order unless the
    caller explicitly calls prune() first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from bookkeeping_kernel.domain.journal_entry import JournalEntry


@dataclass(frozen=True)
class InterledgerEntry:
    """
    Ordered ``(ledger_name, JournalEntry)`` pairs.

    Contract:
        The pair order is the posting order. Before prune(), a ledger name
        may appear in several pairs; after prune(), at most once.

    Guarantees:
        - Immutable (frozen dataclass, pairs stored as a tuple of tuples)
        - reverse() is an involution; prune() is idempotent
    """

    entries: tuple[tuple[str, JournalEntry], ...] = ()

    def __post_init__(self) -> None:
        pairs = tuple((ledger_name, entry) for ledger_name, entry in self.entries)
        for ledger_name, entry in pairs:
            if not isinstance(ledger_name, str):
                raise TypeError(f"Ledger name must be a string, got {type(ledger_name).__name__}")
            if not ledger_name:
                raise ValueError("Ledger name must be a non-empty string")
            if not isinstance(entry, JournalEntry):
                raise TypeError(
                    f"Expected JournalEntry for ledger {ledger_name!r}, got {type(entry).__name__}"
                )
        object.__setattr__(self, "entries", pairs)

    @classmethod
    def new(cls, pairs: Iterable[tuple[str, JournalEntry]] = ()) -> InterledgerEntry:
        """Create from ``(ledger_name, journal_entry)`` pairs, order preserved."""
        return cls(entries=tuple(pairs))

    @classmethod
    def from_mapping(
        cls,
        entries_by_ledger: Mapping[str, JournalEntry | Iterable[JournalEntry]],
    ) -> InterledgerEntry:
        """
        Create from a mapping of ledger name to one entry or a list of entries.

        Pairs follow the mapping's iteration order, then list order.
        """
        pairs: list[tuple[str, JournalEntry]] = []
        for ledger_name, value in entries_by_ledger.items():
            if isinstance(value, JournalEntry):
                pairs.append((ledger_name, value))
            else:
                pairs.extend((ledger_name, entry) for entry in value)
        return cls(entries=tuple(pairs))

    def to_journal_entries(self) -> list[tuple[str, JournalEntry]]:
        return list(self.entries)

    def ledger_names(self) -> list[str]:
        """Distinct ledger names in order of first appearance."""
        return list(dict.fromkeys(ledger_name for ledger_name, _ in self.entries))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def is_balanced(self) -> bool:
        """True when every contained journal entry is balanced (vacuously for none)."""
        return all(entry.is_balanced() for _, entry in self.entries)

    def is_empty(self) -> bool:
        """True when there are no entries or every entry is empty."""
        return all(entry.is_empty() for _, entry in self.entries)

    def unbalanced_ledgers(self) -> list[tuple[str, int, int]]:
        """``(ledger_name, debits, credits)`` for every unbalanced entry."""
        return [
            (ledger_name, entry.total_debits(), entry.total_credits())
            for ledger_name, entry in self.entries
            if not entry.is_balanced()
        ]

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def prune(self) -> InterledgerEntry:
        """
        One pruned journal entry per ledger.

        Groups entries by ledger name (first-appearance order), concatenates
        each group with JournalEntry.merge_all() and prunes the result.
        """
        groups: dict[str, list[JournalEntry]] = {}
        for ledger_name, entry in self.entries:
            groups.setdefault(ledger_name, []).append(entry)
        return InterledgerEntry(
            entries=tuple(
                (ledger_name, JournalEntry.merge_all(group).prune())
                for ledger_name, group in groups.items()
            )
        )

    def reverse(self) -> InterledgerEntry:
        """
        Undo entry: every journal entry reversed, pairs in reverse order.

        Each reversed entry keeps its ledger name.
        """
        return InterledgerEntry(
            entries=tuple(
                (ledger_name, entry.reverse()) for ledger_name, entry in reversed(self.entries)
            )
        )
