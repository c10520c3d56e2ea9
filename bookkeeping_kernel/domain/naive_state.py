"""
NaiveState -- Current balances of every ledger.

Responsibility:
    Holds ledgers keyed by name and applies interledger entries to them by
    folding each ``(ledger_name, journal_entry)`` pair into the right
    ledger. "Naive" because it keeps no history: it is not a ledger of
    record, only the current aggregated balances.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Root of the domain hierarchy; consumes InterledgerEntry and Ledger.

Invariants enforced:
    KEYED_BY_NAME  -- every ledger is stored under ledger.name
    ATOMIC_POSTING -- post() applies every pair of an interledger entry or
                      none of them

Failure modes:
    - AccountMismatchError from Ledger.post; the state is left unchanged
    - ValueError on construction with a mis-keyed ledgers mapping
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bookkeeping_kernel.domain.interledger_entry import InterledgerEntry
from bookkeeping_kernel.domain.ledger import Ledger
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("domain.naive_state")


def _ledger_for(ledgers: Mapping[str, Ledger], name: str) -> Ledger:
    ledger = ledgers.get(name)
    if ledger is None:
        return Ledger.new(name)
    return ledger


@dataclass(frozen=True)
class NaiveState:
    """
    Ledgers keyed by ledger name.

    Contract:
        The empty state (``NaiveState.empty()``) is the only initial state.
        Ledgers move from absent to present-with-balances as entries are
        posted; nothing is ever removed.

    Guarantees:
        - Immutable (frozen dataclass, ledgers frozen as MappingProxyType)
        - Ledgers not touched by a posting are shared with the previous state

    Non-goals:
        - Does NOT serialise concurrent writers; wrap the value in an
          external lock or actor if several callers post to it
    """

    ledgers: Mapping[str, Ledger] = field(default_factory=dict)

    # Holds a mapping; compared by value, never hashed.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # INVARIANT: KEYED_BY_NAME
        for key, ledger in self.ledgers.items():
            if ledger.name != key:
                raise ValueError(f"Ledger {ledger.name!r} stored under key {key!r}")
        if not isinstance(self.ledgers, MappingProxyType):
            object.__setattr__(self, "ledgers", MappingProxyType(dict(self.ledgers)))

    @classmethod
    def empty(cls) -> NaiveState:
        return cls()

    @classmethod
    def from_ledgers(cls, ledgers: Iterable[Ledger]) -> NaiveState:
        """Collect ledgers into a state; a later ledger with the same name wins."""
        return cls(ledgers={ledger.name: ledger for ledger in ledgers})

    def get_ledger(self, name: str) -> Ledger:
        """Return the ledger named ``name``, or a new empty one when absent."""
        return _ledger_for(self.ledgers, name)

    def post(self, entry: InterledgerEntry) -> NaiveState:
        """
        Post an interledger entry, creating ledgers as needed.

        Each ``(ledger_name, journal_entry)`` pair is posted in the order it
        appears. Pairs targeting the same ledger are applied one after the
        other, never merged first; call ``entry.prune()`` beforehand to
        merge them deliberately.

        Postconditions:
            - Returns a new NaiveState; ``self`` is unchanged.
            - On failure nothing is applied (ATOMIC_POSTING).

        Raises:
            AccountMismatchError: If any operation cannot be applied.
        """
        # INVARIANT: ATOMIC_POSTING -- fold onto a draft, swap in on success
        draft = dict(self.ledgers)
        for ledger_name, journal_entry in entry.entries:
            draft[ledger_name] = _ledger_for(draft, ledger_name).post(journal_entry)

        logger.debug(
            "interledger_entry_posted",
            extra={
                "ledgers": entry.ledger_names(),
                "journal_entry_count": len(entry.entries),
            },
        )
        return NaiveState(ledgers=draft)

    def is_trial_balanced(self) -> bool:
        """True when every ledger is trial-balanced (see Ledger.is_trial_balanced)."""
        return all(ledger.is_trial_balanced() for ledger in self.ledgers.values())
