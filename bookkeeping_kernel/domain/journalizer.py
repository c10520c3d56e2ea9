"""
Journalizer -- Builder for interledger entries.

Responsibility:
    Lets callers describe a transaction in application terms, ledger by
    ledger, and turns it into an InterledgerEntry using a ChartOfAccounts:

        journal = Journalizer(chart)
        with journal.on("acme") as acme:
            acme.debit("cash", 150_00)
            acme.credit("deposits", 150_00)
        entry = journal.journalize_balanced()

    ``on()`` may be chained as well:
    ``journal.on("acme").debit("cash", 10).credit("deposits", 10)``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Consumes ChartOfAccounts; produces InterledgerEntry.

Invariants enforced:
    DOUBLE_ENTRY_BALANCE -- journalize_balanced() refuses to return an
                            unbalanced entry

Failure modes:
    - UnknownLedgerError / UnknownAccountError from the chart of accounts,
      raised as soon as the term is used
    - UnbalancedEntryError from journalize_balanced()
    - TypeError from Operation when an amount is not an int

Journalizing twice yields equal entries; posting them twice doubles the
effect. Sections for the same ledger are grouped together in the result,
in the order the sections were opened.
"""

from __future__ import annotations

from typing import Any

from bookkeeping_kernel.domain.chart_of_accounts import ChartOfAccounts, Term
from bookkeeping_kernel.domain.interledger_entry import InterledgerEntry
from bookkeeping_kernel.domain.journal_entry import JournalEntry
from bookkeeping_kernel.domain.operation import Operation
from bookkeeping_kernel.exceptions import UnbalancedEntryError


class LedgerSection:
    """Operations recorded for one ledger within a Journalizer."""

    def __init__(self, journalizer: Journalizer, ledger_name: str):
        self._journalizer = journalizer
        self.ledger_name = ledger_name
        self._operations: list[Operation] = []

    def debit(self, account_term: Term, amount: int) -> LedgerSection:
        head = self._journalizer.chart.account(account_term)
        self._operations.append(Operation.debit(head, amount))
        return self

    def credit(self, account_term: Term, amount: int) -> LedgerSection:
        head = self._journalizer.chart.account(account_term)
        self._operations.append(Operation.credit(head, amount))
        return self

    def on(self, ledger_term: Term) -> LedgerSection:
        """Open a section for another ledger on the same journalizer."""
        return self._journalizer.on(ledger_term)

    def to_journal_entry(self) -> JournalEntry:
        return JournalEntry.new(self._operations)

    def __enter__(self) -> LedgerSection:
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


class Journalizer:
    """
    Collects ledger sections and produces an InterledgerEntry.

    Contract:
        ``journalize()`` never checks balance; ``journalize_balanced()``
        raises UnbalancedEntryError naming the first unbalanced ledger.

    Non-goals:
        - Does NOT prune; duplicate operations on an account are kept
    """

    def __init__(self, chart: ChartOfAccounts):
        self.chart = chart
        self._sections: list[LedgerSection] = []

    def on(self, ledger_term: Term) -> LedgerSection:
        """Open a section for the ledger named by ``ledger_term``."""
        section = LedgerSection(self, self.chart.ledger(ledger_term))
        self._sections.append(section)
        return section

    def journalize(self) -> InterledgerEntry:
        """Build the interledger entry without checking balance."""
        grouped: dict[str, list[JournalEntry]] = {}
        for section in self._sections:
            grouped.setdefault(section.ledger_name, []).append(section.to_journal_entry())
        return InterledgerEntry.from_mapping(grouped)

    def journalize_balanced(self) -> InterledgerEntry:
        """
        Build the interledger entry, refusing unbalanced results.

        Raises:
            UnbalancedEntryError: If any ledger's entry is unbalanced.
        """
        entry = self.journalize()
        unbalanced = entry.unbalanced_ledgers()
        if unbalanced:
            ledger_name, debits, credits = unbalanced[0]
            raise UnbalancedEntryError(
                f"journalize_balanced() produced an unbalanced journal entry "
                f"for ledger {ledger_name!r}: debits={debits}, credits={credits}",
                ledger_name=ledger_name,
                debits=debits,
                credits=credits,
            )
        return entry
