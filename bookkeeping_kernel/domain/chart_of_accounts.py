"""ChartOfAccounts -- Host-supplied mapping from application terms to ledgers and accounts.

A chart of accounts translates application-level identifiers ("terms")
into the kernel's primitives: ledger names and AccountHeads. The kernel
never calls it during posting; only the Journalizer builder consults it,
before any Operation is constructed.

A term is either a plain string key (``"cash"``) or a tuple whose first
element is the key and whose remaining elements parameterise it
(``("user", "123")`` for the ledger ``"user(123)"``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from string import Formatter
from typing import Any, Protocol, runtime_checkable

from bookkeeping_kernel.domain.values import AccountClass, AccountHead
from bookkeeping_kernel.exceptions import UnknownAccountError, UnknownLedgerError

Term = str | tuple[Any, ...]


@runtime_checkable
class ChartOfAccounts(Protocol):
    """Protocol for resolving terms into ledger names and account heads.

    Implementations: MappingChartOfAccounts (in-memory templates, also
    produced by ``bookkeeping_config.load_chart_of_accounts``).
    """

    def ledger(self, term: Term) -> str:
        """Return the ledger name for ``term``.

        Raises:
            UnknownLedgerError: When the term is not mapped.
        """
        ...

    def account(self, term: Term) -> AccountHead:
        """Return the account head for ``term``.

        Raises:
            UnknownAccountError: When the term is not mapped.
        """
        ...

    def account_id(self, ledger_name: str, head: AccountHead) -> str:
        """Return a storage identifier for ``head`` within ``ledger_name``."""
        ...


@dataclass(frozen=True)
class AccountTemplate:
    """An account name template and the class of the accounts it renders."""

    name_template: str
    account_class: AccountClass


def _split_term(term: Term) -> tuple[str, tuple[Any, ...]] | None:
    if isinstance(term, str):
        return term, ()
    if isinstance(term, tuple) and term and isinstance(term[0], str):
        return term[0], tuple(term[1:])
    return None


def _arity(template: str) -> int:
    """Number of positional parameters ``template`` consumes.

    Counts auto-numbered ``{}`` fields, or the highest ``{n}`` index plus
    one. Named fields are rejected; terms only carry positional params.
    """
    auto = 0
    highest = -1
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name is None:
            continue
        head = field_name.split(".", 1)[0].split("[", 1)[0]
        if not head:
            auto += 1
        elif head.isdigit():
            highest = max(highest, int(head))
        else:
            raise ValueError(f"template {template!r} has named field {head!r}")
    return max(auto, highest + 1)


def _render(template: str, params: tuple[Any, ...]) -> str:
    """Render ``template`` with positional params; raises ValueError on arity mismatch."""
    expected = _arity(template)
    if len(params) != expected:
        raise ValueError(f"template {template!r} takes {expected} parameter(s), got {len(params)}")
    return template.format(*params)


class MappingChartOfAccounts:
    """ChartOfAccounts backed by key -> template mappings.

    Ledger templates are plain format strings (``"user({0})"``); account
    templates pair a format string with an AccountClass. Unknown keys,
    malformed terms and parameter mismatches raise the typed
    UnknownLedgerError / UnknownAccountError instead of crashing.
    """

    def __init__(
        self,
        ledgers: Mapping[str, str],
        accounts: Mapping[str, AccountTemplate],
        account_id_format: str = "{ledger}:{account}",
    ):
        self._ledgers = dict(ledgers)
        self._accounts = dict(accounts)
        self._account_id_format = account_id_format

    @property
    def ledger_keys(self) -> list[str]:
        return sorted(self._ledgers)

    @property
    def account_keys(self) -> list[str]:
        return sorted(self._accounts)

    def ledger(self, term: Term) -> str:
        split = _split_term(term)
        if split is None:
            raise UnknownLedgerError(term, "malformed term")
        key, params = split
        template = self._ledgers.get(key)
        if template is None:
            raise UnknownLedgerError(term)
        try:
            return _render(template, params)
        except ValueError as e:
            raise UnknownLedgerError(term, str(e)) from e

    def account(self, term: Term) -> AccountHead:
        split = _split_term(term)
        if split is None:
            raise UnknownAccountError(term, "malformed term")
        key, params = split
        template = self._accounts.get(key)
        if template is None:
            raise UnknownAccountError(term)
        try:
            name = _render(template.name_template, params)
        except ValueError as e:
            raise UnknownAccountError(term, str(e)) from e
        return AccountHead(name=name, account_class=template.account_class)

    def account_id(self, ledger_name: str, head: AccountHead) -> str:
        return self._account_id_format.format(ledger=ledger_name, account=head.name)
