"""
Chart-of-accounts configuration schema.

Defines the human-authored, reviewable source artifact for a chart of
accounts. YAML files are parsed into these types by the loader, checked
by the validator, and turned into a kernel ``MappingChartOfAccounts`` by
the bridges.

Key distinction:
  ChartOfAccountsConfig   = source artifact (human-authored, versioned)
  MappingChartOfAccounts  = runtime artifact (kernel-facing, resolved)
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ACCOUNT_ID_FORMAT = "{ledger}:{account}"


@dataclass(frozen=True)
class AccountClassDef:
    """An account class as declared in configuration."""

    id: str
    name: str
    natural_balance: str  # "debit" or "credit"; checked by the validator
    parent_id: str | None = None


@dataclass(frozen=True)
class LedgerDef:
    """Maps a ledger key to a ledger name template (e.g. ``user({0})``)."""

    key: str
    name_template: str


@dataclass(frozen=True)
class AccountDef:
    """Maps an account key to an account name template and a class id."""

    key: str
    name_template: str
    class_id: str


@dataclass(frozen=True)
class ChartOfAccountsConfig:
    """A complete chart of accounts as loaded from one YAML file."""

    config_id: str
    version: int
    account_classes: tuple[AccountClassDef, ...] = ()
    ledgers: tuple[LedgerDef, ...] = ()
    accounts: tuple[AccountDef, ...] = ()
    account_id_format: str = DEFAULT_ACCOUNT_ID_FORMAT
    checksum: str = ""
