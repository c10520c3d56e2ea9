"""
Config -> Kernel Bridges.

Functions that convert a validated ChartOfAccountsConfig into kernel
inputs. These live in bookkeeping_config (the producer) because the
kernel must NEVER import bookkeeping_config.

Usage:
    from bookkeeping_config.bridges import build_chart_of_accounts

    chart = build_chart_of_accounts(config)
    journal = Journalizer(chart)
"""

from __future__ import annotations

from bookkeeping_config.schema import ChartOfAccountsConfig
from bookkeeping_kernel.domain.chart_of_accounts import AccountTemplate, MappingChartOfAccounts
from bookkeeping_kernel.domain.values import AccountClass


def build_account_classes(config: ChartOfAccountsConfig) -> dict[str, AccountClass]:
    """Map class id -> AccountClass for every declared class."""
    return {
        c.id: AccountClass(
            id=c.id,
            parent_id=c.parent_id,
            name=c.name,
            natural_balance=c.natural_balance,
        )
        for c in config.account_classes
    }


def build_chart_of_accounts(config: ChartOfAccountsConfig) -> MappingChartOfAccounts:
    """
    Build a MappingChartOfAccounts from a validated configuration.

    Preconditions:
        - ``config`` has passed ``validate_chart`` without errors.

    Raises:
        KeyError: If an account refers to an undeclared class (only
            possible when validation was skipped).
    """
    classes = build_account_classes(config)
    return MappingChartOfAccounts(
        ledgers={ledger.key: ledger.name_template for ledger in config.ledgers},
        accounts={
            a.key: AccountTemplate(name_template=a.name_template, account_class=classes[a.class_id])
            for a in config.accounts
        },
        account_id_format=config.account_id_format,
    )
