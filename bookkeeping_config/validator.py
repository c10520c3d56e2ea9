"""
Configuration Validator (``bookkeeping_config.validator``).

Responsibility
--------------
Validates a ``ChartOfAccountsConfig`` before it is bridged into a kernel
``MappingChartOfAccounts``, so that structural mistakes surface at load
time rather than while journalizing.

Architecture position
---------------------
**Config layer** -- load-time validation.  Called by
``bookkeeping_config.load_chart_of_accounts`` after parsing and before
bridging.

Invariants enforced
-------------------
* Identifier uniqueness -- duplicate class ids, ledger keys or account
  keys are errors.
* Referential integrity -- parent ids and account class ids must name a
  declared account class.
* Hierarchy shape -- the parent chain of an account class must not cycle.
* Natural balance -- must be ``debit`` or ``credit``.

Failure modes
-------------
* Validation errors (``ConfigValidationResult.errors``)  -> the chart
  MUST NOT be bridged.
* Validation warnings (``ConfigValidationResult.warnings``)  -> the chart
  may be used but should be reviewed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bookkeeping_config.schema import ChartOfAccountsConfig

_NATURAL_BALANCES = frozenset({"debit", "credit"})


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    * Warnings do not block loading but should be reviewed.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_chart(config: ChartOfAccountsConfig) -> ConfigValidationResult:
    """
    Validate a parsed chart of accounts.

    Postconditions:
        - Returns a ``ConfigValidationResult`` with errors and warnings.
        - A chart with errors MUST NOT be bridged.
    """
    result = ConfigValidationResult()

    _validate_uniqueness(config, result)
    _validate_natural_balances(config, result)
    _validate_class_references(config, result)
    _validate_class_hierarchy(config, result)
    _validate_templates(config, result)
    _validate_class_usage(config, result)

    return result


def _duplicates(values: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for value in values:
        if value in seen and value not in dupes:
            dupes.append(value)
        seen.add(value)
    return dupes


def _validate_uniqueness(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    """Check that class ids, ledger keys and account keys are unique."""
    for class_id in _duplicates([c.id for c in config.account_classes]):
        result.add_error(f"Duplicate account class: '{class_id}' appears more than once")
    for key in _duplicates([ledger.key for ledger in config.ledgers]):
        result.add_error(f"Duplicate ledger key: '{key}' appears more than once")
    for key in _duplicates([a.key for a in config.accounts]):
        result.add_error(f"Duplicate account key: '{key}' appears more than once")


def _validate_natural_balances(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    for account_class in config.account_classes:
        if account_class.natural_balance not in _NATURAL_BALANCES:
            result.add_error(
                f"Account class '{account_class.id}': invalid natural_balance "
                f"'{account_class.natural_balance}' (expected 'debit' or 'credit')"
            )


def _validate_class_references(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    """Check that parent ids and account class ids resolve."""
    class_ids = {c.id for c in config.account_classes}
    for account_class in config.account_classes:
        if account_class.parent_id is not None and account_class.parent_id not in class_ids:
            result.add_error(
                f"Account class '{account_class.id}': unknown parent '{account_class.parent_id}'"
            )
    for account in config.accounts:
        if account.class_id not in class_ids:
            result.add_error(f"Account '{account.key}': unknown account class '{account.class_id}'")


def _validate_class_hierarchy(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    """Check that no parent chain loops back on itself."""
    parents = {c.id: c.parent_id for c in config.account_classes}
    for class_id in parents:
        visited = {class_id}
        current = parents.get(class_id)
        while current is not None and current in parents:
            if current in visited:
                result.add_error(f"Account class '{class_id}': parent chain contains a cycle")
                break
            visited.add(current)
            current = parents[current]


def _validate_templates(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    for ledger in config.ledgers:
        if not ledger.name_template:
            result.add_error(f"Ledger '{ledger.key}': name must not be empty")
    for account in config.accounts:
        if not account.name_template:
            result.add_error(f"Account '{account.key}': name must not be empty")


def _validate_class_usage(config: ChartOfAccountsConfig, result: ConfigValidationResult) -> None:
    """Warn about account classes nothing refers to."""
    used = {a.class_id for a in config.accounts}
    used.update(c.parent_id for c in config.account_classes if c.parent_id is not None)
    for account_class in config.account_classes:
        if account_class.id not in used:
            result.add_warning(f"Account class '{account_class.id}' is not used by any account")
