"""
Tests for Ledger: account lookup, posting, atomicity and trial balance.
"""

from types import MappingProxyType

import pytest

from bookkeeping_kernel.domain.account import Account
from bookkeeping_kernel.domain.journal_entry import JournalEntry
from bookkeeping_kernel.domain.ledger import Ledger
from bookkeeping_kernel.domain.operation import Operation
from bookkeeping_kernel.domain.values import AccountHead
from bookkeeping_kernel.exceptions import AccountMismatchError


class TestLedgerConstruction:
    def test_new_is_empty(self):
        ledger = Ledger.new("acme")
        assert ledger.name == "acme"
        assert len(ledger) == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            Ledger.new("")

    def test_accounts_are_read_only(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash)])
        assert isinstance(ledger.accounts, MappingProxyType)
        with pytest.raises(TypeError):
            ledger.accounts["cash/CA"] = Account.new(cash)

    def test_from_accounts_later_wins(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 1), Account.new(cash, 2)])
        assert len(ledger) == 1
        assert ledger.accounts["cash/CA"].balance == 2

    def test_key_must_match_account_name(self, cash):
        with pytest.raises(ValueError, match="stored under key"):
            Ledger(name="acme", accounts={"wrong": Account.new(cash)})

    def test_equal_by_value_but_unhashable(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 1)])
        assert ledger == Ledger.from_accounts("acme", [Account.new(cash, 1)])
        with pytest.raises(TypeError, match="unhashable"):
            hash(ledger)

    def test_contains(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash)])
        assert "cash/CA" in ledger
        assert "deposits/OE" not in ledger


class TestGetAccount:
    def test_existing(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 9)])
        assert ledger.get_account(cash).balance == 9

    def test_absent_returns_fresh_account(self, deposits):
        account = Ledger.new("acme").get_account(deposits)
        assert account == Account.new(deposits)

    def test_absent_does_not_insert(self, deposits):
        ledger = Ledger.new("acme")
        ledger.get_account(deposits)
        assert len(ledger) == 0

    def test_post_agrees_with_get_account(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 5)])
        op = Operation.debit(cash, 3)
        assert ledger.post_operation(op).get_account(cash) == ledger.get_account(cash).post(op)
        fresh = Ledger.new("acme")
        assert fresh.post_operation(op).get_account(cash) == fresh.get_account(cash).post(op)


class TestLedgerPost:
    def test_post_creates_accounts(self, cash, deposits):
        entry = JournalEntry.new([Operation.debit(cash, 50_00), Operation.credit(deposits, 50_00)])
        ledger = Ledger.new("acme").post(entry)
        assert ledger.accounts["cash/CA"].balance == 50_00
        assert ledger.accounts["deposits/OE"].balance == 50_00

    def test_post_returns_new_ledger(self, cash, deposits):
        empty = Ledger.new("acme")
        entry = JournalEntry.new([Operation.debit(cash, 1), Operation.credit(deposits, 1)])
        posted = empty.post(entry)
        assert posted is not empty
        assert len(empty) == 0

    def test_sequential_operations_on_same_account(self, cash):
        entry = JournalEntry.new([Operation.debit(cash, 80_00), Operation.credit(cash, 30_00)])
        assert Ledger.new("acme").post(entry).accounts["cash/CA"].balance == 50_00

    def test_untouched_accounts_are_shared(self, cash, deposits, unspent_cash):
        untouched = Account.new(unspent_cash, 5)
        ledger = Ledger.from_accounts("acme", [untouched])
        posted = ledger.post(
            JournalEntry.new([Operation.debit(cash, 1), Operation.credit(deposits, 1)])
        )
        assert posted.accounts["unspent_cash/L"] is untouched

    def test_empty_entry_is_noop(self, cash):
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 3)])
        assert ledger.post(JournalEntry.new()) == ledger

    def test_post_operation(self, cash):
        ledger = Ledger.new("acme").post_operation(Operation.debit(cash, 4))
        assert ledger.accounts["cash/CA"].balance == 4

    def test_mismatch_is_atomic(self, cash, deposits, equity_class):
        """A failing operation leaves every account of the ledger untouched."""
        ledger = Ledger.new("acme").post(
            JournalEntry.new([Operation.debit(cash, 10), Operation.credit(deposits, 10)])
        )
        impostor = AccountHead(name="cash/CA", account_class=equity_class)
        entry = JournalEntry.new(
            [Operation.credit(deposits, 99), Operation.debit(impostor, 99)]
        )
        with pytest.raises(AccountMismatchError):
            ledger.post(entry)
        assert ledger.accounts["cash/CA"].balance == 10
        assert ledger.accounts["deposits/OE"].balance == 10

    def test_post_logs_debug_event(self, captured_logs, cash, deposits):
        entry = JournalEntry.new([Operation.debit(cash, 1), Operation.credit(deposits, 1)])
        Ledger.new("acme").post(entry)
        logs = captured_logs()
        posted = [r for r in logs if r["message"] == "journal_entry_posted"]
        assert len(posted) == 1
        assert posted[0]["level"] == "DEBUG"
        assert posted[0]["ledger"] == "acme"
        assert posted[0]["operation_count"] == 2
        assert posted[0]["account_count"] == 2


class TestTrialBalance:
    def test_empty_ledger_balanced(self):
        assert Ledger.new("acme").is_trial_balanced()

    def test_balanced_after_balanced_entry(self, cash, deposits):
        ledger = Ledger.new("acme").post(
            JournalEntry.new([Operation.debit(cash, 50_00), Operation.credit(deposits, 50_00)])
        )
        assert ledger.debit_balance_total() == 50_00
        assert ledger.credit_balance_total() == 50_00
        assert ledger.is_trial_balanced()

    def test_unbalanced_after_one_sided_entry(self, cash):
        ledger = Ledger.new("acme").post_operation(Operation.debit(cash, 1))
        assert not ledger.is_trial_balanced()

    def test_debit_and_credit_between_two_assets(self, cash, current_asset_class):
        """Moving value between two debit-normal accounts keeps the ledger balanced."""
        bank = AccountHead(name="bank/CA", account_class=current_asset_class)
        ledger = Ledger.from_accounts("acme", [Account.new(cash, 10)]).post(
            JournalEntry.new([Operation.debit(bank, 4), Operation.credit(cash, 4)])
        )
        assert ledger.debit_balance_total() == 10
        assert ledger.accounts["bank/CA"].balance == 4
        assert ledger.accounts["cash/CA"].balance == 6
