"""
Tests for Operation arithmetic.

Covers sign normalisation, balance deltas against the natural balance,
merge semantics, uniq, canonical sort order and reversal.
"""

import pytest

from bookkeeping_kernel.domain.operation import Operation, credit, debit, to_delta_amount
from bookkeeping_kernel.domain.values import AccountHead, Direction
from bookkeeping_kernel.exceptions import (
    AccountMismatchError,
    EmptyMergeInputError,
    PostingError,
)
from bookkeeping_kernel.invariants import KernelInvariant


class TestConstruction:
    """Constructors normalise the sign into the direction."""

    def test_debit(self, cash):
        op = Operation.debit(cash, 50_00)
        assert op.direction is Direction.DEBIT
        assert op.amount == 50_00
        assert op.account_head is cash

    def test_credit(self, deposits):
        op = Operation.credit(deposits, 50_00)
        assert op.direction is Direction.CREDIT
        assert op.amount == 50_00

    def test_negative_debit_becomes_credit(self, cash):
        assert Operation.debit(cash, -10) == Operation.credit(cash, 10)

    def test_negative_credit_becomes_debit(self, cash):
        assert Operation.credit(cash, -10) == Operation.debit(cash, 10)

    def test_module_level_helpers(self, cash):
        assert debit(cash, 5) == Operation.debit(cash, 5)
        assert credit(cash, -5) == Operation.debit(cash, 5)

    def test_of_accepts_string_direction(self, cash):
        assert Operation.of("credit", cash, 7) == Operation.credit(cash, 7)
        assert Operation.of(Direction.DEBIT, cash, -7) == Operation.credit(cash, 7)

    def test_direct_negative_amount_rejected(self, cash):
        with pytest.raises(ValueError, match="non-negative"):
            Operation(direction=Direction.DEBIT, account_head=cash, amount=-1)

    def test_direct_string_direction_coerced(self, cash):
        op = Operation(direction="debit", account_head=cash, amount=1)
        assert op.direction is Direction.DEBIT

    @pytest.mark.parametrize("amount", [1.5, "100", True, None])
    def test_non_int_amount_rejected(self, cash, amount):
        with pytest.raises(TypeError, match="amount must be an int"):
            Operation.debit(cash, amount)

    def test_zero_amount_is_empty(self, cash):
        assert Operation.debit(cash, 0).is_empty
        assert not Operation.debit(cash, 1).is_empty

    def test_predicates(self, cash):
        op = Operation.debit(cash, 1)
        assert op.is_debit and not op.is_credit
        assert op.reverse().is_credit
        assert op.account_name == "cash/CA"

    def test_str(self, cash):
        assert str(Operation.credit(cash, 12)) == "credit cash/CA 12"


class TestToDeltaAmount:
    """Delta sign depends on the account class's natural balance."""

    def test_matching_direction_increases(self, cash, deposits):
        assert Operation.debit(cash, 50_00).to_delta_amount() == 50_00
        assert Operation.credit(deposits, 50_00).to_delta_amount() == 50_00

    def test_opposite_direction_decreases(self, cash, deposits):
        assert Operation.credit(cash, 50_00).to_delta_amount() == -50_00
        assert Operation.debit(deposits, 50_00).to_delta_amount() == -50_00

    def test_module_level_function(self, cash):
        assert to_delta_amount(Operation.credit(cash, 3)) == -3

    def test_zero(self, cash):
        assert Operation.credit(cash, 0).to_delta_amount() == 0


class TestMerge:
    """merge() combines two operations on the same account."""

    def test_same_direction_sums(self, cash):
        merged = Operation.debit(cash, 80_00).merge(Operation.debit(cash, 20_00))
        assert merged == Operation.debit(cash, 100_00)

    def test_opposite_direction_keeps_left_direction(self, cash):
        merged = Operation.debit(cash, 80_00).merge(Operation.credit(cash, 20_00))
        assert merged == Operation.debit(cash, 60_00)

    def test_opposite_direction_flips_when_negative(self, cash):
        merged = Operation.debit(cash, 20_00).merge(Operation.credit(cash, 80_00))
        assert merged == Operation.credit(cash, 60_00)

    def test_opposite_direction_cancelling_keeps_left_direction(self, cash):
        merged = Operation.credit(cash, 5).merge(Operation.debit(cash, 5))
        assert merged == Operation.credit(cash, 0)
        assert merged.is_empty

    def test_net_delta_preserved(self, cash):
        a = Operation.debit(cash, 20_00)
        b = Operation.credit(cash, 80_00)
        assert a.merge(b).to_delta_amount() == a.to_delta_amount() + b.to_delta_amount()

    def test_different_heads_rejected(self, cash, deposits):
        with pytest.raises(AccountMismatchError) as exc_info:
            Operation.debit(cash, 1).merge(Operation.debit(deposits, 1))
        err = exc_info.value
        assert err.code == "ACCOUNT_MISMATCH"
        assert err.invariant is KernelInvariant.ACCOUNT_IDENTITY
        assert err.expected_account == "cash/CA"
        assert err.received_account == "deposits/OE"
        assert isinstance(err, PostingError)

    def test_same_name_different_class_rejected(self, cash, equity_class):
        impostor = AccountHead(name=cash.name, account_class=equity_class)
        with pytest.raises(AccountMismatchError):
            Operation.debit(cash, 1).merge(Operation.debit(impostor, 1))

    def test_merge_all_folds_left(self, cash):
        ops = [Operation.debit(cash, 10), Operation.credit(cash, 30), Operation.debit(cash, 5)]
        # debit 10 - credit 30 -> credit 20; credit 20 - debit 5 -> credit 15
        assert Operation.merge_all(ops) == Operation.credit(cash, 15)

    def test_merge_all_single(self, cash):
        op = Operation.debit(cash, 10)
        assert Operation.merge_all([op]) == op

    def test_merge_all_empty_rejected(self):
        with pytest.raises(EmptyMergeInputError) as exc_info:
            Operation.merge_all([])
        assert exc_info.value.code == "EMPTY_MERGE_INPUT"
        assert exc_info.value.subject == "operations"


class TestUniq:
    """uniq() merges to one operation per account name."""

    def test_merges_same_account(self, cash):
        ops = [Operation.debit(cash, 80_00), Operation.debit(cash, 20_00)]
        assert Operation.uniq(ops) == [Operation.debit(cash, 100_00)]

    def test_first_occurrence_order(self, cash, deposits):
        ops = [
            Operation.credit(deposits, 1),
            Operation.debit(cash, 2),
            Operation.credit(deposits, 3),
        ]
        assert Operation.uniq(ops) == [Operation.credit(deposits, 4), Operation.debit(cash, 2)]

    def test_empty(self):
        assert Operation.uniq([]) == []


class TestSort:
    """Canonical order: debit first, name ascending, amount descending."""

    def test_debits_before_credits(self, cash, deposits):
        ops = [Operation.credit(cash, 1), Operation.debit(deposits, 1)]
        assert Operation.sort(ops) == [Operation.debit(deposits, 1), Operation.credit(cash, 1)]

    def test_name_ascending_within_direction(self, cash, deposits):
        ops = [Operation.debit(deposits, 1), Operation.debit(cash, 1)]
        assert [op.account_name for op in Operation.sort(ops)] == ["cash/CA", "deposits/OE"]

    def test_amount_descending_within_name(self, cash):
        ops = [Operation.debit(cash, 9), Operation.debit(cash, 10), Operation.debit(cash, 100)]
        assert [op.amount for op in Operation.sort(ops)] == [100, 10, 9]

    def test_large_amounts_order_numerically(self, cash):
        huge = 10**30
        ops = [Operation.debit(cash, 2), Operation.debit(cash, huge), Operation.debit(cash, 11)]
        assert [op.amount for op in Operation.sort(ops)] == [huge, 11, 2]

    def test_sort_does_not_mutate_input(self, cash, deposits):
        ops = [Operation.credit(cash, 1), Operation.debit(deposits, 1)]
        snapshot = list(ops)
        Operation.sort(ops)
        assert ops == snapshot


class TestReverse:
    def test_flips_direction_keeps_amount(self, cash):
        assert Operation.debit(cash, 7).reverse() == Operation.credit(cash, 7)

    def test_involution(self, deposits):
        op = Operation.credit(deposits, 7)
        assert op.reverse().reverse() == op

    def test_negates_delta(self, cash):
        op = Operation.debit(cash, 7)
        assert op.reverse().to_delta_amount() == -op.to_delta_amount()
