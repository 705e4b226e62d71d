#!/usr/bin/env python3
"""Tests for pocket balance aggregation."""

import pytest

from finance_engine.core.errors import ValidationError
from finance_engine.core.models import Movement, MovementType, Pocket, SubPocket
from finance_engine.pockets import (
    calculate_balance_from_movements,
    calculate_balance_from_sub_pockets,
    calculate_sub_pocket_balance_from_movements,
    calculate_total_balance,
    calculate_total_balance_by_currency,
    update_pocket_balance,
    update_sub_pocket_balance,
)


def movement(amount, type_, **kwargs):
    """Build a movement with a generated id."""
    return Movement(id=f"m-{type_.value}-{amount}", amount=amount, type=type_, **kwargs)


class TestBalanceFromMovements:
    """Test normal pocket balances."""

    @pytest.mark.pockets
    def test_empty(self):
        """Test no movements means a zero balance."""
        assert calculate_balance_from_movements([]) == 0

    @pytest.mark.pockets
    def test_signed_sum(self):
        """Test income adds and expenses subtract, for both movement families."""
        movements = [
            movement(500, MovementType.INGRESO_NORMAL),
            movement(200, MovementType.INGRESO_FIJO),
            movement(120, MovementType.EGRESO_NORMAL),
            movement(80, MovementType.EGRESO_FIJO),
        ]
        assert calculate_balance_from_movements(movements) == 500

    @pytest.mark.pockets
    def test_pending_and_orphaned_excluded(self):
        """Test only cleared, non-orphaned movements count."""
        movements = [
            movement(500, MovementType.INGRESO_NORMAL),
            movement(100, MovementType.EGRESO_NORMAL, is_pending=True),
            movement(300, MovementType.INGRESO_NORMAL, is_orphaned=True),
            movement(40, MovementType.EGRESO_NORMAL),
        ]
        assert calculate_balance_from_movements(movements) == 460

    @pytest.mark.pockets
    def test_can_go_negative(self):
        """Test overspending yields a negative balance."""
        movements = [movement(50, MovementType.INGRESO_NORMAL), movement(75, MovementType.EGRESO_NORMAL)]
        assert calculate_balance_from_movements(movements) == -25

    @pytest.mark.pockets
    def test_order_does_not_matter(self):
        """Test the balance is independent of movement order."""
        movements = [
            movement(10.5, MovementType.INGRESO_NORMAL),
            movement(3.25, MovementType.EGRESO_NORMAL),
            movement(7.75, MovementType.INGRESO_NORMAL),
        ]
        assert calculate_balance_from_movements(movements) == pytest.approx(
            calculate_balance_from_movements(list(reversed(movements)))
        )


class TestBalanceFromSubPockets:
    """Test fixed pocket balances."""

    @pytest.mark.pockets
    def test_includes_disabled_and_debt(self):
        """Test every sub-pocket balance counts, including debt and disabled ones."""
        sub_pockets = [
            SubPocket(id="sp-1", value_total=1200, periodicity_months=12, balance=100),
            SubPocket(id="sp-2", value_total=600, periodicity_months=6, balance=-50),
            SubPocket(id="sp-3", value_total=300, periodicity_months=3, balance=300, enabled=False),
        ]
        assert calculate_balance_from_sub_pockets(sub_pockets) == 350

    @pytest.mark.pockets
    def test_empty(self):
        """Test no sub-pockets means a zero balance."""
        assert calculate_balance_from_sub_pockets([]) == 0


class TestUpdatePocketBalance:
    """Test balance dispatch by pocket type."""

    @pytest.mark.pockets
    def test_normal_pocket_uses_movements(self):
        """Test normal pockets aggregate movements and store the result."""
        pocket = Pocket(id="p-1", type="normal", balance=999)
        balance = update_pocket_balance(pocket, movements=[movement(25, MovementType.INGRESO_NORMAL)])
        assert balance == 25
        assert pocket.balance == 25

    @pytest.mark.pockets
    def test_fixed_pocket_uses_sub_pockets(self):
        """Test fixed pockets aggregate sub-pockets and ignore movements."""
        pocket = Pocket(id="p-2", type="fixed")
        sub_pockets = [SubPocket(id="sp-1", value_total=600, periodicity_months=6, balance=75)]
        balance = update_pocket_balance(
            pocket, movements=[movement(1000, MovementType.INGRESO_NORMAL)], sub_pockets=sub_pockets
        )
        assert balance == 75
        assert pocket.balance == 75

    @pytest.mark.pockets
    def test_normal_pocket_with_empty_movements(self):
        """Test an empty list is valid and gives zero."""
        pocket = Pocket(id="p-1", type="normal", balance=10)
        assert update_pocket_balance(pocket, movements=[]) == 0
        assert pocket.balance == 0

    @pytest.mark.pockets
    def test_fixed_pocket_requires_sub_pockets(self):
        """Test a fixed pocket without sub-pockets is rejected and left unchanged."""
        pocket = Pocket(id="p-2", type="fixed", balance=10)
        with pytest.raises(ValidationError) as exc_info:
            update_pocket_balance(pocket, movements=[])
        assert exc_info.value.field == "subPockets"
        assert pocket.balance == 10

    @pytest.mark.pockets
    def test_normal_pocket_requires_movements(self):
        """Test a normal pocket without movements is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            update_pocket_balance(Pocket(id="p-1", type="normal"))
        assert exc_info.value.field == "movements"


class TestTotals:
    """Test totals across pockets."""

    @pytest.mark.pockets
    def test_total_balance_is_plain_sum(self):
        """Test totals add every pocket regardless of currency."""
        pockets = [
            Pocket(id="p-1", type="normal", balance=100),
            Pocket(id="p-2", type="fixed", balance=-20),
            Pocket(id="p-3", type="normal", currency="EUR", balance=5),
        ]
        assert calculate_total_balance(pockets) == 85

    @pytest.mark.pockets
    def test_total_balance_empty(self):
        """Test no pockets totals zero."""
        assert calculate_total_balance([]) == 0

    @pytest.mark.pockets
    def test_total_by_currency(self):
        """Test per-currency totals keep first-seen order."""
        pockets = [
            Pocket(id="p-1", type="normal", currency="COP", balance=1000),
            Pocket(id="p-2", type="normal", currency="USD", balance=50),
            Pocket(id="p-3", type="fixed", currency="COP", balance=500),
        ]
        totals = calculate_total_balance_by_currency(pockets)
        assert totals == {"COP": 1500, "USD": 50}
        assert list(totals) == ["COP", "USD"]


class TestSubPocketMovements:
    """Test sub-pocket balances from their own movements."""

    @pytest.mark.pockets
    def test_only_fixed_income_adds(self):
        """Test IngresoFijo adds and every other type subtracts."""
        movements = [
            movement(300, MovementType.INGRESO_FIJO),
            movement(50, MovementType.EGRESO_FIJO),
            movement(20, MovementType.INGRESO_NORMAL),
            movement(10, MovementType.EGRESO_NORMAL),
        ]
        assert calculate_sub_pocket_balance_from_movements(movements) == 220

    @pytest.mark.pockets
    def test_pending_excluded(self):
        """Test pending and orphaned movements are skipped."""
        movements = [
            movement(300, MovementType.INGRESO_FIJO),
            movement(100, MovementType.EGRESO_FIJO, is_pending=True),
            movement(40, MovementType.INGRESO_FIJO, is_orphaned=True),
        ]
        assert calculate_sub_pocket_balance_from_movements(movements) == 300

    @pytest.mark.pockets
    def test_update_returns_new_snapshot(self):
        """Test the sub-pocket snapshot is replaced, not mutated."""
        sub_pocket = SubPocket(id="sp-1", value_total=600, periodicity_months=6, balance=999)
        updated = update_sub_pocket_balance(sub_pocket, [movement(50, MovementType.EGRESO_FIJO)])
        assert updated.balance == -50
        assert sub_pocket.balance == 999
