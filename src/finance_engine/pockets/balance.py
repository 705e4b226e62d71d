#!/usr/bin/env python3
"""
Pocket Balance Aggregation

Derives pocket balances from their children:
- Normal pockets: signed sum of cleared, non-orphaned movements
- Fixed pockets: sum of sub-pocket balances, debt and disabled included

The aggregator owns no state; pockets receive the result via update_balance.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from ..core.errors import ValidationError
from ..core.models import Movement, MovementType, Pocket, SubPocket

logger = logging.getLogger(__name__)


def _signed_amount(movement: Movement) -> float:
    return movement.amount if movement.type.is_income else -movement.amount


def calculate_balance_from_movements(movements: Iterable[Movement]) -> float:
    """
    Balance of a normal pocket.

    Income (IngresoNormal, IngresoFijo) adds, expenses (EgresoNormal,
    EgresoFijo) subtract. Pending and orphaned movements are excluded.

    Returns:
        Signed sum, 0 for no movements
    """
    return sum(
        (_signed_amount(movement) for movement in movements if movement.counts_toward_balance),
        0.0,
    )


def calculate_balance_from_sub_pockets(sub_pockets: Iterable[SubPocket]) -> float:
    """
    Balance of a fixed pocket: every sub-pocket balance, including disabled
    sub-pockets and negative (debt) balances.
    """
    return sum((sub_pocket.balance for sub_pocket in sub_pockets), 0.0)


def update_pocket_balance(
    pocket: Pocket,
    movements: Sequence[Movement] | None = None,
    sub_pockets: Sequence[SubPocket] | None = None,
) -> float:
    """
    Recompute and store a pocket's balance from the children matching its type.

    Args:
        pocket: Pocket to update
        movements: Movements of a normal pocket
        sub_pockets: Sub-pockets of a fixed pocket

    Returns:
        The new balance

    Raises:
        ValidationError: If the children required by the pocket type are missing
    """
    if pocket.is_fixed():
        if sub_pockets is None:
            raise ValidationError("subPockets", f"sub-pockets are required for fixed pocket {pocket.id}")
        balance = calculate_balance_from_sub_pockets(sub_pockets)
    else:
        if movements is None:
            raise ValidationError("movements", f"movements are required for normal pocket {pocket.id}")
        balance = calculate_balance_from_movements(movements)

    logger.debug(f"Pocket {pocket.id} ({pocket.type.value}) balance {pocket.balance} -> {balance}")
    pocket.update_balance(balance)
    return balance


def calculate_total_balance(pockets: Iterable[Pocket]) -> float:
    """Plain sum of pocket balances, no filtering and no currency conversion."""
    return sum((pocket.balance for pocket in pockets), 0.0)


def calculate_total_balance_by_currency(pockets: Iterable[Pocket]) -> dict[str, float]:
    """
    Sum pocket balances per currency.

    Returns:
        Mapping of currency code to total, in first-seen order
    """
    totals: dict[str, float] = defaultdict(float)
    for pocket in pockets:
        totals[pocket.currency.value] += pocket.balance
    return dict(totals)


def calculate_sub_pocket_balance_from_movements(movements: Iterable[Movement]) -> float:
    """
    Balance of a sub-pocket from its own movements.

    Only IngresoFijo counts as income; every other type is an expense.
    Pending and orphaned movements are excluded. The result may be negative.
    """
    total = 0.0
    for movement in movements:
        if not movement.counts_toward_balance:
            continue
        if movement.type == MovementType.INGRESO_FIJO:
            total += movement.amount
        else:
            total -= movement.amount
    return total


def update_sub_pocket_balance(sub_pocket: SubPocket, movements: Iterable[Movement]) -> SubPocket:
    """Return a new sub-pocket snapshot whose balance reflects its movements."""
    return sub_pocket.with_balance(calculate_sub_pocket_balance_from_movements(movements))
