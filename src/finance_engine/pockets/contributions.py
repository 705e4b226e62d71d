#!/usr/bin/env python3
"""
Sub-Pocket Contribution Planning

Monthly contribution (aporte mensual) a savings goal still needs, the
amount due per period including debt catch-up, the fixed-expense monthly
total (total fijos mes), and savings progress.

Progress is a fraction in 0..1; presentation code converts with
progress_percentage.
"""

from collections.abc import Iterable

from ..core.models import ProgressLevel, SubPocket


def calculate_aporte_mensual(value_total: float, periodicity_months: int, balance: float = 0.0) -> float:
    """
    Per-period contribution a sub-pocket still needs.

    The base installment is value_total / periodicity_months. When less than
    one installment remains, only the remainder is returned so the target is
    never overshot; once the target is reached the result is zero or
    negative, which is not an error.

    Args:
        value_total: Target amount
        periodicity_months: Months over which the target is spread
        balance: Running contribution total (default: 0)

    Returns:
        Contribution for the period, 0 when periodicity_months <= 0

    Example:
        calculate_aporte_mensual(1200, 12, balance=1150) -> 50.0
    """
    if periodicity_months <= 0:
        return 0.0

    base = value_total / periodicity_months
    remaining = value_total - balance

    if remaining < base:
        return remaining
    return base


def calculate_amount_due(sub_pocket: SubPocket) -> float:
    """
    Amount actually due this period for one sub-pocket.

    A negative balance is a missed contribution: it is added on top of the
    normal installment rather than replacing it.
    """
    aporte = calculate_aporte_mensual(sub_pocket.value_total, sub_pocket.periodicity_months, sub_pocket.balance)
    if sub_pocket.balance < 0:
        return aporte + abs(sub_pocket.balance)
    return aporte


def calculate_total_fijos_mes(sub_pockets: Iterable[SubPocket]) -> float:
    """
    Monthly fixed-expense total over enabled sub-pockets, debt catch-up included.

    Disabled sub-pockets contribute nothing, whatever their balance or debt.
    """
    return sum(
        (calculate_amount_due(sub_pocket) for sub_pocket in sub_pockets if sub_pocket.enabled),
        0.0,
    )


def calculate_monthly_contribution(sub_pocket: SubPocket) -> float:
    """Base installment (value_total / periodicity_months), ignoring balance."""
    return calculate_aporte_mensual(sub_pocket.value_total, sub_pocket.periodicity_months)


def calculate_total_monthly_contribution(sub_pockets: Iterable[SubPocket]) -> float:
    """Sum of base installments over all sub-pockets."""
    return sum((calculate_monthly_contribution(sp) for sp in sub_pockets), 0.0)


def calculate_enabled_monthly_contribution(sub_pockets: Iterable[SubPocket]) -> float:
    """Sum of base installments over enabled sub-pockets."""
    return sum((calculate_monthly_contribution(sp) for sp in sub_pockets if sp.enabled), 0.0)


def calculate_progress(balance: float, value_total: float) -> float:
    """
    Fraction of the target saved, capped at 1.

    Returns 0 for a non-positive target. A negative balance yields a
    negative fraction.
    """
    if value_total <= 0:
        return 0.0
    return min(balance / value_total, 1.0)


def progress_percentage(progress: float) -> float:
    """Convert a progress fraction to a 0..100 percentage for display."""
    return progress * 100


def classify_progress(progress: float) -> ProgressLevel:
    """Bucket a progress fraction for display."""
    percentage = progress_percentage(progress)
    if percentage == 0:
        return ProgressLevel.EMPTY
    if percentage < 50:
        return ProgressLevel.LOW
    if percentage < 100:
        return ProgressLevel.PARTIAL
    return ProgressLevel.COMPLETE
