#!/usr/bin/env python3
"""
Pocket Calculations

Balance aggregation for normal and fixed pockets, and contribution planning
for the sub-pockets of fixed pockets.
"""

from .balance import (
    calculate_balance_from_movements,
    calculate_balance_from_sub_pockets,
    calculate_sub_pocket_balance_from_movements,
    calculate_total_balance,
    calculate_total_balance_by_currency,
    update_pocket_balance,
    update_sub_pocket_balance,
)
from .contributions import (
    calculate_amount_due,
    calculate_aporte_mensual,
    calculate_enabled_monthly_contribution,
    calculate_monthly_contribution,
    calculate_progress,
    calculate_total_fijos_mes,
    calculate_total_monthly_contribution,
    classify_progress,
    progress_percentage,
)

__all__ = [
    "calculate_amount_due",
    "calculate_aporte_mensual",
    "calculate_balance_from_movements",
    "calculate_balance_from_sub_pockets",
    "calculate_enabled_monthly_contribution",
    "calculate_monthly_contribution",
    "calculate_progress",
    "calculate_sub_pocket_balance_from_movements",
    "calculate_total_balance",
    "calculate_total_balance_by_currency",
    "calculate_total_fijos_mes",
    "calculate_total_monthly_contribution",
    "classify_progress",
    "progress_percentage",
    "update_pocket_balance",
    "update_sub_pocket_balance",
]
