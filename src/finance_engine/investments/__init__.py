#!/usr/bin/env python3
"""
Investment Calculations

Certificate of Deposit valuation, maturity tracking, early withdrawal and
presentation summaries.
"""

from .cd_calculator import (
    DEFAULT_NEAR_MATURITY_DAYS,
    CDValuationCalculator,
    calculate_compound_interest,
    calculate_current_value,
    calculate_early_withdrawal_amount,
    calculate_early_withdrawal_penalty,
    calculate_maturity_date,
    default_calculator,
    get_compounding_periods_per_year,
    is_near_maturity,
    is_within_near_maturity,
    preview_term_interest,
)
from .cd_summary import generate_cd_summary

__all__ = [
    "CDValuationCalculator",
    "DEFAULT_NEAR_MATURITY_DAYS",
    "calculate_compound_interest",
    "calculate_current_value",
    "calculate_early_withdrawal_amount",
    "calculate_early_withdrawal_penalty",
    "calculate_maturity_date",
    "default_calculator",
    "generate_cd_summary",
    "get_compounding_periods_per_year",
    "is_near_maturity",
    "is_within_near_maturity",
    "preview_term_interest",
]
