#!/usr/bin/env python3
"""
CD Summary Builder

Derives a status classification and return percentages from a CD valuation
for presentation.
"""

from datetime import datetime

from ..core.models import CDRecord, CDStatus, CDSummary
from .cd_calculator import (
    DEFAULT_NEAR_MATURITY_DAYS,
    CDValuationCalculator,
    default_calculator,
    is_within_near_maturity,
)


def generate_cd_summary(
    cd: CDRecord,
    as_of: datetime | None = None,
    near_maturity_days: int = DEFAULT_NEAR_MATURITY_DAYS,
    calculator: CDValuationCalculator | None = None,
) -> CDSummary:
    """
    Summarize a CD's status and returns.

    Status precedence: matured, then near-maturity, then active.

    Args:
        cd: CD snapshot
        as_of: Valuation instant (default: the calculator's clock)
        near_maturity_days: Threshold for the near-maturity status
        calculator: Calculator to use (default: wall-clock calculator)

    Returns:
        CDSummary with unrounded return figures
    """
    calculator = calculator or default_calculator
    valuation = calculator.calculate_current_value(cd, as_of)

    if valuation.is_matured:
        status = CDStatus.MATURED
    elif is_within_near_maturity(valuation.days_to_maturity, near_maturity_days):
        status = CDStatus.NEAR_MATURITY
    else:
        status = CDStatus.ACTIVE

    total_return = valuation.current_value - cd.principal
    net_return = valuation.net_current_value - cd.principal

    return CDSummary(
        status=status,
        current_value=valuation.current_value,
        net_current_value=valuation.net_current_value,
        total_return=total_return,
        net_return=net_return,
        return_percentage=(total_return / cd.principal) * 100,
        net_return_percentage=(net_return / cd.principal) * 100,
        days_to_maturity=valuation.days_to_maturity,
        monthly_interest_rate=cd.annual_interest_rate_percent / 12,
        withholding_tax=valuation.withholding_tax,
    )
