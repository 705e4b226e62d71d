#!/usr/bin/env python3
"""
Certificate of Deposit Valuation Calculator

Computes current value, accrued interest, maturity tracking, effective yield
and after-tax figures for CD records. Pure arithmetic over an immutable
snapshot: the only time input is the as-of instant, passed explicitly or
taken from the injected clock.

Key Features:
- Compound interest A = P(1 + r/n)^(n*t) with t = days / 365.25
- Cent rounding (half-up) on every monetary value where it is computed
- Withholding tax netted from accrued interest
- Early withdrawal penalty charged on accrued interest, never taxed
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime

from ..core.currency import percent_to_decimal, round_half_up
from ..core.dates import add_months, parse_instant, utc_now, whole_days_between
from ..core.errors import ValidationError
from ..core.models import (
    CDRecord,
    CDValuationResult,
    CompoundingFrequency,
    CompoundInterestResult,
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25  # Average year, accounts for leap years
DEFAULT_NEAR_MATURITY_DAYS = 30
MIN_TERM_MONTHS = 1
MAX_TERM_MONTHS = 600
PREVIEW_DAYS_PER_MONTH = 30

COMPOUNDING_PERIODS_PER_YEAR = {
    CompoundingFrequency.DAILY: 365,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.ANNUALLY: 1,
}


def get_compounding_periods_per_year(frequency: CompoundingFrequency | str | None) -> int:
    """
    Number of compounding periods per year.

    Unrecognized frequencies compound monthly.
    """
    return COMPOUNDING_PERIODS_PER_YEAR[CompoundingFrequency.parse(frequency)]


def calculate_compound_interest(
    principal: float,
    annual_rate: float,
    days: int,
    frequency: CompoundingFrequency | str | None,
) -> CompoundInterestResult:
    """
    Grow a principal with compound interest over a number of days.

    Args:
        principal: Amount invested
        annual_rate: Annual rate as a decimal (0.045 for 4.5%)
        days: Days of growth; zero or negative days earn nothing
        frequency: Compounding frequency

    Returns:
        CompoundInterestResult with final amount and interest rounded to cents

    Raises:
        ValidationError: If the grown amount exceeds the float range
    """
    if days <= 0:
        return CompoundInterestResult(final_amount=principal, interest_earned=0.0)

    periods_per_year = get_compounding_periods_per_year(frequency)
    years = days / DAYS_PER_YEAR

    try:
        growth = (1 + annual_rate / periods_per_year) ** (periods_per_year * years)
    except OverflowError:
        growth = math.inf
    final_amount = principal * growth
    if not math.isfinite(final_amount):
        raise ValidationError(
            "interestRate",
            f"growth at {annual_rate:.2%} over {days} days exceeds the representable amount range",
        )
    interest_earned = final_amount - principal

    return CompoundInterestResult(
        final_amount=round_half_up(final_amount),
        interest_earned=round_half_up(interest_earned),
    )


def is_within_near_maturity(days_to_maturity: int, threshold_days: int = DEFAULT_NEAR_MATURITY_DAYS) -> bool:
    """
    Near-maturity rule shared by the calculator and CD summaries.

    A CD with zero days left is matured, not near maturity.
    """
    return 0 < days_to_maturity <= threshold_days


def calculate_maturity_date(opened: datetime | str, term_months: int) -> datetime:
    """
    Maturity instant for a CD opened at `opened` with a term in months.

    Raises:
        ValidationError: If the opening instant is unparsable or the term is
            outside 1..600 months
    """
    if not MIN_TERM_MONTHS <= term_months <= MAX_TERM_MONTHS:
        raise ValidationError(
            "termMonths", f"must be between {MIN_TERM_MONTHS} and {MAX_TERM_MONTHS} months"
        )
    opened_at = parse_instant(opened)
    if opened_at is None:
        raise ValidationError("cdCreatedAt", f"invalid date: {opened!r}")
    return add_months(opened_at, term_months)


def preview_term_interest(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    frequency: CompoundingFrequency | str | None = CompoundingFrequency.MONTHLY,
) -> CompoundInterestResult:
    """
    Approximate interest for a prospective CD, counting 30 days per month.

    Used to preview a CD before it is opened, when no dates exist yet.
    """
    return calculate_compound_interest(
        principal,
        percent_to_decimal(annual_rate_percent),
        term_months * PREVIEW_DAYS_PER_MONTH,
        frequency,
    )


class CDValuationCalculator:
    """
    Values CD records at an instant.

    Holds no state besides the clock used when callers omit the as-of
    instant. Inject a fixed clock for reproducible results.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        """
        Initialize calculator.

        Args:
            clock: Zero-argument callable returning the current instant
        """
        self._clock = clock

    def _resolve_instant(self, value: datetime | None) -> datetime:
        resolved = parse_instant(value) if value is not None else None
        return resolved if resolved is not None else parse_instant(self._clock())

    def _parse_maturity(self, cd: CDRecord) -> datetime:
        if cd.maturity is None or cd.maturity == "":
            raise ValidationError("maturityDate", "CD maturity date is required")
        maturity = parse_instant(cd.maturity)
        if maturity is None:
            raise ValidationError("maturityDate", f"invalid maturity date: {cd.maturity!r}")
        return maturity

    def _parse_opened(self, cd: CDRecord, now: datetime) -> datetime:
        if cd.opened is None or cd.opened == "":
            return now
        opened = parse_instant(cd.opened)
        if opened is None:
            logger.warning(f"Invalid CD opening date {cd.opened!r}, using current date")
            return now
        return opened

    def _validate(self, cd: CDRecord) -> None:
        if cd.principal is None or cd.principal <= 0:
            raise ValidationError("principal", "CD principal is required and must be greater than 0")
        if cd.annual_interest_rate_percent is None or cd.annual_interest_rate_percent <= 0:
            raise ValidationError("interestRate", "CD interest rate is required and must be greater than 0")

    def calculate_current_value(self, cd: CDRecord, as_of: datetime | None = None) -> CDValuationResult:
        """
        Calculate the value of a CD at an instant.

        Args:
            cd: CD snapshot
            as_of: Valuation instant (default: the calculator's clock)

        Returns:
            CDValuationResult

        Raises:
            ValidationError: If principal or rate is missing or not positive,
                the maturity date is missing or unparsable, the maturity
                date does not follow the opening date, or the rate grows the
                principal past the representable range
        """
        self._validate(cd)
        maturity = self._parse_maturity(cd)
        now = self._resolve_instant(as_of)
        opened = self._parse_opened(cd, now)

        if maturity <= opened:
            raise ValidationError(
                "maturityDate",
                f"maturity date {maturity.isoformat()} must be after opening date {opened.isoformat()}",
            )

        days_elapsed = max(0, whole_days_between(opened, now))
        total_term_days = whole_days_between(opened, maturity)
        days_to_maturity = max(0, whole_days_between(now, maturity))

        is_matured = now >= maturity
        effective_days = total_term_days if is_matured else days_elapsed

        annual_rate = percent_to_decimal(cd.annual_interest_rate_percent)
        current = calculate_compound_interest(cd.principal, annual_rate, effective_days, cd.compounding_frequency)
        at_maturity = calculate_compound_interest(
            cd.principal, annual_rate, total_term_days, cd.compounding_frequency
        )

        effective_yield = (at_maturity.interest_earned / cd.principal) * 100

        # Withholding tax (retención en la fuente) applies to accrued interest only
        withholding_tax = round_half_up(
            current.interest_earned * percent_to_decimal(cd.withholding_tax_rate_percent)
        )
        net_interest = round_half_up(current.interest_earned - withholding_tax)
        net_current_value = round_half_up(cd.principal + net_interest)

        logger.debug(
            f"CD {cd.id or '<unsaved>'}: {days_elapsed}/{total_term_days} days, "
            f"value={current.final_amount}, accrued={current.interest_earned}, matured={is_matured}"
        )

        return CDValuationResult(
            current_value=current.final_amount,
            accrued_interest=current.interest_earned,
            total_interest_at_maturity=at_maturity.interest_earned,
            days_to_maturity=days_to_maturity,
            is_matured=is_matured,
            effective_yield_percent=effective_yield,
            withholding_tax=withholding_tax,
            net_interest=net_interest,
            net_current_value=net_current_value,
        )

    def calculate_early_withdrawal_penalty(self, cd: CDRecord, withdrawal: datetime | None = None) -> float:
        """
        Penalty charged for withdrawing before maturity.

        The penalty is a percentage of the interest accrued at the withdrawal
        instant. Zero when no penalty is configured or the CD has matured.
        """
        if not cd.early_withdrawal_penalty_percent:
            return 0.0

        withdrawal_at = self._resolve_instant(withdrawal)
        if withdrawal_at >= self._parse_maturity(cd):
            return 0.0

        valuation = self.calculate_current_value(cd, withdrawal_at)
        return round_half_up(valuation.accrued_interest * cd.early_withdrawal_penalty_percent / 100)

    def calculate_early_withdrawal_amount(self, cd: CDRecord, withdrawal: datetime | None = None) -> float:
        """
        Net payout for a withdrawal at an instant.

        principal + (accrued interest - penalty) less withholding tax. The
        tax applies only to interest that survives the penalty.
        """
        withdrawal_at = self._resolve_instant(withdrawal)
        valuation = self.calculate_current_value(cd, withdrawal_at)
        penalty = self.calculate_early_withdrawal_penalty(cd, withdrawal_at)

        interest_after_penalty = max(0.0, valuation.accrued_interest - penalty)
        tax_rate = percent_to_decimal(cd.withholding_tax_rate_percent)

        return round_half_up(cd.principal + interest_after_penalty * (1 - tax_rate))

    def is_near_maturity(
        self,
        cd: CDRecord,
        threshold_days: int = DEFAULT_NEAR_MATURITY_DAYS,
        as_of: datetime | None = None,
    ) -> bool:
        """
        Check whether a CD matures within threshold_days.

        A CD with zero days left is matured, not near maturity.
        """
        days_to_maturity = self.calculate_current_value(cd, as_of).days_to_maturity
        return is_within_near_maturity(days_to_maturity, threshold_days)


# Default calculator backed by the wall clock, for callers without a clock of their own
default_calculator = CDValuationCalculator()


def calculate_current_value(cd: CDRecord, as_of: datetime | None = None) -> CDValuationResult:
    """Convenience wrapper around CDValuationCalculator.calculate_current_value."""
    return default_calculator.calculate_current_value(cd, as_of)


def calculate_early_withdrawal_penalty(cd: CDRecord, withdrawal: datetime | None = None) -> float:
    """Convenience wrapper around CDValuationCalculator.calculate_early_withdrawal_penalty."""
    return default_calculator.calculate_early_withdrawal_penalty(cd, withdrawal)


def calculate_early_withdrawal_amount(cd: CDRecord, withdrawal: datetime | None = None) -> float:
    """Convenience wrapper around CDValuationCalculator.calculate_early_withdrawal_amount."""
    return default_calculator.calculate_early_withdrawal_amount(cd, withdrawal)


def is_near_maturity(
    cd: CDRecord,
    threshold_days: int = DEFAULT_NEAR_MATURITY_DAYS,
    as_of: datetime | None = None,
) -> bool:
    """Convenience wrapper around CDValuationCalculator.is_near_maturity."""
    return default_calculator.is_near_maturity(cd, threshold_days, as_of)
