"""
Core Utilities Package

Shared models, errors, and helpers used by the investment and pocket calculators.

This package provides:
- Immutable input snapshots (CD records, movements, sub-pockets) and result types
- The ValidationError raised on violated preconditions
- Half-up cent rounding and amount formatting
- Instant parsing and whole-day arithmetic
- Configuration management for the outer layers
"""

from .config import (
    Config,
    Environment,
    get_config,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import format_amount, format_percent, percent_to_decimal, round_half_up
from .dates import add_months, parse_instant, utc_now, whole_days_between
from .errors import FinanceEngineError, ValidationError
from .models import (
    CDRecord,
    CDStatus,
    CDSummary,
    CDValuationResult,
    CompoundingFrequency,
    CompoundInterestResult,
    Currency,
    Movement,
    MovementType,
    Pocket,
    PocketType,
    ProgressLevel,
    SubPocket,
)

__all__ = [
    # Models
    "CDRecord",
    "CDStatus",
    "CDSummary",
    "CDValuationResult",
    "CompoundInterestResult",
    "CompoundingFrequency",
    # Configuration
    "Config",
    "Currency",
    "Environment",
    # Errors
    "FinanceEngineError",
    "Movement",
    "MovementType",
    "Pocket",
    "PocketType",
    "ProgressLevel",
    "SubPocket",
    "ValidationError",
    # Helpers
    "add_months",
    "format_amount",
    "format_percent",
    "get_config",
    "is_development",
    "is_production",
    "is_test",
    "parse_instant",
    "percent_to_decimal",
    "reload_config",
    "round_half_up",
    "utc_now",
    "whole_days_between",
]
