"""
Finance Engine - Financial Calculation Engine for the Pockets Finance Tracker

Pure, deterministic calculators over immutable record snapshots supplied by
the tracker's persistence layer.

Key Features:
- Certificate of Deposit valuation with compound interest and withholding tax
- Early withdrawal penalties and maturity tracking
- Pocket balances from movements (normal) or sub-pockets (fixed)
- Sub-pocket monthly contributions with completion capping and debt catch-up

Domain Packages:
- core: Models, errors, rounding, dates, configuration
- investments: CD valuation and summaries
- pockets: Balance aggregation and contribution planning
- cli: Command-line interface over snapshot files

Example Usage:
    from finance_engine.investments import CDValuationCalculator
    from finance_engine.pockets import calculate_total_fijos_mes

Version: 0.3.0
"""

__version__ = "0.3.0"
__author__ = "Finance Engine Contributors"

# Export core types for easy access
from .core.errors import FinanceEngineError, ValidationError
from .core.models import CDRecord, CompoundingFrequency, Movement, MovementType, Pocket, PocketType, SubPocket

__all__ = [
    "CDRecord",
    "CompoundingFrequency",
    "FinanceEngineError",
    "Movement",
    "MovementType",
    "Pocket",
    "PocketType",
    "SubPocket",
    "ValidationError",
]
