#!/usr/bin/env python3
"""
Core Data Models for the Finance Engine

Snapshots handed to the calculators by the persistence layer, and the
results the calculators hand back. Input snapshots are immutable; the
engine never stores them.

Record dictionaries use the camelCase keys of the CRUD layer
(valueTotal, periodicityMonths, isPending, ...). Attribute names are snake_case.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any

from .errors import ValidationError

logger = logging.getLogger(__name__)


class CompoundingFrequency(Enum):
    """How often CD interest compounds."""

    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

    @classmethod
    def parse(cls, value: "CompoundingFrequency | str | None") -> "CompoundingFrequency":
        """
        Resolve a stored frequency value.

        Unrecognized or missing values fall back to MONTHLY; this never raises.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.warning(f"Unrecognized compounding frequency {value!r}, using monthly")
        return cls.MONTHLY


class MovementType(Enum):
    """Signed movement categories."""

    INGRESO_NORMAL = "IngresoNormal"
    EGRESO_NORMAL = "EgresoNormal"
    INGRESO_FIJO = "IngresoFijo"
    EGRESO_FIJO = "EgresoFijo"

    @property
    def is_income(self) -> bool:
        return self in (MovementType.INGRESO_NORMAL, MovementType.INGRESO_FIJO)

    @property
    def is_expense(self) -> bool:
        return not self.is_income


class PocketType(Enum):
    """Pocket balance sources: movements (normal) or sub-pockets (fixed)."""

    NORMAL = "normal"
    FIXED = "fixed"


class Currency(Enum):
    """Currencies a pocket may hold."""

    USD = "USD"
    MXN = "MXN"
    COP = "COP"
    EUR = "EUR"
    GBP = "GBP"


class CDStatus(Enum):
    """Presentation status of a CD."""

    ACTIVE = "active"
    NEAR_MATURITY = "near-maturity"
    MATURED = "matured"


class ProgressLevel(Enum):
    """Buckets for sub-pocket savings progress."""

    EMPTY = "empty"  # == 0%
    LOW = "low"  # < 50%
    PARTIAL = "partial"  # < 100%
    COMPLETE = "complete"  # >= 100%


def _parse_enum(enum_cls: type[Enum], value: Any, field_name: str) -> Any:
    """Coerce a raw value into enum_cls or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise ValidationError(field_name, f"must be one of: {allowed} (got {value!r})") from None


def _require(data: dict[str, Any], key: str) -> Any:
    """Fetch a required record key."""
    if data.get(key) is None:
        raise ValidationError(key, "is required")
    return data[key]


def _to_float(value: Any, field_name: str) -> float:
    """Coerce a numeric record value or raise ValidationError."""
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(field_name, f"must be a number (got {value!r})") from None


def _optional_float(data: dict[str, Any], key: str) -> float | None:
    """Fetch an optional numeric record key."""
    value = data.get(key)
    return None if value is None else _to_float(value, key)


@dataclass(frozen=True)
class CDRecord:
    """
    Certificate of Deposit snapshot.

    Not validated on construction: the valuation calculator checks
    principal, rate and maturity and raises ValidationError.

    Note: Rates and penalties are percentages (4.5 means 4.5%).
    """

    principal: float | None
    annual_interest_rate_percent: float | None
    maturity: datetime | date | str | None

    # Optional fields
    opened: datetime | date | str | None = None
    compounding_frequency: CompoundingFrequency | str | None = CompoundingFrequency.MONTHLY
    early_withdrawal_penalty_percent: float | None = None
    withholding_tax_rate_percent: float | None = None

    # Display metadata
    id: str | None = None
    name: str | None = None
    currency: str = "USD"
    term_months: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CDRecord":
        """Create CDRecord from a CD account record."""
        return cls(
            principal=_optional_float(data, "principal"),
            annual_interest_rate_percent=_optional_float(data, "interestRate"),
            maturity=data.get("maturityDate"),
            opened=data.get("cdCreatedAt"),
            compounding_frequency=data.get("compoundingFrequency") or CompoundingFrequency.MONTHLY,
            early_withdrawal_penalty_percent=_optional_float(data, "earlyWithdrawalPenalty"),
            withholding_tax_rate_percent=_optional_float(data, "withholdingTaxRate"),
            id=data.get("id"),
            name=data.get("name"),
            currency=data.get("currency", "USD"),
            term_months=data.get("termMonths"),
        )


@dataclass(frozen=True)
class Movement:
    """A single income or expense entry owned by a pocket."""

    id: str
    amount: float
    type: MovementType

    # Optional fields
    is_pending: bool = False
    is_orphaned: bool = False
    pocket_id: str | None = None
    sub_pocket_id: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValidationError("amount", f"cannot be negative: {self.amount}")

    @property
    def counts_toward_balance(self) -> bool:
        """Pending movements are not applied yet; orphaned ones never will be."""
        return not self.is_pending and not self.is_orphaned

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Movement":
        """Create Movement from a movement record."""
        return cls(
            id=str(_require(data, "id")),
            amount=_to_float(_require(data, "amount"), "amount"),
            type=_parse_enum(MovementType, _require(data, "type"), "type"),
            is_pending=bool(data.get("isPending", False)),
            is_orphaned=bool(data.get("isOrphaned", False)),
            pocket_id=data.get("pocketId"),
            sub_pocket_id=data.get("subPocketId"),
        )


@dataclass(frozen=True)
class SubPocket:
    """
    Savings goal inside a fixed pocket.

    balance is the running contribution total and may be negative (debt
    from a missed contribution). Disabled sub-pockets still hold a balance
    but are left out of monthly totals.
    """

    id: str
    value_total: float
    periodicity_months: int
    balance: float = 0.0
    enabled: bool = True

    # Optional fields
    pocket_id: str | None = None
    name: str | None = None
    group_id: str | None = None

    def __post_init__(self) -> None:
        if self.value_total <= 0:
            raise ValidationError("valueTotal", "must be positive")
        if isinstance(self.periodicity_months, bool) or not isinstance(self.periodicity_months, int):
            raise ValidationError("periodicityMonths", "must be an integer")
        if self.periodicity_months <= 0:
            raise ValidationError("periodicityMonths", "must be positive")

    def with_balance(self, balance: float) -> "SubPocket":
        """Return a copy of this snapshot carrying a new balance."""
        return replace(self, balance=balance)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubPocket":
        """Create SubPocket from a sub-pocket record."""
        periodicity = _require(data, "periodicityMonths")
        if isinstance(periodicity, float) and periodicity.is_integer():
            periodicity = int(periodicity)
        return cls(
            id=str(_require(data, "id")),
            value_total=_to_float(_require(data, "valueTotal"), "valueTotal"),
            periodicity_months=periodicity,
            balance=_to_float(data.get("balance", 0.0), "balance"),
            enabled=bool(data.get("enabled", True)),
            pocket_id=data.get("pocketId"),
            name=data.get("name"),
            group_id=data.get("groupId"),
        )


class Pocket:
    """
    Sub-allocation of an account's money.

    The balance is derived: normal pockets from their movements, fixed
    pockets from their sub-pockets. Callers never assign it directly;
    update_balance is called with the aggregator's output.
    """

    def __init__(
        self,
        id: str,
        type: PocketType | str,
        currency: Currency | str = Currency.USD,
        balance: float = 0.0,
        account_id: str | None = None,
        name: str | None = None,
    ):
        self.id = id
        self.type = _parse_enum(PocketType, type, "type")
        self.currency = _parse_enum(Currency, currency, "currency")
        self.account_id = account_id
        self.name = name
        self._balance = balance

    @property
    def balance(self) -> float:
        """Last balance computed from this pocket's children."""
        return self._balance

    def update_balance(self, new_balance: float) -> None:
        """Store a freshly aggregated balance."""
        self._balance = new_balance

    def is_fixed(self) -> bool:
        return self.type == PocketType.FIXED

    def is_normal(self) -> bool:
        return self.type == PocketType.NORMAL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pocket":
        """Create Pocket from a pocket record."""
        return cls(
            id=str(_require(data, "id")),
            type=_require(data, "type"),
            currency=data.get("currency", "USD"),
            balance=_to_float(data.get("balance", 0.0), "balance"),
            account_id=data.get("accountId"),
            name=data.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "accountId": self.account_id,
            "name": self.name,
            "type": self.type.value,
            "balance": self._balance,
            "currency": self.currency.value,
        }

    def __repr__(self) -> str:
        return f"Pocket(id={self.id!r}, type={self.type.value!r}, balance={self._balance!r})"


@dataclass(frozen=True)
class CompoundInterestResult:
    """Final amount and interest, both rounded to cents."""

    final_amount: float
    interest_earned: float

    def to_dict(self) -> dict[str, Any]:
        return {"finalAmount": self.final_amount, "interestEarned": self.interest_earned}


@dataclass(frozen=True)
class CDValuationResult:
    """
    Valuation of a CD at an instant. Derived, never stored.

    Monetary fields are rounded to cents where they were computed.
    """

    current_value: float
    accrued_interest: float
    total_interest_at_maturity: float
    days_to_maturity: int
    is_matured: bool
    effective_yield_percent: float
    withholding_tax: float
    net_interest: float
    net_current_value: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using presentation-layer keys."""
        return {
            "currentValue": self.current_value,
            "accruedInterest": self.accrued_interest,
            "totalInterest": self.total_interest_at_maturity,
            "daysToMaturity": self.days_to_maturity,
            "isMatured": self.is_matured,
            "effectiveYield": self.effective_yield_percent,
            "withholdingTax": self.withholding_tax,
            "netInterest": self.net_interest,
            "netCurrentValue": self.net_current_value,
        }


@dataclass(frozen=True)
class CDSummary:
    """Presentation summary of a CD's status and returns."""

    status: CDStatus
    current_value: float
    net_current_value: float
    total_return: float
    net_return: float
    return_percentage: float
    net_return_percentage: float
    days_to_maturity: int
    monthly_interest_rate: float
    withholding_tax: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using presentation-layer keys."""
        return {
            "status": self.status.value,
            "currentValue": self.current_value,
            "netCurrentValue": self.net_current_value,
            "totalReturn": self.total_return,
            "netReturn": self.net_return,
            "returnPercentage": self.return_percentage,
            "netReturnPercentage": self.net_return_percentage,
            "daysToMaturity": self.days_to_maturity,
            "monthlyInterestRate": self.monthly_interest_rate,
            "withholdingTax": self.withholding_tax,
        }
