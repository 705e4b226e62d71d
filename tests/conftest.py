"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from finance_engine.core.config import reload_config
from finance_engine.core.models import CDRecord, CompoundingFrequency
from finance_engine.investments import CDValuationCalculator

# Fixed instant used as "now" throughout the suite
FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def fixed_now() -> datetime:
    """The suite's fixed "now"."""
    return FIXED_NOW


@pytest.fixture
def calculator() -> CDValuationCalculator:
    """CD calculator whose clock is pinned to FIXED_NOW."""
    return CDValuationCalculator(clock=lambda: FIXED_NOW)


@pytest.fixture
def one_year_cd() -> CDRecord:
    """$10,000 at 4.5% compounded monthly, opened at FIXED_NOW for 365 days."""
    return CDRecord(
        id="cd-test-1",
        name="Test CD",
        principal=10000,
        annual_interest_rate_percent=4.5,
        opened=FIXED_NOW,
        maturity=FIXED_NOW + timedelta(days=365),
        compounding_frequency=CompoundingFrequency.MONTHLY,
    )


@pytest.fixture
def active_cd() -> CDRecord:
    """CD opened 65 days before FIXED_NOW, maturing 300 days after, with a 3% penalty."""
    return CDRecord(
        id="cd-test-2",
        principal=10000,
        annual_interest_rate_percent=4.5,
        opened=FIXED_NOW - timedelta(days=65),
        maturity=FIXED_NOW + timedelta(days=300),
        compounding_frequency=CompoundingFrequency.MONTHLY,
        early_withdrawal_penalty_percent=3.0,
    )


@pytest.fixture
def snapshot_file(temp_dir) -> Path:
    """Snapshot YAML with one CD, a normal and a fixed pocket and their children."""
    path = temp_dir / "snapshot.yaml"
    path.write_text(
        """
cds:
  - id: cd-1
    name: Bank CD
    principal: 10000
    interestRate: 4.5
    cdCreatedAt: "2024-01-01T00:00:00Z"
    maturityDate: "2024-12-31T00:00:00Z"
    compoundingFrequency: monthly
    earlyWithdrawalPenalty: 3
    withholdingTaxRate: 4
pockets:
  - {id: p-normal, name: Daily, type: normal, currency: USD}
  - {id: p-fixed, name: Fixed Expenses, type: fixed, currency: USD}
movements:
  - {id: m-1, pocketId: p-normal, amount: 500, type: IngresoNormal}
  - {id: m-2, pocketId: p-normal, amount: 100, type: EgresoNormal, isPending: true}
  - {id: m-3, pocketId: p-normal, amount: 40, type: EgresoNormal}
subPockets:
  - {id: sp-1, pocketId: p-fixed, name: Insurance, valueTotal: 1200, periodicityMonths: 12, balance: 100}
  - {id: sp-2, pocketId: p-fixed, name: Taxes, valueTotal: 600, periodicityMonths: 6, balance: -50}
  - {id: sp-3, pocketId: p-fixed, name: Gym, valueTotal: 300, periodicityMonths: 3, balance: 300, enabled: false}
"""
    )
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("FINANCE_ENGINE_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.delenv("NEAR_MATURITY_DAYS", raising=False)
    monkeypatch.delenv("DEFAULT_CURRENCY", raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for rounding and amount formatting")
    config.addinivalue_line("markers", "cd: Tests for certificate of deposit calculations")
    config.addinivalue_line("markers", "pockets: Tests for pocket and sub-pocket calculations")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
