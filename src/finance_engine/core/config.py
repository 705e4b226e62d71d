#!/usr/bin/env python3
"""
Configuration Management for the Finance Engine

Handles environment-based configuration for the outer layers (CLI, logging).
The calculators themselves never read configuration: every tunable they
honor is passed in explicitly by the caller.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotenv import load_dotenv

from .models import Currency

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class InvestmentConfig:
    """CD presentation settings."""

    near_maturity_days: int = 30


@dataclass
class DisplayConfig:
    """Presentation settings for amounts."""

    default_currency: str = Currency.USD.value


@dataclass
class Config:
    """
    Main configuration class for the finance engine.

    Loads configuration from environment variables with defaults suitable
    for local use.
    """

    environment: Environment

    # Component configurations
    investments: InvestmentConfig = field(default_factory=InvestmentConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINANCE_ENGINE_ENV", "development"))

        investments = InvestmentConfig(
            near_maturity_days=int(os.getenv("NEAR_MATURITY_DAYS", "30")),
        )

        display = DisplayConfig(
            default_currency=os.getenv("DEFAULT_CURRENCY", Currency.USD.value).upper(),
        )

        return cls(
            environment=env,
            investments=investments,
            display=display,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.investments.near_maturity_days <= 0:
            errors.append("NEAR_MATURITY_DAYS must be positive")

        if self.display.default_currency not in {currency.value for currency in Currency}:
            errors.append(f"DEFAULT_CURRENCY is not supported: {self.display.default_currency}")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("finance_engine").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            _config = None
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
