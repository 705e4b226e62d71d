#!/usr/bin/env python3
"""
Finance Engine Errors

Every calculator either returns a complete result or raises one of these
synchronously. Degraded inputs that have a documented default (missing
opening date, unknown compounding frequency, zero periodicity) never raise.
"""


class FinanceEngineError(Exception):
    """Base class for all finance engine errors."""

    pass


class ValidationError(FinanceEngineError, ValueError):
    """
    Raised when an input record violates a precondition.

    Terminal: callers should present the message to the user and never retry.

    Attributes:
        field: Name of the offending input field (camelCase record key)
        message: Human-readable description of the problem
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
