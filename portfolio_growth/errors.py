"""Exceptions raised by the portfolio growth calculator."""
from __future__ import annotations

from typing import Any, Optional, Sequence


class PortfolioGrowthError(Exception):
    """Base exception for all calculator errors."""


class RequestValidationError(PortfolioGrowthError):
    """Raised when an incoming request is malformed or incomplete.

    Only the first violated precondition is reported.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class SymbolDataError(PortfolioGrowthError):
    """Raised when a single symbol has no usable price data.

    Always recovered inside the valuation step; the symbol is skipped.
    """

    def __init__(self, message: str, symbol: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol


class PortfolioComputationError(PortfolioGrowthError):
    """Raised when the aggregate base value is zero or not a finite number."""

    def __init__(self, message: str, trace: Sequence[str] = ()):
        super().__init__(message)
        self.trace = list(trace)
