"""Domain models for the portfolio growth calculator."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from .messages import ServiceMessage


@dataclass(frozen=True)
class Allocation:
    """A share of the lump sum invested in one symbol."""

    symbol: str
    percentage: float


@dataclass(frozen=True)
class PortfolioRequest:
    """A validated request; built once by the validator and never mutated."""

    allocations: Tuple[Allocation, ...]
    start_date: date
    end_date: date
    investment_amount: float

    @property
    def symbols(self) -> List[str]:
        return [allocation.symbol for allocation in self.allocations]


@dataclass(frozen=True)
class PriceObservation:
    date: date
    adjusted_close: Optional[float]


@dataclass(frozen=True)
class SymbolOutcome:
    """Contribution of one allocation, or the reason it was left out."""

    symbol: str
    start_value: float = 0.0
    end_value: float = 0.0
    shares: float = 0.0
    start_price: Optional[float] = None
    end_price: Optional[float] = None
    skipped: bool = False
    reason: Optional[str] = None
    messages: Tuple[ServiceMessage, ...] = field(default_factory=tuple)

    @classmethod
    def skip(
        cls,
        symbol: str,
        reason: str,
        messages: Tuple[ServiceMessage, ...] = (),
    ) -> "SymbolOutcome":
        return cls(symbol=symbol, skipped=True, reason=reason, messages=tuple(messages))

    def with_leading(self, *messages: ServiceMessage) -> "SymbolOutcome":
        """Returns a copy whose trace starts with the given messages."""
        return SymbolOutcome(
            symbol=self.symbol,
            start_value=self.start_value,
            end_value=self.end_value,
            shares=self.shares,
            start_price=self.start_price,
            end_price=self.end_price,
            skipped=self.skipped,
            reason=self.reason,
            messages=tuple(messages) + self.messages,
        )


@dataclass(frozen=True)
class PortfolioResult:
    """Aggregated totals for the entire portfolio."""

    start_value: float
    end_value: float
    growth_percent: float
    missing_symbols: Tuple[str, ...]
    trace: Tuple[str, ...]

    @property
    def gain(self) -> float:
        return self.end_value - self.start_value
