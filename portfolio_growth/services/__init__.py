"""Service layer abstractions for the portfolio growth calculator."""
from .aggregation import PortfolioAggregator
from .calculator import PortfolioGrowthCalculator
from .history import PriceSeriesProvider, YahooPriceSeriesProvider
from .validation import AllocationValidator
from .valuation import PerSymbolValuator

__all__ = [
    "AllocationValidator",
    "PerSymbolValuator",
    "PortfolioAggregator",
    "PortfolioGrowthCalculator",
    "PriceSeriesProvider",
    "YahooPriceSeriesProvider",
]
