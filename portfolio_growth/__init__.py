"""Portfolio growth calculator package."""

from .config import CalculatorSettings
from .errors import (
    PortfolioComputationError,
    PortfolioGrowthError,
    RequestValidationError,
    SymbolDataError,
)
from .messages import MessageLevel, ServiceMessage
from .models import (
    Allocation,
    PortfolioRequest,
    PortfolioResult,
    PriceObservation,
    SymbolOutcome,
)
from .observability import LoggingRecorder, NullRecorder, Recorder
from .services import (
    AllocationValidator,
    PerSymbolValuator,
    PortfolioAggregator,
    PortfolioGrowthCalculator,
    PriceSeriesProvider,
    YahooPriceSeriesProvider,
)

__all__ = [
    "Allocation",
    "AllocationValidator",
    "CalculatorSettings",
    "LoggingRecorder",
    "MessageLevel",
    "NullRecorder",
    "PerSymbolValuator",
    "PortfolioAggregator",
    "PortfolioComputationError",
    "PortfolioGrowthCalculator",
    "PortfolioGrowthError",
    "PortfolioRequest",
    "PortfolioResult",
    "PriceObservation",
    "PriceSeriesProvider",
    "Recorder",
    "RequestValidationError",
    "ServiceMessage",
    "SymbolDataError",
    "SymbolOutcome",
    "YahooPriceSeriesProvider",
]
