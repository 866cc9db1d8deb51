"""Orchestration of the portfolio growth calculation."""
from __future__ import annotations

import concurrent.futures
import math
import time
from typing import Any, Callable, List, Optional

from ..config import CalculatorSettings
from ..errors import SymbolDataError
from ..messages import MessageLevel, ServiceMessage
from ..models import (
    Allocation,
    PortfolioRequest,
    PortfolioResult,
    PriceObservation,
    SymbolOutcome,
)
from ..observability import LoggingRecorder, Recorder
from .aggregation import PortfolioAggregator
from .history import PriceSeriesProvider
from .validation import AllocationValidator
from .valuation import PerSymbolValuator


class PortfolioGrowthCalculator:
    """Runs validate -> fetch/value per allocation -> aggregate.

    Price series are fetched concurrently, one task per allocation. Every
    task turns its own failure (provider error, bad data, timeout) into a
    skipped outcome, so one symbol can never abort or corrupt its siblings.
    Outcomes are joined back in allocation order before aggregation.
    """

    def __init__(
        self,
        provider: PriceSeriesProvider,
        settings: Optional[CalculatorSettings] = None,
        recorder: Optional[Recorder] = None,
        *,
        validator: Optional[AllocationValidator] = None,
        valuator: Optional[PerSymbolValuator] = None,
        aggregator: Optional[PortfolioAggregator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._provider = provider
        self._settings = settings or CalculatorSettings()
        self._recorder = recorder or LoggingRecorder()
        self._validator = validator or AllocationValidator()
        self._valuator = valuator or PerSymbolValuator()
        self._aggregator = aggregator or PortfolioAggregator()
        self._sleep = sleep

    def calculate_payload(self, payload: Any) -> PortfolioResult:
        """Validates a raw request body and calculates its growth."""
        return self.calculate(self._validator.validate(payload))

    def calculate(self, request: PortfolioRequest) -> PortfolioResult:
        self._recorder.event(
            "portfolio.request",
            symbols=",".join(request.symbols),
            start=request.start_date,
            end=request.end_date,
        )
        with self._recorder.timer("portfolio.calculate"):
            outcomes = self._value_all(request)
            for outcome in outcomes:
                for message in outcome.messages:
                    self._recorder.message(message)
            result = self._aggregator.aggregate(outcomes)
        self._recorder.event(
            "portfolio.result",
            growth=f"{result.growth_percent:.2f}",
            missing=len(result.missing_symbols),
        )
        return result

    def _value_all(self, request: PortfolioRequest) -> List[SymbolOutcome]:
        allocations = request.allocations
        if not allocations:
            return []
        workers = min(self._settings.max_workers, len(allocations))
        # Tasks beyond the pool size wait for a free worker, so each wave of
        # workers gets its own timeout budget.
        waves = math.ceil(len(allocations) / workers)
        deadline = time.monotonic() + self._settings.provider_timeout * waves

        pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="price-fetch"
        )
        try:
            futures = [
                pool.submit(self._value_one, allocation, request)
                for allocation in allocations
            ]
            return [
                self._collect(allocation, future, deadline)
                for allocation, future in zip(allocations, futures)
            ]
        finally:
            # Timed-out fetches are abandoned rather than awaited.
            pool.shutdown(wait=False, cancel_futures=True)

    def _collect(
        self,
        allocation: Allocation,
        future: "concurrent.futures.Future[SymbolOutcome]",
        deadline: float,
    ) -> SymbolOutcome:
        try:
            return future.result(timeout=max(0.0, deadline - time.monotonic()))
        except concurrent.futures.TimeoutError:
            future.cancel()
            reason = f"Timed out after {self._settings.provider_timeout:g}s"
            self._recorder.event("symbol.timeout", symbol=allocation.symbol)
            return self._valuator.skip(allocation, reason).with_leading(
                _fetching(allocation)
            )

    def _value_one(self, allocation: Allocation, request: PortfolioRequest) -> SymbolOutcome:
        try:
            series = self._fetch_with_retry(allocation.symbol, request)
        except Exception as exc:  # noqa: BLE001 - symbol is skipped with the reason
            reason = str(exc) or type(exc).__name__
            self._recorder.event("symbol.failed", symbol=allocation.symbol, error=reason)
            return self._valuator.skip(allocation, reason).with_leading(
                _fetching(allocation)
            )

        outcome = self._valuator.value(allocation, series, request.investment_amount)
        if outcome.skipped:
            self._recorder.event("symbol.skipped", symbol=allocation.symbol, reason=outcome.reason)
        return outcome.with_leading(_fetching(allocation))

    def _fetch_with_retry(
        self, symbol: str, request: PortfolioRequest
    ) -> List[PriceObservation]:
        attempts = self._settings.retry_attempts
        for attempt in range(1, attempts + 1):
            try:
                series = self._provider.fetch(
                    symbol,
                    request.start_date,
                    request.end_date,
                    self._settings.price_interval,
                )
                return list(series or [])
            except SymbolDataError:
                raise
            except Exception as exc:  # noqa: BLE001 - retried, then re-raised
                if attempt == attempts:
                    raise
                self._recorder.event(
                    "symbol.retry", symbol=symbol, attempt=attempt, error=exc
                )
                self._sleep(self._settings.retry_backoff * attempt)
        return []


def _fetching(allocation: Allocation) -> ServiceMessage:
    return ServiceMessage(MessageLevel.INFO, f"Fetching data for {allocation.symbol}")
