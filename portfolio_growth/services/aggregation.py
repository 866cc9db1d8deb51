"""Aggregation of per-symbol outcomes into a portfolio result."""
from __future__ import annotations

import math
from typing import Dict, Iterable, List

from ..errors import PortfolioComputationError
from ..messages import trace_lines
from ..models import PortfolioResult, SymbolOutcome

COMPUTATION_FAILED = "Portfolio value calculation failed, possible missing stock data."


class PortfolioAggregator:
    """Sums surviving contributions and computes the growth percentage."""

    def aggregate(self, outcomes: Iterable[SymbolOutcome]) -> PortfolioResult:
        total_start = 0.0
        total_end = 0.0
        missing: Dict[str, None] = {}
        trace: List[str] = []

        for outcome in outcomes:
            trace.extend(trace_lines(outcome.messages))
            if outcome.skipped:
                missing.setdefault(outcome.symbol, None)
                continue
            total_start += outcome.start_value
            total_end += outcome.end_value

        # Growth against a zero or undefined base is not reported.
        if (
            total_start == 0
            or not math.isfinite(total_start)
            or not math.isfinite(total_end)
        ):
            raise PortfolioComputationError(COMPUTATION_FAILED, trace=trace)

        growth = ((total_end - total_start) / total_start) * 100
        return PortfolioResult(
            start_value=total_start,
            end_value=total_end,
            growth_percent=growth,
            missing_symbols=tuple(missing),
            trace=tuple(trace),
        )
