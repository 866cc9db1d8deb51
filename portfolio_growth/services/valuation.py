"""Per-symbol valuation of an allocation over a price series."""
from __future__ import annotations

import math
from typing import Optional, Sequence

from ..messages import MessageLevel, ServiceMessage
from ..models import Allocation, PriceObservation, SymbolOutcome


def _usable_price(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


class PerSymbolValuator:
    """Turns one allocation and its price series into a start/end contribution.

    Only the first and last observations are used; the allocation is treated
    as a single buy at the start price marked to market at the end price.
    """

    def value(
        self,
        allocation: Allocation,
        series: Sequence[PriceObservation],
        investment_amount: float,
    ) -> SymbolOutcome:
        symbol = allocation.symbol
        if len(series) < 2:
            return SymbolOutcome.skip(
                symbol,
                reason=f"Insufficient price data ({len(series)} observations)",
                messages=(
                    ServiceMessage(MessageLevel.WARNING, f"No valid data for {symbol}"),
                ),
            )

        start_price = series[0].adjusted_close
        end_price = series[-1].adjusted_close
        if not (_usable_price(start_price) and _usable_price(end_price)):
            return SymbolOutcome.skip(
                symbol,
                reason="Invalid start or end price",
                messages=(
                    ServiceMessage(
                        MessageLevel.WARNING,
                        f"Skipping {symbol} due to invalid price data",
                    ),
                ),
            )

        investment = investment_amount * (allocation.percentage / 100)
        shares = investment / start_price
        end_value = shares * end_price
        if shares == 0 and investment > 0:
            # shares underflowed; the price ratio keeps the value nonzero
            end_value = investment * (end_price / start_price)

        return SymbolOutcome(
            symbol=symbol,
            start_value=investment,
            end_value=end_value,
            shares=shares,
            start_price=start_price,
            end_price=end_price,
            messages=(
                ServiceMessage(
                    MessageLevel.INFO,
                    f"{symbol} | Start: ${start_price} | End: ${end_price}",
                ),
            ),
        )

    def skip(self, allocation: Allocation, reason: str) -> SymbolOutcome:
        """Outcome for a symbol whose price series could not be fetched."""
        return SymbolOutcome.skip(
            allocation.symbol,
            reason=reason,
            messages=(
                ServiceMessage(
                    MessageLevel.ERROR,
                    f"Error fetching {allocation.symbol}: {reason}",
                ),
            ),
        )
