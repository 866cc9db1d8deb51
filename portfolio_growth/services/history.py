"""Market data history services."""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Protocol

import pandas as pd
import yfinance as yf
from yfinance.exceptions import YFPricesMissingError, YFTzMissingError

from ..config import DEFAULT_PRICE_INTERVAL, DEFAULT_PROVIDER_TIMEOUT
from ..errors import SymbolDataError
from ..models import PriceObservation

logger = logging.getLogger(__name__)


class PriceSeriesProvider(Protocol):
    """Returns the ordered adjusted-close series of a symbol, or raises."""

    def fetch(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = DEFAULT_PRICE_INTERVAL,
    ) -> List[PriceObservation]:
        ...


class YahooPriceSeriesProvider:
    """Loads adjusted-close history from Yahoo Finance through yfinance."""

    def __init__(self, timeout: float = DEFAULT_PROVIDER_TIMEOUT) -> None:
        self._timeout = timeout

    def fetch(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = DEFAULT_PRICE_INTERVAL,
    ) -> List[PriceObservation]:
        logger.debug(f"Requesting {interval} history for {symbol}: {start} -> {end}")
        try:
            hist = yf.Ticker(symbol).history(
                start=start.isoformat(),
                end=end.isoformat(),
                interval=interval,
                auto_adjust=False,
                timeout=self._timeout,
                raise_errors=True,
            )
        except (YFPricesMissingError, YFTzMissingError) as exc:
            # Unknown or delisted symbol; retrying cannot help.
            raise SymbolDataError(str(exc), symbol=symbol) from exc
        return frame_to_observations(hist)


def frame_to_observations(hist: pd.DataFrame | None) -> List[PriceObservation]:
    """Converts a yfinance history frame into date-ordered observations.

    Prefers the ``Adj Close`` column and falls back to ``Close``; missing
    prices are kept as ``None`` so the valuator can reject them.
    """
    if hist is None or hist.empty:
        return []

    column = "Adj Close" if "Adj Close" in hist.columns else "Close"
    if column not in hist.columns:
        return []

    serie = hist[column].copy()
    if getattr(serie.index, "tz", None) is not None:
        serie.index = serie.index.tz_localize(None)
    serie = serie.sort_index()

    return [
        PriceObservation(
            date=pd.Timestamp(ts).date(),
            adjusted_close=None if pd.isna(price) else float(price),
        )
        for ts, price in serie.items()
    ]
