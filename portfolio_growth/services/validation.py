"""Validation of inbound portfolio growth requests."""
from __future__ import annotations

import math
from datetime import date, datetime
from numbers import Real
from typing import Any, Mapping

from dateutil import parser as date_parser

from ..errors import RequestValidationError
from ..models import Allocation, PortfolioRequest


class AllocationValidator:
    """Checks the shape and numeric sanity of a raw request payload.

    Checks run in a fixed priority order and the first failure is raised:
    allocations, then dates, then the investment amount, then each
    allocation entry. Percentages are not required to sum to 100 and the
    start date may come after the end date.
    """

    def validate(self, payload: Any) -> PortfolioRequest:
        if not isinstance(payload, Mapping):
            raise RequestValidationError("Request body must be a JSON object.")

        stocks = payload.get("stocks")
        if not stocks or not isinstance(stocks, list):
            raise RequestValidationError(
                "Stocks array is missing or empty.", field="stocks", value=stocks
            )

        raw_start = payload.get("startDate")
        raw_end = payload.get("endDate")
        if not raw_start or not raw_end:
            raise RequestValidationError(
                "Start and End date are required.", field="startDate"
            )
        start_date = _parse_date(raw_start, "startDate")
        end_date = _parse_date(raw_end, "endDate")

        investment_amount = _parse_amount(payload.get("investmentAmount"))

        allocations = tuple(
            _parse_allocation(index, entry) for index, entry in enumerate(stocks)
        )
        return PortfolioRequest(
            allocations=allocations,
            start_date=start_date,
            end_date=end_date,
            investment_amount=investment_amount,
        )


def _parse_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise RequestValidationError("Invalid start or end date.", field=field, value=value)
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as exc:
        raise RequestValidationError(
            "Invalid start or end date.", field=field, value=value
        ) from exc


def _to_number(value: Any) -> float | None:
    """Numbers and numeric strings become floats; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _parse_amount(value: Any) -> float:
    amount = _to_number(value)
    if amount is None or amount <= 0:
        raise RequestValidationError(
            "Invalid investment amount.", field="investmentAmount", value=value
        )
    return amount


def _parse_allocation(index: int, entry: Any) -> Allocation:
    if not isinstance(entry, Mapping):
        raise RequestValidationError(
            f"Stock entry {index} must be an object.", field=f"stocks[{index}]", value=entry
        )

    symbol = entry.get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        raise RequestValidationError(
            f"Stock entry {index} is missing a symbol.",
            field=f"stocks[{index}].symbol",
            value=symbol,
        )

    percentage = _to_number(entry.get("percentage"))
    if percentage is None or not 0 < percentage <= 100:
        raise RequestValidationError(
            f"Invalid percentage for {symbol.strip().upper()}: must be greater than 0 and at most 100.",
            field=f"stocks[{index}].percentage",
            value=entry.get("percentage"),
        )

    return Allocation(symbol=symbol.strip().upper(), percentage=percentage)
