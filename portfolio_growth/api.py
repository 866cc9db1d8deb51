"""HTTP surface of the portfolio growth calculator."""
from __future__ import annotations

import logging
import traceback
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CalculatorSettings
from .errors import PortfolioComputationError, RequestValidationError
from .models import PortfolioResult
from .observability import LoggingRecorder, Recorder
from .services import PortfolioGrowthCalculator, PriceSeriesProvider, YahooPriceSeriesProvider

logger = logging.getLogger(__name__)

CALCULATE_PATH = "/api/calculate-portfolio"

router = APIRouter()


# ============================================================================
# Response models
# ============================================================================


class PortfolioGrowthResponse(BaseModel):
    """Growth of the hypothetical portfolio, formatted for display."""

    startValue: str = Field(..., description="Total invested at the start date (2 decimals)")
    endValue: str = Field(..., description="Total value at the end date (2 decimals)")
    growth: str = Field(..., description="Growth percentage (2 decimals)")
    missingStocks: Optional[str] = Field(
        None,
        description="'Missing data: SYM1, SYM2' when symbols were skipped, else null",
    )
    debug: List[str] = Field(default_factory=list, description="Diagnostic trace")


class ErrorResponse(BaseModel):
    error: str
    debug: Optional[str] = None


def to_response(result: PortfolioResult) -> PortfolioGrowthResponse:
    missing = (
        f"Missing data: {', '.join(result.missing_symbols)}"
        if result.missing_symbols
        else None
    )
    return PortfolioGrowthResponse(
        startValue=f"{result.start_value:.2f}",
        endValue=f"{result.end_value:.2f}",
        growth=f"{result.growth_percent:.2f}",
        missingStocks=missing,
        debug=list(result.trace),
    )


# ============================================================================
# Dependency injection for testability
# ============================================================================


def get_settings() -> CalculatorSettings:
    return CalculatorSettings.from_env()


def get_price_provider(
    settings: CalculatorSettings = Depends(get_settings),
) -> PriceSeriesProvider:
    """Get the price series provider (Yahoo Finance)."""
    return YahooPriceSeriesProvider(timeout=settings.provider_timeout)


def get_recorder() -> Recorder:
    return LoggingRecorder()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    CALCULATE_PATH,
    response_model=PortfolioGrowthResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def calculate_portfolio(
    payload: Any = Body(None),
    provider: PriceSeriesProvider = Depends(get_price_provider),
    settings: CalculatorSettings = Depends(get_settings),
    recorder: Recorder = Depends(get_recorder),
) -> Any:
    """Compute how a lump sum split across symbols would have grown.

    Each stock receives ``percentage`` percent of ``investmentAmount``,
    bought at its first adjusted close in the window and valued at its
    last. Symbols without usable data are skipped and reported in
    ``missingStocks``.

    Validation failures map to 400; a degenerate portfolio or an internal
    fault maps to 500 with a ``debug`` trace.
    """
    calculator = PortfolioGrowthCalculator(provider, settings, recorder)
    try:
        result = calculator.calculate_payload(payload)
    except RequestValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except PortfolioComputationError as exc:
        logger.error(f"API Error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "debug": "\n".join(exc.trace)},
        )
    except Exception as exc:  # noqa: BLE001 - reported to the caller with the traceback
        logger.exception("API Error")
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc) or "Internal server error",
                "debug": traceback.format_exc(),
            },
        )
    return to_response(result)


@router.get("/health")
def health_check() -> dict:
    return {"status": "healthy"}


# ============================================================================
# Application
# ============================================================================


async def _http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content={"error": f"Method {request.method} not allowed"},
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


async def _unreadable_body(request: Request, exc: BodyValidationError):
    return JSONResponse(status_code=400, content={"error": "Request body must be valid JSON."})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Portfolio Growth API",
        description="Historical growth of a percentage-allocated lump sum",
        version="0.1.0",
    )
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(BodyValidationError, _unreadable_body)
    return app
