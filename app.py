"""FastAPI application entrypoint.

Run with ``uvicorn app:app``.
"""
import logging

from portfolio_growth.api import create_app
from portfolio_growth.config import CalculatorSettings

logging.basicConfig(
    level=CalculatorSettings.from_env().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
