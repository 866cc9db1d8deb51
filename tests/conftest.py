"""Pytest configuration and fixtures shared by the calculator tests.

Tests never reach Yahoo Finance: the price provider is replaced by an
in-memory fake and settings come from explicit fixtures.
"""

import os

import pytest

from portfolio_growth.config import ENV_VARS, CalculatorSettings
from tests.fakes import RecordingRecorder


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear PORTFOLIO_* variables so local configuration cannot leak into tests."""
    original_values = {}
    for var in ENV_VARS:
        if var in os.environ:
            original_values[var] = os.environ.pop(var)

    yield

    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture()
def recorder():
    return RecordingRecorder()


@pytest.fixture()
def fast_settings():
    return CalculatorSettings(provider_timeout=2.0, retry_attempts=2, retry_backoff=0.0)
