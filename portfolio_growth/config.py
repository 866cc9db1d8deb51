"""Runtime configuration for the calculator, read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass

# Environment variable names
ENV_PRICE_INTERVAL = "PORTFOLIO_PRICE_INTERVAL"
ENV_PROVIDER_TIMEOUT = "PORTFOLIO_PROVIDER_TIMEOUT"
ENV_MAX_WORKERS = "PORTFOLIO_MAX_WORKERS"
ENV_RETRY_ATTEMPTS = "PORTFOLIO_RETRY_ATTEMPTS"
ENV_RETRY_BACKOFF = "PORTFOLIO_RETRY_BACKOFF"
ENV_LOG_LEVEL = "PORTFOLIO_LOG_LEVEL"

ENV_VARS = (
    ENV_PRICE_INTERVAL,
    ENV_PROVIDER_TIMEOUT,
    ENV_MAX_WORKERS,
    ENV_RETRY_ATTEMPTS,
    ENV_RETRY_BACKOFF,
    ENV_LOG_LEVEL,
)

# Defaults
DEFAULT_PRICE_INTERVAL = "1mo"
DEFAULT_PROVIDER_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 16
DEFAULT_RETRY_ATTEMPTS = 2
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class CalculatorSettings:
    """Knobs for price retrieval; one instance is shared read-only by requests."""

    price_interval: str = DEFAULT_PRICE_INTERVAL
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.provider_timeout <= 0:
            raise ValueError("provider_timeout must be positive")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        if self.retry_backoff < 0:
            raise ValueError("retry_backoff must not be negative")

    @classmethod
    def from_env(cls) -> "CalculatorSettings":
        """Builds settings from PORTFOLIO_* variables, falling back to defaults."""
        return cls(
            price_interval=os.environ.get(ENV_PRICE_INTERVAL, "") or DEFAULT_PRICE_INTERVAL,
            provider_timeout=_float_env(ENV_PROVIDER_TIMEOUT, DEFAULT_PROVIDER_TIMEOUT),
            max_workers=_int_env(ENV_MAX_WORKERS, DEFAULT_MAX_WORKERS),
            retry_attempts=_int_env(ENV_RETRY_ATTEMPTS, DEFAULT_RETRY_ATTEMPTS),
            retry_backoff=_float_env(ENV_RETRY_BACKOFF, DEFAULT_RETRY_BACKOFF),
            log_level=(os.environ.get(ENV_LOG_LEVEL, "") or DEFAULT_LOG_LEVEL).upper(),
        )


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    return float(raw) if raw else default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    return int(raw) if raw else default
