"""Pluggable recorder for timings and diagnostic events."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from .messages import MessageLevel, ServiceMessage

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    MessageLevel.INFO: logging.INFO,
    MessageLevel.WARNING: logging.WARNING,
    MessageLevel.ERROR: logging.ERROR,
}


class Recorder(Protocol):
    def event(self, name: str, **fields: Any) -> None:
        ...

    def message(self, message: ServiceMessage) -> None:
        ...

    def timer(self, name: str) -> Any:
        ...


class LoggingRecorder:
    """Default recorder: writes events, trace messages and timings to the module logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def event(self, name: str, **fields: Any) -> None:
        details = " ".join(f"{key}={value}" for key, value in fields.items())
        self._log.info(f"{name} {details}".rstrip())

    def message(self, message: ServiceMessage) -> None:
        self._log.log(_LOG_LEVELS[message.level], message.text)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._log.info(f"{name} took {elapsed_ms:.1f}ms")


class NullRecorder:
    def event(self, name: str, **fields: Any) -> None:
        pass

    def message(self, message: ServiceMessage) -> None:
        pass

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        yield
