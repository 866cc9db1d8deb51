"""Common messaging primitives for calculation traces."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class MessageLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ServiceMessage:
    level: MessageLevel
    text: str


def trace_lines(messages: Iterable[ServiceMessage]) -> List[str]:
    return [message.text for message in messages]
