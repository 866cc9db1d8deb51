"""In-memory stand-ins for the price provider and the recorder."""

import threading
from contextlib import contextmanager
from datetime import date, timedelta

from portfolio_growth.models import PriceObservation


def make_series(*prices, start=date(2022, 1, 1)):
    """Monthly observations with the given adjusted closes."""
    return [
        PriceObservation(date=start + timedelta(days=31 * i), adjusted_close=price)
        for i, price in enumerate(prices)
    ]


class FakePriceProvider:
    """Serves canned series per symbol; exceptions in the map are raised.

    A value may also be a callable taking the call number (1-based) so tests
    can script per-attempt behaviour.
    """

    def __init__(self, responses):
        self._responses = dict(responses)
        self._lock = threading.Lock()
        self.calls = []

    def fetch(self, symbol, start, end, interval="1mo"):
        with self._lock:
            self.calls.append((symbol, start, end, interval))
            attempt = sum(1 for call in self.calls if call[0] == symbol)
        response = self._responses.get(symbol)
        if callable(response) and not isinstance(response, type):
            response = response(attempt)
        if isinstance(response, BaseException):
            raise response
        if response is None:
            raise LookupError(f"No data found for symbol {symbol}")
        return response

    def call_count(self, symbol):
        return sum(1 for call in self.calls if call[0] == symbol)


class RecordingRecorder:
    """Keeps events and timer names in memory instead of logging them."""

    def __init__(self):
        self.events = []
        self.messages = []
        self.timers = []

    def event(self, name, **fields):
        self.events.append((name, fields))

    def message(self, message):
        self.messages.append((message.level, message.text))

    @contextmanager
    def timer(self, name):
        self.timers.append(name)
        yield

    def names(self):
        return [name for name, _ in self.events]
