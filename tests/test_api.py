"""API-level tests for the portfolio growth endpoint."""

import pytest
from fastapi.testclient import TestClient

from portfolio_growth.api import (
    CALCULATE_PATH,
    create_app,
    get_price_provider,
    get_recorder,
    get_settings,
)
from portfolio_growth.config import CalculatorSettings
from tests.fakes import FakePriceProvider, RecordingRecorder, make_series

REQUEST = {
    "stocks": [{"symbol": "AAPL", "percentage": 60}, {"symbol": "MSFT", "percentage": 40}],
    "startDate": "2022-01-01",
    "endDate": "2023-01-01",
    "investmentAmount": 10000,
}


@pytest.fixture()
def app():
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: CalculatorSettings(
        provider_timeout=2.0, retry_attempts=1
    )
    application.dependency_overrides[get_recorder] = RecordingRecorder
    yield application
    application.dependency_overrides.clear()


def _client(app, responses):
    app.dependency_overrides[get_price_provider] = lambda: FakePriceProvider(responses)
    return TestClient(app)


def test_calculates_growth(app):
    client = _client(
        app, {"AAPL": make_series(100.0, 120.0), "MSFT": make_series(200.0, 180.0)}
    )
    response = client.post(CALCULATE_PATH, json=REQUEST)

    assert response.status_code == 200
    data = response.json()
    assert data["startValue"] == "10000.00"
    assert data["endValue"] == "10800.00"
    assert data["growth"] == "8.00"
    assert data["missingStocks"] is None
    assert data["debug"][0] == "Fetching data for AAPL"


def test_partial_failure_still_succeeds(app):
    client = _client(
        app, {"AAPL": make_series(100.0, 120.0), "BADSYM": LookupError("Quote not found")}
    )
    body = dict(REQUEST, stocks=[{"symbol": "AAPL", "percentage": 60}, {"symbol": "BADSYM", "percentage": 40}])
    response = client.post(CALCULATE_PATH, json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["missingStocks"] == "Missing data: BADSYM"
    assert data["startValue"] == "6000.00"
    assert data["endValue"] == "7200.00"
    assert data["growth"] == "20.00"


def test_all_symbols_failing_returns_500(app):
    client = _client(app, {"AAPL": [], "MSFT": RuntimeError("boom")})
    response = client.post(CALCULATE_PATH, json=REQUEST)

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Portfolio value calculation failed, possible missing stock data."
    assert "No valid data for AAPL" in data["debug"]
    assert "Error fetching MSFT: boom" in data["debug"]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"stocks": []}, "Stocks array is missing or empty."),
        ({"startDate": None}, "Start and End date are required."),
        ({"investmentAmount": 0}, "Invalid investment amount."),
        ({"investmentAmount": -100}, "Invalid investment amount."),
    ],
)
def test_invalid_request_returns_400(app, overrides, message):
    client = _client(app, {})
    response = client.post(CALCULATE_PATH, json=dict(REQUEST, **overrides))

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_malformed_json_returns_400(app):
    client = _client(app, {})
    response = client.post(
        CALCULATE_PATH, content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_missing_body_returns_400(app):
    client = _client(app, {})
    response = client.post(CALCULATE_PATH)

    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object."}


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_other_methods_not_allowed(app, method):
    client = _client(app, {})
    response = client.request(method, CALCULATE_PATH)

    assert response.status_code == 405
    assert response.json() == {"error": f"Method {method} not allowed"}
    assert response.headers["allow"] == "POST"


def test_unexpected_error_returns_500_with_traceback(app):
    class ExplodingRecorder(RecordingRecorder):
        def event(self, name, **fields):
            raise RuntimeError("recorder offline")

    app.dependency_overrides[get_recorder] = ExplodingRecorder
    client = _client(app, {"AAPL": make_series(1.0, 2.0)})
    response = client.post(CALCULATE_PATH, json=REQUEST)

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "recorder offline"
    assert "Traceback" in data["debug"]


def test_unknown_path_keeps_default_404(app):
    response = TestClient(app).get("/nope")
    assert response.status_code == 404


def test_health_check(app):
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
