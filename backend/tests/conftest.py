from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from src.core.config_log import LOG_NAME
from src.weather.services import ForecastResolver, get_forecast_resolver


TODAY = date(2024, 7, 4)
BASE_URL = "https://api.weather.test"
FORECAST_URL = f"{BASE_URL}/gridpoints/LWX/97,71/forecast"
USER_AGENT = "weather-service-tests (ops@example.com)"


def _period(
    name: str = "Today",
    start_time: str = "2024-07-04T06:00:00-04:00",
    temperature: int = 85,
    short_forecast: str = "Sunny",
    is_daytime: bool = True,
) -> Dict[str, Any]:
    return {
        "number": 1,
        "name": name,
        "startTime": start_time,
        "endTime": start_time,
        "isDaytime": is_daytime,
        "temperature": temperature,
        "temperatureUnit": "F",
        "windSpeed": "5 mph",
        "shortForecast": short_forecast,
    }


class StubUpstream:
    """Заглушка погодного API поверх httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.points: Any = {"properties": {"forecast": FORECAST_URL, "gridId": "LWX"}}
        self.periods: List[Dict[str, Any]] = [_period()]
        self.refused: set[str] = set()
        self.overrides: Dict[str, httpx.Response] = {}

    @staticmethod
    def kind(request: httpx.Request) -> str:
        return "points" if request.url.path.startswith("/points/") else "forecast"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        kind = self.kind(request)
        if kind in self.refused:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        if kind in self.overrides:
            return self.overrides[kind]
        if kind == "points":
            return httpx.Response(200, json=self.points)
        if str(request.url) != FORECAST_URL:
            return httpx.Response(404, json={"title": "Not Found"})
        return httpx.Response(200, json={"properties": {"periods": self.periods}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def make_period() -> Callable[..., Dict[str, Any]]:
    return _period


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def resolver(upstream: StubUpstream) -> ForecastResolver:
    return ForecastResolver(
        base_url=BASE_URL,
        user_agent=USER_AGENT,
        transport=upstream.transport,
        today=lambda: TODAY,
    )


@pytest.fixture
def client(resolver: ForecastResolver):
    from main import app

    app.dependency_overrides[get_forecast_resolver] = lambda: resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: int) -> List[str]:
        return [r.getMessage() for r in self.records if r.levelno == level]


@pytest.fixture
def service_log():
    """Записи логгера сервиса (propagate=False, поэтому caplog их не видит)."""
    handler = RecordingHandler()
    service_logger = logging.getLogger(LOG_NAME)
    service_logger.addHandler(handler)
    yield handler
    service_logger.removeHandler(handler)
