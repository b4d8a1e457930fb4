from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest

from vaer.integrations.openweather.client import OpenWeatherClient
from vaer.settings import Settings


def pytest_configure(config: pytest.Config) -> None:
    os.environ.setdefault("OPENWEATHER_API_KEY", "foo")


#################
# Configuration #
#################


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="test-key",
        base_url="https://weather.example.com/data/2.5",
        icon_url="https://icons.example.com/img/wn",
    )


############
# Payloads #
############


@pytest.fixture
def london_payload() -> dict[str, Any]:
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [
            {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}
        ],
        "main": {
            "temp": 15.2,
            "feels_like": 14.0,
            "humidity": 80,
            "pressure": 1012,
        },
        "visibility": 9000,
        "wind": {"speed": 3.5, "deg": 240},
        "dt": 1700010000,
        "sys": {"country": "GB", "sunrise": 1700000000, "sunset": 1700030000},
        "timezone": 0,
        "name": "London",
    }


def forecast_entry(
    dt: int,
    temp: float,
    *,
    humidity: int = 70,
    wind_speed: float = 2.0,
    pop: float = 0.1,
    description: str = "clear sky",
) -> dict[str, Any]:
    return {
        "dt": dt,
        "main": {"temp": temp, "feels_like": temp - 1, "humidity": humidity, "pressure": 1010},
        "weather": [{"description": description, "icon": "01d"}],
        "wind": {"speed": wind_speed},
        "visibility": 10000,
        "pop": pop,
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    # 2023-11-14 18:00 UTC onwards, every 3 hours
    start = 1699984800
    temps = [10.0, 8.5, 7.0, 6.0, 5.5, 9.0, 12.5, 11.0, 9.5]
    pops = [0.0, 0.1, 0.2, 0.8, 0.6, 0.3, 0.0, 0.0, 0.1]
    return {
        "list": [
            forecast_entry(
                start + i * 3 * 3600,
                temp,
                humidity=60 + i * 5,
                wind_speed=1.0 + i * 0.5,
                pop=pop,
            )
            for i, (temp, pop) in enumerate(zip(temps, pops))
        ],
        "city": {"name": "London", "country": "GB", "timezone": 0},
    }


############
# Provider #
############


class FakeProvider:
    """
    Stands in for the OpenWeatherMap API, answering by endpoint.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], Any]] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, endpoint: str, status_code: int = 200, **kwargs: Any) -> None:
        self.routes[endpoint] = lambda request: httpx.Response(status_code, **kwargs)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        response = self.routes[endpoint](request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response


@pytest.fixture
def provider(
    london_payload: dict[str, Any], forecast_payload: dict[str, Any]
) -> FakeProvider:
    provider = FakeProvider()
    provider.respond("weather", json=london_payload)
    provider.respond("forecast", json=forecast_payload)
    return provider


@pytest.fixture
async def weather_client(
    settings: Settings, provider: FakeProvider
) -> AsyncIterator[OpenWeatherClient]:
    transport = httpx.MockTransport(provider.handler)
    async with httpx.AsyncClient(transport=transport) as http_client:
        async with OpenWeatherClient(settings, client=http_client) as client:
            yield client
