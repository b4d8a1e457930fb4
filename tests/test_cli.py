from collections.abc import Iterator
from typing import Any

import pytest
from click.testing import CliRunner
from pytest_mock import MockerFixture

from vaer.cli import cli
from vaer.integrations.openweather.client import OpenWeatherClient
from vaer.integrations.openweather.exceptions import HttpError
from vaer.integrations.openweather.types import (
    CurrentWeatherResponse,
    ForecastResponse,
)
from vaer.location.types import Coordinate
from vaer.settings import get_settings


@pytest.fixture
def provider_responses(
    mocker: MockerFixture,
    london_payload: dict[str, Any],
    forecast_payload: dict[str, Any],
) -> tuple[Any, Any]:
    fetch_weather = mocker.patch.object(
        OpenWeatherClient,
        "fetch_weather",
        return_value=CurrentWeatherResponse.model_validate(london_payload),
    )
    fetch_forecast = mocker.patch.object(
        OpenWeatherClient,
        "fetch_forecast",
        return_value=ForecastResponse.model_validate(forecast_payload),
    )
    return fetch_weather, fetch_forecast


def test_search(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "search", "London"])

    assert result.exit_code == 0, result.output
    assert "London, GB" in result.output
    assert "15.2°C, light rain" in result.output
    assert "Humidity: 80%" in result.output

    fetch_weather, fetch_forecast = provider_responses
    fetch_weather.assert_called_once_with("London")
    fetch_forecast.assert_called_once_with("London")


def test_search_fahrenheit(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "search", "London", "--fahrenheit"])

    assert result.exit_code == 0, result.output
    assert "59.4°F" in result.output


def test_search_failure(mocker: MockerFixture) -> None:
    mocker.patch.object(
        OpenWeatherClient,
        "fetch_weather",
        side_effect=HttpError(404, "city not found", query="Atlantis"),
    )
    mocker.patch.object(OpenWeatherClient, "fetch_forecast")

    result = CliRunner().invoke(cli, ["weather", "search", "Atlantis"])

    assert result.exit_code == 1
    assert "Failed to fetch weather for Atlantis: city not found" in result.output


def test_here(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(
        cli, ["weather", "here", "--latitude", "51.5085", "--longitude", "-0.1257"]
    )

    assert result.exit_code == 0, result.output
    fetch_weather, _ = provider_responses
    fetch_weather.assert_called_once_with(Coordinate(51.5085, -0.1257))


def test_here_without_position(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "here"])

    assert result.exit_code == 1
    assert "Location information is unavailable" in result.output


def test_forecast(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "forecast", "London"])

    assert result.exit_code == 0, result.output
    assert result.output.count("clear sky") >= 2


def test_forecast_details_and_stats(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "forecast", "London"])

    assert result.exit_code == 0, result.output
    assert "% rain)" in result.output
    assert "Next 27 hours: avg humidity 80%, avg wind 3.0 m/s, max rain 80%" in result.output


def test_wind_unit(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(
        cli, ["weather", "search", "London", "--wind-unit", "km/h"]
    )

    assert result.exit_code == 0, result.output
    assert "Wind: 12.6 km/h" in result.output


@pytest.fixture
def imperial(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("VAER_UNITS", "imperial")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.usefixtures("imperial")
def test_search_imperial(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "search", "London"])

    assert result.exit_code == 0, result.output
    assert "15.2°F, light rain" in result.output
    assert "Wind: 3.5 mph" in result.output


@pytest.mark.usefixtures("imperial")
def test_search_imperial_fahrenheit_is_not_converted_twice(
    provider_responses: tuple[Any, Any],
) -> None:
    result = CliRunner().invoke(cli, ["weather", "search", "London", "--fahrenheit"])

    assert result.exit_code == 0, result.output
    assert "15.2°F" in result.output


@pytest.mark.usefixtures("imperial")
def test_search_imperial_celsius(provider_responses: tuple[Any, Any]) -> None:
    result = CliRunner().invoke(cli, ["weather", "search", "London", "--celsius"])

    assert result.exit_code == 0, result.output
    assert "-9.3°C" in result.output
