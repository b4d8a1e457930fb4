from datetime import UTC, date
from typing import Any

import pytest

from vaer.integrations.openweather.types import ForecastResponse
from vaer.weather.forecast import (
    day_label,
    forecast_stats,
    group_by_day,
    summarize_days,
)


@pytest.fixture
def forecast(forecast_payload: dict[str, Any]) -> ForecastResponse:
    return ForecastResponse.model_validate(forecast_payload)


def test_group_by_day(forecast: ForecastResponse) -> None:
    days = group_by_day(forecast, tz=UTC)

    assert list(days) == [date(2023, 11, 14), date(2023, 11, 15)]
    assert [entry.main.temp for entry in days[date(2023, 11, 14)]] == [10.0, 8.5]
    assert len(days[date(2023, 11, 15)]) == 7


def test_group_by_day_keeps_every_entry(forecast: ForecastResponse) -> None:
    days = group_by_day(forecast, tz=UTC)
    assert [e for entries in days.values() for e in entries] == forecast.list


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2023, 11, 14), "Today"),
        (date(2023, 11, 15), "Tomorrow"),
        (date(2023, 11, 16), "Thursday"),
        (date(2023, 11, 13), "Monday"),
    ],
)
def test_day_label(day: date, expected: str) -> None:
    assert day_label(day, today=date(2023, 11, 14)) == expected


def test_summarize_days(forecast: ForecastResponse) -> None:
    today, tomorrow = summarize_days(forecast, today=date(2023, 11, 14), tz=UTC)

    assert today.label == "Today"
    assert (today.min_temp, today.max_temp) == (8.5, 10.0)
    assert today.steps == 2

    assert tomorrow.label == "Tomorrow"
    assert (tomorrow.min_temp, tomorrow.max_temp) == (5.5, 12.5)
    assert tomorrow.description == "clear sky"
    assert tomorrow.icon == "01d"


def test_summarize_days_details_from_middle_step(forecast: ForecastResponse) -> None:
    today, tomorrow = summarize_days(forecast, today=date(2023, 11, 14), tz=UTC)

    # Today is 18:00 and 21:00, tomorrow 00:00 to 18:00
    assert (today.humidity, today.wind_speed, today.pop) == (65, 1.5, 0.1)
    assert (tomorrow.humidity, tomorrow.wind_speed, tomorrow.pop) == (85, 3.5, 0.3)


def test_summarize_days_without_pop(forecast_payload: dict[str, Any]) -> None:
    for entry in forecast_payload["list"]:
        del entry["pop"]
    forecast = ForecastResponse.model_validate(forecast_payload)

    summaries = summarize_days(forecast, today=date(2023, 11, 14), tz=UTC)
    assert {s.pop for s in summaries} == {0.0}


def test_summarize_days_limit(forecast: ForecastResponse) -> None:
    summaries = summarize_days(forecast, today=date(2023, 11, 14), tz=UTC, limit=1)
    assert [s.day for s in summaries] == [date(2023, 11, 14)]


def test_forecast_stats(forecast: ForecastResponse) -> None:
    stats = forecast_stats(forecast)

    assert stats is not None
    assert stats.steps == 9
    assert stats.avg_humidity == 80
    assert stats.avg_wind_speed == 3.0
    assert stats.max_pop == 0.8


def test_forecast_stats_first_steps_only(forecast: ForecastResponse) -> None:
    stats = forecast_stats(forecast, steps=3)

    assert stats is not None
    assert stats.steps == 3
    assert stats.avg_humidity == 65
    assert stats.avg_wind_speed == 1.5
    assert stats.max_pop == 0.2


def test_forecast_stats_empty() -> None:
    assert forecast_stats(ForecastResponse(list=[])) is None
