"""
Projections of the 3-hour forecast list, bucketed by calendar day.
"""

from datetime import UTC, date, datetime, timedelta, tzinfo

from ..integrations.openweather.types import ForecastEntry, ForecastResponse
from .types import DaySummary, ForecastStats

FORECAST_DAYS = 5
# 3 days of 3-hour steps
STATS_STEPS = 24


def local_day(timestamp: int, tz: tzinfo | None = None) -> date:
    return datetime.fromtimestamp(timestamp, tz=UTC).astimezone(tz).date()


def group_by_day(
    forecast: ForecastResponse, *, tz: tzinfo | None = None
) -> dict[date, list[ForecastEntry]]:
    """
    Bucket forecast entries by the local calendar day they fall on. Both the
    days and the entries within a day keep the provider's order.
    """

    days: dict[date, list[ForecastEntry]] = {}
    for entry in forecast.list:
        days.setdefault(local_day(entry.dt, tz), []).append(entry)
    return days


def day_label(day: date, *, today: date) -> str:
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return day.strftime("%A")


def summarize_days(
    forecast: ForecastResponse,
    *,
    today: date,
    tz: tzinfo | None = None,
    limit: int = FORECAST_DAYS,
) -> list[DaySummary]:
    """
    Summarize the first `limit` days of the forecast. The conditions shown
    for a day are taken from the step in the middle of that day.
    """

    summaries = []
    for day, entries in list(group_by_day(forecast, tz=tz).items())[:limit]:
        temps = [entry.main.temp for entry in entries]
        representative = entries[len(entries) // 2]
        condition = representative.weather[0]
        summaries.append(
            DaySummary(
                day=day,
                label=day_label(day, today=today),
                min_temp=min(temps),
                max_temp=max(temps),
                description=condition.description,
                icon=condition.icon,
                humidity=representative.main.humidity,
                wind_speed=representative.wind.speed,
                pop=representative.pop or 0.0,
                steps=len(entries),
            )
        )
    return summaries


def forecast_stats(
    forecast: ForecastResponse, *, steps: int = STATS_STEPS
) -> ForecastStats | None:
    """
    Average humidity and wind speed, and the highest chance of precipitation,
    over the first `steps` entries. None if the forecast is empty.
    """

    entries = forecast.list[:steps]
    if not entries:
        return None

    return ForecastStats(
        steps=len(entries),
        avg_humidity=sum(e.main.humidity for e in entries) / len(entries),
        avg_wind_speed=sum(e.wind.speed for e in entries) / len(entries),
        max_pop=max(e.pop or 0.0 for e in entries),
    )
