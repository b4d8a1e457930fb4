from collections.abc import AsyncIterator
from datetime import datetime
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from ..integrations.openweather.client import OpenWeatherClient
from ..integrations.openweather.exceptions import HttpError, WeatherServiceError
from ..location.types import Coordinate
from ..settings import Settings, get_settings
from ..utils import timed
from .forecast import forecast_stats, summarize_days
from .normalize import icon_url
from .search import fetch_conditions
from .types import (
    DaySummary,
    ForecastStats,
    NormalizedWeather,
    TemperatureUnit,
    WindSpeedUnit,
)

logger = structlog.get_logger()

router = APIRouter()


class WeatherPayload(BaseModel):
    weather: NormalizedWeather
    icon_url: str
    days: list[DaySummary]
    stats: ForecastStats | None
    # Units of every temperature and wind speed in the payload
    temperature_unit: TemperatureUnit
    wind_speed_unit: WindSpeedUnit


async def get_weather_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncIterator[OpenWeatherClient]:
    async with OpenWeatherClient(settings) as client:
        yield client


@router.get("/weather", response_model=WeatherPayload)
async def get_weather(
    *,
    city: str | None = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[OpenWeatherClient, Depends(get_weather_client)],
) -> WeatherPayload:
    """
    Current weather and a daily forecast, for either a city or a coordinate.
    """

    if city and city.strip():
        query: str | Coordinate = city.strip()
    elif lat is not None and lon is not None:
        query = Coordinate(lat, lon)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter a city name",
        )

    try:
        weather, forecast = await fetch_conditions(client, query)
    except HttpError as e:
        raise HTTPException(
            status_code=(
                status.HTTP_404_NOT_FOUND
                if e.status == 404
                else status.HTTP_502_BAD_GATEWAY
            ),
            detail=str(e),
        ) from e
    except WeatherServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)
        ) from e

    with timed("Initialize response"):
        return WeatherPayload(
            weather=weather,
            icon_url=icon_url(settings.icon_url, weather.icon, "4x"),
            days=summarize_days(forecast, today=datetime.now().date()),
            stats=forecast_stats(forecast),
            temperature_unit=settings.temperature_unit,
            wind_speed_unit=settings.wind_speed_unit,
        )
