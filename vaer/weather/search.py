"""
Weather searches, as driven by a user.

A search is the boundary where failures stop: whatever goes wrong while
resolving the location or fetching weather ends up as one message on the
session, and never propagates to the caller. Searches may overlap, in which
case only the most recently started one is applied.
"""

import asyncio
from dataclasses import dataclass
from datetime import timedelta, tzinfo

import structlog

from ..integrations.openweather.client import OpenWeatherClient, Query
from ..integrations.openweather.exceptions import WeatherServiceError
from ..integrations.openweather.types import ForecastResponse
from ..location.exceptions import LocationError, Unsupported
from ..location.resolver import (
    DEFAULT_OUTER_TIMEOUT,
    DEFAULT_PROMPT_FALLBACK_DELAY,
    describe_platform,
    resolve_location,
)
from ..location.types import Coordinate, Platform
from .normalize import normalize_current
from .types import NormalizedWeather, TemperatureUnit, WindSpeedUnit
from .units import convert_temperature, convert_wind_speed

logger = structlog.get_logger()


@dataclass(frozen=True, kw_only=True)
class SearchResult:
    weather: NormalizedWeather
    forecast: ForecastResponse
    coordinate: Coordinate | None = None


async def fetch_conditions(
    client: OpenWeatherClient, query: Query, *, tz: tzinfo | None = None
) -> tuple[NormalizedWeather, ForecastResponse]:
    """
    Fetch current weather and forecast concurrently. Fails if either fails.
    """

    raw_weather, forecast = await asyncio.gather(
        client.fetch_weather(query), client.fetch_forecast(query)
    )
    return normalize_current(raw_weather, tz=tz), forecast


class SearchSession:
    """
    The state of one user's weather lookups.

    `result`, `error` and `notice` are written once per search, when it
    completes, and only if no newer search has been started in the meantime.
    """

    def __init__(
        self,
        client: OpenWeatherClient,
        *,
        platform: Platform | None = None,
        tz: tzinfo | None = None,
        native_unit: TemperatureUnit = TemperatureUnit.CELSIUS,
        native_wind_unit: WindSpeedUnit = WindSpeedUnit.METERS_PER_SECOND,
        outer_timeout: timedelta = DEFAULT_OUTER_TIMEOUT,
        prompt_fallback_delay: timedelta = DEFAULT_PROMPT_FALLBACK_DELAY,
    ) -> None:
        self.client = client
        self.platform = platform
        self.tz = tz
        self.native_unit = native_unit
        self.native_wind_unit = native_wind_unit
        self.outer_timeout = outer_timeout
        self.prompt_fallback_delay = prompt_fallback_delay

        self.result: SearchResult | None = None
        self.error: str | None = None
        self.notice: str | None = None
        self.is_loading = False
        self.unit = native_unit
        self.wind_unit = native_wind_unit
        self._generation = 0

    ############
    # Searches #
    ############

    async def search_city(self, city: str) -> bool:
        """
        Look up the weather for a city. Returns True if the outcome was
        applied to the session.
        """

        city = city.strip()
        if not city:
            self.error = "Please enter a city name"
            return False

        generation = self._begin()
        try:
            weather, forecast = await fetch_conditions(self.client, city, tz=self.tz)
        except Exception as e:
            return self._fail(generation, e, fallback="Failed to fetch weather data")

        return self._succeed(
            generation,
            SearchResult(weather=weather, forecast=forecast),
            notice=f"Weather data loaded for {city}",
        )

    async def search_location(self) -> bool:
        """
        Look up the weather for wherever the platform says we are.
        """

        generation = self._begin()
        try:
            if self.platform is None:
                raise Unsupported()

            describe_platform(self.platform)
            coordinate = await resolve_location(
                self.platform,
                outer_timeout=self.outer_timeout,
                prompt_fallback_delay=self.prompt_fallback_delay,
            )
            weather, forecast = await fetch_conditions(
                self.client, coordinate, tz=self.tz
            )
        except Exception as e:
            return self._fail(
                generation,
                e,
                fallback="Failed to get location or fetch weather data",
            )

        return self._succeed(
            generation,
            SearchResult(weather=weather, forecast=forecast, coordinate=coordinate),
            notice="Weather data loaded for your location",
        )

    async def retry(self) -> bool:
        """
        Search again for the city of the last successful search. Does
        nothing if we don't know of any city.
        """

        if self.result is None or not self.result.weather.city:
            logger.info("Nothing to retry")
            return False
        return await self.search_city(self.result.weather.city)

    ###########
    # Display #
    ###########

    def clear_error(self) -> None:
        self.error = None

    def set_unit(self, unit: TemperatureUnit) -> None:
        self.unit = unit

    def display_temperature(self, value: str | float) -> str:
        return convert_temperature(value, self.unit, native=self.native_unit)

    def set_wind_unit(self, unit: WindSpeedUnit) -> None:
        self.wind_unit = unit

    def display_wind_speed(self, speed: float) -> str:
        return convert_wind_speed(speed, self.wind_unit, native=self.native_wind_unit)

    ####################
    # Internal helpers #
    ####################

    def _begin(self) -> int:
        self._generation += 1
        self.is_loading = True
        self.error = None
        return self._generation

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(
                "Discarding outcome of superseded search",
                generation=generation,
                latest=self._generation,
            )
            return False
        return True

    def _succeed(self, generation: int, result: SearchResult, *, notice: str) -> bool:
        if not self._is_current(generation):
            return False

        self.result = result
        self.error = None
        self.notice = notice
        self.is_loading = False
        logger.info(notice, city=result.weather.city)
        return True

    def _fail(self, generation: int, exc: Exception, *, fallback: str) -> bool:
        if isinstance(exc, (LocationError, WeatherServiceError)):
            message = str(exc)
            logger.info("Search failed", error=message, kind=type(exc).__name__)
        else:
            message = fallback
            logger.exception("Search failed unexpectedly")

        if not self._is_current(generation):
            return False

        self.error = message
        self.notice = None
        self.is_loading = False
        return True
