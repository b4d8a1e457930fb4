"""
Application configuration.

Settings are read from the environment once, at startup, and passed
explicitly to the components that need them.
"""

import os
from dataclasses import dataclass
from functools import cache

import structlog

from .integrations.common import getenv, getenv_float
from .weather.types import TemperatureUnit, WindSpeedUnit

logger = structlog.get_logger()

# Unit systems the provider can be asked for, and what they return
UNIT_SYSTEMS: dict[str, tuple[TemperatureUnit, WindSpeedUnit]] = {
    "metric": (TemperatureUnit.CELSIUS, WindSpeedUnit.METERS_PER_SECOND),
    "imperial": (TemperatureUnit.FAHRENHEIT, WindSpeedUnit.MILES_PER_HOUR),
}

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_ICON_URL = "https://openweathermap.org/img/wn"
DEFAULT_APP_URL = "http://localhost:3000"


@dataclass(frozen=True, kw_only=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    icon_url: str = DEFAULT_ICON_URL
    units: str = "metric"
    lang: str = "en"
    app_url: str = DEFAULT_APP_URL
    latitude: float | None = None
    longitude: float | None = None

    @property
    def current_weather_url(self) -> str:
        return f"{self.base_url}/weather"

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/forecast"

    def __post_init__(self) -> None:
        if self.units not in UNIT_SYSTEMS:
            raise ValueError(
                f"Unsupported unit system: {self.units!r}, "
                f"expected one of {', '.join(UNIT_SYSTEMS)}"
            )

    @property
    def temperature_unit(self) -> TemperatureUnit:
        return UNIT_SYSTEMS[self.units][0]

    @property
    def wind_speed_unit(self) -> WindSpeedUnit:
        return UNIT_SYSTEMS[self.units][1]

    @property
    def static_position(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Raises KeyError if OPENWEATHER_API_KEY is not set, and ValueError if
        VAER_UNITS is not a supported unit system.
        """
        return cls(
            api_key=getenv("OPENWEATHER_API_KEY"),
            base_url=os.getenv("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            icon_url=os.getenv("OPENWEATHER_ICON_URL", DEFAULT_ICON_URL).rstrip("/"),
            units=os.getenv("VAER_UNITS", "metric"),
            lang=os.getenv("VAER_LANG", "en"),
            app_url=os.getenv("VAER_APP_URL", DEFAULT_APP_URL),
            latitude=getenv_float("VAER_LATITUDE"),
            longitude=getenv_float("VAER_LONGITUDE"),
        )


@cache
def get_settings() -> Settings:
    """
    Process-wide settings, loaded on first use.
    """

    try:
        return Settings.from_env()
    except KeyError:
        logger.warning(
            "Missing environment variables, check your environment",
            missing=["OPENWEATHER_API_KEY"],
        )
        raise
