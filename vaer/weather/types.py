import enum
from dataclasses import dataclass
from datetime import date


class TemperatureUnit(str, enum.Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "C" if self is TemperatureUnit.CELSIUS else "F"


class WindSpeedUnit(str, enum.Enum):
    METERS_PER_SECOND = "m/s"
    KILOMETERS_PER_HOUR = "km/h"
    MILES_PER_HOUR = "mph"


@dataclass(frozen=True, kw_only=True)
class NormalizedWeather:
    """
    Current conditions in the shape the presentation layer expects.

    Temperatures and wind speed are in whatever unit system the provider
    was asked for.
    """

    city: str
    country: str
    temp: str
    feels_like: str
    humidity: int
    description: str
    icon: str
    wind_speed: float
    pressure: float
    # Kilometers
    visibility: float
    sunrise: str
    sunset: str


@dataclass(frozen=True, kw_only=True)
class DaySummary:
    day: date
    label: str
    min_temp: float
    max_temp: float
    description: str
    icon: str
    # Details of the representative step
    humidity: int
    wind_speed: float
    # Probability of precipitation, 0-1
    pop: float
    steps: int


@dataclass(frozen=True, kw_only=True)
class ForecastStats:
    """Aggregates over the first steps of the forecast."""

    steps: int
    avg_humidity: float
    avg_wind_speed: float
    # Highest probability of precipitation, 0-1
    max_pop: float
