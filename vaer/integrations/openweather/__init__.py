"""OpenWeatherMap integration."""

from .client import OpenWeatherClient, Query, describe_query
from .exceptions import HttpError, MalformedPayload, NetworkError, WeatherServiceError
from .types import CurrentWeatherResponse, ForecastEntry, ForecastResponse

__all__ = [
    "CurrentWeatherResponse",
    "ForecastEntry",
    "ForecastResponse",
    "HttpError",
    "MalformedPayload",
    "NetworkError",
    "OpenWeatherClient",
    "Query",
    "WeatherServiceError",
    "describe_query",
]
