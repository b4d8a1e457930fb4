"""
Turn provider payloads into our own representation.

Everything in here is pure: no I/O, no clock reads, no mutation of the input.
"""

from collections.abc import Mapping
from datetime import UTC, datetime, tzinfo
from typing import Any, Literal

from pydantic import ValidationError

from ..integrations.openweather.exceptions import MalformedPayload
from ..integrations.openweather.types import CurrentWeatherResponse
from .types import NormalizedWeather

IconSize = Literal["2x", "4x"]


def format_temperature(value: float) -> str:
    return f"{value:.1f}"


def format_time(timestamp: int, tz: tzinfo | None = None) -> str:
    """
    Format epoch seconds as a local "hh:mm AM" time. Uses the local time
    zone of the process unless another one is given.
    """

    return datetime.fromtimestamp(timestamp, tz=UTC).astimezone(tz).strftime("%I:%M %p")


def normalize_current(
    raw: CurrentWeatherResponse | Mapping[str, Any], *, tz: tzinfo | None = None
) -> NormalizedWeather:
    """
    Normalize a current weather response.

    Raises MalformedPayload if any required field is missing.
    """

    if isinstance(raw, CurrentWeatherResponse):
        data = raw
    else:
        try:
            data = CurrentWeatherResponse.model_validate(raw)
        except ValidationError as e:
            missing = [".".join(map(str, error["loc"])) for error in e.errors()]
            raise MalformedPayload(
                f"Missing or invalid fields: {', '.join(missing)}"
            ) from e

    condition = data.weather[0]

    return NormalizedWeather(
        city=data.name,
        country=data.sys.country,
        temp=format_temperature(data.main.temp),
        feels_like=format_temperature(data.main.feels_like),
        humidity=data.main.humidity,
        description=condition.description,
        icon=condition.icon,
        wind_speed=data.wind.speed,
        pressure=data.main.pressure,
        visibility=data.visibility / 1000,
        sunrise=format_time(data.sys.sunrise, tz),
        sunset=format_time(data.sys.sunset, tz),
    )


def icon_url(base_url: str, icon: str, size: IconSize = "2x") -> str:
    """
    URL of the PNG for a provider icon code. The asset isn't checked.
    """

    if size not in ("2x", "4x"):
        raise ValueError(f"Unsupported icon size: {size}")
    return f"{base_url.rstrip('/')}/{icon}@{size}.png"
