"""
Unit conversion for display.

Normalized weather always holds the provider's units. These helpers are
applied when rendering, and never write back to the stored data.
"""

from .types import TemperatureUnit, WindSpeedUnit

# Relative to meters per second
WIND_SPEED_FACTORS: dict[WindSpeedUnit, float] = {
    WindSpeedUnit.METERS_PER_SECOND: 1.0,
    WindSpeedUnit.KILOMETERS_PER_HOUR: 3.6,
    WindSpeedUnit.MILES_PER_HOUR: 2.237,
}


def to_fahrenheit(celsius: str | float) -> str:
    return f"{float(celsius) * 9 / 5 + 32:.1f}"


def to_celsius(fahrenheit: str | float) -> str:
    return f"{(float(fahrenheit) - 32) * 5 / 9:.1f}"


def convert_temperature(
    value: str | float,
    unit: TemperatureUnit,
    *,
    native: TemperatureUnit = TemperatureUnit.CELSIUS,
) -> str:
    """
    Convert a temperature in the `native` unit (what the provider returned)
    to `unit`, formatted to one decimal.
    """

    if unit is native:
        return f"{float(value):.1f}"
    if unit is TemperatureUnit.FAHRENHEIT:
        return to_fahrenheit(value)
    return to_celsius(value)


def convert_wind_speed(
    speed: float,
    unit: WindSpeedUnit,
    *,
    native: WindSpeedUnit = WindSpeedUnit.METERS_PER_SECOND,
) -> str:
    if unit is native:
        return f"{speed:.1f}"
    meters_per_second = speed / WIND_SPEED_FACTORS[native]
    return f"{meters_per_second * WIND_SPEED_FACTORS[unit]:.1f}"
