from datetime import datetime

import click

from ..integrations.openweather.client import OpenWeatherClient
from ..location.platforms import StaticPlatform
from ..location.types import Platform
from ..settings import Settings, get_settings
from .forecast import forecast_stats, summarize_days
from .normalize import icon_url
from .search import SearchResult, SearchSession
from .types import TemperatureUnit, WindSpeedUnit

temperature_option = click.option(
    "--fahrenheit/--celsius",
    default=None,
    help="Temperature unit to show, defaults to the unit VAER_UNITS asks for",
)
wind_unit_option = click.option(
    "--wind-unit",
    type=click.Choice([unit.value for unit in WindSpeedUnit]),
    default=None,
    help="Wind speed unit to show, defaults to the unit VAER_UNITS asks for",
)


@click.group(name="weather", help="Look up current weather and forecasts")
def cli() -> None:
    pass


@cli.command(help="Current weather and forecast for a city")
@click.argument("city")
@temperature_option
@wind_unit_option
async def search(*, city: str, fahrenheit: bool | None, wind_unit: str | None) -> None:
    settings = get_settings()
    async with OpenWeatherClient(settings) as client:
        session = _session(client, settings, fahrenheit=fahrenheit, wind_unit=wind_unit)
        await session.search_city(city)
        _echo_session(session, settings)


@cli.command(help="Current weather and forecast for the configured position")
@click.option("--latitude", type=float, help="Latitude, overrides VAER_LATITUDE")
@click.option("--longitude", type=float, help="Longitude, overrides VAER_LONGITUDE")
@temperature_option
@wind_unit_option
async def here(
    *,
    latitude: float | None,
    longitude: float | None,
    fahrenheit: bool | None,
    wind_unit: str | None,
) -> None:
    settings = get_settings()

    position = None
    if latitude is not None and longitude is not None:
        position = (latitude, longitude)

    async with OpenWeatherClient(settings) as client:
        session = _session(
            client,
            settings,
            platform=StaticPlatform.from_settings(settings, position=position),
            fahrenheit=fahrenheit,
            wind_unit=wind_unit,
        )
        await session.search_location()
        _echo_session(session, settings)


@cli.command(help="Daily forecast for a city")
@click.argument("city")
@temperature_option
@wind_unit_option
async def forecast(*, city: str, fahrenheit: bool | None, wind_unit: str | None) -> None:
    settings = get_settings()
    async with OpenWeatherClient(settings) as client:
        session = _session(client, settings, fahrenheit=fahrenheit, wind_unit=wind_unit)
        await session.search_city(city)
        _echo_days(session, _result(session))


def _session(
    client: OpenWeatherClient,
    settings: Settings,
    *,
    platform: Platform | None = None,
    fahrenheit: bool | None,
    wind_unit: str | None,
) -> SearchSession:
    session = SearchSession(
        client,
        platform=platform,
        native_unit=settings.temperature_unit,
        native_wind_unit=settings.wind_speed_unit,
    )
    if fahrenheit is not None:
        session.set_unit(
            TemperatureUnit.FAHRENHEIT if fahrenheit else TemperatureUnit.CELSIUS
        )
    if wind_unit is not None:
        session.set_wind_unit(WindSpeedUnit(wind_unit))
    return session


def _result(session: SearchSession) -> SearchResult:
    if session.error or not session.result:
        raise click.ClickException(session.error or "No weather data")
    return session.result


def _echo_session(session: SearchSession, settings: Settings) -> None:
    result = _result(session)
    weather = result.weather
    symbol = session.unit.symbol

    click.echo(f"{weather.city}, {weather.country}")
    click.echo(
        f"  {session.display_temperature(weather.temp)}°{symbol}, {weather.description}"
        f" (feels like {session.display_temperature(weather.feels_like)}°{symbol})"
    )
    click.echo(f"  Humidity: {weather.humidity}%  Pressure: {weather.pressure:g} hPa")
    click.echo(
        f"  Wind: {session.display_wind_speed(weather.wind_speed)} {session.wind_unit.value}"
        f"  Visibility: {weather.visibility:g} km"
    )
    click.echo(f"  Sunrise: {weather.sunrise}  Sunset: {weather.sunset}")
    click.echo(f"  Icon: {icon_url(settings.icon_url, weather.icon)}")
    click.echo()
    _echo_days(session, result)


def _echo_days(session: SearchSession, result: SearchResult) -> None:
    symbol = session.unit.symbol
    wind_unit = session.wind_unit.value

    for day in summarize_days(result.forecast, today=datetime.now().date()):
        click.echo(
            f"{day.label:<10} {day.day:%b %d}  "
            f"{session.display_temperature(day.max_temp)}°{symbol} / "
            f"{session.display_temperature(day.min_temp)}°{symbol}  {day.description}"
            f"  ({day.humidity}%, {session.display_wind_speed(day.wind_speed)} {wind_unit},"
            f" {day.pop * 100:.0f}% rain)"
        )

    if stats := forecast_stats(result.forecast):
        click.echo()
        click.echo(
            f"Next {stats.steps * 3} hours: "
            f"avg humidity {stats.avg_humidity:.0f}%, "
            f"avg wind {session.display_wind_speed(stats.avg_wind_speed)} {wind_unit}, "
            f"max rain {stats.max_pop * 100:.0f}%"
        )
