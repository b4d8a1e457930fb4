from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ...location.types import Coordinate
from ...settings import Settings
from ...utils import timed
from ..common.client import BaseAPIClient
from .exceptions import HttpError, MalformedPayload, NetworkError, WeatherServiceError
from .types import CurrentWeatherResponse, ForecastResponse

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

# A free-text place name, or a coordinate
Query = str | Coordinate


def describe_query(query: Query) -> str:
    """
    How a query is referred to in error messages.
    """

    if isinstance(query, Coordinate):
        return "coordinates"
    return query


def query_params(query: Query) -> dict[str, str]:
    if isinstance(query, Coordinate):
        return {"lat": str(query.latitude), "lon": str(query.longitude)}
    return {"q": query}


class OpenWeatherClient(BaseAPIClient):
    """
    A client for the OpenWeatherMap current weather and forecast APIs.
    """

    def __init__(
        self, settings: Settings, *, client: httpx.AsyncClient | None = None
    ) -> None:
        super().__init__(client=client)
        self.settings = settings

    async def fetch_weather(self, query: Query) -> CurrentWeatherResponse:
        """
        Get the current conditions for a place or coordinate.
        """
        return await self._fetch(
            self.settings.current_weather_url,
            query,
            response_type=CurrentWeatherResponse,
            subject="weather",
        )

    async def fetch_forecast(self, query: Query) -> ForecastResponse:
        """
        Get the 5 day forecast, in 3 hour steps, for a place or coordinate.
        """
        return await self._fetch(
            self.settings.forecast_url,
            query,
            response_type=ForecastResponse,
            subject="forecast",
        )

    ####################
    # Internal helpers #
    ####################

    async def _fetch(
        self, url: str, query: Query, *, response_type: type[T], subject: str
    ) -> T:
        try:
            with timed("OpenWeatherMap request", url=url, subject=subject):
                response = await self._request(url, query)
            return self._decode(response, response_type)
        except WeatherServiceError as e:
            logger.warning(
                "Failed to fetch from OpenWeatherMap",
                subject=subject,
                query=describe_query(query),
                error=e.message,
            )
            e.for_query(subject=subject, query=describe_query(query))
            raise

    async def _request(self, url: str, query: Query) -> httpx.Response:
        params = {
            **query_params(query),
            "appid": self.settings.api_key,
            "units": self.settings.units,
            "lang": self.settings.lang,
        }

        try:
            response = await self._get_client().get(url, params=params)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise HttpError(response.status_code, _error_message(response))

        return response

    def _decode(self, response: httpx.Response, response_type: type[T]) -> T:
        try:
            return self._decode_json(response, response_type)
        except ValidationError as e:
            raise MalformedPayload(
                f"Unexpected response from provider ({e.error_count()} errors)"
            ) from e


def _error_message(response: httpx.Response) -> str | None:
    """
    Try to get the provider's own error message from an error response.
    """

    try:
        data: Any = response.json()
    except ValueError:
        return None

    if isinstance(data, dict) and isinstance(message := data.get("message"), str):
        return message or None
    return None
