"""
Base API client.

Provides shared functionality for API clients:
- httpx.AsyncClient lifecycle management
- Async context manager support
- Pydantic response decoding helpers
"""

from typing import Any, Self, TypeVar

import httpx
import structlog
from pydantic import BaseModel

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)


class BaseAPIClient:
    """
    Base class for API clients using httpx.

    The underlying httpx client is created lazily, unless one is passed in. A
    client passed in is owned by the caller and is not closed by `close()`.

        async with MyClient() as client:
            data = await client.get_data()
    """

    client: httpx.AsyncClient | None

    def __init__(self, *, client: httpx.AsyncClient | None = None) -> None:
        self.client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if not self.client:
            self.client = httpx.AsyncClient()
            self._owns_client = True
        return self.client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self.client and self._owns_client:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> Self:
        self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # ======================
    # Response decoding
    # ======================

    def _decode_json(
        self, response: httpx.Response, response_type: type[T]
    ) -> T:
        """
        Decode a JSON response into a Pydantic model.

        Uses model_validate_json for efficiency (single parse).
        """
        return response_type.model_validate_json(response.text)
