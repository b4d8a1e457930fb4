"""Common utilities for integrations."""

from .client import BaseAPIClient
from .exceptions import IntegrationAPIError
from .utils import getenv, getenv_float

__all__ = [
    "BaseAPIClient",
    "IntegrationAPIError",
    "getenv",
    "getenv_float",
]
