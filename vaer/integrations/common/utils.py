"""Common utility functions for integrations."""

import os


def getenv(key: str) -> str:
    """
    Get a required environment variable.

    Raises KeyError if the variable is not set.
    """
    if value := os.getenv(key):
        return value

    raise KeyError(f"Environment variable {key} not set")


def getenv_float(key: str) -> float | None:
    """
    Get an optional environment variable as a float.

    Returns None if the variable is unset or empty, raises ValueError if it
    can't be parsed.
    """
    if value := os.getenv(key):
        return float(value)

    return None
