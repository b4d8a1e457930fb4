from ..common.exceptions import IntegrationAPIError


class WeatherServiceError(IntegrationAPIError):
    """
    Failed to fetch or read weather data.

    `message` holds the underlying reason, e.g. the provider's own error
    message. `str()` of the exception also names the query that failed, which
    is what should be shown to users.
    """

    def __init__(self, message: str, *, subject: str = "weather", query: str | None = None) -> None:
        self.message = message
        self.subject = subject
        self.query = query
        super().__init__(message)

    def for_query(self, *, subject: str, query: str) -> "WeatherServiceError":
        self.subject = subject
        self.query = query
        return self

    def __str__(self) -> str:
        if self.query is None:
            return self.message
        return f"Failed to fetch {self.subject} for {self.query}: {self.message}"


class HttpError(WeatherServiceError):
    """The provider responded with a non-success status code."""

    def __init__(
        self,
        status: int,
        message: str | None = None,
        *,
        subject: str = "weather",
        query: str | None = None,
    ) -> None:
        self.status = status
        super().__init__(
            message or f"HTTP error: {status}", subject=subject, query=query
        )


class NetworkError(WeatherServiceError):
    """The request did not complete."""

    pass


class MalformedPayload(WeatherServiceError):
    """The provider's response is missing required fields."""

    pass
