from __future__ import annotations


class WooClientError(Exception):
    """Base client error."""


class RequestBuildError(WooClientError):
    """Request could not be constructed (bad URL, bad method)."""


class SerializationError(WooClientError):
    """Request payload could not be encoded as JSON."""


class RequestFailedError(WooClientError):
    """Transport gave up: network failure or retries exhausted."""

    def __init__(
            self,
            message: str,
            *,
            attempts: int = 1,
            status_code: int | None = None,
            body: str | None = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.status_code = status_code
        self.body = body


class ApiError(WooClientError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"API request failed with status code {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class AuthError(ApiError):
    """Auth-related API error."""


class DecodeError(WooClientError):
    """Response body does not have the expected shape."""


class PaginationLimitError(WooClientError):
    def __init__(self, endpoint: str, max_pages: int):
        super().__init__(f"{endpoint}: still receiving results after {max_pages} page(s)")
        self.endpoint = endpoint
        self.max_pages = max_pages
