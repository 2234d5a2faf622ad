from .client import WooClient
from .config_types import ClientConfig
from .errors import (
    ApiError,
    AuthError,
    DecodeError,
    PaginationLimitError,
    RequestBuildError,
    RequestFailedError,
    SerializationError,
    WooClientError,
)

__all__ = [
    "WooClient",
    "ClientConfig",
    "WooClientError",
    "ApiError",
    "AuthError",
    "DecodeError",
    "PaginationLimitError",
    "RequestBuildError",
    "RequestFailedError",
    "SerializationError",
]
