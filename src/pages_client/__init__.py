"""Client library for the pages REST API.

This package provides the requests-based transport, its settings and the
typed exception hierarchy used when talking to the content backend.
"""

from .errors import (
    PagesAdminError,
    ConfigError,
    TransportError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
    APIAccessError,
    ResponseDecodeError,
)
from .config import Settings, ClientConfig
from .api_wrapper import PagesAPI

__all__ = [
    "PagesAdminError",
    "ConfigError",
    "TransportError",
    "APIUnreachableError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "APIAccessError",
    "ResponseDecodeError",
    "Settings",
    "ClientConfig",
    "PagesAPI",
]
