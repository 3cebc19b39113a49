"""Typed exception hierarchy for pages API errors.

This module defines all custom exceptions used by the pages client library.
Every HTTP-level failure inherits from TransportError, which always carries a
plain ``message`` string so callers can report it without inspecting the
original error shape.
"""

from typing import Optional


class PagesAdminError(Exception):
    """Base exception for all pages-admin errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ConfigError(PagesAdminError):
    """Raised when client settings are missing or invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class TransportError(PagesAdminError):
    """Base exception for failures surfaced by the HTTP transport."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class APIUnreachableError(TransportError):
    """Raised when the pages API cannot be reached (connection, timeout)."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class InvalidCredentialsError(TransportError):
    """Raised when the API rejects the configured token."""

    def __init__(self, endpoint: str):
        super().__init__(f"Access denied by {endpoint}")
        self.endpoint = endpoint


class PageNotFoundError(TransportError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class APIAccessError(TransportError):
    """Raised for any other non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseDecodeError(TransportError):
    """Raised when a response body is not valid JSON."""

    def __init__(self, endpoint: str):
        super().__init__(f"Invalid JSON response from {endpoint}")
        self.endpoint = endpoint
