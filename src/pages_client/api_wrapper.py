"""HTTP transport for the pages REST API.

This module wraps a requests Session and provides error translation from
HTTP exceptions and status codes to our typed exception hierarchy. Each
method issues exactly one request; retries are left to the caller.
"""

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from .config import Settings
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
    ResponseDecodeError,
    TransportError,
)

logger = logging.getLogger(__name__)


class PagesAPI:
    """Thin wrapper around a requests Session with error translation.

    This class:
    1. Lazily creates a Session carrying the bearer token (if any)
    2. Joins request paths onto the configured base URL
    3. Translates connection errors and non-2xx responses to typed exceptions
    4. Decodes JSON responses

    Example:
        >>> api = PagesAPI(Settings.load())
        >>> pages = api.get("/pages")
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """Initialize the transport.

        Args:
            settings: Base URL, token and timeout
            session: Optional pre-built Session (mainly for tests)
        """
        self._settings = settings
        self._session = session

    @property
    def base_url(self) -> str:
        return self._settings.url

    def _get_session(self) -> requests.Session:
        """Get or create the requests Session."""
        if self._session is None:
            session = requests.Session()
            session.headers.update({'Accept': 'application/json'})
            if self._settings.api_token:
                session.headers['Authorization'] = f"Bearer {self._settings.api_token}"
            self._session = session
        return self._session

    def _url(self, path: str) -> str:
        # Keep "/" so nested page paths like blog/index.md stay readable
        return f"{self._settings.url}/{quote(path.lstrip('/'), safe='/')}"

    def _sanitize_credentials(self, text: str) -> str:
        """Mask tokens and URL passwords in text before it is logged.

        Example:
            >>> api._sanitize_credentials("Bearer abc123 failed")
            "Bearer ***REDACTED*** failed"
        """
        if not text:
            return text

        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', text)
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        if self._settings.api_token:
            sanitized = sanitized.replace(self._settings.api_token, '***REDACTED***')
        return sanitized

    def _error_from_response(self, response: requests.Response, path: str) -> TransportError:
        """Translate a non-2xx response to a typed exception."""
        status_code = response.status_code
        if status_code in (401, 403):
            return InvalidCredentialsError(endpoint=self._settings.url)
        if status_code == 404:
            return PageNotFoundError(page_id=path.rsplit('/pages/', 1)[-1])

        # Prefer the server's own message when the body carries one
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get('error') or body.get('message')
        if not message:
            message = f"{status_code} {response.reason or 'Error'}"
        return APIAccessError(str(message), status_code=status_code)

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Issue one request and decode its JSON body.

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            APIUnreachableError: On connection errors or timeouts
            InvalidCredentialsError: On 401/403
            PageNotFoundError: On 404
            APIAccessError: On any other non-2xx status
            ResponseDecodeError: If the body is not valid JSON
        """
        url = self._url(path)
        logger.debug(f"{method} {url}")
        try:
            response = self._get_session().request(
                method,
                url,
                json=payload,
                timeout=self._settings.timeout,
            )
        except (Timeout, ConnectionError) as e:
            safe_error_msg = self._sanitize_credentials(str(e))
            logger.error(f"{method} {path} failed: {safe_error_msg}")
            raise APIUnreachableError(
                endpoint=self._settings.url,
                reason=safe_error_msg or type(e).__name__
            ) from e
        except RequestException as e:
            safe_error_msg = self._sanitize_credentials(str(e))
            logger.error(f"{method} {path} failed: {safe_error_msg}")
            raise APIAccessError(f"Request failed during {method} {path}") from e

        if not response.ok:
            error = self._error_from_response(response, path)
            logger.error(f"{method} {path} returned {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(endpoint=url) from e

    def get(self, path: str) -> Any:
        """GET a resource."""
        return self._request('GET', path)

    def put(self, path: str, payload: Dict[str, Any]) -> Any:
        """PUT a JSON payload to a resource."""
        return self._request('PUT', path, payload)

    def delete(self, path: str) -> Any:
        """DELETE a resource."""
        return self._request('DELETE', path)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
