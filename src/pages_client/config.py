"""Settings loading and the injected client configuration.

Settings are read from environment variables using python-dotenv, the same
way credentials are loaded for the API. ``ClientConfig`` bundles the base URL
with the transport that page operations use to reach the backend.
"""

import os
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_TIMEOUT = 30.0


class Settings(NamedTuple):
    """Pages API settings."""
    url: str
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def load(cls, url: Optional[str] = None) -> 'Settings':
        """Load settings from the environment (and a .env file if present).

        Required environment variables:
            PAGES_API_URL: Base URL of the pages API (e.g., http://localhost:4000/_api)

        Optional environment variables:
            PAGES_API_TOKEN: Bearer token sent with every request
            PAGES_API_TIMEOUT: Socket timeout in seconds (default 30)

        Args:
            url: Base URL overriding PAGES_API_URL

        Raises:
            ConfigError: If the URL is missing or the timeout is not a number
        """
        load_dotenv()

        url = url or os.getenv('PAGES_API_URL')
        if not url:
            raise ConfigError(
                "PAGES_API_URL is not set (use --url or a .env file)",
                config_field='PAGES_API_URL'
            )
        if not url.startswith(('http://', 'https://')):
            raise ConfigError(
                f"URL must start with http:// or https://, got '{url}'",
                config_field='PAGES_API_URL'
            )

        raw_timeout = os.getenv('PAGES_API_TIMEOUT')
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(
                    f"Expected a number of seconds, got '{raw_timeout}'",
                    config_field='PAGES_API_TIMEOUT'
                )

        return cls(
            url=url.rstrip('/'),
            api_token=os.getenv('PAGES_API_TOKEN') or None,
            timeout=timeout,
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration handed to PageActions at construction.

    Attributes:
        base_url: Base URL of the pages API, used for logging and messages
        transport: Object with get(path), put(path, payload) and delete(path);
                   methods may be plain functions or coroutines
    """
    base_url: str
    transport: Any

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ClientConfig':
        from .api_wrapper import PagesAPI

        return cls(base_url=settings.url, transport=PagesAPI(settings))
