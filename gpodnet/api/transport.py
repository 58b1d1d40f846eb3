"""
HTTP transport for the gpodder.net API.

A thin wrapper around ``httpx.Client`` that adds the product User-Agent,
optional HTTP Basic credentials, and maps every failure to NetworkError.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from gpodnet import __version__

from .exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://gpodder.net"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"gpodnet/{__version__}"

# Either a mapping or (key, value) pairs; pairs allow repeated keys.
QueryParams = Mapping[str, Any] | Sequence[tuple[str, Any]]


def encode_params(params: QueryParams | None) -> list[tuple[str, str]] | None:
    """
    Flatten query parameters into string pairs.

    None values are dropped and booleans become ``true``/``false``.
    """
    if params is None:
        return None

    items = params.items() if isinstance(params, Mapping) else params
    encoded: list[tuple[str, str]] = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded.append((key, str(value)))
    return encoded


class Transport:
    """
    Performs single HTTP requests against the gpodder.net service.

    The underlying ``httpx.Client`` is safe to share between threads, so one
    Transport can back any number of client values.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the transport.

        Args:
            host: Service root URL (e.g., https://gpodder.net)
            timeout: Request timeout in seconds (ignored when http_client is given)
            http_client: Pre-configured httpx client; the caller keeps ownership
        """
        self.host = host.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def url_for(self, path: str) -> str:
        """Build the absolute URL for an endpoint path."""
        return f"{self.host}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        json: Any = None,
        auth: tuple[str, str] | None = None,
    ) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method
            path: Endpoint path relative to the host (e.g., api/2/devices/alice.json)
            params: Query parameters
            json: JSON body (None sends no body)
            auth: (username, password) for HTTP Basic authentication

        Returns:
            Decoded JSON payload, or None for an empty body

        Raises:
            NetworkError: On connection failure, non-2xx status or invalid JSON
        """
        encoded = encode_params(params)
        logger.debug("gpodder API request: %s %s params=%s", method, path, encoded)

        extra: dict[str, Any] = {}
        if auth is not None:
            extra["auth"] = httpx.BasicAuth(*auth)

        try:
            response = self._client.request(
                method,
                self.url_for(path),
                params=encoded,
                json=json,
                headers={"User-Agent": USER_AGENT},
                **extra,
            )
        except httpx.TimeoutException as e:
            logger.debug("gpodder timeout: %s", e)
            raise NetworkError(f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logger.debug("gpodder connection error: %s", e)
            raise NetworkError(f"Failed to reach {self.host}: {e}") from e

        if not response.is_success:
            logger.debug("gpodder API error: %d for %s %s", response.status_code, method, path)
            raise NetworkError(
                f"HTTP {response.status_code} for {method} {path}",
                status_code=response.status_code,
                response=response.text,
            )

        logger.debug("gpodder API response: %d", response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            preview = response.text[:200]
            logger.debug("gpodder returned non-JSON response: %s - %s", e, preview)
            raise NetworkError(
                f"Server returned invalid JSON for {method} {path}: {preview}",
                status_code=response.status_code,
                response=response.text,
            ) from e

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()


class ApiMixin:
    """
    Request hooks every resource family builds on.

    Client classes implement ``_send``; resource mixins only call
    ``_get``, ``_put`` and ``_post``.
    """

    def _send(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> Any:
        raise NotImplementedError

    def _get(self, path: str, params: QueryParams | None = None) -> Any:
        """Make a GET request."""
        return self._send("GET", path, params=params)

    def _put(self, path: str, json: Any) -> Any:
        """Make a PUT request."""
        return self._send("PUT", path, json=json)

    def _post(self, path: str, json: Any, params: QueryParams | None = None) -> Any:
        """Make a POST request."""
        return self._send("POST", path, params=params, json=json)
