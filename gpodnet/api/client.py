"""
gpodder.net API clients.

Three client values with growing capabilities:

- PublicClient: anonymous directory access
- AuthenticatedClient: account-level operations (HTTP Basic credentials)
- DeviceClient: account-level plus operations bound to one device

Each client only inherits the capability mixins it is entitled to, so an
operation that needs credentials or a device ID cannot be called on a
client that lacks them.
"""

import re
from typing import Any

import httpx

from .devices import DeviceDataMixin, ListDevicesMixin
from .directory import DirectoryMixin
from .episodes import EpisodeActionsMixin
from .exceptions import NetworkError
from .favorites import FavoritesMixin
from .settings import DeviceSettingsMixin, SettingsMixin
from .subscriptions import AllSubscriptionsMixin, DeviceSubscriptionsMixin
from .suggestions import SuggestionsMixin
from .transport import DEFAULT_HOST, DEFAULT_TIMEOUT, QueryParams, Transport

DEVICE_ID_PATTERN = re.compile(r"[\w.-]+")

__all__ = [
    "AuthenticatedClient",
    "DeviceClient",
    "NetworkError",
    "PublicClient",
]


class PublicClient(DirectoryMixin):
    """
    Client for the public directory endpoints.

    No credentials are sent.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the public client.

        Args:
            host: Service root URL
            timeout: Request timeout in seconds
            http_client: Pre-configured httpx client (not closed by this client)
        """
        self.transport = Transport(host=host, timeout=timeout, http_client=http_client)

    @property
    def host(self) -> str:
        return self.transport.host

    def _send(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> Any:
        return self.transport.request(method, path, params=params, json=json)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.transport.close()

    def __enter__(self) -> "PublicClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PublicClient(host={self.host!r})"


class AuthenticatedClient(
    DirectoryMixin,
    SuggestionsMixin,
    FavoritesMixin,
    ListDevicesMixin,
    AllSubscriptionsMixin,
    EpisodeActionsMixin,
    SettingsMixin,
):
    """
    Client for a gpodder.net account.

    Every request goes through the wrapped PublicClient's transport with
    HTTP Basic credentials attached.
    """

    def __init__(
        self,
        username: str,
        password: str,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        public_client: PublicClient | None = None,
    ):
        """
        Initialize the authenticated client.

        Args:
            username: Account name
            password: Account password
            host: Service root URL (ignored when public_client is given)
            timeout: Request timeout in seconds (ignored when public_client is given)
            public_client: Existing public client whose connection pool is reused
        """
        self._username = username
        self._password = password
        self.public_client = public_client or PublicClient(host=host, timeout=timeout)

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def host(self) -> str:
        return self.public_client.host

    def _send(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> Any:
        return self.public_client.transport.request(
            method,
            path,
            params=params,
            json=json,
            auth=(self._username, self._password),
        )

    def for_device(self, device_id: str) -> "DeviceClient":
        """Return a DeviceClient for ``device_id`` sharing this client's connection."""
        return DeviceClient.from_authenticated(self, device_id)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.public_client.close()

    def __enter__(self) -> "AuthenticatedClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"AuthenticatedClient(username={self._username!r}, host={self.host!r})"


class DeviceClient(
    DirectoryMixin,
    SuggestionsMixin,
    FavoritesMixin,
    ListDevicesMixin,
    DeviceDataMixin,
    AllSubscriptionsMixin,
    DeviceSubscriptionsMixin,
    EpisodeActionsMixin,
    SettingsMixin,
    DeviceSettingsMixin,
):
    """
    Client for one device of a gpodder.net account.

    Adds device-scoped operations (device data, subscription sync, device
    settings) on top of everything AuthenticatedClient offers. Requests are
    forwarded unchanged to the wrapped AuthenticatedClient.
    """

    def __init__(
        self,
        username: str,
        password: str,
        device_id: str,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        authenticated_client: AuthenticatedClient | None = None,
    ):
        """
        Initialize the device client.

        Args:
            username: Account name
            password: Account password
            device_id: Client-chosen device ID (letters, digits, ``_``, ``.``, ``-``)
            host: Service root URL (ignored when authenticated_client is given)
            timeout: Request timeout in seconds (ignored when authenticated_client is given)
            authenticated_client: Existing client to forward requests to

        Raises:
            ValueError: If device_id contains characters outside ``[\\w.-]``, or
                username/password differ from those of authenticated_client
        """
        if not DEVICE_ID_PATTERN.fullmatch(device_id):
            raise ValueError(f"Invalid device ID {device_id!r}: only letters, digits, '_', '.' and '-' are allowed")
        if authenticated_client is not None and (
            authenticated_client.username != username or authenticated_client.password != password
        ):
            raise ValueError("username and password must match those of authenticated_client")
        self._device_id = device_id
        self.authenticated_client = authenticated_client or AuthenticatedClient(
            username, password, host=host, timeout=timeout
        )

    @classmethod
    def from_authenticated(cls, client: AuthenticatedClient, device_id: str) -> "DeviceClient":
        """Wrap an existing AuthenticatedClient for ``device_id``."""
        return cls(client.username, client.password, device_id, authenticated_client=client)

    @property
    def username(self) -> str:
        return self.authenticated_client.username

    @property
    def password(self) -> str:
        return self.authenticated_client.password

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def host(self) -> str:
        return self.authenticated_client.host

    def _send(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        json: Any = None,
    ) -> Any:
        return self.authenticated_client._send(method, path, params=params, json=json)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.authenticated_client.close()

    def __enter__(self) -> "DeviceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"DeviceClient(username={self.username!r}, device_id={self._device_id!r}, host={self.host!r})"
