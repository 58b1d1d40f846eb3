"""
gpodder.net API client module.
"""

from .client import AuthenticatedClient, DeviceClient, PublicClient
from .devices import Device, DeviceType
from .directory import Tag
from .episodes import (
    Delete,
    Download,
    EpisodeAction,
    Flattr,
    GetEpisodeActionsResponse,
    New,
    Play,
    UploadEpisodeActionsResponse,
)
from .exceptions import NetworkError
from .logging import LogContext, configure_logging, enable_debug_logging, get_logger, set_level
from .models import Episode, Podcast, UpdateUrlsResponse
from .settings import SettingsScope
from .subscriptions import (
    GetSubscriptionChangesResponse,
    Subscription,
    UploadSubscriptionChangesResponse,
)
from .suggestions import Suggestion
from .transport import DEFAULT_HOST, DEFAULT_TIMEOUT, USER_AGENT

__all__ = [
    # Clients
    "PublicClient",
    "AuthenticatedClient",
    "DeviceClient",
    "DEFAULT_HOST",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
    # Exceptions
    "NetworkError",
    # Models
    "Device",
    "DeviceType",
    "Podcast",
    "Episode",
    "Tag",
    "Subscription",
    "Suggestion",
    "SettingsScope",
    # Episode actions
    "EpisodeAction",
    "Download",
    "Delete",
    "New",
    "Flattr",
    "Play",
    # Response models
    "UpdateUrlsResponse",
    "UploadEpisodeActionsResponse",
    "GetEpisodeActionsResponse",
    "UploadSubscriptionChangesResponse",
    "GetSubscriptionChangesResponse",
    # Logging
    "configure_logging",
    "get_logger",
    "set_level",
    "enable_debug_logging",
    "LogContext",
]
