"""
CLI module for the gpodder.net client.

This module contains subcommands organized by API resource:
- devices: Device registry
- subs: Subscription sync
- episodes: Episode actions
- directory: Public podcast directory
- settings: Key/value settings
"""

from gpodnet.cli.common import (
    console,
    get_client,
    get_device_client,
    get_public_client,
    resolve_device_id,
    ui,
)

__all__ = [
    "console",
    "get_client",
    "get_device_client",
    "get_public_client",
    "resolve_device_id",
    "ui",
]
