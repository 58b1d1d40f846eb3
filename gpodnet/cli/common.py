"""
Common utilities shared across CLI commands.

This module provides:
- Factory functions for the three API clients
- Device ID resolution
- Error handling and JSON output helpers
- Shared console and UI instances
"""

import json
import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import typer
from pydantic import BaseModel

from gpodnet.api import AuthenticatedClient, DeviceClient, NetworkError, PublicClient
from gpodnet.config import get_settings
from gpodnet.utils.ui import Icons, console, ui

__all__ = [
    "api_errors",
    "DEVICE_OPTION_HELP",
    "console",
    "get_client",
    "get_device_client",
    "get_public_client",
    "Icons",
    "logger",
    "print_json",
    "resolve_device_id",
    "ui",
]

logger = logging.getLogger(__name__)

DEVICE_OPTION_HELP = "Device ID (default: GPODDER_DEVICE_ID from .env)"


def get_public_client() -> PublicClient:
    """Get an anonymous client for the configured host."""
    settings = get_settings()
    return PublicClient(host=settings.gpodder.host, timeout=settings.gpodder.timeout)


def get_client() -> AuthenticatedClient:
    """Get an authenticated client from settings.

    Raises:
        typer.Exit: If username or password is missing
    """
    settings = get_settings()
    if not settings.gpodder.has_credentials:
        ui.error(
            "No gpodder.net credentials configured",
            details="Set GPODDER_USERNAME and GPODDER_PASSWORD in .env or the environment",
        )
        raise typer.Exit(1)

    return AuthenticatedClient(
        settings.gpodder.username,
        settings.gpodder.password,
        host=settings.gpodder.host,
        timeout=settings.gpodder.timeout,
    )


def resolve_device_id(device_id: str | None) -> str:
    """Resolve device ID, using default if not provided.

    Raises:
        typer.Exit: If no device ID available
    """
    if device_id:
        return device_id

    default_id = get_settings().gpodder.device_id
    if default_id:
        return default_id

    console.print("[red]Error:[/red] No device ID provided and GPODDER_DEVICE_ID not set in .env")
    console.print("[dim]Hint: Set GPODDER_DEVICE_ID in .env or pass --device/-d option[/dim]")
    raise typer.Exit(1)


def get_device_client(device_id: str | None) -> DeviceClient:
    """Get a device client for an explicit or configured device ID.

    Raises:
        typer.Exit: If credentials or device ID are missing or the ID is malformed
    """
    resolved = resolve_device_id(device_id)
    client = get_client()
    try:
        return client.for_device(resolved)
    except ValueError as e:
        client.close()
        ui.error("Invalid device ID", details=str(e))
        raise typer.Exit(1) from e


@contextmanager
def api_errors(action: str) -> Generator[None]:
    """Turn API failures into a friendly error and exit status 1."""
    try:
        yield
    except NetworkError as e:
        # Expected errors - show friendly message only, no traceback
        details = str(e)
        if e.status_code == 401:
            details += " (check GPODDER_USERNAME / GPODDER_PASSWORD)"
        ui.error(f"{action} failed", details=details)
        logger.debug("%s failed: %s", action, e)
        raise typer.Exit(1) from e
    except ValueError as e:
        ui.error(f"{action} failed", details=str(e))
        raise typer.Exit(1) from e
    except typer.Exit:
        raise
    except Exception as e:
        # Unexpected errors - log full exception for debugging
        ui.error(f"{action} failed", details=str(e))
        logger.exception("Unexpected error during %s", action)
        raise typer.Exit(1) from e


def print_json(data: Any) -> None:
    """Print models, lists of models or plain data as JSON."""

    def _plain(value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json", by_alias=True, exclude_none=True)
        if isinstance(value, (list, tuple)):
            return [_plain(v) for v in value]
        return value

    console.print_json(json.dumps(_plain(data)))
