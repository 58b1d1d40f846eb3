#!/usr/bin/env python3
"""
CLI for the gpodder.net synchronization client.

Features rich console output with spinners, styled tables and visual
feedback.

This is the main entry point that assembles all subcommands from
the gpodnet/cli/ modules.
"""

import logging

import typer

from gpodnet import __version__
from gpodnet.api import NetworkError
from gpodnet.api.logging import configure_logging
from gpodnet.cli.common import Icons, api_errors, console, get_client, print_json, ui
from gpodnet.cli.devices import devices_app
from gpodnet.cli.directory import directory_app
from gpodnet.cli.episodes import episodes_app
from gpodnet.cli.settings import settings_app
from gpodnet.cli.subscriptions import subs_app
from gpodnet.config import get_settings

# Create main app
app = typer.Typer(
    name="gpodnet",
    help="🎙️ gpodder.net podcast synchronization client",
    rich_markup_mode="rich",
)

# Register sub-apps
app.add_typer(devices_app, name="devices")
app.add_typer(subs_app, name="subs")
app.add_typer(episodes_app, name="episodes")
app.add_typer(directory_app, name="directory")
app.add_typer(settings_app, name="settings")

logger = logging.getLogger(__name__)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Log every API request"),
):
    """gpodder.net podcast synchronization client."""
    settings = get_settings()
    if debug or settings.debug:
        level = "debug"
    elif settings.verbose:
        level = "warning"
    else:
        level = "error"
    configure_logging(level=level, file_path=settings.log_file, rich_tracebacks=False)


@app.command()
def status():
    """Show configured account and check the credentials."""
    settings = get_settings()

    ui.header("gpodder.net", subtitle=f"gpodnet {__version__}", icon=Icons.PODCAST)

    ui.section("Account", icon=Icons.USER)
    console.print(f"  {Icons.SERVER} Server: [accent]{settings.gpodder.host}[/accent]")
    console.print(f"  {Icons.USER} User: [accent]{settings.gpodder.username or '-'}[/accent]")
    console.print(f"  {Icons.DEVICE} Device: [accent]{settings.gpodder.device_id or '-'}[/accent]")

    if not settings.gpodder.has_credentials:
        ui.warning("Not configured", details="Set GPODDER_USERNAME and GPODDER_PASSWORD")
        raise typer.Exit(1)

    try:
        with ui.spinner("Checking credentials..."), get_client() as client:
            devices = client.list_devices()
    except NetworkError as e:
        # Expected errors - show friendly message only, no traceback
        console.print(ui.connection_status(False, settings.gpodder.host))
        ui.error("Connection failed", details=str(e))
        logger.debug("Status check failed: %s", e)
        raise typer.Exit(1) from e

    console.print(ui.connection_status(True, settings.gpodder.host))
    ui.success(f"Authenticated as [bold]{settings.gpodder.username}[/bold]")
    ui.success(f"{len(devices)} devices registered")

    device_id = settings.gpodder.device_id
    if device_id and not any(device.id == device_id for device in devices):
        ui.info(f"Device [device]{device_id}[/device] will be created on first use")

    console.print()


@app.command()
def suggestions(
    count: int = typer.Argument(10, help="Maximum number of suggestions"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show podcasts suggested for the account."""
    with api_errors("Fetching suggestions"), get_client() as client:
        with ui.spinner("Fetching suggestions..."):
            suggested = client.retrieve_suggested_podcasts(count)

    if as_json:
        print_json(suggested)
        return

    if not suggested:
        ui.info("No suggestions yet", details="Subscribe to a few podcasts first")
        return

    table = ui.create_table(title=f"{Icons.STAR} Suggestions")
    table.add_column("Title", style="title")
    table.add_column("URL", style="url", overflow="fold")
    table.add_column("Subscribers", style="count", justify="right")
    for podcast in suggested:
        table.add_row(podcast.title or "-", podcast.url, str(podcast.subscribers))

    console.print()
    console.print(table)


@app.command()
def favorites(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the account's favorite episodes."""
    with api_errors("Fetching favorites"), get_client() as client:
        with ui.spinner("Fetching favorites..."):
            episodes = client.get_favorite_episodes()

    if as_json:
        print_json(episodes)
        return

    if not episodes:
        ui.info("No favorite episodes")
        return

    table = ui.create_table(title=f"{Icons.EPISODE} Favorites")
    table.add_column("Episode", style="title")
    table.add_column("Podcast")
    table.add_column("Released")
    for episode in episodes:
        table.add_row(
            episode.title or episode.url,
            episode.podcast_title or episode.podcast_url,
            ui.timestamp(episode.released),
        )

    console.print()
    console.print(table)


if __name__ == "__main__":
    app()
