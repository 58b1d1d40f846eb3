"""
Episode action CLI commands.

- list: Show the episode action log since a timestamp
- upload: Record one episode action
"""

from enum import Enum

import typer

from gpodnet.api import EpisodeAction
from gpodnet.cli.common import Icons, api_errors, console, get_client, print_json, ui

episodes_app = typer.Typer(help="🎧 Episode action commands")


class ActionKind(str, Enum):
    DOWNLOAD = "download"
    DELETE = "delete"
    PLAY = "play"
    NEW = "new"
    FLATTR = "flattr"


@episodes_app.command("list")
def episodes_list(
    podcast: str | None = typer.Option(None, "--podcast", "-p", help="Only actions for this feed URL"),
    since: int | None = typer.Option(None, "--since", "-s", help="Timestamp from a previous response"),
    aggregated: bool = typer.Option(False, "--aggregated", "-a", help="Only the latest action per episode"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show episode actions uploaded since a timestamp."""
    with api_errors("Fetching episode actions"), get_client() as client:
        with ui.spinner("Fetching episode actions..."):
            response = client.get_episode_actions(podcast=podcast, since=since, aggregated=aggregated)

    if as_json:
        print_json(response)
        return

    table = ui.create_table(title=f"{Icons.EPISODE} Episode Actions ({len(response.actions)})")
    table.add_column("When")
    table.add_column("Action", style="accent")
    table.add_column("Episode", style="url", overflow="fold")
    table.add_column("Device", style="device")
    table.add_column("Position", justify="right")

    for action in response.actions:
        position = ""
        if action.kind == "play":
            position = str(action.action.position)
            if action.action.total is not None:
                position += f"/{action.action.total}"
        table.add_row(ui.timestamp(action.timestamp), action.kind, action.episode, action.device or "-", position)

    console.print()
    console.print(table)
    console.print(f"\n  Next timestamp: [cursor]{response.timestamp}[/cursor]")


@episodes_app.command("upload")
def episodes_upload(
    kind: ActionKind = typer.Argument(..., help="Action type"),
    podcast: str = typer.Argument(..., help="Feed URL"),
    episode: str = typer.Argument(..., help="Media URL"),
    device_id: str | None = typer.Option(None, "--device", "-d", help="Device the action happened on"),
    position: int | None = typer.Option(None, "--position", help="Play: position playback stopped at (s)"),
    started: int | None = typer.Option(None, "--started", help="Play: position playback started at (s)"),
    total: int | None = typer.Option(None, "--total", help="Play: episode length (s)"),
):
    """Upload a single episode action."""
    if kind is ActionKind.PLAY:
        if position is None:
            ui.error("--position is required for play actions")
            raise typer.Exit(1)
        if (started is None) != (total is None):
            ui.error("--started and --total must be given together")
            raise typer.Exit(1)
        if started is None:
            action = EpisodeAction.play_stop(podcast, episode, position, device=device_id)
        else:
            action = EpisodeAction.play(podcast, episode, position, started, total, device=device_id)
    else:
        factory = getattr(EpisodeAction, kind.value)
        action = factory(podcast, episode, device=device_id)

    with api_errors("Uploading episode action"), get_client() as client:
        with ui.spinner("Uploading episode action..."):
            response = client.upload_episode_actions([action])

    ui.success(f"Uploaded {action}", details=f"timestamp {response.timestamp}")
    for old, new in response.update_urls:
        console.print(f"    [muted]{old}[/muted] {Icons.ARROW_RIGHT} [url]{new or 'rejected'}[/url]")
