"""
Subscription CLI commands.

- all: Subscriptions of the whole account
- device: Feed URLs of one device
- push: Replace a device's subscription list
- add / remove: Upload a subscription delta
- changes: Show the delta since a cursor
"""

import typer

from gpodnet.cli.common import (
    DEVICE_OPTION_HELP,
    Icons,
    api_errors,
    console,
    get_client,
    get_device_client,
    print_json,
    ui,
)

subs_app = typer.Typer(help="🎙️ Subscription sync commands")


def _print_rewrites(update_urls: list[tuple[str, str]]) -> None:
    for old, new in update_urls:
        if new:
            console.print(f"    [muted]{old}[/muted] {Icons.ARROW_RIGHT} [url]{new}[/url]")
        else:
            console.print(f"    [muted]{old}[/muted] {Icons.ARROW_RIGHT} [error]rejected[/error]")


@subs_app.command("all")
def subs_all(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """List subscriptions across all devices."""
    with api_errors("Fetching subscriptions"), get_client() as client:
        with ui.spinner("Fetching subscriptions..."):
            subscriptions = client.get_all_subscriptions()

    if as_json:
        print_json(subscriptions)
        return

    table = ui.create_table(title=f"{Icons.PODCAST} Subscriptions ({len(subscriptions)})")
    table.add_column("Title", style="title")
    table.add_column("URL", style="url", overflow="fold")
    table.add_column("Subscribers", style="count", justify="right")

    for sub in subscriptions:
        table.add_row(sub.title or "-", sub.url, str(sub.subscribers))

    console.print()
    console.print(table)


@subs_app.command("device")
def subs_device(
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """List the feed URLs a device is subscribed to."""
    with api_errors("Fetching device subscriptions"), get_device_client(device_id) as client:
        with ui.spinner(f"Fetching subscriptions of {client.device_id}..."):
            urls = client.get_subscriptions_of_device()

    if as_json:
        print_json(urls)
        return

    ui.section(f"{client.device_id} ({len(urls)})", icon=Icons.DEVICE)
    for url in urls:
        console.print(f"  {Icons.BULLET} [url]{url}[/url]")


@subs_app.command("push")
def subs_push(
    urls: list[str] = typer.Argument(..., help="Complete list of feed URLs"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
):
    """Replace a device's subscription list with URLS."""
    with api_errors("Uploading subscriptions"), get_device_client(device_id) as client:
        with ui.spinner(f"Uploading {len(urls)} subscriptions..."):
            client.upload_subscriptions_of_device(urls)

    ui.success(f"{len(urls)} subscriptions stored for [device]{client.device_id}[/device]")


def _upload_changes(device_id: str | None, add: list[str], remove: list[str]) -> None:
    with api_errors("Uploading subscription changes"), get_device_client(device_id) as client:
        with ui.spinner("Uploading subscription changes..."):
            response = client.upload_subscription_changes(add=add, remove=remove)

    ui.success(
        f"Changes stored for [device]{client.device_id}[/device]",
        details=f"timestamp {response.timestamp}",
    )
    _print_rewrites(response.update_urls)


@subs_app.command("add")
def subs_add(
    urls: list[str] = typer.Argument(..., help="Feed URLs to subscribe to"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
):
    """Subscribe a device to URLS."""
    _upload_changes(device_id, add=urls, remove=[])


@subs_app.command("remove")
def subs_remove(
    urls: list[str] = typer.Argument(..., help="Feed URLs to unsubscribe from"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
):
    """Unsubscribe a device from URLS."""
    _upload_changes(device_id, add=[], remove=urls)


@subs_app.command("changes")
def subs_changes(
    since: int | None = typer.Option(None, "--since", "-s", help="Timestamp from a previous response"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show subscription changes of a device since a timestamp."""
    with api_errors("Fetching subscription changes"), get_device_client(device_id) as client:
        with ui.spinner("Fetching subscription changes..."):
            changes = client.get_subscription_changes(since=since)

    if as_json:
        print_json(changes)
        return

    for url in changes.add:
        console.print(f"  [success]{Icons.PLUS}[/success] [url]{url}[/url]")
    for url in changes.remove:
        console.print(f"  [error]{Icons.MINUS}[/error] [url]{url}[/url]")
    if not changes.add and not changes.remove:
        ui.info("No changes")
    console.print(f"\n  Next timestamp: [cursor]{changes.timestamp}[/cursor]")
