"""
Device CLI commands.

- list: List the devices of the account
- update: Set caption and/or type of a device (creates it if needed)
"""

import typer

from gpodnet.api import DeviceType
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

devices_app = typer.Typer(help="📱 Device registry commands")


@devices_app.command("list")
def devices_list(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """List all devices of the account."""
    with api_errors("Listing devices"), get_client() as client:
        with ui.spinner("Fetching devices..."):
            devices = client.list_devices()

    if as_json:
        print_json(devices)
        return

    if not devices:
        ui.info("No devices registered yet")
        return

    table = ui.create_table(title=f"{Icons.DEVICE} Devices")
    table.add_column("ID", style="device", no_wrap=True)
    table.add_column("Caption", style="title")
    table.add_column("Type")
    table.add_column("Subscriptions", style="count", justify="right")

    for device in sorted(devices):
        table.add_row(device.id, device.caption, str(device.device_type), str(device.subscriptions))

    console.print()
    console.print(table)


@devices_app.command("update")
def devices_update(
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
    caption: str | None = typer.Option(None, "--caption", "-c", help="New caption"),
    device_type: DeviceType | None = typer.Option(None, "--type", "-t", help="New device type"),
):
    """Update caption and/or type of a device."""
    if caption is None and device_type is None:
        ui.warning("Nothing to update", details="Pass --caption and/or --type")
        raise typer.Exit(1)

    with api_errors("Updating device"), get_device_client(device_id) as client:
        with ui.spinner(f"Updating {client.device_id}..."):
            client.update_device_data(caption=caption, device_type=device_type)

    ui.success(f"Device [device]{client.device_id}[/device] updated")
