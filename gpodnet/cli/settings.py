"""
Settings CLI commands.

- get: Show the settings of a scope
- set: Set and/or remove keys of a scope
"""

import typer

from gpodnet.api import AuthenticatedClient, SettingsScope
from gpodnet.cli.common import (
    DEVICE_OPTION_HELP,
    Icons,
    api_errors,
    console,
    get_client,
    print_json,
    resolve_device_id,
    ui,
)

settings_app = typer.Typer(help="⚙️ Account, device, podcast and episode settings")


def _require(value: str | None, option: str, scope: SettingsScope) -> str:
    if not value:
        ui.error(f"{option} is required for {scope.value} settings")
        raise typer.Exit(1)
    return value


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            ui.error(f"Invalid setting '{pair}'", details="Use KEY=VALUE")
            raise typer.Exit(1)
        values[key] = value
    return values


def _get(
    client: AuthenticatedClient,
    scope: SettingsScope,
    podcast: str | None,
    episode: str | None,
    device_id: str | None,
) -> dict[str, str]:
    if scope is SettingsScope.ACCOUNT:
        return client.get_account_settings()
    if scope is SettingsScope.DEVICE:
        return client.for_device(resolve_device_id(device_id)).get_device_settings()
    if scope is SettingsScope.PODCAST:
        return client.get_podcast_settings(_require(podcast, "--podcast", scope))
    return client.get_episode_settings(
        _require(podcast, "--podcast", scope),
        _require(episode, "--episode", scope),
    )


def _save(
    client: AuthenticatedClient,
    scope: SettingsScope,
    set_values: dict[str, str],
    remove_keys: list[str],
    podcast: str | None,
    episode: str | None,
    device_id: str | None,
) -> dict[str, str]:
    if scope is SettingsScope.ACCOUNT:
        return client.save_account_settings(set_values, remove_keys)
    if scope is SettingsScope.DEVICE:
        return client.for_device(resolve_device_id(device_id)).save_device_settings(set_values, remove_keys)
    if scope is SettingsScope.PODCAST:
        return client.save_podcast_settings(set_values, remove_keys, _require(podcast, "--podcast", scope))
    return client.save_episode_settings(
        set_values,
        remove_keys,
        _require(podcast, "--podcast", scope),
        _require(episode, "--episode", scope),
    )


def _show(scope: SettingsScope, values: dict[str, str], as_json: bool) -> None:
    if as_json:
        print_json(values)
        return
    if not values:
        ui.info(f"No {scope.value} settings")
        return
    console.print(ui.key_value_table(values, title=f"{Icons.GEAR} {scope.value.capitalize()} settings"))


@settings_app.command("get")
def settings_get(
    scope: SettingsScope = typer.Argument(..., help="Settings scope"),
    podcast: str | None = typer.Option(None, "--podcast", "-p", help="Feed URL (podcast/episode scope)"),
    episode: str | None = typer.Option(None, "--episode", "-e", help="Media URL (episode scope)"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the settings of a scope."""
    with api_errors("Fetching settings"), get_client() as client:
        values = _get(client, scope, podcast, episode, device_id)
    _show(scope, values, as_json)


@settings_app.command("set")
def settings_set(
    scope: SettingsScope = typer.Argument(..., help="Settings scope"),
    pairs: list[str] | None = typer.Argument(None, help="KEY=VALUE pairs to set"),
    remove: list[str] | None = typer.Option(None, "--remove", "-r", help="Key to remove (repeatable)"),
    podcast: str | None = typer.Option(None, "--podcast", "-p", help="Feed URL (podcast/episode scope)"),
    episode: str | None = typer.Option(None, "--episode", "-e", help="Media URL (episode scope)"),
    device_id: str | None = typer.Option(None, "--device", "-d", help=DEVICE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Set and/or remove settings of a scope."""
    set_values = _parse_pairs(pairs or [])
    remove_keys = remove or []
    if not set_values and not remove_keys:
        ui.warning("Nothing to change", details="Pass KEY=VALUE pairs and/or --remove KEY")
        raise typer.Exit(1)

    with api_errors("Saving settings"), get_client() as client:
        values = _save(client, scope, set_values, remove_keys, podcast, episode, device_id)

    ui.success(f"{scope.value.capitalize()} settings saved")
    _show(scope, values, as_json)
