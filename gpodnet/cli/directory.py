"""
Directory CLI commands (no account needed).

- tags: Most used tags
- tag: Top podcasts for a tag
- podcast / episode: Look up a single record
- toplist: Most subscribed podcasts
- search: Search podcasts
"""

import typer

from gpodnet.api import Podcast
from gpodnet.cli.common import Icons, api_errors, console, get_public_client, print_json, ui

directory_app = typer.Typer(help="🔍 Public podcast directory commands")

SCALE_LOGO_HELP = "Logo size in pixels (1-256) for scaled_logo_url"


def _podcast_table(title: str, podcasts: list[Podcast]) -> None:
    table = ui.create_table(title=title)
    table.add_column("#", justify="right", style="muted")
    table.add_column("Title", style="title")
    table.add_column("URL", style="url", overflow="fold")
    table.add_column("Subscribers", style="count", justify="right")

    for i, podcast in enumerate(podcasts, 1):
        table.add_row(str(i), podcast.title or "-", podcast.url, str(podcast.subscribers))

    console.print()
    console.print(table)


@directory_app.command("tags")
def directory_tags(
    count: int = typer.Argument(10, help="Number of tags"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the most used tags."""
    with api_errors("Fetching tags"), get_public_client() as client:
        with ui.spinner("Fetching tags..."):
            tags = client.retrieve_top_tags(count)

    if as_json:
        print_json(tags)
        return

    table = ui.create_table(title=f"{Icons.TAG} Top Tags")
    table.add_column("Tag", style="accent")
    table.add_column("Title", style="title")
    table.add_column("Usage", style="count", justify="right")
    for tag in tags:
        table.add_row(tag.tag, tag.title, str(tag.usage))

    console.print()
    console.print(table)


@directory_app.command("tag")
def directory_tag(
    tag: str = typer.Argument(..., help="Tag name"),
    count: int = typer.Argument(10, help="Number of podcasts"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the top podcasts for a tag."""
    with api_errors("Fetching podcasts for tag"), get_public_client() as client:
        with ui.spinner(f"Fetching podcasts tagged '{tag}'..."):
            podcasts = client.retrieve_podcasts_for_tag(tag, count)

    if as_json:
        print_json(podcasts)
        return
    _podcast_table(f"{Icons.TAG} {tag}", podcasts)


@directory_app.command("podcast")
def directory_podcast(
    url: str = typer.Argument(..., help="Feed URL"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show details of a podcast."""
    with api_errors("Looking up podcast"), get_public_client() as client:
        with ui.spinner("Looking up podcast..."):
            podcast = client.retrieve_podcast_data(url)

    if as_json:
        print_json(podcast)
        return

    console.print(
        ui.key_value_table(
            {
                "Title": podcast.title,
                "URL": podcast.url,
                "Website": podcast.website,
                "Subscribers": podcast.subscribers,
                "Last week": podcast.subscribers_last_week,
                "Logo": podcast.logo_url,
                "gpodder.net": podcast.service_internal_link,
            },
            title=f"{Icons.PODCAST} Podcast",
        )
    )
    if podcast.description:
        console.print(f"\n{podcast.description}")


@directory_app.command("episode")
def directory_episode(
    url: str = typer.Argument(..., help="Media URL"),
    podcast: str = typer.Argument(..., help="Feed URL"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show details of an episode."""
    with api_errors("Looking up episode"), get_public_client() as client:
        with ui.spinner("Looking up episode..."):
            episode = client.retrieve_episode_data(url, podcast)

    if as_json:
        print_json(episode)
        return

    console.print(
        ui.key_value_table(
            {
                "Title": episode.title,
                "URL": episode.url,
                "Podcast": episode.podcast_title,
                "Feed": episode.podcast_url,
                "Released": episode.released,
                "Website": episode.website,
                "gpodder.net": episode.service_internal_link,
            },
            title=f"{Icons.EPISODE} Episode",
        )
    )
    if episode.description:
        console.print(f"\n{episode.description}")


@directory_app.command("toplist")
def directory_toplist(
    number: int = typer.Argument(10, help="Number of podcasts"),
    scale_logo: int | None = typer.Option(None, "--scale-logo", help=SCALE_LOGO_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the most subscribed podcasts."""
    with api_errors("Fetching toplist"), get_public_client() as client:
        with ui.spinner("Fetching toplist..."):
            podcasts = client.podcast_toplist(number, scale_logo=scale_logo)

    if as_json:
        print_json(podcasts)
        return
    _podcast_table(f"{Icons.STAR} Toplist", podcasts)


@directory_app.command("search")
def directory_search(
    query: str = typer.Argument(..., help="Search terms"),
    scale_logo: int | None = typer.Option(None, "--scale-logo", help=SCALE_LOGO_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Search podcasts by title, URL and description."""
    with api_errors("Searching"), get_public_client() as client:
        with ui.spinner(f"Searching '{query}'..."):
            podcasts = client.podcast_search(query, scale_logo=scale_logo)

    if as_json:
        print_json(podcasts)
        return

    if not podcasts:
        ui.info(f"No podcasts found for '{query}'")
        return
    _podcast_table(f"{Icons.SEARCH} {query}", podcasts)
