"""
Directory API.

Public, unauthenticated discovery endpoints: tags, toplist, search and
podcast/episode lookup.
"""

from urllib.parse import quote_plus

from .models import Episode, KeyedModel, Podcast, parse_as
from .transport import ApiMixin

SCALE_LOGO_MIN = 1
SCALE_LOGO_MAX = 256


class Tag(KeyedModel):
    """Directory tag. Identity is ``tag`` alone."""

    title: str = ""
    tag: str
    usage: int = 0

    @property
    def key(self) -> str:
        return self.tag

    def __str__(self) -> str:
        return f"{self.tag}: {self.title}"


def _check_scale_logo(scale_logo: int | None) -> None:
    if scale_logo is not None and not SCALE_LOGO_MIN <= scale_logo <= SCALE_LOGO_MAX:
        raise ValueError(f"scale_logo must be between {SCALE_LOGO_MIN} and {SCALE_LOGO_MAX}, got {scale_logo}")


class DirectoryMixin(ApiMixin):
    """Directory operations available to every client."""

    def retrieve_top_tags(self, count: int) -> list[Tag]:
        """
        Get the most used tags.

        Args:
            count: Maximum number of tags to return

        Returns:
            Up to ``count`` tags
        """
        data = self._get(f"api/2/tags/{count}.json")
        return parse_as(list[Tag], data)

    def retrieve_podcasts_for_tag(self, tag: str, count: int) -> list[Podcast]:
        """
        Get the top podcasts carrying a tag.

        Args:
            tag: Tag name; percent-encoded before it is put into the path
            count: Maximum number of podcasts to return
        """
        data = self._get(f"api/2/tag/{quote_plus(tag)}/{count}.json")
        return parse_as(list[Podcast], data)

    def retrieve_podcast_data(self, url: str) -> Podcast:
        """
        Look up a single podcast by feed URL.

        Raises:
            NetworkError: If the podcast is unknown (HTTP 404) or the call fails
        """
        data = self._get("api/2/data/podcast.json", params=[("url", url)])
        return parse_as(Podcast, data)

    def retrieve_episode_data(self, url: str, podcast: str) -> Episode:
        """
        Look up a single episode by media URL and feed URL.

        Raises:
            NetworkError: If the episode is unknown (HTTP 404) or the call fails
        """
        data = self._get("api/2/data/episode.json", params=[("url", url), ("podcast", podcast)])
        return parse_as(Episode, data)

    def podcast_toplist(self, number: int, scale_logo: int | None = None) -> list[Podcast]:
        """
        Get the most subscribed podcasts.

        Args:
            number: Maximum number of podcasts to return
            scale_logo: Optional logo size (1-256) for ``scaled_logo_url``
        """
        _check_scale_logo(scale_logo)
        data = self._get(f"toplist/{number}.json", params=[("scale_logo", scale_logo)])
        return parse_as(list[Podcast], data)

    def podcast_search(self, q: str, scale_logo: int | None = None) -> list[Podcast]:
        """
        Search podcasts by title, URL and description.

        Args:
            q: Search query
            scale_logo: Optional logo size (1-256) for ``scaled_logo_url``
        """
        _check_scale_logo(scale_logo)
        data = self._get("search.json", params=[("q", q), ("scale_logo", scale_logo)])
        return parse_as(list[Podcast], data)
