"""
Pydantic models shared across gpodder.net API resources.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .exceptions import NetworkError


def parse_as(type_: Any, data: Any) -> Any:
    """
    Validate a decoded JSON payload against a model or type.

    Raises:
        NetworkError: If the payload does not have the expected shape
    """
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as e:
        raise NetworkError(f"Unexpected response payload: {e.error_count()} validation error(s)") from e


class KeyedModel(BaseModel):
    """
    Immutable value object identified by a single key.

    Equality, ordering and hashing only look at ``key``, so a stale copy
    of a record can be found or replaced by its key alone.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def key(self) -> str:
        raise NotImplementedError

    def _comparable(self, other: object) -> bool:
        return isinstance(other, KeyedModel) and (isinstance(other, type(self)) or isinstance(self, type(other)))

    def __eq__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.key == other.key  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.key < other.key  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.key <= other.key  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.key > other.key  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.key >= other.key  # type: ignore[attr-defined]


class Podcast(KeyedModel):
    """Podcast as listed by the directory, toplist and search."""

    url: str
    title: str = ""
    description: str = ""
    subscribers: int = 0
    subscribers_last_week: int = 0
    logo_url: str | None = None
    scaled_logo_url: str | None = None
    website: str | None = None
    service_internal_link: str | None = Field(default=None, alias="mygpo_link")

    @property
    def key(self) -> str:
        return self.url

    def __str__(self) -> str:
        return f"{self.title}: {self.description} <{self.url}>"


class Episode(KeyedModel):
    """Episode metadata from the directory or the favorites list."""

    title: str = ""
    url: str
    podcast_title: str = ""
    podcast_url: str
    description: str = ""
    website: str | None = None
    service_internal_link: str | None = Field(default=None, alias="mygpo_link")
    released: datetime | None = None

    @property
    def key(self) -> str:
        return self.url

    def __str__(self) -> str:
        return f"{self.title}: {self.url}"


class UpdateUrlsResponse(BaseModel):
    """
    Upload response carrying a sync cursor and URL rewrites.

    The server sanitizes submitted URLs and reports each rewrite as a
    (submitted, canonical) pair. Rejected URLs are rewritten to "".
    Local copies must be replaced by exact string match.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    update_urls: list[tuple[str, str]] = Field(default_factory=list)

    def rewrite_url(self, url: str) -> str:
        """Return the canonical form of ``url``, or ``url`` if it was not rewritten."""
        return dict(self.update_urls).get(url, url)

    def rewrite(self, urls: Iterable[str]) -> list[str]:
        """Replace every rewritten URL in ``urls`` with its canonical form."""
        mapping = dict(self.update_urls)
        return [mapping.get(url, url) for url in urls]

    def __str__(self) -> str:
        return f"{self.timestamp}: {self.update_urls}"
