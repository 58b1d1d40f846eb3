"""
Episode Actions API.

Episode actions synchronize per-episode events (download, play, delete,
new) between the devices of an account. Actions are stored per user, not
per device; the optional device ID only shows up in the web UI log.

On the wire an action is one flat JSON object: the common fields plus the
fields of its variant, discriminated by the ``action`` key::

    {"podcast": "...", "episode": "...", "action": "play", "position": 120}
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer, model_validator

from .models import UpdateUrlsResponse, parse_as
from .transport import ApiMixin

logger = logging.getLogger(__name__)


class _ActionType(BaseModel):
    model_config = ConfigDict(frozen=True)


class Download(_ActionType):
    """File was downloaded on a device."""

    action: Literal["download"] = "download"


class Delete(_ActionType):
    """Previously downloaded file was deleted on a device."""

    action: Literal["delete"] = "delete"


class New(_ActionType):
    """Reset previous events; interpretation is left to receiving clients."""

    action: Literal["new"] = "new"


class Flattr(_ActionType):
    """Undocumented action kept for compatibility with the service."""

    action: Literal["flattr"] = "flattr"


class Play(_ActionType):
    """
    Playback event with positions in seconds.

    ``started`` and ``total`` are either both set or both omitted.
    """

    action: Literal["play"] = "play"
    position: int
    started: int | None = None
    total: int | None = None


EpisodeActionType = Annotated[Union[Download, Delete, Play, New, Flattr], Field(discriminator="action")]

_VARIANT_FIELDS = ("position", "started", "total")


class EpisodeAction(BaseModel):
    """Episode-related event."""

    model_config = ConfigDict(frozen=True)

    podcast: str
    episode: str
    device: str | None = None
    action: EpisodeActionType
    timestamp: datetime | None = None

    @field_validator("timestamp")
    @classmethod
    def _naive_utc(cls, value: datetime | None) -> datetime | None:
        # The service expects naive UTC; aware values are converted
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @model_validator(mode="before")
    @classmethod
    def _nest_variant(cls, data: Any) -> Any:
        # Wire format is flat; move the variant's fields under "action"
        if isinstance(data, dict) and isinstance(data.get("action"), str):
            data = dict(data)
            variant = {"action": data["action"]}
            for name in _VARIANT_FIELDS:
                if name in data:
                    variant[name] = data.pop(name)
            data["action"] = variant
        return data

    @model_serializer(mode="wrap")
    def _flatten_variant(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if not isinstance(data.get("action"), dict):
            return data
        flat: dict[str, Any] = {}
        for name, value in data.items():
            if name == "action":
                flat.update(value)
            else:
                flat[name] = value
        return flat

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def download(
        cls, podcast: str, episode: str, timestamp: datetime | None = None, device: str | None = None
    ) -> "EpisodeAction":
        """Create a download event."""
        return cls(podcast=podcast, episode=episode, device=device, action=Download(), timestamp=timestamp)

    @classmethod
    def delete(
        cls, podcast: str, episode: str, timestamp: datetime | None = None, device: str | None = None
    ) -> "EpisodeAction":
        """Create a delete event."""
        return cls(podcast=podcast, episode=episode, device=device, action=Delete(), timestamp=timestamp)

    @classmethod
    def new(
        cls, podcast: str, episode: str, timestamp: datetime | None = None, device: str | None = None
    ) -> "EpisodeAction":
        """Create a new event, resetting previous events for the episode."""
        return cls(podcast=podcast, episode=episode, device=device, action=New(), timestamp=timestamp)

    @classmethod
    def flattr(
        cls, podcast: str, episode: str, timestamp: datetime | None = None, device: str | None = None
    ) -> "EpisodeAction":
        """Create a flattr event."""
        return cls(podcast=podcast, episode=episode, device=device, action=Flattr(), timestamp=timestamp)

    @classmethod
    def play_stop(
        cls,
        podcast: str,
        episode: str,
        position: int,
        timestamp: datetime | None = None,
        device: str | None = None,
    ) -> "EpisodeAction":
        """Create a play event carrying only the position playback stopped at."""
        return cls(
            podcast=podcast,
            episode=episode,
            device=device,
            action=Play(position=position),
            timestamp=timestamp,
        )

    @classmethod
    def play(
        cls,
        podcast: str,
        episode: str,
        position: int,
        started: int,
        total: int,
        timestamp: datetime | None = None,
        device: str | None = None,
    ) -> "EpisodeAction":
        """Create a play event with stop position, start position and total length."""
        return cls(
            podcast=podcast,
            episode=episode,
            device=device,
            action=Play(position=position, started=started, total=total),
            timestamp=timestamp,
        )

    @property
    def kind(self) -> str:
        """Discriminator value, e.g. ``"play"``."""
        return self.action.action

    def with_device(self, device_id: str) -> "EpisodeAction":
        """Return a copy attributed to ``device_id``."""
        return self.model_copy(update={"device": device_id})

    def to_payload(self) -> dict[str, Any]:
        """Flat wire representation; absent optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def __str__(self) -> str:
        return f"{self.kind} {self.episode} ({self.podcast})"


class UploadEpisodeActionsResponse(UpdateUrlsResponse):
    """Response to an episode action upload."""

    def rewrite_action(self, action: EpisodeAction) -> EpisodeAction:
        """Replace rewritten ``podcast`` and ``episode`` URLs independently."""
        return action.model_copy(
            update={
                "podcast": self.rewrite_url(action.podcast),
                "episode": self.rewrite_url(action.episode),
            }
        )


class GetEpisodeActionsResponse(BaseModel):
    """Episode actions uploaded since a cursor, plus the next cursor."""

    model_config = ConfigDict(frozen=True)

    actions: list[EpisodeAction] = Field(default_factory=list)
    timestamp: int


class EpisodeActionsMixin(ApiMixin):
    """Upload and query the account's episode action log."""

    username: str

    def upload_episode_actions(self, actions: Sequence[EpisodeAction]) -> UploadEpisodeActionsResponse:
        """
        Upload episode actions.

        Args:
            actions: Actions to store; device attribution is optional per action

        Returns:
            Upload response with the new cursor and any URL rewrites
        """
        payload = [action.to_payload() for action in actions]
        logger.debug("Uploading %d episode actions", len(payload))
        data = self._post(f"api/2/episodes/{self.username}.json", json=payload)
        return parse_as(UploadEpisodeActionsResponse, data)

    def get_episode_actions(
        self,
        podcast: str | None = None,
        since: int | None = None,
        aggregated: bool = False,
    ) -> GetEpisodeActionsResponse:
        """
        Get episode actions uploaded since a cursor.

        Without ``since`` the whole history is returned, which can be long;
        pass the ``timestamp`` of the previous response whenever possible.

        Args:
            podcast: Only return actions for episodes of this feed URL
            since: Cursor from a previous response
            aggregated: Only return the latest action per episode
        """
        params = [("aggregated", aggregated), ("since", since), ("podcast", podcast)]
        data = self._get(f"api/2/episodes/{self.username}.json", params=params)
        return parse_as(GetEpisodeActionsResponse, data)
