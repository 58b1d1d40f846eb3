"""
Settings API.

Key/value storage scoped to the account, a device, a podcast or an
episode. A save upserts ``set`` and deletes ``remove``; the server answers
with the resulting full mapping for the scope.
"""

from collections.abc import Iterable, Mapping
from enum import Enum

from pydantic import BaseModel, Field

from .models import parse_as
from .transport import ApiMixin, QueryParams


class SettingsScope(str, Enum):
    """Scope a settings mapping belongs to."""

    ACCOUNT = "account"
    DEVICE = "device"
    PODCAST = "podcast"
    EPISODE = "episode"


class SaveSettingsRequest(BaseModel):
    """Upsert/delete request body."""

    set: dict[str, str] = Field(default_factory=dict)
    remove: list[str] = Field(default_factory=list)


class _SettingsRequests(ApiMixin):
    username: str

    def _settings_path(self, scope: SettingsScope) -> str:
        return f"api/2/settings/{self.username}/{scope.value}.json"

    def _get_settings(self, scope: SettingsScope, params: QueryParams | None = None) -> dict[str, str]:
        data = self._get(self._settings_path(scope), params=params)
        return parse_as(dict[str, str], data or {})

    def _save_settings(
        self,
        scope: SettingsScope,
        set_values: Mapping[str, str] | None,
        remove_keys: Iterable[str],
        params: QueryParams | None = None,
    ) -> dict[str, str]:
        body = SaveSettingsRequest(set=dict(set_values or {}), remove=list(remove_keys))
        data = self._post(self._settings_path(scope), json=body.model_dump(), params=params)
        return parse_as(dict[str, str], data or {})


class SettingsMixin(_SettingsRequests):
    """Account, podcast and episode settings."""

    def get_account_settings(self) -> dict[str, str]:
        """Get the account-wide settings."""
        return self._get_settings(SettingsScope.ACCOUNT)

    def save_account_settings(
        self,
        set_values: Mapping[str, str] | None = None,
        remove_keys: Iterable[str] = (),
    ) -> dict[str, str]:
        """
        Save account-wide settings.

        Args:
            set_values: Keys to create or overwrite
            remove_keys: Keys to delete

        Returns:
            Resulting account settings
        """
        return self._save_settings(SettingsScope.ACCOUNT, set_values, remove_keys)

    def get_podcast_settings(self, podcast: str) -> dict[str, str]:
        """Get the settings of a podcast (feed URL)."""
        return self._get_settings(SettingsScope.PODCAST, params=[("podcast", podcast)])

    def save_podcast_settings(
        self,
        set_values: Mapping[str, str] | None,
        remove_keys: Iterable[str],
        podcast: str,
    ) -> dict[str, str]:
        """Save the settings of a podcast (feed URL)."""
        return self._save_settings(SettingsScope.PODCAST, set_values, remove_keys, params=[("podcast", podcast)])

    def get_episode_settings(self, podcast: str, episode: str) -> dict[str, str]:
        """Get the settings of an episode (feed URL plus media URL)."""
        return self._get_settings(SettingsScope.EPISODE, params=[("podcast", podcast), ("episode", episode)])

    def save_episode_settings(
        self,
        set_values: Mapping[str, str] | None,
        remove_keys: Iterable[str],
        podcast: str,
        episode: str,
    ) -> dict[str, str]:
        """Save the settings of an episode (feed URL plus media URL)."""
        return self._save_settings(
            SettingsScope.EPISODE,
            set_values,
            remove_keys,
            params=[("podcast", podcast), ("episode", episode)],
        )


class DeviceSettingsMixin(_SettingsRequests):
    """Settings of the client's own device."""

    device_id: str

    def get_device_settings(self) -> dict[str, str]:
        """Get the settings of this device."""
        return self._get_settings(SettingsScope.DEVICE, params=[("device", self.device_id)])

    def save_device_settings(
        self,
        set_values: Mapping[str, str] | None = None,
        remove_keys: Iterable[str] = (),
    ) -> dict[str, str]:
        """Save the settings of this device."""
        return self._save_settings(SettingsScope.DEVICE, set_values, remove_keys, params=[("device", self.device_id)])
