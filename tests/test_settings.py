"""Tests for scoped settings storage."""

import json

import respx

from gpodnet.api import AuthenticatedClient, DeviceClient
from gpodnet.api.settings import SaveSettingsRequest, SettingsScope

from conftest import DEVICE_ID, EPISODE_URL, FEED, HOST, USERNAME, FakeGpodderServer

SETTINGS_URL = f"{HOST}/api/2/settings/{USERNAME}"


class TestSettingsRequests:
    """Test request shapes of the settings endpoints."""

    def test_save_body(self, api_mock: respx.MockRouter, auth_client: AuthenticatedClient):
        """Test that saves post set and remove."""
        route = api_mock.post(f"{SETTINGS_URL}/account.json").respond(200, json={"k": "v"})

        result = auth_client.save_account_settings({"k": "v"}, ["old"])

        assert json.loads(route.calls.last.request.content) == {"set": {"k": "v"}, "remove": ["old"]}
        assert result == {"k": "v"}

    def test_save_defaults(self):
        """Test that an empty save request has both keys."""
        assert SaveSettingsRequest().model_dump() == {"set": {}, "remove": []}

    def test_podcast_scope_params(self, api_mock: respx.MockRouter, auth_client: AuthenticatedClient):
        """Test that podcast settings identify the feed by query."""
        route = api_mock.get(f"{SETTINGS_URL}/podcast.json").respond(200, json={})

        auth_client.get_podcast_settings(FEED)

        assert route.calls.last.request.url.params["podcast"] == FEED

    def test_episode_scope_params(self, api_mock: respx.MockRouter, auth_client: AuthenticatedClient):
        """Test that episode settings identify feed and episode by query."""
        route = api_mock.post(f"{SETTINGS_URL}/episode.json").respond(200, json={})

        auth_client.save_episode_settings({"a": "1"}, [], FEED, EPISODE_URL)

        params = route.calls.last.request.url.params
        assert params["podcast"] == FEED
        assert params["episode"] == EPISODE_URL

    def test_device_scope_params(self, api_mock: respx.MockRouter, device_client: DeviceClient):
        """Test that device settings identify the device by query."""
        route = api_mock.get(f"{SETTINGS_URL}/device.json").respond(200, json={})

        device_client.get_device_settings()

        assert route.calls.last.request.url.params["device"] == DEVICE_ID

    def test_scope_values(self):
        """Test the wire names of the scopes."""
        assert [scope.value for scope in SettingsScope] == ["account", "device", "podcast", "episode"]


class TestSettingsStorage:
    """Test settings round trips against the in-memory server."""

    def test_account_round_trip(self, fake_api: FakeGpodderServer, auth_client: AuthenticatedClient):
        """Test that saved account settings are returned and readable."""
        result = auth_client.save_account_settings({"k": "v"}, [])

        assert result["k"] == "v"
        assert auth_client.get_account_settings() == {"k": "v"}

    def test_remove_key(self, fake_api: FakeGpodderServer, auth_client: AuthenticatedClient):
        """Test that removed keys disappear."""
        auth_client.save_account_settings({"a": "1", "b": "2"})

        result = auth_client.save_account_settings(remove_keys=["a"])

        assert result == {"b": "2"}

    def test_scopes_are_separate(self, fake_api: FakeGpodderServer, device_client: DeviceClient):
        """Test that each scope keeps its own mapping."""
        device_client.save_account_settings({"k": "account"})
        device_client.save_device_settings({"k": "device"})
        device_client.save_podcast_settings({"k": "podcast"}, [], FEED)
        device_client.save_episode_settings({"k": "episode"}, [], FEED, EPISODE_URL)

        assert device_client.get_account_settings() == {"k": "account"}
        assert device_client.get_device_settings() == {"k": "device"}
        assert device_client.get_podcast_settings(FEED) == {"k": "podcast"}
        assert device_client.get_episode_settings(FEED, EPISODE_URL) == {"k": "episode"}

    def test_device_settings_per_device(self, fake_api: FakeGpodderServer, auth_client: AuthenticatedClient):
        """Test that device settings are keyed by device ID."""
        auth_client.for_device("laptop").save_device_settings({"auto_download": "true"})

        assert auth_client.for_device("phone").get_device_settings() == {}
