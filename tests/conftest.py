"""Pytest configuration and shared fixtures."""

import base64
import json
import re
from collections.abc import Iterator
from typing import Any

import httpx
import pytest
import respx

from gpodnet.api import AuthenticatedClient, DeviceClient, PublicClient

HOST = "https://gpodder.net"
USERNAME = "alice"
PASSWORD = "s3cret"
DEVICE_ID = "laptop-1"

FEED = "http://example.com/feed.rss"
EPISODE_URL = "http://example.com/a.mp3"


# ============================================================================
# In-memory gpodder.net server
# ============================================================================


class FakeGpodderServer:
    """
    Minimal stateful stand-in for the gpodder.net API.

    Keeps devices, per-device subscriptions with a change log, the episode
    action log and settings. Every upload advances a single monotonic clock
    that doubles as the sync cursor.
    """

    def __init__(self, username: str = USERNAME, password: str = PASSWORD):
        self.username = username
        self.password = password
        self.devices: dict[str, dict[str, Any]] = {}
        self.subscriptions: dict[str, list[str]] = {}
        self.subscription_log: list[tuple[int, str, str, str]] = []
        self.actions: list[tuple[int, dict[str, Any]]] = []
        self.settings: dict[tuple[str, ...], dict[str, str]] = {}
        self.tags = [{"title": f"Tag {i}", "tag": f"tag{i}", "usage": 100 - i} for i in range(25)]
        self.podcasts = {
            FEED: {
                "url": FEED,
                "title": "Example Cast",
                "description": "A show about examples",
                "subscribers": 42,
                "subscribers_last_week": 40,
                "logo_url": "http://example.com/logo.png",
                "website": "http://example.com/",
                "mygpo_link": "https://gpodder.net/podcast/example-cast",
            }
        }
        self.episodes = {
            EPISODE_URL: {
                "title": "Episode A",
                "url": EPISODE_URL,
                "podcast_title": "Example Cast",
                "podcast_url": FEED,
                "description": "First one",
                "website": "http://example.com/a",
                "mygpo_link": "https://gpodder.net/episode/1",
                "released": "2024-01-05T08:00:00",
            }
        }
        self.favorites: list[dict[str, Any]] = [self.episodes[EPISODE_URL]]
        self._clock = 1000

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def tick(self) -> int:
        self._clock += 1
        return self._clock

    @staticmethod
    def canonicalize(url: str) -> str:
        url = url.strip()
        if not url.startswith(("http://", "https://")) or not url.isascii():
            return ""
        return url

    def _rewrites(self, urls: list[str]) -> list[list[str]]:
        pairs = []
        for url in urls:
            canonical = self.canonicalize(url)
            if canonical != url and [url, canonical] not in pairs:
                pairs.append([url, canonical])
        return pairs

    def _ensure_device(self, device_id: str) -> None:
        self.devices.setdefault(device_id, {"id": device_id, "caption": "", "type": "other"})
        self.subscriptions.setdefault(device_id, [])

    def _authorized(self, request: httpx.Request, user: str) -> bool:
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return user == self.username and request.headers.get("Authorization") == f"Basic {token}"

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    ROUTES = [
        ("GET", r"/api/2/tags/(?P<count>\d+)\.json", "tags"),
        ("GET", r"/api/2/tag/(?P<tag>[^/]+)/(?P<count>\d+)\.json", "podcasts_for_tag"),
        ("GET", r"/api/2/data/podcast\.json", "podcast_data"),
        ("GET", r"/api/2/data/episode\.json", "episode_data"),
        ("GET", r"/toplist/(?P<count>\d+)\.json", "toplist"),
        ("GET", r"/search\.json", "search"),
        ("GET", r"/suggestions/(?P<count>\d+)\.json", "suggestions"),
        ("GET", r"/api/2/favorites/(?P<user>[^/]+)\.json", "favorites"),
        ("GET", r"/api/2/devices/(?P<user>[^/]+)\.json", "list_devices"),
        ("POST", r"/api/2/devices/(?P<user>[^/]+)/(?P<device>[\w.-]+)\.json", "update_device"),
        ("GET", r"/subscriptions/(?P<user>[^/]+)\.json", "all_subscriptions"),
        ("GET", r"/subscriptions/(?P<user>[^/]+)/(?P<device>[\w.-]+)\.json", "device_subscriptions"),
        ("PUT", r"/subscriptions/(?P<user>[^/]+)/(?P<device>[\w.-]+)\.json", "replace_subscriptions"),
        ("POST", r"/api/2/subscriptions/(?P<user>[^/]+)/(?P<device>[\w.-]+)\.json", "upload_changes"),
        ("GET", r"/api/2/subscriptions/(?P<user>[^/]+)/(?P<device>[\w.-]+)\.json", "get_changes"),
        ("POST", r"/api/2/episodes/(?P<user>[^/]+)\.json", "upload_actions"),
        ("GET", r"/api/2/episodes/(?P<user>[^/]+)\.json", "get_actions"),
        ("GET", r"/api/2/settings/(?P<user>[^/]+)/(?P<scope>\w+)\.json", "get_settings"),
        ("POST", r"/api/2/settings/(?P<user>[^/]+)/(?P<scope>\w+)\.json", "save_settings"),
    ]

    PUBLIC = {"tags", "podcasts_for_tag", "podcast_data", "episode_data", "toplist", "search"}

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        for method, pattern, name in self.ROUTES:
            match = re.fullmatch(pattern, path)
            if match and request.method == method:
                args = match.groupdict()
                if name not in self.PUBLIC and not self._authorized(request, args.get("user", self.username)):
                    return httpx.Response(401, text="Unauthorized")
                return getattr(self, f"_{name}")(request, **args)
        return httpx.Response(404, text="Not found")

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    def _tags(self, request: httpx.Request, count: str) -> httpx.Response:
        return httpx.Response(200, json=self.tags[: int(count)])

    def _podcasts_for_tag(self, request: httpx.Request, tag: str, count: str) -> httpx.Response:
        return httpx.Response(200, json=list(self.podcasts.values())[: int(count)])

    def _podcast_data(self, request: httpx.Request) -> httpx.Response:
        podcast = self.podcasts.get(request.url.params.get("url", ""))
        if podcast is None:
            return httpx.Response(404, text="Podcast not found")
        return httpx.Response(200, json=podcast)

    def _episode_data(self, request: httpx.Request) -> httpx.Response:
        episode = self.episodes.get(request.url.params.get("url", ""))
        if episode is None or episode["podcast_url"] != request.url.params.get("podcast"):
            return httpx.Response(404, text="Episode not found")
        return httpx.Response(200, json=episode)

    def _toplist(self, request: httpx.Request, count: str) -> httpx.Response:
        podcasts = [dict(p) for p in self.podcasts.values()][: int(count)]
        if "scale_logo" in request.url.params:
            size = request.url.params["scale_logo"]
            for podcast in podcasts:
                podcast["scaled_logo_url"] = f"https://gpodder.net/logo/{size}/example.png"
        return httpx.Response(200, json=podcasts)

    def _search(self, request: httpx.Request) -> httpx.Response:
        q = request.url.params.get("q", "").lower()
        hits = [p for p in self.podcasts.values() if q in p["title"].lower() or q in p["description"].lower()]
        return httpx.Response(200, json=hits)

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    def _suggestions(self, request: httpx.Request, count: str) -> httpx.Response:
        subscribed = {url for urls in self.subscriptions.values() for url in urls}
        suggested = [p for p in self.podcasts.values() if p["url"] not in subscribed]
        return httpx.Response(200, json=suggested[: int(count)])

    def _favorites(self, request: httpx.Request, user: str) -> httpx.Response:
        return httpx.Response(200, json=self.favorites)

    def _list_devices(self, request: httpx.Request, user: str) -> httpx.Response:
        devices = [
            {**device, "subscriptions": len(self.subscriptions.get(device_id, []))}
            for device_id, device in self.devices.items()
        ]
        return httpx.Response(200, json=devices)

    def _update_device(self, request: httpx.Request, user: str, device: str) -> httpx.Response:
        self._ensure_device(device)
        data = _body(request)
        for key in ("caption", "type"):
            if key in data:
                self.devices[device][key] = data[key]
        return httpx.Response(200)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def _all_subscriptions(self, request: httpx.Request, user: str) -> httpx.Response:
        urls = dict.fromkeys(url for urls in self.subscriptions.values() for url in urls)
        return httpx.Response(200, json=[self.podcasts.get(url, {"url": url}) for url in urls])

    def _device_subscriptions(self, request: httpx.Request, user: str, device: str) -> httpx.Response:
        self._ensure_device(device)
        return httpx.Response(200, json=self.subscriptions[device])

    def _replace_subscriptions(self, request: httpx.Request, user: str, device: str) -> httpx.Response:
        self._ensure_device(device)
        new = [u for u in dict.fromkeys(self.canonicalize(url) for url in _body(request)) if u]
        old = self.subscriptions[device]
        ts = self.tick()
        for url in old:
            if url not in new:
                self.subscription_log.append((ts, device, "remove", url))
        for url in new:
            if url not in old:
                self.subscription_log.append((ts, device, "add", url))
        self.subscriptions[device] = new
        return httpx.Response(200)

    def _upload_changes(self, request: httpx.Request, user: str, device: str) -> httpx.Response:
        self._ensure_device(device)
        data = _body(request)
        ts = self.tick()
        current = self.subscriptions[device]
        for url in data.get("add", []):
            canonical = self.canonicalize(url)
            if canonical and canonical not in current:
                current.append(canonical)
                self.subscription_log.append((ts, device, "add", canonical))
        for url in data.get("remove", []):
            canonical = self.canonicalize(url)
            if canonical in current:
                current.remove(canonical)
                self.subscription_log.append((ts, device, "remove", canonical))
        rewrites = self._rewrites(data.get("add", []) + data.get("remove", []))
        return httpx.Response(200, json={"timestamp": ts, "update_urls": rewrites})

    def _get_changes(self, request: httpx.Request, user: str, device: str) -> httpx.Response:
        self._ensure_device(device)
        since = int(request.url.params.get("since", 0))
        last_op: dict[str, str] = {}
        for ts, dev, op, url in self.subscription_log:
            if dev == device and ts > since:
                last_op[url] = op
        return httpx.Response(
            200,
            json={
                "add": [url for url, op in last_op.items() if op == "add"],
                "remove": [url for url, op in last_op.items() if op == "remove"],
                "timestamp": self._clock,
            },
        )

    # ------------------------------------------------------------------
    # Episode actions
    # ------------------------------------------------------------------

    def _upload_actions(self, request: httpx.Request, user: str) -> httpx.Response:
        ts = self.tick()
        urls = []
        for action in _body(request):
            urls += [action["podcast"], action["episode"]]
            stored = dict(action)
            stored["podcast"] = self.canonicalize(action["podcast"])
            stored["episode"] = self.canonicalize(action["episode"])
            self.actions.append((ts, stored))
        return httpx.Response(200, json={"timestamp": ts, "update_urls": self._rewrites(urls)})

    def _get_actions(self, request: httpx.Request, user: str) -> httpx.Response:
        params = request.url.params
        since = int(params.get("since", 0))
        podcast = params.get("podcast")
        actions = [a for ts, a in self.actions if ts > since and (podcast is None or a["podcast"] == podcast)]
        if params.get("aggregated") == "true":
            latest = {a["episode"]: a for a in actions}
            actions = list(latest.values())
        return httpx.Response(200, json={"actions": actions, "timestamp": self._clock})

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _settings_key(self, request: httpx.Request, scope: str) -> tuple[str, ...]:
        params = request.url.params
        extra = {
            "account": (),
            "device": ("device",),
            "podcast": ("podcast",),
            "episode": ("podcast", "episode"),
        }[scope]
        return (scope, *(params[name] for name in extra))

    def _get_settings(self, request: httpx.Request, user: str, scope: str) -> httpx.Response:
        return httpx.Response(200, json=self.settings.get(self._settings_key(request, scope), {}))

    def _save_settings(self, request: httpx.Request, user: str, scope: str) -> httpx.Response:
        data = _body(request)
        values = self.settings.setdefault(self._settings_key(request, scope), {})
        values.update(data.get("set", {}))
        for key in data.get("remove", []):
            values.pop(key, None)
        return httpx.Response(200, json=values)


def _body(request: httpx.Request) -> Any:
    return json.loads(request.content or b"null")


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def api_mock() -> Iterator[respx.MockRouter]:
    """respx router for tests that stub single endpoints."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def server() -> FakeGpodderServer:
    return FakeGpodderServer()


@pytest.fixture
def fake_api(server: FakeGpodderServer) -> Iterator[FakeGpodderServer]:
    """Route every request to gpodder.net through the in-memory server."""
    with respx.mock(assert_all_called=False) as router:
        router.route(host="gpodder.net").mock(side_effect=server.handle)
        yield server


@pytest.fixture
def public_client() -> Iterator[PublicClient]:
    with PublicClient(host=HOST) as client:
        yield client


@pytest.fixture
def auth_client() -> Iterator[AuthenticatedClient]:
    with AuthenticatedClient(USERNAME, PASSWORD, host=HOST) as client:
        yield client


@pytest.fixture
def device_client(auth_client: AuthenticatedClient) -> DeviceClient:
    return auth_client.for_device(DEVICE_ID)
