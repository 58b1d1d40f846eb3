"""
Subscriptions API.

Two ways to keep a device's subscription list in sync:

- full state: read or replace the complete URL list of a device;
- deltas: upload ``add``/``remove`` sets and poll for changes since a
  server-issued cursor (``timestamp``).

Cursors are per device. Always pass the ``timestamp`` of the previous
response for the same device as ``since``; never mix cursors of
different devices.
"""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .models import Podcast, UpdateUrlsResponse, parse_as
from .transport import ApiMixin

logger = logging.getLogger(__name__)


class Subscription(Podcast):
    """Podcast subscribed to on at least one device of the account."""


class SubscriptionChanges(BaseModel):
    """Delta upload request."""

    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)

    @classmethod
    def from_iterables(cls, add: Iterable[str], remove: Iterable[str]) -> "SubscriptionChanges":
        """Keep caller order, dropping exact duplicates within each side."""
        return cls(add=list(dict.fromkeys(add)), remove=list(dict.fromkeys(remove)))


class UploadSubscriptionChangesResponse(UpdateUrlsResponse):
    """Response to a delta upload: new cursor and URL rewrites."""


class GetSubscriptionChangesResponse(BaseModel):
    """Subscription delta since a cursor."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)

    def apply(self, urls: Iterable[str]) -> list[str]:
        """
        Apply this delta to a local subscription list.

        Removed URLs are dropped, added URLs are appended if missing.
        """
        removed = set(self.remove)
        result = [url for url in urls if url not in removed]
        present = set(result)
        for url in self.add:
            if url not in present and url not in removed:
                result.append(url)
                present.add(url)
        return result

    def __str__(self) -> str:
        return f"{self.timestamp}: add{self.add}, remove{self.remove}"


class AllSubscriptionsMixin(ApiMixin):
    """Read the subscriptions of the whole account."""

    username: str

    def get_all_subscriptions(self) -> list[Subscription]:
        """
        Get all subscriptions of the account, across devices.

        Returns:
            Subscriptions with podcast metadata
        """
        data = self._get(f"subscriptions/{self.username}.json")
        return parse_as(list[Subscription], data)


class DeviceSubscriptionsMixin(ApiMixin):
    """Full-state and delta sync of the client's own device."""

    username: str
    device_id: str

    def get_subscriptions_of_device(self) -> list[str]:
        """Get the feed URLs this device is subscribed to."""
        data = self._get(f"subscriptions/{self.username}/{self.device_id}.json")
        return parse_as(list[str], data)

    def upload_subscriptions_of_device(self, urls: Iterable[str]) -> None:
        """
        Replace the device's subscription list wholesale.

        Args:
            urls: Complete list of feed URLs; anything not listed is unsubscribed
        """
        payload = list(urls)
        logger.debug("Replacing %d subscriptions of device %s", len(payload), self.device_id)
        self._put(f"subscriptions/{self.username}/{self.device_id}.json", json=payload)

    def upload_subscription_changes(
        self,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> UploadSubscriptionChangesResponse:
        """
        Upload subscription changes of this device.

        ``add`` and ``remove`` should be disjoint; overlap is sent as-is and
        resolved by the server.

        Returns:
            New cursor and URL rewrites; apply them to local URLs with
            ``response.rewrite(urls)``
        """
        changes = SubscriptionChanges.from_iterables(add, remove)
        logger.debug(
            "Uploading subscription changes for %s: +%d -%d",
            self.device_id,
            len(changes.add),
            len(changes.remove),
        )
        data = self._post(
            f"api/2/subscriptions/{self.username}/{self.device_id}.json",
            json=changes.model_dump(),
        )
        return parse_as(UploadSubscriptionChangesResponse, data)

    def get_subscription_changes(self, since: int | None = None) -> GetSubscriptionChangesResponse:
        """
        Get subscription changes of this device since a cursor.

        Args:
            since: ``timestamp`` from the previous response for this device;
                not sent when None
        """
        data = self._get(
            f"api/2/subscriptions/{self.username}/{self.device_id}.json",
            params=[("since", since)],
        )
        return parse_as(GetSubscriptionChangesResponse, data)
