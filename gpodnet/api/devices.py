"""
Devices API.

Each account owns a set of devices identified by client-chosen IDs.
Devices are created implicitly the first time an ID is used.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .models import KeyedModel, parse_as
from .transport import ApiMixin

logger = logging.getLogger(__name__)


class DeviceType(str, Enum):
    """Kind of device, as shown in the web UI."""

    DESKTOP = "desktop"
    LAPTOP = "laptop"
    MOBILE = "mobile"
    SERVER = "server"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "DeviceType | None":
        # Accept display names such as "Laptop"
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None

    def __str__(self) -> str:
        return self.value.capitalize()


class Device(KeyedModel):
    """A device registered with the account. Identity is ``id`` alone."""

    id: str
    caption: str = ""
    device_type: DeviceType = Field(default=DeviceType.OTHER, alias="type")
    subscriptions: int = 0

    @property
    def key(self) -> str:
        return self.id

    def __str__(self) -> str:
        return f"{self.device_type} {self.caption} (id={self.id})"


class DeviceData(BaseModel):
    """Partial device update; only supplied fields are sent."""

    model_config = ConfigDict(populate_by_name=True)

    caption: str | None = None
    device_type: DeviceType | None = Field(default=None, alias="type")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ListDevicesMixin(ApiMixin):
    """List the devices of the authenticated account."""

    username: str

    def list_devices(self) -> list[Device]:
        """
        List all devices of the account.

        Returns:
            Devices registered with the account (empty for a fresh account)
        """
        data = self._get(f"api/2/devices/{self.username}.json")
        return parse_as(list[Device], data)


class DeviceDataMixin(ApiMixin):
    """Update the data of the client's own device."""

    username: str
    device_id: str

    def update_device_data(
        self,
        caption: str | None = None,
        device_type: DeviceType | str | None = None,
    ) -> None:
        """
        Update caption and/or type of this device, creating it if needed.

        Args:
            caption: New caption (not sent if None)
            device_type: New device type (not sent if None)
        """
        data = DeviceData(
            caption=caption,
            device_type=DeviceType(device_type) if device_type is not None else None,
        )
        logger.debug("Updating device %s: %s", self.device_id, data.to_payload())
        self._post(f"api/2/devices/{self.username}/{self.device_id}.json", json=data.to_payload())
