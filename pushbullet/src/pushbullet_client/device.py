"""
device.py

Pushbullet Device API: list-devices.
create-device, update-device and delete-device are not supported.
"""

from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Tuple
import logging

from pydantic import BaseModel, ValidationError

from .config import DEVICES_URL
from .errors import DecodeError
from .headers import ResponseHeaders
from .timestamps import to_datetime

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


class Device(BaseModel):
    """
    A device registered to the user. Keys the service sends but that are
    not listed here (type, kind, pushable, ...) are ignored.
    """
    # False if the item has been deleted
    active: bool
    iden: str
    # floating point unix seconds
    created: float
    modified: float
    # arbitrary string
    icon: str

    app_version: Optional[int] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    nickname: Optional[str] = None
    push_token: Optional[str] = None

    def created_time(self) -> datetime:
        return to_datetime(self.created)

    def modified_time(self) -> datetime:
        return to_datetime(self.modified)


class DeviceList(BaseModel):
    devices: List[Device]


def parse_devices(content: bytes | str) -> List[Device]:
    """Validate a list-devices response body."""
    try:
        return DeviceList.model_validate_json(content).devices
    except ValidationError as e:
        raise DecodeError(f"malformed devices response: {e}") from e


def list_devices(client: Client) -> Tuple[List[Device], ResponseHeaders]:
    """Get a list of devices belonging to the current user."""
    response, headers = client.get(DEVICES_URL)
    devices = parse_devices(response.content)
    logger.debug(f"received {len(devices)} devices")
    return devices, headers
