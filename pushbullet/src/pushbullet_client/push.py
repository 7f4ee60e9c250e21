"""
push.py

Pushbullet Push API: create-push (note and link) and list-push.
File pushes, update-push, delete-push and delete-all-pushes are not
supported.

Classes:
- BroadcastTarget, DeviceTarget, EmailTarget, ChannelTarget, ClientTarget:
    who receives a push, each dumps to at most one JSON field
- NoteRequest, LinkRequest: push contents, each dumps with its "type"
- Push: a push as returned by the service
- ListCondition: query parameters for list-push
"""

from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Tuple, Union
import logging
import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import PUSHES_URL
from .errors import DecodeError
from .headers import ResponseHeaders
from .timestamps import to_datetime, to_float_seconds

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


# ---------------- Targets ----------------

class BroadcastTarget(BaseModel):
    """Broadcast to all of the user's devices."""
    model_config = ConfigDict(frozen=True)


class DeviceTarget(BaseModel):
    """Send the push to a specific device."""
    model_config = ConfigDict(frozen=True)
    device_iden: str


class EmailTarget(BaseModel):
    """Send the push to an email address."""
    model_config = ConfigDict(frozen=True)
    email: str


class ChannelTarget(BaseModel):
    """Send the push to all subscribers to a channel."""
    model_config = ConfigDict(frozen=True)
    channel_tag: str


class ClientTarget(BaseModel):
    """Send the push to all users who have granted access to this OAuth client."""
    model_config = ConfigDict(frozen=True)
    client_iden: str


Target = Union[
    BroadcastTarget, DeviceTarget, EmailTarget, ChannelTarget, ClientTarget
]
_TARGET_TYPES = (
    BroadcastTarget, DeviceTarget, EmailTarget, ChannelTarget, ClientTarget
)


# ---------------- Requests ----------------

class NoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    push_type: Literal["note"] = Field(default="note", alias="type")
    title: str
    body: str


class LinkRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    push_type: Literal["link"] = Field(default="link", alias="type")
    title: str
    # message associated with the link
    body: str
    url: str


PushRequest = Union[NoteRequest, LinkRequest]


# ---------------- Response ----------------

class Push(BaseModel):
    """
    A push as returned by create-push and list-push.

    `body`, `title` and `url` are missing from some push types and default
    to an empty string. `url` is only meaningful for link pushes.
    """
    model_config = ConfigDict(populate_by_name=True)

    # False if the item has been deleted
    active: bool
    body: str = ""
    created: float
    # "self", "outgoing" or "incoming"
    direction: str
    dismissed: bool
    iden: str
    modified: float
    receiver_email: str
    receiver_email_normalized: str
    receiver_iden: str
    sender_email: str
    sender_email_normalized: str
    sender_iden: str
    sender_name: str
    title: str = ""
    url: str = ""
    # "note", "file" or "link"
    push_type: str = Field(alias="type")

    def created_time(self) -> datetime:
        return to_datetime(self.created)

    def modified_time(self) -> datetime:
        return to_datetime(self.modified)


class PushList(BaseModel):
    pushes: List[Push]


# ---------------- List condition ----------------

class ListCondition(BaseModel):
    """Parameters for list_push."""
    # don't return deleted pushes
    active: bool = True
    limit: int = Field(ge=0)
    # request pushes modified after this float unix timestamp
    modified_after: Optional[float] = None
    # cursor for getting the next page of pushes
    cursor: Optional[str] = None

    def set_modified_after(self, t: datetime):
        """Set `modified_after` from a datetime."""
        self.modified_after = to_float_seconds(t)


def format_exponential(value: float) -> str:
    """
    Format a float in scientific notation with the shortest mantissa that
    round-trips, e.g. 1412047948.579029 -> "1.412047948579029e9".
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite value {value}")
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    exponent10 = exponent + len(digits) - 1
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    return f"{'-' if sign else ''}{mantissa}e{exponent10}"


def build_list_params(condition: ListCondition) -> List[Tuple[str, str]]:
    """Turn a ListCondition into list-push query parameters."""
    params = [
        ("active", "true" if condition.active else "false"),
        ("limit", str(condition.limit)),
    ]
    if condition.modified_after is not None:
        params.append(
            ("modified_after", format_exponential(condition.modified_after))
        )
    if condition.cursor is not None:
        params.append(("cursor", condition.cursor))
    return params


def build_push_payload(target: Target, request: PushRequest) -> Dict[str, Any]:
    """
    Build the create-push JSON body: the request fields with their "type",
    plus the target's selector field (none for a broadcast).
    """
    if not isinstance(request, (NoteRequest, LinkRequest)):
        raise TypeError(f"unsupported push request: {request!r}")
    if not isinstance(target, _TARGET_TYPES):
        raise TypeError(f"unsupported push target: {target!r}")

    payload = request.model_dump(by_alias=True)
    payload.update(target.model_dump())
    return payload


def parse_push(content: bytes | str) -> Push:
    try:
        return Push.model_validate_json(content)
    except ValidationError as e:
        raise DecodeError(f"malformed push response: {e}") from e


def parse_pushes(content: bytes | str) -> List[Push]:
    try:
        return PushList.model_validate_json(content).pushes
    except ValidationError as e:
        raise DecodeError(f"malformed pushes response: {e}") from e


def create_push(
    client: Client,
    target: Target,
    request: PushRequest
) -> Tuple[Push, ResponseHeaders]:
    """Send a push to a device or another person."""
    logger.debug(f"target: {target!r}, request: {request!r}")
    payload = build_push_payload(target, request)
    logger.debug(f"json: {payload}")

    response, headers = client.post(PUSHES_URL, payload)
    return parse_push(response.content), headers


def list_push(
    client: Client,
    condition: ListCondition
) -> Tuple[List[Push], ResponseHeaders]:
    """Request push history."""
    logger.debug(f"condition: {condition!r}")
    response, headers = client.get(PUSHES_URL, params=build_list_params(condition))
    pushes = parse_pushes(response.content)
    logger.debug(f"received {len(pushes)} pushes")
    return pushes, headers
