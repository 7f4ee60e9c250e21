"""
errors.py

Exceptions raised by the Pushbullet client.

Classes:
- PushbulletError: base class, catch this to handle any client failure
- NetworkError: the request never got a response (DNS, TCP, TLS, timeout)
- StatusError: the service answered with a non-2xx status
- DecodeError: the response body did not match the expected JSON shape
"""

from typing import Optional


class PushbulletError(Exception):
    """Base class for all Pushbullet client errors."""


class NetworkError(PushbulletError):
    """Transport level failure."""


class StatusError(PushbulletError):
    """Non-success HTTP status. The body is logged, not kept."""

    def __init__(
        self,
        message: str = "response has error status",
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(PushbulletError):
    """Response body is not valid JSON or does not fit the record schema."""
