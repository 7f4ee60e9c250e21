"""
conftest.py

Shared pytest fixtures and canned API responses for the Pushbullet client
tests. HTTP traffic is served by httpx.MockTransport, nothing leaves the
process.
"""

import json

import httpx
import pytest

from pushbullet_client import config
from pushbullet_client.client import PushbulletClient

# Test timeout constant - can be imported in tests
TEST_TIMEOUT = 30

ACCESS_TOKEN = "o.testtoken123"

RATELIMIT_HEADERS = {
    "X-Ratelimit-Limit": "16384",
    "X-Ratelimit-Remaining": "16300",
    "X-Ratelimit-Reset": "1496856653",
}

DEVICES_RESULT = """
{
  "devices": [
    {
      "active": true,
      "app_version": 8623,
      "created": 1.412047948579029e+09,
      "iden": "ujpah72o0sjAoRtnM0jc",
      "manufacturer": "Apple",
      "model": "iPhone 5s (GSM)",
      "modified": 1.412047948579031e+09,
      "nickname": "Elon Musk's iPhone",
      "push_token": "production:f73be0ee7877c8c7fa69b1468cde764f",
      "type": "ios",
      "kind": "ios",
      "pushable": true,
      "icon": "phone"
    },
    {
      "active": false,
      "iden": "ujCf8vfVeUumdk2AXMrt7Y",
      "created": 1.4369858538733912e+09,
      "modified": 1.445097271901183e+09,
      "pushable": false,
      "icon": "phone"
    }
  ]
}
"""

NOTE_PUSH = {
    "active": True,
    "body": "Space Elevator, Mars Hyperloop, Space Model S (Model Space?)",
    "created": 1.412047948579029e+09,
    "direction": "self",
    "dismissed": False,
    "iden": "ujpah72o0sjAoRtnM0jc",
    "modified": 1.412047948579031e+09,
    "receiver_email": "elon@teslamotors.com",
    "receiver_email_normalized": "elon@teslamotors.com",
    "receiver_iden": "ujpah72o0",
    "sender_email": "elon@teslamotors.com",
    "sender_email_normalized": "elon@teslamotors.com",
    "sender_iden": "ujpah72o0",
    "sender_name": "Elon Musk",
    "title": "Space Travel Ideas",
    "type": "note",
}

PUSH_RESULT = json.dumps({"pushes": [NOTE_PUSH]})


class Recorder:
    """Collects the requests seen by a MockTransport handler."""

    def __init__(self):
        self.requests = []

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_client(recorder):
    """
    Factory fixture: make_client(status, body, headers) returns a
    PushbulletClient whose transport answers every request with the given
    response and records the request in `recorder`.
    """

    def _make(status=200, body="{}", headers=None):
        if headers is None:
            headers = RATELIMIT_HEADERS

        def handler(request: httpx.Request) -> httpx.Response:
            recorder.requests.append(request)
            return httpx.Response(status, text=body, headers=headers)

        return PushbulletClient(
            ACCESS_TOKEN,
            transport=httpx.MockTransport(handler)
        )

    return _make


@pytest.fixture(autouse=True)
def reset_timeout_default(monkeypatch):
    """Isolate tests from PUSHBULLET_TIMEOUT and set_default_timeout()."""
    monkeypatch.delenv(config.TIMEOUT_ENV, raising=False)
    config.set_default_timeout(None)
    yield
    config.set_default_timeout(None)
