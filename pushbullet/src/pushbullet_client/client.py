"""
client.py

Module defining the abstract base Client class with the shared response
handling, and PushbulletClient, the authenticated blocking client for the
Pushbullet v2 API.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple
import logging

import httpx

from . import device, push
from .config import load_settings, resolve_timeout
from .errors import DecodeError, NetworkError, StatusError
from .headers import ResponseHeaders, parse_response_headers

logger = logging.getLogger(__name__)

Params = Sequence[Tuple[str, str]]


class Client(ABC):
    """Abstract base class for clients returning (response, rate limit headers)."""

    def __init__(self):
        super().__init__()

    def _check_response(
        self,
        response: httpx.Response
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        """Parse headers of a 2xx response, raise StatusError otherwise."""
        if response.is_success:
            logger.debug(f"success status: {response.status_code}")
            headers = parse_response_headers(response.headers)
            logger.debug(f"response_headers: {headers!r}")
            return response, headers

        logger.error(
            f"error status: {response.status_code} "
            f"{response.request.method} {response.request.url}"
        )
        logger.error(f"error response body: {response.text}")
        raise StatusError(status_code=response.status_code)

    @abstractmethod
    def get(
        self,
        url: str,
        params: Params | None = None
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        pass

    @abstractmethod
    def post(
        self,
        url: str,
        payload: Dict[str, Any]
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        pass


class PushbulletClient(Client):
    """
    Pushbullet API client.

    Holds only the access token and request options, so one instance can
    be shared between threads. Every call opens its own httpx.Client.
    """

    def __init__(
        self,
        access_token: str,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None
    ):
        """
        Initialize with an access token.

        :param access_token: token sent verbatim in the Access-Token header
        :param timeout: request timeout in seconds, see config.resolve_timeout
        :param transport: optional httpx transport, mainly for tests
        """
        super().__init__()
        if not access_token:
            raise ValueError("access_token must be a non-empty string")
        self._access_token = access_token
        self._timeout = resolve_timeout(timeout)
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        path: str | Path,
        *,
        transport: httpx.BaseTransport | None = None
    ) -> "PushbulletClient":
        """Build a client from a YAML settings file."""
        settings = load_settings(path)
        return cls(
            settings.access_token,
            timeout=settings.timeout,
            transport=transport
        )

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return f"PushbulletClient(access_token={self._masked_token()!r})"

    def _masked_token(self) -> str:
        return f"{self._access_token[:4]}***"

    def _request(
        self,
        method: str,
        url: str,
        **kwargs
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        logger.debug(f"{method} url: {url}")
        logger.debug(f"access_token: {self._masked_token()}")

        try:
            with httpx.Client(
                timeout=self._timeout,
                transport=self._transport
            ) as http:
                response = http.request(
                    method,
                    url,
                    headers={"Access-Token": self._access_token},
                    **kwargs
                )
        except httpx.DecodingError as e:
            logger.error(f"{method} {url} returned an undecodable body: {e}")
            raise DecodeError(f"response body could not be decoded: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise NetworkError(f"request failed: {e}") from e

        return self._check_response(response)

    def get(
        self,
        url: str,
        params: Params | None = None
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        return self._request("GET", url, params=params)

    def post(
        self,
        url: str,
        payload: Dict[str, Any]
    ) -> Tuple[httpx.Response, ResponseHeaders]:
        return self._request("POST", url, json=payload)

    # ---------------- Device API ----------------

    def list_devices(self) -> Tuple[List[device.Device], ResponseHeaders]:
        """Get a list of devices belonging to the current user."""
        return device.list_devices(self)

    # ---------------- Push API ----------------

    def create_push(
        self,
        target: push.Target,
        request: push.PushRequest
    ) -> Tuple[push.Push, ResponseHeaders]:
        """Send a push to a device or another person."""
        return push.create_push(self, target, request)

    def list_push(
        self,
        condition: push.ListCondition
    ) -> Tuple[List[push.Push], ResponseHeaders]:
        """Request push history."""
        return push.list_push(self, condition)
