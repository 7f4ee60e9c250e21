"""
headers.py

Rate limit headers returned with every Pushbullet API response.
A missing or malformed header leaves the matching field as None; it never
fails an otherwise successful call.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Mapping, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RATELIMIT_LIMIT = "X-Ratelimit-Limit"
RATELIMIT_REMAINING = "X-Ratelimit-Remaining"
RATELIMIT_RESET = "X-Ratelimit-Reset"

# signed 64 bit, ASCII digits only
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class ResponseHeaders(BaseModel):
    """Rate limit accounting of a single response."""
    ratelimit_limit: Optional[int] = None
    ratelimit_remaining: Optional[int] = None
    # unix seconds
    ratelimit_reset: Optional[int] = None

    def ratelimit_reset_time(self) -> Optional[datetime]:
        """Get `ratelimit_reset` as a UTC datetime, None if absent or out of range."""
        if self.ratelimit_reset is None:
            return None
        try:
            return datetime.fromtimestamp(self.ratelimit_reset, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            logger.warning(
                f"ratelimit_reset {self.ratelimit_reset} is out of datetime range"
            )
            return None


def _parse_int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if value is None:
        logger.debug(f"Header {name} not present in response")
        return None
    value = value.strip()
    if _INT_PATTERN.fullmatch(value):
        parsed = int(value, 10)
        if _INT64_MIN <= parsed <= _INT64_MAX:
            return parsed
    logger.warning(f"Ignoring unparsable header {name}: {value!r}")
    return None


def parse_response_headers(headers: Mapping[str, str]) -> ResponseHeaders:
    """
    Extract the rate limit headers.

    :param headers: case-insensitive header mapping, e.g. `httpx.Headers`
    :return: ResponseHeaders with absent fields left as None
    """
    return ResponseHeaders(
        ratelimit_limit=_parse_int_header(headers, RATELIMIT_LIMIT),
        ratelimit_remaining=_parse_int_header(headers, RATELIMIT_REMAINING),
        ratelimit_reset=_parse_int_header(headers, RATELIMIT_RESET),
    )
