"""
timestamps.py

Conversion between Pushbullet timestamps (floating point seconds since the
Unix epoch) and timezone-aware UTC datetimes.
"""

import math
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MICROS_PER_SECOND = 1_000_000


def to_datetime(seconds: float) -> datetime:
    """
    Convert float Unix seconds to a UTC datetime.

    The fractional part is rounded to the nearest microsecond (not
    truncated), carrying into the whole seconds when it rounds up.
    """
    fraction, whole = math.modf(seconds)
    whole = int(whole)
    micros = round(fraction * MICROS_PER_SECOND)
    if micros < 0:
        whole -= 1
        micros += MICROS_PER_SECOND
    if micros >= MICROS_PER_SECOND:
        whole += 1
        micros -= MICROS_PER_SECOND
    return EPOCH + timedelta(seconds=whole, microseconds=micros)


def to_float_seconds(dt: datetime) -> float:
    """Convert a datetime to float Unix seconds. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - EPOCH
    whole = delta.days * 86400 + delta.seconds
    return whole + delta.microseconds / MICROS_PER_SECOND
