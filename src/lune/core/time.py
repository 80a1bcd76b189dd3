from __future__ import annotations
import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from .errors import InvalidArgumentError, OutOfRangeError
from ..reference import astro_args as aa
from ..reference import julian

Instant = Union[datetime, int, float]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc_datetime(value: Optional[Instant], *, default_now: bool = False) -> datetime:
    """
    Coerce an instant to a timezone-aware UTC datetime.

    Accepts a datetime (naive values are UTC) or a real number of
    milliseconds since the Unix epoch. None means "now" when default_now is set.
    """
    if value is None:
        if default_now:
            return utc_now()
        raise InvalidArgumentError("an instant is required")
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError as e:
            raise OutOfRangeError(f"{value!r} cannot be expressed in UTC") from e
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return julian.timestamp_ms_to_datetime(value)
    raise InvalidArgumentError(f"expected datetime or epoch milliseconds, got {type(value).__name__}")


UTC_MIN = datetime.min.replace(tzinfo=timezone.utc)
UTC_MAX = datetime.max.replace(tzinfo=timezone.utc)


def days_before(dt: datetime, days: float) -> datetime:
    """dt minus `days`, clamped to the representable datetime range."""
    try:
        return dt - timedelta(days=days)
    except OverflowError:
        return UTC_MIN if days > 0 else UTC_MAX


def lunation_index_estimate(dt: datetime) -> int:
    """
    Coarse lunation index k counted from the 1900 January mean new moon:
      k = floor(12.3685 * (year + (month - 1)/12 - 1900))
    Calendar fields are read in UTC.
    """
    dt = dt.astimezone(timezone.utc)
    return int(math.floor(aa.LUNATIONS_PER_YEAR * (dt.year + (1.0 / 12.0) * (dt.month - 1) - 1900)))
