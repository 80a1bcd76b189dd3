from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

from ..core.errors import InvalidArgumentError, OutOfRangeError


# ============================================================
# Linear time scale <-> JD (UTC)
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_MS_PER_DAY = 86400000.0

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _finite(x: float, what: str) -> float:
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise InvalidArgumentError(f"{what} must be a real number, got {type(x).__name__}")
    if not math.isfinite(x):
        raise OutOfRangeError(f"{what} must be finite, got {x!r}")
    return float(x)


def from_timestamp_ms(ms: float) -> float:
    """
    Milliseconds since the Unix epoch -> JD (UTC).

      JD = ms / 86400000 + 2440587.5
    """
    return _finite(ms, "timestamp") / _MS_PER_DAY + _JD_UNIX_EPOCH


def to_timestamp_ms(jd: float) -> float:
    """
    JD (UTC) -> milliseconds since the Unix epoch. Exact algebraic inverse of from_timestamp_ms.
    """
    return (_finite(jd, "Julian date") - _JD_UNIX_EPOCH) * _MS_PER_DAY


# ============================================================
# datetime <-> JD (UTC)
# ============================================================

def datetime_to_timestamp_ms(dt: datetime) -> float:
    """
    datetime -> milliseconds since the Unix epoch.
    Naive datetimes are taken as UTC; the local timezone is never consulted.
    """
    if not isinstance(dt, datetime):
        raise InvalidArgumentError(f"expected datetime, got {type(dt).__name__}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - UNIX_EPOCH
    return delta.days * _MS_PER_DAY + delta.seconds * 1000.0 + delta.microseconds / 1000.0


def to_epoch_offset(jd: float) -> timedelta:
    """
    JD (UTC) -> offset from the Unix epoch, rounded to the microsecond the
    same way to_datetime rounds. Defined for instants datetime cannot hold.
    """
    try:
        return timedelta(milliseconds=to_timestamp_ms(jd))
    except OverflowError as e:
        raise OutOfRangeError(f"Julian date {jd!r} is too far from the Unix epoch") from e


def timestamp_ms_to_datetime(ms: float) -> datetime:
    """
    Milliseconds since the Unix epoch -> timezone-aware datetime in UTC.
    """
    ms = _finite(ms, "timestamp")
    try:
        return UNIX_EPOCH + timedelta(milliseconds=ms)
    except OverflowError as e:
        raise OutOfRangeError(f"timestamp {ms!r} ms is outside the representable datetime range") from e


def from_datetime(dt: datetime) -> float:
    """
    datetime -> JD (UTC).
    """
    return from_timestamp_ms(datetime_to_timestamp_ms(dt))


def to_datetime(jd: float) -> datetime:
    """
    JD (UTC) -> timezone-aware datetime in UTC.
    """
    return timestamp_ms_to_datetime(to_timestamp_ms(jd))
