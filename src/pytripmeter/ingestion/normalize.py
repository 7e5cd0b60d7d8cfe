"""Normalization helpers.

Centralizes defensive parsing of sensor values.  Malformed readings are
coerced to a usable default instead of being rejected: a clamped metric
on the dashboard is better than a missing one.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

# Sentinel strings sensors and log files use for "not available".
_SENTINELS = frozenset({"", "--", "n/a", "NaN", "nan"})

# Threshold to distinguish epoch seconds from milliseconds.
_MS_THRESHOLD = 1e11


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp_latitude(value: float) -> float:
    return clamp(value, -90.0, 90.0)


def wrap_longitude(value: float) -> float:
    """Wrap a longitude into ``[-180, 180)``."""
    if -180.0 <= value < 180.0:
        return value
    return ((value + 180.0) % 360.0) - 180.0


def wrap_degrees(value: float) -> float:
    """Wrap a bearing into ``[0, 360)``."""
    wrapped = value % 360.0
    # -1e-20 % 360 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def normalize_timestamp_seconds(value: Any) -> float | None:
    """Normalize epoch timestamps to seconds.

    - Empty/missing -> None
    - <= 0 -> None
    - Milliseconds (> 1e11) -> seconds
    """

    ts = safe_float(value)
    if ts is None or ts <= 0:
        return None
    if ts > _MS_THRESHOLD:
        ts /= 1000.0
    return ts


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a sensor timestamp to a timezone-aware UTC datetime.

    Accepts datetimes (naive ones are assumed UTC), epoch seconds or
    milliseconds, and ISO 8601 strings such as gpsd's
    ``"2026-01-01T12:00:00.000Z"``.  Returns ``None`` when the value
    cannot be interpreted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, str):
        text = value.strip()
        if text in _SENTINELS:
            return None
        if safe_float(text) is None:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
            return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)
    seconds = normalize_timestamp_seconds(value)
    if seconds is None:
        return None
    return datetime.fromtimestamp(seconds, tz=UTC)
