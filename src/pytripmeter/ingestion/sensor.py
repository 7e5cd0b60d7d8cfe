"""Sensor payload parsing.

Turns raw sensor payloads into fix models.  Accepts gpsd ``TPV`` and
``ATT`` reports, flat JSON records, and records that wrap the reading in
a ``data`` object.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pytripmeter.models.fix import HeadingFix, PositionFix

_logger = logging.getLogger(__name__)

# gpsd reports mode 0/1 when it has no position fix.
_GPSD_MIN_FIX_MODE = 2


def _flatten(payload: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(payload)
    nested = payload.get("data")
    if isinstance(nested, Mapping):
        merged.update(nested)
    merged.setdefault("raw", dict(payload))
    return merged


def position_fix_from_payload(payload: Mapping[str, Any]) -> PositionFix | None:
    """Parse a position payload.

    Returns ``None`` when the payload carries no usable coordinates
    (for example a gpsd report without a fix).  Everything else is
    normalized rather than rejected.
    """
    report_class = payload.get("class")
    if report_class is not None and report_class != "TPV":
        return None
    mode = payload.get("mode")
    if report_class == "TPV" and isinstance(mode, int) and mode < _GPSD_MIN_FIX_MODE:
        _logger.debug("Skipping gpsd report without fix (mode=%s)", mode)
        return None

    try:
        return PositionFix.model_validate(_flatten(payload))
    except ValidationError:
        _logger.debug("Unusable position payload: %s", payload, exc_info=True)
        return None


def heading_fix_from_payload(payload: Mapping[str, Any]) -> HeadingFix | None:
    """Parse a heading payload; ``None`` when it has no usable bearing."""
    report_class = payload.get("class")
    if report_class is not None and report_class != "ATT":
        return None

    try:
        return HeadingFix.model_validate(_flatten(payload))
    except ValidationError:
        _logger.debug("Unusable heading payload: %s", payload, exc_info=True)
        return None
