"""Base model for sensor readings.

Every sensor reading model inherits from :class:`SensorModel` which
provides:

* frozen, immutable instances (a fix never changes once received)
* a ``model_validator(mode="before")`` that drops sentinel values
  (``""``, ``"--"``, NaN) so the field default is used
* a ``raw`` dict that captures the original payload
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pytripmeter.ingestion.normalize import _SENTINELS


def utcnow() -> datetime:
    return datetime.now(UTC)


class SensorModel(BaseModel):
    """Base for sensor reading models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original sensor payload."""

    @model_validator(mode="before")
    @classmethod
    def _clean_sensor_values(cls, values: Any) -> Any:
        """Strip sentinel values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)

        cleaned: dict[str, Any] = {}
        for key, value in original.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value

        # Keep an explicitly passed raw=, otherwise stash the payload itself.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
