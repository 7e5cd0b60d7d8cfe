"""Compass heading models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pytripmeter._constants import NO_HEADING


class HeadingLabel(StrEnum):
    """Cardinal and intercardinal compass points, clockwise from north."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


class HeadingState(BaseModel):
    """Latest heading: the discretized label and the continuous bearing.

    ``label`` and ``degrees`` are ``None`` until the first heading fix.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: HeadingLabel | None = None
    degrees: float | None = None

    @property
    def display(self) -> str:
        return NO_HEADING if self.label is None else self.label.value
