"""Custom exception hierarchy for pytripmeter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytripmeter.export.snapshot import SnapshotRequest


class TripMeterError(Exception):
    """Base exception for all pytripmeter errors."""


class TripConfigError(TripMeterError):
    """Invalid or missing configuration."""


class RouteExportError(TripMeterError):
    """Rendering the route into an image failed.

    The trip state and the recorded route are never affected by an
    export failure; a new export has to be requested explicitly.
    """


class SnapshotError(RouteExportError):
    """The map snapshot collaborator failed, timed out or returned nothing."""

    def __init__(
        self,
        message: str,
        *,
        request: SnapshotRequest | None = None,
    ) -> None:
        self.request = request
        super().__init__(message)
