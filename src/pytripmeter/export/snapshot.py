"""Map snapshot collaborators.

The exporter does not render maps itself.  It asks a
:class:`MapSnapshotter` for a background image of a region together
with a function projecting coordinates into that image.  Real
implementations are typically slow (network or disk bound); the
coroutine interface lets the caller cancel them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Protocol

from PIL import Image

from pytripmeter._constants import PLAIN_BACKGROUND_DARK, PLAIN_BACKGROUND_LIGHT
from pytripmeter.export.region import MapRegion
from pytripmeter.geo import to_map_point

_logger = logging.getLogger(__name__)

Projection = Callable[[float, float], tuple[float, float]]
"""Maps ``(latitude, longitude)`` to ``(x, y)`` pixel coordinates."""


@dataclass(frozen=True, slots=True)
class SnapshotRequest:
    """What the exporter asks the map collaborator to render."""

    region: MapRegion
    width: int
    height: int
    map_type: str = "standard"
    shows_buildings: bool = True
    dark_appearance: bool = True


@dataclass(frozen=True, slots=True)
class MapSnapshot:
    """Background raster plus the projection matching it."""

    image: Image.Image
    project: Projection


class MapSnapshotter(Protocol):
    async def snapshot(self, request: SnapshotRequest) -> MapSnapshot: ...


def fit_projection(region: MapRegion, width: int, height: int) -> Projection:
    """Linear map-unit projection fitting *region* into a pixel box.

    The aspect ratio is preserved; the region is centred along the
    axis with spare room.
    """
    region_width = region.width if region.width > 0 else 1.0
    region_height = region.height if region.height > 0 else 1.0
    scale = min(width / region_width, height / region_height)
    offset_x = (width - region_width * scale) / 2.0
    offset_y = (height - region_height * scale) / 2.0

    def project(lat: float, lon: float) -> tuple[float, float]:
        x, y = to_map_point(lat, lon)
        return (offset_x + (x - region.x) * scale, offset_y + (y - region.y) * scale)

    return project


class PlainSnapshotter:
    """Offline snapshotter: solid background, exact linear projection.

    Deterministic, so two exports of the same route are identical
    pixel for pixel.
    """

    def __init__(self, background: tuple[int, int, int] | None = None) -> None:
        self._background = background

    def render(self, request: SnapshotRequest) -> MapSnapshot:
        color = self._background
        if color is None:
            color = PLAIN_BACKGROUND_DARK if request.dark_appearance else PLAIN_BACKGROUND_LIGHT
        image = Image.new("RGB", (request.width, request.height), color)
        return MapSnapshot(image=image, project=fit_projection(request.region, request.width, request.height))

    async def snapshot(self, request: SnapshotRequest) -> MapSnapshot:
        return self.render(request)


class ExecutorSnapshotter:
    """Runs a blocking snapshot function in an executor.

    The result is delivered back on the calling event loop, so the
    exporter never touches shared state from the worker thread.
    """

    def __init__(
        self,
        render: Callable[[SnapshotRequest], MapSnapshot],
        *,
        executor: Executor | None = None,
    ) -> None:
        self._render = render
        self._executor = executor

    async def snapshot(self, request: SnapshotRequest) -> MapSnapshot:
        loop = asyncio.get_running_loop()
        _logger.debug("Requesting map snapshot %dx%d for %s", request.width, request.height, request.region)
        return await loop.run_in_executor(self._executor, self._render, request)
