"""Route rasterization and export.

Composes the recorded route onto a map snapshot:

1. bound the route in Web-Mercator map units and pad the box,
2. ask the snapshot collaborator for a background of that region,
3. project every fix into pixel space and stroke one polyline over it.

A failed snapshot fails the whole export; nothing partial is returned.
"""

from __future__ import annotations

import asyncio
import io
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw

from pytripmeter.config import TripConfig
from pytripmeter.exceptions import RouteExportError, SnapshotError
from pytripmeter.export.region import MapRegion, padded_region
from pytripmeter.export.snapshot import MapSnapshot, MapSnapshotter, SnapshotRequest
from pytripmeter.models.fix import PositionFix

_logger = logging.getLogger(__name__)

PixelPoint = tuple[float, float]


@dataclass(frozen=True, slots=True)
class ExportImage:
    """A composed route image.

    Created fresh for every export; the library keeps no reference to it.
    """

    image: Image.Image
    pixel_points: tuple[PixelPoint, ...]
    request: SnapshotRequest

    @property
    def region(self) -> MapRegion:
        return self.request.region

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        self.image.save(target, format="PNG")
        return target


def build_snapshot_request(route: Sequence[PositionFix], config: TripConfig) -> SnapshotRequest | None:
    """Snapshot request covering *route*; ``None`` for an empty route."""
    region = padded_region(route, config.export_padding)
    if region is None:
        return None
    return SnapshotRequest(
        region=region,
        width=config.export_size,
        height=config.export_size,
        map_type=config.map_type,
        shows_buildings=config.shows_buildings,
        dark_appearance=config.dark_appearance,
    )


def draw_polyline(
    draw: ImageDraw.ImageDraw,
    points: Sequence[PixelPoint],
    *,
    color: tuple[int, int, int],
    width: int,
) -> None:
    """Stroke a connected path with rounded joins and caps.

    A single point is a path without segments and draws nothing.
    """
    if len(points) < 2:
        return
    draw.line(list(points), fill=color, width=width, joint="curve")
    # ImageDraw has no line caps; round them off with discs at both ends.
    radius = width / 2.0
    for x, y in (points[0], points[-1]):
        draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)


def compose_route_image(
    snapshot: MapSnapshot,
    route: Sequence[PositionFix],
    request: SnapshotRequest,
    *,
    color: tuple[int, int, int],
    stroke_width: int,
) -> ExportImage:
    """Draw *route* over a copy of the snapshot background."""
    size = (request.width, request.height)
    canvas = snapshot.image.convert("RGB")
    if canvas.size != size:
        canvas = canvas.resize(size)

    points = tuple(snapshot.project(fix.latitude, fix.longitude) for fix in route)
    draw_polyline(ImageDraw.Draw(canvas), points, color=color, width=stroke_width)
    return ExportImage(image=canvas, pixel_points=points, request=request)


class RouteExporter:
    """Turns a route into a shareable image.

    Usage::

        exporter = RouteExporter(PlainSnapshotter(), share=upload)
        image = await exporter.export(session.current_route())
    """

    def __init__(
        self,
        snapshotter: MapSnapshotter,
        *,
        config: TripConfig | None = None,
        share: Callable[[ExportImage], None] | None = None,
    ) -> None:
        self._snapshotter = snapshotter
        self._config = config or TripConfig()
        self._share = share

    @property
    def config(self) -> TripConfig:
        return self._config

    async def export(self, route: Sequence[PositionFix]) -> ExportImage | None:
        """Render *route* and hand the result to the share target.

        Returns ``None`` without contacting the snapshotter when the
        route is empty.

        Raises
        ------
        SnapshotError
            The map snapshot failed, timed out or returned nothing.
        RouteExportError
            The share target rejected the image.
        """
        points = tuple(route)
        request = build_snapshot_request(points, self._config)
        if request is None:
            _logger.debug("Route is empty, nothing to export")
            return None

        snapshot = await self._take_snapshot(request)
        image = compose_route_image(
            snapshot,
            points,
            request,
            color=self._config.accent_color,
            stroke_width=self._config.stroke_width,
        )
        _logger.info("Exported route with %d points at %dx%d", len(points), request.width, request.height)

        if self._share is not None:
            try:
                self._share(image)
            except Exception as exc:
                raise RouteExportError(f"sharing the route image failed: {exc}") from exc
        return image

    async def _take_snapshot(self, request: SnapshotRequest) -> MapSnapshot:
        timeout = self._config.snapshot_timeout
        try:
            if timeout is None:
                snapshot = await self._snapshotter.snapshot(request)
            else:
                snapshot = await asyncio.wait_for(self._snapshotter.snapshot(request), timeout)
        except TimeoutError as exc:
            _logger.warning("Map snapshot timed out (timeout=%ss)", timeout)
            raise SnapshotError(f"map snapshot timed out (timeout={timeout}s)", request=request) from exc
        except Exception as exc:
            _logger.warning("Map snapshot failed: %s", exc)
            raise SnapshotError(f"map snapshot failed: {exc}", request=request) from exc

        if snapshot is None:
            raise SnapshotError("map snapshot returned no image", request=request)
        return snapshot
