"""Map-unit bounding regions for route export."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pytripmeter.geo import to_map_point
from pytripmeter.models.fix import PositionFix


@dataclass(frozen=True, slots=True)
class MapRegion:
    """Axis-aligned rectangle on the Web-Mercator plane, in map units."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def inset(self, dx: float, dy: float) -> MapRegion:
        """Shrink by *dx*/*dy* on every side; negative values grow it."""
        return MapRegion(
            x=self.x + dx,
            y=self.y + dy,
            width=max(0.0, self.width - 2 * dx),
            height=max(0.0, self.height - 2 * dy),
        )

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.max_x and self.y <= y <= self.max_y


def bounding_region(fixes: Iterable[PositionFix]) -> MapRegion | None:
    """Smallest region covering every fix; ``None`` for an empty route."""
    points = [to_map_point(fix.latitude, fix.longitude) for fix in fixes]
    if not points:
        return None
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    min_x, min_y = min(xs), min(ys)
    return MapRegion(x=min_x, y=min_y, width=max(xs) - min_x, height=max(ys) - min_y)


def padded_region(fixes: Iterable[PositionFix], padding: float) -> MapRegion | None:
    """Bounding region grown by *padding* map units on each side."""
    region = bounding_region(fixes)
    if region is None:
        return None
    return region.inset(-padding, -padding)
