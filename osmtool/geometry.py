"""Coordinates, fixed-point locations, bounding boxes and areas."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

COORDINATE_PRECISION = 10_000_000
UNDEFINED_COORDINATE = 2_147_483_647


def _to_fixed(value: float) -> int:
    if not math.isfinite(value):
        return UNDEFINED_COORDINATE
    scaled = value * COORDINATE_PRECISION
    # round half away from zero
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def _format_fixed(value: int) -> str:
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), COORDINATE_PRECISION)
    text = f"{sign}{whole}"
    if frac:
        text += "." + f"{frac:07d}".rstrip("0")
    return text


@dataclass(frozen=True)
class Coordinates:
    """A pair of floating point coordinates."""

    x: float
    y: float


class Location:
    """A longitude/latitude pair stored as fixed-point integers."""

    __slots__ = ("_x", "_y")

    def __init__(self, lon: float | None = None, lat: float | None = None) -> None:
        if lon is None or lat is None:
            self._x = UNDEFINED_COORDINATE
            self._y = UNDEFINED_COORDINATE
        else:
            self._x = _to_fixed(lon)
            self._y = _to_fixed(lat)

    @classmethod
    def from_fixed(cls, x: int, y: int) -> Location:
        """Create a location from fixed-point coordinates."""
        location = cls()
        location._x = int(x)
        location._y = int(y)
        return location

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def lon(self) -> float:
        return self._x / COORDINATE_PRECISION

    @property
    def lat(self) -> float:
        return self._y / COORDINATE_PRECISION

    def is_defined(self) -> bool:
        return self._x != UNDEFINED_COORDINATE or self._y != UNDEFINED_COORDINATE

    def valid(self) -> bool:
        """Is this location inside the valid longitude/latitude range?"""
        return (
            -180 * COORDINATE_PRECISION <= self._x <= 180 * COORDINATE_PRECISION
            and -90 * COORDINATE_PRECISION <= self._y <= 90 * COORDINATE_PRECISION
        )

    def as_string(self, separator: str = ",") -> str:
        """Return 'lon<separator>lat' with trailing zeros removed."""
        if not self.valid():
            raise ValueError("invalid location")
        return _format_fixed(self._x) + separator + _format_fixed(self._y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        if not self.is_defined():
            return "Location()"
        return f"Location({self.lon!r}, {self.lat!r})"


class Box:
    """An axis-aligned bounding box made of two locations."""

    def __init__(self, bottom_left: Location | None = None, top_right: Location | None = None) -> None:
        self.bottom_left = bottom_left if bottom_left is not None else Location()
        self.top_right = top_right if top_right is not None else Location()

    def extend(self, location: Location) -> Box:
        """Grow the box so it includes the location; invalid locations are ignored."""
        if location.valid():
            if self.bottom_left.is_defined():
                self.bottom_left = Location.from_fixed(
                    min(self.bottom_left.x, location.x), min(self.bottom_left.y, location.y)
                )
                self.top_right = Location.from_fixed(
                    max(self.top_right.x, location.x), max(self.top_right.y, location.y)
                )
            else:
                self.bottom_left = location
                self.top_right = location
        return self

    def valid(self) -> bool:
        return self.bottom_left.valid() and self.top_right.valid()

    def contains(self, location: Location) -> bool:
        return (
            self.bottom_left.x <= location.x <= self.top_right.x
            and self.bottom_left.y <= location.y <= self.top_right.y
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return self.bottom_left == other.bottom_left and self.top_right == other.top_right

    def __str__(self) -> str:
        if not self.bottom_left.is_defined():
            return "(undefined)"
        values = (self.bottom_left.lon, self.bottom_left.lat, self.top_right.lon, self.top_right.lat)
        return "(" + ",".join(format(v, "g") for v in values) + ")"

    def __repr__(self) -> str:
        return f"Box({self.bottom_left!r}, {self.top_right!r})"


Ring = tuple[Location, ...]


class Area:
    """A (multi)polygon made of outer rings, each followed by its inner rings."""

    def __init__(self) -> None:
        self._items: list[tuple[bool, Ring]] = []

    def add_outer_ring(self, locations: Iterable[Location]) -> Ring:
        ring = tuple(locations)
        self._items.append((True, ring))
        return ring

    def add_inner_ring(self, locations: Iterable[Location]) -> Ring:
        ring = tuple(locations)
        self._items.append((False, ring))
        return ring

    def outer_rings(self) -> list[Ring]:
        return [ring for is_outer, ring in self._items if is_outer]

    def inner_rings(self, outer_ring: Ring) -> list[Ring]:
        """Return the inner rings that follow the given outer ring."""
        start = self._find_outer(outer_ring)
        inner: list[Ring] = []
        for is_outer, ring in self._items[start + 1:]:
            if is_outer:
                break
            inner.append(ring)
        return inner

    def _find_outer(self, outer_ring: Ring) -> int:
        outers = [(pos, ring) for pos, (is_outer, ring) in enumerate(self._items) if is_outer]
        for pos, ring in outers:
            if ring is outer_ring:
                return pos
        for pos, ring in outers:
            if ring == tuple(outer_ring):
                return pos
        raise ValueError("Ring is not an outer ring of this area.")

    def num_rings(self) -> tuple[int, int]:
        outer = sum(1 for is_outer, _ in self._items if is_outer)
        return outer, len(self._items) - outer

    def envelope(self) -> Box:
        box = Box()
        for ring in self.outer_rings():
            for location in ring:
                box.extend(location)
        return box


def _xy(point: Coordinates | Location) -> tuple[float, float]:
    if isinstance(point, Location):
        return point.lon, point.lat
    return point.x, point.y


def calculate_double_area(coordinates: Sequence[Coordinates | Location]) -> float:
    """Return twice the signed area of the ring."""
    if len(coordinates) < 2:
        raise ValueError("Need at least two coordinates to calculate an area.")
    points = [_xy(p) for p in coordinates]
    return sum(px * cy - cx * py for (px, py), (cx, cy) in zip(points, points[1:]))


def is_ccw(coordinates: Sequence[Coordinates | Location]) -> bool:
    """Is the ring defined by the coordinates counter-clockwise?"""
    return calculate_double_area(coordinates) > 0