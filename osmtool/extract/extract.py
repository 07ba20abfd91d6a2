"""Extracts: an output file together with the region it covers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

from osmtool.errors import ConfigError
from osmtool.geometry import Area, Box, Location
from osmtool.option_clean import OptionClean
from osmtool.osm import OSMObject


class ObjectWriter(Protocol):
    """Receives batches of objects and is closed at the end."""

    def write(self, objects: list[OSMObject]) -> None:
        ...

    def close(self) -> None:
        ...


class Extract(ABC):
    """An output with a bounding envelope; objects written are batched."""

    buffer_size = 10_000

    def __init__(self, output: str, description: str, envelope: Box) -> None:
        self.output = output
        self.description = description
        self.envelope = envelope
        self.header_options: list[str] = []
        self._buffer: list[OSMObject] = []
        self._writer: ObjectWriter | None = None
        self._clean: OptionClean | None = None

    def add_header_option(self, name: str, value: str | None = None) -> None:
        """Add 'name=value', or 'name!' to copy the value from the input header."""
        if value is None:
            self.header_options.append(name + "!")
        else:
            self.header_options.append(f"{name}={value}")

    @property
    def writer(self) -> ObjectWriter:
        if self._writer is None:
            raise RuntimeError("Output file of extract is not open.")
        return self._writer

    def open_file(self, writer: ObjectWriter, clean: OptionClean | None = None) -> None:
        self._clean = clean
        self._writer = writer

    def _flush(self) -> None:
        if self._clean is not None:
            self._clean.apply_to(self._buffer)
        self.writer.write(self._buffer)
        self._buffer = []

    def close_file(self) -> None:
        if self._writer is None:
            return
        if self._buffer:
            self._flush()
        self._writer.close()

    def write(self, obj: OSMObject) -> None:
        if self._writer is None:
            raise RuntimeError("Output file of extract is not open.")
        if len(self._buffer) >= self.buffer_size:
            self._flush()
        self._buffer.append(obj)

    def envelope_as_text(self) -> str:
        return str(self.envelope)

    @abstractmethod
    def contains(self, location: Location) -> bool:
        ...

    @abstractmethod
    def geometry_type(self) -> str:
        ...

    @abstractmethod
    def geometry_as_text(self) -> str:
        ...


class ExtractBBox(Extract):
    """Extract of everything inside a bounding box."""

    def __init__(self, output: str, description: str, box: Box) -> None:
        super().__init__(output, description, box)

    def contains(self, location: Location) -> bool:
        return location.valid() and self.envelope.contains(location)

    def geometry_type(self) -> str:
        return "bbox"

    def geometry_as_text(self) -> str:
        return (
            "BOX("
            + self.envelope.bottom_left.as_string(" ")
            + ","
            + self.envelope.top_right.as_string(" ")
            + ")"
        )


Segment = tuple[Location, Location]

_SEGMENTS_PER_BAND = 10
_MAX_BANDS = 10_000


def _ring_segments(ring: Sequence[Location]) -> list[Segment]:
    if not ring:
        raise ConfigError("Ring without any points.")
    return list(zip(ring, ring[1:]))


class ExtractPolygon(Extract):
    """Extract of everything inside a (multi)polygon."""

    def __init__(self, output: str, description: str, area: Area) -> None:
        super().__init__(output, description, area.envelope())
        self.area = area

        segments: list[Segment] = []
        for outer in area.outer_rings():
            segments.extend(_ring_segments(outer))
            for inner in area.inner_rings(outer):
                segments.extend(_ring_segments(inner))

        num_bands = min(max(len(segments) // _SEGMENTS_PER_BAND, 1), _MAX_BANDS)
        self._bands: list[list[Segment]] = [[] for _ in range(num_bands + 1)]
        self._dy = max((self._y_max - self._y_min + num_bands - 1) // num_bands, 1)

        last = len(self._bands) - 1
        for segment in segments:
            low, high = sorted((segment[0].y, segment[1].y))
            band_min = min(max((low - self._y_min) // self._dy, 0), last)
            band_max = min(max((high - self._y_min) // self._dy, 0), last)
            for band in range(band_min, band_max + 1):
                self._bands[band].append(segment)

    @property
    def _y_min(self) -> int:
        return self.envelope.bottom_left.y

    @property
    def _y_max(self) -> int:
        return self.envelope.top_right.y

    def contains(self, location: Location) -> bool:
        """Point-in-polygon test using only the segments of the location's band."""
        if not location.valid() or not self.envelope.contains(location):
            return False

        band = (location.y - self._y_min) // self._dy
        inside = False
        for first, second in self._bands[band]:
            if first == location or second == location:
                return True
            if (second.y > location.y) != (first.y > location.y):
                ax = first.x - second.x
                ay = first.y - second.y
                tx = location.x - second.x
                ty = location.y - second.y
                comp = tx * ay < ax * ty
                if (ay > 0) == comp:
                    inside = not inside
        return inside

    def geometry_type(self) -> str:
        return "polygon"

    def geometry_as_text(self) -> str:
        """The area as a WKT MULTIPOLYGON."""

        def ring_text(ring: Sequence[Location]) -> str:
            return "(" + ",".join(loc.as_string(" ") for loc in ring) + ")"

        polygons = []
        for outer in self.area.outer_rings():
            rings = [ring_text(outer)] + [ring_text(r) for r in self.area.inner_rings(outer)]
            polygons.append("(" + ",".join(rings) + ")")
        return "MULTIPOLYGON(" + ",".join(polygons) + ")"