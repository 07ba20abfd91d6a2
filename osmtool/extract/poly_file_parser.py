"""Reader for boundary polygons in the Osmosis .poly file format."""

from __future__ import annotations

import os
import re

from osmtool.errors import ConfigError, PolyError
from osmtool.geometry import Area, Location, is_ccw

_NUMBER = r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
_COORDINATES_RE = re.compile(rf"\s*({_NUMBER})(?:\s+|(?=[+-]))({_NUMBER})")


class PolyFileParser:
    """Reads all (multi)polygons of a .poly file into one area.

    The first line of each polygon section is a name and is ignored. Rings
    start with a name line (a leading '!' marks an inner ring), followed by
    one 'lon lat' pair per line and end with 'END'. Each polygon section ends
    with another 'END'.
    """

    def __init__(self, file_name: str | os.PathLike) -> None:
        self.file_name = os.fspath(file_name)
        try:
            with open(self.file_name, encoding="utf-8", newline="") as file:
                text = file.read()
        except OSError as exc:
            raise ConfigError(f"Could not open file '{self.file_name}'") from exc

        lines = (line[:-1] if line.endswith("\r") else line for line in text.split("\n"))
        self._data = [line for line in lines if line]
        self._line = 0
        self._area = Area()

    def _error(self, message: str) -> PolyError:
        return PolyError(f"In file '{self.file_name}' on line {self._line + 1}:\n{message}")

    @property
    def _current(self) -> str:
        return self._data[self._line]

    def _more(self) -> bool:
        return self._line < len(self._data)

    def _parse_coordinates(self) -> Location:
        match = _COORDINATES_RE.match(self._current)
        if not match:
            raise self._error("Expected coordinates or 'END' to end the ring.")
        lon, lat = float(match.group(1)), float(match.group(2))
        location = Location(lon, lat)
        if not location.valid():
            raise ConfigError(f"Invalid location in boundary (multi)polygon: ({lon:f}, {lat:f}).")
        return location

    def _parse_ring(self) -> None:
        is_inner_ring = self._current.startswith("!")
        self._line += 1

        coordinates: list[Location] = []
        while self._more():
            if self._current == "END":
                if len(coordinates) < 3:
                    raise self._error("Expected at least three lines with coordinates.")
                if coordinates[0] != coordinates[-1]:
                    coordinates.append(coordinates[0])

                if is_inner_ring:
                    if is_ccw(coordinates):
                        coordinates.reverse()
                    self._area.add_inner_ring(coordinates)
                else:
                    if not is_ccw(coordinates):
                        coordinates.reverse()
                    self._area.add_outer_ring(coordinates)

                self._line += 1
                return

            coordinates.append(self._parse_coordinates())
            self._line += 1

    def _parse_multipolygon(self) -> None:
        self._line += 1  # the first line holds a name and is ignored

        while self._more():
            if self._current == "END":
                self._line += 1
                if self._line == 2:
                    raise self._error("Need at least one ring in (multi)polygon.")
                return
            self._parse_ring()

        self._line -= 1
        raise self._error("Expected 'END' for end of (multi)polygon.")

    def __call__(self) -> Area:
        """Parse the file and return the area made of all its rings."""
        if not self._data:
            raise PolyError(f"File '{self.file_name}' is empty.")

        self._line = 0
        self._area = Area()
        while self._more():
            self._parse_multipolygon()
        return self._area