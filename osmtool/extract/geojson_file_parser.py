"""Reader for boundary (multi)polygons in GeoJSON files."""

from __future__ import annotations

import json
import os
from typing import Any, NoReturn

from osmtool.errors import ConfigError, GeoJSONError
from osmtool.geometry import Area, Coordinates, Location, is_ccw


def get_value_as_string(obj: dict[str, Any], key: str) -> str:
    """Return the string value for key, '' if missing; raise if not a string."""
    if not isinstance(obj, dict):
        raise ConfigError("Expected a JSON object.")
    if key not in obj:
        return ""
    value = obj[key]
    if isinstance(value, str):
        return value
    raise ConfigError(f"Value for name '{key}' must be a string.")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_coordinate(value: Any) -> Coordinates:
    if not isinstance(value, list):
        raise ConfigError("Coordinates must be an array.")
    if len(value) != 2:
        raise ConfigError("Coordinates array must have exactly two elements.")
    if _is_number(value[0]) and _is_number(value[1]):
        return Coordinates(float(value[0]), float(value[1]))
    raise ConfigError("Coordinates array must contain numbers.")


def _parse_ring(value: Any) -> list[Coordinates]:
    if not isinstance(value, list):
        raise ConfigError("Ring must be an array.")
    if len(value) < 3:
        raise ConfigError("Ring must contain at least three coordinate pairs.")
    return [_parse_coordinate(item) for item in value]


def _ring_locations(ring: list[Coordinates]) -> list[Location]:
    locations = []
    for c in ring:
        location = Location(c.x, c.y)
        if not location.valid():
            raise ConfigError(f"Invalid location in boundary (multi)polygon: ({c.x:f}, {c.y:f}).")
        locations.append(location)
    return locations


def _parse_rings(value: Any, area: Area) -> None:
    if not isinstance(value, list):
        raise ConfigError("Polygon must be an array.")
    if not value:
        raise ConfigError("Polygon must contain at least one ring.")

    outer_ring = _parse_ring(value[0])
    if not is_ccw(outer_ring):
        outer_ring.reverse()
    area.add_outer_ring(_ring_locations(outer_ring))

    for item in value[1:]:
        inner_ring = _parse_ring(item)
        if is_ccw(inner_ring):
            inner_ring.reverse()
        area.add_inner_ring(_ring_locations(inner_ring))


def parse_polygon_array(value: Any) -> Area:
    """Build an area from the coordinates array of a GeoJSON Polygon."""
    area = Area()
    _parse_rings(value, area)
    return area


def parse_multipolygon_array(value: Any) -> Area:
    """Build an area from the coordinates array of a GeoJSON MultiPolygon."""
    if not isinstance(value, list):
        raise ConfigError("Multipolygon must be an array.")
    if not value:
        raise ConfigError("Multipolygon must contain at least one polygon array.")

    area = Area()
    for polygon in value:
        if not isinstance(polygon, list):
            raise ConfigError("Polygon must be an array.")
        _parse_rings(polygon, area)
    return area


class GeoJSONFileParser:
    """Reads the first (multi)polygon feature of a GeoJSON file."""

    def __init__(self, file_name: str | os.PathLike) -> None:
        self.file_name = os.fspath(file_name)
        try:
            with open(self.file_name, encoding="utf-8") as file:
                self._text = file.read()
        except OSError as exc:
            raise ConfigError(f"Could not open file '{self.file_name}'.") from exc

    def _error(self, message: str) -> NoReturn:
        raise GeoJSONError(f"In file '{self.file_name}':\n{message}")

    def _reject_constant(self, name: str) -> NoReturn:
        self._error(f"JSON error: invalid literal '{name}'")

    def _parse_top(self, top: dict[str, Any]) -> Area:
        if "geometry" not in top:
            self._error("Missing 'geometry' name.")
        geometry = top["geometry"]
        if not isinstance(geometry, dict):
            self._error("Expected 'geometry' value to be an object.")

        geometry_type = get_value_as_string(geometry, "type")
        if not geometry_type:
            self._error("Missing 'geometry.type'.")
        if geometry_type not in ("Polygon", "MultiPolygon"):
            self._error("Expected 'geometry.type' value to be 'Polygon' or 'MultiPolygon'.")

        if "coordinates" not in geometry:
            self._error("Missing 'coordinates' name in 'geometry' object.")
        coordinates = geometry["coordinates"]
        if not isinstance(coordinates, list):
            self._error("Expected 'geometry.coordinates' value to be an array.")

        if geometry_type == "Polygon":
            return parse_polygon_array(coordinates)
        return parse_multipolygon_array(coordinates)

    def __call__(self) -> Area:
        """Parse the file and return the area."""
        try:
            doc = json.loads(self._text, parse_constant=self._reject_constant)
        except json.JSONDecodeError as exc:
            self._error(f"JSON error at offset {exc.pos} : {exc.msg}")

        if not isinstance(doc, dict):
            self._error("Top-level value must be an object.")

        doc_type = get_value_as_string(doc, "type")
        if not doc_type:
            self._error("Expected 'type' name with the value 'Feature' or 'FeatureCollection'.")

        if doc_type == "Feature":
            return self._parse_top(doc)

        if doc_type == "FeatureCollection":
            if "features" not in doc:
                self._error("Missing 'features' name.")
            features = doc["features"]
            if not isinstance(features, list):
                self._error("Expected 'features' value to be an array.")
            if not features:
                raise ConfigError("Features array must contain at least one polygon.")

            first_feature = features[0]
            if not isinstance(first_feature, dict):
                self._error("Expected values of 'features' array to be a objects.")
            if get_value_as_string(first_feature, "type") != "Feature":
                self._error("Expected 'type' value to be 'Feature'.")
            return self._parse_top(first_feature)

        self._error("Expected 'type' value to be 'Feature'.")