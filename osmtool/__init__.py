"""Geometry, OSM object, tag-matching and cleaning helpers for OpenStreetMap extracts."""

__version__ = "0.1.0"