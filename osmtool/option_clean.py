"""The --clean option: removal of metadata attributes from OSM objects."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from osmtool.errors import ArgumentError
from osmtool.osm import OSMObject


class CleanAttribute(enum.Flag):
    NONE = 0
    VERSION = enum.auto()
    CHANGESET = enum.auto()
    TIMESTAMP = enum.auto()
    UID = enum.auto()
    USER = enum.auto()


_BY_NAME = {
    "version": CleanAttribute.VERSION,
    "changeset": CleanAttribute.CHANGESET,
    "timestamp": CleanAttribute.TIMESTAMP,
    "uid": CleanAttribute.UID,
    "user": CleanAttribute.USER,
}


class OptionClean:
    """Which metadata attributes to clear from objects before they are written."""

    def __init__(self) -> None:
        self.attributes = CleanAttribute.NONE

    def setup(self, clean: Iterable[str] | None) -> None:
        """Add the named attributes; raise ArgumentError on unknown names."""
        for name in clean or ():
            try:
                self.attributes |= _BY_NAME[name]
            except KeyError:
                raise ArgumentError(f"Unknown attribute on --clean option: '{name}'") from None

    def apply_to(self, objects: Iterable[OSMObject]) -> None:
        """Clear the selected attributes on every object, in place."""
        if not self.attributes:
            return
        attrs = self.attributes
        for obj in objects:
            if attrs & CleanAttribute.VERSION:
                obj.version = 0
            if attrs & CleanAttribute.CHANGESET:
                obj.changeset = 0
            if attrs & CleanAttribute.TIMESTAMP:
                obj.timestamp = 0
            if attrs & CleanAttribute.UID:
                obj.uid = 0
            if attrs & CleanAttribute.USER:
                obj.user = ""

    def __str__(self) -> str:
        if not self.attributes:
            return "(none)"
        return ",".join(name for name, flag in _BY_NAME.items() if self.attributes & flag)