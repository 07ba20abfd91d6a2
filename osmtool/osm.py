"""OSM object model and sets of object IDs read from ID files."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, TextIO

from osmtool.geometry import Location


class ItemType(enum.IntEnum):
    UNDEFINED = 0
    NODE = 1
    WAY = 2
    RELATION = 3
    AREA = 4
    CHANGESET = 5

    @property
    def entity_bits(self) -> EntityBits:
        return _ITEM_TYPE_BITS.get(self, EntityBits.NOTHING)


class EntityBits(enum.IntFlag):
    NOTHING = 0
    NODE = 1
    WAY = 2
    RELATION = 4
    NWR = 7
    AREA = 8
    OBJECT = 15
    CHANGESET = 16
    ALL = 31


_ITEM_TYPE_BITS = {
    ItemType.NODE: EntityBits.NODE,
    ItemType.WAY: EntityBits.WAY,
    ItemType.RELATION: EntityBits.RELATION,
    ItemType.AREA: EntityBits.AREA,
    ItemType.CHANGESET: EntityBits.CHANGESET,
}

_CHAR_TO_TYPE = {"n": ItemType.NODE, "w": ItemType.WAY, "r": ItemType.RELATION}


@dataclass
class OSMObject:
    """Common attributes of nodes, ways and relations."""

    type: ClassVar[ItemType] = ItemType.UNDEFINED

    id: int = 0
    version: int = 0
    changeset: int = 0
    timestamp: int = 0
    uid: int = 0
    user: str = ""
    visible: bool = True
    tags: dict[str, str] = field(default_factory=dict)

    def positive_id(self) -> int:
        return abs(self.id)


@dataclass
class Node(OSMObject):
    type: ClassVar[ItemType] = ItemType.NODE

    location: Location = field(default_factory=Location)


@dataclass
class Way(OSMObject):
    type: ClassVar[ItemType] = ItemType.WAY

    nodes: list[int] = field(default_factory=list)


@dataclass
class Member:
    type: ItemType
    ref: int
    role: str = ""

    def positive_ref(self) -> int:
        return abs(self.ref)


@dataclass
class Relation(OSMObject):
    type: ClassVar[ItemType] = ItemType.RELATION

    members: list[Member] = field(default_factory=list)


class IdSets:
    """One set of (positive) IDs each for nodes, ways and relations."""

    def __init__(self) -> None:
        self._sets: dict[ItemType, set[int]] = {
            ItemType.NODE: set(),
            ItemType.WAY: set(),
            ItemType.RELATION: set(),
        }

    def __getitem__(self, item_type: ItemType) -> set[int]:
        try:
            return self._sets[ItemType(item_type)]
        except KeyError:
            raise KeyError(f"No ID set for item type {ItemType(item_type).name.lower()}") from None

    def empty(self) -> bool:
        return not any(self._sets.values())


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_ID_RE = re.compile(r"[+-]?[0-9]+")


def _parse_id(text: str) -> int:
    if _ID_RE.fullmatch(text):
        value = int(text)
        if _INT64_MIN < value < _INT64_MAX:
            return value
    raise ValueError(f"not a valid id: '{text}'")


def string_to_object_id(s: str, default_item_type: ItemType = ItemType.UNDEFINED) -> tuple[ItemType, int]:
    """Parse an ID like 'n123', 'w-4' or '17' into its type and number."""
    if s:
        first = s[0]
        if first in "0123456789-":
            return default_item_type, _parse_id(s)
        item_type = _CHAR_TO_TYPE.get(first)
        if item_type is not None:
            return item_type, _parse_id(s[1:])
    raise ValueError(f"not a valid id: '{s}'")


def add_nodes(way: Way, ids: IdSets) -> None:
    """Add the IDs of all nodes of the way to the node ID set."""
    ids[ItemType.NODE].update(abs(ref) for ref in way.nodes)


def read_id_objects(objects: Iterable[OSMObject], ids: IdSets) -> None:
    """Add the IDs of all given objects to the matching ID sets."""
    for obj in objects:
        ids[obj.type].add(obj.positive_id())


def parse_and_add_id(s: str, ids: IdSets, default_item_type: ItemType) -> None:
    item_type, object_id = string_to_object_id(s, default_item_type)
    if object_id < 0:
        raise RuntimeError("This command does not work with negative IDs")
    ids[item_type].add(object_id)


def read_id_file(stream: TextIO, ids: IdSets, default_item_type: ItemType) -> None:
    """Read one ID per line; anything after a space or '#' is ignored."""
    for raw in stream:
        line = raw.rstrip("\n").strip(" ")
        line = re.split(r"[ #]", line, maxsplit=1)[0]
        if line:
            parse_and_add_id(line, ids, default_item_type)


def no_ids(ids: IdSets) -> bool:
    return ids.empty()