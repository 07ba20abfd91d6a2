"""Helpers for command line parsing, string and tag matching."""

from __future__ import annotations

import os
import re
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from osmtool.errors import ArgumentError
from osmtool.geometry import Box, Location
from osmtool.osm import EntityBits, ItemType


class StringMatcher(ABC):
    """Decides whether a string matches."""

    @abstractmethod
    def __call__(self, value: str) -> bool:
        ...

    @abstractmethod
    def __str__(self) -> str:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class AlwaysTrue(StringMatcher):
    def __call__(self, value: str) -> bool:
        return True

    def __str__(self) -> str:
        return "always_true"


class Equal(StringMatcher):
    def __init__(self, text: str) -> None:
        self.text = text

    def __call__(self, value: str) -> bool:
        return value == self.text

    def __str__(self) -> str:
        return f"equal[{self.text}]"


class Prefix(StringMatcher):
    def __init__(self, text: str) -> None:
        self.text = text

    def __call__(self, value: str) -> bool:
        return value.startswith(self.text)

    def __str__(self) -> str:
        return f"prefix[{self.text}]"


class Substring(StringMatcher):
    def __init__(self, text: str) -> None:
        self.text = text

    def __call__(self, value: str) -> bool:
        return self.text in value

    def __str__(self) -> str:
        return f"substring[{self.text}]"


class ListMatcher(StringMatcher):
    def __init__(self, strings: Iterable[str]) -> None:
        self.strings = list(strings)

    def __call__(self, value: str) -> bool:
        return value in self.strings

    def __str__(self) -> str:
        return "list[" + "".join(f"[{s}]" for s in self.strings) + "]"


def _as_matcher(matcher: StringMatcher | str) -> StringMatcher:
    return Equal(matcher) if isinstance(matcher, str) else matcher


class TagMatcher:
    """Matches a tag by key and, optionally, by value."""

    def __init__(
        self,
        key: StringMatcher | str,
        value: StringMatcher | str | None = None,
        invert: bool = False,
    ) -> None:
        self.key_matcher = _as_matcher(key)
        self.value_matcher = None if value is None else _as_matcher(value)
        self.invert = invert

    @property
    def has_value_matcher(self) -> bool:
        return self.value_matcher is not None

    def __call__(self, key: str, value: str) -> bool:
        if not self.key_matcher(key):
            return False
        if self.value_matcher is None:
            return True
        return self.value_matcher(value) != self.invert


class TagsFilter:
    """Ordered list of rules; the first matching rule decides the result."""

    def __init__(self, default_result: bool = False) -> None:
        self.default_result = default_result
        self.rules: list[tuple[bool, TagMatcher]] = []

    def add_rule(self, result: bool, matcher: TagMatcher) -> TagsFilter:
        self.rules.append((result, matcher))
        return self

    def __call__(self, key: str, value: str) -> bool:
        for result, matcher in self.rules:
            if matcher(key, value):
                return result
        return self.default_result

    def match_any_of(self, tags: Mapping[str, str] | Iterable[tuple[str, str]]) -> bool:
        pairs = tags.items() if isinstance(tags, Mapping) else tags
        return any(self(key, value) for key, value in pairs)


def get_filename_suffix(file_name: str) -> str:
    """Return everything after the first dot of the last path component."""
    slash = file_name.rfind("/")
    dot = file_name.find(".", max(slash, 0))
    if dot == -1:
        return ""
    return file_name[dot + 1:]


def yes_no(choice: bool) -> str:
    """Render a flag as a 'yes' or 'no' line for verbose output."""
    word = "yes" if bool(choice) else "no"
    return word + "\n"


def warning(text: str) -> None:
    sys.stderr.write("WARNING: " + text)


def file_size(filename: str | os.PathLike | None) -> int:
    """Size of the named file; 0 for standard input (no name)."""
    if not filename:
        return 0
    return os.path.getsize(filename)


def file_size_sum(filenames: Iterable[str | os.PathLike | None]) -> int:
    return sum(file_size(name) for name in filenames)


_TYPE_CHARS = {
    "n": EntityBits.NODE,
    "w": EntityBits.WAY,
    "r": EntityBits.RELATION,
    "a": EntityBits.AREA,
}


def get_types(string: str) -> EntityBits:
    entities = EntityBits.NOTHING
    for char in string:
        try:
            entities |= _TYPE_CHARS[char]
        except KeyError:
            raise ArgumentError(
                f"Unknown object type '{char}' (allowed are 'n', 'w', 'r', and 'a')."
            ) from None
    return entities


def get_filter_expression(string: str) -> tuple[EntityBits, str]:
    """Split an optional 'types/' prefix off a filter expression."""
    pos = string.find("/")
    if pos == -1:
        return EntityBits.NWR, string
    if pos == 0:
        return EntityBits.NWR, string[1:]
    return get_types(string[:pos]), string[pos + 1:]


def strip_whitespace(string: str) -> str:
    """Remove leading and trailing spaces (spaces only)."""
    return string.strip(" ")


def get_string_matcher(string: str) -> StringMatcher:
    s = strip_whitespace(string)

    if s == "*":
        return AlwaysTrue()

    if not s or (not s.endswith("*") and not s.startswith("*")):
        if "," not in s:
            return Equal(s)
        return ListMatcher(strip_whitespace(part) for part in s.split(","))

    if s.endswith("*") and not s.startswith("*"):
        return Prefix(s[:-1])

    if s.startswith("*"):
        s = s[1:]
    if s.endswith("*"):
        s = s[:-1]
    return Substring(s)


def get_tag_matcher(expression: str) -> TagMatcher:
    key, sep, value = expression.partition("=")
    if not sep:
        return TagMatcher(get_string_matcher(expression))

    invert = key.endswith("!")
    if invert:
        key = key[:-1]
    return TagMatcher(get_string_matcher(key), get_string_matcher(value), invert)


def initialize_tags_filter(tags_filter: TagsFilter, default_result: bool, strings: Iterable[str]) -> None:
    tags_filter.default_result = default_result
    for string in strings:
        if not string:
            raise ValueError("Empty tag filter expression.")
        tags_filter.add_rule(not default_result, get_tag_matcher(string))


_COORDINATE_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_coordinate(text: str, option_name: str) -> float:
    if not _COORDINATE_RE.fullmatch(text):
        raise ArgumentError(f"Can not parse coordinate '{text}' in {option_name} option.")
    return float(text)


def parse_bbox(string: str, option_name: str) -> Box:
    coordinates = string.split(",") if string else []
    if len(coordinates) != 4:
        raise ArgumentError(f"Need exactly four coordinates in {option_name} option.")

    lon1, lat1, lon2, lat2 = (_parse_coordinate(c, option_name) for c in coordinates)
    box = Box()
    box.extend(Location(lon1, lat1))
    box.extend(Location(lon2, lat2))

    if not box.valid():
        raise ArgumentError(
            f"Invalid bounding box in {option_name} option. Format is LONG1,LAT1,LONG2,LAT2."
        )
    return box


def parse_item_type(t: str) -> ItemType:
    if t in ("n", "node"):
        return ItemType.NODE
    if t in ("w", "way"):
        return ItemType.WAY
    if t in ("r", "relation"):
        return ItemType.RELATION
    raise ArgumentError(
        f"Unknown default type '{t}' (Allowed are 'node', 'way', and 'relation')."
    )


def ends_with(string: str, suffix: str) -> bool:
    return string.endswith(suffix)


def show_mbytes(value: int) -> int:
    return value // (1024 * 1024)


def show_gbytes(value: int) -> float:
    return show_mbytes(value) / 1000