"""
Property order checker.

Declarations fall into four canonical groups which must appear in
non-decreasing order within a rule block: Position, Box, Typography,
Decoration.

Properties missing from the lookup table are classified as Decoration,
the last group. Unknown properties are the least likely to be ordered
deliberately relative to the typed ones, so they never force an earlier
declaration to be reported.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

VENDOR_PREFIX = re.compile(r"^-(?:webkit|moz|ms|o)-")


class PropertyGroup(Enum):
    """Canonical property groups, in required order."""

    POSITION = "position"
    BOX = "box"
    TYPOGRAPHY = "typography"
    DECORATION = "decoration"

    @property
    def index(self) -> int:
        return list(PropertyGroup).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Keys ending in "*" match any property with that prefix.
DEFAULT_GROUP_TABLE: dict[str, PropertyGroup] = {
    "position": PropertyGroup.POSITION,
    "z-index": PropertyGroup.POSITION,
    "top": PropertyGroup.POSITION,
    "right": PropertyGroup.POSITION,
    "bottom": PropertyGroup.POSITION,
    "left": PropertyGroup.POSITION,
    "display": PropertyGroup.BOX,
    "overflow*": PropertyGroup.BOX,
    "box-sizing": PropertyGroup.BOX,
    "width": PropertyGroup.BOX,
    "height": PropertyGroup.BOX,
    "min-width": PropertyGroup.BOX,
    "min-height": PropertyGroup.BOX,
    "max-width": PropertyGroup.BOX,
    "max-height": PropertyGroup.BOX,
    "padding*": PropertyGroup.BOX,
    "border*": PropertyGroup.BOX,
    "margin*": PropertyGroup.BOX,
    "float": PropertyGroup.BOX,
    "clear": PropertyGroup.BOX,
    "font*": PropertyGroup.TYPOGRAPHY,
    "text-*": PropertyGroup.TYPOGRAPHY,
    "line-height": PropertyGroup.TYPOGRAPHY,
    "word-wrap": PropertyGroup.TYPOGRAPHY,
    "letter-spacing": PropertyGroup.TYPOGRAPHY,
    "background*": PropertyGroup.DECORATION,
    "color": PropertyGroup.DECORATION,
    "box-shadow": PropertyGroup.DECORATION,
    "opacity": PropertyGroup.DECORATION,
}


@dataclass(frozen=True)
class OrderIssue:
    """The first declaration that breaks group order."""

    index: int
    property: str
    group: PropertyGroup
    after_group: PropertyGroup


def classify_property(
    name: str, table: Mapping[str, PropertyGroup] | None = None
) -> PropertyGroup:
    """Map a property name to its canonical group.

    Args:
        name: Property name as written
        table: Lookup table (defaults to DEFAULT_GROUP_TABLE)

    Returns:
        The property's group, Decoration when not found
    """
    table = DEFAULT_GROUP_TABLE if table is None else table
    prop = VENDOR_PREFIX.sub("", name.strip().lower())

    if prop in table:
        return table[prop]

    best: PropertyGroup | None = None
    best_length = -1
    for key, group in table.items():
        if not key.endswith("*"):
            continue
        prefix = key[:-1]
        if prop.startswith(prefix) and len(prefix) > best_length:
            best = group
            best_length = len(prefix)

    return best if best is not None else PropertyGroup.DECORATION


def first_out_of_order(
    properties: Sequence[str], table: Mapping[str, PropertyGroup] | None = None
) -> OrderIssue | None:
    """Find the first property whose group precedes one already seen.

    Args:
        properties: Property names in source order
        table: Lookup table (defaults to DEFAULT_GROUP_TABLE)

    Returns:
        OrderIssue for the first decrease, or None when ordered
    """
    highest: PropertyGroup | None = None
    for index, prop in enumerate(properties):
        group = classify_property(prop, table)
        if highest is not None and group.index < highest.index:
            return OrderIssue(index, prop, group, highest)
        if highest is None or group.index > highest.index:
            highest = group
    return None
