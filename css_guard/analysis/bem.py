"""
BEM (Block-Element-Modifier) class name validator.

Grammar, where ``word`` is one or more lowercase alphanumerics:

    block    = word ('-' word)*
    element  = block '__' word ('-' word)*
    modifier = (block | element) '--' word '_' word

Parsing is a pure function of its input and is cached.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MODIFIER_PATTERN = re.compile(r"^([a-z0-9]+)_([a-z0-9]+)$")


@dataclass(frozen=True)
class Block:
    name: str


@dataclass(frozen=True)
class Element:
    block: str
    name: str


@dataclass(frozen=True)
class Modifier:
    """A modifier on a block or an element."""

    owner: Block | Element
    mod_name: str
    mod_value: str


@dataclass(frozen=True)
class Malformed:
    reason: str


BemResult = Block | Element | Modifier | Malformed


def _parse_owner(text: str) -> Block | Element | Malformed:
    parts = text.split("__")
    if len(parts) > 2:
        return Malformed("multiple element markers")

    block = parts[0]
    if not block:
        return Malformed("missing block name")
    if not NAME_PATTERN.match(block):
        return Malformed(f"invalid block name '{block}'")

    if len(parts) == 1:
        return Block(block)

    element = parts[1]
    if not element:
        return Malformed("missing element name")
    if not NAME_PATTERN.match(element):
        return Malformed(f"invalid element name '{element}'")
    return Element(block, element)


@lru_cache(maxsize=4096)
def parse_bem(class_name: str) -> BemResult:
    """Classify a class name according to the BEM grammar.

    Args:
        class_name: Class name, with or without the leading ``.``

    Returns:
        Block, Element, Modifier, or Malformed with a reason
    """
    name = class_name[1:] if class_name.startswith(".") else class_name

    if not name:
        return Malformed("empty class name")
    if name != name.lower():
        return Malformed("uppercase characters")
    if name.count("--") > 1:
        return Malformed("multiple modifier markers")

    if "--" not in name:
        return _parse_owner(name)

    owner_text, modifier_text = name.split("--")
    owner = _parse_owner(owner_text)
    if isinstance(owner, Malformed):
        return owner

    match = MODIFIER_PATTERN.match(modifier_text)
    if not match:
        return Malformed(
            f"modifier '{modifier_text}' must have the form name_value"
        )
    return Modifier(owner, match.group(1), match.group(2))


def format_bem(result: Block | Element | Modifier) -> str:
    """Render a parsed BEM name back to its class name."""
    if isinstance(result, Block):
        return result.name
    if isinstance(result, Element):
        return f"{result.block}__{result.name}"
    return f"{format_bem(result.owner)}--{result.mod_name}_{result.mod_value}"
