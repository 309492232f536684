"""
Z-index band classification.

Bands may overlap: a value inside several bands is valid in each of those
contexts. A value is only out of range when no band contains it.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class ZIndexBand:
    """A named, inclusive range of z-index values."""

    name: str
    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


DEFAULT_Z_INDEX_BANDS: tuple[ZIndexBand, ...] = (
    ZIndexBand("page", 1, 300),
    ZIndexBand("popup-on-page", 101, 300),
    ZIndexBand("modal", 301, 600),
    ZIndexBand("popup-in-modal", 601, 900),
)


def parse_z_index(value: str) -> int | None:
    """Parse a literal integer z-index value.

    Returns None for keywords, variables and expressions, which cannot
    be classified statically.
    """
    text = value.strip()
    if text.lower().endswith("!important"):
        text = text[: -len("!important")].rstrip()
    if not INTEGER_PATTERN.match(text):
        return None
    return int(text)


def classify_z_index(value: int, bands: Sequence[ZIndexBand]) -> list[str]:
    """Get the names of every band containing ``value``, in band order."""
    return [band.name for band in bands if band.contains(value)]
