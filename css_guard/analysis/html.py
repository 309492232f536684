"""
Extraction of embedded style sheets from HTML documents.
"""

import re

STYLE_BLOCK_PATTERN = re.compile(
    r"(<style\b[^>]*>)(.*?)(</style\s*>)",
    re.IGNORECASE | re.DOTALL,
)


def _blank(text: str) -> str:
    return "".join(char if char == "\n" else " " for char in text)


def mask_html(source: str) -> str:
    """Blank out everything in an HTML document except ``<style>`` bodies.

    The result has the same length and line structure as the input, so
    offsets, lines and columns computed on it refer to the HTML file.

    Args:
        source: HTML document text

    Returns:
        Masked text containing only the CSS of the style elements
    """
    parts: list[str] = []
    position = 0
    for match in STYLE_BLOCK_PATTERN.finditer(source):
        body_start, body_end = match.span(2)
        parts.append(_blank(source[position:body_start]))
        parts.append(source[body_start:body_end])
        position = body_end
    parts.append(_blank(source[position:]))
    return "".join(parts)
