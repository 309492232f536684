"""
Token types produced by the tokenizer.
"""

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum

from ..models import Span


class TokenKind(Enum):
    """Structural token kinds."""

    SELECTOR_TEXT = "selector-text"
    BRACE_OPEN = "brace-open"
    BRACE_CLOSE = "brace-close"
    PROPERTY_NAME = "property-name"
    COLON = "colon"
    VALUE_TEXT = "value-text"
    SEMICOLON = "semicolon"
    COMMENT = "comment"
    STRING_LITERAL = "string-literal"
    AT_RULE_KEYWORD = "at-rule-keyword"
    MALFORMED = "malformed"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """An immutable lexical token with its source span."""

    kind: TokenKind
    text: str
    span: Span

    def sub_span(self, rel_start: int, rel_end: int) -> Span:
        """Compute the span of a slice of this token's text.

        Args:
            rel_start: Start offset relative to the token start
            rel_end: End offset relative to the token start

        Returns:
            Span covering ``text[rel_start:rel_end]``
        """
        line, column = self._position(rel_start)
        end_line, end_column = self._position(rel_end)
        return Span(
            start=self.span.start + rel_start,
            end=self.span.start + rel_end,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
        )

    def _position(self, rel: int) -> tuple[int, int]:
        head = self.text[:rel]
        newlines = head.count("\n")
        if newlines == 0:
            return self.span.line, self.span.column + rel
        return self.span.line + newlines, rel - head.rfind("\n")


class LineIndex:
    """Maps character offsets to 1-based line and column numbers."""

    def __init__(self, source: str):
        self._line_starts = [0]
        for index, char in enumerate(source):
            if char == "\n":
                self._line_starts.append(index + 1)
        self.length = len(source)

    def position(self, offset: int) -> tuple[int, int]:
        """Get the (line, column) of a character offset."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def span(self, start: int, end: int) -> Span:
        """Build a Span for the half-open range [start, end)."""
        line, column = self.position(start)
        end_line, end_column = self.position(end)
        return Span(
            start=start,
            end=end,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
        )
