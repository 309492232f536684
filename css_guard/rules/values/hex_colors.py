"""
Hex color rules.

Hex colors are written in lowercase, using the short form whenever
every channel repeats its digit (``#fff`` rather than ``#ffffff``).
"""

import re

from ...analysis.stylesheet import Declaration
from ...analysis.tokens import TokenKind
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext

HEX_COLOR_PATTERN = re.compile(r"(?<![\w&-])#([0-9a-fA-F]{3,8})(?![\w-])")
VALID_LENGTHS = (3, 4, 6, 8)


def iter_hex_colors(declaration: Declaration):
    """Yield (token, match) for every hex color literal in a value."""
    for token in declaration.value_tokens:
        if token.kind != TokenKind.VALUE_TEXT:
            continue
        for match in HEX_COLOR_PATTERN.finditer(token.text):
            if len(match.group(1)) in VALID_LENGTHS:
                yield token, match


def shorthand(digits: str) -> str | None:
    """Get the short form of a 6 or 8 digit hex color, if one exists."""
    if len(digits) not in (6, 8):
        return None
    pairs = [digits[i : i + 2] for i in range(0, len(digits), 2)]
    if all(pair[0] == pair[1] for pair in pairs):
        return "".join(pair[0] for pair in pairs)
    return None


class HexShorthandRule(BaseRule):
    """Detect hex colors that could use the 3 or 4 digit form."""

    @property
    def rule_id(self) -> str:
        return "VALUE.HEX_SHORTHAND"

    @property
    def name(self) -> str:
        return "Hex Color Shorthand"

    @property
    def category(self) -> str:
        return "values"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.DECLARATION

    def check_node(self, node: Declaration, context: RuleContext) -> list[Violation]:
        violations = []
        for token, match in iter_hex_colors(node):
            short = shorthand(match.group(1).lower())
            if short is None:
                continue
            violations.append(
                self._create_violation(
                    f"hex color '{match.group(0)}' can be shortened",
                    token.sub_span(match.start(), match.end()),
                    context,
                    remediation_hints=[f"use `#{short}` instead of `{match.group(0)}`"],
                )
            )
        return violations


class HexCaseRule(BaseRule):
    """Hex colors are written in lowercase."""

    @property
    def rule_id(self) -> str:
        return "VALUE.HEX_CASE"

    @property
    def name(self) -> str:
        return "Hex Color Case"

    @property
    def category(self) -> str:
        return "values"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.DECLARATION

    def check_node(self, node: Declaration, context: RuleContext) -> list[Violation]:
        return [
            self._create_violation(
                f"hex color '{match.group(0)}' must be lowercase",
                token.sub_span(match.start(), match.end()),
                context,
                remediation_hints=[f"use `{match.group(0).lower()}`"],
            )
            for token, match in iter_hex_colors(node)
            if match.group(0) != match.group(0).lower()
        ]
