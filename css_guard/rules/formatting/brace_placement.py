"""
Brace placement rule.

The opening brace sits on the selector's line after exactly one space,
and the closing brace of a multi-line block sits on its own line.
"""

from ...analysis.stylesheet import RuleBlock
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class BracePlacementRule(BaseRule):
    """Check placement of opening and closing braces."""

    @property
    def rule_id(self) -> str:
        return "FORMAT.BRACE_PLACEMENT"

    @property
    def name(self) -> str:
        return "Brace Placement"

    @property
    def category(self) -> str:
        return "formatting"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.RULE_BLOCK

    @property
    def description(self) -> str:
        return (
            "The opening brace must follow the selector on the same line "
            "after a single space; the closing brace of a multi-line block "
            "must be on its own line."
        )

    def check_node(self, node: RuleBlock, context: RuleContext) -> list[Violation]:
        violations: list[Violation] = []
        source = context.stylesheet.source
        header = node.header_span
        opening = node.open_brace

        if header.end_line != opening.line:
            violations.append(
                self._create_violation(
                    "opening brace must be on the same line as the selector",
                    opening,
                    context,
                    remediation_hints=["move '{' to the end of the selector line"],
                )
            )
        elif header.start != opening.start and source[header.end : opening.start] != " ":
            violations.append(
                self._create_violation(
                    "put exactly one space before the opening brace",
                    opening,
                    context,
                )
            )

        closing = node.close_brace
        if closing is not None and closing.line != opening.line:
            line_start = source.rfind("\n", 0, closing.start) + 1
            if source[line_start : closing.start].strip():
                violations.append(
                    self._create_violation(
                        "closing brace must be on its own line",
                        closing,
                        context,
                        remediation_hints=["move '}' to a new line"],
                    )
                )

        return violations
