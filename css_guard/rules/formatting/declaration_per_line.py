"""
Declaration-per-line rule.

Every declaration goes on its own line, below the opening brace. A rule
with a single declaration may be written entirely on one line.
"""

from ...analysis.stylesheet import RuleBlock
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class DeclarationPerLineRule(BaseRule):
    """Check one declaration per line, with the one-liner exception."""

    @property
    def rule_id(self) -> str:
        return "FORMAT.DECLARATION_PER_LINE"

    @property
    def name(self) -> str:
        return "One Declaration Per Line"

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
            "Each declaration must be on its own line. A rule block with a "
            "single declaration may be written on one line."
        )

    def check_node(self, node: RuleBlock, context: RuleContext) -> list[Violation]:
        declarations = node.declarations
        if not declarations:
            return []

        closing = node.close_brace
        one_line = closing is not None and closing.line == node.open_brace.line
        if one_line:
            if len(declarations) == 1 and not node.children:
                return []
            return [
                self._create_violation(
                    "only rules with a single declaration may be written on one line",
                    node.header_span,
                    context,
                    remediation_hints=["put each declaration on its own line"],
                )
            ]

        violations = []
        previous = None
        for declaration in declarations:
            if declaration.span.line == node.open_brace.line:
                violations.append(
                    self._create_violation(
                        f"'{declaration.property}' must start on a new line after '{{'",
                        declaration.span,
                        context,
                    )
                )
            elif previous is not None and declaration.span.line == previous.span.end_line:
                violations.append(
                    self._create_violation(
                        f"'{declaration.property}' shares a line with '{previous.property}'",
                        declaration.span,
                        context,
                        remediation_hints=["put each declaration on its own line"],
                    )
                )
            previous = declaration
        return violations
