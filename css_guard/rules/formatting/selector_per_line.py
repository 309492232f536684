"""
Selector-per-line rule.

Each selector of a comma-separated group goes on its own line.
"""

from ...analysis.stylesheet import RuleBlock
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class SelectorPerLineRule(BaseRule):
    """Check that grouped selectors are written one per line."""

    @property
    def rule_id(self) -> str:
        return "FORMAT.SELECTOR_PER_LINE"

    @property
    def name(self) -> str:
        return "One Selector Per Line"

    @property
    def category(self) -> str:
        return "formatting"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.RULE_BLOCK

    def check_node(self, node: RuleBlock, context: RuleContext) -> list[Violation]:
        violations = []
        for previous, selector in zip(node.selectors, node.selectors[1:], strict=False):
            if selector.span.line == previous.span.end_line:
                violations.append(
                    self._create_violation(
                        f"selector '{selector.raw}' shares a line with '{previous.raw}'",
                        selector.span,
                        context,
                        remediation_hints=["put each selector of a group on its own line"],
                    )
                )
        return violations
