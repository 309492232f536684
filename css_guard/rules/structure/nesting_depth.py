"""
Nesting depth rule.

Selector blocks may be nested at most ``maxNestingDepth`` levels deep
(default 1). At-rule blocks such as ``@media`` do not count. An over-deep
chain is reported once, at its innermost selector block.
"""

from ...analysis.stylesheet import RuleBlock
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class NestingDepthRule(BaseRule):
    """Detect selector nesting deeper than the configured maximum."""

    @property
    def rule_id(self) -> str:
        return "STRUCTURE.NESTING_TOO_DEEP"

    @property
    def name(self) -> str:
        return "Nesting Too Deep"

    @property
    def category(self) -> str:
        return "structure"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.RULE_BLOCK

    def check_node(self, node: RuleBlock, context: RuleContext) -> list[Violation]:
        max_depth = context.config.max_nesting_depth if context.config else 1
        if node.is_at_rule or node.depth <= max_depth:
            return []

        # Only the innermost selector block of a chain is reported
        has_nested_selectors = any(
            not block.is_at_rule for block in node.walk() if block is not node
        )
        if has_nested_selectors:
            return []

        chain = " ".join(node.resolved_selectors()[:1]) or "block"
        return [
            self._create_violation(
                f"'{chain}' is nested {node.depth} levels deep (maximum {max_depth})",
                node.header_span,
                context,
                remediation_hints=["flatten the selector into a BEM class on its own"],
            )
        ]
