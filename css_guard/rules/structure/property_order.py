"""
Property order rule.

Within a rule block, declarations are ordered by group: Position, Box,
Typography, Decoration. Only the first out-of-order declaration of a
block is reported.
"""

from ...analysis.property_order import PropertyGroup, first_out_of_order
from ...analysis.stylesheet import RuleBlock
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext

GROUP_ORDER = ", ".join(group.label for group in PropertyGroup)


class PropertyOrderRule(BaseRule):
    """Check canonical property group order."""

    @property
    def rule_id(self) -> str:
        return "STRUCTURE.PROPERTY_OUT_OF_ORDER"

    @property
    def name(self) -> str:
        return "Property Out Of Order"

    @property
    def category(self) -> str:
        return "structure"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.RULE_BLOCK

    @property
    def description(self) -> str:
        return (
            f"Declarations must be grouped in the order {GROUP_ORDER}. "
            "Unknown properties are treated as Decoration."
        )

    def check_node(self, node: RuleBlock, context: RuleContext) -> list[Violation]:
        declarations = [d for d in node.declarations if not d.is_variable]
        issue = first_out_of_order([d.property for d in declarations], context.group_table)
        if issue is None:
            return []

        declaration = declarations[issue.index]
        return [
            self._create_violation(
                f"'{issue.property}' belongs to the {issue.group.label} group and "
                f"must come before {issue.after_group.label} properties",
                declaration.span,
                context,
                remediation_hints=[f"order declarations as {GROUP_ORDER}"],
            )
        ]
