"""Property name case rule."""

from ...analysis.stylesheet import Declaration
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class PropertyCaseRule(BaseRule):
    """Property names are written in lowercase."""

    @property
    def rule_id(self) -> str:
        return "FORMAT.PROPERTY_CASE"

    @property
    def name(self) -> str:
        return "Lowercase Property Names"

    @property
    def category(self) -> str:
        return "formatting"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.DECLARATION

    def check_node(self, node: Declaration, context: RuleContext) -> list[Violation]:
        # Custom properties and SCSS variables are case-sensitive names
        if node.is_variable or node.property == node.property.lower():
            return []
        return [
            self._create_violation(
                f"property '{node.property}' must be lowercase",
                node.name_span,
                context,
                remediation_hints=[f"use `{node.property.lower()}`"],
            )
        ]
