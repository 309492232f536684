"""
ID selector ban.

Styles are attached through classes only; an ID selector makes the
rule unreusable and raises specificity above every class.
"""

from ...analysis.stylesheet import Selector
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class IdSelectorRule(BaseRule):
    """Detect selectors that reference an element ID."""

    @property
    def rule_id(self) -> str:
        return "SELECTOR.ID_SELECTOR_USED"

    @property
    def name(self) -> str:
        return "ID Selector Used"

    @property
    def category(self) -> str:
        return "selectors"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.SELECTOR

    def check_node(self, node: Selector, context: RuleContext) -> list[Violation]:
        if not node.is_id_selector:
            return []
        ids = ", ".join(f"#{name}" for name in node.parts.id_names)
        return [
            self._create_violation(
                f"ID selector {ids} used in '{node.raw}'",
                node.span,
                context,
                remediation_hints=["style the element through a BEM class instead"],
            )
        ]
