"""Lowercase class and ID names."""

from ...analysis.stylesheet import Selector, effective_class_names
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class LowercaseNameRule(BaseRule):
    """Detect class and ID names containing uppercase characters."""

    @property
    def rule_id(self) -> str:
        return "NAMING.NOT_LOWERCASE"

    @property
    def name(self) -> str:
        return "Name Not Lowercase"

    @property
    def category(self) -> str:
        return "naming"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.SELECTOR

    def check_node(self, node: Selector, context: RuleContext) -> list[Violation]:
        names = [f".{name}" for name in effective_class_names(node)]
        names.extend(f"#{name}" for name in node.parts.id_names)

        return [
            self._create_violation(
                f"'{name}' must be lowercase",
                node.span,
                context,
                remediation_hints=[f"rename to '{name.lower()}'"],
            )
            for name in names
            if name != name.lower()
        ]
