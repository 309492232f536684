"""
BEM naming rule.

Every class name introduced by a selector must follow the BEM grammar:
``block``, ``block__element``, ``block--mod_value`` or
``block__element--mod_value``. SCSS parent references are resolved
first, so ``&__item`` inside ``.menu`` is checked as ``menu__item``.
"""

from ...analysis.bem import Malformed, parse_bem
from ...analysis.stylesheet import Selector, effective_class_names
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class BemNamingRule(BaseRule):
    """Validate class names against the BEM grammar."""

    @property
    def rule_id(self) -> str:
        return "NAMING.BEM_MALFORMED"

    @property
    def name(self) -> str:
        return "Malformed BEM Class Name"

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
        # Interpolated names cannot be checked statically
        if "#{" in node.raw:
            return []

        violations = []
        for class_name in effective_class_names(node):
            # Case problems are reported by NAMING.NOT_LOWERCASE
            if class_name != class_name.lower():
                continue
            result = parse_bem(class_name)
            if isinstance(result, Malformed):
                violations.append(
                    self._create_violation(
                        f"class '{class_name}' is not valid BEM: {result.reason}",
                        node.span,
                        context,
                        remediation_hints=[
                            "use block, block__element, block--modifier_value "
                            "or block__element--modifier_value"
                        ],
                    )
                )
        return violations
