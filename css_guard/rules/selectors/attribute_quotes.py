"""Quote style inside attribute selectors."""

import re

from ...analysis.stylesheet import Selector
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext

DOUBLE_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')


class AttributeQuoteStyleRule(BaseRule):
    """Attribute selector values use single quotes."""

    @property
    def rule_id(self) -> str:
        return "SELECTOR.QUOTE_STYLE"

    @property
    def name(self) -> str:
        return "Attribute Selector Quote Style"

    @property
    def category(self) -> str:
        return "selectors"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.SELECTOR

    def check_node(self, node: Selector, context: RuleContext) -> list[Violation]:
        violations = []
        for match in DOUBLE_QUOTED.finditer(node.raw):
            start = node.span.start + match.start()
            violations.append(
                self._create_violation(
                    f"use single quotes in selector '{node.raw}'",
                    context.span(start, node.span.start + match.end()),
                    context,
                    remediation_hints=[f"use '{match.group(1)}'"],
                )
            )
        return violations
