"""HTML tag in selector ban."""

from ...analysis.stylesheet import Selector
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class HtmlTagInSelectorRule(BaseRule):
    """Detect selectors that match on bare HTML tag names (e.g. ``div.menu``)."""

    @property
    def rule_id(self) -> str:
        return "SELECTOR.HTML_TAG_IN_SELECTOR"

    @property
    def name(self) -> str:
        return "HTML Tag In Selector"

    @property
    def category(self) -> str:
        return "selectors"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.SELECTOR

    @property
    def description(self) -> str:
        return (
            "Selectors must not depend on HTML tag names, which ties styles "
            "to markup structure. Use a BEM element class instead."
        )

    def check_node(self, node: Selector, context: RuleContext) -> list[Violation]:
        if not node.contains_html_tag:
            return []
        tags = ", ".join(f"'{tag}'" for tag in dict.fromkeys(node.parts.html_tags))
        return [
            self._create_violation(
                f"selector '{node.raw}' uses HTML tag {tags}",
                node.span,
                context,
                remediation_hints=["give the element a class and select on that"],
            )
        ]
