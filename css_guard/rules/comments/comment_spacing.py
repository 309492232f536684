"""Spacing inside block comment delimiters."""

from ...analysis.stylesheet import Comment
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class CommentSpacingRule(BaseRule):
    """Block comments have whitespace inside their delimiters."""

    @property
    def rule_id(self) -> str:
        return "COMMENT.SPACING"

    @property
    def name(self) -> str:
        return "Comment Spacing"

    @property
    def category(self) -> str:
        return "comments"

    @property
    def default_severity(self) -> Severity:
        return Severity.INFO

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.COMMENT

    def check_node(self, node: Comment, context: RuleContext) -> list[Violation]:
        if node.is_line_comment:
            return []

        inner = node.text[2:-2]
        # Banner (/*! */) and doc (/** */) comments keep their own layout
        if not inner.strip() or inner.startswith(("*", "!")):
            return []
        if inner[0].isspace() and inner[-1].isspace():
            return []

        return [
            self._create_violation(
                "add a space inside the comment delimiters",
                node.span,
                context,
                remediation_hints=[f"use `/* {node.body} */`"],
            )
        ]
