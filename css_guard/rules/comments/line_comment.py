"""Line comment ban for plain CSS."""

from ...analysis.stylesheet import Comment
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class LineCommentRule(BaseRule):
    """Detect ``//`` comments, which CSS does not support."""

    @property
    def rule_id(self) -> str:
        return "COMMENT.LINE_COMMENT"

    @property
    def name(self) -> str:
        return "Line Comment In CSS"

    @property
    def category(self) -> str:
        return "comments"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.COMMENT

    @property
    def supported_languages(self) -> list[str] | None:
        return ["css", "html"]

    def check_node(self, node: Comment, context: RuleContext) -> list[Violation]:
        if not node.is_line_comment:
            return []
        return [
            self._create_violation(
                "'//' comments are not valid CSS",
                node.span,
                context,
                remediation_hints=[f"use `/* {node.body} */`"],
            )
        ]
