"""
``!important`` justification rule.

Every ``!important`` needs an explanatory comment on the same
declaration, either trailing it on the same line or directly above it.
A ``TODO`` comment counts as a reason.
"""

from ...analysis.stylesheet import Declaration
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class MissingImportantReasonRule(BaseRule):
    """Detect ``!important`` without an adjacent explanatory comment."""

    @property
    def rule_id(self) -> str:
        return "VALUE.MISSING_IMPORTANT_REASON"

    @property
    def name(self) -> str:
        return "Missing !important Reason"

    @property
    def category(self) -> str:
        return "values"

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.DECLARATION

    def check_node(self, node: Declaration, context: RuleContext) -> list[Violation]:
        if not node.has_important:
            return []

        for comment in (node.comment, node.leading_comment):
            if comment is not None and comment.body:
                return []

        return [
            self._create_violation(
                f"'!important' on '{node.property}' has no explanatory comment",
                node.span,
                context,
                remediation_hints=[
                    "add a comment saying why, e.g. /* overrides inline widget styles */",
                    "or mark it for follow-up with /* TODO: ... */",
                ],
            )
        ]
