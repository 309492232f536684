"""
Quote style rule for declaration values.

Strings use single quotes, and ``url()`` arguments are left unquoted.
"""

from ...analysis.stylesheet import Declaration
from ...analysis.tokens import TokenKind
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class QuoteStyleRule(BaseRule):
    """Check quoting of string values."""

    @property
    def rule_id(self) -> str:
        return "VALUE.QUOTE_STYLE"

    @property
    def name(self) -> str:
        return "Quote Style"

    @property
    def category(self) -> str:
        return "values"

    @property
    def default_severity(self) -> Severity:
        return Severity.WARNING

    @property
    def node_kind(self) -> NodeKind:
        return NodeKind.DECLARATION

    def check_node(self, node: Declaration, context: RuleContext) -> list[Violation]:
        violations = []
        previous = None
        for token in node.value_tokens:
            if token.kind == TokenKind.STRING_LITERAL:
                inner = token.text[1:-1]
                in_url = (
                    previous is not None
                    and previous.kind == TokenKind.VALUE_TEXT
                    and previous.text.rstrip().lower().endswith("url(")
                )
                if in_url:
                    violations.append(
                        self._create_violation(
                            "omit quotes inside url()",
                            token.span,
                            context,
                            remediation_hints=[f"use `url({inner})`"],
                        )
                    )
                elif token.text.startswith('"'):
                    violations.append(
                        self._create_violation(
                            "use single quotes",
                            token.span,
                            context,
                            remediation_hints=[f"use `'{inner}'`"],
                        )
                    )
            previous = token
        return violations
