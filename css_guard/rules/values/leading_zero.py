"""
Leading zero rule.

Fractional values between -1 and 1 are written without the leading
zero: ``.9em`` rather than ``0.9em``. Properties listed in the rule's
``ignoreProperties`` parameter are skipped, e.g. ``opacity`` for teams
that prefer ``opacity: 0.5``.
"""

import re

from ...analysis.stylesheet import Declaration
from ...analysis.tokens import TokenKind
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext

LEADING_ZERO_PATTERN = re.compile(r"(?<![\w.#$/-])(-?)0(\.\d+)([a-zA-Z%]*)")


class LeadingZeroRule(BaseRule):
    """Detect fractional values written with a leading zero."""

    @property
    def rule_id(self) -> str:
        return "VALUE.LEADING_ZERO"

    @property
    def name(self) -> str:
        return "Leading Zero"

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
        ignored = {
            name.lower() for name in self.get_parameter(context, "ignoreProperties", [])
        }
        if node.property.lower() in ignored:
            return []

        violations = []
        for token in node.value_tokens:
            if token.kind != TokenKind.VALUE_TEXT:
                continue
            for match in LEADING_ZERO_PATTERN.finditer(token.text):
                written = match.group(0)
                suggested = f"{match.group(1)}{match.group(2)}{match.group(3)}"
                violations.append(
                    self._create_violation(
                        f"unnecessary leading zero in '{written}'",
                        token.sub_span(match.start(), match.end()),
                        context,
                        remediation_hints=[f"use `{suggested}` instead of `{written}`"],
                    )
                )
        return violations
