"""
Z-index range rule.

Literal z-index values must fall inside at least one configured band.
Bands may overlap; a value in several bands is valid for each.
"""

from ...analysis.stylesheet import Declaration
from ...analysis.z_index import DEFAULT_Z_INDEX_BANDS, classify_z_index, parse_z_index
from ...models import Severity, Violation
from ..base import BaseRule, NodeKind, RuleContext


class ZIndexRangeRule(BaseRule):
    """Detect z-index values outside every band."""

    @property
    def rule_id(self) -> str:
        return "VALUE.Z_INDEX_OUT_OF_RANGE"

    @property
    def name(self) -> str:
        return "Z-Index Out Of Range"

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
        if node.property.lower() != "z-index":
            return []

        value = parse_z_index(node.value_without_important)
        if value is None:
            return []

        bands = context.config.bands() if context.config else DEFAULT_Z_INDEX_BANDS
        if classify_z_index(value, bands):
            return []

        ranges = ", ".join(f"{band.name} {band.min}-{band.max}" for band in bands)
        return [
            self._create_violation(
                f"z-index {value} is outside every defined band",
                node.value_span or node.span,
                context,
                remediation_hints=[f"pick a value from one of: {ranges}"],
            )
        ]
