"""
Base classes and types for the style rule engine.

This module provides the foundational abstractions for creating
style rules: the node kinds a rule can operate on, the context
passed to rules for evaluation, and the abstract BaseRule.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..analysis.property_order import PropertyGroup
from ..analysis.stylesheet import Stylesheet
from ..analysis.tokens import LineIndex
from ..models import Severity, Span, Violation

if TYPE_CHECKING:
    from .config import LintConfig, RuleConfig


class NodeKind(Enum):
    """Tree node kinds a rule can operate on."""

    STYLESHEET = "stylesheet"
    RULE_BLOCK = "rule_block"
    DECLARATION = "declaration"
    SELECTOR = "selector"
    COMMENT = "comment"


@dataclass
class RuleContext:
    """Context passed to rules for evaluation.

    The stylesheet is shared by every rule in a pass and must not be
    mutated.
    """

    stylesheet: Stylesheet
    config: "LintConfig | None" = field(default=None, repr=False)
    _nodes: dict[NodeKind, list[Any]] = field(default_factory=dict, repr=False)
    _line_index: LineIndex | None = field(default=None, repr=False)

    @property
    def file_path(self) -> str:
        return self.stylesheet.file_path

    @property
    def language(self) -> str:
        return self.stylesheet.language

    @property
    def group_table(self) -> Mapping[str, PropertyGroup] | None:
        """Property group table in effect (None = built-in table)."""
        if self.config is None:
            return None
        return self.config.effective_group_table()

    def nodes(self, kind: NodeKind) -> list[Any]:
        """Get every node of a kind, in source order (cached)."""
        if kind not in self._nodes:
            sheet = self.stylesheet
            if kind == NodeKind.STYLESHEET:
                nodes: list[Any] = [sheet]
            elif kind == NodeKind.RULE_BLOCK:
                nodes = list(sheet.walk_blocks())
            elif kind == NodeKind.DECLARATION:
                nodes = list(sheet.walk_declarations())
            elif kind == NodeKind.SELECTOR:
                nodes = list(sheet.walk_selectors())
            else:
                nodes = list(sheet.walk_comments())
            self._nodes[kind] = nodes
        return self._nodes[kind]

    def span(self, start: int, end: int) -> Span:
        """Build a Span for an offset range of the stylesheet source."""
        if self._line_index is None:
            self._line_index = LineIndex(self.stylesheet.source)
        return self._line_index.span(start, end)

    def rule_config(self, rule_id: str) -> "RuleConfig | None":
        if self.config is None:
            return None
        return self.config.rules.get(rule_id)


class BaseRule(ABC):
    """Abstract base class for all style rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'VALUE.LEADING_ZERO').

        Format: CATEGORY.RULE_NAME where CATEGORY is uppercase and
        RULE_NAME uses UPPER_SNAKE_CASE.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category: formatting, selectors, naming, values, structure, comments."""

    @property
    @abstractmethod
    def default_severity(self) -> Severity:
        """Default severity level for violations from this rule."""

    @property
    @abstractmethod
    def node_kind(self) -> NodeKind:
        """Node kind this rule inspects."""

    @property
    def supported_languages(self) -> list[str] | None:
        """Languages this rule supports. None = all languages."""
        return None

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return f"Rule {self.rule_id}: {self.name}"

    def check(self, context: RuleContext) -> list[Violation]:
        """Run the rule over every node of its kind.

        Args:
            context: RuleContext with the parsed stylesheet and config

        Returns:
            List of Violation objects for any issues detected.
        """
        violations: list[Violation] = []
        for node in context.nodes(self.node_kind):
            violations.extend(self.check_node(node, context))
        return violations

    @abstractmethod
    def check_node(self, node: Any, context: RuleContext) -> list[Violation]:
        """Check a single node.

        Args:
            node: Stylesheet, RuleBlock, Declaration, Selector or Comment
            context: RuleContext for the file

        Returns:
            List of Violation objects for this node.
        """

    def get_severity(self, config: "RuleConfig | None") -> Severity:
        """Get severity from config or use default.

        Args:
            config: Optional rule-specific configuration

        Returns:
            Severity level to use for violations
        """
        if config and config.severity is not None:
            return config.severity
        return self.default_severity

    def get_parameter(self, context: RuleContext, name: str, default: Any = None) -> Any:
        """Get a rule parameter from configuration."""
        config = context.rule_config(self.rule_id)
        if config is None:
            return default
        return config.parameters.get(name, default)

    def _create_violation(
        self,
        message: str,
        span: Span,
        context: RuleContext,
        remediation_hints: list[str] | None = None,
    ) -> Violation:
        """Helper to create a Violation with this rule's ID and severity.

        Args:
            message: Human-readable description of the issue
            span: Location of the offending node
            context: RuleContext for the file
            remediation_hints: Suggestions for fixing

        Returns:
            Configured Violation object
        """
        return Violation(
            rule_id=self.rule_id,
            severity=self.get_severity(context.rule_config(self.rule_id)),
            message=message,
            span=span,
            file_path=context.file_path,
            remediation_hints=tuple(remediation_hints or ()),
        )
