"""
Rule engine coordinator for executing style rules.

This module provides the RuleEngine class that orchestrates rule
discovery, registration and execution against a parsed Stylesheet.
Rules are pure functions of the shared, read-only tree, so their
execution order does not affect the result. The engine runs them
sequentially; parallelism happens one level up, per file.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..analysis.parser import PARSE_RULE_SEVERITIES
from ..analysis.stylesheet import Stylesheet
from ..cli.errors import ConfigurationError
from ..models import Severity, Violation
from .base import BaseRule, RuleContext
from .config import LintConfig, LintConfigLoader, matches_check
from .discovery import RuleDiscovery

logger = logging.getLogger(__name__)

FILE_UNREADABLE = "IO.FILE_UNREADABLE"

# Rules reported by the parser and runner rather than by a BaseRule.
BUILTIN_RULES: dict[str, tuple[Severity, str]] = {
    "PARSE.MALFORMED_INPUT": (
        PARSE_RULE_SEVERITIES["PARSE.MALFORMED_INPUT"],
        "Unterminated strings or comments, and text that is neither a "
        "selector nor a declaration.",
    ),
    "PARSE.UNBALANCED_BRACES": (
        PARSE_RULE_SEVERITIES["PARSE.UNBALANCED_BRACES"],
        "Blocks left open at end of input, or a '}' with no matching '{'.",
    ),
    "PARSE.MISSING_SEMICOLON": (
        PARSE_RULE_SEVERITIES["PARSE.MISSING_SEMICOLON"],
        "Declarations that are not terminated by ';'.",
    ),
    FILE_UNREADABLE: (
        Severity.ERROR,
        "Files that cannot be read or decoded as UTF-8.",
    ),
}


@dataclass
class RuleError:
    """Error that occurred during rule execution."""

    rule_id: str
    error_message: str
    exception_type: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
        }


@dataclass
class RuleExecutionResult:
    """Result of executing a single rule."""

    rule_id: str
    violations: list[Violation] = field(default_factory=list)
    execution_time_ms: float = 0.0
    error: RuleError | None = None

    @property
    def success(self) -> bool:
        """Check if the rule executed successfully."""
        return self.error is None


@dataclass
class RuleEngineResult:
    """Result of running the engine over one stylesheet."""

    violations: list[Violation] = field(default_factory=list)
    errors: list[RuleError] = field(default_factory=list)
    execution_time_ms: float = 0.0
    rules_executed: int = 0
    rules_skipped: int = 0

    def should_fail(self, severity_threshold: Severity = Severity.ERROR) -> bool:
        """Check if any violation meets or exceeds the threshold.

        Args:
            severity_threshold: Minimum severity that fails the run

        Returns:
            True if any violation meets or exceeds the threshold
        """
        return any(v.severity >= severity_threshold for v in self.violations)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.INFO)

    def get_violations_by_rule(self, rule_id: str) -> list[Violation]:
        """Get violations filtered by rule ID."""
        return [v for v in self.violations if v.rule_id == rule_id]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "errors": [e.to_dict() for e in self.errors],
            "execution_time_ms": self.execution_time_ms,
            "rules_executed": self.rules_executed,
            "rules_skipped": self.rules_skipped,
            "summary": {
                "total_violations": len(self.violations),
                "error": self.error_count,
                "warning": self.warning_count,
                "info": self.info_count,
            },
        }


class RuleEngine:
    """Engine for executing style rules.

    Example usage:
        engine = RuleEngine(LintConfig())
        engine.load_rules()

        stylesheet = parse_stylesheet(source, "main.scss")
        result = engine.run(stylesheet)

        if result.should_fail():
            print("Style violations found")
    """

    def __init__(self, config: LintConfig | None = None, continue_on_error: bool = True):
        """Initialize the rule engine.

        Args:
            config: Optional pre-loaded configuration
            continue_on_error: Keep running other rules when one raises
        """
        self.config = config or LintConfig()
        self.continue_on_error = continue_on_error
        self._rules: dict[str, BaseRule] = {}
        self._rules_by_category: dict[str, list[BaseRule]] = {}
        self._known_rule_ids: set[str] = set(BUILTIN_RULES)

    def load_rules(self, discovery: RuleDiscovery | None = None) -> int:
        """Load rules using discovery.

        Args:
            discovery: Optional RuleDiscovery instance

        Returns:
            Number of rules loaded
        """
        if discovery is None:
            discovery = RuleDiscovery()

        rule_classes = discovery.discover_all()
        self._known_rule_ids.update(rule_classes)
        loaded = 0

        for rule_id, rule_class in sorted(rule_classes.items()):
            try:
                rule = rule_class()
            except Exception as e:
                logger.warning(f"Could not instantiate rule {rule_id}: {e}")
                continue
            self.register(rule)
            loaded += 1

        logger.info(f"Loaded {loaded} rules")
        return loaded

    def register(self, rule: BaseRule) -> None:
        """Register a rule with the engine.

        Args:
            rule: Rule instance to register
        """
        rule_id = rule.rule_id
        self._known_rule_ids.add(rule_id)
        self._rules[rule_id] = rule
        self._rules_by_category.setdefault(rule.category, []).append(rule)
        logger.debug(f"Registered rule: {rule_id}")

    def unregister(self, rule_id: str) -> bool:
        """Unregister a rule from the engine.

        Args:
            rule_id: Rule identifier to unregister

        Returns:
            True if rule was found and removed, False otherwise
        """
        rule = self._rules.pop(rule_id, None)
        if rule is None:
            return False

        self._rules_by_category[rule.category] = [
            r for r in self._rules_by_category.get(rule.category, []) if r.rule_id != rule_id
        ]
        return True

    def get_rule(self, rule_id: str) -> BaseRule | None:
        return self._rules.get(rule_id)

    def get_rules_by_category(self, category: str) -> list[BaseRule]:
        return self._rules_by_category.get(category, []).copy()

    def get_all_rules(self) -> list[BaseRule]:
        """Get all registered rules, ordered by rule id."""
        return [self._rules[rule_id] for rule_id in sorted(self._rules)]

    def get_enabled_rules(self) -> list[BaseRule]:
        """Get registered rules enabled by the configuration."""
        return [r for r in self.get_all_rules() if self.config.is_check_enabled(r.rule_id)]

    @property
    def known_rule_ids(self) -> list[str]:
        """All rule ids the engine can report, including built-in ones."""
        return sorted(self._known_rule_ids)

    def validate_config(self) -> None:
        """Validate rule references in the configuration.

        Raises:
            ConfigurationError: If the config names an unknown rule or category
        """
        known = self._known_rule_ids
        references: list[tuple[str, str]] = []
        references.extend(("enabledChecks", p) for p in self.config.enabled_checks or [])
        references.extend(("disabledChecks", p) for p in self.config.disabled_checks)
        references.extend(("rules", p) for p in self.config.rules)

        unknown = [
            f"{key}: {pattern}"
            for key, pattern in references
            if not any(matches_check(pattern, rule_id) for rule_id in known)
        ]
        if unknown:
            raise ConfigurationError(
                f"Unknown rule identifiers in configuration: {', '.join(unknown)}",
                suggestion="Run 'css-guard rules' to list the available rule ids",
            )

    def run(self, stylesheet: Stylesheet) -> RuleEngineResult:
        """Run enabled rules over a stylesheet and collect violations.

        Parse violations recorded on the stylesheet are included, subject
        to the same enable and severity settings as the rules.

        Args:
            stylesheet: Parsed stylesheet

        Returns:
            RuleEngineResult with violations and execution info
        """
        start_time = time.time()
        context = RuleContext(stylesheet=stylesheet, config=self.config)

        violations = [
            self._apply_severity_override(v)
            for v in stylesheet.parse_violations
            if self.config.is_check_enabled(v.rule_id)
        ]
        errors: list[RuleError] = []

        rules = self._filter_by_language(self.get_all_rules(), stylesheet.language)
        enabled = [r for r in rules if self.config.is_check_enabled(r.rule_id)]
        rules_skipped = len(self._rules) - len(enabled)
        rules_executed = 0

        for rule in enabled:
            result = self._execute_rule(rule, context)
            rules_executed += 1
            if result.error:
                errors.append(result.error)
                if not self.continue_on_error:
                    break
            else:
                violations.extend(result.violations)

        return RuleEngineResult(
            violations=violations,
            errors=errors,
            execution_time_ms=(time.time() - start_time) * 1000,
            rules_executed=rules_executed,
            rules_skipped=rules_skipped,
        )

    def _apply_severity_override(self, violation: Violation) -> Violation:
        rule_config = self.config.rules.get(violation.rule_id)
        if rule_config is not None and rule_config.severity is not None:
            return violation.with_severity(rule_config.severity)
        return violation

    def _execute_rule(self, rule: BaseRule, context: RuleContext) -> RuleExecutionResult:
        """Execute a single rule.

        Args:
            rule: Rule to execute
            context: RuleContext

        Returns:
            RuleExecutionResult with violations or error
        """
        start_time = time.time()

        try:
            violations = rule.check(context)
            return RuleExecutionResult(
                rule_id=rule.rule_id,
                violations=violations,
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            error = RuleError(
                rule_id=rule.rule_id,
                error_message=str(e),
                exception_type=type(e).__name__,
            )
            logger.warning(f"Rule {rule.rule_id} failed on {context.file_path}: {e}")
            return RuleExecutionResult(
                rule_id=rule.rule_id,
                execution_time_ms=(time.time() - start_time) * 1000,
                error=error,
            )

    def _filter_by_language(self, rules: list[BaseRule], language: str) -> list[BaseRule]:
        """Filter rules by supported language."""
        return [
            rule
            for rule in rules
            if rule.supported_languages is None or language in rule.supported_languages
        ]


def create_rule_engine(
    config: LintConfig | None = None,
    project_path: Path | None = None,
    auto_load: bool = True,
    validate: bool = True,
) -> RuleEngine:
    """Factory function to create and configure a rule engine.

    Args:
        config: Optional pre-loaded configuration
        project_path: Optional project path for config loading
        auto_load: Whether to auto-load rules
        validate: Whether to check the config's rule references

    Returns:
        Configured RuleEngine instance

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if config is None and project_path is not None:
        config = LintConfigLoader(project_path).load()

    engine = RuleEngine(config=config)

    if auto_load:
        engine.load_rules()
        if validate:
            engine.validate_config()

    return engine
