"""
Diagnostics aggregation.

The DiagnosticsReport is the single merge point for per-file results.
Workers hand it complete, immutable per-file violation lists; records are
exposed sorted by (file, line, column, rule id) so output is identical
from run to run regardless of completion order.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..models import Severity, Violation


@dataclass(frozen=True)
class DiagnosticRecord:
    """One violation in the stable, structured output form."""

    file: str
    line: int
    column: int
    rule_id: str
    severity: Severity
    message: str
    end_line: int
    end_column: int
    hints: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_violation(cls, violation: Violation) -> "DiagnosticRecord":
        span = violation.span
        return cls(
            file=violation.file_path,
            line=span.line,
            column=span.column,
            rule_id=violation.rule_id,
            severity=violation.severity,
            message=violation.message,
            end_line=span.end_line,
            end_column=span.end_column,
            hints=violation.remediation_hints,
        )

    @property
    def sort_key(self) -> tuple:
        return (self.file, self.line, self.column, self.rule_id, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "hints": list(self.hints),
        }


@dataclass(frozen=True)
class RuleFailure:
    """A rule that raised while checking a file."""

    file: str
    rule_id: str
    error_message: str
    exception_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "rule_id": self.rule_id,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
        }


class DiagnosticsReport:
    """Thread-safe collector of violations from many files.

    Example usage:
        report = DiagnosticsReport(fail_on=Severity.ERROR)
        report.add_result("a.css", violations)
        for record in report.records:
            print(record.file, record.line, record.rule_id)
    """

    def __init__(self, fail_on: Severity = Severity.ERROR):
        self.fail_on = fail_on
        self.aborted = False
        self.execution_time_ms = 0.0
        self._lock = threading.Lock()
        self._records: list[DiagnosticRecord] = []
        self._files: list[str] = []
        self._rule_failures: list[RuleFailure] = []

    def add_result(
        self,
        file_path: str,
        violations: Iterable[Violation],
        rule_failures: Iterable[RuleFailure] = (),
    ) -> None:
        """Merge one file's complete result.

        Args:
            file_path: File the result belongs to
            violations: Every violation found in the file
            rule_failures: Rules that raised while checking the file
        """
        records = [DiagnosticRecord.from_violation(v) for v in violations]
        failures = list(rule_failures)
        with self._lock:
            self._files.append(file_path)
            self._records.extend(records)
            self._rule_failures.extend(failures)

    @property
    def records(self) -> list[DiagnosticRecord]:
        """All records, sorted by (file, line, column, rule id)."""
        with self._lock:
            return sorted(self._records, key=lambda r: r.sort_key)

    @property
    def files(self) -> list[str]:
        """Files merged into the report, sorted."""
        with self._lock:
            return sorted(self._files)

    @property
    def rule_failures(self) -> list[RuleFailure]:
        with self._lock:
            return sorted(self._rule_failures, key=lambda f: (f.file, f.rule_id))

    def has_failures(self, fail_on: Severity | None = None) -> bool:
        """Check if any record meets or exceeds the threshold.

        Args:
            fail_on: Threshold (defaults to the report's fail_on)

        Returns:
            True if any record is at or above the threshold
        """
        threshold = fail_on or self.fail_on
        return any(r.severity >= threshold for r in self.records)

    @property
    def passed(self) -> bool:
        return not self.has_failures()

    def count(self, severity: Severity) -> int:
        return sum(1 for r in self.records if r.severity == severity)

    @property
    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self.count(Severity.INFO)

    @property
    def failing_count(self) -> int:
        """Number of records at or above the failure threshold."""
        return sum(1 for r in self.records if r.severity >= self.fail_on)

    def summary(self) -> dict[str, Any]:
        return {
            "files": len(self.files),
            "total": len(self.records),
            "error": self.error_count,
            "warning": self.warning_count,
            "info": self.info_count,
            "failOn": self.fail_on.value,
            "aborted": self.aborted,
            "executionTimeMs": round(self.execution_time_ms, 1),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "passed": self.passed,
            "summary": self.summary(),
            "violations": [r.to_dict() for r in self.records],
            "ruleFailures": [f.to_dict() for f in self.rule_failures],
        }
