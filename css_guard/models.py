"""
Core value types shared by the analysis, rule, and reporting layers.

Spans and violations are immutable once produced. Offsets are character
offsets into the decoded source text; lines and columns are 1-based.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity levels for style violations."""

    ERROR = "error"  # Fails the run at the default threshold
    WARNING = "warning"  # Should be fixed, reported
    INFO = "info"  # Informational only

    def __lt__(self, other: "Severity") -> bool:
        order = [Severity.INFO, Severity.WARNING, Severity.ERROR]
        return order.index(self) < order.index(other)

    def __le__(self, other: "Severity") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Severity") -> bool:
        return not self <= other

    def __ge__(self, other: "Severity") -> bool:
        return not self < other


@dataclass(frozen=True)
class Span:
    """A region of source text."""

    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int

    def contains(self, other: "Span") -> bool:
        """Check whether another span lies entirely within this one."""
        return self.start <= other.start and other.end <= self.end

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start": self.start,
            "end": self.end,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "Span":
        """Create Span from dictionary."""
        return cls(
            start=data["start"],
            end=data["end"],
            line=data["line"],
            column=data["column"],
            end_line=data["end_line"],
            end_column=data["end_column"],
        )


@dataclass(frozen=True)
class Violation:
    """One detected deviation from a configured style rule."""

    rule_id: str
    severity: Severity
    message: str
    span: Span
    file_path: str = "<string>"
    remediation_hints: tuple[str, ...] = field(default_factory=tuple)

    @property
    def line(self) -> int:
        return self.span.line

    @property
    def column(self) -> int:
        return self.span.column

    def with_severity(self, severity: Severity) -> "Violation":
        """Return a copy of this violation with a different severity."""
        return Violation(
            rule_id=self.rule_id,
            severity=severity,
            message=self.message,
            span=self.span,
            file_path=self.file_path,
            remediation_hints=self.remediation_hints,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "file_path": self.file_path,
            "span": self.span.to_dict(),
            "remediation_hints": list(self.remediation_hints),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Violation":
        """Create Violation from dictionary."""
        return cls(
            rule_id=data["rule_id"],
            severity=Severity(data["severity"]),
            message=data["message"],
            span=Span.from_dict(data["span"]),
            file_path=data.get("file_path", "<string>"),
            remediation_hints=tuple(data.get("remediation_hints", [])),
        )
