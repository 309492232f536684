"""Machine-readable JSON renderer."""

import json
import sys
from typing import Any, TextIO

from .diagnostics import DiagnosticsReport


class JSONReporter:
    """JSON reporter.

    Output format:
    {
        "passed": bool,
        "reason": "summary",
        "summary": {"files": int, "total": int, "error": int, ...},
        "violations": [{"file", "line", "column", "ruleId", ...}, ...],
        "ruleFailures": [...]
    }
    """

    def __init__(self, stream: TextIO = sys.stdout, indent: int | None = 2):
        """Initialize the JSON reporter.

        Args:
            stream: Output stream (default: stdout).
            indent: JSON indentation, None for compact output.
        """
        self.stream = stream
        self.indent = indent

    def report(self, report: DiagnosticsReport) -> dict[str, Any]:
        """Output the report as JSON.

        Returns:
            The output dictionary (also written to stream).
        """
        output = report.to_dict()
        output["reason"] = self._build_reason(report)
        json.dump(output, self.stream, indent=self.indent)
        self.stream.write("\n")
        return output

    def _build_reason(self, report: DiagnosticsReport) -> str:
        """Build human-readable reason summary."""
        if report.passed:
            if not report.records:
                return "Style checks passed"
            return f"Style checks passed ({len(report.records)} below {report.fail_on.value})"

        failing = [r.rule_id for r in report.records if r.severity >= report.fail_on]
        unique_rules = list(dict.fromkeys(failing))

        if len(unique_rules) == 1:
            return f"Failed: {unique_rules[0]} violation"
        elif len(unique_rules) <= 3:
            return f"Failed: {len(unique_rules)} rule violations ({', '.join(unique_rules)})"
        else:
            return (
                f"Failed: {len(unique_rules)} rule violations "
                f"({', '.join(unique_rules[:3])}...)"
            )
