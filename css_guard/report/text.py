"""Human-readable text renderer."""

import sys
from typing import TextIO

from ..models import Severity
from .diagnostics import DiagnosticRecord, DiagnosticsReport


class TextReporter:
    """Text reporter with color-coded output.

    Format: file:line:column rule_id message
    Colors: red=error, yellow=warning, blue=info

    Example output:
        src/menu.scss:4:5 VALUE.LEADING_ZERO unnecessary leading zero in '0.9em'
          -> use `.9em` instead of `0.9em`

        1 issue(s) in 1 file(s), 0 error(s), 1 warning(s), 0 info
    """

    COLORS = {
        Severity.ERROR: "\033[0;31m",  # Red
        Severity.WARNING: "\033[1;33m",  # Yellow
        Severity.INFO: "\033[0;34m",  # Blue
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, stream: TextIO = sys.stdout, use_color: bool | None = None):
        """Initialize the text reporter.

        Args:
            stream: Output stream (default: stdout).
            use_color: Whether to use ANSI colors. Auto-detects if None.
        """
        self.stream = stream
        if use_color is None:
            self.use_color = hasattr(stream, "isatty") and stream.isatty()
        else:
            self.use_color = use_color

    def report(self, report: DiagnosticsReport) -> None:
        """Output every record followed by a summary line."""
        for record in report.records:
            self._report_record(record)
        for failure in report.rule_failures:
            print(
                f"{failure.file}: rule {failure.rule_id} failed: {failure.error_message}",
                file=self.stream,
            )
        self._print_summary(report)

    def _report_record(self, record: DiagnosticRecord) -> None:
        location = f"{record.file}:{record.line}:{record.column}"
        reset = self.RESET if self.use_color else ""
        dim = self.DIM if self.use_color else ""

        if self.use_color:
            color = self.COLORS.get(record.severity, "")
            line = f"{color}{location} {record.rule_id}{reset} {record.message}"
        else:
            line = f"{location} {record.rule_id} {record.message}"
        print(line, file=self.stream)

        for hint in record.hints:
            print(f"  {dim}-> {hint}{reset}", file=self.stream)

    def _print_summary(self, report: DiagnosticsReport) -> None:
        total = len(report.records)
        files = len(report.files)

        if total == 0:
            summary = f"\nNo issues found in {files} file(s)"
        else:
            summary = (
                f"\n{total} issue(s) in {files} file(s), "
                f"{report.error_count} error(s), {report.warning_count} warning(s), "
                f"{report.info_count} info"
            )
            if report.failing_count:
                summary += f" ({report.failing_count} at or above {report.fail_on.value})"
        if report.aborted:
            summary += " [aborted]"

        print(summary, file=self.stream)
