"""Unit tests for css_guard.report.diagnostics module."""

import threading

from css_guard.models import Severity, Span, Violation
from css_guard.report.diagnostics import DiagnosticRecord, DiagnosticsReport, RuleFailure


def make_violation(
    file_path: str = "a.css",
    line: int = 1,
    column: int = 1,
    rule_id: str = "TEST.RULE",
    severity: Severity = Severity.WARNING,
) -> Violation:
    return Violation(
        rule_id=rule_id,
        severity=severity,
        message=f"{rule_id} at {line}:{column}",
        span=Span(0, 1, line, column, line, column + 1),
        file_path=file_path,
        remediation_hints=("fix it",),
    )


class TestDiagnosticRecord:
    """Tests for DiagnosticRecord."""

    def test_from_violation(self):
        """Test fields are copied from the violation and its span."""
        record = DiagnosticRecord.from_violation(make_violation(line=3, column=5))
        assert (record.file, record.line, record.column) == ("a.css", 3, 5)
        assert (record.end_line, record.end_column) == (3, 6)
        assert record.hints == ("fix it",)

    def test_to_dict(self):
        """Test the structured output keys."""
        data = DiagnosticRecord.from_violation(make_violation()).to_dict()
        assert data == {
            "file": "a.css",
            "line": 1,
            "column": 1,
            "endLine": 1,
            "endColumn": 2,
            "ruleId": "TEST.RULE",
            "severity": "warning",
            "message": "TEST.RULE at 1:1",
            "hints": ["fix it"],
        }


class TestDiagnosticsReport:
    """Tests for DiagnosticsReport."""

    def test_records_sorted(self):
        """Test records are ordered by file, line, column and rule id."""
        report = DiagnosticsReport()
        report.add_result("b.css", [make_violation("b.css", 1, 1)])
        report.add_result(
            "a.css",
            [
                make_violation("a.css", 2, 1),
                make_violation("a.css", 1, 4, rule_id="Z.RULE"),
                make_violation("a.css", 1, 4, rule_id="A.RULE"),
            ],
        )
        keys = [(r.file, r.line, r.column, r.rule_id) for r in report.records]
        assert keys == [
            ("a.css", 1, 4, "A.RULE"),
            ("a.css", 1, 4, "Z.RULE"),
            ("a.css", 2, 1, "TEST.RULE"),
            ("b.css", 1, 1, "TEST.RULE"),
        ]
        assert report.files == ["a.css", "b.css"]

    def test_merge_order_does_not_matter(self):
        """Test two merge orders produce identical output."""
        first = DiagnosticsReport()
        second = DiagnosticsReport()
        results = [("a.css", [make_violation("a.css", 2)]), ("b.css", [make_violation("b.css")])]
        for file_path, violations in results:
            first.add_result(file_path, violations)
        for file_path, violations in reversed(results):
            second.add_result(file_path, violations)
        assert first.to_dict() == second.to_dict()

    def test_threshold(self):
        """Test pass/fail follows the configured threshold."""
        report = DiagnosticsReport(fail_on=Severity.ERROR)
        report.add_result("a.css", [make_violation(severity=Severity.WARNING)])
        assert report.passed
        assert report.has_failures(Severity.WARNING)
        assert not report.has_failures(Severity.ERROR)

        report.add_result("b.css", [make_violation("b.css", severity=Severity.ERROR)])
        assert not report.passed
        assert report.failing_count == 1

    def test_empty_report_passes(self):
        """Test a report with no violations passes."""
        report = DiagnosticsReport(fail_on=Severity.INFO)
        report.add_result("a.css", [])
        assert report.passed
        assert report.files == ["a.css"]

    def test_counts_and_summary(self):
        """Test per-severity counts."""
        report = DiagnosticsReport()
        report.add_result(
            "a.css",
            [
                make_violation(severity=Severity.ERROR),
                make_violation(line=2, severity=Severity.WARNING),
                make_violation(line=3, severity=Severity.INFO),
                make_violation(line=4, severity=Severity.INFO),
            ],
        )
        summary = report.summary()
        assert (summary["error"], summary["warning"], summary["info"]) == (1, 1, 2)
        assert summary["total"] == 4
        assert summary["files"] == 1
        assert summary["failOn"] == "error"

    def test_rule_failures(self):
        """Test rule failures are kept separately from violations."""
        report = DiagnosticsReport()
        report.add_result("a.css", [], [RuleFailure("a.css", "TEST.X", "boom", "RuntimeError")])
        data = report.to_dict()
        assert data["violations"] == []
        assert data["ruleFailures"][0]["rule_id"] == "TEST.X"
        assert data["passed"] is True

    def test_concurrent_merge(self):
        """Test merging from many threads loses nothing."""
        report = DiagnosticsReport()

        def worker(index: int) -> None:
            report.add_result(f"f{index:03}.css", [make_violation(f"f{index:03}.css")])

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(report.records) == 50
        assert [r.file for r in report.records] == sorted(r.file for r in report.records)
