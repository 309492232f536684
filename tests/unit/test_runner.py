"""Unit tests for css_guard.runner module."""

from pathlib import Path

from css_guard.models import Severity
from css_guard.rules.config import LintConfig
from css_guard.rules.engine import FILE_UNREADABLE, create_rule_engine
from css_guard.runner import LintRunner


class TestLintRunner:
    """Tests for the per-file pipeline."""

    def test_lint_source(self):
        """Test linting an in-memory source."""
        result = LintRunner().lint_source(".a {\n  margin: 0.5em;\n}\n", "x.scss")
        assert [v.rule_id for v in result.violations] == ["VALUE.LEADING_ZERO"]
        assert result.file_path == "x.scss"
        assert result.violation_count == 1

    def test_lint_file(self, tmp_path):
        """Test linting a file on disk detects its language."""
        path = tmp_path / "a.css"
        path.write_text("// note\n.a {\n}\n", encoding="utf-8")
        result = LintRunner().lint_file(path)
        assert [v.rule_id for v in result.violations] == ["COMMENT.LINE_COMMENT"]
        assert result.violations[0].file_path == str(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file yields one IO.FILE_UNREADABLE violation."""
        result = LintRunner().lint_file(tmp_path / "missing.css")
        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.rule_id == FILE_UNREADABLE
        assert violation.severity == Severity.ERROR
        assert violation.message.startswith("cannot read file:")
        assert (violation.line, violation.column) == (1, 1)

    def test_undecodable_file(self, tmp_path):
        """Test a file that is not UTF-8 is unreadable."""
        path = tmp_path / "latin.css"
        path.write_bytes(b".a { content: '\xff\xfe'; }")
        result = LintRunner().lint_file(path)
        assert [v.rule_id for v in result.violations] == [FILE_UNREADABLE]

    def test_unreadable_file_ignores_disabled_checks(self, tmp_path):
        """Test IO.FILE_UNREADABLE cannot be switched off."""
        runner = LintRunner(LintConfig(enabled_checks=["VALUE.*"]))
        result = runner.lint_file(tmp_path / "missing.css")
        assert [v.rule_id for v in result.violations] == [FILE_UNREADABLE]

    def test_collect_files(self, style_project):
        """Test directory expansion honors include and exclude patterns."""
        files = LintRunner().collect_files([style_project])
        names = [f.relative_to(style_project).as_posix() for f in files]
        assert names == ["index.html", "styles/button.css", "styles/menu.scss"]

    def test_collect_explicit_file(self, style_project):
        """Test files named explicitly are always included."""
        readme = style_project / "README.md"
        assert LintRunner().collect_files([readme]) == [readme]

    def test_run_report(self, style_project):
        """Test a run merges every file into one report."""
        report = LintRunner().run([style_project])
        assert len(report.files) == 3
        rule_ids = {r.rule_id for r in report.records}
        assert {"VALUE.LEADING_ZERO", "SELECTOR.ID_SELECTOR_USED"} <= rule_ids
        assert "VALUE.Z_INDEX_OUT_OF_RANGE" in rule_ids
        assert not report.passed

    def test_parallel_matches_sequential(self, style_project):
        """Test the worker pool gives the same output as a sequential run."""
        parallel = LintRunner(LintConfig(parallel=True, max_workers=4)).run([style_project])
        sequential = LintRunner(LintConfig(parallel=False)).run([style_project])
        assert parallel.records == sequential.records
        assert parallel.files == sequential.files

    def test_html_positions(self, style_project):
        """Test violations in HTML point at the line in the document."""
        report = LintRunner().run([style_project / "index.html"])
        record = next(r for r in report.records if r.rule_id == "VALUE.Z_INDEX_OUT_OF_RANGE")
        assert record.line == 5

    def test_run_source(self):
        """Test linting stdin-style input into a report."""
        report = LintRunner().run_source("#a {\n}\n", "<stdin>", "css")
        assert report.files == ["<stdin>"]
        assert [r.rule_id for r in report.records] == ["SELECTOR.ID_SELECTOR_USED"]

    def test_engine_config_reused(self):
        """Test a runner built from an engine uses the engine's config."""
        engine = create_rule_engine(LintConfig(max_nesting_depth=3))
        assert LintRunner(engine=engine).config.max_nesting_depth == 3

    def test_abort(self, tmp_path):
        """Test an aborted runner skips queued files."""
        runner = LintRunner()
        runner.abort()
        assert runner.aborted
        assert runner._lint_unless_aborted(Path(tmp_path / "a.css")) is None

    def test_fail_on_threshold(self, style_project):
        """Test the report uses the configured threshold."""
        path = style_project / "styles" / "menu.scss"
        assert LintRunner(LintConfig(fail_on=Severity.ERROR)).run([path]).passed
        strict = LintRunner(LintConfig(fail_on=Severity.INFO)).run([path])
        assert strict.passed is (len(strict.records) == 0)
