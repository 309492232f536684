"""Tests for the css-guard command-line interface."""

import json

from click.testing import CliRunner

from css_guard import __version__
from css_guard.cli.main import build_overrides, cli


def write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


class TestBuildOverrides:
    """Tests for translating flags into config overrides."""

    def test_empty(self):
        """Test no flags give no overrides."""
        assert build_overrides(None, (), (), None, None) == {}

    def test_all_flags(self):
        """Test every flag maps to its config key."""
        overrides = build_overrides("warning", ("VALUE.*",), ("VALUE.HEX_CASE",), 2, 1)
        assert overrides == {
            "failOn": "warning",
            "enabledChecks": ["VALUE.*"],
            "disabledChecks": ["VALUE.HEX_CASE"],
            "maxNestingDepth": 2,
            "maxWorkers": 1,
            "parallel": False,
        }


class TestCheckCommand:
    """Tests for 'css-guard check'."""

    def test_clean_file(self, tmp_path):
        """Test a clean file exits 0."""
        path = write(tmp_path / "a.scss", ".menu {\n  color: red;\n}\n")
        result = CliRunner().invoke(cli, ["check", "--project", str(tmp_path), str(path)])
        assert result.exit_code == 0
        assert "No issues found in 1 file(s)" in result.output

    def test_violations_exit_1(self, tmp_path):
        """Test an error-severity violation exits 1."""
        path = write(tmp_path / "a.scss", "#main {\n}\n")
        result = CliRunner().invoke(cli, ["check", "--project", str(tmp_path), str(path)])
        assert result.exit_code == 1
        assert "SELECTOR.ID_SELECTOR_USED" in result.output

    def test_warnings_below_threshold(self, tmp_path):
        """Test warnings alone do not fail at the default threshold."""
        path = write(tmp_path / "a.scss", ".menu {\n  margin: 0.5em;\n}\n")
        runner = CliRunner()
        args = ["check", "--project", str(tmp_path), str(path)]
        assert runner.invoke(cli, args).exit_code == 0
        assert runner.invoke(cli, args + ["--fail-on", "warning"]).exit_code == 1

    def test_disable_flag(self, tmp_path):
        """Test --disable removes a rule from the run."""
        path = write(tmp_path / "a.scss", "#main {\n}\n")
        result = CliRunner().invoke(
            cli,
            ["check", "--project", str(tmp_path), "--disable", "SELECTOR.*", str(path)],
        )
        assert result.exit_code == 0

    def test_json_format(self, tmp_path):
        """Test --format json prints one JSON document."""
        path = write(tmp_path / "a.scss", ".menu {\n  margin: 0.5em;\n}\n")
        result = CliRunner().invoke(
            cli, ["check", "-q", "--project", str(tmp_path), "--format", "json", str(path)]
        )
        data = json.loads(result.output)
        assert data["passed"] is True
        assert data["violations"][0]["ruleId"] == "VALUE.LEADING_ZERO"
        assert data["violations"][0]["line"] == 2

    def test_sarif_output_file(self, tmp_path):
        """Test --format sarif --output writes a SARIF file."""
        path = write(tmp_path / "a.scss", "#main {\n}\n")
        out = tmp_path / "report.sarif"
        result = CliRunner().invoke(
            cli,
            [
                "check",
                "--project",
                str(tmp_path),
                "--format",
                "sarif",
                "--output",
                str(out),
                "--no-color",
                str(path),
            ],
        )
        assert result.exit_code == 1
        doc = json.loads(out.read_text())
        assert doc["runs"][0]["results"][0]["ruleId"] == "SELECTOR.ID_SELECTOR_USED"
        assert "Report written to" in result.output

    def test_stdin(self, tmp_path):
        """Test linting source read from stdin."""
        result = CliRunner().invoke(
            cli,
            ["check", "--project", str(tmp_path), "--stdin", "--stdin-filename", "x.css"],
            input="// note\n.a {\n}\n",
        )
        assert result.exit_code == 1
        assert "x.css:1:1 COMMENT.LINE_COMMENT" in result.output

    def test_project_config(self, tmp_path):
        """Test the project config file is applied."""
        write(tmp_path / ".css-guard.json", json.dumps({"disabledChecks": ["SELECTOR.*"]}))
        path = write(tmp_path / "a.scss", "#main {\n}\n")
        result = CliRunner().invoke(cli, ["check", "--project", str(tmp_path), str(path)])
        assert result.exit_code == 0

    def test_invalid_config_exits_2(self, tmp_path):
        """Test an invalid config file is fatal before any file is checked."""
        write(tmp_path / ".css-guard.json", "{ broken")
        path = write(tmp_path / "a.scss", "#main {\n}\n")
        result = CliRunner().invoke(cli, ["check", "--project", str(tmp_path), str(path)])
        assert result.exit_code == 2
        assert "Invalid JSON" in result.output
        assert "SELECTOR.ID_SELECTOR_USED" not in result.output

    def test_unknown_rule_exits_2(self, tmp_path):
        """Test an unknown rule id is a configuration error."""
        path = write(tmp_path / "a.scss", ".a {\n}\n")
        result = CliRunner().invoke(
            cli, ["check", "--project", str(tmp_path), "--enable", "NOPE.RULE", str(path)]
        )
        assert result.exit_code == 2
        assert "NOPE.RULE" in result.output

    def test_missing_path_exits_2(self, tmp_path):
        """Test a path that does not exist."""
        result = CliRunner().invoke(
            cli, ["check", "--project", str(tmp_path), str(tmp_path / "nope.css")]
        )
        assert result.exit_code == 2
        assert "Path not found" in result.output

    def test_no_paths_exits_2(self, tmp_path):
        """Test running without paths or --stdin."""
        result = CliRunner().invoke(cli, ["check", "--project", str(tmp_path)])
        assert result.exit_code == 2

    def test_invalid_jobs_exits_2(self, tmp_path):
        """Test a worker count below one."""
        path = write(tmp_path / "a.scss", ".a {\n}\n")
        result = CliRunner().invoke(
            cli, ["check", "--project", str(tmp_path), "--jobs", "0", str(path)]
        )
        assert result.exit_code == 2


class TestRulesCommand:
    """Tests for 'css-guard rules'."""

    def test_lists_rules(self, tmp_path):
        """Test every rule id is listed, including parser rules."""
        result = CliRunner().invoke(cli, ["rules", "--project", str(tmp_path)])
        assert result.exit_code == 0
        assert "VALUE.LEADING_ZERO" in result.output
        assert "PARSE.UNBALANCED_BRACES" in result.output
        assert "IO.FILE_UNREADABLE" in result.output

    def test_json_listing(self, tmp_path):
        """Test the JSON listing shows enabled state."""
        write(tmp_path / ".css-guard.json", json.dumps({"disabledChecks": ["COMMENT.*"]}))
        result = CliRunner().invoke(cli, ["rules", "--project", str(tmp_path), "--json"])
        entries = {e["id"]: e for e in json.loads(result.output)}
        assert entries["COMMENT.SPACING"]["enabled"] is False
        assert entries["VALUE.LEADING_ZERO"]["enabled"] is True
        assert entries["NAMING.BEM_MALFORMED"]["severity"] == "error"

    def test_json_listing_columns(self, tmp_path):
        """Test entries carry category and node kind for rules and parser checks."""
        result = CliRunner().invoke(cli, ["rules", "--project", str(tmp_path), "--json"])
        entries = {e["id"]: e for e in json.loads(result.output)}
        assert entries["VALUE.LEADING_ZERO"]["category"] == "values"
        assert entries["VALUE.LEADING_ZERO"]["node_kind"] == "declaration"
        assert entries["PARSE.UNBALANCED_BRACES"]["node_kind"] == "parser"
        assert entries["IO.FILE_UNREADABLE"]["category"] == "io"
        assert entries["IO.FILE_UNREADABLE"]["node_kind"] == "runner"

    def test_severity_overrides_listed(self, tmp_path):
        """Test rules.<id>.severity overrides show in the listing."""
        write(
            tmp_path / ".css-guard.json",
            json.dumps(
                {
                    "rules": {
                        "VALUE.LEADING_ZERO": {"severity": "error"},
                        "PARSE.MISSING_SEMICOLON": {"severity": "info"},
                    }
                }
            ),
        )
        result = CliRunner().invoke(cli, ["rules", "--project", str(tmp_path), "--json"])
        assert result.exit_code == 0
        entries = {e["id"]: e for e in json.loads(result.output)}
        assert entries["VALUE.LEADING_ZERO"]["severity"] == "error"
        assert entries["PARSE.MISSING_SEMICOLON"]["severity"] == "info"


class TestGroup:
    """Tests for the top-level command group."""

    def test_version(self):
        """Test --version prints the package version."""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self):
        """Test running without a command prints help."""
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "check" in result.output
