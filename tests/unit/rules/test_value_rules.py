"""Unit tests for the declaration value rules."""

import pytest

from css_guard.models import Severity
from css_guard.rules.config import LintConfig, RuleConfig, ZIndexBandConfig

LEADING_ZERO = "VALUE.LEADING_ZERO"
HEX_SHORTHAND = "VALUE.HEX_SHORTHAND"
HEX_CASE = "VALUE.HEX_CASE"
QUOTES = "VALUE.QUOTE_STYLE"
IMPORTANT = "VALUE.MISSING_IMPORTANT_REASON"
Z_INDEX = "VALUE.Z_INDEX_OUT_OF_RANGE"


def rule(value: str, prop: str = "margin") -> str:
    return f".a {{\n  {prop}: {value};\n}}\n"


class TestLeadingZeroRule:
    """Tests for VALUE.LEADING_ZERO."""

    def test_leading_zero(self, violations_for):
        """Test '0.9em' is reported with a '.9em' suggestion."""
        violations = violations_for(rule("0.9em"), LEADING_ZERO)
        assert len(violations) == 1
        assert violations[0].message == "unnecessary leading zero in '0.9em'"
        assert violations[0].remediation_hints == ("use `.9em` instead of `0.9em`",)
        assert (violations[0].line, violations[0].column) == (2, 11)

    @pytest.mark.parametrize("value", [".9em", "1.5em", "10.5px", "0", "0 auto", "100%"])
    def test_valid_values(self, violations_for, value):
        """Test values without a redundant leading zero."""
        assert violations_for(rule(value), LEADING_ZERO) == []

    def test_negative_value(self, violations_for):
        """Test negative fractions keep their sign in the suggestion."""
        violations = violations_for(rule("-0.5em"), LEADING_ZERO)
        assert violations[0].remediation_hints == ("use `-.5em` instead of `-0.5em`",)

    def test_several_in_one_value(self, violations_for):
        """Test every occurrence in a value is reported."""
        assert len(violations_for(rule("0.5em 0.25em"), LEADING_ZERO)) == 2

    def test_strings_are_ignored(self, violations_for):
        """Test numbers inside strings are not checked."""
        assert violations_for(rule("'0.5'", "content"), LEADING_ZERO) == []

    def test_ignored_properties(self, violations_for):
        """Test properties named in ignoreProperties are skipped."""
        config = LintConfig(
            rules={
                LEADING_ZERO: RuleConfig(parameters={"ignoreProperties": ["Opacity"]})
            }
        )
        assert violations_for(rule("0.5", "opacity"), LEADING_ZERO, config=config) == []
        assert len(violations_for(rule("0.5em"), LEADING_ZERO, config=config)) == 1


class TestHexColorRules:
    """Tests for VALUE.HEX_SHORTHAND and VALUE.HEX_CASE."""

    def test_shorthand_available(self, violations_for):
        """Test a six-digit color that can be shortened."""
        violations = violations_for(rule("#aabbcc", "color"), HEX_SHORTHAND)
        assert len(violations) == 1
        assert violations[0].remediation_hints == ("use `#abc` instead of `#aabbcc`",)

    def test_no_shorthand(self, violations_for):
        """Test colors without repeating digits."""
        assert violations_for(rule("#abcdef", "color"), HEX_SHORTHAND) == []
        assert violations_for(rule("#fff", "color"), HEX_SHORTHAND) == []

    def test_uppercase(self, violations_for):
        """Test uppercase hex digits."""
        violations = violations_for(rule("#FFF", "color"), HEX_CASE)
        assert [v.message for v in violations] == ["hex color '#FFF' must be lowercase"]

    def test_uppercase_long_form_reports_both(self, lint):
        """Test '#FFFFFF' is both uppercase and shortenable."""
        ids = sorted(v.rule_id for v in lint(rule("#FFFFFF", "color")))
        assert ids == [HEX_CASE, HEX_SHORTHAND]

    def test_inside_shorthand_property(self, violations_for):
        """Test colors inside a multi-part value."""
        assert len(violations_for(rule("1px solid #FF0000", "border"), HEX_SHORTHAND)) == 1


class TestQuoteStyleRule:
    """Tests for VALUE.QUOTE_STYLE."""

    def test_double_quotes(self, violations_for):
        """Test double-quoted strings."""
        violations = violations_for(rule('"x"', "content"), QUOTES)
        assert [v.message for v in violations] == ["use single quotes"]
        assert violations[0].remediation_hints == ("use `'x'`",)

    def test_single_quotes(self, violations_for):
        """Test single-quoted strings pass."""
        assert violations_for(rule("'Open Sans', sans-serif", "font-family"), QUOTES) == []

    def test_quoted_url(self, violations_for):
        """Test quotes inside url()."""
        violations = violations_for(rule("url('a.png')", "background"), QUOTES)
        assert [v.message for v in violations] == ["omit quotes inside url()"]
        assert violations[0].remediation_hints == ("use `url(a.png)`",)

    def test_unquoted_url(self, violations_for):
        """Test unquoted url() passes."""
        assert violations_for(rule("url(a.png)", "background"), QUOTES) == []


class TestMissingImportantReasonRule:
    """Tests for VALUE.MISSING_IMPORTANT_REASON."""

    def test_without_comment(self, violations_for):
        """Test '!important' with no comment is an error."""
        violations = violations_for(".a {\n  color: red !important;\n}\n", IMPORTANT)
        assert len(violations) == 1
        assert violations[0].severity == Severity.ERROR

    def test_with_todo_comment(self, violations_for):
        """Test a trailing TODO comment is an acceptable reason."""
        source = ".a {\n  color: red !important; /* TODO: drop after widget fix */\n}\n"
        assert violations_for(source, IMPORTANT) == []

    def test_with_comment_above(self, violations_for):
        """Test a comment directly above the declaration."""
        source = ".a {\n  /* overrides third-party inline styles */\n  color: red !important;\n}\n"
        assert violations_for(source, IMPORTANT) == []

    def test_with_comment_inside_value(self, violations_for):
        """Test a comment before the semicolon counts."""
        source = ".a {\n  color: red !important /* widget */;\n}\n"
        assert violations_for(source, IMPORTANT) == []

    def test_empty_comment(self, violations_for):
        """Test an empty comment is not a reason."""
        source = ".a {\n  color: red !important; /**/\n}\n"
        assert len(violations_for(source, IMPORTANT)) == 1

    def test_comment_on_previous_declaration(self, violations_for):
        """Test a comment belonging to another declaration does not count."""
        source = ".a {\n  margin: 0; /* spacing */\n  color: red !important;\n}\n"
        assert len(violations_for(source, IMPORTANT)) == 1

    def test_no_important(self, violations_for):
        """Test declarations without '!important' pass."""
        assert violations_for(".a {\n  color: red;\n}\n", IMPORTANT) == []


class TestZIndexRangeRule:
    """Tests for VALUE.Z_INDEX_OUT_OF_RANGE."""

    @pytest.mark.parametrize("value", ["1", "150", "300", "450", "900", "auto", "$z-modal"])
    def test_in_range_or_not_literal(self, violations_for, value):
        """Test values inside a band, and values that are not literals."""
        assert violations_for(rule(value, "z-index"), Z_INDEX) == []

    @pytest.mark.parametrize("value", ["950", "0", "-1", "1000 !important"])
    def test_out_of_range(self, violations_for, value):
        """Test values outside every band."""
        violations = violations_for(rule(value, "z-index"), Z_INDEX)
        assert len(violations) == 1
        assert violations[0].severity == Severity.ERROR

    def test_message(self, violations_for):
        """Test the message names the value."""
        violations = violations_for(rule("950", "z-index"), Z_INDEX)
        assert violations[0].message == "z-index 950 is outside every defined band"

    def test_configured_bands(self, violations_for):
        """Test bands from configuration replace the defaults."""
        config = LintConfig(z_index_bands=[ZIndexBandConfig(name="all", min=0, max=10000)])
        assert violations_for(rule("950", "z-index"), Z_INDEX, config=config) == []

    def test_other_properties_ignored(self, violations_for):
        """Test only z-index is checked."""
        assert violations_for(rule("950", "width"), Z_INDEX) == []
