"""Unit tests for the formatting rules."""

BRACE = "FORMAT.BRACE_PLACEMENT"
SELECTOR_LINE = "FORMAT.SELECTOR_PER_LINE"
DECLARATION_LINE = "FORMAT.DECLARATION_PER_LINE"
PROPERTY_CASE = "FORMAT.PROPERTY_CASE"


class TestBracePlacementRule:
    """Tests for FORMAT.BRACE_PLACEMENT."""

    def test_well_formed(self, violations_for):
        """Test the canonical layout passes."""
        assert violations_for(".a {\n  color: red;\n}\n", BRACE) == []

    def test_one_liner(self, violations_for):
        """Test a one-line block passes."""
        assert violations_for(".a { color: red; }\n", BRACE) == []

    def test_brace_on_next_line(self, violations_for):
        """Test an opening brace below the selector."""
        violations = violations_for(".a\n{\n  color: red;\n}\n", BRACE)
        assert len(violations) == 1
        assert violations[0].line == 2
        assert "same line" in violations[0].message

    def test_no_space_before_brace(self, violations_for):
        """Test a brace glued to the selector."""
        violations = violations_for(".a{\n  color: red;\n}\n", BRACE)
        assert [v.message for v in violations] == ["put exactly one space before the opening brace"]

    def test_two_spaces_before_brace(self, violations_for):
        """Test more than one space before the brace."""
        assert len(violations_for(".a  {\n  color: red;\n}\n", BRACE)) == 1

    def test_closing_brace_after_declaration(self, violations_for):
        """Test a closing brace sharing a line with a declaration."""
        violations = violations_for(".a {\n  color: red; }\n", BRACE)
        assert len(violations) == 1
        assert violations[0].message == "closing brace must be on its own line"
        assert violations[0].line == 2

    def test_at_rule_block(self, violations_for):
        """Test at-rule blocks follow the same layout."""
        assert violations_for("@media print {\n  .a {\n    color: red;\n  }\n}\n", BRACE) == []


class TestSelectorPerLineRule:
    """Tests for FORMAT.SELECTOR_PER_LINE."""

    def test_one_per_line(self, violations_for):
        """Test a group written one selector per line."""
        assert violations_for(".a,\n.b {\n}\n", SELECTOR_LINE) == []

    def test_shared_line(self, violations_for):
        """Test two selectors on one line."""
        violations = violations_for(".a, .b {\n}\n", SELECTOR_LINE)
        assert len(violations) == 1
        assert violations[0].message == "selector '.b' shares a line with '.a'"

    def test_commas_inside_pseudo_class(self, violations_for):
        """Test commas inside :not() do not split the selector."""
        assert violations_for(".a:not(.b, .c) {\n}\n", SELECTOR_LINE) == []


class TestDeclarationPerLineRule:
    """Tests for FORMAT.DECLARATION_PER_LINE."""

    def test_multi_line(self, violations_for):
        """Test one declaration per line passes."""
        source = ".a {\n  color: red;\n  margin: 0;\n}\n"
        assert violations_for(source, DECLARATION_LINE) == []

    def test_single_declaration_one_liner(self, violations_for):
        """Test a one-line rule with one declaration passes."""
        assert violations_for(".a { color: red; }\n", DECLARATION_LINE) == []

    def test_multiple_declarations_one_liner(self, violations_for):
        """Test a one-line rule with two declarations."""
        violations = violations_for(".a { color: red; margin: 0; }\n", DECLARATION_LINE)
        assert len(violations) == 1

    def test_shared_line(self, violations_for):
        """Test two declarations on one line of a multi-line block."""
        violations = violations_for(".a {\n  color: red; margin: 0;\n}\n", DECLARATION_LINE)
        assert [v.message for v in violations] == ["'margin' shares a line with 'color'"]

    def test_declaration_on_brace_line(self, violations_for):
        """Test a declaration starting on the opening brace's line."""
        violations = violations_for(".a { color: red;\n  margin: 0;\n}\n", DECLARATION_LINE)
        assert len(violations) == 1
        assert "'color' must start on a new line" in violations[0].message


class TestPropertyCaseRule:
    """Tests for FORMAT.PROPERTY_CASE."""

    def test_uppercase_property(self, violations_for):
        """Test a property with uppercase letters."""
        violations = violations_for(".a {\n  Color: red;\n}\n", PROPERTY_CASE)
        assert len(violations) == 1
        assert violations[0].remediation_hints == ("use `color`",)

    def test_lowercase_property(self, violations_for):
        """Test a lowercase property passes."""
        assert violations_for(".a {\n  color: red;\n}\n", PROPERTY_CASE) == []

    def test_variables_are_exempt(self, violations_for):
        """Test custom properties and SCSS variables keep their case."""
        source = ".a {\n  --Brand: red;\n  $Gap: 4px;\n}\n"
        assert violations_for(source, PROPERTY_CASE) == []
