"""Unit tests for css_guard.analysis.html module."""

from css_guard.analysis.html import mask_html
from css_guard.analysis.parser import parse_stylesheet


class TestMaskHtml:
    """Tests for blanking HTML outside of <style> elements."""

    def test_preserves_length_and_lines(self):
        """Test the masked text lines up with the original document."""
        source = "<p>hi</p>\n<style>\n.a { color: red; }\n</style>\n"
        masked = mask_html(source)
        assert len(masked) == len(source)
        assert masked.count("\n") == source.count("\n")

    def test_keeps_style_body(self):
        """Test the CSS inside <style> is kept verbatim."""
        masked = mask_html('<style type="text/css">.a{}</style>')
        assert masked.strip() == ".a{}"

    def test_multiple_style_blocks(self):
        """Test every style element is kept."""
        masked = mask_html("<style>.a{}</style><div></div><STYLE>.b{}</STYLE>")
        assert ".a{}" in masked
        assert ".b{}" in masked
        assert "div" not in masked

    def test_no_style_block(self):
        """Test a document without styles masks to whitespace."""
        assert mask_html("<p>{oops}</p>").strip() == ""


class TestHtmlParsing:
    """Tests for parsing HTML documents."""

    def test_positions_refer_to_html_file(self):
        """Test spans are reported at their line in the HTML document."""
        source = "<html>\n<style>\n.menu {\n  color: red;\n}\n</style>\n</html>\n"
        sheet = parse_stylesheet(source, "page.html")
        block = sheet.blocks[0]
        assert block.selectors[0].span.line == 3
        assert block.declarations[0].span.line == 4
        assert sheet.parse_violations == []

    def test_markup_braces_are_ignored(self):
        """Test braces in markup outside <style> do not affect parsing."""
        source = "<p>{{ template }}</p>\n<style>.a { color: red; }</style>\n"
        sheet = parse_stylesheet(source, "page.html")
        assert sheet.parse_violations == []
        assert len(sheet.blocks) == 1
