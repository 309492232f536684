"""css-guard: a style-guide linter for CSS, SCSS, and HTML-embedded styles."""

__version__ = "0.1.0"
