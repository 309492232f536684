"""Selector rules: banned selector forms and attribute quoting."""
