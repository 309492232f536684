"""Formatting rules: brace placement and one item per line."""
