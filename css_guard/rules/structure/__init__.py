"""Structural rules: nesting depth and property order."""
