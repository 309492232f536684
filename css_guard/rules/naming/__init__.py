"""Naming rules for class names."""
