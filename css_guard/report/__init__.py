"""Diagnostics aggregation and output renderers."""

from .diagnostics import DiagnosticRecord, DiagnosticsReport, RuleFailure
from .json_reporter import JSONReporter
from .sarif import SARIFConfig, SARIFExporter, rule_metadata_from_engine
from .text import TextReporter

__all__ = [
    "DiagnosticRecord",
    "DiagnosticsReport",
    "RuleFailure",
    "JSONReporter",
    "SARIFConfig",
    "SARIFExporter",
    "TextReporter",
    "rule_metadata_from_engine",
]
