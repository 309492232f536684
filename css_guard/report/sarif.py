"""SARIF exporter for style violations.

This module exports a DiagnosticsReport to SARIF (Static Analysis
Results Interchange Format) for integration with code scanning tools.

SARIF Specification: https://docs.oasis-open.org/sarif/sarif/v2.1.0/
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .. import __version__
from ..models import Severity
from .diagnostics import DiagnosticRecord, DiagnosticsReport

if TYPE_CHECKING:
    from ..rules.engine import RuleEngine


@dataclass
class SARIFConfig:
    """Configuration for SARIF output."""

    tool_name: str = "css-guard"
    tool_version: str = __version__
    tool_information_uri: str = "https://pypi.org/project/css-guard/"
    include_remediation: bool = True


def rule_metadata_from_engine(engine: "RuleEngine") -> dict[str, dict[str, Any]]:
    """Collect SARIF rule metadata from the engine's rules.

    Args:
        engine: Engine with rules loaded

    Returns:
        Mapping of rule id to name, description, level and tags
    """
    from ..rules.engine import BUILTIN_RULES

    metadata: dict[str, dict[str, Any]] = {}
    for rule_id, (severity, description) in BUILTIN_RULES.items():
        metadata[rule_id] = {
            "name": rule_id.split(".", 1)[1].replace("_", " ").title(),
            "shortDescription": description,
            "fullDescription": description,
            "severity": severity,
            "tags": [rule_id.split(".", 1)[0].lower()],
        }
    for rule in engine.get_all_rules():
        metadata[rule.rule_id] = {
            "name": rule.name,
            "shortDescription": rule.name,
            "fullDescription": rule.description,
            "severity": rule.default_severity,
            "tags": ["style", rule.category],
        }
    return metadata


class SARIFExporter:
    """Exports diagnostics to SARIF format."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"

    def __init__(
        self,
        config: SARIFConfig | None = None,
        rule_metadata: dict[str, dict[str, Any]] | None = None,
    ):
        """Initialize the SARIF exporter.

        Args:
            config: Optional export configuration.
            rule_metadata: Optional per-rule metadata for the rules array.
        """
        self.config = config or SARIFConfig()
        self.rule_metadata = rule_metadata or {}

    def export(
        self, report: DiagnosticsReport, output_path: Path | None = None
    ) -> dict[str, Any]:
        """Export a report to SARIF format.

        Args:
            report: Diagnostics report to export.
            output_path: Optional path to write the SARIF file.

        Returns:
            SARIF document as dictionary.
        """
        sarif_doc = self._build_sarif_document(report.records)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sarif_doc, f, indent=2)

        return sarif_doc

    def export_json(self, report: DiagnosticsReport) -> str:
        """Export a report to a SARIF JSON string."""
        return json.dumps(self.export(report), indent=2)

    def _build_sarif_document(self, records: list[DiagnosticRecord]) -> dict[str, Any]:
        # Sorted for stable output
        rule_ids = sorted({r.rule_id for r in records})
        rules = self._build_rule_definitions(rule_ids)
        rule_index = {rule_id: idx for idx, rule_id in enumerate(rule_ids)}

        results = [self._build_result(record, rule_index[record.rule_id]) for record in records]

        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": self.config.tool_name,
                            "version": self.config.tool_version,
                            "informationUri": self.config.tool_information_uri,
                            "rules": rules,
                        }
                    },
                    "results": results,
                }
            ],
        }

    def _build_rule_definitions(self, rule_ids: list[str]) -> list[dict[str, Any]]:
        """Build SARIF rule definitions from unique rule IDs."""
        rules = []
        for rule_id in rule_ids:
            metadata = self.rule_metadata.get(rule_id, {})
            severity = metadata.get("severity", Severity.WARNING)
            rules.append(
                {
                    "id": rule_id,
                    "name": metadata.get("name", rule_id.replace(".", " ").title()),
                    "shortDescription": {
                        "text": metadata.get("shortDescription", f"Rule {rule_id}")
                    },
                    "fullDescription": {
                        "text": metadata.get("fullDescription", f"Style rule: {rule_id}")
                    },
                    "defaultConfiguration": {
                        "level": self._severity_to_sarif_level(severity)
                    },
                    "properties": {"tags": metadata.get("tags", ["style"])},
                }
            )
        return rules

    def _build_result(self, record: DiagnosticRecord, rule_index: int) -> dict[str, Any]:
        """Build SARIF result object from a DiagnosticRecord."""
        result: dict[str, Any] = {
            "ruleId": record.rule_id,
            "ruleIndex": rule_index,
            "level": self._severity_to_sarif_level(record.severity),
            "message": {"text": record.message},
            "locations": [self._build_location(record)],
        }

        if self.config.include_remediation and record.hints:
            result["fixes"] = [
                {"description": {"text": hint}} for hint in record.hints[:3]
            ]

        return result

    def _build_location(self, record: DiagnosticRecord) -> dict[str, Any]:
        return {
            "physicalLocation": {
                "artifactLocation": {"uri": Path(record.file).as_posix()},
                "region": {
                    "startLine": record.line,
                    "startColumn": record.column,
                    "endLine": record.end_line,
                    "endColumn": record.end_column,
                },
            }
        }

    def _severity_to_sarif_level(self, severity: Severity) -> str:
        """Map Severity to SARIF level (error/warning/note)."""
        mapping = {
            Severity.ERROR: "error",
            Severity.WARNING: "warning",
            Severity.INFO: "note",
        }
        return mapping.get(severity, "warning")


__all__ = [
    "SARIFConfig",
    "SARIFExporter",
    "rule_metadata_from_engine",
]
