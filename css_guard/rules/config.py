"""
Configuration system for the style rule engine.

This module provides the validated configuration model and the loader
that merges configuration files hierarchically. Configuration errors are
fatal: they are raised as ConfigurationError before any file is linted.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
)

from ..analysis.property_order import DEFAULT_GROUP_TABLE, PropertyGroup
from ..analysis.z_index import DEFAULT_Z_INDEX_BANDS, ZIndexBand
from ..cli.errors import ConfigurationError
from ..guard_logging import LogCategory, get_category_logger
from ..models import Severity

logger = get_category_logger(LogCategory.CONFIG)


def _parse_severity(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RuleConfig(BaseModel):
    """Configuration for a single rule."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    severity: Severity | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v: Any) -> Any:
        return _parse_severity(v)


class ZIndexBandConfig(BaseModel):
    """A named z-index band as written in configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    min: int
    max: int

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("band name cannot be empty")
        return v.strip()

    def to_band(self) -> ZIndexBand:
        return ZIndexBand(self.name, self.min, self.max)


class LintConfig(BaseModel):
    """Validated lint configuration.

    Keys may be given in camelCase (as in JSON files) or snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    max_nesting_depth: int = Field(default=1, ge=0, alias="maxNestingDepth")
    property_group_table: dict[str, PropertyGroup] = Field(
        default_factory=dict, alias="propertyGroupTable"
    )
    z_index_bands: list[ZIndexBandConfig] = Field(
        default_factory=lambda: [
            ZIndexBandConfig(name=band.name, min=band.min, max=band.max)
            for band in DEFAULT_Z_INDEX_BANDS
        ],
        alias="zIndexBands",
    )
    enabled_checks: list[str] | None = Field(default=None, alias="enabledChecks")
    disabled_checks: list[str] = Field(default_factory=list, alias="disabledChecks")
    fail_on: Severity = Field(default=Severity.ERROR, alias="failOn")
    rules: dict[str, RuleConfig] = Field(default_factory=dict)

    # Runner settings
    parallel: bool = True
    max_workers: int = Field(default=4, ge=1, le=64, alias="maxWorkers")
    include: list[str] = Field(
        default_factory=lambda: ["*.css", "*.scss", "*.less", "*.html", "*.htm"]
    )
    exclude: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build", "vendor"]
    )

    _group_table: dict[str, PropertyGroup] | None = PrivateAttr(default=None)

    @field_validator("fail_on", mode="before")
    @classmethod
    def normalize_fail_on(cls, v: Any) -> Any:
        return _parse_severity(v)

    @field_validator("property_group_table", mode="before")
    @classmethod
    def normalize_group_table(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            raise ValueError("propertyGroupTable must map property names to groups")
        normalized = {}
        for key, group in v.items():
            if not isinstance(key, str) or not key.strip():
                raise ValueError(f"invalid property name in group table: {key!r}")
            normalized[key.strip().lower()] = (
                group.strip().lower() if isinstance(group, str) else group
            )
        return normalized

    @field_validator("z_index_bands", mode="before")
    @classmethod
    def normalize_bands(cls, v: Any) -> Any:
        if not isinstance(v, list):
            raise ValueError("zIndexBands must be a list")
        return [
            {"name": item[0], "min": item[1], "max": item[2]}
            if isinstance(item, list | tuple) and len(item) == 3
            else item
            for item in v
        ]

    @field_validator("z_index_bands")
    @classmethod
    def validate_bands(cls, v: list[ZIndexBandConfig]) -> list[ZIndexBandConfig]:
        names = set()
        for band in v:
            if band.min > band.max:
                raise ValueError(
                    f"band '{band.name}' has min {band.min} greater than max {band.max}"
                )
            if band.name in names:
                raise ValueError(f"duplicate band name '{band.name}'")
            names.add(band.name)
        return v

    @field_validator("enabled_checks", "disabled_checks")
    @classmethod
    def validate_check_ids(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        for check_id in v:
            if not check_id.strip():
                raise ValueError("check identifiers cannot be empty")
        return [check_id.strip() for check_id in v]

    def is_check_enabled(self, rule_id: str) -> bool:
        """Check if a rule is enabled.

        Args:
            rule_id: The rule identifier

        Returns:
            True if the rule is enabled, False otherwise
        """
        if any(matches_check(pattern, rule_id) for pattern in self.disabled_checks):
            return False

        rule_config = self.rules.get(rule_id)
        if rule_config is not None and not rule_config.enabled:
            return False

        if self.enabled_checks is None:
            return True
        return any(matches_check(pattern, rule_id) for pattern in self.enabled_checks)

    def effective_group_table(self) -> dict[str, PropertyGroup]:
        """Built-in property group table with configured overrides applied."""
        if self._group_table is None:
            table = dict(DEFAULT_GROUP_TABLE)
            table.update(self.property_group_table)
            self._group_table = table
        return self._group_table

    def bands(self) -> tuple[ZIndexBand, ...]:
        """Configured z-index bands as plain value objects."""
        return tuple(band.to_band() for band in self.z_index_bands)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def matches_check(pattern: str, rule_id: str) -> bool:
    """Match a rule id against an id or a ``CATEGORY.*`` pattern."""
    if pattern.endswith(".*"):
        return rule_id.startswith(pattern[:-1])
    return pattern == rule_id


def merge_config_data(base: dict[str, Any], other: dict[str, Any]) -> dict[str, Any]:
    """Merge two raw config dicts (other takes precedence).

    Per-rule settings are merged rule by rule; every other key is replaced.
    """
    result = dict(base)
    for key, value in other.items():
        if key == "rules" and isinstance(value, dict) and isinstance(result.get(key), dict):
            rules = dict(result[key])
            for rule_id, rule_data in value.items():
                if isinstance(rule_data, dict) and isinstance(rules.get(rule_id), dict):
                    rules[rule_id] = {**rules[rule_id], **rule_data}
                else:
                    rules[rule_id] = rule_data
            result[key] = rules
        else:
            result[key] = value
    return result


class LintConfigLoader:
    """Loads lint configuration with hierarchical merging."""

    CONFIG_FILENAME = ".css-guard.json"
    LOCAL_CONFIG_FILENAME = ".css-guard.local.json"
    GLOBAL_CONFIG_DIR = Path.home() / ".css-guard"
    GLOBAL_CONFIG_FILENAME = "config.json"

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root (defaults to CWD)
        """
        self.project_path = project_path or Path.cwd()

    def candidate_paths(self) -> list[Path]:
        """Config files consulted, in merge order."""
        return [
            self.GLOBAL_CONFIG_DIR / self.GLOBAL_CONFIG_FILENAME,
            self.project_path / self.CONFIG_FILENAME,
            self.project_path / self.LOCAL_CONFIG_FILENAME,
        ]

    def load(
        self,
        explicit_path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> LintConfig:
        """Load configuration with hierarchical merging.

        Load order (later overrides earlier):
        1. Built-in defaults
        2. Global config (~/.css-guard/config.json)
        3. Project config (<project>/.css-guard.json)
        4. Local config (<project>/.css-guard.local.json)
        5. Explicit config file (--config)
        6. Overrides (command-line flags)

        Returns:
            Validated LintConfig

        Raises:
            ConfigurationError: If any file is unreadable or invalid
        """
        data: dict[str, Any] = {}
        sources: list[str] = []

        for path in self.candidate_paths():
            if path.exists():
                data = merge_config_data(data, self._load_file(path))
                sources.append(str(path))

        if explicit_path is not None:
            if not explicit_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {explicit_path}",
                    config_file=str(explicit_path),
                    suggestion="Check the path passed to --config",
                )
            data = merge_config_data(data, self._load_file(explicit_path))
            sources.append(str(explicit_path))

        if overrides:
            data = merge_config_data(data, overrides)

        logger.debug(f"Loaded config from {sources or ['defaults']}")
        return self.validate(data, ", ".join(sources) or None)

    @staticmethod
    def validate(data: dict[str, Any], source: str | None = None) -> LintConfig:
        """Validate raw configuration data.

        Raises:
            ConfigurationError: If the data does not match the schema
        """
        try:
            return LintConfig.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in error['loc']) or 'config'}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigurationError(
                f"Invalid configuration: {problems}", config_file=source
            ) from e

    def _load_file(self, path: Path) -> dict[str, Any]:
        """Load raw configuration from a file.

        Args:
            path: Path to the config file

        Returns:
            Parsed JSON object

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}", config_file=str(path)
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Could not read config file: {e}", config_file=str(path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object", config_file=str(path)
            )
        return data

    def save(self, config: LintConfig, local: bool = False) -> Path:
        """Save configuration to the project.

        Args:
            config: Configuration to save
            local: If True, save to the local (git-ignored) config

        Returns:
            Path to the saved config file
        """
        filename = self.LOCAL_CONFIG_FILENAME if local else self.CONFIG_FILENAME
        config_path = self.project_path / filename
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

        return config_path
