"""CLI utilities package for css-guard.

Modules:
    output: OutputManager for consistent CLI output with color/quiet support
    errors: Structured error types with recovery suggestions
    main: click command group (imported lazily by the console script)
"""

from .errors import (
    CLIError,
    ConfigurationError,
    ErrorCategory,
    ExitCode,
    PathNotFoundError,
    ValidationError,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "CLIError",
    "ErrorCategory",
    "ExitCode",
    "ConfigurationError",
    "PathNotFoundError",
    "ValidationError",
]
