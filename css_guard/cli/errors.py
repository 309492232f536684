"""Errors raised by css-guard commands, with the exit codes they map to.

Rule violations are not errors: they end up in the report and decide
between ``ExitCode.CLEAN`` and ``ExitCode.VIOLATIONS``. The classes here
cover everything that stops a run before a report exists.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

_RED = "\033[91m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_RESET = "\033[0m"


class ExitCode(IntEnum):
    """Process exit codes of the CLI."""

    CLEAN = 0  # nothing at or above fail-on
    VIOLATIONS = 1  # report failed, or an unexpected error
    USAGE = 2  # bad configuration, arguments or paths


class ErrorCategory(Enum):
    """What part of the invocation went wrong."""

    CONFIGURATION = "configuration"  # config files, rule ids, bands
    FILE_SYSTEM = "file_system"  # paths given on the command line
    VALIDATION = "validation"  # argument combinations and values
    RUNTIME = "runtime"


def _paint(text: str, code: str, use_color: bool) -> str:
    return f"{code}{text}{_RESET}" if use_color else text


@dataclass
class CLIError(Exception):
    """A failure reported to the user as a message plus a hint.

    Attributes:
        category: Which part of the invocation failed.
        message: One-line description.
        suggestion: How to fix it, if known.
        details: Extra key/value context shown under the message.
        exit_code: Process exit code.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = ExitCode.VIOLATIONS

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Render the message, suggestion and details on separate lines."""
        lines = [f"{_paint('Error:', _RED, use_color)} {self.message}"]
        if self.suggestion:
            lines.append(f"{_paint('Suggestion:', _CYAN, use_color)} {self.suggestion}")
        for key, value in (self.details or {}).items():
            lines.append(_paint(f"  {key}: {value}", _DIM, use_color))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class ConfigurationError(CLIError):
    """Invalid configuration file, rule id or setting.

    Raised before any file is linted, since a bad configuration changes
    the meaning of every check.
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check your configuration file syntax and rule identifiers",
            details={"config_file": config_file} if config_file else None,
            exit_code=ExitCode.USAGE,
        )


class PathNotFoundError(CLIError):
    """A path argument that does not exist."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Path not found: {path}",
            suggestion="Verify the path exists and you have read permissions",
            details={"path": path},
            exit_code=ExitCode.USAGE,
        )


class ValidationError(CLIError):
    """Arguments that cannot be used together or are out of range."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=ExitCode.USAGE,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Turn an exception into the text shown on stderr and an exit code.

    Args:
        error: The exception that ended the command.
        use_color: Whether to use ANSI colors.
        verbose: Append the traceback.

    Returns:
        Tuple of (message, exit_code).
    """
    if isinstance(error, CLIError):
        message, exit_code = error.format(use_color=use_color), error.exit_code
    else:
        message = f"{_paint('Error:', _RED, use_color)} {error}"
        exit_code = ExitCode.VIOLATIONS

    if verbose:
        trace = traceback.format_exception(type(error), error, error.__traceback__)
        message = f"{message}\n\nTraceback:\n{''.join(trace)}"
    return message, int(exit_code)
