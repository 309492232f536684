"""Terminal output for css-guard commands.

Colors follow the NO_COLOR convention (https://no-color.org/). Lint
reports themselves are rendered by ``css_guard.report``; this module
covers status lines, headers and the rule listing.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TextIO

import click

from ..models import Severity


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Decide whether ANSI colors go to the terminal.

    An explicit flag wins. Otherwise NO_COLOR (set to anything, even
    empty) turns colors off, FORCE_COLOR turns them on, and without
    either the answer is whether ``stream`` is a TTY.

    Args:
        explicit_flag: True or False from a command-line flag, None to detect.
        stream: Stream the output goes to. Defaults to stdout.

    Returns:
        True if colors should be used.
    """
    if explicit_flag is not None:
        return explicit_flag
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    target = sys.stdout if stream is None else stream
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


@dataclass
class OutputConfig:
    """How a command writes to the terminal.

    Attributes:
        use_color: Emit ANSI color codes.
        quiet: Only errors and forced lines are written.
        verbose: Include rule descriptions and tracebacks.
        stream: Destination for normal output.
        err_stream: Destination for errors.
    """

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> OutputConfig:
        """Build the config from the shared --verbose/--quiet/--no-color flags."""
        return cls(
            use_color=should_use_color(explicit_flag=False if no_color else None),
            quiet=quiet,
            verbose=verbose,
        )


class OutputManager:
    """Writes status lines, headers and rule listings for the CLI.

    Example:
        >>> output = OutputManager(OutputConfig.from_flags(no_color=True))
        >>> output.success("Report written to report.sarif")
        [OK] Report written to report.sarif
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # (colored, plain) prefix per status kind
    STATUS_PREFIXES = {
        "success": ("\033[92m✓\033[0m", "[OK]"),
        "error": ("\033[91m✗\033[0m", "[FAIL]"),
        "warning": ("\033[93m⚠\033[0m", "[WARN]"),
        "info": ("\033[94mℹ\033[0m", "[INFO]"),
    }

    SEVERITY_COLORS = {
        Severity.ERROR: "\033[91m",
        Severity.WARNING: "\033[93m",
        Severity.INFO: "\033[94m",
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _paint(self, text: str, code: str) -> str:
        return f"{code}{text}{self.RESET}" if self.config.use_color else text

    def _write(self, line: str, err: bool = False, force: bool = False) -> None:
        # Quiet mode keeps stderr and forced lines only
        if self.config.quiet and not (err or force):
            return
        click.echo(
            line,
            file=self.config.err_stream if err else self.config.stream,
            color=self.config.use_color,
        )

    def status(self, kind: str, message: str, force: bool = False) -> None:
        """Write ``message`` behind the prefix for ``kind``.

        Errors always go to stderr, even in quiet mode.
        """
        colored, plain = self.STATUS_PREFIXES.get(kind, self.STATUS_PREFIXES["info"])
        prefix = colored if self.config.use_color else plain
        is_error = kind == "error"
        self._write(f"{prefix} {message}", err=is_error, force=force or is_error)

    def success(self, message: str, force: bool = False) -> None:
        self.status("success", message, force)

    def error(self, message: str) -> None:
        self.status("error", message)

    def warning(self, message: str, force: bool = False) -> None:
        self.status("warning", message, force)

    def info(self, message: str) -> None:
        self.status("info", message)

    def plain(self, message: str, force: bool = False) -> None:
        self._write(message, force=force)

    def header(self, title: str) -> None:
        """Write an underlined title; skipped in quiet mode."""
        self._write(self._paint(title, self.BOLD))
        self._write("=" * len(title))

    def severity_label(self, severity: Severity, width: int = 0) -> str:
        """Severity name padded to ``width`` and colored by level."""
        return self._paint(severity.value.ljust(width), self.SEVERITY_COLORS[severity])

    def rule_table(self, entries: Iterable[Mapping[str, Any]]) -> None:
        """List rules as ``id category node-kind severity`` rows.

        Each entry needs ``id``, ``category``, ``node_kind``, ``severity``
        (a Severity), ``enabled`` and ``description`` keys. Disabled rules
        are marked and every row is followed by its indented description.
        Rows are forced so the listing survives --quiet.
        """
        for entry in entries:
            row = (
                f"{entry['id']:<36} {entry['category']:<12} {entry['node_kind']:<12} "
                f"{self.severity_label(entry['severity'], 8)}"
            )
            if not entry["enabled"]:
                row += self._paint("  (disabled)", self.DIM)
            self._write(row, force=True)
            self._write(f"    {entry['description']}", force=True)
