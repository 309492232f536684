"""
Per-file lint pipeline and worker pool.

Each file goes through read -> tokenize -> parse -> rule engine on its
own and shares no mutable state with other files. Files are fanned out
over a ThreadPoolExecutor; the DiagnosticsReport is the only merge point.
"""

import fnmatch
import os
import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from .analysis.parser import parse_stylesheet
from .analysis.stylesheet import detect_language
from .guard_logging import LogCategory, get_category_logger
from .models import Severity, Span, Violation
from .report.diagnostics import DiagnosticsReport, RuleFailure
from .rules.config import LintConfig
from .rules.engine import FILE_UNREADABLE, RuleEngine, create_rule_engine

logger = get_category_logger(LogCategory.RUNNER)

FILE_START = Span(start=0, end=0, line=1, column=1, end_line=1, end_column=1)


@dataclass
class FileResult:
    """Immutable outcome of linting one file."""

    file_path: str
    violations: list[Violation] = field(default_factory=list)
    rule_failures: list[RuleFailure] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def violation_count(self) -> int:
        return len(self.violations)


class LintRunner:
    """Runs the lint pipeline over files, optionally in parallel.

    Example usage:
        runner = LintRunner(config)
        report = runner.run([Path("styles/")])
        if report.has_failures():
            ...
    """

    def __init__(self, config: LintConfig | None = None, engine: RuleEngine | None = None):
        """Initialize the runner.

        Args:
            config: Lint configuration (defaults to the engine's, or defaults)
            engine: Pre-built rule engine (created from config when omitted)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config is None:
            config = engine.config if engine is not None else LintConfig()
        self.config = config
        self.engine = engine or create_rule_engine(config)
        self._abort = threading.Event()

    def abort(self) -> None:
        """Abort the current run; queued files are discarded."""
        self._abort.set()

    @property
    def aborted(self) -> bool:
        return self._abort.is_set()

    def lint_source(
        self,
        source: str,
        file_path: str = "<string>",
        language: str | None = None,
    ) -> FileResult:
        """Lint in-memory source text.

        Args:
            source: Decoded source text
            file_path: Label used in violations
            language: css, scss or html (detected from file_path when omitted)

        Returns:
            FileResult with every violation for the source
        """
        start_time = time.time()
        stylesheet = parse_stylesheet(source, file_path, language)
        result = self.engine.run(stylesheet)

        failures = [
            RuleFailure(
                file=file_path,
                rule_id=error.rule_id,
                error_message=error.error_message,
                exception_type=error.exception_type,
            )
            for error in result.errors
        ]
        execution_time_ms = (time.time() - start_time) * 1000

        logger.debug(
            f"Linted {file_path} in {execution_time_ms:.1f}ms: "
            f"{len(result.violations)} violations",
            extra={
                "file_path": file_path,
                "duration_ms": execution_time_ms,
                "violation_count": len(result.violations),
            },
        )
        return FileResult(
            file_path=file_path,
            violations=result.violations,
            rule_failures=failures,
            execution_time_ms=execution_time_ms,
        )

    def lint_file(self, path: Path) -> FileResult:
        """Read a file fully and lint it.

        An unreadable or undecodable file yields a single
        IO.FILE_UNREADABLE violation instead of an exception.
        """
        file_path = str(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            logger.warning(f"Cannot read {file_path}: {reason}")
            return FileResult(
                file_path=file_path,
                violations=[
                    Violation(
                        rule_id=FILE_UNREADABLE,
                        severity=Severity.ERROR,
                        message=f"cannot read file: {reason}",
                        span=FILE_START,
                        file_path=file_path,
                    )
                ],
            )
        return self.lint_source(source, file_path, detect_language(path))

    def collect_files(self, paths: Iterable[Path]) -> list[Path]:
        """Expand directories into the files to lint.

        Files named explicitly are always included. Directories are walked
        using the configured include patterns and excluded directory names.

        Returns:
            Sorted, de-duplicated list of files
        """
        collected: set[Path] = set()
        for path in paths:
            if not path.is_dir():
                collected.add(path)
                continue
            for root, dirs, files in os.walk(path):
                dirs[:] = [d for d in dirs if not self._is_excluded(d)]
                for name in files:
                    if any(fnmatch.fnmatch(name, pattern) for pattern in self.config.include):
                        collected.add(Path(root) / name)
        return sorted(collected)

    def _is_excluded(self, directory: str) -> bool:
        return any(fnmatch.fnmatch(directory, pattern) for pattern in self.config.exclude)

    def run(self, paths: Iterable[Path]) -> DiagnosticsReport:
        """Lint every file under the given paths.

        Args:
            paths: Files and directories to lint

        Returns:
            DiagnosticsReport with all violations merged
        """
        start_time = time.time()
        self._abort.clear()
        files = self.collect_files(paths)
        report = DiagnosticsReport(fail_on=self.config.fail_on)

        if self.config.parallel and len(files) > 1:
            self._run_parallel(files, report)
        else:
            for path in files:
                if self._abort.is_set():
                    break
                self._merge(report, self.lint_file(path))

        report.aborted = self._abort.is_set()
        report.execution_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Checked {len(report.files)} file(s) in {report.execution_time_ms:.0f}ms: "
            f"{len(report.records)} violation(s)",
            extra={"duration_ms": report.execution_time_ms},
        )
        return report

    def run_source(
        self, source: str, file_path: str = "<stdin>", language: str | None = None
    ) -> DiagnosticsReport:
        """Lint one in-memory source and wrap the result in a report."""
        report = DiagnosticsReport(fail_on=self.config.fail_on)
        self._merge(report, self.lint_source(source, file_path, language))
        return report

    def _run_parallel(self, files: list[Path], report: DiagnosticsReport) -> None:
        max_workers = min(self.config.max_workers, len(files))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_path = {executor.submit(self._lint_unless_aborted, path): path for path in files}

            for future in as_completed(future_to_path):
                if self._abort.is_set():
                    executor.shutdown(wait=False, cancel_futures=True)
                    break
                result = future.result()
                if result is not None:
                    self._merge(report, result)

    def _lint_unless_aborted(self, path: Path) -> FileResult | None:
        if self._abort.is_set():
            return None
        return self.lint_file(path)

    @staticmethod
    def _merge(report: DiagnosticsReport, result: FileResult) -> None:
        report.add_result(result.file_path, result.violations, result.rule_failures)
