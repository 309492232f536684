"""Command-line interface for css-guard."""

import sys
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..analysis.stylesheet import detect_language
from ..guard_logging import setup_logging
from ..models import Severity
from .errors import (
    CLIError,
    ExitCode,
    PathNotFoundError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager

SEVERITY_CHOICES = [s.value for s in Severity]


def common_options(f: Any) -> Any:
    """Output and logging options shared by commands."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option("--no-color", is_flag=True, help="Disable colored output")(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Format of diagnostic log messages on stderr",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Also write debug logs to this rotating file",
    )(f)
    return f


def config_options(f: Any) -> Any:
    """Configuration discovery options."""
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Configuration file path (merged last)",
    )(f)
    f = click.option(
        "--project",
        "-p",
        "project_path",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Project directory holding .css-guard.json (defaults to CWD)",
    )(f)
    return f


def build_overrides(
    fail_on: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    max_nesting_depth: int | None,
    jobs: int | None,
) -> dict[str, Any]:
    """Translate command-line flags into config overrides."""
    overrides: dict[str, Any] = {}
    if fail_on is not None:
        overrides["failOn"] = fail_on
    if enable:
        overrides["enabledChecks"] = list(enable)
    if disable:
        overrides["disabledChecks"] = list(disable)
    if max_nesting_depth is not None:
        overrides["maxNestingDepth"] = max_nesting_depth
    if jobs is not None:
        if jobs < 1:
            raise ValidationError(f"--jobs must be at least 1, got {jobs}")
        overrides["maxWorkers"] = jobs
        overrides["parallel"] = jobs > 1
    return overrides


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="css-guard")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """css-guard - style guide linter for CSS, SCSS and HTML <style> blocks."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@config_options
@common_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "sarif"]),
    default="text",
    help="Report format",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to a file instead of stdout",
)
@click.option(
    "--fail-on",
    type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
    default=None,
    help="Lowest severity that makes the run fail (default: error)",
)
@click.option(
    "--enable",
    multiple=True,
    help="Only run these rule ids or CATEGORY.* patterns (repeatable)",
)
@click.option(
    "--disable",
    multiple=True,
    help="Skip these rule ids or CATEGORY.* patterns (repeatable)",
)
@click.option(
    "--max-nesting-depth",
    type=int,
    default=None,
    help="Deepest allowed selector nesting",
)
@click.option(
    "--jobs",
    "-j",
    type=int,
    default=None,
    help="Number of files linted in parallel (1 disables the pool)",
)
@click.option("--stdin", "use_stdin", is_flag=True, help="Lint source read from stdin")
@click.option(
    "--stdin-filename",
    default="<stdin>",
    help="File name reported for stdin input (also selects the language)",
)
def check(
    paths: tuple[Path, ...],
    config_path: Path | None,
    project_path: Path | None,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_format: str,
    log_file: Path | None,
    output_format: str,
    output_path: Path | None,
    fail_on: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    max_nesting_depth: int | None,
    jobs: int | None,
    use_stdin: bool,
    stdin_filename: str,
) -> None:
    """Check stylesheets against the style guide.

    Exit codes: 0 when no violation reaches the failure threshold,
    1 when at least one does, 2 for invalid configuration or arguments.

    Examples:
        css-guard check src/styles
        css-guard check --format json --fail-on warning main.scss
        cat menu.scss | css-guard check --stdin --stdin-filename menu.scss
    """
    output = OutputManager(OutputConfig.from_flags(verbose, quiet, no_color))
    setup_logging(quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format)

    try:
        report, engine = _run_check(
            paths,
            config_path,
            project_path,
            build_overrides(fail_on, enable, disable, max_nesting_depth, jobs),
            use_stdin,
            stdin_filename,
        )
        _write_report(report, engine, output_format, output_path, output.config.use_color)
    except CLIError as e:
        message, exit_code = handle_exception(e, output.config.use_color, verbose)
        click.echo(message, err=True)
        sys.exit(exit_code)

    if output_path is not None:
        output.success(f"Report written to {output_path}")
    sys.exit(ExitCode.CLEAN if report.passed else ExitCode.VIOLATIONS)


def _run_check(
    paths: tuple[Path, ...],
    config_path: Path | None,
    project_path: Path | None,
    overrides: dict[str, Any],
    use_stdin: bool,
    stdin_filename: str,
) -> tuple[Any, Any]:
    from ..rules.config import LintConfigLoader
    from ..rules.engine import create_rule_engine
    from ..runner import LintRunner

    if use_stdin and paths:
        raise ValidationError("--stdin cannot be combined with PATH arguments")
    if not use_stdin and not paths:
        raise ValidationError(
            "No paths given", suggestion="Pass files or directories, or use --stdin"
        )
    for path in paths:
        if not path.exists():
            raise PathNotFoundError(str(path))

    config = LintConfigLoader(project_path).load(config_path, overrides)
    engine = create_rule_engine(config)
    runner = LintRunner(config, engine)

    if use_stdin:
        source = click.get_text_stream("stdin").read()
        report = runner.run_source(source, stdin_filename, detect_language(stdin_filename))
    else:
        report = runner.run(list(paths))
    return report, engine


def _write_report(
    report: Any,
    engine: Any,
    output_format: str,
    output_path: Path | None,
    use_color: bool,
) -> None:
    from ..report import (
        JSONReporter,
        SARIFExporter,
        TextReporter,
        rule_metadata_from_engine,
    )

    if output_format == "sarif":
        exporter = SARIFExporter(rule_metadata=rule_metadata_from_engine(engine))
        if output_path is not None:
            exporter.export(report, output_path)
        else:
            click.echo(exporter.export_json(report))
        return

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as stream:
            if output_format == "json":
                JSONReporter(stream).report(report)
            else:
                TextReporter(stream, use_color=False).report(report)
        return

    stream = click.get_text_stream("stdout")
    if output_format == "json":
        JSONReporter(stream).report(report)
    else:
        TextReporter(stream, use_color=use_color).report(report)


@cli.command()
@config_options
@common_options
@click.option("--json", "json_output", is_flag=True, help="Output the rule list as JSON")
def rules(
    config_path: Path | None,
    project_path: Path | None,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_format: str,
    log_file: Path | None,
    json_output: bool,
) -> None:
    """List every rule with its category, node kind, severity and enabled state."""
    import json

    from ..rules.config import LintConfigLoader
    from ..rules.engine import BUILTIN_RULES, create_rule_engine

    output = OutputManager(OutputConfig.from_flags(verbose, quiet, no_color))
    setup_logging(quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format)

    try:
        config = LintConfigLoader(project_path).load(config_path)
        engine = create_rule_engine(config)
    except CLIError as e:
        message, exit_code = handle_exception(e, output.config.use_color, verbose)
        click.echo(message, err=True)
        sys.exit(exit_code)

    entries = []
    for rule_id, (severity, description) in BUILTIN_RULES.items():
        override = config.rules.get(rule_id)
        prefix = rule_id.split(".", 1)[0]
        entries.append(
            {
                "id": rule_id,
                "category": prefix.lower(),
                "node_kind": "parser" if prefix == "PARSE" else "runner",
                "severity": override.severity if override and override.severity else severity,
                "enabled": config.is_check_enabled(rule_id),
                "description": description,
            }
        )
    entries.extend(
        {
            "id": rule.rule_id,
            "category": rule.category,
            "node_kind": rule.node_kind.value,
            "severity": rule.get_severity(config.rules.get(rule.rule_id)),
            "enabled": config.is_check_enabled(rule.rule_id),
            "description": rule.description,
        }
        for rule in engine.get_all_rules()
    )
    entries.sort(key=lambda e: e["id"])

    if json_output:
        click.echo(
            json.dumps([{**e, "severity": e["severity"].value} for e in entries], indent=2)
        )
        return

    output.header(f"{len(entries)} rules")
    output.rule_table(entries)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
