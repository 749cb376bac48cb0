"""rust-docstyle CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click

from rust_docstyle import __version__
from rust_docstyle.config import OUTPUT_FORMATS, load_settings
from rust_docstyle.errors import AnalysisError, ConfigError


def _configure_logging(*, verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rust-docstyle")
@click.option("--verbose", "-v", count=True, help="Verbose output (-vv for debug).")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Input file to check.",
)
@click.option("--warnings", "-w", is_flag=True, help="Show warnings in addition to errors.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(OUTPUT_FORMATS)),
    default=None,
    help="Output format (default: text).",
)
@click.option("--no-fail", is_flag=True, help="Exit with code 0 even if violations are found.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: ./rust-docstyle.yml if present).",
)
@click.pass_context
def main(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: bool,
    file_path: Path | None,
    warnings: bool,
    fmt: str | None,
    no_fail: bool,
    config_path: Path | None,
) -> None:
    """Check Rust doc comments against PEP 257 inspired conventions."""
    _configure_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_settings(config_path, search_dir=Path.cwd())
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["warnings"] = warnings or settings.warnings
    ctx.obj["format"] = fmt or settings.format
    ctx.obj["no_fail"] = no_fail or settings.no_fail

    if ctx.invoked_subcommand is not None:
        return
    if file_path is None:
        click.echo(ctx.get_usage(), err=True)
        click.echo("No file or command specified. Use --help for usage information.", err=True)
        sys.exit(1)
    _run_checks(ctx.obj, [file_path])


def _run_checks(options: dict[str, Any], files: list[Path]) -> None:
    """Analyze *files*, print reports, and exit according to the results.

    Exit codes: 0 = clean (or ``--no-fail``), 1 = violations reported or at
    least one file could not be analyzed.
    """
    from rust_docstyle.analyzer import RustDocAnalyzer
    from rust_docstyle.reporting import FORMATTERS, FileReport, filter_violations
    from rust_docstyle.rules.engine import get_engine

    settings = options["settings"]
    engine = get_engine(strict_summary_period=settings.strict_summary_period)
    analyzer = RustDocAnalyzer(engine)
    formatter = FORMATTERS[str(options["format"])]
    show_warnings = bool(options["warnings"])

    total = 0
    failures = 0
    for file_path in files:
        try:
            violations = analyzer.analyze_file(file_path)
        except AnalysisError as exc:
            click.echo(f"Error: {file_path}: {exc}", err=True)
            failures += 1
            continue

        report = FileReport(
            path=file_path,
            violations=filter_violations(violations, show_warnings=show_warnings),
        )
        output = formatter(report)
        if output:
            click.echo(output)
        total += len(report.violations)

    if failures:
        sys.exit(1)
    if total > 0 and not options["no_fail"]:
        sys.exit(1)


@main.command()
@click.argument("file_path", metavar="FILE", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def check(ctx: click.Context, file_path: Path) -> None:
    """Check a single file."""
    _run_checks(ctx.obj, [file_path])


@main.command("check-dir")
@click.argument(
    "directory",
    metavar="DIR",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--recursive", "-r", is_flag=True, help="Check files recursively.")
@click.pass_context
def check_dir(ctx: click.Context, directory: Path, *, recursive: bool) -> None:
    """Check all Rust files in a directory."""
    from rust_docstyle.file_collector import collect_rust_files, collect_rust_files_recursive

    if recursive:
        files = collect_rust_files_recursive(directory, exclude=ctx.obj["settings"].exclude)
    else:
        files = collect_rust_files(directory)
    _run_checks(ctx.obj, files)


@main.command()
@click.pass_context
def rules(ctx: click.Context) -> None:
    """List the rules this checker enforces."""
    from rich.console import Console
    from rich.table import Table

    from rust_docstyle.reporting import rule_rows
    from rust_docstyle.rules.engine import get_engine

    settings = ctx.obj["settings"]
    engine = get_engine(strict_summary_period=settings.strict_summary_period)

    table = Table(title="rust-docstyle rules")
    table.add_column("Code", style="cyan")
    table.add_column("Severity")
    table.add_column("Description")
    for codes, severity, description in rule_rows(engine):
        table.add_row(codes, severity, description)

    Console().print(table)
