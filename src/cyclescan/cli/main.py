"""
Command-line interface for cyclescan.

Commands:
    check: Report circular dependencies under a root directory
    graph: Print the resolved import graph

Exit codes:
    0  scan completed (cycles are informational unless --strict is given)
    1  --strict and at least one cycle found, or invalid configuration
    2  ROOT does not exist or is not a directory

Example Usage:
    $ cyclescan check ./web
    $ cyclescan check . --ext .ts --ext .tsx --exclude-dir generated --strict
    $ cyclescan check . --format json --components
    $ cyclescan graph ./web --format json
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..core.api import CycleScan
from ..core.config import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS, DEFAULT_INDEX_NAME, ScanConfig
from ..core.types import OutputFormat
from ..utils.error_handling import ConfigurationError
from ..utils.formatter import format_graph_text, format_result, to_json_bytes
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


def scan_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that scans a tree."""
    options = [
        click.argument(
            "root",
            default=".",
            type=click.Path(exists=True, file_okay=False, dir_okay=True),
        ),
        click.option(
            "--ext",
            "extensions",
            multiple=True,
            help=f"Source file extension, in resolution priority order (default: {' '.join(DEFAULT_EXTENSIONS)})",
        ),
        click.option(
            "--exclude-dir",
            "exclude_dirs",
            multiple=True,
            help=f"Directory name to skip, added to: {' '.join(sorted(DEFAULT_EXCLUDE_DIRS))}",
        ),
        click.option("--exclude", "exclude_patterns", multiple=True, help="gitwildmatch pattern to skip"),
        click.option("--index-name", default=DEFAULT_INDEX_NAME, show_default=True, help="Directory index basename"),
        click.option("--follow-symlinks", is_flag=True, default=False, help="Follow symlinked directories"),
        click.option("--workers", type=int, default=1, show_default=True, help="Threads used to read files"),
        click.option("--debug", is_flag=True, default=False, help="Enable debug logging"),
        click.option(
            "--log-level",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
            default="WARNING",
            help="Log level",
        ),
        click.option("--log-file", help="Log file path"),
        click.option(
            "--log-format",
            type=click.Choice(["simple", "detailed", "json", "structured"]),
            default="simple",
            help="Log format",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _setup(
    root: str,
    extensions: tuple[str, ...],
    exclude_dirs: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    index_name: str,
    follow_symlinks: bool,
    workers: int,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
) -> CycleScan:
    if debug:
        log_level = "DEBUG"
    try:
        logger = configure_logging(
            level=LogLevel(log_level),
            format_type=LogFormat(log_format),
            log_file=Path(log_file) if log_file else None,
            enable_file=bool(log_file),
            enable_console=True,
        )
    except (ValueError, OSError) as e:
        click.echo(f"Error configuring logging: {e}", err=True)
        sys.exit(1)

    cfg = ScanConfig(
        root=root,
        extensions=tuple(extensions) or DEFAULT_EXTENSIONS,
        exclude_dirs=set(DEFAULT_EXCLUDE_DIRS) | set(exclude_dirs),
        exclude_patterns=list(exclude_patterns),
        index_name=index_name,
        follow_symlinks=follow_symlinks,
        workers=workers,
    )
    cfg.extensions = cfg.normalized_extensions()
    return CycleScan(cfg, logger=logger)


@click.group()
@click.version_option(__version__, prog_name="cyclescan")
def cli() -> None:
    """cyclescan - find circular imports between source files"""
    pass


@cli.command("check")
@scan_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice([e.value for e in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format",
)
@click.option("--components", is_flag=True, default=False, help="Also list strongly connected components")
@click.option("--strict", is_flag=True, default=False, help="Exit with status 1 when cycles are found")
@click.option("--stats", is_flag=True, default=False, help="Print scan statistics")
@click.option("--show-errors", is_flag=True, default=False, help="Print the skipped-file report")
def check_cmd(
    fmt: str,
    components: bool,
    strict: bool,
    stats: bool,
    show_errors: bool,
    **scan_kwargs: Any,
) -> None:
    """Report circular dependencies under ROOT (default: current directory)."""
    engine = _setup(**scan_kwargs)
    try:
        result = engine.analyze(components=components)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    output = format_result(result, OutputFormat(fmt), show_stats=stats)
    if output:
        sys.stdout.write(output)
        sys.stdout.write("\n")

    if show_errors and engine.errors.has_errors():
        click.echo("\n" + engine.error_report(), err=True)

    if strict and result.has_cycles:
        sys.exit(1)


@cli.command("graph")
@scan_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice([OutputFormat.TEXT.value, OutputFormat.JSON.value]),
    default=OutputFormat.TEXT.value,
    help="Output format",
)
def graph_cmd(fmt: str, **scan_kwargs: Any) -> None:
    """Print the resolved import graph under ROOT."""
    engine = _setup(**scan_kwargs)
    try:
        result = engine.analyze()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if OutputFormat(fmt) == OutputFormat.JSON:
        sys.stdout.write(to_json_bytes(result, include_graph=True).decode("utf-8"))
    else:
        sys.stdout.write(format_graph_text(result.graph, result.root))
    sys.stdout.write("\n")


def main() -> None:
    cli(prog_name="cyclescan")


if __name__ == "__main__":
    main()
