"""
Report formatting for cyclescan.

Renders an ``AnalysisResult`` as plain text, JSON, or rich console output.
Paths are shown relative to the scanned root.

Key Functions:
    format_text: Numbered cycle chains and a final count
    to_json_bytes: JSON serialisation using orjson
    render_highlight_console: Rich console output with coloured chains
    format_result: Dispatch on OutputFormat
    format_graph_text: Plain adjacency listing for the ``graph`` command

Example:
    >>> print(format_text(result))
    Circular dependencies:
      1. src/a.ts -> src/b.ts -> src/a.ts
    Found 1 circular dependency.
"""

from __future__ import annotations

import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

import orjson
from rich.console import Console
from rich.text import Text

from ..core.types import AnalysisResult, Graph, OutputFormat, display_path

NO_CYCLES_MESSAGE = "No circular dependencies found."


def _count_line(count: int) -> str:
    noun = "circular dependency" if count == 1 else "circular dependencies"
    return f"Found {count} {noun}."


def _stats_line(result: AnalysisResult) -> str:
    s = result.stats
    return (
        f"# files_scanned={s.files_scanned} nodes={s.nodes} edges={s.edges} "
        f"unresolved={s.unresolved} skipped={s.skipped_files} cycles={s.cycles} "
        f"elapsed_ms={s.elapsed_ms:.2f}"
    )


def format_text(result: AnalysisResult, show_stats: bool = False) -> str:
    """
    Format cycles as numbered chains in discovery order.

    Zero cycles produces an explicit success message rather than empty
    output.
    """
    out: list[str] = []
    if not result.cycles:
        out.append(NO_CYCLES_MESSAGE)
    else:
        out.append("Circular dependencies:")
        for number, cycle in enumerate(result.cycles, start=1):
            out.append(f"  {number}. {cycle.render(result.root)}")
        out.append(_count_line(len(result.cycles)))

    if result.components:
        out.append("")
        out.append("Strongly connected components:")
        for number, component in enumerate(result.components, start=1):
            members = ", ".join(display_path(node, result.root) for node in component)
            out.append(f"  {number}. [{len(component)}] {members}")

    if show_stats:
        out.append(_stats_line(result))
    return "\n".join(out)


def to_json_bytes(result: AnalysisResult, include_graph: bool = False) -> bytes:
    """Serialise a result with orjson; paths are root-relative where possible."""
    root = result.root
    payload: dict[str, Any] = {
        "root": str(root),
        "cycles": [
            [display_path(node, root) for node in cycle.nodes] for cycle in result.cycles
        ],
        "count": len(result.cycles),
        "stats": asdict(result.stats),
    }
    if result.components is not None:
        payload["components"] = [
            [display_path(node, root) for node in component] for component in result.components
        ]
    if include_graph:
        payload["graph"] = result.graph.to_dict(root)
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def render_highlight_console(
    result: AnalysisResult, console: Console | None = None, show_stats: bool = False
) -> None:
    """Render the report with rich styling."""
    if console is None:
        console = Console()

    if not result.cycles:
        console.print(f"[bold green]{NO_CYCLES_MESSAGE}[/bold green]")
    else:
        console.print("[bold]Circular dependencies:[/bold]")
        for number, cycle in enumerate(result.cycles, start=1):
            line = Text(f"  {number}. ")
            for i, node in enumerate(cycle.nodes):
                if i:
                    line.append(" -> ", style="dim")
                line.append(display_path(node, result.root), style="cyan" if i else "bold cyan")
            console.print(line)
        console.print(f"[bold red]{_count_line(len(result.cycles))}[/bold red]")

    if result.components:
        console.print()
        console.print("[bold]Strongly connected components:[/bold]")
        for number, component in enumerate(result.components, start=1):
            members = ", ".join(display_path(node, result.root) for node in component)
            console.print(f"  {number}. [{len(component)}] {members}", markup=False)

    if show_stats:
        console.print(f"[dim]{_stats_line(result)}[/dim]")


def format_result(result: AnalysisResult, fmt: OutputFormat, show_stats: bool = False) -> str:
    """Format a result according to the requested output format."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes(result).decode("utf-8")
    if fmt == OutputFormat.HIGHLIGHT and sys.stdout.isatty():
        render_highlight_console(result, show_stats=show_stats)
        return ""
    return format_text(result, show_stats=show_stats)


def format_graph_text(graph: Graph, base: Path | None = None) -> str:
    """One line per file, followed by its imports indented, in sorted order."""
    out: list[str] = []
    for node, edges in graph.to_dict(base).items():
        out.append(node)
        for target in edges:
            out.append(f"    -> {target}")
    out.append(f"# nodes={len(graph)} edges={graph.edge_count()}")
    return "\n".join(out)
