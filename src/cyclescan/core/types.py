"""
Core type definitions for cyclescan.

This module contains the data types shared by the scanner, the graph builder,
the cycle detector and the reporters.

Key Types:
    OutputFormat: Enumeration of supported report formats
    VisitState: Three-valued DFS colouring (WHITE, GRAY, BLACK)
    GraphEntry: Ordered out-edges of one file plus its visit state
    Graph: Mapping of canonical file paths to graph entries
    Cycle: Closed chain of files, first element repeated at the end
    ScanStats: Counters collected during one run
    AnalysisResult: Everything a reporter needs to render one run

Example:
    Building a graph by hand:
        >>> from cyclescan.core.types import Graph
        >>>
        >>> graph = Graph()
        >>> graph.add_node("/src/a.ts", ["/src/b.ts"])
        >>> graph.add_node("/src/b.ts", [])
        >>> list(graph.sorted_nodes())
        ['/src/a.ts', '/src/b.ts']
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# Canonical absolute path of one source file.
Node = str


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HIGHLIGHT = "highlight"


class VisitState(str, Enum):
    """DFS colour of a graph entry."""

    WHITE = "white"  # not yet started
    GRAY = "gray"  # on the active DFS path
    BLACK = "black"  # fully explored


@dataclass(slots=True)
class GraphEntry:
    """Out-edges of one file, in import-statement order."""

    edges: list[Node] = field(default_factory=list)
    state: VisitState = VisitState.WHITE


class Graph:
    """
    Adjacency graph of file-to-file imports for one run.

    Keys are unique canonical paths. Iteration over all keys for analysis
    goes through ``sorted_nodes()`` so reports never depend on insertion or
    hash order.
    """

    def __init__(self) -> None:
        self.entries: dict[Node, GraphEntry] = {}

    def __contains__(self, node: object) -> bool:
        return node in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, node: Node) -> GraphEntry:
        return self.entries[node]

    def add_node(self, node: Node, edges: Iterable[Node] = ()) -> GraphEntry:
        """Insert a WHITE entry for ``node``; an existing entry is returned unchanged."""
        entry = self.entries.get(node)
        if entry is None:
            entry = GraphEntry(edges=list(edges))
            self.entries[node] = entry
        return entry

    def sorted_nodes(self) -> list[Node]:
        return sorted(self.entries)

    def edge_count(self) -> int:
        return sum(len(entry.edges) for entry in self.entries.values())

    def reset_states(self) -> None:
        """Return every entry to WHITE so detection can run again."""
        for entry in self.entries.values():
            entry.state = VisitState.WHITE

    def to_dict(self, base: Path | None = None) -> dict[str, list[str]]:
        """Adjacency list keyed by (optionally base-relative) path, in sorted order."""
        return {
            display_path(node, base): [display_path(t, base) for t in self.entries[node].edges]
            for node in self.sorted_nodes()
        }


class Cycle(Sequence[Node]):
    """
    A closed chain of files.

    The first node is repeated at the end, so ``a -> b -> a`` is stored as
    ``("a", "b", "a")``. ``len()`` counts edges, which makes a self-import
    ``("y", "y")`` a cycle of length 1.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[Node]) -> None:
        chain = tuple(nodes)
        if len(chain) < 2 or chain[0] != chain[-1]:
            raise ValueError(f"cycle must start and end on the same node: {chain!r}")
        self._nodes = chain

    def __getitem__(self, index):  # type: ignore[override]
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes) - 1

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Cycle):
            return self._nodes == other._nodes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __repr__(self) -> str:
        return f"Cycle({list(self._nodes)!r})"

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def members(self) -> list[Node]:
        """Distinct files in the loop, in chain order."""
        return list(self._nodes[:-1])

    def render(self, base: Path | None = None, separator: str = " -> ") -> str:
        return separator.join(display_path(node, base) for node in self._nodes)


@dataclass(slots=True)
class ScanStats:
    files_scanned: int = 0
    nodes: int = 0
    edges: int = 0
    unresolved: int = 0
    skipped_files: int = 0
    cycles: int = 0
    elapsed_ms: float = 0.0


@dataclass(slots=True)
class AnalysisResult:
    root: Path
    graph: Graph
    cycles: list[Cycle] = field(default_factory=list)
    components: list[list[Node]] | None = None
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)


def display_path(node: Node, base: Path | None = None) -> str:
    """Render ``node`` relative to ``base`` with forward slashes when possible."""
    if base is None:
        return node
    try:
        rel = os.path.relpath(node, str(base))
    except ValueError:
        # different drive on Windows
        return node
    if rel.startswith(".."):
        return node
    return Path(rel).as_posix()
