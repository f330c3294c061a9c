"""
Import graph construction.

``GraphBuilder`` owns one ``Graph`` and fills it from seed files. Each file is
read and analysed at most once: a node already present in the graph is
returned immediately, which keeps diamond-shaped import patterns linear.

Sequential builds use an explicit stack of edge iterators and visit nodes in
exactly the order a recursive depth-first build would, without being bounded
by the interpreter's recursion limit.

With ``workers > 1`` reading, extraction and resolution run on a fixed thread
pool, one wave of newly discovered files at a time. Nodes are claimed on the
coordinating thread under a lock before being submitted, so no file is built
twice and edge lists are identical to a sequential build.
"""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from ..core.config import ScanConfig
from ..core.types import Graph, GraphEntry, Node
from ..utils.error_handling import ErrorCollector, handle_file_error
from ..utils.helpers import read_text_safely
from ..utils.logging_config import ScanLogger, get_logger
from .imports import extract_specifiers
from .resolver import PathResolver, canonical_path


@dataclass(slots=True)
class NodeScan:
    """Outcome of reading and resolving one file, before it enters the graph."""

    edges: list[Node] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    error: Exception | None = None
    skipped: bool = False
    read: bool = False


class GraphBuilder:
    def __init__(
        self,
        config: ScanConfig,
        resolver: PathResolver | None = None,
        graph: Graph | None = None,
        error_collector: ErrorCollector | None = None,
        logger: ScanLogger | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or PathResolver(
            config.normalized_extensions(), config.index_name
        )
        self.graph = graph if graph is not None else Graph()
        self.errors = error_collector if error_collector is not None else ErrorCollector()
        self.logger = logger or get_logger()

        self.read_counts: Counter[Node] = Counter()
        self.unresolved = 0
        self.skipped_files = 0

        self._claimed: set[Node] = set(self.graph.entries)
        self._lock = threading.Lock()

    # -- public API -------------------------------------------------------

    def build(self, seeds: Iterable[Path | str]) -> Graph:
        """Build the graph reachable from ``seeds``, processed in the given order."""
        nodes = [canonical_path(seed) for seed in seeds]
        if self.config.workers > 1:
            self._build_parallel(nodes)
        else:
            for node in nodes:
                self.build_node(node)
        return self.graph

    def build_node(self, node: Node) -> GraphEntry:
        """Build ``node`` and everything it reaches; memoised on graph membership."""
        if node in self.graph:
            return self.graph[node]

        entry = self._expand(node)
        stack = [iter(entry.edges)]
        while stack:
            target = next(stack[-1], None)
            if target is None:
                stack.pop()
                continue
            if target in self.graph:
                continue
            stack.append(iter(self._expand(target).edges))
        return entry

    @property
    def files_read(self) -> int:
        return sum(self.read_counts.values())

    # -- internals --------------------------------------------------------

    def _expand(self, node: Node) -> GraphEntry:
        self._claim(node)
        return self._record(node, self._analyze(node))

    def _claim(self, node: Node) -> bool:
        with self._lock:
            if node in self._claimed:
                return False
            self._claimed.add(node)
            return True

    def _analyze(self, node: Node) -> NodeScan:
        """Read, extract and resolve one file. Does not touch the graph."""
        path = Path(node)
        scan = NodeScan()
        try:
            text = read_text_safely(path, max_bytes=self.config.max_file_bytes)
        except (OSError, UnicodeError) as e:
            scan.error = e
            scan.skipped = True
            return scan

        if text is None:
            scan.skipped = True
            return scan

        scan.read = True
        for specifier in extract_specifiers(text):
            target = self.resolver.resolve(path.parent, specifier)
            if target is None:
                scan.unresolved.append(specifier)
            elif target not in scan.edges:
                scan.edges.append(target)
        return scan

    def _record(self, node: Node, scan: NodeScan) -> GraphEntry:
        """Insert the analysed node into the graph. Coordinating thread only."""
        if scan.error is not None:
            handle_file_error(Path(node), "read", scan.error, self.errors, self.logger)
        elif scan.skipped:
            self.logger.info(f"Skipping {node}: binary or larger than {self.config.max_file_bytes} bytes")

        if scan.skipped:
            self.skipped_files += 1
        if scan.read:
            self.read_counts[node] += 1

        for specifier in scan.unresolved:
            self.logger.log_unresolved(node, specifier)
        self.unresolved += len(scan.unresolved)

        return self.graph.add_node(node, scan.edges)

    def _build_parallel(self, seeds: list[Node]) -> None:
        frontier = [node for node in seeds if self._claim(node)]
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            while frontier:
                scans = list(executor.map(self._analyze, frontier))
                for node, scan in zip(frontier, scans):
                    self._record(node, scan)

                next_frontier: list[Node] = []
                for node in frontier:
                    for target in self.graph[node].edges:
                        if self._claim(target):
                            next_frontier.append(target)
                frontier = next_frontier
