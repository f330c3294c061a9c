"""
Main API for cyclescan.

``CycleScan`` runs one analysis: discover source files, build the import
graph, then detect cycles on the completed graph. Each call to ``analyze()``
builds a fresh ``Graph``; nothing is cached between runs, so one instance can
be reused safely in a long-lived process.

Example:
    >>> from cyclescan import CycleScan, ScanConfig
    >>> result = CycleScan(ScanConfig(root="./web")).analyze()
    >>> for cycle in result.cycles:
    ...     print(cycle.render(result.root))
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from ..analysis.cycles import CycleDetector, strongly_connected_components
from ..analysis.graph_builder import GraphBuilder
from ..analysis.scanner import iter_source_files
from ..utils.error_handling import ErrorCollector, create_error_report
from ..utils.logging_config import ScanLogger, get_logger
from .config import ScanConfig
from .types import AnalysisResult, Cycle, Graph, ScanStats


class CycleScan:
    def __init__(self, config: ScanConfig | None = None, logger: ScanLogger | None = None) -> None:
        self.config = config or ScanConfig()
        self.logger = logger or get_logger()
        self.errors = ErrorCollector()
        self.last_builder: GraphBuilder | None = None

    def scan_files(self) -> list[Path]:
        return list(iter_source_files(self.config))

    def build_graph(self, files: list[Path] | None = None) -> Graph:
        """Build a new graph from ``files`` (default: everything the scanner finds)."""
        if files is None:
            files = self.scan_files()
        return self._run_builder(files).graph

    def _run_builder(self, files: list[Path]) -> GraphBuilder:
        builder = GraphBuilder(self.config, error_collector=self.errors, logger=self.logger)
        self.last_builder = builder
        builder.build(files)
        return builder

    def find_cycles(self, graph: Graph) -> list[Cycle]:
        return CycleDetector(graph).find_cycles()

    def analyze(self, components: bool = False) -> AnalysisResult:
        """
        Run scan, build and detection.

        Args:
            components: Also compute the cyclic strongly connected components

        Raises:
            ConfigurationError: The configuration is invalid (e.g. missing root)
        """
        self.config.validate()
        root = self.config.resolve_root()
        self.errors.clear()

        t0 = time.perf_counter()
        self.logger.log_scan_start(str(root))

        files = self.scan_files()
        builder = self._run_builder(files)
        graph = builder.graph
        cycles = self.find_cycles(graph)
        sccs = strongly_connected_components(graph) if components else None

        stats = ScanStats(
            files_scanned=len(files),
            nodes=len(graph),
            edges=graph.edge_count(),
            unresolved=builder.unresolved,
            skipped_files=builder.skipped_files,
            cycles=len(cycles),
            elapsed_ms=(time.perf_counter() - t0) * 1000.0,
        )
        self.logger.log_scan_complete(stats.files_scanned, stats.nodes, stats.cycles, stats.elapsed_ms)
        return AnalysisResult(root=root, graph=graph, cycles=cycles, components=sccs, stats=stats)

    def error_summary(self) -> dict[str, Any]:
        return self.errors.get_summary()

    def error_report(self) -> str:
        return create_error_report(self.errors)
