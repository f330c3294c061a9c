"""
cyclescan: static detection of circular imports between source files.

cyclescan walks a source tree, extracts relative import specifiers from every
JavaScript/TypeScript-family file, resolves them against the file system and
reports chains of files that import each other in a loop.

Main Classes:
    CycleScan: Runs one analysis (scan, build, detect)
    ScanConfig: Scope, resolution and performance settings
    Graph: Adjacency graph of canonical file paths
    Cycle: A closed chain of files
    AnalysisResult: Cycles, graph and statistics of one run

Example Usage:
    API:
        >>> from cyclescan import CycleScan, ScanConfig
        >>> result = CycleScan(ScanConfig(root="./web")).analyze()
        >>> print(len(result.cycles))

    CLI:
        $ cyclescan check ./web
        $ cyclescan check . --format json --strict
"""

__version__ = "0.1.0"

from .core.api import CycleScan
from .core.config import ScanConfig
from .core.types import AnalysisResult, Cycle, Graph, GraphEntry, OutputFormat, ScanStats, VisitState

__all__ = [
    "__version__",
    "AnalysisResult",
    "Cycle",
    "CycleScan",
    "Graph",
    "GraphEntry",
    "OutputFormat",
    "ScanConfig",
    "ScanStats",
    "VisitState",
]
