"""
Import graph analysis.

- scanner: deterministic source file discovery
- imports: relative import specifier extraction
- resolver: specifier to file resolution
- graph_builder: memoised graph construction
- cycles: cycle and strongly connected component detection
"""

from .cycles import CycleDetector, find_cycles, strongly_connected_components
from .graph_builder import GraphBuilder
from .imports import extract_specifiers, is_relative_specifier
from .resolver import PathResolver, canonical_path
from .scanner import iter_source_files

__all__ = [
    "CycleDetector",
    "GraphBuilder",
    "PathResolver",
    "canonical_path",
    "extract_specifiers",
    "find_cycles",
    "is_relative_specifier",
    "iter_source_files",
    "strongly_connected_components",
]
