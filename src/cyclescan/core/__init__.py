"""
Core functionality: configuration, data types and the analysis API.
"""

from .api import CycleScan
from .config import ScanConfig
from .types import AnalysisResult, Cycle, Graph, GraphEntry, OutputFormat, ScanStats, VisitState

__all__ = [
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
