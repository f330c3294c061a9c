"""
Command-line interface implementation.

The ``cli`` click group carries the ``check`` and ``graph`` commands;
``main`` is the console-script entry point.
"""

from .main import check_cmd, cli, graph_cmd, main

__all__ = [
    "check_cmd",
    "cli",
    "graph_cmd",
    "main",
]
