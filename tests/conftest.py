"""
Shared test fixtures and utilities for cyclescan tests.

Source trees are written into ``tmp_path`` from ``{relative_path: content}``
mappings so every test works against real files; resolution checks existence
on disk and there is nothing to mock.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from cyclescan.analysis.cycles import find_cycles
from cyclescan.analysis.graph_builder import GraphBuilder
from cyclescan.analysis.scanner import iter_source_files
from cyclescan.core.config import ScanConfig
from cyclescan.core.types import Cycle, Graph
from cyclescan.utils.logging_config import disable_logging


class ScanHelper:
    """Helper class for creating source trees and running the pipeline on them."""

    # a -> b -> c -> a
    CYCLE_ABC = {
        "a.ts": "import { b } from './b';\n",
        "b.ts": "import { c } from './c';\n",
        "c.ts": "import { a } from './a';\n",
    }
    # a -> b, b imports nothing
    CHAIN_AB = {
        "a.ts": "import { b } from './b';\n",
        "b.ts": "export const b = 1;\n",
    }
    MISSING_IMPORT = {
        "x.ts": "import { m } from './missing';\n",
    }
    SELF_IMPORT = {
        "y.ts": "import * as self from './y';\nexport const y = 1;\n",
    }
    # a -> {b, c}, b -> d, c -> d
    DIAMOND = {
        "a.ts": "import { b } from './b';\nimport { c } from './c';\n",
        "b.ts": "import { d } from './d';\n",
        "c.ts": "import { d } from './d';\n",
        "d.ts": "export const d = 1;\n",
    }

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, files: dict[str, str]) -> Path:
        for rel, text in files.items():
            p = self.root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        return self.root

    def node(self, rel: str) -> str:
        """Canonical node key for ``root/rel``."""
        return os.path.realpath(self.root / rel)

    def config(self, **kwargs) -> ScanConfig:
        return ScanConfig(root=str(self.root), **kwargs)

    def build(self, **config_kwargs) -> tuple[Graph, GraphBuilder]:
        config = self.config(**config_kwargs)
        builder = GraphBuilder(config)
        graph = builder.build(iter_source_files(config))
        return graph, builder

    def detect(self, **config_kwargs) -> list[Cycle]:
        graph, _ = self.build(**config_kwargs)
        return find_cycles(graph)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep scan diagnostics out of captured output."""
    disable_logging()
    yield


@pytest.fixture
def scan(tmp_path: Path) -> ScanHelper:
    """Provide a ScanHelper rooted at a fresh temporary directory."""
    return ScanHelper(tmp_path)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
