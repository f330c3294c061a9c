"""
Source file discovery.

``iter_source_files`` walks a root directory in lexicographic order, pruning
excluded and hidden directories in place so ``os.walk`` never descends into
them, and yields the files whose suffix is one of the configured source
extensions. Order is reproducible across runs on unchanged input, which is
what makes cycle discovery order reproducible.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ..core.config import ScanConfig
from ..utils.helpers import build_pathspec


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def iter_source_files(config: ScanConfig, root: Path | None = None) -> Iterator[Path]:
    """Yield source files under ``root`` (default: the configured root) in sorted order."""
    root_path = (root or config.resolve_root()).resolve()
    extensions = set(config.normalized_extensions())
    exclude_dirs = set(config.exclude_dirs)
    exc = build_pathspec(config.exclude_patterns) if config.exclude_patterns else None

    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=config.follow_symlinks):
        rel_dir = Path(dirpath).relative_to(root_path).as_posix()
        prefix = "" if rel_dir == "." else rel_dir + "/"

        # prune in place; os.walk then visits the remaining dirs in this order
        kept: list[str] = []
        for d in sorted(dirnames):
            if d in exclude_dirs or _is_hidden(d):
                continue
            if exc is not None and exc.match_file(prefix + d + "/"):
                continue
            kept.append(d)
        dirnames[:] = kept

        for name in sorted(filenames):
            if Path(name).suffix.lower() not in extensions:
                continue
            if exc is not None and exc.match_file(prefix + name):
                continue
            yield Path(dirpath) / name
