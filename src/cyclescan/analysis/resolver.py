"""
Relative import resolution.

``PathResolver`` turns a relative specifier, seen in a file that lives in
``directory``, into the canonical path of an existing source file. Candidates
are checked against the real file system; a specifier that matches no file
resolves to ``None`` and the edge is dropped by the caller.

Priority order for a specifier without a recognised suffix::

    ./a      ->  ./a.ts, ./a.tsx, ...           (each extension, in order)
             ->  ./a/index.ts, ./a/index.tsx, ... (directory index)

``.``, ``..`` and specifiers ending in ``/`` name a directory and only try
the index candidates.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..core.types import Node


def canonical_path(path: Path | str) -> Node:
    """Canonical identity of a file: absolute, normalised, symlinks resolved."""
    return os.path.realpath(os.fspath(path))


class PathResolver:
    def __init__(self, extensions: tuple[str, ...], index_name: str = "index") -> None:
        self.extensions = extensions
        self.index_name = index_name
        self._cache: dict[tuple[str, str], Node | None] = {}

    def has_source_suffix(self, specifier: str) -> bool:
        return os.path.splitext(specifier)[1].lower() in self.extensions

    def candidates(self, directory: Path | str, specifier: str) -> list[str]:
        """All candidate paths for ``specifier``, highest priority first."""
        spec = _strip_query(specifier)
        base = os.path.normpath(os.path.join(os.fspath(directory), spec))

        index = [os.path.join(base, self.index_name + ext) for ext in self.extensions]
        # '.', '..' and './lib/' can only name a directory
        if _names_directory(spec):
            return index

        if self.has_source_suffix(spec):
            return [base]

        return [base + ext for ext in self.extensions] + index

    def resolve(self, directory: Path | str, specifier: str) -> Node | None:
        """Return the canonical path of the first existing candidate, or None."""
        key = (os.fspath(directory), specifier)
        if key in self._cache:
            return self._cache[key]

        resolved: Node | None = None
        for candidate in self.candidates(directory, specifier):
            if os.path.isfile(candidate):
                resolved = canonical_path(candidate)
                break

        self._cache[key] = resolved
        return resolved

    def clear_cache(self) -> None:
        self._cache.clear()


def _names_directory(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.endswith(("/", "/.", "/.."))


def _strip_query(specifier: str) -> str:
    # bundler-style suffixes: './worker?worker', './style.css#hash'
    for sep in ("?", "#"):
        idx = specifier.find(sep)
        if idx != -1:
            specifier = specifier[:idx]
    return specifier
