"""
File helpers for cyclescan.

Key Functions:
    read_text_safely: Read a source file with an encoding fallback chain and a
        size limit. I/O errors propagate so callers can classify and skip the
        file.
    build_pathspec: Compile gitwildmatch exclude patterns once per scan.
"""

from __future__ import annotations

from pathlib import Path

import pathspec

# Tried in order; latin-1 accepts any byte sequence so it terminates the chain.
_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def read_text_safely(path: Path, max_bytes: int = 2_000_000) -> str | None:
    """
    Read ``path`` as text.

    Returns None for files larger than ``max_bytes`` or that look binary
    (contain NUL bytes). Raises ``OSError`` (including ``PermissionError`` and
    ``FileNotFoundError``) when the file cannot be read.
    """
    size = path.stat().st_size
    if size > max_bytes:
        return None

    with path.open("rb") as f:
        raw = f.read()

    if b"\x00" in raw:
        return None

    for enc in _ENCODINGS:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="ignore")


def build_pathspec(patterns: list[str] | tuple[str, ...]) -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines("gitwildmatch", list(patterns))

