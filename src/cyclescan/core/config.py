"""
Configuration module for cyclescan.

This module defines the ScanConfig class, the single configuration object for
one analysis run: what to scan, how to resolve relative imports, and how much
parallelism to use while reading files.

Classes:
    ScanConfig: Main configuration class with all scan parameters

Example:
    Basic configuration:
        >>> from cyclescan.core.config import ScanConfig
        >>>
        >>> config = ScanConfig(
        ...     root="./web",
        ...     extensions=(".ts", ".tsx"),
        ...     exclude_dirs={"node_modules", "dist"},
        ... )
        >>> config.validate()

    Resolution order:
        Extensions are kept in the given order. It is the priority order used
        when an import specifier has no suffix: ``./a`` tries ``./a.ts`` before
        ``./a.tsx``, then ``./a/index.ts`` before ``./a/index.tsx``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..utils.error_handling import ConfigurationError

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset(
    {"node_modules", "dist", "build", "coverage", "__pycache__"}
)
DEFAULT_INDEX_NAME = "index"


@dataclass(slots=True)
class ScanConfig:
    # Scope
    root: str = "."
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: set[str] = field(default_factory=lambda: set(DEFAULT_EXCLUDE_DIRS))
    exclude_patterns: list[str] = field(default_factory=list)
    follow_symlinks: bool = False

    # Resolution
    index_name: str = DEFAULT_INDEX_NAME

    # Limits
    max_file_bytes: int = 2_000_000

    # Performance
    workers: int = 1  # 1 = sequential build; >1 = thread pool for file reading

    def resolve_root(self) -> Path:
        return Path(self.root).resolve()

    def normalized_extensions(self) -> tuple[str, ...]:
        """Extensions lowercased with a leading dot, duplicates dropped, order kept."""
        seen: list[str] = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in seen:
                seen.append(ext)
        return tuple(seen)

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        root = self.resolve_root()
        if not root.exists():
            raise ConfigurationError(
                f"Root path does not exist: {self.root}",
                context={"field": "root", "value": self.root},
            )
        if not root.is_dir():
            raise ConfigurationError(
                f"Root path is not a directory: {self.root}",
                context={"field": "root", "value": self.root},
            )

        extensions = self.normalized_extensions()
        if not extensions:
            raise ConfigurationError(
                "At least one source file extension must be specified",
                context={"field": "extensions"},
            )
        if any(ext == "." for ext in extensions):
            raise ConfigurationError(
                "Empty file extension",
                context={"field": "extensions", "value": list(self.extensions)},
            )

        if not self.index_name or "/" in self.index_name or "\\" in self.index_name:
            raise ConfigurationError(
                "Index name must be a bare file name without extension",
                context={"field": "index_name", "value": self.index_name},
            )

        if self.workers < 1:
            raise ConfigurationError(
                "Worker count must be at least 1",
                context={"field": "workers", "value": self.workers},
            )

        if self.max_file_bytes <= 0:
            raise ConfigurationError(
                "File size limit must be positive",
                context={"field": "max_file_bytes", "value": self.max_file_bytes},
            )
