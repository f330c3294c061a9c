"""Tests for cyclescan.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from cyclescan.core.config import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXTENSIONS,
    DEFAULT_INDEX_NAME,
    ScanConfig,
)
from cyclescan.utils.error_handling import ConfigurationError, ErrorCategory, ErrorSeverity


class TestScanConfig:
    def test_defaults(self):
        cfg = ScanConfig()
        assert cfg.root == "."
        assert cfg.extensions == DEFAULT_EXTENSIONS
        assert cfg.exclude_dirs == set(DEFAULT_EXCLUDE_DIRS)
        assert cfg.exclude_patterns == []
        assert cfg.index_name == DEFAULT_INDEX_NAME == "index"
        assert cfg.follow_symlinks is False
        assert cfg.workers == 1

    def test_default_exclude_dirs_not_shared(self):
        first = ScanConfig()
        first.exclude_dirs.add("vendor")
        assert "vendor" not in ScanConfig().exclude_dirs

    def test_default_extension_order(self):
        assert DEFAULT_EXTENSIONS[:2] == (".ts", ".tsx")
        assert {"node_modules", "dist", "build"} <= DEFAULT_EXCLUDE_DIRS

    def test_normalized_extensions(self):
        cfg = ScanConfig(extensions=("TS", ".tsx", " .js ", ".ts"))
        assert cfg.normalized_extensions() == (".ts", ".tsx", ".js")

    def test_resolve_root_is_absolute(self, tmp_path: Path):
        cfg = ScanConfig(root=str(tmp_path / "." / "sub" / ".."))
        assert cfg.resolve_root() == tmp_path.resolve()

    def test_validate_ok(self, tmp_path: Path):
        ScanConfig(root=str(tmp_path)).validate()

    def test_validate_missing_root(self, tmp_path: Path):
        cfg = ScanConfig(root=str(tmp_path / "nope"))
        with pytest.raises(ConfigurationError) as excinfo:
            cfg.validate()
        err = excinfo.value
        assert "does not exist" in err.message
        assert err.category == ErrorCategory.CONFIGURATION
        assert err.severity == ErrorSeverity.CRITICAL
        assert err.context["field"] == "root"

    def test_validate_root_is_file(self, tmp_path: Path):
        f = tmp_path / "a.ts"
        f.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="not a directory"):
            ScanConfig(root=str(f)).validate()

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"extensions": ()}, "extensions"),
            ({"extensions": (".",)}, "extensions"),
            ({"index_name": ""}, "index_name"),
            ({"index_name": "a/index"}, "index_name"),
            ({"workers": 0}, "workers"),
            ({"max_file_bytes": 0}, "max_file_bytes"),
        ],
    )
    def test_validate_rejects(self, tmp_path: Path, kwargs, field):
        cfg = ScanConfig(root=str(tmp_path), **kwargs)
        with pytest.raises(ConfigurationError) as excinfo:
            cfg.validate()
        assert excinfo.value.context["field"] == field
