"""Tests for cyclescan.utils.error_handling module."""

from __future__ import annotations

import builtins
import logging
from pathlib import Path
from unittest.mock import MagicMock

from cyclescan.utils.error_handling import (
    ConfigurationError,
    CycleScanError,
    EncodingError,
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    FileAccessError,
    GraphInvariantError,
    PermissionError,
    create_error_report,
    handle_file_error,
)
from cyclescan.utils.logging_config import ScanLogger


class TestExceptions:
    def test_base_defaults(self):
        err = CycleScanError("boom")
        assert err.message == "boom"
        assert err.category == ErrorCategory.UNKNOWN
        assert err.severity == ErrorSeverity.MEDIUM
        assert err.suggestions == [] and err.context == {}

    def test_subclass_categories(self):
        p = Path("x.ts")
        assert FileAccessError("m", p).category == ErrorCategory.FILE_ACCESS
        assert PermissionError("m", p).severity == ErrorSeverity.HIGH
        assert EncodingError("m", p, encoding="utf-16").context["encoding"] == "utf-16"
        assert ConfigurationError("m").severity == ErrorSeverity.CRITICAL
        assert GraphInvariantError("m").category == ErrorCategory.INVARIANT

    def test_permission_error_is_not_builtin(self):
        assert not issubclass(PermissionError, builtins.PermissionError)
        assert issubclass(PermissionError, CycleScanError)


class TestErrorCollector:
    def test_classifies_builtin_exceptions(self):
        collector = ErrorCollector()
        collector.add_error(builtins.PermissionError("denied"))
        collector.add_error(FileNotFoundError("gone"))
        collector.add_error(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"))
        collector.add_error(RuntimeError("other"))

        summary = collector.get_summary()
        assert summary["total_errors"] == 4
        assert summary["by_category"] == {
            "permission": 1,
            "file_access": 1,
            "encoding": 1,
            "unknown": 1,
        }

    def test_cyclescan_error_keeps_its_category(self):
        collector = ErrorCollector()
        collector.add_error(FileAccessError("m", Path("a.ts"), context={"k": 1}), context={"j": 2})
        info = collector.errors[0]
        assert info.category == ErrorCategory.FILE_ACCESS
        assert info.file_path == Path("a.ts")
        assert info.context == {"k": 1, "j": 2}
        assert info.exception_type == "FileAccessError"

    def test_max_errors_caps_storage_not_counts(self):
        collector = ErrorCollector(max_errors=2)
        for _ in range(5):
            collector.add_error(RuntimeError("x"))
        assert len(collector.errors) == 2
        assert collector.get_summary()["total_errors"] == 5

    def test_filters_and_clear(self):
        collector = ErrorCollector()
        collector.add_error(PermissionError("m", Path("a")))
        collector.add_error(EncodingError("m", Path("b")))
        assert len(collector.get_errors_by_category(ErrorCategory.ENCODING)) == 1
        assert len(collector.get_errors_by_severity(ErrorSeverity.HIGH)) == 1
        assert collector.has_errors()
        collector.clear()
        assert not collector.has_errors()
        assert collector.get_summary()["total_errors"] == 0


class TestHandleFileError:
    def test_permission(self):
        collector = ErrorCollector()
        logger = MagicMock()
        err = handle_file_error(Path("a.ts"), "read", builtins.PermissionError("denied"), collector, logger)
        assert isinstance(err, PermissionError)
        assert collector.errors[0].category == ErrorCategory.PERMISSION
        logger.log_file_error.assert_called_once()
        assert logger.log_file_error.call_args.kwargs["operation"] == "read"

    def test_logs_through_scan_logger(self, caplog):
        logger = ScanLogger(name="cyclescan.test.file_error", enable_console=False)
        logger.logger.propagate = True
        with caplog.at_level(logging.WARNING, logger="cyclescan.test.file_error"):
            handle_file_error(Path("a.ts"), "read", FileNotFoundError("gone"), ErrorCollector(), logger)
        (record,) = caplog.records
        assert record.operation == "read"
        assert record.file_path == "a.ts"
        assert "Skipping a.ts: Cannot read file" in record.getMessage()

    def test_missing_file(self):
        err = handle_file_error(Path("a.ts"), "read", FileNotFoundError("gone"))
        assert isinstance(err, FileAccessError)

    def test_encoding(self):
        err = handle_file_error(Path("a.ts"), "decode", UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"))
        assert isinstance(err, EncodingError)

    def test_unexpected(self):
        err = handle_file_error(Path("a.ts"), "read", OSError("disk"))
        assert type(err) is CycleScanError
        assert "Unexpected error during read" in err.message


class TestCreateErrorReport:
    def test_empty(self):
        assert create_error_report(ErrorCollector()) == "No errors occurred during the scan."

    def test_lists_files_and_suggestions(self):
        collector = ErrorCollector()
        handle_file_error(Path("src/locked.ts"), "read", builtins.PermissionError("denied"), collector)
        report = create_error_report(collector)
        assert "Total errors: 1" in report
        assert "permission: 1" in report
        assert "src/locked.ts" in report
        assert "Check file permissions" in report
