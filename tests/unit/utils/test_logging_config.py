"""Tests for cyclescan.utils.logging_config module."""

from __future__ import annotations

import json
import logging

from cyclescan.utils import logging_config
from cyclescan.utils.logging_config import (
    JsonFormatter,
    LogFormat,
    LogLevel,
    ScanLogger,
    StructuredFormatter,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("cyclescan", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestScanLogger:
    def test_defaults(self):
        logger = ScanLogger(name="cyclescan.test.defaults")
        assert logger.logger.level == logging.WARNING
        assert logger.logger.propagate is False
        assert len(logger.logger.handlers) == 1

    def test_console_disabled(self):
        logger = ScanLogger(name="cyclescan.test.quiet", enable_console=False)
        assert logger.logger.handlers == []

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "nested" / "scan.log"
        logger = ScanLogger(
            name="cyclescan.test.file",
            level=LogLevel.INFO,
            log_file=log_file,
            enable_file=True,
            enable_console=False,
        )
        logger.log_scan_complete(files_scanned=3, nodes=3, cycles=1, elapsed_ms=1.5)
        for handler in logger.logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Scan completed: files=3, nodes=3, cycles=1" in text

    def test_helpers_pass_extra_fields(self, caplog):
        logger = ScanLogger(name="cyclescan.test.extra", level=LogLevel.DEBUG, enable_console=False)
        logger.logger.propagate = True
        with caplog.at_level(logging.DEBUG, logger="cyclescan.test.extra"):
            logger.log_unresolved("/src/a.ts", "./missing")
            logger.log_file_error("/src/b.ts", "denied", operation="read")

        unresolved, file_error = caplog.records
        assert unresolved.levelno == logging.DEBUG
        assert unresolved.specifier == "./missing"
        assert file_error.levelno == logging.WARNING
        assert file_error.operation == "read"
        assert "Skipping /src/b.ts: denied" in file_error.getMessage()


class TestFormatters:
    def test_json_formatter(self):
        out = json.loads(JsonFormatter().format(_record(operation="scan_start")))
        assert out["message"] == "hello world"
        assert out["level"] == "WARNING"
        assert out["operation"] == "scan_start"

    def test_structured_formatter(self):
        out = StructuredFormatter().format(_record(root="/src"))
        assert "[WARNING] cyclescan: hello world" in out
        assert "root=/src" in out

    def test_format_selection(self):
        assert isinstance(
            ScanLogger(name="cyclescan.test.fmt", format_type=LogFormat.JSON)._get_formatter(),
            JsonFormatter,
        )


class TestGlobalLogger:
    def test_configure_replaces_global(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_global_logger", None)
        first = get_logger()
        assert get_logger() is first
        configured = configure_logging(level=LogLevel.ERROR, enable_console=False)
        assert get_logger() is configured
        assert configured.logger.level == logging.ERROR

    def test_disable_and_debug(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_global_logger", None)
        disable_logging()
        assert get_logger().logger.level > logging.CRITICAL
        enable_debug_logging()
        logger = get_logger()
        assert logger.level is LogLevel.DEBUG
        assert logger.logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.logger.handlers)
        disable_logging()
