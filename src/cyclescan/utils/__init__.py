"""
Utility modules: error handling, logging, file helpers and report formatting.
"""

from .error_handling import (
    ConfigurationError,
    CycleScanError,
    EncodingError,
    ErrorCollector,
    FileAccessError,
    GraphInvariantError,
    PermissionError,
    create_error_report,
    handle_file_error,
)
from .formatter import format_result, format_text, render_highlight_console, to_json_bytes
from .helpers import read_text_safely
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "ConfigurationError",
    "CycleScanError",
    "EncodingError",
    "ErrorCollector",
    "FileAccessError",
    "GraphInvariantError",
    "PermissionError",
    "create_error_report",
    "handle_file_error",
    # Formatting
    "format_result",
    "format_text",
    "render_highlight_console",
    "to_json_bytes",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
    # Helpers
    "read_text_safely",
]
