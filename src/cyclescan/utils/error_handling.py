"""
Error handling and reporting for cyclescan.

Errors fall into three groups:

    - Startup errors (invalid root, bad configuration): fatal, raised as
      ``ConfigurationError`` before any scanning starts.
    - Per-file errors (unreadable file, undecodable content): recovered
      locally. The file is skipped, the error is recorded in an
      ``ErrorCollector`` and the run carries on.
    - Graph invariant violations: ``GraphInvariantError``. These indicate a
      defect in the builder/detector contract and are never caught by
      library code.

Example:
    Collecting per-file errors:
        >>> from pathlib import Path
        >>> from cyclescan.utils.error_handling import ErrorCollector, handle_file_error
        >>>
        >>> collector = ErrorCollector()
        >>> try:
        ...     Path("missing.ts").read_text()
        ... except OSError as e:
        ...     handle_file_error(Path("missing.ts"), "read", e, collector)
        >>> collector.get_summary()["total_errors"]
        1
"""

from __future__ import annotations

import builtins
import sys
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

BuiltinPermissionError = builtins.PermissionError


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ENCODING = "encoding"
    CONFIGURATION = "configuration"
    INVARIANT = "invariant"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class CycleScanError(Exception):
    """Base exception for cyclescan errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class FileAccessError(CycleScanError):
    """Error accessing files."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            context=context,
        )


class PermissionError(CycleScanError):
    """Permission-related errors."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            file_path=file_path,
            suggestions=[
                "Check file permissions",
                "Exclude the directory with --exclude-dir",
            ],
            context=context,
        )


class EncodingError(CycleScanError):
    """File encoding-related errors."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        encoding: str = "unknown",
        context: dict[str, Any] | None = None,
    ) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["encoding"] = encoding

        super().__init__(
            message,
            category=ErrorCategory.ENCODING,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            suggestions=[
                f"Try a different encoding (current: {encoding})",
                "Check if the file is binary",
            ],
            context=merged_context,
        )


class ConfigurationError(CycleScanError):
    """Configuration-related errors. Always fatal at startup."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            suggestions=[
                "Check the root path and command-line options",
            ],
            context=context,
        )


class GraphInvariantError(CycleScanError):
    """The graph handed to the detector breaks the builder's contract."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.INVARIANT,
            severity=ErrorSeverity.CRITICAL,
            context=context,
        )


class ErrorCollector:
    """Collects per-file errors during a scan."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}

    def add_error(
        self,
        exception: Exception | CycleScanError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: Path | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, CycleScanError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = []
            error_context = context or {}

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        if isinstance(exception, BuiltinPermissionError):
            return ErrorCategory.PERMISSION
        if isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
            return ErrorCategory.FILE_ACCESS
        if isinstance(exception, UnicodeError):
            return ErrorCategory.ENCODING
        return ErrorCategory.UNKNOWN

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        return [error for error in self.errors if error.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        return [error for error in self.errors if error.severity == severity]

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": sum(self.error_counts.values()),
            "by_category": {cat.value: n for cat, n in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
        }

    def clear(self) -> None:
        self.errors.clear()
        self.error_counts.clear()


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> CycleScanError:
    """
    Classify a per-file failure, record it and log it.

    Args:
        file_path: Path to the file that caused the error
        operation: Operation being performed (e.g., "read", "stat")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional ScanLogger to log the error

    Returns:
        The classified error, for callers that want to inspect it
    """
    error: CycleScanError
    if isinstance(exception, BuiltinPermissionError):
        error = PermissionError(f"Permission denied during {operation}: {exception}", file_path)
    elif isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        error = FileAccessError(f"Cannot {operation} file: {exception}", file_path)
    elif isinstance(exception, UnicodeError):
        error = EncodingError(f"Encoding error during {operation}: {exception}", file_path)
    else:
        error = CycleScanError(
            f"Unexpected error during {operation}: {exception}", file_path=file_path
        )

    if error_collector is not None:
        error_collector.add_error(error)

    if logger is not None:
        logger.log_file_error(str(file_path), error.message, operation=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the scan."

    summary = error_collector.get_summary()

    report = ["Scan Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Skipped files:")
    for error in error_collector.errors:
        report.append(f"  - {error.file_path}: {error.message}")
        if error.suggestions:
            report.append(f"    Suggestions: {', '.join(error.suggestions)}")

    return "\n".join(report)
