#!/usr/bin/env python3
"""
Error Handling Module

Exception taxonomy and logging helpers shared by the point group
ingestion pipeline.
"""

import logging
import os
from typing import Optional, Union
from pathlib import Path


class PointCloudIngestError(Exception):
    """Base exception for point cloud ingestion errors."""
    pass


class ConfigurationError(PointCloudIngestError):
    """Raised when the ingestion configuration is invalid."""
    pass


class DegenerateGradientRangeError(ConfigurationError):
    """Raised when a gradient range has identical lower and upper bounds."""

    def __init__(self, strategy: str, lower: float, upper: float):
        self.strategy = strategy
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"{strategy} colouring needs a non-empty range, "
            f"got min={lower} and max={upper}"
        )


class SourceNotFoundError(PointCloudIngestError):
    """Raised when the source file cannot be found or read."""
    pass


class RecordError(PointCloudIngestError):
    """Raised when a single line of the source cannot be turned into a point."""

    def __init__(self, reason: str, line_number: Optional[int] = None,
                 line: Optional[str] = None):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            super().__init__(f"line {line_number}: {reason}")
        else:
            super().__init__(reason)

    def at_line(self, line_number: int) -> 'RecordError':
        """Return a copy of this error tagged with its source line number."""
        return type(self)(self.reason, line_number, self.line)


class MalformedRecordError(RecordError):
    """Raised when a line is missing position fields or holds non-numeric values."""
    pass


class MissingIntensityFieldError(RecordError):
    """Raised when intensity colouring meets a record without an intensity field."""
    pass


class GeometryEmissionError(PointCloudIngestError):
    """Raised when a geometry consumer fails to accept a batch."""
    pass


class PointGroupStoreError(PointCloudIngestError):
    """Raised when stored point groups are missing or unreadable."""
    pass


class ErrorHandler:
    """Centralized error logging."""

    def __init__(self, logger_name: str = "pointgroups"):
        """
        Initialize error handler.

        Args:
            logger_name: Name for the logger instance
        """
        self.logger = logging.getLogger(logger_name)

    def log_error(self, error: Exception, context: str = "",
                  include_traceback: bool = False) -> None:
        """
        Log an error with context information.

        Args:
            error: Exception that occurred
            context: Context where the error occurred
            include_traceback: Whether to include full traceback
        """
        error_type = type(error).__name__

        if context:
            message = f"Error in {context}: {error_type}: {error}"
        else:
            message = f"{error_type}: {error}"

        self.logger.error(message, exc_info=error if include_traceback else None)

    def log_warning(self, message: str, context: str = "") -> None:
        """Log a warning message."""
        if context:
            message = f"Warning in {context}: {message}"
        self.logger.warning(message)


def validate_file_path(file_path: Union[str, Path],
                       allowed_extensions: Optional[list] = None) -> Path:
    """
    Validate that a source path points at a readable file.

    Args:
        file_path: Path to validate
        allowed_extensions: List of allowed file extensions

    Returns:
        Resolved Path object

    Raises:
        SourceNotFoundError: If the path is empty, missing or unreadable
        ConfigurationError: If the extension is not allowed
    """
    if not file_path:
        raise SourceNotFoundError("Source path cannot be empty")

    try:
        resolved_path = Path(file_path).expanduser().resolve()
    except (OSError, RuntimeError) as e:
        raise SourceNotFoundError(f"Invalid source path: {file_path} - {e}") from e

    if not resolved_path.is_file():
        raise SourceNotFoundError(f"Source file does not exist: {resolved_path}")

    if not os.access(resolved_path, os.R_OK):
        raise SourceNotFoundError(f"Source file is not readable: {resolved_path}")

    if allowed_extensions:
        if resolved_path.suffix.lower() not in [ext.lower() for ext in allowed_extensions]:
            raise ConfigurationError(
                f"File extension {resolved_path.suffix} not allowed. "
                f"Allowed extensions: {allowed_extensions}"
            )

    return resolved_path
