#!/usr/bin/env python3
"""
XYZ File Loader

Validates comma-delimited point files and streams their lines with line
numbers, counting points up front so buffers can be sized before parsing.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..config import FileConfig
from ..error_handling import SourceNotFoundError, validate_file_path


logger = logging.getLogger(__name__)


class BaseFileLoader:
    """Base class for file loaders with common validation logic."""

    def __init__(self, supported_extensions: List[str]):
        """Initialize with list of supported file extensions."""
        self.supported_extensions = [ext.lower() for ext in supported_extensions]

    def open(self, file_path: Union[str, Path]) -> 'XYZSource':
        """Validate the path and hand back a readable source."""
        validated_path = validate_file_path(
            file_path,
            allowed_extensions=self.supported_extensions
        )
        return self._open_source(validated_path)

    def _open_source(self, file_path: Path) -> 'XYZSource':
        """Implementation-specific opening logic."""
        raise NotImplementedError("Subclasses must implement _open_source method")


class XYZLoader(BaseFileLoader):
    """Loader for plain-text XYZ point files."""

    def __init__(self, supported_extensions: Optional[List[str]] = None):
        super().__init__(supported_extensions or FileConfig.SUPPORTED_EXTENSIONS)

    def _open_source(self, file_path: Path) -> 'XYZSource':
        source = XYZSource(file_path)
        logger.info(f"Found {source.num_points:,} points in {file_path.suffix.upper()} file: {file_path.name}")
        return source


class XYZSource:
    """A validated point file. Blank lines are not points."""

    def __init__(self, file_path: Path):
        self.path = Path(file_path)
        self._num_points: Optional[int] = None

    @property
    def name(self) -> str:
        """Dataset name used for point group naming."""
        return self.path.stem

    @property
    def num_points(self) -> int:
        """Number of non-blank lines, computed with one pre-pass."""
        if self._num_points is None:
            self._num_points = sum(1 for _ in self.iter_lines())
        return self._num_points

    def iter_lines(self) -> Iterator[Tuple[int, str]]:
        """
        Stream the non-blank lines of the file in order.

        Yields:
            Tuples of (1-based line number, line text without newline)

        Raises:
            SourceNotFoundError: If the file vanished or is not UTF-8 text
        """
        try:
            with open(self.path, 'r', encoding='utf-8-sig') as f:
                for line_number, line in enumerate(f, start=1):
                    line = line.rstrip('\r\n')
                    if line.strip():
                        yield line_number, line
        except FileNotFoundError as e:
            raise SourceNotFoundError(f"Source file disappeared: {self.path}") from e
        except UnicodeDecodeError as e:
            raise SourceNotFoundError(f"Source file is not readable as UTF-8 text: {self.path}") from e
