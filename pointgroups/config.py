#!/usr/bin/env python3
"""
Configuration for Point Group Ingestion

Centralizes the options that control how a point file is parsed, coloured,
relocated and split into point groups, together with the file and logging
constants used throughout the package.
"""

import json
import math
from dataclasses import dataclass, fields, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .error_handling import ConfigurationError, DegenerateGradientRangeError


Colour = Tuple[float, float, float]
GradientSetting = Union[str, List[Tuple[float, Sequence[float]]]]


class ColourStrategy(Enum):
    """Rule used to derive a point's display colour."""

    DEFAULT = "default"
    RGB = "rgb"
    HEIGHT = "height"
    INTENSITY = "intensity"

    @classmethod
    def from_name(cls, name: Union[str, 'ColourStrategy']) -> 'ColourStrategy':
        """Look up a strategy by name, case-insensitively."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown colour strategy '{name}'. Choose one of: {choices}"
            ) from None


class FileConfig:
    """Configuration for source files and stored point groups."""

    SUPPORTED_EXTENSIONS = ['.xyz', '.txt', '.csv']
    DEFAULT_DELIMITER = ","

    # Point groups are stored as <STORE_DIR>/<dataset>/<dataset><index><MESH_SUFFIX>
    DEFAULT_STORE_DIR = "PointCloudMeshes"
    MESH_SUFFIX = ".vtp"
    METADATA_FILENAME = "point_groups.json"


class LoggingConfig:
    """Configuration for logging system."""

    DEFAULT_LEVEL = "INFO"
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


MALFORMED_POLICIES = ("abort", "skip")

# Hard per-draw vertex ceiling of the target rendering surface
DEFAULT_BATCH_CAPACITY = 65000


@dataclass
class IngestionConfig:
    """Options controlling one ingestion run."""

    scale: float = 1.0
    invert_yz: bool = False
    relocate_to_origin: bool = False
    colour_points_by: ColourStrategy = ColourStrategy.RGB
    default_colour: Colour = (1.0, 1.0, 1.0)
    min_height: float = 0.0
    max_height: float = 1.0
    min_intensity: float = 0.0
    max_intensity: float = 1.0
    gradient: GradientSetting = "viridis"
    batch_capacity: int = DEFAULT_BATCH_CAPACITY
    delimiter: str = FileConfig.DEFAULT_DELIMITER
    on_malformed: str = "abort"
    progress_interval: Optional[int] = None
    force_reload: bool = False

    def __post_init__(self):
        self.colour_points_by = ColourStrategy.from_name(self.colour_points_by)
        self.default_colour = tuple(float(c) for c in self.default_colour)

    def validate(self) -> None:
        """
        Check the configuration before any file is read.

        Raises:
            ConfigurationError: If any option is out of range
            DegenerateGradientRangeError: If the active gradient range is empty
        """
        if isinstance(self.batch_capacity, bool) or not isinstance(self.batch_capacity, int):
            raise ConfigurationError(f"Batch capacity must be an integer, got {self.batch_capacity!r}")
        if self.batch_capacity < 1:
            raise ConfigurationError(f"Batch capacity must be at least 1, got {self.batch_capacity}")

        if not math.isfinite(self.scale) or self.scale == 0:
            raise ConfigurationError(f"Scale must be a finite non-zero number, got {self.scale}")

        if len(self.default_colour) != 3 or not all(0.0 <= c <= 1.0 for c in self.default_colour):
            raise ConfigurationError(
                f"Default colour must be three components in [0, 1], got {self.default_colour}"
            )

        if not self.delimiter:
            raise ConfigurationError("Delimiter cannot be empty")

        if self.on_malformed not in MALFORMED_POLICIES:
            raise ConfigurationError(
                f"Unknown malformed-line policy '{self.on_malformed}'. "
                f"Choose one of: {', '.join(MALFORMED_POLICIES)}"
            )

        if self.progress_interval is not None and self.progress_interval < 1:
            raise ConfigurationError(
                f"Progress interval must be at least 1, got {self.progress_interval}"
            )

        if self.colour_points_by is ColourStrategy.HEIGHT:
            _check_range("Height", self.min_height, self.max_height)
        elif self.colour_points_by is ColourStrategy.INTENSITY:
            _check_range("Intensity", self.min_intensity, self.max_intensity)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IngestionConfig':
        """
        Build a configuration from a plain dictionary.

        Args:
            data: Mapping of option names to values

        Returns:
            IngestionConfig instance

        Raises:
            ConfigurationError: If the mapping holds unknown options
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {', '.join(unknown)}")

        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Get the configuration as a JSON-friendly dictionary."""
        data = asdict(self)
        data['colour_points_by'] = self.colour_points_by.value
        data['default_colour'] = list(self.default_colour)
        return data


def _check_range(strategy: str, lower: float, upper: float) -> None:
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise ConfigurationError(f"{strategy} range must be finite, got min={lower} and max={upper}")
    if upper == lower:
        raise DegenerateGradientRangeError(strategy, lower, upper)


def load_config(file_path: Union[str, Path], **overrides) -> IngestionConfig:
    """
    Load an ingestion configuration from a JSON file.

    Args:
        file_path: Path to JSON configuration file
        **overrides: Options that replace values read from the file

    Returns:
        IngestionConfig instance

    Raises:
        ConfigurationError: If the file is missing or not valid JSON
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must hold a JSON object")

    data.update(overrides)
    return IngestionConfig.from_dict(data)
