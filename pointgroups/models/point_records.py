#!/usr/bin/env python3
"""
Data Models for Point Group Ingestion

Defines the records, buffers and results passed between the parser,
the colour policies, the batch planner and the geometry consumers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import numpy as np


Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class PointRecord:
    """One decoded line of the source file."""

    position: Vector3                      # transformed (axis swap + scale)
    source_position: Vector3               # fields 0..2 as written in the file
    rgb: Optional[Tuple[int, int, int]] = None
    intensity: Optional[float] = None


@dataclass(frozen=True)
class Batch:
    """Contiguous index range [start, start + count) over the dataset."""

    index: int
    start: int
    count: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Batch start must be non-negative, got {self.start}")
        if self.count < 1:
            raise ValueError(f"Batch must hold at least one point, got {self.count}")

    @property
    def stop(self) -> int:
        return self.start + self.count

    @property
    def as_slice(self) -> slice:
        return slice(self.start, self.stop)


@dataclass
class PointCloudDataset:
    """Parallel position and colour buffers for every point of the source."""

    positions: np.ndarray  # Nx3 float64 array of XYZ coordinates
    colors: np.ndarray     # Nx3 float32 array of RGB values in [0, 1]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate data consistency."""
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError("Positions must have 3 coordinates (X, Y, Z)")

        if self.colors.ndim != 2 or self.colors.shape[1] != 3:
            raise ValueError("Colors must have 3 values (R, G, B)")

        if len(self.colors) != len(self.positions):
            raise ValueError("Colors array must match positions array length")

    @classmethod
    def allocate(cls, num_points: int) -> 'PointCloudDataset':
        """Allocate zeroed buffers for a known number of points."""
        return cls(
            positions=np.zeros((num_points, 3), dtype=np.float64),
            colors=np.zeros((num_points, 3), dtype=np.float32),
        )

    @property
    def size(self) -> int:
        """Number of points in the dataset."""
        return len(self.positions)

    @property
    def bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]:
        """Get min/max bounds for each axis."""
        if self.size == 0:
            raise ValueError("Empty dataset has no bounds")
        return (
            (float(self.positions[:, 0].min()), float(self.positions[:, 0].max())),
            (float(self.positions[:, 1].min()), float(self.positions[:, 1].max())),
            (float(self.positions[:, 2].min()), float(self.positions[:, 2].max()))
        )

    def truncate(self, num_points: int) -> None:
        """Drop trailing slots that were never filled."""
        self.positions = self.positions[:num_points]
        self.colors = self.colors[:num_points]


class IngestionPhase(Enum):
    PARSING = "parsing"
    EMITTING = "emitting"


class IngestionStatus(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class IngestionProgress:
    """Progress notification yielded at each suspension point."""

    phase: IngestionPhase
    done: int
    total: int

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.done / self.total

    def describe(self) -> str:
        if self.phase is IngestionPhase.PARSING:
            return f"{self.done} out of {self.total} loaded"
        return f"{self.done} out of {self.total} PointGroups loaded"


@dataclass
class IngestionResult:
    """Outcome of one ingestion run."""

    status: IngestionStatus
    num_points: int = 0
    num_batches: int = 0
    batches_emitted: int = 0
    skipped_lines: Tuple[int, ...] = ()
    offset: Optional[Vector3] = None
    elapsed_seconds: float = 0.0

    @property
    def completed(self) -> bool:
        return self.status is IngestionStatus.COMPLETED

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the ingestion run."""
        return {
            'status': self.status.value,
            'num_points': self.num_points,
            'num_batches': self.num_batches,
            'batches_emitted': self.batches_emitted,
            'skipped_lines': len(self.skipped_lines),
            'offset': list(self.offset) if self.offset is not None else None,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }
