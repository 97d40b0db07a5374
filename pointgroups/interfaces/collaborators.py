#!/usr/bin/env python3
"""
Abstract Interfaces for Ingestion Collaborators

Defines the contracts of the components the ingestor talks to but does not
own: the colour ramp, the consumer of finished point groups, and the
observer of progress.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from ..models.point_records import IngestionProgress


class GradientEvaluator(ABC):
    """Maps a normalized scalar to a colour along a ramp."""

    @abstractmethod
    def evaluate(self, t: float) -> Tuple[float, float, float]:
        """Return the RGB colour at position t (conceptually in [0, 1])."""
        pass


class GeometryConsumer(ABC):
    """Receives finished point groups in ascending batch order."""

    def begin(self, dataset_name: str, num_batches: int) -> None:
        """Called once before the first batch is emitted."""
        pass

    @abstractmethod
    def consume(self, batch_id: int, positions: np.ndarray, colors: np.ndarray) -> None:
        """
        Take ownership of one batch.

        Args:
            batch_id: Index of the batch in emission order
            positions: Mx3 array of relocated positions
            colors: Mx3 array of RGB colours, index-aligned with positions
        """
        pass

    def finish(self) -> None:
        """Called once after the last batch is emitted."""
        pass


class ProgressReporter(ABC):
    """Observes ingestion progress. Purely informational."""

    @abstractmethod
    def report(self, progress: IngestionProgress) -> None:
        pass
