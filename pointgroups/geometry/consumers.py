#!/usr/bin/env python3
"""
Geometry Consumers

Receivers for the point groups emitted by the ingestor: an in-memory
collector and a PyVista consumer that turns every batch into renderable
vertex geometry, optionally persisted through a PointGroupStore.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
import pyvista as pv

from ..interfaces.collaborators import GeometryConsumer
from .store import PointGroupStore


logger = logging.getLogger(__name__)


class CollectingGeometryConsumer(GeometryConsumer):
    """Keeps every emitted batch in memory."""

    def __init__(self):
        self.dataset_name: Optional[str] = None
        self.expected_batches = 0
        self.batches: List[Tuple[int, np.ndarray, np.ndarray]] = []
        self.finished = False

    def begin(self, dataset_name: str, num_batches: int) -> None:
        self.dataset_name = dataset_name
        self.expected_batches = num_batches

    def consume(self, batch_id: int, positions: np.ndarray, colors: np.ndarray) -> None:
        self.batches.append((batch_id, positions, colors))

    def finish(self) -> None:
        self.finished = True

    @property
    def positions(self) -> np.ndarray:
        """All emitted positions concatenated in emission order."""
        if not self.batches:
            return np.empty((0, 3))
        return np.concatenate([positions for _, positions, _ in self.batches])

    @property
    def colors(self) -> np.ndarray:
        """All emitted colours concatenated in emission order."""
        if not self.batches:
            return np.empty((0, 3), dtype=np.float32)
        return np.concatenate([colors for _, _, colors in self.batches])


def to_polydata(positions: np.ndarray, colors: np.ndarray) -> pv.PolyData:
    """
    Convert one batch to PyVista PolyData with one vertex cell per point.

    Colours are stored twice: as float RGB in [0, 1] ("colors") and as 8-bit
    RGB ("RGB") for direct rendering.
    """
    if len(positions) != len(colors):
        raise ValueError("Colors array must match positions array length")

    cloud = pv.PolyData(np.asarray(positions, dtype=np.float64))
    colors = np.clip(np.asarray(colors, dtype=np.float32), 0.0, 1.0)
    cloud["colors"] = colors
    cloud["RGB"] = np.round(colors * 255.0).astype(np.uint8)
    return cloud


class PolyDataGeometryConsumer(GeometryConsumer):
    """Builds one PolyData point group per batch, named <dataset><index>."""

    def __init__(self, store: Optional[PointGroupStore] = None):
        self.store = store
        self.dataset_name: Optional[str] = None
        self.expected_batches = 0
        self.groups: List[pv.PolyData] = []
        self.names: List[str] = []
        self._num_points = 0

    def begin(self, dataset_name: str, num_batches: int) -> None:
        self.dataset_name = dataset_name
        self.expected_batches = num_batches
        self.groups = []
        self.names = []
        self._num_points = 0

    def consume(self, batch_id: int, positions: np.ndarray, colors: np.ndarray) -> None:
        mesh = to_polydata(positions, colors)
        name = f"{self.dataset_name}{batch_id}"

        if self.store is not None:
            self.store.save_group(self.dataset_name, batch_id, mesh)

        self.groups.append(mesh)
        self.names.append(name)
        self._num_points += mesh.n_points
        logger.debug(f"Built point group {name} with {mesh.n_points:,} points")

    def finish(self) -> None:
        if self.store is not None:
            self.store.write_metadata(self.dataset_name, {
                'dataset': self.dataset_name,
                'num_batches': len(self.groups),
                'num_points': self._num_points,
                'groups': self.names,
            })
