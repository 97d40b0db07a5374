#!/usr/bin/env python3
"""
Point Cloud Scene Loader

Decides whether a dataset must be ingested or can be served from stored
point groups, and runs the ingestor when needed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import pyvista as pv

from ..config import IngestionConfig
from ..geometry.consumers import PolyDataGeometryConsumer
from ..geometry.store import PointGroupStore
from ..interfaces.collaborators import GradientEvaluator, ProgressReporter
from ..models.point_records import IngestionResult
from .ingestor import PointCloudIngestor


logger = logging.getLogger(__name__)


@dataclass
class LoadedPointCloud:
    """Point groups ready for display."""

    name: str
    groups: List[pv.PolyData]
    from_store: bool
    result: Optional[IngestionResult] = None

    @property
    def num_points(self) -> int:
        return sum(group.n_points for group in self.groups)


class PointCloudSceneLoader:
    """Loads stored point groups, or ingests the source when they are missing."""

    def __init__(self, config: IngestionConfig, store: PointGroupStore,
                 gradient: Optional[GradientEvaluator] = None,
                 progress: Optional[ProgressReporter] = None):
        config.validate()
        self.config = config
        self.store = store
        self.gradient = gradient
        self.progress = progress

    def load(self, source_path: Union[str, Path]) -> LoadedPointCloud:
        """
        Load the point cloud for a source file.

        Args:
            source_path: Path to the XYZ file

        Returns:
            LoadedPointCloud with one PolyData per point group

        Raises:
            PointCloudIngestError: If ingestion or loading stored groups fails
        """
        name = Path(source_path).stem

        if self.store.has(name) and not self.config.force_reload:
            return LoadedPointCloud(name=name, groups=self.store.load(name), from_store=True)

        if self.config.force_reload:
            logger.info(f"Reloading point cloud {name}")
        # Leftovers of an interrupted run are not reused
        self.store.clear(name)

        consumer = PolyDataGeometryConsumer(store=self.store)
        ingestor = PointCloudIngestor(self.config, consumer,
                                      gradient=self.gradient, progress=self.progress)
        result = ingestor.ingest(source_path)

        return LoadedPointCloud(name=name, groups=consumer.groups, from_store=False, result=result)
