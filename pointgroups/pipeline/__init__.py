"""
Ingestion pipeline orchestration.
"""

from .ingestor import IngestionContext, PointCloudIngestor
from .scene_loader import LoadedPointCloud, PointCloudSceneLoader

__all__ = [
    'IngestionContext',
    'PointCloudIngestor',
    'LoadedPointCloud',
    'PointCloudSceneLoader'
]
