"""
Data models for point group ingestion.
"""

from .point_records import (
    PointRecord,
    Batch,
    PointCloudDataset,
    IngestionPhase,
    IngestionStatus,
    IngestionProgress,
    IngestionResult,
)

__all__ = [
    'PointRecord',
    'Batch',
    'PointCloudDataset',
    'IngestionPhase',
    'IngestionStatus',
    'IngestionProgress',
    'IngestionResult',
]
