"""
pointgroups: convert XYZ point files into coloured point groups of bounded size.
"""

from .config import ColourStrategy, IngestionConfig, load_config
from .error_handling import (
    PointCloudIngestError,
    ConfigurationError,
    DegenerateGradientRangeError,
    SourceNotFoundError,
    RecordError,
    MalformedRecordError,
    MissingIntensityFieldError,
    GeometryEmissionError,
    PointGroupStoreError,
)
from .models import Batch, PointCloudDataset, PointRecord, IngestionProgress, IngestionResult, IngestionStatus
from .loaders import RecordParser, XYZLoader
from .processors import ColourGradient, build_colour_policy
from .spatial import BatchPlanner, BoundsAccumulator
from .pipeline import IngestionContext, PointCloudIngestor, PointCloudSceneLoader

__version__ = "0.1.0"

__all__ = [
    'ColourStrategy',
    'IngestionConfig',
    'load_config',
    'PointCloudIngestError',
    'ConfigurationError',
    'DegenerateGradientRangeError',
    'SourceNotFoundError',
    'RecordError',
    'MalformedRecordError',
    'MissingIntensityFieldError',
    'GeometryEmissionError',
    'PointGroupStoreError',
    'Batch',
    'PointCloudDataset',
    'PointRecord',
    'IngestionProgress',
    'IngestionResult',
    'IngestionStatus',
    'RecordParser',
    'XYZLoader',
    'ColourGradient',
    'build_colour_policy',
    'BatchPlanner',
    'BoundsAccumulator',
    'IngestionContext',
    'PointCloudIngestor',
    'PointCloudSceneLoader',
]
