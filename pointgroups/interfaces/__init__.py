"""
Interfaces for ingestion collaborators.
"""

from .collaborators import GradientEvaluator, GeometryConsumer, ProgressReporter

__all__ = [
    'GradientEvaluator',
    'GeometryConsumer',
    'ProgressReporter'
]
