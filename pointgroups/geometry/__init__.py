"""
Geometry consumers and stored point groups.
"""

from .consumers import CollectingGeometryConsumer, PolyDataGeometryConsumer, to_polydata
from .store import PointGroupStore

__all__ = [
    'CollectingGeometryConsumer',
    'PolyDataGeometryConsumer',
    'PointGroupStore',
    'to_polydata'
]
