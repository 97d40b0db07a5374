"""
Spatial helpers: running bounds and batch planning.
"""

from .bounds import BoundsAccumulator
from .batching import BatchPlanner

__all__ = [
    'BoundsAccumulator',
    'BatchPlanner'
]
