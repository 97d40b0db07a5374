"""
Loaders for XYZ point files.
"""

from .record_parser import RecordParser
from .xyz_loader import BaseFileLoader, XYZLoader, XYZSource

__all__ = [
    'RecordParser',
    'BaseFileLoader',
    'XYZLoader',
    'XYZSource'
]
