"""
Colour processors for parsed point records.
"""

from .gradient import ColourGradient
from .colour_policy import (
    ColourPolicy,
    FlatColouring,
    RGBColouring,
    HeightColouring,
    IntensityColouring,
    build_colour_policy,
)

__all__ = [
    'ColourGradient',
    'ColourPolicy',
    'FlatColouring',
    'RGBColouring',
    'HeightColouring',
    'IntensityColouring',
    'build_colour_policy'
]
