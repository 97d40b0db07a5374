#!/usr/bin/env python3
"""
Colour Policies

One policy per colour strategy. Each policy is built once from the
configuration and then asked for the colour of every parsed record, so the
strategy is never re-checked per point.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..config import ColourStrategy, IngestionConfig
from ..interfaces.collaborators import GradientEvaluator
from ..models.point_records import PointRecord
from ..error_handling import DegenerateGradientRangeError, MissingIntensityFieldError
from .gradient import ColourGradient


Colour = Tuple[float, float, float]


class ColourPolicy(ABC):
    """Derives a display colour for a parsed record."""

    strategy: ColourStrategy
    # Optional record fields the parser must decode for this policy
    reads_rgb = False
    reads_intensity = False

    @abstractmethod
    def colour_for(self, record: PointRecord) -> Colour:
        pass


class FlatColouring(ColourPolicy):
    """Every point gets the same colour."""

    strategy = ColourStrategy.DEFAULT

    def __init__(self, colour: Colour):
        self.colour = tuple(colour)

    def colour_for(self, record: PointRecord) -> Colour:
        return self.colour


class RGBColouring(ColourPolicy):
    """Embedded 0-255 RGB normalized to [0, 1], falling back to a flat colour."""

    strategy = ColourStrategy.RGB
    reads_rgb = True

    def __init__(self, default_colour: Colour):
        self.default_colour = tuple(default_colour)

    def colour_for(self, record: PointRecord) -> Colour:
        if record.rgb is None:
            return self.default_colour
        r, g, b = record.rgb
        return r / 255.0, g / 255.0, b / 255.0


class RangeGradientColouring(ColourPolicy):
    """Maps a scalar taken from the record through [minimum, maximum] onto a gradient."""

    label = "Range"

    def __init__(self, minimum: float, maximum: float, gradient: GradientEvaluator):
        if maximum == minimum:
            raise DegenerateGradientRangeError(self.label, minimum, maximum)
        self.minimum = minimum
        self.maximum = maximum
        self.span = maximum - minimum
        self.gradient = gradient

    def normalize(self, value: float) -> float:
        return (value - self.minimum) / self.span

    def colour_for(self, record: PointRecord) -> Colour:
        return self.gradient.evaluate(self.normalize(self.value_of(record)))

    @abstractmethod
    def value_of(self, record: PointRecord) -> float:
        pass


class HeightColouring(RangeGradientColouring):
    """
    Colours by the vertical coordinate.

    The vertical coordinate is the file's second field, or its third when the
    Y and Z axes are swapped, read before scaling. min_height and max_height
    are therefore in file units, whatever the configured scale.
    """

    strategy = ColourStrategy.HEIGHT
    label = "Height"

    def __init__(self, min_height: float, max_height: float,
                 gradient: GradientEvaluator, invert_yz: bool = False):
        super().__init__(min_height, max_height, gradient)
        self.axis = 2 if invert_yz else 1

    def value_of(self, record: PointRecord) -> float:
        return record.source_position[self.axis]


class IntensityColouring(RangeGradientColouring):
    """Colours by the intensity field; records without one are rejected."""

    strategy = ColourStrategy.INTENSITY
    reads_intensity = True
    label = "Intensity"

    def value_of(self, record: PointRecord) -> float:
        if record.intensity is None:
            raise MissingIntensityFieldError("intensity colouring needs a 7th field")
        return record.intensity


def build_colour_policy(config: IngestionConfig,
                        gradient: Optional[GradientEvaluator] = None) -> ColourPolicy:
    """
    Create the colour policy for the configured strategy.

    Args:
        config: Ingestion configuration
        gradient: Gradient evaluator; built from config.gradient when omitted

    Returns:
        ColourPolicy instance
    """
    strategy = config.colour_points_by

    if strategy is ColourStrategy.DEFAULT:
        return FlatColouring(config.default_colour)
    if strategy is ColourStrategy.RGB:
        return RGBColouring(config.default_colour)

    gradient = gradient or ColourGradient.from_value(config.gradient)
    if strategy is ColourStrategy.HEIGHT:
        return HeightColouring(config.min_height, config.max_height, gradient, config.invert_yz)
    return IntensityColouring(config.min_intensity, config.max_intensity, gradient)
