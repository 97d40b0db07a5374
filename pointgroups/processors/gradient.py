#!/usr/bin/env python3
"""
Colour Gradient

Multi-stop colour ramp used by height and intensity colouring, backed by
matplotlib colormaps so named ramps ("viridis", "terrain", ...) and explicit
stop lists share one evaluation path.
"""

from typing import Sequence, Tuple, Union

import numpy as np
import matplotlib
from matplotlib.colors import Colormap, LinearSegmentedColormap, to_rgb

from ..interfaces.collaborators import GradientEvaluator
from ..error_handling import ConfigurationError


# Lookup table size for stop-based ramps; matplotlib quantizes t to N entries
GRADIENT_RESOLUTION = 1024


class ColourGradient(GradientEvaluator):
    """Colour ramp evaluated at t in [0, 1]; t outside is clamped to the end colours."""

    def __init__(self, colormap: Colormap):
        self.colormap = colormap

    @classmethod
    def from_name(cls, name: str) -> 'ColourGradient':
        """Create a gradient from a registered matplotlib colormap."""
        try:
            return cls(matplotlib.colormaps[name])
        except KeyError:
            raise ConfigurationError(f"Unknown gradient colormap '{name}'") from None

    @classmethod
    def from_stops(cls, stops: Sequence[Tuple[float, Union[str, Sequence[float]]]]) -> 'ColourGradient':
        """
        Create a gradient from explicit (position, colour) stops.

        Args:
            stops: Positions in [0, 1] with RGB triples or matplotlib colour names

        Returns:
            ColourGradient interpolating linearly between the stops
        """
        if not stops:
            raise ConfigurationError("Gradient needs at least one colour stop")

        try:
            parsed = sorted((float(position), to_rgb(colour)) for position, colour in stops)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid gradient stop: {e}") from e

        if parsed[0][0] < 0.0 or parsed[-1][0] > 1.0:
            raise ConfigurationError("Gradient stop positions must lie in [0, 1]")

        # Hold the end colours out to the ramp limits
        if parsed[0][0] > 0.0:
            parsed.insert(0, (0.0, parsed[0][1]))
        if parsed[-1][0] < 1.0:
            parsed.append((1.0, parsed[-1][1]))

        colormap = LinearSegmentedColormap.from_list("gradient", parsed, N=GRADIENT_RESOLUTION)
        return cls(colormap)

    @classmethod
    def from_value(cls, value) -> 'ColourGradient':
        """Create a gradient from a colormap name or a list of stops."""
        if isinstance(value, ColourGradient):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        return cls.from_stops(value)

    def evaluate(self, t: float) -> Tuple[float, float, float]:
        r, g, b, _ = self.colormap(float(np.clip(t, 0.0, 1.0)))
        return float(r), float(g), float(b)

