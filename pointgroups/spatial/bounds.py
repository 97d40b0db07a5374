#!/usr/bin/env python3
"""
Bounds Accumulator

Running component-wise minimum corner of the positions seen so far, used to
relocate a point cloud so its minimum corner sits at the origin.
"""

from typing import Optional, Sequence, Tuple

import numpy as np


class BoundsAccumulator:
    """Tracks the minimum corner of a stream of positions."""

    def __init__(self):
        self._minimum = np.zeros(3, dtype=np.float64)
        self.has_points = False

    def update(self, position: Sequence[float]) -> None:
        """Fold one position into the running minimum."""
        if not self.has_points:
            self._minimum[:] = position
            self.has_points = True
        else:
            np.minimum(self._minimum, position, out=self._minimum)

    def current(self) -> Optional[Tuple[float, float, float]]:
        """Minimum corner so far, or None before the first position."""
        if not self.has_points:
            return None
        x, y, z = self._minimum
        return float(x), float(y), float(z)
