#!/usr/bin/env python3
"""
Batch Planner

Splits [0, num_points) into contiguous point groups no larger than the
vertex ceiling of the rendering surface.
"""

from typing import List

from ..models.point_records import Batch


class BatchPlanner:
    """Pure planning of batch boundaries."""

    @staticmethod
    def count(num_points: int, capacity: int) -> int:
        """Number of batches needed: ceil(num_points / capacity)."""
        BatchPlanner._check(num_points, capacity)
        return -(-num_points // capacity)

    @staticmethod
    def plan(num_points: int, capacity: int) -> List[Batch]:
        """
        Plan the batches covering [0, num_points).

        All batches hold exactly ``capacity`` points except the last, which
        holds the remainder. No batches are returned for zero points.

        Args:
            num_points: Total number of points
            capacity: Maximum points per batch

        Returns:
            Batches in ascending index order
        """
        num_batches = BatchPlanner.count(num_points, capacity)
        batches = []
        for index in range(num_batches):
            start = index * capacity
            batches.append(Batch(index=index, start=start, count=min(capacity, num_points - start)))
        return batches

    @staticmethod
    def _check(num_points: int, capacity: int) -> None:
        if num_points < 0:
            raise ValueError(f"Number of points must be non-negative, got {num_points}")
        if capacity < 1:
            raise ValueError(f"Batch capacity must be at least 1, got {capacity}")
