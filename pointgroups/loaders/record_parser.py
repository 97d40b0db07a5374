#!/usr/bin/env python3
"""
Record Parser

Turns one line of an XYZ point file, ``x,y,z[,r,g,b[,intensity]]``, into a
PointRecord with the configured axis swap and scale applied.
"""

import math
from typing import List, Optional, Tuple

from ..config import FileConfig
from ..models.point_records import PointRecord
from ..error_handling import MalformedRecordError


RGB_FIELD_COUNT = 6
INTENSITY_FIELD_COUNT = 7


class RecordParser:
    """Parser for single point lines."""

    def __init__(self, scale: float = 1.0, invert_yz: bool = False,
                 delimiter: str = FileConfig.DEFAULT_DELIMITER,
                 read_rgb: bool = True, read_intensity: bool = True):
        """
        Args:
            scale: Factor applied to all three coordinates
            invert_yz: Swap the Y and Z axes
            delimiter: Field separator
            read_rgb: Decode fields 4-6 as 0-255 colour channels
            read_intensity: Decode field 7 as an intensity scalar
        """
        self.scale = scale
        self.invert_yz = invert_yz
        self.delimiter = delimiter
        self.read_rgb = read_rgb
        self.read_intensity = read_intensity

    def parse(self, line: str) -> PointRecord:
        """
        Parse one line into a point record.

        Args:
            line: Text line without its trailing newline

        Returns:
            PointRecord with transformed and source positions

        Raises:
            MalformedRecordError: If a position field is missing or non-numeric,
                or an enabled colour/intensity field cannot be decoded
        """
        fields = line.strip().split(self.delimiter)

        source_position = self._extract_position(fields, line)
        x, y, z = source_position
        if self.invert_yz:
            y, z = z, y
        position = (x * self.scale, y * self.scale, z * self.scale)

        return PointRecord(
            position=position,
            source_position=source_position,
            rgb=self._extract_rgb(fields, line) if self.read_rgb else None,
            intensity=self._extract_intensity(fields, line) if self.read_intensity else None,
        )

    def _extract_position(self, fields: List[str], line: str) -> Tuple[float, float, float]:
        """Extract XYZ coordinates in file order."""
        if len(fields) < 3:
            raise MalformedRecordError(
                f"expected at least 3 position fields, got {len(fields)}", line=line
            )

        coordinates = []
        for axis, value in zip("xyz", fields[:3]):
            number = _to_float(value)
            if number is None or not math.isfinite(number):
                raise MalformedRecordError(f"{axis} coordinate {value!r} is not a finite number", line=line)
            coordinates.append(number)

        return coordinates[0], coordinates[1], coordinates[2]

    def _extract_rgb(self, fields: List[str], line: str) -> Optional[Tuple[int, int, int]]:
        """Extract 0-255 RGB components if the line carries them."""
        if len(fields) < RGB_FIELD_COUNT:
            return None

        channels = []
        for name, value in zip(("red", "green", "blue"), fields[3:6]):
            try:
                channel = int(value)
            except ValueError:
                raise MalformedRecordError(f"{name} value {value!r} is not an integer", line=line) from None
            if not 0 <= channel <= 255:
                raise MalformedRecordError(f"{name} value {channel} is outside 0-255", line=line)
            channels.append(channel)

        return channels[0], channels[1], channels[2]

    def _extract_intensity(self, fields: List[str], line: str) -> Optional[float]:
        """Extract the intensity scalar if the line carries a 7th field."""
        if len(fields) < INTENSITY_FIELD_COUNT:
            return None

        intensity = _to_float(fields[6])
        if intensity is None or not math.isfinite(intensity):
            raise MalformedRecordError(f"intensity {fields[6]!r} is not a finite number", line=line)
        return intensity


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None
