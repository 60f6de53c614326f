"""
BoundingBox Value Object.

Axis-aligned box of a zone as supplied by the zone store. Values are kept
exactly as stored so that a malformed box is detected by the bounding-box
test (which then rejects the zone) instead of failing when the record is read.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from src.domain.geo.value_objects.coordinate import Coordinate


@dataclass(frozen=True)
class BoundingBox:
    """
    Zone bounding box in degrees.

    Attributes:
        west: Minimum longitude
        east: Maximum longitude
        north: Maximum latitude
        south: Minimum latitude

    Examples:
        >>> box = BoundingBox(west=-1.0, east=1.0, north=1.0, south=-1.0)
        >>> box.is_numeric()
        True
        >>> box.midpoint()
        Coordinate(latitude=0.0, longitude=0.0)
        >>> BoundingBox(west="x", east=1.0, north=1.0, south=-1.0).is_numeric()
        False
    """

    west: Any
    east: Any
    north: Any
    south: Any

    def is_numeric(self) -> bool:
        """True when all four edges are finite numbers."""
        return all(
            _is_finite_number(value)
            for value in (self.west, self.east, self.north, self.south)
        )

    def midpoint(self) -> Optional[Coordinate]:
        """
        Centre of the box, or None when the box is not numeric or the centre
        falls outside valid coordinate ranges.
        """
        if not self.is_numeric():
            return None
        latitude = (self.north + self.south) / 2
        longitude = (self.west + self.east) / 2
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            return None
        return Coordinate(latitude=latitude, longitude=longitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "west": self.west,
            "east": self.east,
            "north": self.north,
            "south": self.south,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["BoundingBox"]:
        """Build from a store mapping; None when the mapping is absent."""
        if not isinstance(data, dict):
            return None
        return cls(
            west=data.get("west"),
            east=data.get("east"),
            north=data.get("north"),
            south=data.get("south"),
        )


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
