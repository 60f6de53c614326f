"""
Coordinate Value Object.

A WGS84 latitude/longitude pair. Created per request (query point) or read from
a zone store (centroid). Immutable; equality is by value.
"""

import math
from dataclasses import dataclass
from typing import Final

from src.domain.shared.exceptions import InvalidCoordinateError

MIN_LATITUDE: Final[float] = -90.0
MAX_LATITUDE: Final[float] = 90.0
MIN_LONGITUDE: Final[float] = -180.0
MAX_LONGITUDE: Final[float] = 180.0


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable geographic coordinate.

    Attributes:
        latitude: Degrees north, in [-90, 90]
        longitude: Degrees east, in [-180, 180]

    Examples:
        >>> point = Coordinate(latitude=51.5074, longitude=-0.1278)
        >>> point.as_lon_lat()
        (-0.1278, 51.5074)
        >>> Coordinate(latitude=95, longitude=0)  # raises InvalidCoordinateError(field="latitude")
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """
        Validate ranges after initialization.

        Raises:
            InvalidCoordinateError: If either axis is non-finite or out of range
        """
        if not _is_finite_number(self.latitude) or not (
            MIN_LATITUDE <= self.latitude <= MAX_LATITUDE
        ):
            raise InvalidCoordinateError(
                "A valid latitude is required",
                field="latitude",
                original_value=self.latitude,
            )
        if not _is_finite_number(self.longitude) or not (
            MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE
        ):
            raise InvalidCoordinateError(
                "A valid longitude is required",
                field="longitude",
                original_value=self.longitude,
            )

    def as_lon_lat(self) -> tuple[float, float]:
        """GeoJSON axis order (longitude, latitude)."""
        return (self.longitude, self.latitude)

    def to_geojson(self) -> dict:
        """Render as a GeoJSON Point geometry."""
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
