"""
MatchCoordinateCommand - Geo Matching Request

Normalised parameters of a coordinate match request.

Responsibility:
    - Read raw payloads (API body, CLI arguments) with their key aliases
    - Default and clamp radius and limit instead of rejecting them
    - Drop invalid demand-level and category filter entries
    - Expose the validated query Coordinate

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Immutable once created
    - Latitude/longitude are validated when the Coordinate is built, which the
      use case does before touching any store
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.geo.matching_config import (
    DEFAULT_LIMIT,
    DEFAULT_RADIUS_KM,
    MAX_LIMIT,
    MAX_RADIUS_KM,
    DemandLevel,
)
from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.geo.value_objects.match_result import EchoedRequest
from src.domain.shared.exceptions import InvalidCoordinateError

LATITUDE_KEYS = ("latitude", "lat")
LONGITUDE_KEYS = ("longitude", "lng", "lon")
RADIUS_KEYS = ("radiusKm", "radius_km", "radius")
DEMAND_LEVEL_KEYS = ("demandLevels", "demand_levels")


# ============================================================================
# NORMALISATION HELPERS
# ============================================================================


def parse_number(value: Any) -> Optional[float]:
    """
    Read a finite number from a payload value.

    Numbers and numeric strings are accepted. Booleans, NaN, infinities and
    anything unparsable read as None.

    Examples:
        >>> parse_number("12.5")
        12.5
        >>> parse_number(True) is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def normalise_radius(value: Any) -> float:
    """
    Search radius in km: invalid or <= 0 -> 25, otherwise capped at 200.

    Examples:
        >>> normalise_radius(-4)
        25.0
        >>> normalise_radius("500")
        200.0
    """
    radius = parse_number(value)
    if radius is None or radius <= 0:
        return DEFAULT_RADIUS_KM
    return min(radius, MAX_RADIUS_KM)


def normalise_limit(value: Any) -> int:
    """
    Requested service limit, truncated to an integer: invalid or <= 0 -> 15,
    otherwise capped at 100.

    Examples:
        >>> normalise_limit("7.9")
        7
        >>> normalise_limit(0)
        15
    """
    number = parse_number(value)
    if number is None:
        return DEFAULT_LIMIT
    limit = int(number)
    if limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def normalise_demand_levels(value: Any) -> list[DemandLevel]:
    """Keep only recognised demand levels; a non-list reads as no filter."""
    if not isinstance(value, list):
        return []
    allowed = DemandLevel.values()
    return [DemandLevel(entry) for entry in value if isinstance(entry, str) and entry in allowed]


def normalise_categories(value: Any) -> list[str]:
    """Keep only non-blank strings; a non-list reads as no filter."""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str) and entry.strip()]


def first_present(payload: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


# ============================================================================
# COMMAND
# ============================================================================


class MatchCoordinateCommand(BaseModel):
    """
    Command carrying one normalised match request.

    Latitude and longitude are stored as received (possibly None) so that the
    use case reports the violated field when it builds the query Coordinate.

    Attributes:
        latitude: Query latitude (validated by to_coordinate)
        longitude: Query longitude (validated by to_coordinate)
        radius_km: Search radius in (0, 200]
        limit: Requested services budget in [1, 100]
        demand_levels: Demand filter, empty means all levels
        categories: Service category filter, empty means all categories

    Examples:
        >>> command = MatchCoordinateCommand.from_payload(
        ...     {"lat": "51.5", "lng": -0.12, "radius": 0, "demandLevels": ["high", "x"]}
        ... )
        >>> command.radius_km, command.limit, command.demand_levels
        (25.0, 15, (<DemandLevel.HIGH: 'high'>,))
    """

    model_config = ConfigDict(frozen=True)

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: float = Field(default=DEFAULT_RADIUS_KM, gt=0.0, le=MAX_RADIUS_KM)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    demand_levels: tuple[DemandLevel, ...] = ()
    categories: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "MatchCoordinateCommand":
        """
        Build a command from a raw request payload.

        Accepted keys:
            latitude | lat, longitude | lng | lon, radiusKm | radius_km | radius,
            limit, demandLevels | demand_levels, categories

        Raises:
            InvalidCoordinateError: If latitude or longitude is missing, not a
                finite number, or out of range (latitude is checked first)
        """
        payload = payload or {}

        command = cls(
            latitude=parse_number(first_present(payload, LATITUDE_KEYS)),
            longitude=parse_number(first_present(payload, LONGITUDE_KEYS)),
            radius_km=normalise_radius(first_present(payload, RADIUS_KEYS)),
            limit=normalise_limit(payload.get("limit")),
            demand_levels=tuple(
                normalise_demand_levels(first_present(payload, DEMAND_LEVEL_KEYS))
            ),
            categories=tuple(normalise_categories(payload.get("categories"))),
        )
        command.to_coordinate()
        return command

    def to_coordinate(self) -> Coordinate:
        """
        Validated query point.

        Raises:
            InvalidCoordinateError: If latitude or longitude is unusable
        """
        if self.latitude is None:
            raise InvalidCoordinateError("A valid latitude is required", field="latitude")
        if self.longitude is None:
            raise InvalidCoordinateError("A valid longitude is required", field="longitude")
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    def to_echo(self) -> EchoedRequest:
        """Normalised parameters as echoed in the response."""
        return EchoedRequest(
            latitude=self.latitude,
            longitude=self.longitude,
            radius_km=self.radius_km,
            limit=self.limit,
            demand_levels=[level.value for level in self.demand_levels],
            categories=list(self.categories),
        )
