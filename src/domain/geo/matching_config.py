"""
Geo Matching Configuration

Constants for zone ranking, request normalisation and geometry approximations.
Defines the business rules of the zone-matching engine.

Business Context:
    Demand level dominates the ranking, matched services are a capped secondary
    signal, distance is a capped penalty and true polygon containment earns a
    fixed bonus over nearest-only matches.

Design Principles:
    - Configuration as code (not database, not environment)
    - Type-safe constants
    - Fixed values: they are not exposed as runtime settings
"""

from enum import Enum
from typing import Final


class DemandLevel(str, Enum):
    """
    Coarse demand classification of a service zone.

    Used as the dominant ranking signal. A zone without a recognised level is
    treated as MEDIUM.

    Usage:
        >>> DemandLevel.parse("high")
        <DemandLevel.HIGH: 'high'>
        >>> DemandLevel.parse(None)
        <DemandLevel.MEDIUM: 'medium'>
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: object) -> "DemandLevel":
        """Read a stored demand level, defaulting to MEDIUM."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return DEFAULT_DEMAND_LEVEL

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(level.value for level in cls)


DEFAULT_DEMAND_LEVEL: Final[DemandLevel] = DemandLevel.MEDIUM


# ============================================================================
# SCORING WEIGHTS
# ============================================================================

DEMAND_WEIGHTS: Final[dict[DemandLevel, int]] = {
    DemandLevel.HIGH: 3,
    DemandLevel.MEDIUM: 2,
    DemandLevel.LOW: 1,
}

DEMAND_MULTIPLIER: Final[float] = 12.0

SERVICE_COUNT_CAP: Final[int] = 8
SERVICE_POINTS: Final[float] = 3.0

DISTANCE_PENALTY_CAP_KM: Final[float] = 40.0
DISTANCE_PENALTY_PER_KM: Final[float] = 0.75

INCLUSION_BONUS: Final[float] = 10.0

# Hard UI-facing cap, independent of the requested limit
MAX_MATCHED_ZONES: Final[int] = 6

# Every matched zone receives at least this many services
MIN_SERVICES_PER_ZONE: Final[int] = 3


# ============================================================================
# REQUEST DEFAULTS AND CLAMPS
# ============================================================================

DEFAULT_RADIUS_KM: Final[float] = 25.0
MAX_RADIUS_KM: Final[float] = 200.0

DEFAULT_LIMIT: Final[int] = 15
MAX_LIMIT: Final[int] = 100


# ============================================================================
# GEOMETRY
# ============================================================================

# Fixed approximation used for bounding-box buffers and preview windows
KM_PER_DEGREE: Final[float] = 111.0

# Mean Earth radius used by the haversine distance
EARTH_RADIUS_KM: Final[float] = 6371.0088

DISTANCE_DECIMALS: Final[int] = 2
SCORE_DECIMALS: Final[int] = 2


# ============================================================================
# REASONS
# ============================================================================

INSIDE_REASON: Final[str] = "Coordinate falls within zone boundary"
NEAREST_REASON_TEMPLATE: Final[str] = "Closest zone within {distance_km:.2f}km"


class FallbackReason(str, Enum):
    """Top-level fallback descriptor reasons."""

    CLOSEST_ZONE_PROJECTED = "closest-zone-projected"
    NO_ZONES_CONFIGURED = "no-zones-configured"


def demand_weight(level: DemandLevel | str | None) -> int:
    """
    Weight of a demand level (high=3, medium=2, low=1).

    Examples:
        >>> demand_weight("high")
        3
        >>> demand_weight(None)
        2
    """
    return DEMAND_WEIGHTS[DemandLevel.parse(level)]


# ============================================================================
# MODULE-LEVEL VALIDATION
# ============================================================================

assert MAX_MATCHED_ZONES > 0, f"MAX_MATCHED_ZONES must be positive, got {MAX_MATCHED_ZONES}"

assert (
    0.0 < DEFAULT_RADIUS_KM <= MAX_RADIUS_KM
), f"Default radius must be in (0, {MAX_RADIUS_KM}], got {DEFAULT_RADIUS_KM}"

assert 0 < DEFAULT_LIMIT <= MAX_LIMIT, f"Default limit must be in (0, {MAX_LIMIT}], got {DEFAULT_LIMIT}"
