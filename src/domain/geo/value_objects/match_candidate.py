"""
MatchCandidate Value Object

A zone that survived candidate filtering (or was projected by the fallback),
with its containment flag and distance to the query point. Created during
filtering, consumed by scoring, never persisted.
"""

from dataclasses import dataclass

from src.domain.geo.entities.zone import Zone


@dataclass(frozen=True)
class MatchCandidate:
    """
    Attributes:
        zone: The candidate zone
        inside_polygon: True when the query point lies within the zone boundary
        distance_km: Distance from the query point to the zone reference point,
            rounded to 2 decimals
    """

    zone: Zone
    inside_polygon: bool
    distance_km: float
