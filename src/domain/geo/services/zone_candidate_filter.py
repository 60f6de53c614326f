"""
ZoneCandidateFilter - Domain Service

Linear scan over all zones with cheap bounding-box elimination before the
expensive polygon containment test.

Business Rules:
    - Bounding box is buffered by the search radius (1 degree ~ 111 km)
    - Zones without a Polygon/MultiPolygon boundary are never candidates
    - Non-empty demand filter excludes zones of other levels (absent = medium)
    - Candidate order is scan order; ranking happens later

Architecture Notes:
    - Pure domain service over a supplied zone list (no store access)
    - Stateless; a new candidate list is built per call
"""

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from src.domain.geo.entities.zone import Zone
from src.domain.geo.matching_config import DISTANCE_DECIMALS, DemandLevel
from src.domain.geo.services.geometry_kernel import (
    GeometryKernelProtocol,
    bounding_box_contains,
    resolve_geometry,
    zone_reference_point,
)
from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.geo.value_objects.match_candidate import MatchCandidate

logger = logging.getLogger(__name__)


@dataclass
class ZoneCandidateFilter:
    """
    Classifies zones near a query point as candidates.

    Attributes:
        geometry: Geometry kernel for containment and distance

    Examples:
        >>> candidate_filter = ZoneCandidateFilter(geometry=ShapelyGeometryKernel())
        >>> candidates = candidate_filter.filter_candidates(
        ...     point=Coordinate(latitude=51.5, longitude=-0.12),
        ...     radius_km=25.0,
        ...     demand_levels={DemandLevel.HIGH},
        ...     zones=zones,
        ... )
    """

    geometry: GeometryKernelProtocol

    def filter_candidates(
        self,
        point: Coordinate,
        radius_km: float,
        demand_levels: Collection[DemandLevel],
        zones: Iterable[Zone],
    ) -> list[MatchCandidate]:
        """
        Scan zones and emit a MatchCandidate for every survivor.

        Algorithm:
            1. Reject if point is outside the radius-buffered bounding box
            2. Reject if the boundary yields no valid geometry
            3. Reject if demand_levels is non-empty and excludes the zone level
            4. Compute polygon containment and distance to the reference point

        Args:
            point: Query coordinate
            radius_km: Search radius (already clamped)
            demand_levels: Allowed demand levels; empty means all
            zones: Every configured zone

        Returns:
            Candidates in scan order (may be empty)
        """
        candidates: list[MatchCandidate] = []

        for zone in zones:
            if not bounding_box_contains(point, zone.bounding_box, radius_km):
                continue

            geometry = resolve_geometry(zone.boundary)
            if geometry is None:
                logger.debug(f"Zone {zone.id} skipped: no usable boundary geometry")
                continue

            if demand_levels and zone.demand_level not in demand_levels:
                continue

            reference = zone_reference_point(zone)
            if reference is None:
                logger.debug(f"Zone {zone.id} skipped: no reference point")
                continue

            candidates.append(
                MatchCandidate(
                    zone=zone,
                    inside_polygon=self.geometry.point_in_polygon(point, geometry),
                    distance_km=round(
                        self.geometry.distance_km(point, reference), DISTANCE_DECIMALS
                    ),
                )
            )

        logger.debug(
            f"Candidate filter: {len(candidates)} candidates within {radius_km}km "
            f"(demand filter: {sorted(level.value for level in demand_levels) or 'none'})"
        )
        return candidates
