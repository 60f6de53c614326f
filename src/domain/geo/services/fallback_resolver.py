"""
FallbackResolver - Domain Service

Guarantees a result when no zone survives candidate filtering: the zone whose
reference point is globally closest to the query point, ignoring demand
filters and bounding boxes.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from src.domain.geo.entities.zone import Zone
from src.domain.geo.matching_config import DISTANCE_DECIMALS
from src.domain.geo.services.geometry_kernel import (
    GeometryKernelProtocol,
    zone_reference_point,
)
from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.geo.value_objects.match_candidate import MatchCandidate

logger = logging.getLogger(__name__)


@dataclass
class FallbackResolver:
    """
    Selects the single closest zone as a projected (non-containing) match.

    Attributes:
        geometry: Geometry kernel for distance computation
    """

    geometry: GeometryKernelProtocol

    def resolve(self, point: Coordinate, zones: Iterable[Zone]) -> Optional[MatchCandidate]:
        """
        Return the closest zone with inside_polygon=False.

        Ties keep the zone seen first. Zones without a centroid and without a
        numeric bounding box cannot be measured and are skipped.

        Args:
            point: Query coordinate
            zones: Every configured zone

        Returns:
            MatchCandidate for the closest zone, or None when there is no zone
            to project onto (the no-zones-configured state)
        """
        closest: Optional[MatchCandidate] = None

        for zone in zones:
            reference = zone_reference_point(zone)
            if reference is None:
                logger.warning(f"Zone {zone.id} has neither centroid nor bounding box")
                continue

            distance_km = round(
                self.geometry.distance_km(point, reference), DISTANCE_DECIMALS
            )
            if closest is None or distance_km < closest.distance_km:
                closest = MatchCandidate(
                    zone=zone, inside_polygon=False, distance_km=distance_km
                )

        if closest is not None:
            logger.debug(
                f"Fallback projected zone {closest.zone.id} at {closest.distance_km}km"
            )
        return closest
