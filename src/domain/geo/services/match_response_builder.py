"""
MatchResponseBuilder - Domain Service

Assembles the final MatchResponse from ranked candidates.

Business Rules:
    - reason: "Coordinate falls within zone boundary" when inside, else
      "Closest zone within {distance:.2f}km"
    - total_services: sum of services across returned matches
    - fallback: closest-zone-projected (distance and id of the top match) when
      no returned match is a polygon containment, otherwise None
    - empty zone store: no matches, fallback no-zones-configured
"""

from collections.abc import Sequence
from datetime import datetime

from src.domain.geo.entities.service import Service
from src.domain.geo.matching_config import (
    INSIDE_REASON,
    NEAREST_REASON_TEMPLATE,
    FallbackReason,
)
from src.domain.geo.services.scoring_engine import ScoredCandidate
from src.domain.geo.value_objects.match_candidate import MatchCandidate
from src.domain.geo.value_objects.match_result import (
    EchoedRequest,
    FallbackDescriptor,
    MatchResponse,
    MatchResult,
    ServiceSummary,
    ZoneSummary,
)


def match_reason(candidate: MatchCandidate) -> str:
    """Human-readable explanation of why a zone matched."""
    if candidate.inside_polygon:
        return INSIDE_REASON
    return NEAREST_REASON_TEMPLATE.format(distance_km=candidate.distance_km)


class MatchResponseBuilder:
    """Builds MatchResponse objects. Stateless."""

    def build(
        self,
        request: EchoedRequest,
        ranked: Sequence[ScoredCandidate[list[Service]]],
        audited_at: datetime,
    ) -> MatchResponse:
        """
        Build a response from ranked candidates.

        Args:
            request: Normalised request parameters to echo
            ranked: Scored candidates, best first, services attached as payload
            audited_at: Time the computation ran

        Returns:
            MatchResponse with matches, fallback descriptor and totals
        """
        matches = [
            MatchResult(
                zone=ZoneSummary.from_zone(entry.candidate.zone),
                inside_polygon=entry.candidate.inside_polygon,
                distance_km=entry.candidate.distance_km,
                score=entry.score.total,
                services=[ServiceSummary.from_service(service) for service in entry.payload],
                reason=match_reason(entry.candidate),
            )
            for entry in ranked
        ]

        fallback = None
        if not any(match.inside_polygon for match in matches):
            top = matches[0] if matches else None
            fallback = FallbackDescriptor(
                reason=FallbackReason.CLOSEST_ZONE_PROJECTED,
                distance_km=top.distance_km if top else None,
                zone_id=top.zone.id if top else None,
            )

        return MatchResponse(
            request=request,
            matches=matches,
            fallback=fallback,
            total_services=sum(len(match.services) for match in matches),
            audited_at=audited_at,
        )

    def no_zones_configured(
        self, request: EchoedRequest, audited_at: datetime
    ) -> MatchResponse:
        """Empty but well-formed response for an empty zone store."""
        return MatchResponse(
            request=request,
            matches=[],
            fallback=FallbackDescriptor(reason=FallbackReason.NO_ZONES_CONFIGURED),
            total_services=0,
            audited_at=audited_at,
        )
