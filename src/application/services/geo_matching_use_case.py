"""
GeoMatchingUseCase - Application Service

Orchestrates the zone-matching pipeline for one coordinate.

Responsibility:
    - Validate the query point before any store access
    - Load zones, select candidates (or the fallback zone)
    - Load services for the owning companies, allocate them per zone
    - Score, rank and assemble the MatchResponse

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Depends on store Protocols (Dependency Inversion)
    - Exactly two store round-trips per request: zones, then services
    - Store failures (UpstreamStoreError) are propagated unchanged; no partial
      response is ever assembled from a failed fetch
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from src.application.commands.match_coordinate import MatchCoordinateCommand
from src.domain.geo.entities.service import Service
from src.domain.geo.repositories.service_store import ServiceStoreProtocol
from src.domain.geo.repositories.zone_store import ZoneStoreProtocol
from src.domain.geo.services.fallback_resolver import FallbackResolver
from src.domain.geo.services.geometry_kernel import GeometryKernelProtocol
from src.domain.geo.services.match_response_builder import MatchResponseBuilder
from src.domain.geo.services.scoring_engine import ScoredCandidate, ScoringEngine
from src.domain.geo.services.service_aggregator import ServiceAggregator
from src.domain.geo.services.zone_candidate_filter import ZoneCandidateFilter
from src.domain.geo.value_objects.match_result import MatchResponse

logger = logging.getLogger(__name__)


class GeoMatchingUseCase:
    """
    Use case: match a coordinate against the configured service zones.

    Process Flow:
        1. Build the query Coordinate (InvalidCoordinateError on bad input)
        2. list_zones(); empty store -> no-zones-configured response
        3. Candidate filter (bbox + radius buffer, geometry, demand filter)
        4. No candidates -> single closest zone via FallbackResolver
        5. One service query for all owning companies (category filter)
        6. Per-zone allocation, scoring, stable ranking, top 6
        7. Response assembly with reasons and fallback descriptor

    Dependencies:
        - zone_store: ZoneStoreProtocol
        - service_store: ServiceStoreProtocol
        - geometry: GeometryKernelProtocol (ShapelyGeometryKernel in production)

    Examples:
        >>> use_case = GeoMatchingUseCase(
        ...     zone_store=InMemoryZoneStore.from_records(zones),
        ...     service_store=InMemoryServiceStore.from_records(services),
        ...     geometry=ShapelyGeometryKernel(),
        ... )
        >>> response = await use_case.execute(
        ...     MatchCoordinateCommand.from_payload({"lat": 51.5, "lng": -0.12})
        ... )
    """

    def __init__(
        self,
        zone_store: ZoneStoreProtocol,
        service_store: ServiceStoreProtocol,
        geometry: GeometryKernelProtocol,
        scoring_engine: Optional[ScoringEngine] = None,
        response_builder: Optional[MatchResponseBuilder] = None,
    ) -> None:
        self.zone_store = zone_store
        self.candidate_filter = ZoneCandidateFilter(geometry=geometry)
        self.fallback_resolver = FallbackResolver(geometry=geometry)
        self.service_aggregator = ServiceAggregator(service_store=service_store)
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.response_builder = response_builder or MatchResponseBuilder()

    async def execute(self, command: MatchCoordinateCommand) -> MatchResponse:
        """
        Run the matching pipeline.

        Args:
            command: Normalised match request

        Returns:
            MatchResponse (never empty while at least one measurable zone exists)

        Raises:
            InvalidCoordinateError: Bad latitude/longitude (before any store call)
            UpstreamStoreError: Zone or service store failure (propagated)
        """
        point = command.to_coordinate()
        echoed = command.to_echo()
        audited_at = datetime.now(timezone.utc)

        logger.info(
            f"Geo match requested at ({point.latitude}, {point.longitude}), "
            f"radius={command.radius_km}km, limit={command.limit}"
        )

        zones = await self.zone_store.list_zones()
        if not zones:
            logger.info("No zones configured, returning empty response")
            return self.response_builder.no_zones_configured(echoed, audited_at)

        candidates = self.candidate_filter.filter_candidates(
            point=point,
            radius_km=command.radius_km,
            demand_levels=set(command.demand_levels),
            zones=zones,
        )

        if not candidates:
            fallback = self.fallback_resolver.resolve(point, zones)
            if fallback is None:
                logger.warning(
                    f"None of {len(zones)} zones can be measured, returning empty response"
                )
                return self.response_builder.no_zones_configured(echoed, audited_at)
            candidates = [fallback]

        services_by_company = await self.service_aggregator.aggregate(
            candidates, command.categories
        )
        allocations = self.service_aggregator.allocate(
            candidates, services_by_company, command.limit
        )

        scored: list[ScoredCandidate[list[Service]]] = [
            ScoredCandidate(
                candidate=candidate,
                score=self.scoring_engine.score(candidate, len(services)),
                payload=services,
            )
            for candidate, services in zip(candidates, allocations)
        ]
        ranked = self.scoring_engine.rank(scored)

        response = self.response_builder.build(echoed, ranked, audited_at)
        logger.info(
            f"Geo match finished: {len(candidates)} candidates, "
            f"{len(response.matches)} matches, {response.total_services} services, "
            f"fallback={response.fallback.reason.value if response.fallback else None}"
        )
        return response
