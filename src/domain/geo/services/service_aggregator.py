"""
ServiceAggregator - Domain Service

Fetches the services of every company owning a candidate zone in a single
store query and partitions them by company.

Business Rules:
    - One store call for the distinct set of owning companies
    - Category filter is forwarded only when non-empty
    - Services are kept newest first (stable for equal timestamps)
    - Each zone receives at most max(3, ceil(limit / candidate_count)) services
"""

import logging
import math
from collections.abc import Collection, Sequence
from dataclasses import dataclass

from src.domain.geo.entities.service import Service, created_sort_key
from src.domain.geo.matching_config import MIN_SERVICES_PER_ZONE
from src.domain.geo.repositories.service_store import ServiceStoreProtocol
from src.domain.geo.value_objects.match_candidate import MatchCandidate

logger = logging.getLogger(__name__)


def per_zone_limit(requested_limit: int, candidate_count: int) -> int:
    """
    Services allocated to each matched zone.

    Examples:
        >>> per_zone_limit(15, 2)
        8
        >>> per_zone_limit(15, 10)
        3
    """
    if candidate_count <= 0:
        return MIN_SERVICES_PER_ZONE
    return max(MIN_SERVICES_PER_ZONE, math.ceil(requested_limit / candidate_count))


@dataclass
class ServiceAggregator:
    """
    Resolves services for candidate zones.

    Attributes:
        service_store: Store supplying services by company
    """

    service_store: ServiceStoreProtocol

    async def aggregate(
        self,
        candidates: Sequence[MatchCandidate],
        categories: Collection[str] = (),
    ) -> dict[str, list[Service]]:
        """
        Group services of all companies owning candidate zones.

        Args:
            candidates: Candidate zones (from filtering or fallback)
            categories: Optional category filter

        Returns:
            Mapping company_id -> services, newest first

        Raises:
            UpstreamStoreError: Propagated unchanged from the service store
        """
        company_ids = list(dict.fromkeys(c.zone.company_id for c in candidates))
        if not company_ids:
            return {}

        services = await self.service_store.list_services_for_companies(
            company_ids, list(categories) if categories else None
        )

        allowed = set(company_ids)
        services_by_company: dict[str, list[Service]] = {}
        for service in sorted(services, key=created_sort_key, reverse=True):
            if service.company_id not in allowed:
                continue
            services_by_company.setdefault(service.company_id, []).append(service)

        logger.debug(
            f"Aggregated {len(services)} services for {len(company_ids)} companies"
        )
        return services_by_company

    @staticmethod
    def allocate(
        candidates: Sequence[MatchCandidate],
        services_by_company: dict[str, list[Service]],
        requested_limit: int,
    ) -> list[list[Service]]:
        """
        Slice each zone's company services to the per-zone budget.

        Returns:
            One service list per candidate, in candidate order
        """
        budget = per_zone_limit(requested_limit, len(candidates))
        return [
            list(services_by_company.get(candidate.zone.company_id, ())[:budget])
            for candidate in candidates
        ]
