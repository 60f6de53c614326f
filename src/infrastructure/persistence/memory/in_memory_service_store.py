"""
In-Memory Service Store

ServiceStoreProtocol implementation holding services in process memory.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from src.domain.geo.entities.service import Service, created_sort_key
from src.infrastructure.persistence.record_mapper import (
    InvalidRecordError,
    service_from_record,
)

logger = logging.getLogger(__name__)


class InMemoryServiceStore:
    """
    Services filtered by company and category, returned newest first.

    Services with equal (or missing) creation times keep insertion order.
    """

    def __init__(self, services: Iterable[Service] = ()) -> None:
        self._services: list[Service] = list(services)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "InMemoryServiceStore":
        """Build a store from plain records; unreadable records are skipped."""
        services: list[Service] = []
        for record in records:
            try:
                services.append(service_from_record(record))
            except InvalidRecordError as e:
                logger.warning(f"Skipping service record: {e}")
        logger.info(f"In-memory service store loaded with {len(services)} services")
        return cls(services)

    async def list_services_for_companies(
        self,
        company_ids: Iterable[str],
        categories: Optional[Iterable[str]] = None,
    ) -> list[Service]:
        wanted_companies = set(company_ids)
        wanted_categories = set(categories or ())

        selected = [
            service
            for service in self._services
            if service.company_id in wanted_companies
            and (not wanted_categories or service.category in wanted_categories)
        ]
        return sorted(selected, key=created_sort_key, reverse=True)
