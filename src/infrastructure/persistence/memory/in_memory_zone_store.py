"""
In-Memory Zone Store

ZoneStoreProtocol implementation holding zones in process memory. Used by the
CLI, by local development (GEO_STORE_BACKEND=memory) and by tests.
"""

import logging
from collections.abc import Iterable
from typing import Any

from src.domain.geo.entities.zone import Zone
from src.infrastructure.persistence.record_mapper import (
    InvalidRecordError,
    zone_from_record,
)

logger = logging.getLogger(__name__)


class InMemoryZoneStore:
    """
    Zones kept in insertion order.

    Examples:
        >>> store = InMemoryZoneStore.from_records([
        ...     {"id": "z1", "companyId": "c1", "name": "Centre", "boundary": polygon},
        ... ])
        >>> zones = await store.list_zones()
    """

    def __init__(self, zones: Iterable[Zone] = ()) -> None:
        self._zones: list[Zone] = list(zones)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "InMemoryZoneStore":
        """Build a store from plain records; unreadable records are skipped."""
        zones: list[Zone] = []
        for record in records:
            try:
                zones.append(zone_from_record(record))
            except InvalidRecordError as e:
                logger.warning(f"Skipping zone record: {e}")
        logger.info(f"In-memory zone store loaded with {len(zones)} zones")
        return cls(zones)

    async def list_zones(self) -> list[Zone]:
        return list(self._zones)
