"""
Redis Zone Store

ZoneStoreProtocol implementation reading zones stored as JSON in Redis.

Storage Strategy:
    - Key pattern: "geo:zone:{zone_id}"
    - Value: JSON record (see record_mapper.zone_to_record)
    - No TTL; zones are maintained by the zone admin tooling

Error Handling:
    - RedisError and undecodable JSON -> UpstreamStoreError (request aborts)
    - Records without id / company id -> logged and skipped
"""

import json
import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.application.exceptions import UpstreamStoreError
from src.domain.geo.entities.zone import Zone
from src.infrastructure.persistence.record_mapper import (
    InvalidRecordError,
    zone_from_record,
    zone_to_record,
)

logger = logging.getLogger(__name__)

ZONE_KEY_PREFIX = "geo:zone:"


class RedisZoneStore:
    """
    Zones stored one JSON document per key.

    list_zones() returns zones sorted by id, so the scan order (and with it
    the ranking tie-break) does not depend on Redis SCAN order.

    Examples:
        >>> store = RedisZoneStore(await get_redis_client())
        >>> await store.save_zone(zone)
        >>> zones = await store.list_zones()
    """

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    def _get_key(self, zone_id: str) -> str:
        """
        Examples:
            >>> store._get_key("zone-1")
            'geo:zone:zone-1'
        """
        return f"{ZONE_KEY_PREFIX}{zone_id}"

    async def list_zones(self) -> list[Zone]:
        """
        Load every zone.

        Raises:
            UpstreamStoreError: If Redis fails or a document is not valid JSON
        """
        try:
            keys = sorted([key async for key in self.redis.scan_iter(match=f"{ZONE_KEY_PREFIX}*")])
            payloads = await self.redis.mget(keys) if keys else []
        except RedisError as e:
            logger.error(f"Failed to read zones from Redis: {e}")
            raise UpstreamStoreError(
                "Cannot read zones from Redis", store="zones", original_error=e
            ) from e

        zones: list[Zone] = []
        for key, payload in zip(keys, payloads):
            if payload is None:
                continue
            try:
                record = json.loads(payload)
            except json.JSONDecodeError as e:
                raise UpstreamStoreError(
                    f"Zone document {key} is not valid JSON",
                    store="zones",
                    original_error=e,
                ) from e
            try:
                zones.append(zone_from_record(record))
            except InvalidRecordError as e:
                logger.warning(f"Skipping zone document {key}: {e}")

        zones.sort(key=lambda zone: zone.id)
        logger.debug(f"Loaded {len(zones)} zones from Redis")
        return zones

    async def save_zone(self, zone: Zone) -> None:
        """
        Store (or overwrite) a zone.

        Raises:
            UpstreamStoreError: If Redis fails
        """
        try:
            await self.redis.set(self._get_key(zone.id), json.dumps(zone_to_record(zone)))
        except RedisError as e:
            raise UpstreamStoreError(
                f"Cannot save zone {zone.id}", store="zones", original_error=e
            ) from e
