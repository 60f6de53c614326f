"""
Redis Service Store

ServiceStoreProtocol implementation reading services stored as JSON in Redis.

Storage Strategy:
    - Key pattern: "geo:services:{company_id}"
    - Value: JSON list of service records of that company
    - One MGET per request for all requested companies
"""

import json
import logging
from collections.abc import Iterable
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.application.exceptions import UpstreamStoreError
from src.domain.geo.entities.service import Service, created_sort_key
from src.infrastructure.persistence.record_mapper import (
    InvalidRecordError,
    service_from_record,
    service_to_record,
)

logger = logging.getLogger(__name__)

SERVICES_KEY_PREFIX = "geo:services:"


class RedisServiceStore:
    """
    Services grouped per company under one key.

    Examples:
        >>> store = RedisServiceStore(await get_redis_client())
        >>> await store.save_services("company-1", services)
        >>> await store.list_services_for_companies(["company-1"], ["plumbing"])
    """

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    def _get_key(self, company_id: str) -> str:
        return f"{SERVICES_KEY_PREFIX}{company_id}"

    async def list_services_for_companies(
        self,
        company_ids: Iterable[str],
        categories: Optional[Iterable[str]] = None,
    ) -> list[Service]:
        """
        Services of the given companies, newest first.

        Raises:
            UpstreamStoreError: If Redis fails or a document is not valid JSON
        """
        company_ids = list(dict.fromkeys(company_ids))
        if not company_ids:
            return []
        wanted_categories = set(categories or ())

        keys = [self._get_key(company_id) for company_id in company_ids]
        try:
            payloads = await self.redis.mget(keys)
        except RedisError as e:
            logger.error(f"Failed to read services from Redis: {e}")
            raise UpstreamStoreError(
                "Cannot read services from Redis", store="services", original_error=e
            ) from e

        services: list[Service] = []
        for key, payload in zip(keys, payloads):
            if payload is None:
                continue
            try:
                records = json.loads(payload)
            except json.JSONDecodeError as e:
                raise UpstreamStoreError(
                    f"Services document {key} is not valid JSON",
                    store="services",
                    original_error=e,
                ) from e
            if not isinstance(records, list):
                logger.warning(f"Skipping services document {key}: not a list")
                continue

            for record in records:
                try:
                    service = service_from_record(record)
                except InvalidRecordError as e:
                    logger.warning(f"Skipping service in {key}: {e}")
                    continue
                if wanted_categories and service.category not in wanted_categories:
                    continue
                services.append(service)

        return sorted(services, key=created_sort_key, reverse=True)

    async def save_services(self, company_id: str, services: Iterable[Service]) -> None:
        """
        Replace the services stored for a company.

        Raises:
            UpstreamStoreError: If Redis fails
        """
        document = json.dumps([service_to_record(service) for service in services])
        try:
            await self.redis.set(self._get_key(company_id), document)
        except RedisError as e:
            raise UpstreamStoreError(
                f"Cannot save services of company {company_id}",
                store="services",
                original_error=e,
            ) from e
