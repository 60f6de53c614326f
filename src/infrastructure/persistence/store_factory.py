"""
Store Factory

Builds the zone and service stores selected by the environment.

Configuration (environment):
    - GEO_STORE_BACKEND: "memory" (default) or "redis"
    - GEO_SEED_FILE: JSON file {"zones": [...], "services": [...]} used to
      seed the in-memory stores (optional)

Architecture Notes:
    - Infrastructure Layer, used by the API dependency factories and the CLI
    - In-memory stores are built once per process and shared
"""

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from src.domain.geo.repositories.service_store import ServiceStoreProtocol
from src.domain.geo.repositories.zone_store import ZoneStoreProtocol
from src.infrastructure.persistence.memory import InMemoryServiceStore, InMemoryZoneStore
from src.infrastructure.persistence.redis import (
    RedisServiceStore,
    RedisZoneStore,
    get_redis_client,
)

logger = logging.getLogger(__name__)

MEMORY_BACKEND = "memory"
REDIS_BACKEND = "redis"
SUPPORTED_BACKENDS = (MEMORY_BACKEND, REDIS_BACKEND)


@dataclass(frozen=True)
class GeoStores:
    """The pair of stores a matching request reads from."""

    zone_store: ZoneStoreProtocol
    service_store: ServiceStoreProtocol


def store_backend() -> str:
    """
    Configured backend name.

    Raises:
        ValueError: If GEO_STORE_BACKEND names an unknown backend
    """
    backend = os.getenv("GEO_STORE_BACKEND", MEMORY_BACKEND).strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported GEO_STORE_BACKEND '{backend}', expected one of {SUPPORTED_BACKENDS}"
        )
    return backend


def load_seed(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """
    Read a seed file.

    Returns:
        {"zones": [...], "services": [...]} (missing sections are empty)

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a JSON object
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Seed file {path} must contain a JSON object")
    return {
        "zones": list(data.get("zones") or []),
        "services": list(data.get("services") or []),
    }


def build_memory_stores(seed_file: Optional[str | Path] = None) -> GeoStores:
    """In-memory stores, seeded from seed_file when given."""
    seed = load_seed(seed_file) if seed_file else {"zones": [], "services": []}
    if seed_file:
        logger.info(f"Seeding in-memory stores from {seed_file}")
    return GeoStores(
        zone_store=InMemoryZoneStore.from_records(seed["zones"]),
        service_store=InMemoryServiceStore.from_records(seed["services"]),
    )


async def build_redis_stores() -> GeoStores:
    """Redis stores sharing the pooled client."""
    client = await get_redis_client()
    return GeoStores(
        zone_store=RedisZoneStore(client),
        service_store=RedisServiceStore(client),
    )


@lru_cache(maxsize=1)
def _shared_memory_stores(seed_file: Optional[str]) -> GeoStores:
    return build_memory_stores(seed_file)


async def get_geo_stores() -> GeoStores:
    """
    Stores for the configured backend.

    Raises:
        ValueError: Unknown backend or unreadable seed file
        RedisError: Redis selected but unreachable
    """
    if store_backend() == REDIS_BACKEND:
        return await build_redis_stores()
    return _shared_memory_stores(os.getenv("GEO_SEED_FILE") or None)


def reset_store_cache() -> None:
    """Forget the shared in-memory stores (tests, reloading a seed file)."""
    _shared_memory_stores.cache_clear()
