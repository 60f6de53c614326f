"""
Persistence Infrastructure Module

Zone and service store implementations (in-memory, Redis) and their factory.

Exports:
    - InMemoryZoneStore, InMemoryServiceStore
    - RedisZoneStore, RedisServiceStore
    - GeoStores, get_geo_stores, store_backend
"""

from .memory import InMemoryServiceStore, InMemoryZoneStore
from .redis import RedisServiceStore, RedisZoneStore
from .store_factory import GeoStores, get_geo_stores, store_backend

__all__ = [
    "GeoStores",
    "InMemoryServiceStore",
    "InMemoryZoneStore",
    "RedisServiceStore",
    "RedisZoneStore",
    "get_geo_stores",
    "store_backend",
]
