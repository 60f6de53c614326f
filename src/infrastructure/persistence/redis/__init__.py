"""
Redis Infrastructure Module

Redis-backed zone and service stores and the shared connection pool.

Exports:
    - RedisZoneStore / RedisServiceStore: store implementations
    - RedisSettings: connection settings from the environment
    - get_redis_client: Redis client with connection pooling
    - health_check: Redis PING test
    - close_connections: Close all Redis connections
"""

from .connection import RedisSettings, close_connections, get_redis_client, health_check
from .service_store import RedisServiceStore
from .zone_store import RedisZoneStore

__all__ = [
    "RedisServiceStore",
    "RedisSettings",
    "RedisZoneStore",
    "close_connections",
    "get_redis_client",
    "health_check",
]
