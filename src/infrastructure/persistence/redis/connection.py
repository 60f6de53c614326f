"""
Redis Connection Pool Management.

Singleton asyncio connection pool for the Redis-backed zone and service stores.

Responsibility:
    - Read Redis settings from the environment
    - Manage one shared connection pool
    - Verify connectivity with PING, retrying with exponential backoff
    - Health check for the /health endpoint

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - redis.asyncio client: every command is awaited on the event loop
    - Thread-safe singleton (double-checked locking)

Configuration (environment):
    - REDIS_HOST (localhost), REDIS_PORT (6379), REDIS_DB (0)
    - REDIS_MAX_CONNECTIONS (10), REDIS_TIMEOUT (5 seconds)
    - REDIS_RETRY_ATTEMPTS (3), backoff 1s, 2s, 4s...

Examples:
    >>> client = await get_redis_client()
    >>> store = RedisZoneStore(client)
    >>> await health_check()
    True
    >>> await close_connections()
"""

import asyncio
import logging
import os
import threading
from dataclasses import dataclass
from typing import Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

logger = logging.getLogger(__name__)

_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()

BACKOFF_BASE_SECONDS = 1


@dataclass(frozen=True)
class RedisSettings:
    """Connection settings of the shared pool."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    max_connections: int = 10
    timeout: int = 5
    retry_attempts: int = 3

    @classmethod
    def from_env(cls) -> "RedisSettings":
        return cls(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
            timeout=int(os.getenv("REDIS_TIMEOUT", "5")),
            retry_attempts=max(1, int(os.getenv("REDIS_RETRY_ATTEMPTS", "3"))),
        )


async def get_redis_client(settings: Optional[RedisSettings] = None) -> Redis:
    """
    Redis client bound to the shared connection pool.

    The pool is created on first call. Every call verifies the connection
    with PING, retrying connection and timeout errors with exponential
    backoff.

    Args:
        settings: Connection settings (default: RedisSettings.from_env())

    Returns:
        Redis client with decode_responses=True

    Raises:
        RedisError: If PING fails after all retry attempts
    """
    global _redis_pool

    settings = settings or RedisSettings.from_env()

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                logger.info(
                    f"Creating Redis connection pool: host={settings.host}, "
                    f"port={settings.port}, db={settings.db}, "
                    f"max_connections={settings.max_connections}, "
                    f"timeout={settings.timeout}s"
                )
                _redis_pool = ConnectionPool(
                    host=settings.host,
                    port=settings.port,
                    db=settings.db,
                    max_connections=settings.max_connections,
                    socket_timeout=settings.timeout,
                    socket_connect_timeout=settings.timeout,
                    socket_keepalive=True,
                    decode_responses=True,
                )

    client = Redis(connection_pool=_redis_pool)

    last_error: Optional[Exception] = None
    for attempt in range(settings.retry_attempts):
        try:
            await client.ping()
            logger.debug(f"Redis connection established (attempt {attempt + 1})")
            return client
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt < settings.retry_attempts - 1:
                delay = BACKOFF_BASE_SECONDS * (2**attempt)
                logger.warning(
                    f"Redis connection failed (attempt {attempt + 1}/"
                    f"{settings.retry_attempts}): {e}. Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    f"Redis connection failed after {settings.retry_attempts} attempts: {e}"
                )

    raise RedisError(
        f"Failed to connect to Redis after {settings.retry_attempts} attempts. "
        f"Last error: {last_error}"
    )


async def health_check() -> bool:
    """True when Redis answers PING; never raises."""
    try:
        client = await get_redis_client()
        if await client.ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


async def close_connections() -> None:
    """Disconnect and drop the shared pool. Safe to call repeatedly."""
    global _redis_pool

    with _pool_lock:
        pool, _redis_pool = _redis_pool, None

    if pool is None:
        logger.debug("Redis connection pool already closed or not initialized")
        return

    logger.info("Closing Redis connection pool")
    try:
        await pool.disconnect()
    except RedisError as e:
        logger.error(f"Error closing Redis connection pool: {e}")
