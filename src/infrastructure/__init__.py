"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain Layer.

Architecture:
    - Implements Domain interfaces (GeometryKernelProtocol, store Protocols)
    - Depends on external libraries (shapely, Redis)
    - No Domain business logic (only technical implementations)

Modules:
    - geometry: shapely geometry kernel
    - persistence: record mapping, in-memory and Redis stores, store factory

Usage:
    >>> from src.infrastructure import ShapelyGeometryKernel, get_geo_stores
    >>> stores = get_geo_stores()
"""

# Geometry
from .geometry import ShapelyGeometryKernel

# Persistence
from .persistence import (
    GeoStores,
    InMemoryServiceStore,
    InMemoryZoneStore,
    RedisServiceStore,
    RedisZoneStore,
    get_geo_stores,
    store_backend,
)

__all__ = [
    # Geometry
    "ShapelyGeometryKernel",
    # Persistence
    "GeoStores",
    "InMemoryServiceStore",
    "InMemoryZoneStore",
    "RedisServiceStore",
    "RedisZoneStore",
    "get_geo_stores",
    "store_backend",
]
