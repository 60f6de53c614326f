"""
In-Memory Store Module

Process-local store implementations.

Exports:
    - InMemoryZoneStore
    - InMemoryServiceStore
"""

from .in_memory_service_store import InMemoryServiceStore
from .in_memory_zone_store import InMemoryZoneStore

__all__ = [
    "InMemoryServiceStore",
    "InMemoryZoneStore",
]
