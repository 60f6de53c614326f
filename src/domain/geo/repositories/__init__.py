"""
Geo Repository Interfaces Module

Store interfaces (contracts) for zone and service data.
Defined in Domain Layer, implemented in Infrastructure Layer.
"""

from .zone_store import ZoneStoreProtocol
from .service_store import ServiceStoreProtocol

__all__ = [
    "ServiceStoreProtocol",
    "ZoneStoreProtocol",
]
