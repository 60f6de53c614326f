"""
ZoneStore Interface

Repository contract for reading service zones.

Architecture Notes:
    - Repository Pattern, Protocol-based interface (structural typing)
    - Async methods (zone reads are a suspension point of the pipeline)
    - Implementations live in the Infrastructure layer (memory, Redis)
"""

from typing import Protocol

from ..entities.zone import Zone


class ZoneStoreProtocol(Protocol):
    """
    Protocol defining read access to service zones.

    Implementations must return zones with bounding box, centroid, boundary
    geometry, demand level and owning company id populated where known, and
    the owning company summary loaded eagerly.

    Usage:
        >>> zones = await zone_store.list_zones()
        >>> print(f"Scanning {len(zones)} zones")
    """

    async def list_zones(self) -> list[Zone]:
        """
        Return every configured zone.

        The order must be stable between calls against an unchanged store,
        since ranking ties are broken by scan order.

        Returns:
            List of zones (empty when no zones are configured)

        Raises:
            UpstreamStoreError: If the backing store cannot be read
        """
        ...
