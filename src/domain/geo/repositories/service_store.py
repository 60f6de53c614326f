"""
ServiceStore Interface

Repository contract for reading services offered by companies.
"""

from typing import Iterable, Optional, Protocol

from ..entities.service import Service


class ServiceStoreProtocol(Protocol):
    """
    Protocol defining read access to services.

    Usage:
        >>> services = await service_store.list_services_for_companies(
        ...     ["company-1", "company-2"], categories={"plumbing"}
        ... )
    """

    async def list_services_for_companies(
        self,
        company_ids: Iterable[str],
        categories: Optional[Iterable[str]] = None,
    ) -> list[Service]:
        """
        Return services of the given companies, newest first.

        Args:
            company_ids: Companies whose services are requested
            categories: Optional category filter; empty or None means no filter

        Returns:
            Services ordered by created_at descending

        Raises:
            UpstreamStoreError: If the backing store cannot be read
        """
        ...
