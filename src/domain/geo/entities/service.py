"""
Service Entity

A service offered by a company. Many services per company; the matching engine
attaches them to every matched zone the company owns.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from src.domain.geo.entities.zone import CompanySummary


@dataclass(frozen=True)
class ProviderSummary:
    """Provider (person) responsible for a service."""

    id: str
    name: str


@dataclass(frozen=True)
class Service:
    """
    Service record supplied by the service store.

    Attributes:
        id: Service identifier
        company_id: Owning company identifier
        title: Display title
        description: Free text description
        category: Category used by the optional category filter
        price: Listed price (store representation, may be None)
        currency: ISO currency code
        provider: Eagerly loaded provider summary (may be None)
        company: Eagerly loaded company summary (may be None)
        created_at: Creation time, newest services are listed first
        updated_at: Last modification time
    """

    id: str
    company_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Any] = None
    currency: Optional[str] = None
    provider: Optional[ProviderSummary] = None
    company: Optional[CompanySummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def created_sort_key(service: Service) -> float:
    """
    Sort key for newest-first listings (use with reverse=True).

    Services without a creation time sort last.
    """
    if isinstance(service.created_at, datetime):
        return service.created_at.timestamp()
    return float("-inf")
