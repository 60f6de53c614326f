"""
Geo Entities Module

Read-only records supplied by the external zone and service stores.
"""

from .zone import CompanySummary, Zone
from .service import ProviderSummary, Service, created_sort_key

__all__ = [
    "CompanySummary",
    "ProviderSummary",
    "Service",
    "Zone",
    "created_sort_key",
]
