"""
Domain Layer - Core Business Logic

Heart of the geo matching service. Contains the zone-matching rules, entities,
value objects, domain services and store interfaces. Framework-independent
and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center
    - Domain-Driven Design: Entities, Value Objects, Services, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - geo: Zone matching (geometry, filtering, fallback, scoring)
    - shared: Cross-subdomain concepts (exceptions)

Usage:
    >>> from src.domain import Coordinate, MatchResponse, DomainException
    >>> from src.domain.geo.services import ZoneCandidateFilter
"""

# Geo Subdomain
from .geo import (
    Coordinate,
    MatchResponse,
    MatchResult,
    MatchScore,
    ServiceStoreProtocol,
    Zone,
    ZoneStoreProtocol,
)

# Shared Domain
from .shared import DomainException, InvalidCoordinateError

__all__ = [
    # Geo Subdomain
    "Coordinate",
    "MatchResponse",
    "MatchResult",
    "MatchScore",
    "ServiceStoreProtocol",
    "Zone",
    "ZoneStoreProtocol",
    # Shared Domain
    "DomainException",
    "InvalidCoordinateError",
]
