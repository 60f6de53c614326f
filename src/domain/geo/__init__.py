"""
Geo Subdomain Module

Core business logic for geographic zone matching: which service zones cover
or are nearest to a coordinate, how they rank, and which services they offer.

Exports:
    Value Objects:
        - Coordinate, BoundingBox, MatchCandidate, MatchScore
        - MatchResult, MatchResponse (response records)

    Entities:
        - Zone, Service, CompanySummary, ProviderSummary

    Services:
        - ZoneCandidateFilter, FallbackResolver, ServiceAggregator,
          ScoringEngine, MatchResponseBuilder, GeometryKernelProtocol

    Repository Interfaces:
        - ZoneStoreProtocol, ServiceStoreProtocol
"""

# Value objects are imported first: entities depend on their leaf modules
from .value_objects import (
    BoundingBox,
    Coordinate,
    MatchCandidate,
    MatchResponse,
    MatchResult,
    MatchScore,
)

from .entities import CompanySummary, ProviderSummary, Service, Zone

from .services import (
    FallbackResolver,
    GeometryKernelProtocol,
    MatchResponseBuilder,
    ScoringEngine,
    ServiceAggregator,
    ZoneCandidateFilter,
)

from .repositories import ServiceStoreProtocol, ZoneStoreProtocol

from . import matching_config
from .matching_config import DemandLevel, FallbackReason

__all__ = [
    # Value Objects
    "BoundingBox",
    "Coordinate",
    "MatchCandidate",
    "MatchResponse",
    "MatchResult",
    "MatchScore",
    # Entities
    "CompanySummary",
    "ProviderSummary",
    "Service",
    "Zone",
    # Services
    "FallbackResolver",
    "GeometryKernelProtocol",
    "MatchResponseBuilder",
    "ScoringEngine",
    "ServiceAggregator",
    "ZoneCandidateFilter",
    # Repository Interfaces
    "ServiceStoreProtocol",
    "ZoneStoreProtocol",
    "matching_config",
    "DemandLevel",
    "FallbackReason",
]
