"""
Geo Domain Services Module

Business operations of the zone-matching pipeline.

This module exports:
    - GeometryKernelProtocol and the pure geometry helpers
    - ZoneCandidateFilter: bounding-box + polygon candidate scan
    - FallbackResolver: globally closest zone when nothing matched
    - ServiceAggregator: services of candidate companies, per-zone budget
    - ScoringEngine: composite score and ranking
    - MatchResponseBuilder: final response assembly
"""

from .geometry_kernel import (
    GeometryKernelProtocol,
    bounding_box_contains,
    resolve_geometry,
    zone_reference_point,
)
from .zone_candidate_filter import ZoneCandidateFilter
from .fallback_resolver import FallbackResolver
from .service_aggregator import ServiceAggregator, per_zone_limit
from .scoring_engine import ScoredCandidate, ScoringEngine
from .match_response_builder import MatchResponseBuilder, match_reason

__all__ = [
    "FallbackResolver",
    "GeometryKernelProtocol",
    "MatchResponseBuilder",
    "ScoredCandidate",
    "ScoringEngine",
    "ServiceAggregator",
    "ZoneCandidateFilter",
    "bounding_box_contains",
    "match_reason",
    "per_zone_limit",
    "resolve_geometry",
    "zone_reference_point",
]
