"""
Geo Value Objects.

Immutable objects representing geo-matching concepts by their value.

Available Value Objects:
    - Coordinate: Validated latitude/longitude pair
    - BoundingBox: Raw zone bounding box with numeric checks
    - MatchCandidate: Zone surviving candidate filtering
    - MatchScore: Composite ranking score with components
    - MatchResult / MatchResponse: Response records
"""

from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.match_candidate import MatchCandidate
from src.domain.geo.value_objects.match_score import MatchScore
from src.domain.geo.value_objects.match_result import (
    EchoedRequest,
    FallbackDescriptor,
    MatchResponse,
    MatchResult,
    ServiceSummary,
    ZoneSummary,
)

__all__ = [
    "BoundingBox",
    "Coordinate",
    "EchoedRequest",
    "FallbackDescriptor",
    "MatchCandidate",
    "MatchResponse",
    "MatchResult",
    "MatchScore",
    "ServiceSummary",
    "ZoneSummary",
]
