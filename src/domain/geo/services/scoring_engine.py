"""
ScoringEngine - Domain Service

Scores candidate zones and ranks them.

Business Rules:
    - Score = demand weight * 12 + min(services, 8) * 3 + 10 if inside
      - min(distance, 40) * 0.75, rounded to 2 decimals
    - Sorted descending by score, ties keep scan order (stable sort)
    - At most 6 zones are returned, whatever the requested limit
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from src.domain.geo.matching_config import MAX_MATCHED_ZONES
from src.domain.geo.value_objects.match_candidate import MatchCandidate
from src.domain.geo.value_objects.match_score import MatchScore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ScoredCandidate(Generic[T]):
    """A candidate with its score and an attached payload (e.g. its services)."""

    candidate: MatchCandidate
    score: MatchScore
    payload: T


class ScoringEngine:
    """
    Stateless scoring and ranking of match candidates.

    Examples:
        >>> engine = ScoringEngine()
        >>> engine.score(candidate, service_count=2).total
        49.0
    """

    def __init__(self, max_results: int = MAX_MATCHED_ZONES) -> None:
        self.max_results = max_results

    def score(self, candidate: MatchCandidate, service_count: int) -> MatchScore:
        """Composite score of one candidate."""
        return MatchScore.create(
            demand_level=candidate.zone.demand_level,
            service_count=service_count,
            distance_km=candidate.distance_km,
            inside_polygon=candidate.inside_polygon,
        )

    def rank(self, scored: Sequence[ScoredCandidate[T]]) -> list[ScoredCandidate[T]]:
        """
        Sort descending by score and truncate to the result cap.

        Python's sort is stable, also with reverse=True, so equal scores keep
        their original scan order.
        """
        ranked = sorted(scored, key=lambda entry: entry.score.total, reverse=True)
        limit = min(len(ranked), self.max_results)
        if len(ranked) > limit:
            logger.debug(f"Truncating {len(ranked)} scored zones to {limit}")
        return ranked[:limit]
