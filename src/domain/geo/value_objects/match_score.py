"""
MatchScore Value Object

Composite desirability score of a candidate zone.

Responsibility:
    - Encapsulate the scoring rule (demand + services + bonus - distance penalty)
    - Keep every component for transparency and debugging
    - Immutable value object

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for validation
    - Part of geo subdomain
"""

from pydantic import BaseModel, Field, model_validator

from src.domain.geo.matching_config import (
    DEMAND_MULTIPLIER,
    DISTANCE_PENALTY_CAP_KM,
    DISTANCE_PENALTY_PER_KM,
    INCLUSION_BONUS,
    SCORE_DECIMALS,
    SERVICE_COUNT_CAP,
    SERVICE_POINTS,
    DemandLevel,
    demand_weight,
)


class MatchScore(BaseModel):
    """
    Immutable value object representing the ranking score of one zone.

    Formula:
        demand_score     = demand_weight(level) * 12      (high=3, medium=2, low=1)
        service_score    = min(service_count, 8) * 3
        distance_penalty = min(distance_km, 40) * 0.75
        inclusion_bonus  = 10 if inside polygon else 0
        total            = round(demand + service + bonus - penalty, 2)

    Examples:
        >>> score = MatchScore.create(
        ...     demand_level=DemandLevel.HIGH,
        ...     service_count=2,
        ...     distance_km=4.0,
        ...     inside_polygon=True,
        ... )
        >>> score.total
        49.0
    """

    demand_score: float = Field(..., ge=0.0, description="Demand weight * 12")
    service_score: float = Field(..., ge=0.0, description="Capped matched-service points")
    distance_penalty: float = Field(..., ge=0.0, description="Capped distance penalty")
    inclusion_bonus: float = Field(..., ge=0.0, description="Polygon containment bonus")
    total: float = Field(..., description="Rounded composite score")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_total(self) -> "MatchScore":
        """
        Validate that total is consistent with the components.

        Raises:
            ValueError: If total differs from the recomputed value
        """
        expected = self.calculate_total()
        if abs(self.total - expected) > 0.01:
            raise ValueError(
                f"Invalid total: expected {expected:.2f} "
                f"({self.demand_score} + {self.service_score} + {self.inclusion_bonus} "
                f"- {self.distance_penalty}), got {self.total}"
            )
        return self

    def calculate_total(self) -> float:
        """Recompute the rounded total from the components."""
        return round(
            self.demand_score
            + self.service_score
            + self.inclusion_bonus
            - self.distance_penalty,
            SCORE_DECIMALS,
        )

    @classmethod
    def create(
        cls,
        demand_level: DemandLevel | str | None,
        service_count: int,
        distance_km: float,
        inside_polygon: bool,
    ) -> "MatchScore":
        """
        Factory method computing every component from raw signals.

        Args:
            demand_level: Zone demand classification (None reads as medium)
            service_count: Number of services allocated to the zone
            distance_km: Distance from query point to zone reference point
            inside_polygon: Whether the query point lies within the boundary

        Returns:
            New MatchScore with computed total
        """
        demand_score = demand_weight(demand_level) * DEMAND_MULTIPLIER
        service_score = min(max(service_count, 0), SERVICE_COUNT_CAP) * SERVICE_POINTS
        distance_penalty = min(max(distance_km, 0.0), DISTANCE_PENALTY_CAP_KM) * DISTANCE_PENALTY_PER_KM
        inclusion_bonus = INCLUSION_BONUS if inside_polygon else 0.0

        total = round(
            demand_score + service_score + inclusion_bonus - distance_penalty,
            SCORE_DECIMALS,
        )

        return cls(
            demand_score=demand_score,
            service_score=service_score,
            distance_penalty=distance_penalty,
            inclusion_bonus=inclusion_bonus,
            total=total,
        )

    def to_dict(self) -> dict[str, float]:
        """Dictionary form for logging and debugging."""
        return {
            "demand_score": self.demand_score,
            "service_score": self.service_score,
            "distance_penalty": self.distance_penalty,
            "inclusion_bonus": self.inclusion_bonus,
            "total": self.total,
        }
