"""
Match Response Value Objects

Response units of the zone-matching engine: per-zone MatchResult records and
the MatchResponse envelope with the echoed request and fallback descriptor.

Architecture Notes:
    - Value Objects (immutable, defined by values)
    - Uses Pydantic for validation and serialization
    - Serialized with camelCase aliases (populate_by_name keeps snake_case input working)
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.geo.entities.service import Service
from src.domain.geo.entities.zone import CompanySummary, Zone
from src.domain.geo.matching_config import FallbackReason


class ResponseModel(BaseModel):
    """Base for response value objects: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CompanyView(ResponseModel):
    id: str
    contact_name: Optional[str] = None

    @classmethod
    def from_company(cls, company: Optional[CompanySummary]) -> Optional["CompanyView"]:
        if company is None:
            return None
        return cls(id=company.id, contact_name=company.contact_name)


class ProviderView(ResponseModel):
    id: str
    name: str


class ZoneSummary(ResponseModel):
    """Zone fields exposed in a match record."""

    id: str
    name: str
    company_id: str
    demand_level: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    centroid: Optional[dict[str, Any]] = None
    bounding_box: Optional[dict[str, Any]] = None
    company: Optional[CompanyView] = None

    @classmethod
    def from_zone(cls, zone: Zone) -> "ZoneSummary":
        return cls(
            id=zone.id,
            name=zone.name,
            company_id=zone.company_id,
            demand_level=zone.demand_level.value,
            metadata=dict(zone.metadata),
            centroid=zone.centroid.to_geojson() if zone.centroid else None,
            bounding_box=zone.bounding_box.to_dict() if zone.bounding_box else None,
            company=CompanyView.from_company(zone.company),
        )


class ServiceSummary(ResponseModel):
    """Service fields exposed in a match record."""

    id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Any] = None
    currency: Optional[str] = None
    company_id: str
    provider: Optional[ProviderView] = None
    company: Optional[CompanyView] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_service(cls, service: Service) -> "ServiceSummary":
        provider = None
        if service.provider is not None:
            provider = ProviderView(id=service.provider.id, name=service.provider.name)
        return cls(
            id=service.id,
            title=service.title,
            description=service.description,
            category=service.category,
            price=service.price,
            currency=service.currency,
            company_id=service.company_id,
            provider=provider,
            company=CompanyView.from_company(service.company),
            created_at=service.created_at,
            updated_at=service.updated_at,
        )


class MatchResult(ResponseModel):
    """
    One matched zone.

    Attributes:
        zone: Zone summary
        inside_polygon: True when the query point lies within the zone boundary
        distance_km: Distance to the zone reference point (2 decimals)
        score: Composite ranking score (2 decimals)
        services: Services allocated to this zone, newest first
        reason: Human-readable explanation
    """

    zone: ZoneSummary
    inside_polygon: bool
    distance_km: float
    score: float
    services: list[ServiceSummary] = Field(default_factory=list)
    reason: str


class FallbackDescriptor(ResponseModel):
    """
    Top-level fallback information.

    Set to closest-zone-projected when no returned match is a true polygon
    containment, and to no-zones-configured when the zone store is empty.
    """

    reason: FallbackReason
    distance_km: Optional[float] = None
    zone_id: Optional[str] = None


class EchoedRequest(ResponseModel):
    """Normalised request parameters echoed back to the caller."""

    latitude: float
    longitude: float
    radius_km: float
    limit: int
    demand_levels: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class MatchResponse(ResponseModel):
    """
    Complete response of a coordinate match.

    Examples:
        >>> response.model_dump(by_alias=True, mode="json")["fallback"]
        {'reason': 'closest-zone-projected', 'distanceKm': 12.4, 'zoneId': 'zone-7'}
    """

    request: EchoedRequest
    matches: list[MatchResult] = Field(default_factory=list)
    fallback: Optional[FallbackDescriptor] = None
    total_services: int = 0
    audited_at: datetime
