"""
Zone Entity

Operational service zone owned by a company: a polygon or multipolygon
boundary with a bounding box, a centroid and a demand classification.

Architecture Notes:
    - Plain data-transfer structure supplied by the zone store
    - Read-only to the matching engine (frozen)
    - Company summary is loaded eagerly by the store (no hidden fetches)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.domain.geo.matching_config import DEFAULT_DEMAND_LEVEL, DemandLevel
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.coordinate import Coordinate


@dataclass(frozen=True)
class CompanySummary:
    """Display data of the company owning a zone or a service."""

    id: str
    contact_name: Optional[str] = None


@dataclass(frozen=True)
class Zone:
    """
    Service zone record.

    Attributes:
        id: Zone identifier
        company_id: Owning company identifier
        name: Display name
        demand_level: Demand classification (defaults to MEDIUM)
        bounding_box: Axis-aligned box used for cheap pre-filtering (may be None)
        centroid: Zone centroid (may be None, then the box midpoint is used)
        boundary: GeoJSON Polygon/MultiPolygon geometry or Feature (may be None)
        metadata: Free-form metadata echoed in responses
        company: Eagerly loaded company summary (may be None)

    Examples:
        >>> zone = Zone(
        ...     id="zone-1",
        ...     company_id="company-1",
        ...     name="Central",
        ...     demand_level=DemandLevel.HIGH,
        ...     bounding_box=BoundingBox(west=-1, east=1, north=1, south=-1),
        ... )
        >>> zone.demand_level.value
        'high'
    """

    id: str
    company_id: str
    name: str
    demand_level: DemandLevel = DEFAULT_DEMAND_LEVEL
    bounding_box: Optional[BoundingBox] = None
    centroid: Optional[Coordinate] = None
    boundary: Optional[dict[str, Any]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    company: Optional[CompanySummary] = None
