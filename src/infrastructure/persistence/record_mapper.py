"""
Store Record Mapping

Converts plain store records (JSON objects with camelCase or snake_case keys)
into the Zone and Service DTOs of the Domain Layer, and back.

Responsibility:
    - Read zone records: bounding box, centroid, boundary, company summary
    - Derive a missing bounding box / centroid from the boundary geometry
    - Read service records: provider name, company summary, timestamps
    - Serialize DTOs for stores that persist JSON (Redis)

Architecture Notes:
    - Infrastructure Layer (shared by the in-memory and Redis stores)
    - Records missing an id or company id raise InvalidRecordError; stores
      log and skip them
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from src.domain.geo.entities.service import ProviderSummary, Service
from src.domain.geo.entities.zone import CompanySummary, Zone
from src.domain.geo.matching_config import DemandLevel
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.shared.exceptions import InvalidCoordinateError
from src.infrastructure.geometry.shapely_geometry_kernel import ShapelyGeometryKernel

logger = logging.getLogger(__name__)

_kernel = ShapelyGeometryKernel()


class InvalidRecordError(ValueError):
    """Raised when a store record lacks the fields needed to build a DTO."""


def _get(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _require_id(record: dict[str, Any], *keys: str) -> str:
    if not isinstance(record, dict):
        raise InvalidRecordError(f"Record is not an object: {record!r:.120}")
    value = _get(record, *keys)
    if value is None or str(value).strip() == "":
        raise InvalidRecordError(f"Record is missing '{keys[0]}': {record!r:.120}")
    return str(value)


# ============================================================================
# ZONES
# ============================================================================


def read_company(data: Any) -> Optional[CompanySummary]:
    """Company summary from {id, contactName | contact_name}."""
    if not isinstance(data, dict) or data.get("id") is None:
        return None
    return CompanySummary(
        id=str(data["id"]),
        contact_name=_get(data, "contactName", "contact_name"),
    )


def read_centroid(data: Any) -> Optional[Coordinate]:
    """
    Centroid from a GeoJSON Point or a {latitude, longitude} mapping.

    Returns None for anything unreadable or out of range.

    Examples:
        >>> read_centroid({"type": "Point", "coordinates": [-0.12, 51.5]})
        Coordinate(latitude=51.5, longitude=-0.12)
        >>> read_centroid({"latitude": 95, "longitude": 0}) is None
        True
    """
    if not isinstance(data, dict):
        return None

    try:
        if data.get("type") == "Point":
            coordinates = data.get("coordinates")
            if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
                return None
            return Coordinate(latitude=coordinates[1], longitude=coordinates[0])

        latitude = _get(data, "latitude", "lat")
        longitude = _get(data, "longitude", "lng", "lon")
        if latitude is None or longitude is None:
            return None
        return Coordinate(latitude=latitude, longitude=longitude)
    except InvalidCoordinateError as e:
        logger.warning(f"Ignoring unreadable centroid {data!r}: {e}")
        return None


def zone_from_record(record: dict[str, Any]) -> Zone:
    """
    Build a Zone from a store record.

    A missing bounding box is derived from a readable Polygon/MultiPolygon
    boundary, and so is the centroid when the box was missing too. A stored
    box is never paired with a derived centroid: its midpoint stays the
    reference point of zones stored without a centroid.

    Raises:
        InvalidRecordError: If the record has no id or no company id
    """
    zone_id = _require_id(record, "id")
    company_id = _require_id(record, "companyId", "company_id")

    boundary = record.get("boundary")
    bounding_box = BoundingBox.from_dict(_get(record, "boundingBox", "bounding_box"))
    centroid = read_centroid(record.get("centroid"))

    if bounding_box is None:
        derived_box, derived_centroid = _kernel.derive_attributes(boundary)
        if derived_box is not None:
            bounding_box = BoundingBox.from_dict(derived_box)
        if centroid is None:
            centroid = derived_centroid

    metadata = record.get("metadata")

    return Zone(
        id=zone_id,
        company_id=company_id,
        name=str(record.get("name") or ""),
        demand_level=DemandLevel.parse(_get(record, "demandLevel", "demand_level")),
        bounding_box=bounding_box,
        centroid=centroid,
        boundary=boundary if isinstance(boundary, dict) else None,
        metadata=dict(metadata) if isinstance(metadata, dict) else {},
        company=read_company(record.get("company")),
    )


def zone_to_record(zone: Zone) -> dict[str, Any]:
    """JSON-ready record of a Zone (camelCase keys)."""
    return {
        "id": zone.id,
        "companyId": zone.company_id,
        "name": zone.name,
        "demandLevel": zone.demand_level.value,
        "boundingBox": zone.bounding_box.to_dict() if zone.bounding_box else None,
        "centroid": zone.centroid.to_geojson() if zone.centroid else None,
        "boundary": zone.boundary,
        "metadata": dict(zone.metadata),
        "company": _company_to_record(zone.company),
    }


# ============================================================================
# SERVICES
# ============================================================================


def read_provider(data: Any) -> Optional[ProviderSummary]:
    """
    Provider summary from {id, name} or {id, firstName, lastName}.

    The name of the second form is "first last", trimmed.
    """
    if not isinstance(data, dict) or data.get("id") is None:
        return None

    name = data.get("name")
    if not isinstance(name, str):
        first = _get(data, "firstName", "first_name") or ""
        last = _get(data, "lastName", "last_name") or ""
        name = f"{first} {last}"
    return ProviderSummary(id=str(data["id"]), name=name.strip())


def read_timestamp(value: Any) -> Optional[datetime]:
    """
    Timestamp from a datetime or an ISO-8601 string; naive values are UTC.

    Examples:
        >>> read_timestamp("2024-03-01T10:00:00Z").isoformat()
        '2024-03-01T10:00:00+00:00'
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning(f"Ignoring unreadable timestamp {value!r}")
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def service_from_record(record: dict[str, Any]) -> Service:
    """
    Build a Service from a store record.

    Raises:
        InvalidRecordError: If the record has no id or no company id
    """
    return Service(
        id=_require_id(record, "id"),
        company_id=_require_id(record, "companyId", "company_id"),
        title=str(record.get("title") or ""),
        description=record.get("description"),
        category=record.get("category"),
        price=record.get("price"),
        currency=record.get("currency"),
        provider=read_provider(record.get("provider")),
        company=read_company(record.get("company")),
        created_at=read_timestamp(_get(record, "createdAt", "created_at")),
        updated_at=read_timestamp(_get(record, "updatedAt", "updated_at")),
    )


def service_to_record(service: Service) -> dict[str, Any]:
    """JSON-ready record of a Service (camelCase keys)."""
    provider = None
    if service.provider is not None:
        provider = {"id": service.provider.id, "name": service.provider.name}
    return {
        "id": service.id,
        "companyId": service.company_id,
        "title": service.title,
        "description": service.description,
        "category": service.category,
        "price": service.price,
        "currency": service.currency,
        "provider": provider,
        "company": _company_to_record(service.company),
        "createdAt": service.created_at.isoformat() if service.created_at else None,
        "updatedAt": service.updated_at.isoformat() if service.updated_at else None,
    }


def _company_to_record(company: Optional[CompanySummary]) -> Optional[dict[str, Any]]:
    if company is None:
        return None
    return {"id": company.id, "contactName": company.contact_name}
