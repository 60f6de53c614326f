"""
Geometry Primitives

Contract for the geometry operations used by the matching engine, plus the
pure helpers that do not need a geometry library.

Responsibility:
    - GeometryKernelProtocol: point-in-polygon, great-circle distance, bbox polygon
    - bounding_box_contains(): buffered bounding-box test (1 degree ~ 111 km)
    - resolve_geometry(): extract a Polygon/MultiPolygon from a stored boundary
    - zone_reference_point(): centroid, else bounding-box midpoint

Architecture Notes:
    - Protocol interface, implemented in Infrastructure (shapely)
    - zone_reference_point() is shared by the candidate filter and the
      fallback resolver so both compute distances from the same point
"""

from typing import Any, Optional, Protocol

from src.domain.geo.entities.zone import Zone
from src.domain.geo.matching_config import KM_PER_DEGREE
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.coordinate import Coordinate

SUPPORTED_GEOMETRY_TYPES = ("Polygon", "MultiPolygon")


class GeometryKernelProtocol(Protocol):
    """
    Geometry operations needed by zone matching.

    No behaviour depends on the implementing library's internal
    representation; geometries cross this boundary as GeoJSON mappings.
    """

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        """
        Great-circle distance in kilometres (unrounded).

        Must be symmetric and non-negative.
        """
        ...

    def point_in_polygon(self, point: Coordinate, geometry: dict[str, Any]) -> bool:
        """
        Whether point lies within a Polygon or MultiPolygon geometry.

        Returns False for any geometry that cannot be interpreted; never raises.
        """
        ...

    def bbox_polygon(
        self, west: float, south: float, east: float, north: float
    ) -> dict[str, Any]:
        """GeoJSON Polygon covering the given box."""
        ...


def bounding_box_contains(
    point: Coordinate, box: Optional[BoundingBox], buffer_km: float = 0.0
) -> bool:
    """
    Test whether point falls within box grown by buffer_km on every side.

    The buffer is converted to degrees with the fixed 111 km per degree
    approximation on both axes.

    Args:
        point: Query coordinate
        box: Zone bounding box (None or non-numeric -> False)
        buffer_km: Buffer in kilometres

    Returns:
        True if the point is inside the buffered box, never raises

    Examples:
        >>> box = BoundingBox(west=0.0, east=1.0, north=1.0, south=0.0)
        >>> bounding_box_contains(Coordinate(latitude=0.5, longitude=1.5), box)
        False
        >>> bounding_box_contains(Coordinate(latitude=0.5, longitude=1.5), box, buffer_km=60)
        True
    """
    if box is None or not box.is_numeric():
        return False

    buffer_degrees = buffer_km / KM_PER_DEGREE
    return (
        box.west - buffer_degrees <= point.longitude <= box.east + buffer_degrees
        and box.south - buffer_degrees <= point.latitude <= box.north + buffer_degrees
    )


def resolve_geometry(boundary: Any) -> Optional[dict[str, Any]]:
    """
    Extract a usable geometry from a stored zone boundary.

    Accepts a bare GeoJSON geometry or a Feature wrapping one. Only Polygon and
    MultiPolygon are recognised.

    Returns:
        The geometry mapping, or None when the boundary is missing or of
        another kind
    """
    if not isinstance(boundary, dict):
        return None

    geometry = boundary.get("geometry") or boundary
    if not isinstance(geometry, dict):
        return None
    if geometry.get("type") not in SUPPORTED_GEOMETRY_TYPES:
        return None
    if not geometry.get("coordinates"):
        return None
    return geometry


def zone_reference_point(zone: Zone) -> Optional[Coordinate]:
    """
    Point used to measure the distance to a zone.

    Hierarchy: the stored centroid, else the bounding-box midpoint, else None
    (the zone cannot be ranked by distance).
    """
    if zone.centroid is not None:
        return zone.centroid
    if zone.bounding_box is not None:
        return zone.bounding_box.midpoint()
    return None
