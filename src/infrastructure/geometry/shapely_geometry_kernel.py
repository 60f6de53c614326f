"""
ShapelyGeometryKernel - Geometry Primitives Implementation

Concrete implementation of GeometryKernelProtocol from the Domain Layer.

Responsibility:
    - Point-in-polygon for GeoJSON Polygon/MultiPolygon (shapely)
    - Great-circle distance (haversine, mean Earth radius)
    - Bounding-box polygons for coverage previews
    - Derived zone attributes (bounds, centroid) for store records

Architecture Notes:
    - Infrastructure Layer (depends on shapely)
    - Stateless, safe to share across concurrent requests
    - Containment uses covers(): a point on the boundary counts as inside
"""

import logging
import math
from typing import Any, Optional

from shapely.errors import GEOSException, ShapelyError
from shapely.geometry import Point, Polygon, mapping, shape

from src.domain.geo.matching_config import EARTH_RADIUS_KM
from src.domain.geo.services.geometry_kernel import resolve_geometry
from src.domain.geo.value_objects.coordinate import Coordinate

logger = logging.getLogger(__name__)


class ShapelyGeometryKernel:
    """
    Geometry kernel backed by shapely.

    Examples:
        >>> kernel = ShapelyGeometryKernel()
        >>> square = {
        ...     "type": "Polygon",
        ...     "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]],
        ... }
        >>> kernel.point_in_polygon(Coordinate(latitude=0.5, longitude=0.5), square)
        True
        >>> round(kernel.distance_km(Coordinate(0, 0), Coordinate(0, 1)), 2)
        111.2
    """

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        """Haversine distance in kilometres."""
        lat1 = math.radians(a.latitude)
        lat2 = math.radians(b.latitude)
        d_lat = lat2 - lat1
        d_lon = math.radians(b.longitude - a.longitude)

        h = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        )
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))

    def point_in_polygon(self, point: Coordinate, geometry: dict[str, Any]) -> bool:
        """
        Whether point lies within (or on the boundary of) the geometry.

        Returns False for anything that is not a buildable Polygon or
        MultiPolygon. Never raises.
        """
        resolved = resolve_geometry(geometry)
        if resolved is None:
            return False

        try:
            polygon = shape(resolved)
            return bool(polygon.covers(Point(point.longitude, point.latitude)))
        except (ShapelyError, GEOSException, ValueError, TypeError, IndexError, KeyError) as e:
            logger.debug(f"Unusable {resolved.get('type')} geometry: {e}")
            return False

    def bbox_polygon(
        self, west: float, south: float, east: float, north: float
    ) -> dict[str, Any]:
        """
        GeoJSON Polygon of a box.

        Ring order: [W,S], [E,S], [E,N], [W,N], [W,S].
        """
        polygon = Polygon(
            [(west, south), (east, south), (east, north), (west, north), (west, south)]
        )
        return _as_lists(mapping(polygon))

    def derive_attributes(
        self, boundary: Any
    ) -> tuple[Optional[dict[str, float]], Optional[Coordinate]]:
        """
        Bounding box and centroid of a stored boundary.

        Used when a zone record lacks them. Returns (None, None) when the
        boundary cannot be interpreted.
        """
        resolved = resolve_geometry(boundary)
        if resolved is None:
            return None, None

        try:
            geometry = shape(resolved)
            if geometry.is_empty:
                return None, None
            west, south, east, north = geometry.bounds
            centroid = geometry.centroid
            return (
                {"west": west, "south": south, "east": east, "north": north},
                Coordinate(latitude=centroid.y, longitude=centroid.x),
            )
        except (ShapelyError, GEOSException, ValueError, TypeError, IndexError, KeyError) as e:
            logger.warning(f"Cannot derive zone attributes from boundary: {e}")
            return None, None


def _as_lists(value: Any) -> Any:
    """Convert shapely's nested tuples into JSON-style lists."""
    if isinstance(value, dict):
        return {key: _as_lists(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_as_lists(item) for item in value]
    return value
