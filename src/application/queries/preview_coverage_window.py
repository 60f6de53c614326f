"""
PreviewCoverageWindowQuery - Coverage Preview Read Query

Query object and handler returning the square search window around a point,
used by map UIs to preview what a radius covers.

Responsibility:
    - Query: latitude, longitude and the clamped radius
    - Handler: builds the GeoJSON Polygon via the geometry kernel

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Performs no zone or service lookups
    - Uses the same 111 km per degree approximation as the bounding-box filter
"""

import logging
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from src.application.commands.match_coordinate import (
    LATITUDE_KEYS,
    LONGITUDE_KEYS,
    RADIUS_KEYS,
    first_present,
    normalise_radius,
    parse_number,
)
from src.domain.geo.matching_config import DEFAULT_RADIUS_KM, KM_PER_DEGREE
from src.domain.geo.services.geometry_kernel import GeometryKernelProtocol
from src.domain.shared.exceptions import InvalidCoordinateError

logger = logging.getLogger(__name__)


class PreviewCoverageWindowQuery(BaseModel):
    """
    Query object for a coverage preview.

    Only finiteness of latitude and longitude is required; the window of a
    point near a pole may extend past the valid coordinate range.

    Attributes:
        latitude: Window centre latitude
        longitude: Window centre longitude
        radius_km: Half-width of the window in km, clamped like match requests
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    radius_km: float = DEFAULT_RADIUS_KM

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "PreviewCoverageWindowQuery":
        """
        Build a query from a raw payload (same key aliases as match requests).

        Raises:
            InvalidCoordinateError: If latitude or longitude is not a finite number
        """
        payload = payload or {}
        latitude = parse_number(first_present(payload, LATITUDE_KEYS))
        longitude = parse_number(first_present(payload, LONGITUDE_KEYS))

        if latitude is None or longitude is None:
            raise InvalidCoordinateError(
                "Valid latitude and longitude are required",
                field="latitude" if latitude is None else "longitude",
            )

        return cls(
            latitude=latitude,
            longitude=longitude,
            radius_km=normalise_radius(first_present(payload, RADIUS_KEYS)),
        )


class PreviewCoverageWindowQueryHandler:
    """
    Handler producing the preview polygon.

    Usage:
        handler = PreviewCoverageWindowQueryHandler(ShapelyGeometryKernel())
        polygon = await handler.handle(query)
    """

    def __init__(self, geometry: GeometryKernelProtocol) -> None:
        self.geometry = geometry

    async def handle(self, query: PreviewCoverageWindowQuery) -> dict[str, Any]:
        """
        Square window of +/- radius_km / 111 degrees around the point.

        Returns:
            GeoJSON Polygon with ring [W,S], [E,S], [E,N], [W,N], [W,S]

        Raises:
            InvalidCoordinateError: If the query carries a non-finite coordinate
        """
        for field, value in (("latitude", query.latitude), ("longitude", query.longitude)):
            if not math.isfinite(value):
                raise InvalidCoordinateError(
                    "Valid latitude and longitude are required",
                    field=field,
                    original_value=value,
                )

        radius_km = normalise_radius(query.radius_km)
        delta = radius_km / KM_PER_DEGREE

        logger.debug(
            f"Preview window for ({query.latitude}, {query.longitude}) radius {radius_km}km"
        )
        return self.geometry.bbox_polygon(
            west=query.longitude - delta,
            south=query.latitude - delta,
            east=query.longitude + delta,
            north=query.latitude + delta,
        )
