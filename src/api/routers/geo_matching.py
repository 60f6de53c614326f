"""
API Router for Geo Matching

Responsibility:
    HTTP interface for coordinate matching and coverage previews.
    Thin layer that delegates to Application Layer use cases via dependency injection.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (GeoMatchingUseCase, PreviewCoverageWindowQueryHandler)
    - Request bodies are read leniently (aliases, numeric strings); normalisation
      and validation belong to MatchCoordinateCommand
    - Errors are mapped by the global exception handlers in src.api.main

Contains:
    - POST /geo-matching/match - Rank zones covering or nearest to a coordinate
    - POST /geo-matching/preview - Square search window polygon
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.api.schemas.common import ErrorResponse
from src.application.commands.match_coordinate import MatchCoordinateCommand
from src.application.queries.preview_coverage_window import (
    PreviewCoverageWindowQuery,
    PreviewCoverageWindowQueryHandler,
)
from src.application.services.geo_matching_use_case import GeoMatchingUseCase
from src.domain.geo.value_objects.match_result import MatchResponse
from src.infrastructure.geometry.shapely_geometry_kernel import ShapelyGeometryKernel
from src.infrastructure.persistence.store_factory import get_geo_stores

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================


class GeoMatchRequest(BaseModel):
    """
    Raw match request.

    Fields are left untyped and normalised by MatchCoordinateCommand: radius
    and limit are clamped, invalid filter entries dropped, and only
    latitude/longitude can reject the request (422 INVALID_COORDINATE).
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "latitude": 51.5074,
                "longitude": -0.1278,
                "radiusKm": 25,
                "limit": 15,
                "demandLevels": ["high", "medium"],
                "categories": ["plumbing"],
            }
        },
    )

    latitude: Any = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: Any = Field(
        default=None, validation_alias=AliasChoices("longitude", "lng", "lon")
    )
    radius_km: Any = Field(
        default=None, validation_alias=AliasChoices("radiusKm", "radius_km", "radius")
    )
    limit: Any = None
    demand_levels: Any = Field(
        default=None, validation_alias=AliasChoices("demandLevels", "demand_levels")
    )
    categories: Any = None


class CoveragePreviewRequest(BaseModel):
    """Raw coverage preview request."""

    model_config = ConfigDict(extra="ignore")

    latitude: Any = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: Any = Field(
        default=None, validation_alias=AliasChoices("longitude", "lng", "lon")
    )
    radius_km: Any = Field(
        default=None, validation_alias=AliasChoices("radiusKm", "radius_km", "radius")
    )


class CoveragePreviewResponse(BaseModel):
    """GeoJSON Polygon of the search window."""

    geometry: dict[str, Any] = Field(description="GeoJSON Polygon")


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================


router = APIRouter(
    prefix="/geo-matching",
    tags=["geo-matching"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Domain rule violated"},
        422: {
            "model": ErrorResponse,
            "description": "Unprocessable Entity - Invalid latitude or longitude",
        },
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
        502: {"model": ErrorResponse, "description": "Bad Gateway - Zone or service store failed"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


async def get_geo_matching_use_case() -> GeoMatchingUseCase:
    """GeoMatchingUseCase wired to the stores selected by GEO_STORE_BACKEND."""
    stores = await get_geo_stores()
    return GeoMatchingUseCase(
        zone_store=stores.zone_store,
        service_store=stores.service_store,
        geometry=ShapelyGeometryKernel(),
    )


def get_preview_handler() -> PreviewCoverageWindowQueryHandler:
    return PreviewCoverageWindowQueryHandler(geometry=ShapelyGeometryKernel())


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "/match",
    status_code=status.HTTP_200_OK,
    response_model=MatchResponse,
    summary="Match a coordinate against service zones",
    description=(
        "Finds the zones containing or nearest to the coordinate, ranks them by "
        "demand, matched services, distance and polygon containment, and returns "
        "up to 6 zones with their services. Falls back to the closest zone when "
        "no zone contains the point."
    ),
)
async def match_coordinate(
    request: GeoMatchRequest,
    use_case: GeoMatchingUseCase = Depends(get_geo_matching_use_case),
) -> MatchResponse:
    """
    Match a coordinate.

    Raises:
        InvalidCoordinateError: Mapped to 422 by the global handler
        UpstreamStoreError: Mapped to 502 by the global handler
    """
    command = MatchCoordinateCommand.from_payload(request.model_dump())
    return await use_case.execute(command)


@router.post(
    "/preview",
    status_code=status.HTTP_200_OK,
    response_model=CoveragePreviewResponse,
    summary="Preview the search window of a radius",
    description="Square polygon of +/- radius/111 degrees around the coordinate. No zone lookups.",
)
async def preview_coverage_window(
    request: CoveragePreviewRequest,
    handler: PreviewCoverageWindowQueryHandler = Depends(get_preview_handler),
) -> CoveragePreviewResponse:
    query = PreviewCoverageWindowQuery.from_payload(request.model_dump())
    geometry = await handler.handle(query)
    return CoveragePreviewResponse(geometry=geometry)
