"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - geometry: ShapelyGeometryKernel
    - square_boundary: factory for square GeoJSON polygons
    - make_zone / make_service: factories for domain DTOs
    - zone_record / service_record: factories for plain store records

Usage:
    Tests automatically have access to these fixtures by name:

    def test_something(make_zone, geometry):
        zone = make_zone("zone-1", west=0, south=0, east=1, north=1)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from src.domain.geo.entities.service import ProviderSummary, Service
from src.domain.geo.entities.zone import CompanySummary, Zone
from src.domain.geo.matching_config import DemandLevel
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.coordinate import Coordinate
from src.infrastructure.geometry.shapely_geometry_kernel import ShapelyGeometryKernel

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# GEOMETRY FIXTURES
# ============================================================================


def square(west: float, south: float, east: float, north: float) -> dict[str, Any]:
    """GeoJSON Polygon of an axis-aligned box."""
    return {
        "type": "Polygon",
        "coordinates": [
            [[west, south], [east, south], [east, north], [west, north], [west, south]]
        ],
    }


@pytest.fixture(scope="session")
def geometry() -> ShapelyGeometryKernel:
    """Shared shapely geometry kernel (stateless)."""
    return ShapelyGeometryKernel()


@pytest.fixture
def square_boundary():
    """Factory for square GeoJSON polygons."""
    return square


# ============================================================================
# DOMAIN DTO FIXTURES
# ============================================================================


@pytest.fixture
def make_zone():
    """
    Factory for Zone DTOs built around a square boundary.

    Examples:
        >>> zone = make_zone("zone-1", west=0, south=0, east=1, north=1, demand="high")
    """

    def _make_zone(
        zone_id: str,
        west: float = 0.0,
        south: float = 0.0,
        east: float = 1.0,
        north: float = 1.0,
        demand: Optional[str] = "medium",
        company_id: Optional[str] = None,
        with_boundary: bool = True,
        with_centroid: bool = True,
        with_bounding_box: bool = True,
    ) -> Zone:
        company_id = company_id or f"company-{zone_id}"
        return Zone(
            id=zone_id,
            company_id=company_id,
            name=f"Zone {zone_id}",
            demand_level=DemandLevel.parse(demand),
            bounding_box=(
                BoundingBox(west=west, east=east, north=north, south=south)
                if with_bounding_box
                else None
            ),
            centroid=(
                Coordinate(latitude=(south + north) / 2, longitude=(west + east) / 2)
                if with_centroid
                else None
            ),
            boundary=square(west, south, east, north) if with_boundary else None,
            metadata={"region": zone_id},
            company=CompanySummary(id=company_id, contact_name="Dana Contact"),
        )

    return _make_zone


@pytest.fixture
def make_service():
    """
    Factory for Service DTOs; age_hours orders them (0 = newest).
    """

    def _make_service(
        service_id: str,
        company_id: str,
        category: Optional[str] = "plumbing",
        age_hours: Optional[int] = 0,
    ) -> Service:
        created_at = None if age_hours is None else BASE_TIME - timedelta(hours=age_hours)
        return Service(
            id=service_id,
            company_id=company_id,
            title=f"Service {service_id}",
            description="Fixed-price visit",
            category=category,
            price=120,
            currency="GBP",
            provider=ProviderSummary(id=f"provider-{service_id}", name="Sam Provider"),
            company=CompanySummary(id=company_id, contact_name="Dana Contact"),
            created_at=created_at,
            updated_at=created_at,
        )

    return _make_service


# ============================================================================
# STORE RECORD FIXTURES
# ============================================================================


@pytest.fixture
def zone_record():
    """Factory for plain zone records as held by the stores."""

    def _zone_record(
        zone_id: str,
        west: float = 0.0,
        south: float = 0.0,
        east: float = 1.0,
        north: float = 1.0,
        demand: Optional[str] = "medium",
        company_id: Optional[str] = None,
    ) -> dict[str, Any]:
        company_id = company_id or f"company-{zone_id}"
        return {
            "id": zone_id,
            "companyId": company_id,
            "name": f"Zone {zone_id}",
            "demandLevel": demand,
            "boundingBox": {"west": west, "east": east, "north": north, "south": south},
            "centroid": {
                "type": "Point",
                "coordinates": [(west + east) / 2, (south + north) / 2],
            },
            "boundary": square(west, south, east, north),
            "metadata": {"region": zone_id},
            "company": {"id": company_id, "contactName": "Dana Contact"},
        }

    return _zone_record


@pytest.fixture
def service_record():
    """Factory for plain service records as held by the stores."""

    def _service_record(
        service_id: str,
        company_id: str,
        category: Optional[str] = "plumbing",
        created_at: str = "2024-03-01T12:00:00Z",
    ) -> dict[str, Any]:
        return {
            "id": service_id,
            "companyId": company_id,
            "title": f"Service {service_id}",
            "description": "Fixed-price visit",
            "category": category,
            "price": 120,
            "currency": "GBP",
            "provider": {"id": f"provider-{service_id}", "firstName": "Sam", "lastName": "Provider"},
            "company": {"id": company_id, "contactName": "Dana Contact"},
            "createdAt": created_at,
            "updatedAt": created_at,
        }

    return _service_record


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Registers custom markers for test categorization.

    Markers:
        - integration: Full pipeline tests with in-memory stores
        - unit: Unit tests (no external dependencies)
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (full pipeline with in-memory stores)"
    )
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
