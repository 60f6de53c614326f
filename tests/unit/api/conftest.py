"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient
- Dependency overrides wiring the use case to in-memory stores
- Sample zone/service records
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.routers.geo_matching import get_geo_matching_use_case
from src.application.services.geo_matching_use_case import GeoMatchingUseCase
from src.infrastructure.persistence.memory import InMemoryServiceStore, InMemoryZoneStore


@pytest.fixture
def sample_records(zone_record, service_record):
    """One zone around (0.5, 0.5) owned by company-1, with two services."""
    return {
        "zones": [zone_record("zone-1", demand="high", company_id="company-1")],
        "services": [
            service_record("service-1", "company-1", created_at="2024-03-01T10:00:00Z"),
            service_record(
                "service-2",
                "company-1",
                category="electrical",
                created_at="2024-03-02T10:00:00Z",
            ),
        ],
    }


@pytest.fixture
def geo_use_case(sample_records, geometry):
    """GeoMatchingUseCase backed by in-memory stores seeded with sample_records."""
    return GeoMatchingUseCase(
        zone_store=InMemoryZoneStore.from_records(sample_records["zones"]),
        service_store=InMemoryServiceStore.from_records(sample_records["services"]),
        geometry=geometry,
    )


@pytest.fixture
def override_use_case():
    """
    Replace the use case dependency for one test.

    Usage:
        override_use_case(mock_use_case)
    """

    def _override(use_case):
        app.dependency_overrides[get_geo_matching_use_case] = lambda: use_case

    yield _override
    app.dependency_overrides.pop(get_geo_matching_use_case, None)


@pytest.fixture
def client(override_use_case, geo_use_case):
    """
    FastAPI TestClient with the use case wired to in-memory sample stores.
    """
    override_use_case(geo_use_case)
    return TestClient(app)


@pytest.fixture
def lenient_client():
    """TestClient returning 500 responses instead of re-raising server errors."""
    return TestClient(app, raise_server_exceptions=False)
