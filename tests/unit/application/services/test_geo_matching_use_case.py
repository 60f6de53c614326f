"""
Tests for GeoMatchingUseCase.

Covers:
- Point inside a polygon (score, reason, no fallback)
- Fallback to the globally closest zone
- Empty zone store and unmeasurable zones
- Invalid coordinates rejected before any store call
- Demand level and category filters
- Per-zone service allocation and the 6-zone cap
- Store failures propagated unchanged
"""

from unittest.mock import AsyncMock

import pytest

from src.application.commands.match_coordinate import MatchCoordinateCommand
from src.application.exceptions import UpstreamStoreError
from src.application.services.geo_matching_use_case import GeoMatchingUseCase
from src.domain.geo.matching_config import FallbackReason
from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.shared.exceptions import InvalidCoordinateError
from src.infrastructure.persistence.memory import InMemoryServiceStore, InMemoryZoneStore


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def zone_store():
    store = AsyncMock()
    store.list_zones.return_value = []
    return store


@pytest.fixture
def service_store():
    store = AsyncMock()
    store.list_services_for_companies.return_value = []
    return store


@pytest.fixture
def use_case(zone_store, service_store, geometry):
    return GeoMatchingUseCase(
        zone_store=zone_store,
        service_store=service_store,
        geometry=geometry,
    )


def command(**payload):
    payload.setdefault("latitude", 0.5)
    payload.setdefault("longitude", 0.5)
    return MatchCoordinateCommand.from_payload(payload)


# ============================================================================
# POLYGON CONTAINMENT
# ============================================================================


@pytest.mark.asyncio
async def test_point_inside_high_demand_zone(
    use_case, zone_store, service_store, make_zone, make_service, geometry
):
    """Inside a high-demand zone whose company has 2 services."""
    zone = make_zone("zone-1", demand="high", company_id="c1")
    zone_store.list_zones.return_value = [zone]
    service_store.list_services_for_companies.return_value = [
        make_service("s1", "c1", age_hours=1),
        make_service("s2", "c1", age_hours=2),
    ]

    response = await use_case.execute(command(latitude=0.4, longitude=0.3))

    assert len(response.matches) == 1
    match = response.matches[0]
    distance = round(geometry.distance_km(Coordinate(0.4, 0.3), zone.centroid), 2)
    assert match.inside_polygon is True
    assert "falls within" in match.reason
    assert match.distance_km == distance
    assert match.score == round(3 * 12 + 2 * 3 + 10 - min(distance, 40) * 0.75, 2)
    assert [s.id for s in match.services] == ["s1", "s2"]
    assert response.fallback is None
    assert response.total_services == 2


@pytest.mark.asyncio
async def test_response_echoes_normalised_request(use_case, zone_store, make_zone):
    zone_store.list_zones.return_value = [make_zone("zone-1")]

    response = await use_case.execute(
        command(radiusKm=900, limit="abc", demandLevels=["medium", "x"], categories=["plumbing", ""])
    )

    assert response.request.radius_km == 200.0
    assert response.request.limit == 15
    assert response.request.demand_levels == ["medium"]
    assert response.request.categories == ["plumbing"]


@pytest.mark.asyncio
async def test_repeated_requests_differ_only_in_audit_time(use_case, zone_store, make_zone):
    zone_store.list_zones.return_value = [make_zone("a"), make_zone("b", west=0.5, east=2)]

    first = await use_case.execute(command())
    second = await use_case.execute(command())

    assert first.model_dump(exclude={"audited_at"}) == second.model_dump(exclude={"audited_at"})
    assert first.audited_at.tzinfo is not None


# ============================================================================
# FALLBACK
# ============================================================================


@pytest.mark.asyncio
async def test_fallback_returns_single_closest_zone(use_case, zone_store, make_zone):
    near = make_zone("near", west=10, south=10, east=11, north=11)
    far = make_zone("far", west=50, south=50, east=51, north=51)
    zone_store.list_zones.return_value = [far, near]

    response = await use_case.execute(command(latitude=0.0, longitude=0.0, radiusKm=5))

    assert [m.zone.id for m in response.matches] == ["near"]
    assert response.matches[0].inside_polygon is False
    assert response.matches[0].reason.startswith("Closest zone within ")
    assert response.fallback.reason == FallbackReason.CLOSEST_ZONE_PROJECTED
    assert response.fallback.zone_id == "near"
    assert response.fallback.distance_km == response.matches[0].distance_km


@pytest.mark.asyncio
async def test_nearby_zones_without_containment_set_fallback_descriptor(
    use_case, zone_store, make_zone
):
    """Candidates from the radius buffer only: fallback descriptor from the top match."""
    zone_store.list_zones.return_value = [make_zone("z", west=0, south=0, east=1, north=1)]

    response = await use_case.execute(command(latitude=0.5, longitude=1.1, radiusKm=25))

    assert len(response.matches) == 1
    assert response.matches[0].inside_polygon is False
    assert response.fallback.reason == FallbackReason.CLOSEST_ZONE_PROJECTED
    assert response.fallback.zone_id == "z"


@pytest.mark.asyncio
async def test_demand_filter_excludes_contained_zones(use_case, zone_store, make_zone):
    """demandLevels=["high"] drops medium/low zones from candidacy."""
    medium = make_zone("medium", demand="medium")
    low = make_zone("low", demand="low", west=0.2, east=0.8)
    zone_store.list_zones.return_value = [medium, low]

    response = await use_case.execute(command(demandLevels=["high"]))

    assert all(not match.inside_polygon for match in response.matches)
    assert len(response.matches) == 1
    assert response.fallback.reason == FallbackReason.CLOSEST_ZONE_PROJECTED


# ============================================================================
# EMPTY STORES
# ============================================================================


@pytest.mark.asyncio
async def test_empty_zone_store_returns_no_zones_configured(use_case, service_store):
    response = await use_case.execute(command())

    assert response.matches == []
    assert response.total_services == 0
    assert response.fallback.reason == FallbackReason.NO_ZONES_CONFIGURED
    service_store.list_services_for_companies.assert_not_awaited()


@pytest.mark.asyncio
async def test_unmeasurable_zones_return_no_zones_configured(
    use_case, zone_store, service_store, make_zone
):
    zone_store.list_zones.return_value = [
        make_zone("ghost", with_boundary=False, with_centroid=False, with_bounding_box=False)
    ]

    response = await use_case.execute(command())

    assert response.matches == []
    assert response.fallback.reason == FallbackReason.NO_ZONES_CONFIGURED
    service_store.list_services_for_companies.assert_not_awaited()


# ============================================================================
# INVALID INPUT
# ============================================================================


@pytest.mark.asyncio
async def test_invalid_latitude_fails_before_any_store_call(use_case, zone_store, service_store):
    bad_command = MatchCoordinateCommand(latitude=95, longitude=0)

    with pytest.raises(InvalidCoordinateError) as exc_info:
        await use_case.execute(bad_command)

    assert exc_info.value.field == "latitude"
    zone_store.list_zones.assert_not_called()
    service_store.list_services_for_companies.assert_not_called()


@pytest.mark.asyncio
async def test_missing_longitude_fails_before_any_store_call(use_case, zone_store):
    with pytest.raises(InvalidCoordinateError) as exc_info:
        await use_case.execute(MatchCoordinateCommand(latitude=10))

    assert exc_info.value.field == "longitude"
    zone_store.list_zones.assert_not_called()


# ============================================================================
# SERVICES
# ============================================================================


@pytest.mark.asyncio
async def test_single_service_query_with_category_filter(
    use_case, zone_store, service_store, make_zone
):
    zone_store.list_zones.return_value = [
        make_zone("a", company_id="c1"),
        make_zone("b", company_id="c2", west=0.4, east=1.5),
        make_zone("c", company_id="c1", west=0.1, east=0.9),
    ]

    await use_case.execute(command(categories=["plumbing"]))

    service_store.list_services_for_companies.assert_awaited_once_with(
        ["c1", "c2"], ["plumbing"]
    )


@pytest.mark.asyncio
async def test_services_allocated_per_zone(use_case, zone_store, service_store, make_zone, make_service):
    """limit=4 over 2 candidates: max(3, ceil(4/2)) = 3 services per zone."""
    zone_store.list_zones.return_value = [
        make_zone("a", company_id="c1"),
        make_zone("b", company_id="c2", west=0.4, east=1.5),
    ]
    service_store.list_services_for_companies.return_value = [
        make_service(f"c1-{i}", "c1", age_hours=i) for i in range(5)
    ] + [make_service("c2-0", "c2")]

    response = await use_case.execute(command(limit=4))

    by_zone = {m.zone.id: [s.id for s in m.services] for m in response.matches}
    assert by_zone["a"] == ["c1-0", "c1-1", "c1-2"]
    assert by_zone["b"] == ["c2-0"]
    assert response.total_services == 4


@pytest.mark.asyncio
async def test_at_most_six_zones_returned(use_case, zone_store, make_zone):
    zone_store.list_zones.return_value = [
        make_zone(f"zone-{i}", west=0.0, east=1.0 + i * 0.01) for i in range(9)
    ]

    response = await use_case.execute(command(limit=100))

    assert len(response.matches) == 6
    scores = [m.score for m in response.matches]
    assert scores == sorted(scores, reverse=True)


@pytest.mark.asyncio
async def test_service_count_raises_ranking(use_case, zone_store, service_store, make_zone, make_service):
    """Equal zones: the one whose company offers services ranks first."""
    zone_store.list_zones.return_value = [
        make_zone("empty", company_id="c-empty"),
        make_zone("busy", company_id="c-busy"),
    ]
    service_store.list_services_for_companies.return_value = [make_service("s1", "c-busy")]

    response = await use_case.execute(command())

    assert [m.zone.id for m in response.matches] == ["busy", "empty"]


# ============================================================================
# STORE FAILURES
# ============================================================================


@pytest.mark.asyncio
async def test_zone_store_failure_propagates(use_case, zone_store, service_store):
    zone_store.list_zones.side_effect = UpstreamStoreError("down", store="zones")

    with pytest.raises(UpstreamStoreError):
        await use_case.execute(command())

    service_store.list_services_for_companies.assert_not_called()


@pytest.mark.asyncio
async def test_service_store_failure_propagates(use_case, zone_store, service_store, make_zone):
    zone_store.list_zones.return_value = [make_zone("a")]
    service_store.list_services_for_companies.side_effect = UpstreamStoreError(
        "down", store="services"
    )

    with pytest.raises(UpstreamStoreError, match="services"):
        await use_case.execute(command())


# ============================================================================
# WITH IN-MEMORY STORES
# ============================================================================


@pytest.mark.asyncio
async def test_with_in_memory_stores(geometry, zone_record, service_record):
    use_case = GeoMatchingUseCase(
        zone_store=InMemoryZoneStore.from_records([zone_record("z1", company_id="c1", demand="low")]),
        service_store=InMemoryServiceStore.from_records(
            [service_record("s1", "c1", category="plumbing"), service_record("s2", "c1", category="roofing")]
        ),
        geometry=geometry,
    )

    response = await use_case.execute(command(categories=["roofing"]))

    assert response.matches[0].zone.demand_level == "low"
    assert [s.id for s in response.matches[0].services] == ["s2"]
    assert response.matches[0].services[0].provider.name == "Sam Provider"


@pytest.mark.asyncio
async def test_stored_box_midpoint_is_distance_reference(geometry):
    zone_store = InMemoryZoneStore.from_records(
        [
            {
                "id": "triangle",
                "companyId": "c1",
                "demandLevel": "high",
                "boundingBox": {"west": 0, "east": 1, "north": 1, "south": 0},
                "boundary": {
                    "type": "Polygon",
                    "coordinates": [[[0, 0], [1, 0], [0, 1], [0, 0]]],
                },
            }
        ]
    )
    use_case = GeoMatchingUseCase(
        zone_store=zone_store,
        service_store=InMemoryServiceStore.from_records([]),
        geometry=geometry,
    )

    response = await use_case.execute(command(latitude=0.5, longitude=0.5))

    assert response.matches[0].zone.id == "triangle"
    assert response.matches[0].distance_km == 0.0
