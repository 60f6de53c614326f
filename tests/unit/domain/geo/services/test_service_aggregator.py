"""
Tests for ServiceAggregator domain service.
Covers: single store call, category forwarding, newest-first grouping,
per-zone allocation budget.
"""

from unittest.mock import AsyncMock

import pytest

from src.domain.geo.services.service_aggregator import ServiceAggregator, per_zone_limit
from src.domain.geo.value_objects.match_candidate import MatchCandidate


@pytest.fixture
def service_store():
    store = AsyncMock()
    store.list_services_for_companies.return_value = []
    return store


@pytest.fixture
def candidates(make_zone):
    return [
        MatchCandidate(zone=make_zone("z1", company_id="c1"), inside_polygon=True, distance_km=1.0),
        MatchCandidate(zone=make_zone("z2", company_id="c2"), inside_polygon=False, distance_km=2.0),
        MatchCandidate(zone=make_zone("z3", company_id="c1"), inside_polygon=False, distance_km=3.0),
    ]


# ============================================================================
# per_zone_limit()
# ============================================================================


@pytest.mark.parametrize(
    "limit,count,expected",
    [
        (15, 1, 15),
        (15, 2, 8),  # ceil(7.5)
        (15, 5, 3),
        (15, 10, 3),  # floor of 3 services per zone
        (100, 3, 34),
        (1, 1, 3),
        (15, 0, 3),
    ],
)
def test_per_zone_limit(limit, count, expected):
    assert per_zone_limit(limit, count) == expected


# ============================================================================
# aggregate()
# ============================================================================


@pytest.mark.asyncio
async def test_aggregate_queries_distinct_companies_once(service_store, candidates):
    aggregator = ServiceAggregator(service_store=service_store)

    await aggregator.aggregate(candidates)

    service_store.list_services_for_companies.assert_awaited_once_with(["c1", "c2"], None)


@pytest.mark.asyncio
async def test_aggregate_forwards_non_empty_category_filter(service_store, candidates):
    aggregator = ServiceAggregator(service_store=service_store)

    await aggregator.aggregate(candidates, ("plumbing", "electrical"))

    service_store.list_services_for_companies.assert_awaited_once_with(
        ["c1", "c2"], ["plumbing", "electrical"]
    )


@pytest.mark.asyncio
async def test_aggregate_groups_newest_first(service_store, candidates, make_service):
    older = make_service("old", "c1", age_hours=48)
    newer = make_service("new", "c1", age_hours=1)
    other = make_service("other", "c2", age_hours=5)
    service_store.list_services_for_companies.return_value = [older, other, newer]
    aggregator = ServiceAggregator(service_store=service_store)

    grouped = await aggregator.aggregate(candidates)

    assert [s.id for s in grouped["c1"]] == ["new", "old"]
    assert [s.id for s in grouped["c2"]] == ["other"]


@pytest.mark.asyncio
async def test_aggregate_keeps_store_order_for_equal_timestamps(
    service_store, candidates, make_service
):
    first = make_service("first", "c1", age_hours=2)
    second = make_service("second", "c1", age_hours=2)
    undated = make_service("undated", "c1", age_hours=None)
    service_store.list_services_for_companies.return_value = [undated, first, second]
    aggregator = ServiceAggregator(service_store=service_store)

    grouped = await aggregator.aggregate(candidates)

    assert [s.id for s in grouped["c1"]] == ["first", "second", "undated"]


@pytest.mark.asyncio
async def test_aggregate_drops_services_of_unrequested_companies(
    service_store, candidates, make_service
):
    service_store.list_services_for_companies.return_value = [make_service("x", "c9")]
    aggregator = ServiceAggregator(service_store=service_store)

    assert await aggregator.aggregate(candidates) == {}


@pytest.mark.asyncio
async def test_aggregate_without_candidates_skips_store(service_store):
    aggregator = ServiceAggregator(service_store=service_store)

    assert await aggregator.aggregate([]) == {}
    service_store.list_services_for_companies.assert_not_awaited()


@pytest.mark.asyncio
async def test_aggregate_propagates_store_errors(service_store, candidates):
    service_store.list_services_for_companies.side_effect = RuntimeError("store down")
    aggregator = ServiceAggregator(service_store=service_store)

    with pytest.raises(RuntimeError, match="store down"):
        await aggregator.aggregate(candidates)


# ============================================================================
# allocate()
# ============================================================================


def test_allocate_slices_each_zone_to_budget(candidates, make_service):
    services = {"c1": [make_service(f"s{i}", "c1", age_hours=i) for i in range(10)]}

    # limit 6 over 3 candidates -> max(3, 2) = 3 per zone
    allocations = ServiceAggregator.allocate(candidates, services, requested_limit=6)

    assert [len(a) for a in allocations] == [3, 0, 3]
    assert [s.id for s in allocations[0]] == ["s0", "s1", "s2"]
    # zones of the same company receive the same leading services
    assert [s.id for s in allocations[2]] == ["s0", "s1", "s2"]


def test_allocate_returns_independent_lists(candidates, make_service):
    services = {"c1": [make_service("s0", "c1")]}

    allocations = ServiceAggregator.allocate(candidates, services, requested_limit=15)
    allocations[0].clear()

    assert len(services["c1"]) == 1
    assert len(allocations[2]) == 1
