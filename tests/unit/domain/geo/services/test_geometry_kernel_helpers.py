"""
Tests for the pure geometry helpers of the geo domain.
Covers: bounding_box_contains (buffer), resolve_geometry, zone_reference_point.
"""

import pytest

from src.domain.geo.services.geometry_kernel import (
    bounding_box_contains,
    resolve_geometry,
    zone_reference_point,
)
from src.domain.geo.value_objects.bounding_box import BoundingBox
from src.domain.geo.value_objects.coordinate import Coordinate

UNIT_BOX = BoundingBox(west=0.0, east=1.0, north=1.0, south=0.0)


# ============================================================================
# bounding_box_contains()
# ============================================================================


@pytest.mark.parametrize(
    "latitude,longitude,expected",
    [
        (0.5, 0.5, True),
        (0.0, 0.0, True),  # corner is inclusive
        (1.0, 1.0, True),
        (0.5, 1.01, False),
        (-0.01, 0.5, False),
    ],
)
def test_bounding_box_contains_without_buffer(latitude, longitude, expected):
    point = Coordinate(latitude=latitude, longitude=longitude)
    assert bounding_box_contains(point, UNIT_BOX) is expected


def test_buffer_is_converted_with_111_km_per_degree():
    """A 111 km buffer grows the box by exactly one degree on every side."""
    inside_buffer = Coordinate(latitude=0.5, longitude=1.99)
    outside_buffer = Coordinate(latitude=0.5, longitude=2.01)

    assert bounding_box_contains(inside_buffer, UNIT_BOX, buffer_km=111.0) is True
    assert bounding_box_contains(outside_buffer, UNIT_BOX, buffer_km=111.0) is False


def test_buffer_applies_to_latitude_too():
    point = Coordinate(latitude=-0.4, longitude=0.5)
    assert bounding_box_contains(point, UNIT_BOX, buffer_km=55.5) is True
    assert bounding_box_contains(point, UNIT_BOX, buffer_km=33.3) is False


def test_missing_box_is_never_contained():
    assert bounding_box_contains(Coordinate(0.5, 0.5), None, buffer_km=200) is False


def test_non_numeric_box_is_never_contained():
    box = BoundingBox(west="0", east=1.0, north=1.0, south=0.0)
    assert bounding_box_contains(Coordinate(0.5, 0.5), box, buffer_km=200) is False


# ============================================================================
# resolve_geometry()
# ============================================================================


def test_resolve_bare_polygon(square_boundary):
    polygon = square_boundary(0, 0, 1, 1)
    assert resolve_geometry(polygon) is polygon


def test_resolve_feature_wrapping_multipolygon():
    multipolygon = {
        "type": "MultiPolygon",
        "coordinates": [[[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]],
    }
    feature = {"type": "Feature", "properties": {}, "geometry": multipolygon}

    assert resolve_geometry(feature) is multipolygon


@pytest.mark.parametrize(
    "boundary",
    [
        None,
        "POLYGON((0 0, 1 0, 1 1, 0 0))",
        {"type": "Point", "coordinates": [0, 0]},
        {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
        {"type": "Polygon", "coordinates": []},
        {"type": "Feature", "geometry": None},
    ],
)
def test_unusable_boundaries_resolve_to_none(boundary):
    assert resolve_geometry(boundary) is None


# ============================================================================
# zone_reference_point()
# ============================================================================


def test_reference_point_prefers_centroid(make_zone):
    zone = make_zone("zone-1", west=0, south=0, east=2, north=2)
    assert zone_reference_point(zone) == Coordinate(latitude=1.0, longitude=1.0)


def test_reference_point_falls_back_to_box_midpoint(make_zone):
    zone = make_zone("zone-1", west=0, south=0, east=4, north=2, with_centroid=False)
    assert zone_reference_point(zone) == Coordinate(latitude=1.0, longitude=2.0)


def test_reference_point_is_none_without_centroid_and_box(make_zone):
    zone = make_zone("zone-1", with_centroid=False, with_bounding_box=False)
    assert zone_reference_point(zone) is None
