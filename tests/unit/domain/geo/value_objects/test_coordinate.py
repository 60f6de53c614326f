"""
Tests for Coordinate Value Object.
Covers: range validation, non-numeric rejection, immutability, GeoJSON rendering.
"""

import math
from dataclasses import FrozenInstanceError

import pytest

from src.domain.geo.value_objects.coordinate import Coordinate
from src.domain.shared.exceptions import DomainException, InvalidCoordinateError


# ============================================================================
# HAPPY PATH TESTS
# ============================================================================


@pytest.mark.parametrize(
    "latitude,longitude",
    [
        (0.0, 0.0),
        (51.5074, -0.1278),
        (90.0, 180.0),  # inclusive upper bounds
        (-90.0, -180.0),  # inclusive lower bounds
        (45, 7),  # ints are accepted
    ],
)
def test_valid_coordinates_are_accepted(latitude, longitude):
    """Test that coordinates inside the WGS84 ranges are accepted."""
    point = Coordinate(latitude=latitude, longitude=longitude)
    assert point.latitude == latitude
    assert point.longitude == longitude


def test_as_lon_lat_uses_geojson_axis_order():
    point = Coordinate(latitude=51.5, longitude=-0.12)
    assert point.as_lon_lat() == (-0.12, 51.5)


def test_to_geojson_renders_point():
    point = Coordinate(latitude=51.5, longitude=-0.12)
    assert point.to_geojson() == {"type": "Point", "coordinates": [-0.12, 51.5]}


def test_coordinates_compare_by_value():
    assert Coordinate(1.0, 2.0) == Coordinate(latitude=1.0, longitude=2.0)


def test_coordinate_is_immutable():
    point = Coordinate(latitude=1.0, longitude=2.0)
    with pytest.raises(FrozenInstanceError):
        point.latitude = 3.0


# ============================================================================
# ERROR TESTS
# ============================================================================


@pytest.mark.parametrize("latitude", [95, -90.0001, math.nan, math.inf, None, "51.5", True])
def test_invalid_latitude_raises_with_field_name(latitude):
    """Test that bad latitudes raise InvalidCoordinateError naming the field."""
    with pytest.raises(InvalidCoordinateError) as exc_info:
        Coordinate(latitude=latitude, longitude=0.0)

    assert exc_info.value.field == "latitude"


@pytest.mark.parametrize("longitude", [180.5, -181, math.nan, -math.inf, None, False])
def test_invalid_longitude_raises_with_field_name(longitude):
    with pytest.raises(InvalidCoordinateError) as exc_info:
        Coordinate(latitude=0.0, longitude=longitude)

    assert exc_info.value.field == "longitude"


def test_latitude_is_validated_before_longitude():
    with pytest.raises(InvalidCoordinateError) as exc_info:
        Coordinate(latitude=95, longitude=500)

    assert exc_info.value.field == "latitude"
    assert exc_info.value.original_value == 95


def test_invalid_coordinate_error_is_domain_exception():
    with pytest.raises(DomainException):
        Coordinate(latitude=-100, longitude=0)
