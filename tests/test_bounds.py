import pytest

from osmshapes.geometry.bounds import calculate_bounds, get_global_bounds
from osmshapes.models import NormalizedGeometry


def test_linestring_bounds():
    bounds = calculate_bounds([[10.0, 63.0], [10.5, 63.4], [10.2, 62.9]])
    assert bounds.min_lon == 10.0
    assert bounds.max_lon == 10.5
    assert bounds.min_lat == 62.9
    assert bounds.max_lat == 63.4
    assert bounds.width == pytest.approx(0.5)
    assert bounds.height == pytest.approx(0.5)


def test_nested_multipolygon_bounds():
    coords = [
        [[[0, 0], [2, 0], [2, 2], [0, 0]]],
        [[[-1, 5], [1, 5], [1, 6], [-1, 5]]],
    ]
    bounds = calculate_bounds(coords)
    assert (bounds.min_lon, bounds.max_lon) == (-1, 2)
    assert (bounds.min_lat, bounds.max_lat) == (0, 6)


def test_empty_coordinates_raise():
    with pytest.raises(ValueError):
        calculate_bounds([])
    with pytest.raises(ValueError):
        calculate_bounds([[]])


def test_geometry_bounds_follow_coordinates():
    geom = NormalizedGeometry(
        id=1, source_kind="way", geometry_type="LineString",
        coordinates=[[1, 2], [3, 5]]
    )
    assert geom.bounds.width == 2
    assert geom.bounds.height == 3
    assert geom.model_dump()["bounds"]["max_lat"] == 5

    moved = geom.model_copy(update={"coordinates": [[0, 0], [1, 1]]})
    assert moved.bounds.max_lon == 1
    assert moved.bounds.height == 1


def test_global_bounds():
    a = NormalizedGeometry(id=1, source_kind="way", geometry_type="LineString", coordinates=[[0, 0], [1, 1]])
    b = NormalizedGeometry(id=2, source_kind="way", geometry_type="LineString", coordinates=[[4, -2], [5, 0]])
    bounds = get_global_bounds([a, b])
    assert (bounds.min_lon, bounds.max_lon, bounds.min_lat, bounds.max_lat) == (0, 5, -2, 1)

    with pytest.raises(ValueError):
        get_global_bounds([])
