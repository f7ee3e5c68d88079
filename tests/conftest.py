import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def _points(coords):
    return [{"lon": lon, "lat": lat} for lon, lat in coords]


@pytest.fixture
def make_way():
    """Factory for raw Overpass way elements from [lon, lat] pairs"""
    def factory(way_id, coords, tags=None):
        return {
            "type": "way",
            "id": way_id,
            "tags": tags if tags is not None else {"highway": "path"},
            "geometry": _points(coords)
        }
    return factory


@pytest.fixture
def make_relation():
    """Factory for raw relation elements; members are (role, coords) pairs"""
    def factory(relation_id, members, tags=None):
        return {
            "type": "relation",
            "id": relation_id,
            "tags": tags if tags is not None else {"type": "multipolygon"},
            "members": [
                {"type": "way", "ref": relation_id * 100 + i, "role": role, "geometry": _points(coords)}
                for i, (role, coords) in enumerate(members)
            ]
        }
    return factory


@pytest.fixture
def square():
    return [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]


@pytest.fixture
def inner_square():
    return [[0.25, 0.25], [0.75, 0.25], [0.75, 0.75], [0.25, 0.75], [0.25, 0.25]]
