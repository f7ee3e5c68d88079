from osmshapes.osm.coalesce import (
    aggregate_component_tags,
    coalesce_open_ways,
    generate_component_id,
    group_ways_by_tag,
)
from osmshapes.osm.models import OSMWay


def test_component_id_is_sorted_and_unique():
    assert generate_component_id([30, 4, 100, 4]) == "component_4_30_100"
    assert generate_component_id(["7_1", 12, "7_0"]) == "component_12_7_0_7_1"


def test_component_id_ignores_traversal_order():
    assert generate_component_id([3, 1, 2]) == generate_component_id([2, 3, 1])


def test_aggregate_tags_prefers_named_way():
    ways = [
        OSMWay(id=1, tags={"highway": "path"}),
        OSMWay(id=2, tags={"highway": "track", "name": "Ridge Trail"}),
    ]
    tags = aggregate_component_tags(ways)
    assert tags == {
        "highway": "track",
        "name": "Ridge Trail",
        "_component_way_count": "2",
        "_component_way_ids": "1,2",
    }
    # Source tags are copied, not modified
    assert "_component_way_count" not in ways[1].tags


def test_aggregate_tags_defaults_to_first_way():
    ways = [OSMWay(id=5, tags={"waterway": "stream"}), OSMWay(id=6, tags={"waterway": "river"})]
    assert aggregate_component_tags(ways)["waterway"] == "stream"


def test_group_ways_by_tag_uses_empty_key_for_missing():
    ways = [
        OSMWay(id=1, tags={"ref": "E6"}),
        OSMWay(id=2, tags={}),
        OSMWay(id=3, tags={"ref": "E6"}),
        OSMWay(id=4, tags={"ref": ""}),
    ]
    groups = group_ways_by_tag(ways, "ref")
    assert list(groups) == ["E6", ""]
    assert [w.id for w in groups["E6"]] == [1, 3]
    assert [w.id for w in groups[""]] == [2, 4]


def test_coalesce_open_ways_empty():
    assert coalesce_open_ways([]) == []


def test_coalesced_bounds_cover_all_chains():
    ways = [
        OSMWay(id=1, coordinates=[[0, 0], [1, 1]]),
        OSMWay(id=2, coordinates=[[1, 1], [2, 5]]),
        OSMWay(id=3, coordinates=[[1, 1], [-3, 0]]),
    ]
    [geometry] = coalesce_open_ways(ways)
    assert geometry.geometry_type == "MultiLineString"
    assert (geometry.bounds.min_lon, geometry.bounds.max_lon) == (-3, 2)
    assert (geometry.bounds.min_lat, geometry.bounds.max_lat) == (0, 5)
