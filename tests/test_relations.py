from osmshapes.osm.parser import OSMResponseParser
from osmshapes.osm.relations import RelationProcessor


def parse_relation(raw):
    return OSMResponseParser.parse_element(raw)


def test_multipolygon_with_hole(make_relation, square, inner_square):
    relation = parse_relation(make_relation(5, [("outer", square), ("inner", inner_square)]))
    warnings = []

    geometry = RelationProcessor().parse_multipolygon(relation, warnings)

    assert warnings == []
    assert geometry.geometry_type == "MultiPolygon"
    assert geometry.source_kind == "relation"
    assert geometry.coordinates == [[square, inner_square]]


def test_outer_ring_from_fragments(make_relation):
    relation = parse_relation(make_relation(6, [
        ("outer", [[0, 0], [2, 0], [2, 2]]),
        ("outer", [[0, 0], [0, 2], [2, 2]]),
    ]))
    geometry = RelationProcessor().parse_multipolygon(relation, [])

    ring = geometry.coordinates[0][0]
    assert ring[0] == ring[-1]
    assert len(ring) == 5


def test_every_outer_gets_every_inner(make_relation, square, inner_square):
    # Known lossy case: the hole sits inside the first outer only, yet both
    # polygons carry it
    far_square = [[10, 10], [11, 10], [11, 11], [10, 11], [10, 10]]
    relation = parse_relation(make_relation(7, [
        ("outer", square),
        ("outer", far_square),
        ("inner", inner_square),
    ]))

    geometry = RelationProcessor().parse_multipolygon(relation, [])

    assert geometry.coordinates == [[square, inner_square], [far_square, inner_square]]


def test_unmergeable_inners_are_dropped(make_relation, square):
    relation = parse_relation(make_relation(8, [
        ("outer", square),
        ("inner", [[0.2, 0.2], [0.4, 0.4]]),
    ]))
    warnings = []

    geometry = RelationProcessor().parse_multipolygon(relation, warnings)

    assert geometry.coordinates == [[square]]
    assert warnings == []


def test_multipolygon_rejections(make_relation, square):
    processor = RelationProcessor()
    cases = {
        "No members": {"type": "relation", "id": 1, "tags": {"type": "multipolygon"}, "members": []},
        "No way members with geometry": {
            "type": "relation", "id": 2, "tags": {"type": "multipolygon"},
            "members": [{"type": "way", "ref": 9, "role": "outer"}, {"type": "node", "ref": 3, "role": ""}]
        },
        "No outer ways": make_relation(3, [("inner", square)]),
        "Outer ways cannot be merged into closed rings": make_relation(4, [("outer", [[0, 0], [1, 1]])]),
    }

    for reason, raw in cases.items():
        warnings = []
        assert processor.parse_multipolygon(parse_relation(raw), warnings) is None
        assert len(warnings) == 1
        assert warnings[0].message == f"Skipped relation {raw['id']}: {reason}"
        assert warnings[0].osm_type == "relation"
        assert warnings[0].osm_id == raw["id"]


def test_route_keeps_member_order(make_relation):
    raw = make_relation(20, [
        ("", [[0, 0], [1, 0]]),
        ("forward", [[1, 0], [2, 0]]),
        ("", [[3, 0], [2, 0]]),
    ], tags={"type": "route", "route": "hiking"})
    warnings = []

    geometry = RelationProcessor().parse_route(parse_relation(raw), warnings)

    assert warnings == []
    assert geometry.geometry_type == "MultiLineString"
    assert geometry.coordinates == [[[0, 0], [1, 0]], [[1, 0], [2, 0]], [[3, 0], [2, 0]]]


def test_route_gap_warns_but_returns(make_relation):
    raw = make_relation(21, [
        ("", [[0, 0], [1, 0]]),
        ("", [[5, 5], [6, 5]]),
        ("", [[7, 7], [8, 8]]),
    ], tags={"type": "route"})
    warnings = []

    geometry = RelationProcessor().parse_route(parse_relation(raw), warnings)

    assert geometry is not None
    assert len(geometry.coordinates) == 3
    assert [w.message for w in warnings] == ["Route relation 21 has gaps between members"]


def test_route_without_ways(make_relation):
    raw = {"type": "relation", "id": 22, "tags": {"type": "route"},
           "members": [{"type": "node", "ref": 1, "role": "stop"}]}
    warnings = []

    assert RelationProcessor().parse_route(parse_relation(raw), warnings) is None
    assert warnings[0].message == "Skipped route relation 22: No way members with geometry"


def test_long_route_warns(make_relation):
    members = [("", [[i, 0], [i + 1, 0]]) for i in range(101)]
    warnings = []

    geometry = RelationProcessor().parse_route(
        parse_relation(make_relation(23, members, tags={"type": "route"})), warnings
    )

    assert len(geometry.coordinates) == 101
    assert [w.message for w in warnings] == ["Route relation 23 has 101 members (may be slow to render)"]
