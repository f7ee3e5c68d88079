"""
Open way coalescing

Merges open (and closed non-area) ways that share endpoints into components
"""

from typing import Dict, List, Optional, Sequence

from loguru import logger

from ..geometry.complexity import check_complexity
from ..geometry.components import find_components
from ..geometry.endpoints import WayId, build_endpoint_graph
from ..geometry.paths import order_component
from ..models import NormalizedGeometry
from .models import OSMWay
from .tags import COMPONENT_WAY_COUNT_TAG, COMPONENT_WAY_IDS_TAG


def _id_sort_key(way_id: WayId):
    # Numeric IDs first, in numeric order; string IDs after, lexically
    if isinstance(way_id, str):
        return (1, 0, way_id)
    return (0, way_id, "")


def generate_component_id(way_ids: Sequence[WayId]) -> str:
    """Stable ID for a component: its sorted unique way IDs"""
    unique_ids = sorted(set(way_ids), key=_id_sort_key)
    return "component_" + "_".join(str(way_id) for way_id in unique_ids)


def aggregate_component_tags(ways: Sequence[OSMWay]) -> Dict[str, str]:
    """Tags of the first named way (or the first way) plus bookkeeping tags"""
    primary = next((w for w in ways if w.tags.get("name")), ways[0])
    tags = dict(primary.tags)
    tags[COMPONENT_WAY_COUNT_TAG] = str(len(ways))
    tags[COMPONENT_WAY_IDS_TAG] = ",".join(str(w.id) for w in ways)
    return tags


def way_to_linestring(way: OSMWay) -> NormalizedGeometry:
    return NormalizedGeometry(
        id=way.id,
        source_kind="way",
        tags=way.tags,
        geometry_type="LineString",
        coordinates=list(way.coordinates)
    )


def _coalesce_batch(ways: List[OSMWay], check_network: bool) -> List[NormalizedGeometry]:
    endpoint_graph = build_endpoint_graph(ways)

    if check_network:
        check_complexity(endpoint_graph, len(ways))

    components = find_components(ways, endpoint_graph)
    way_map = {w.id: w for w in ways}
    geometries = []

    for component_ids in components:
        if len(component_ids) == 1:
            geometries.append(way_to_linestring(way_map[component_ids[0]]))
            continue

        linestrings = order_component(component_ids, way_map, endpoint_graph)
        component_ways = [way_map[way_id] for way_id in component_ids]

        if len(linestrings) == 1:
            geometry_type, coordinates = "LineString", linestrings[0]
        else:
            geometry_type, coordinates = "MultiLineString", linestrings

        geometries.append(NormalizedGeometry(
            id=generate_component_id(component_ids),
            source_kind="component",
            source_way_ids=list(component_ids),
            tags=aggregate_component_tags(component_ways),
            geometry_type=geometry_type,
            coordinates=coordinates
        ))

    logger.debug(f"Coalesced {len(ways)} ways into {len(geometries)} geometries")
    return geometries


def group_ways_by_tag(ways: Sequence[OSMWay], tag: str) -> Dict[str, List[OSMWay]]:
    """Partition ways by a tag value; ways without it go under ''"""
    groups: Dict[str, List[OSMWay]] = {}
    for way in ways:
        groups.setdefault(way.tags.get(tag) or "", []).append(way)
    return groups


def coalesce_open_ways(
    ways: Sequence[OSMWay],
    group_by_tag: Optional[str] = None
) -> List[NormalizedGeometry]:
    """
    Coalesce open ways into connected components

    Without a grouping tag all ways form one batch and the network complexity
    guard runs. With a grouping tag each tag value is coalesced on its own and
    the guard is skipped.

    Args:
        ways: Open or closed non-area ways
        group_by_tag: Optional tag key to partition ways by

    Returns:
        LineString/MultiLineString geometries

    Raises:
        ComplexityError: If the ungrouped network is too dense
    """
    if not ways:
        return []

    if group_by_tag:
        groups = group_ways_by_tag(ways, group_by_tag)
        logger.info(f"Coalescing {len(ways)} open ways in {len(groups)} groups by '{group_by_tag}'")
        geometries = []
        for group_ways in groups.values():
            geometries.extend(_coalesce_batch(group_ways, check_network=False))
        return geometries

    logger.info(f"Coalescing {len(ways)} open ways")
    return _coalesce_batch(list(ways), check_network=True)
