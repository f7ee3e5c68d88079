"""
Path ordering

Linearizes a connected component of ways into ordered coordinate chains.
"""

from typing import Any, Dict, List, Sequence

from loguru import logger

from .endpoints import EndpointGraph, WayId, coordinate_to_key, endpoint_keys
from .rings import Chain


def node_degrees(way_ids: Sequence[WayId], way_map: Dict[WayId, Any]) -> Dict[str, int]:
    """Number of way-ends at each endpoint key of the component"""
    degrees: Dict[str, int] = {}
    for way_id in way_ids:
        first_key, last_key = endpoint_keys(way_map[way_id].coordinates)
        degrees[first_key] = degrees.get(first_key, 0) + 1
        if first_key != last_key:
            degrees[last_key] = degrees.get(last_key, 0) + 1
    return degrees


def order_component(
    way_ids: Sequence[WayId],
    way_map: Dict[WayId, Any],
    endpoint_graph: EndpointGraph,
) -> List[Chain]:
    """
    Order the ways of a component into chains

    Simple chains and loops are walked end to end and returned as a single
    chain. Branching components (more than two terminals, or any node where
    exactly three way-ends meet) are returned one chain per way, unmerged.

    Args:
        way_ids: Way IDs of one connected component
        way_map: Way ID to way object (``coordinates`` in [lon, lat])
        endpoint_graph: Graph the component was found in

    Returns:
        List of coordinate chains. Way objects are never modified.
    """
    if len(way_ids) == 1:
        return [list(way_map[way_ids[0]].coordinates)]

    degrees = node_degrees(way_ids, way_map)
    terminals = {key for key, degree in degrees.items() if degree == 1}

    if len(terminals) > 2 or any(degree == 3 for degree in degrees.values()):
        return [list(way_map[way_id].coordinates) for way_id in way_ids]

    start_id = way_ids[0]
    start_coords = list(way_map[start_id].coordinates)

    if terminals:
        for way_id in way_ids:
            coords = way_map[way_id].coordinates
            first_key, last_key = endpoint_keys(coords)
            if first_key in terminals or last_key in terminals:
                start_id = way_id
                # Orient so the terminal comes first
                if last_key in terminals and first_key not in terminals:
                    start_coords = list(reversed(coords))
                else:
                    start_coords = list(coords)
                break

    members = set(way_ids)
    used = {start_id}
    ordered = start_coords

    while len(used) < len(way_ids):
        tail_key = coordinate_to_key(ordered[-1])
        next_id = None

        for conn in endpoint_graph.get(tail_key, []):
            if conn.way_id in members and conn.way_id not in used:
                next_id = conn.way_id
                break

        if next_id is None:
            logger.debug(
                f"Path walk stopped after {len(used)}/{len(way_ids)} ways at {tail_key}"
            )
            break

        next_coords = way_map[next_id].coordinates
        first_key, last_key = endpoint_keys(next_coords)
        if first_key == tail_key:
            ordered.extend(next_coords[1:])
        elif last_key == tail_key:
            ordered.extend(list(reversed(next_coords))[1:])

        used.add(next_id)

    return [ordered]
