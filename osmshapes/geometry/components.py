"""
Connected components over the endpoint graph
"""

from collections import deque
from typing import Any, List, Sequence

from .endpoints import EndpointGraph, WayId, endpoint_keys


def find_components(ways: Sequence[Any], endpoint_graph: EndpointGraph) -> List[List[WayId]]:
    """
    Group ways that share endpoints, breadth-first

    Components come out in the order their first way appears in ``ways``;
    within a component, ways are listed in visiting order.
    """
    way_map = {way.id: way for way in ways}
    visited = set()
    components = []

    for way in ways:
        if way.id in visited:
            continue

        component = []
        queue = deque([way.id])

        while queue:
            current_id = queue.popleft()
            if current_id in visited:
                continue

            visited.add(current_id)
            component.append(current_id)

            for key in endpoint_keys(way_map[current_id].coordinates):
                for conn in endpoint_graph.get(key, []):
                    if conn.way_id not in visited:
                        queue.append(conn.way_id)

        components.append(component)

    return components
