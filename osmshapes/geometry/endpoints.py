"""
Endpoint graph

Index from rounded endpoint coordinates to the ways that start or end there.
Adjacency between ways is always resolved through this index.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Union

WayId = Union[int, str]

# Fractional digits kept in coordinate keys
COORDINATE_PRECISION = 7


@dataclass(frozen=True)
class Endpoint:
    """One way-end touching a coordinate"""
    way_id: WayId
    position: str  # "start" or "end"


EndpointGraph = Dict[str, List[Endpoint]]


def coordinate_to_key(coord: Sequence[float]) -> str:
    """Stable string key for a [lon, lat] coordinate"""
    # Adding 0.0 turns -0.0 (also after rounding) into 0.0
    lon = round(coord[0], COORDINATE_PRECISION) + 0.0
    lat = round(coord[1], COORDINATE_PRECISION) + 0.0
    return f"{lon:.{COORDINATE_PRECISION}f},{lat:.{COORDINATE_PRECISION}f}"


def key_to_coordinate(key: str) -> List[float]:
    """Parse a coordinate key back into [lon, lat]"""
    lon, lat = key.split(",")
    return [float(lon), float(lat)]


def endpoint_keys(coordinates: Sequence[Sequence[float]]):
    """(first, last) endpoint keys of a coordinate chain"""
    return coordinate_to_key(coordinates[0]), coordinate_to_key(coordinates[-1])


def build_endpoint_graph(ways: Iterable[Any]) -> EndpointGraph:
    """
    Build the endpoint graph for a set of ways

    Args:
        ways: Objects with ``id`` and ``coordinates`` ([lon, lat] list)

    Returns:
        Dict mapping coordinate key to the endpoints that touch it. A way whose
        two ends share a key is recorded once, as its start.
    """
    graph: EndpointGraph = {}

    for way in ways:
        first_key, last_key = endpoint_keys(way.coordinates)

        graph.setdefault(first_key, []).append(Endpoint(way.id, "start"))
        if first_key != last_key:
            graph.setdefault(last_key, []).append(Endpoint(way.id, "end"))

    return graph
