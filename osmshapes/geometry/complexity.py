"""
Network complexity guard

Refuses large inputs that look like a dense network (a road grid, for example)
rather than a set of separate linear features.
"""

from typing import List

from loguru import logger
from pydantic import BaseModel

from .endpoints import EndpointGraph, WayId, key_to_coordinate

# Inputs with fewer ways than this are never checked
WAY_COUNT_THRESHOLD = 1000

# A node touched by more way-ends than this counts as complex
COMPLEXITY_THRESHOLD = 3

# Number of nodes reported in the error details
TOP_NODE_COUNT = 5

SUGGESTION = (
    "This appears to be a road network. Try querying more specific linear "
    "features like trails, waterways, or power lines, or group ways by a tag."
)


class ComplexNode(BaseModel):
    coords: List[float]  # [lon, lat]
    connection_count: int
    way_ids: List[WayId]


class ComplexityDetails(BaseModel):
    complex_node_count: int
    threshold: int
    top_complex_nodes: List[ComplexNode]
    suggestion: str


class ComplexityError(Exception):
    """Raised when the open-way network is too connected to coalesce"""

    type = "NETWORK_TOO_COMPLEX"

    def __init__(self, message: str, details: ComplexityDetails):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        return {
            "type": self.type,
            "message": self.message,
            "details": self.details.model_dump(),
        }


def check_complexity(endpoint_graph: EndpointGraph, way_count: int) -> None:
    """
    Raise ComplexityError if the network has over-connected nodes

    Args:
        endpoint_graph: Graph built from the ways being coalesced
        way_count: Number of ways in the batch

    Raises:
        ComplexityError: If way_count reaches WAY_COUNT_THRESHOLD and any node
            is touched by more than COMPLEXITY_THRESHOLD way-ends
    """
    if way_count < WAY_COUNT_THRESHOLD:
        return

    complex_nodes = [
        ComplexNode(
            coords=key_to_coordinate(key),
            connection_count=len(connections),
            way_ids=[c.way_id for c in connections],
        )
        for key, connections in endpoint_graph.items()
        if len(connections) > COMPLEXITY_THRESHOLD
    ]

    if not complex_nodes:
        return

    complex_nodes.sort(key=lambda n: n.connection_count, reverse=True)

    message = (
        f"Network too complex: Found {len(complex_nodes)} node(s) "
        f"with more than {COMPLEXITY_THRESHOLD} connections"
    )
    details = ComplexityDetails(
        complex_node_count=len(complex_nodes),
        threshold=COMPLEXITY_THRESHOLD,
        top_complex_nodes=complex_nodes[:TOP_NODE_COUNT],
        suggestion=SUGGESTION,
    )
    logger.warning(f"{message} ({way_count} ways)")
    raise ComplexityError(message, details)
