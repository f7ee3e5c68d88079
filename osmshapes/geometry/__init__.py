"""
Geometry reconstruction algorithms

Pure functions over [lon, lat] coordinate chains:
- Bounds: bounding boxes
- Rings: endpoint stitching into closed rings
- Endpoints: coordinate-to-way index
- Complexity: dense network guard
- Components: connected components
- Paths: ordering a component into chains
"""

from .bounds import Bounds, calculate_bounds, get_global_bounds
from .rings import coords_equal, is_closed, merge_into_rings
from .endpoints import Endpoint, build_endpoint_graph, coordinate_to_key
from .complexity import ComplexityError, check_complexity
from .components import find_components
from .paths import order_component

__all__ = [
    "Bounds",
    "calculate_bounds",
    "get_global_bounds",
    "coords_equal",
    "is_closed",
    "merge_into_rings",
    "Endpoint",
    "build_endpoint_graph",
    "coordinate_to_key",
    "ComplexityError",
    "check_complexity",
    "find_components",
    "order_component",
]
