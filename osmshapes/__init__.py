"""
osmshapes - normalize OpenStreetMap elements into renderable geometries

Reconstructs polygons and lines from Overpass API results: closed area ways,
multipolygon and route relations, and open ways merged into connected
components.
"""

from .config import get_config, validate_config
from .models import NormalizedGeometry, ParseResult, ParseWarning
from .geometry import Bounds, ComplexityError, calculate_bounds, get_global_bounds
from .pipeline import ElementPipeline, parse_elements

__all__ = [
    "get_config",
    "validate_config",
    "NormalizedGeometry",
    "ParseResult",
    "ParseWarning",
    "Bounds",
    "ComplexityError",
    "calculate_bounds",
    "get_global_bounds",
    "ElementPipeline",
    "parse_elements",
]

__version__ = "1.0.0"
