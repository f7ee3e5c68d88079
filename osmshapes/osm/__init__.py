"""
OpenStreetMap element processing

Modular components:
- Models: Data structures (OSMNode, OSMWay, OSMRelation)
- Parser: Overpass element parsing
- Tags: Area detection and internal tag helpers
- Relations: Multipolygon and route assembly
- Coalesce: Merging open ways into components
- API client: Overpass API communication
"""

from .models import OSMMember, OSMNode, OSMRelation, OSMWay
from .parser import OSMResponseParser
from .tags import is_area, sort_tag_keys, split_internal_tags
from .relations import RelationProcessor
from .coalesce import coalesce_open_ways
from .api_client import OverpassAPIClient

__all__ = [
    "OSMMember",
    "OSMNode",
    "OSMRelation",
    "OSMWay",
    "OSMResponseParser",
    "is_area",
    "sort_tag_keys",
    "split_internal_tags",
    "RelationProcessor",
    "coalesce_open_ways",
    "OverpassAPIClient",
]
