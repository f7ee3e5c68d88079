"""
Pydantic models for parse results
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .geometry.bounds import Bounds, calculate_bounds, get_global_bounds

OSMId = Union[int, str]
GeometryType = Literal["Polygon", "MultiPolygon", "LineString", "MultiLineString"]
SourceKind = Literal["way", "relation", "component"]

# Nesting depth of a single position inside each geometry type's coordinates
_POSITION_DEPTH = {
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}


class NormalizedGeometry(BaseModel):
    """
    A renderable feature built from one way, one relation, or several merged ways

    Coordinates use GeoJSON nesting for ``geometry_type``. ``bounds`` is
    computed from the coordinates each time it is read.
    """
    model_config = ConfigDict(frozen=True)

    id: OSMId
    source_kind: SourceKind
    source_way_ids: Optional[List[OSMId]] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    geometry_type: GeometryType
    coordinates: List[Any]

    @computed_field
    @property
    def bounds(self) -> Bounds:
        return calculate_bounds(self.coordinates)

    @property
    def node_count(self) -> int:
        """Number of positions in the geometry"""
        depth = _POSITION_DEPTH[self.geometry_type]
        items = self.coordinates
        for _ in range(depth - 1):
            items = [inner for outer in items for inner in outer]
        return len(items)


class ParseWarning(BaseModel):
    """A skipped or degraded element, reported instead of raised"""
    message: str
    osm_type: Optional[Literal["node", "way", "relation"]] = None
    osm_id: Optional[OSMId] = None
    osm_ids: Optional[List[OSMId]] = None  # Batch-level warnings only


class ParseResult(BaseModel):
    geometries: List[NormalizedGeometry] = Field(default_factory=list)
    warnings: List[ParseWarning] = Field(default_factory=list)

    def global_bounds(self) -> Bounds:
        return get_global_bounds(self.geometries)
