"""
OSM data models

Data classes for representing raw OSM nodes, ways and relations
"""

from typing import List, Dict, Optional, Union
from dataclasses import dataclass, field

from ..geometry.rings import is_closed

OSMId = Union[int, str]


@dataclass
class OSMNode:
    """Represents an OSM node (point)"""
    id: OSMId
    lat: Optional[float]
    lon: Optional[float]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMWay:
    """Represents an OSM way (line or polygon)"""
    id: OSMId
    tags: Dict[str, str] = field(default_factory=dict)
    coordinates: List[List[float]] = field(default_factory=list)  # [lon, lat]

    def is_closed(self) -> bool:
        return is_closed(self.coordinates)


@dataclass
class OSMMember:
    """A relation member; only way members carry coordinates"""
    type: str
    role: str = ""
    ref: Optional[OSMId] = None
    coordinates: List[List[float]] = field(default_factory=list)  # [lon, lat]


@dataclass
class OSMRelation:
    """Represents an OSM relation"""
    id: OSMId
    tags: Dict[str, str] = field(default_factory=dict)
    members: List[OSMMember] = field(default_factory=list)

    @property
    def relation_type(self) -> Optional[str]:
        return self.tags.get("type") or None

    def way_members(self) -> List[OSMMember]:
        """Way members that have geometry, in member order"""
        return [m for m in self.members if m.type == "way" and m.coordinates]
