"""
OSM response parser

Parses Overpass API elements into OSMNode, OSMWay and OSMRelation objects
"""

from typing import Any, Dict, List, Optional, Union

from loguru import logger

from .models import OSMMember, OSMNode, OSMRelation, OSMWay

OSMElement = Union[OSMNode, OSMWay, OSMRelation]


class OSMResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_geometry(geometry: Optional[List[Any]]) -> List[List[float]]:
        """
        Convert an Overpass geometry list to [lon, lat] coordinates

        Overpass 'out geom' provides {"lat": ..., "lon": ...} objects; [lon, lat]
        pairs are accepted as-is. Points without both values are skipped.
        """
        coords = []
        for point in geometry or []:
            if isinstance(point, dict):
                lat = point.get("lat")
                lon = point.get("lon")
                if lat is None or lon is None:
                    continue
                coords.append([lon, lat])
            elif isinstance(point, (list, tuple)) and len(point) >= 2:
                coords.append([point[0], point[1]])
        return coords

    @staticmethod
    def parse_tags(tags: Optional[Dict[str, Any]]) -> Dict[str, str]:
        """OSM tag values are strings; hand-written input may carry numbers or nulls"""
        return {str(k): str(v) for k, v in (tags or {}).items() if v is not None}

    @classmethod
    def parse_element(cls, element: Dict[str, Any]) -> Optional[OSMElement]:
        """Parse one raw element, or return None for an unknown type"""
        element_type = element.get("type")
        tags = cls.parse_tags(element.get("tags"))

        if element_type == "node":
            return OSMNode(
                id=element.get("id"),
                lat=element.get("lat"),
                lon=element.get("lon"),
                tags=tags
            )

        if element_type == "way":
            return OSMWay(
                id=element.get("id"),
                tags=tags,
                coordinates=cls.parse_geometry(element.get("geometry"))
            )

        if element_type == "relation":
            members = []
            for member in element.get("members") or []:
                members.append(OSMMember(
                    type=member.get("type", ""),
                    role=member.get("role") or "",
                    ref=member.get("ref"),
                    coordinates=cls.parse_geometry(member.get("geometry"))
                ))
            return OSMRelation(id=element.get("id"), tags=tags, members=members)

        logger.debug(f"Ignoring element {element.get('id')} of unknown type '{element_type}'")
        return None

    @classmethod
    def parse_elements(cls, elements: List[Dict[str, Any]]) -> List[OSMElement]:
        """
        Parse raw Overpass elements, preserving order

        Args:
            elements: The "elements" array of an Overpass JSON response

        Returns:
            Typed elements; elements of unknown type are dropped
        """
        parsed = []
        for element in elements or []:
            item = cls.parse_element(element)
            if item is not None:
                parsed.append(item)
        return parsed

    @classmethod
    def parse_response(cls, data: Dict[str, Any]) -> List[OSMElement]:
        """Parse a full Overpass JSON response"""
        return cls.parse_elements(data.get("elements", []))
