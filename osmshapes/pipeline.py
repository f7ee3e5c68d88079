"""
Element pipeline

Turns raw Overpass elements into normalized geometries:

  1. Parse raw element dicts into typed OSM elements
  2. Drop nodes, unsupported relations and ways without geometry (with warnings)
  3. Emit closed area ways as Polygons
  4. Assemble multipolygon and route relations
  5. Coalesce all remaining ways into connected components
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from .config import ParserConfig, get_config
from .geometry.complexity import ComplexityError
from .models import NormalizedGeometry, ParseResult, ParseWarning
from .osm.coalesce import coalesce_open_ways, way_to_linestring
from .osm.models import OSMNode, OSMRelation, OSMWay
from .osm.parser import OSMResponseParser
from .osm.relations import RelationProcessor
from .osm.tags import is_area


class ElementPipeline:
    """
    Normalize Overpass elements into renderable geometries

    Usage:
        pipeline = ElementPipeline()
        result = pipeline.run(data["elements"], group_by_tag="name")
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or get_config()
        self.parser = OSMResponseParser()
        self.relation_processor = RelationProcessor(self.config.route_member_warning_threshold)

    def run(
        self,
        elements: List[Dict[str, Any]],
        group_by_tag: Optional[str] = None
    ) -> ParseResult:
        """
        Parse elements into geometries and warnings

        Args:
            elements: Raw Overpass elements
            group_by_tag: Tag key to partition open ways by before merging;
                falls back to the configured default

        Returns:
            ParseResult with geometries and warnings

        Raises:
            ComplexityError: If the ungrouped open ways form a dense network
        """
        group_by_tag = group_by_tag or self.config.group_by_tag
        geometries: List[NormalizedGeometry] = []
        warnings: List[ParseWarning] = []
        open_ways: List[OSMWay] = []

        for element in self.parser.parse_elements(elements):
            if isinstance(element, OSMNode):
                warnings.append(ParseWarning(
                    message=f"Skipped node {element.id}: Nodes are not supported",
                    osm_type="node",
                    osm_id=element.id
                ))
            elif isinstance(element, OSMRelation):
                geometry = self._process_relation(element, warnings)
                if geometry is not None:
                    geometries.append(geometry)
            elif isinstance(element, OSMWay):
                self._process_way(element, geometries, open_ways, warnings)

        if open_ways:
            geometries.extend(self._coalesce(open_ways, group_by_tag, warnings))

        logger.info(f"Parsed {len(elements or [])} elements: {len(geometries)} geometries, "
                    f"{len(warnings)} warnings")

        return ParseResult(geometries=geometries, warnings=warnings)

    def _process_relation(
        self,
        relation: OSMRelation,
        warnings: List[ParseWarning]
    ) -> Optional[NormalizedGeometry]:
        relation_type = relation.relation_type

        if relation_type == "route":
            return self.relation_processor.parse_route(relation, warnings)

        if relation_type == "multipolygon":
            return self.relation_processor.parse_multipolygon(relation, warnings)

        warnings.append(ParseWarning(
            message=f"Skipped relation {relation.id}: Not a multipolygon or route "
                    f"(type=\"{relation_type or 'missing'}\")",
            osm_type="relation",
            osm_id=relation.id
        ))
        return None

    def _process_way(
        self,
        way: OSMWay,
        geometries: List[NormalizedGeometry],
        open_ways: List[OSMWay],
        warnings: List[ParseWarning]
    ) -> None:
        if not way.coordinates:
            warnings.append(ParseWarning(
                message=f"Skipped way {way.id}: No geometry data",
                osm_type="way",
                osm_id=way.id
            ))
            return

        if way.is_closed() and is_area(way.tags):
            geometries.append(NormalizedGeometry(
                id=way.id,
                source_kind="way",
                tags=way.tags,
                geometry_type="Polygon",
                coordinates=[list(way.coordinates)]
            ))
        else:
            open_ways.append(way)

    def _coalesce(
        self,
        open_ways: List[OSMWay],
        group_by_tag: Optional[str],
        warnings: List[ParseWarning]
    ) -> List[NormalizedGeometry]:
        try:
            return coalesce_open_ways(open_ways, group_by_tag)
        except ComplexityError:
            raise
        except Exception as e:
            way_ids = [w.id for w in open_ways]
            logger.error(f"Coalescing {len(open_ways)} open ways failed: {e}")
            warnings.append(ParseWarning(
                message=f"Failed to coalesce {len(open_ways)} open ways: {e} "
                        f"(ways: {', '.join(str(i) for i in way_ids)})",
                osm_ids=way_ids
            ))
            return [way_to_linestring(way) for way in open_ways]


def parse_elements(
    elements: List[Dict[str, Any]],
    group_by_tag: Optional[str] = None
) -> ParseResult:
    """Parse raw Overpass elements with the default configuration"""
    return ElementPipeline().run(elements, group_by_tag=group_by_tag)
