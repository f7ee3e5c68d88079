"""
Relation-specific logic

Builds geometries from multipolygon and route relations
"""

from typing import List, Optional

from loguru import logger

from ..config import get_config
from ..geometry.rings import coords_equal, merge_into_rings
from ..models import NormalizedGeometry, ParseWarning
from .models import OSMRelation


class RelationProcessor:
    """Processes multipolygon and route relations"""

    def __init__(self, route_member_warning_threshold: Optional[int] = None):
        self.config = get_config()
        self.route_member_warning_threshold = (
            route_member_warning_threshold or self.config.route_member_warning_threshold
        )

    @staticmethod
    def _skip(
        relation: OSMRelation,
        reason: str,
        warnings: List[ParseWarning],
        label: str = "relation"
    ) -> None:
        logger.debug(f"Relation {relation.id}: {reason}")
        warnings.append(ParseWarning(
            message=f"Skipped {label} {relation.id}: {reason}",
            osm_type="relation",
            osm_id=relation.id
        ))

    def parse_multipolygon(
        self,
        relation: OSMRelation,
        warnings: List[ParseWarning]
    ) -> Optional[NormalizedGeometry]:
        """
        Assemble a multipolygon relation into a MultiPolygon

        Outer and inner members are merged into rings separately. Every outer
        ring gets all inner rings as holes; inner rings are not matched to the
        outer ring that contains them. Inner rings that cannot be closed are
        dropped.

        Args:
            relation: Relation tagged type=multipolygon
            warnings: Warning list to append to

        Returns:
            MultiPolygon geometry, or None if the relation was skipped
        """
        if not relation.members:
            self._skip(relation, "No members", warnings)
            return None

        way_members = relation.way_members()
        if not way_members:
            self._skip(relation, "No way members with geometry", warnings)
            return None

        outer_ways = [m.coordinates for m in way_members if m.role == "outer"]
        inner_ways = [m.coordinates for m in way_members if m.role == "inner"]

        if not outer_ways:
            self._skip(relation, "No outer ways", warnings)
            return None

        outer_rings = merge_into_rings(outer_ways)
        if not outer_rings:
            self._skip(relation, "Outer ways cannot be merged into closed rings", warnings)
            return None

        inner_rings = merge_into_rings(inner_ways) if inner_ways else []
        if inner_ways and not inner_rings:
            logger.debug(f"Relation {relation.id}: dropping {len(inner_ways)} unmergeable inner ways")

        polygons = [[outer] + inner_rings for outer in outer_rings]

        return NormalizedGeometry(
            id=relation.id,
            source_kind="relation",
            tags=relation.tags,
            geometry_type="MultiPolygon",
            coordinates=polygons
        )

    def parse_route(
        self,
        relation: OSMRelation,
        warnings: List[ParseWarning]
    ) -> Optional[NormalizedGeometry]:
        """
        Turn a route relation into a MultiLineString in member order

        Members are not reconnected or reordered. A gap between consecutive
        members only produces a warning.
        """
        way_members = relation.way_members()

        if not way_members:
            self._skip(relation, "No way members with geometry", warnings, label="route relation")
            return None

        if len(way_members) > self.route_member_warning_threshold:
            warnings.append(ParseWarning(
                message=f"Route relation {relation.id} has {len(way_members)} members (may be slow to render)",
                osm_type="relation",
                osm_id=relation.id
            ))

        linestrings = [list(m.coordinates) for m in way_members]

        for current, following in zip(linestrings, linestrings[1:]):
            current_end = current[-1]
            if not coords_equal(current_end, following[0]) and not coords_equal(current_end, following[-1]):
                warnings.append(ParseWarning(
                    message=f"Route relation {relation.id} has gaps between members",
                    osm_type="relation",
                    osm_id=relation.id
                ))
                break

        return NormalizedGeometry(
            id=relation.id,
            source_kind="relation",
            tags=relation.tags,
            geometry_type="MultiLineString",
            coordinates=linestrings
        )
