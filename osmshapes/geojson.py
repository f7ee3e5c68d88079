"""
GeoJSON import and export

Export turns normalized geometries into a FeatureCollection. Import turns a
GeoJSON file into Overpass-like elements so imported features go through the
same merging logic as Overpass results.
"""

from typing import Any, Dict, List, Sequence, Union

from loguru import logger

from .models import NormalizedGeometry, ParseResult
from .osm.tags import sort_tag_keys, split_internal_tags

# Generated IDs for features without one start here
GENERATED_ID_BASE = 1000000


def to_feature(geometry: NormalizedGeometry) -> Dict[str, Any]:
    """Convert a normalized geometry to a GeoJSON Feature"""
    properties: Dict[str, Any] = {key: geometry.tags[key] for key in sort_tag_keys(geometry.tags)}
    properties["@source_kind"] = geometry.source_kind
    properties["@bounds"] = geometry.bounds.model_dump()
    if geometry.source_way_ids is not None:
        properties["@source_way_ids"] = list(geometry.source_way_ids)

    return {
        "type": "Feature",
        "id": geometry.id,
        "geometry": {
            "type": geometry.geometry_type,
            "coordinates": geometry.coordinates
        },
        "properties": properties
    }


def to_feature_collection(
    result: Union[ParseResult, Sequence[NormalizedGeometry]]
) -> Dict[str, Any]:
    """Convert a parse result (or a list of geometries) to a FeatureCollection"""
    geometries = result.geometries if isinstance(result, ParseResult) else result
    return {
        "type": "FeatureCollection",
        "features": [to_feature(g) for g in geometries]
    }


def _to_points(coords: List[List[float]]) -> List[Dict[str, float]]:
    return [{"lon": c[0], "lat": c[1]} for c in coords]


def _to_tags(properties: Dict[str, Any]) -> Dict[str, str]:
    # OSM tags are strings; nested values and nulls have no tag equivalent
    tags = {
        str(k): str(v)
        for k, v in (properties or {}).items()
        if v is not None and not isinstance(v, (dict, list)) and not str(k).startswith("@")
    }
    # Bookkeeping from a previous export would be stale after re-merging
    osm_tags, _ = split_internal_tags(tags)
    return osm_tags


def _ring_members(id_prefix: str, rings: List[List[List[float]]]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "way",
            "ref": f"{id_prefix}_{i}",
            "role": "outer" if i == 0 else "inner",
            "geometry": _to_points(ring)
        }
        for i, ring in enumerate(rings)
    ]


def geojson_to_elements(geojson: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Convert GeoJSON to Overpass-like elements

    - LineString: way
    - Polygon: way (no holes) or multipolygon relation (with holes)
    - MultiLineString: one way per part, IDs "<id>_<n>"
    - MultiPolygon: one multipolygon relation
    - Point, MultiPoint and features without geometry are skipped

    Args:
        geojson: FeatureCollection or a single Feature

    Returns:
        List of element dicts accepted by the element pipeline

    Raises:
        ValueError: If the input is not a Feature or FeatureCollection
    """
    if not isinstance(geojson, dict) or geojson.get("type") not in ("FeatureCollection", "Feature"):
        raise ValueError("Expected a GeoJSON FeatureCollection or Feature")

    if geojson["type"] == "FeatureCollection":
        features = geojson.get("features") or []
    else:
        features = [geojson]
    elements = []

    for index, feature in enumerate(features):
        geometry = feature.get("geometry") or {}
        coords = geometry.get("coordinates")
        if not coords:
            logger.debug(f"Skipping feature {index}: no geometry")
            continue

        geom_type = geometry.get("type")
        tags = _to_tags(feature.get("properties"))
        feature_id = feature.get("id")
        if feature_id is None:
            feature_id = GENERATED_ID_BASE + index

        if geom_type == "LineString":
            elements.append({"type": "way", "id": feature_id, "tags": tags, "geometry": _to_points(coords)})

        elif geom_type == "Polygon":
            if len(coords) == 1:
                elements.append({"type": "way", "id": feature_id, "tags": tags, "geometry": _to_points(coords[0])})
            else:
                elements.append({
                    "type": "relation",
                    "id": feature_id,
                    "tags": {**tags, "type": "multipolygon"},
                    "members": _ring_members(f"{feature_id}_ring", coords)
                })

        elif geom_type == "MultiLineString":
            for part_index, linestring in enumerate(coords):
                elements.append({
                    "type": "way",
                    "id": f"{feature_id}_{part_index}",
                    "tags": tags,
                    "geometry": _to_points(linestring)
                })

        elif geom_type == "MultiPolygon":
            members = []
            for polygon_index, polygon in enumerate(coords):
                members.extend(_ring_members(f"{feature_id}_member_{polygon_index}", polygon))
            elements.append({
                "type": "relation",
                "id": feature_id,
                "tags": {**tags, "type": "multipolygon"},
                "members": members
            })

        else:
            logger.debug(f"Skipping feature {feature_id}: unsupported geometry type {geom_type}")

    logger.info(f"Converted {len(features)} GeoJSON features into {len(elements)} elements")
    return elements
