"""
Tag heuristics

Area detection for closed ways (after JOSM's area rules) and helpers for the
internal bookkeeping tags added to merged components.
"""

from typing import Dict, Iterable, List, Optional, Tuple

# Keys whose presence marks a closed way as an area
AREA_KEYS = (
    "building", "landuse", "amenity", "shop", "building:part",
    "boundary", "historic", "place", "area:highway",
)

AREA_HIGHWAYS = {"rest_area", "services", "platform"}

LINEAR_LEISURE = {"picnic_table", "slipway", "firepit"}

AREA_NATURAL = {
    "water", "wood", "scrub", "land", "grassland", "heath",
    "rock", "bare_rock", "sand", "beach", "scree", "glacier",
    "shingle", "fell", "reef", "stone", "mud", "landslide",
}

# Tags starting with this prefix are added by osmshapes, not OSM
INTERNAL_TAG_PREFIX = "_"

COMPONENT_WAY_COUNT_TAG = "_component_way_count"
COMPONENT_WAY_IDS_TAG = "_component_way_ids"


def is_area(tags: Optional[Dict[str, str]]) -> bool:
    """
    Decide whether a closed way should be rendered as a filled area

    Args:
        tags: OSM tags of the way

    Returns:
        True for areas, False for linear features (including untagged ways)
    """
    if not tags:
        return False

    area = tags.get("area")
    if area == "yes":
        return True
    if area == "no":
        return False

    if any(tags.get(key) for key in AREA_KEYS):
        return True

    if tags.get("highway") in AREA_HIGHWAYS:
        return True

    if tags.get("railway") == "platform":
        return True

    if tags.get("aeroway") == "aerodrome":
        return True

    leisure = tags.get("leisure")
    if leisure and leisure not in LINEAR_LEISURE:
        return True

    if tags.get("natural") in AREA_NATURAL:
        return True

    return False


def is_internal_tag(key: str) -> bool:
    return key.startswith(INTERNAL_TAG_PREFIX)


def split_internal_tags(tags: Dict[str, str]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Split tags into (OSM tags, internal bookkeeping tags)"""
    osm_tags = {k: v for k, v in tags.items() if not is_internal_tag(k)}
    internal = {k: v for k, v in tags.items() if is_internal_tag(k)}
    return osm_tags, internal


def sort_tag_keys(keys: Iterable[str]) -> List[str]:
    """Sort keys alphabetically, with internal keys after all OSM keys"""
    keys = list(keys)
    return sorted(k for k in keys if not is_internal_tag(k)) + sorted(k for k in keys if is_internal_tag(k))
