"""
Bounding box calculations

Axis-aligned bounds for [lon, lat] coordinate arrays of any GeoJSON nesting
depth, and the global bounds of a set of geometries
"""

import math
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict


class Bounds(BaseModel):
    """Axis-aligned bounding box in degrees"""
    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float
    width: float
    height: float


def _is_position(coord: Any) -> bool:
    return (
        isinstance(coord, (list, tuple))
        and len(coord) >= 2
        and isinstance(coord[0], (int, float))
        and isinstance(coord[1], (int, float))
    )


def calculate_bounds(coordinates: List[Any]) -> Bounds:
    """
    Calculate the bounding box of a coordinate array

    Args:
        coordinates: [lon, lat] pairs, or nested lists of them (rings, polygons)

    Returns:
        Bounds covering every position

    Raises:
        ValueError: If there are no positions to measure
    """
    if not coordinates:
        raise ValueError("Cannot calculate bounds for empty coordinates")

    min_lat = math.inf
    max_lat = -math.inf
    min_lon = math.inf
    max_lon = -math.inf

    stack = [coordinates]
    while stack:
        item = stack.pop()
        if _is_position(item):
            lon, lat = item[0], item[1]
            min_lat = min(min_lat, lat)
            max_lat = max(max_lat, lat)
            min_lon = min(min_lon, lon)
            max_lon = max(max_lon, lon)
        elif isinstance(item, (list, tuple)):
            stack.extend(item)

    if min_lat == math.inf:
        raise ValueError("Cannot calculate bounds: no [lon, lat] positions found")

    return Bounds(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
        width=max_lon - min_lon,
        height=max_lat - min_lat,
    )


def get_global_bounds(geometries: Iterable[Any]) -> Bounds:
    """Bounds enclosing the bounds of every geometry"""
    boxes = [g.bounds for g in geometries]
    if not boxes:
        raise ValueError("Cannot calculate global bounds for empty geometries")

    min_lat = min(b.min_lat for b in boxes)
    max_lat = max(b.max_lat for b in boxes)
    min_lon = min(b.min_lon for b in boxes)
    max_lon = max(b.max_lon for b in boxes)
    return Bounds(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
        width=max_lon - min_lon,
        height=max_lat - min_lat,
    )
