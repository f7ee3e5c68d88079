"""
Geometry ordering for presentation
"""

from typing import List, Sequence

from loguru import logger

from .models import NormalizedGeometry

SORT_OPTIONS = ("default", "nodes-asc", "nodes-desc", "size-asc", "size-desc")


def bounds_size(geometry: NormalizedGeometry) -> float:
    """Bounding box area, or the non-zero side for degenerate boxes"""
    width = geometry.bounds.width
    height = geometry.bounds.height
    if width == 0 or height == 0:
        return max(width, height)
    return width * height


def sort_geometries(geometries: Sequence[NormalizedGeometry], sort_by: str = "default") -> List[NormalizedGeometry]:
    """
    Return a sorted copy of the geometries

    Args:
        geometries: Geometries to sort (left untouched)
        sort_by: One of SORT_OPTIONS; unknown values keep the input order
    """
    ordered = list(geometries)

    if sort_by == "nodes-asc":
        ordered.sort(key=lambda g: g.node_count)
    elif sort_by == "nodes-desc":
        ordered.sort(key=lambda g: g.node_count, reverse=True)
    elif sort_by == "size-asc":
        ordered.sort(key=bounds_size)
    elif sort_by == "size-desc":
        ordered.sort(key=bounds_size, reverse=True)
    elif sort_by != "default":
        logger.warning(f"Unknown sort option '{sort_by}', keeping input order")

    return ordered
