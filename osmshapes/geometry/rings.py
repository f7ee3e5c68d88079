"""
Ring merging

Stitches open coordinate chains into closed rings by matching exactly equal
endpoints. No distance tolerance is applied.
"""

from typing import List, Optional, Sequence

Chain = List[List[float]]


def coords_equal(coord1: Sequence[float], coord2: Sequence[float]) -> bool:
    """Exact [lon, lat] equality"""
    return coord1[0] == coord2[0] and coord1[1] == coord2[1]


def is_closed(chain: Sequence[Sequence[float]]) -> bool:
    """A chain is closed when it has 3+ positions and its ends are identical"""
    if not chain or len(chain) < 3:
        return False
    return coords_equal(chain[0], chain[-1])


def _try_extend(current: Chain, candidate: Chain) -> Optional[Chain]:
    """Splice candidate onto current, or return None if they share no endpoint"""
    current_start, current_end = current[0], current[-1]
    candidate_start, candidate_end = candidate[0], candidate[-1]

    if coords_equal(current_end, candidate_start):
        return current + candidate[1:]
    if coords_equal(current_end, candidate_end):
        return current + candidate[-2::-1]
    if coords_equal(current_start, candidate_end):
        return candidate[:-1] + current
    if coords_equal(current_start, candidate_start):
        return candidate[:0:-1] + current
    return None


def merge_into_rings(chains: Sequence[Chain]) -> List[Chain]:
    """
    Merge chains into closed rings

    Greedy: the first remaining chain is extended with the first candidate
    that touches either of its ends until it closes, then the next ring is
    started. If any accumulator can no longer be extended without having
    closed, the topology is undeterminable and an empty list is returned.

    Args:
        chains: Coordinate chains in [lon, lat] order

    Returns:
        Closed rings, or [] if the chains cannot all be closed
    """
    if not chains:
        return []

    if len(chains) == 1:
        only = chains[0]
        if only and coords_equal(only[0], only[-1]):
            return [list(only)]
        return []

    remaining = [list(c) for c in chains if c]
    rings = []

    while remaining:
        current = remaining.pop(0)

        while not coords_equal(current[0], current[-1]):
            for i, candidate in enumerate(remaining):
                extended = _try_extend(current, candidate)
                if extended is not None:
                    current = extended
                    del remaining[i]
                    break
            else:
                # Dead end: an open chain that nothing connects to
                return []

        rings.append(current)

    return rings
