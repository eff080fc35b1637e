"""
Utility functions for spatial geometry operations.

This module contains the coordinate helpers shared by the region builder
and the cell boundary pipeline: longitude wrapping and unwrapping, and
small list operations on point sequences.
"""

from typing import Iterable, List

from nsidc.cellviz.models import Point


def wrap_longitude(lon: float) -> float:
    """
    Wrap a longitude into [-180, 180].

    Values already in range are returned unchanged, so 180 stays 180.
    """
    if -180.0 <= lon <= 180.0:
        return lon
    return ((lon + 180.0) % 360.0) - 180.0


def is_on_seam(lon: float) -> bool:
    """True if the longitude sits exactly on the antimeridian."""
    return abs(lon) == 180.0


def shift_longitude(points: Iterable[Point], offset: float) -> List[Point]:
    """
    Add a constant offset to every longitude.

    Args:
        points: (lon, lat) tuples
        offset: Degrees to add, typically +/-360

    Returns:
        New list of shifted (lon, lat) tuples
    """
    return [(lon + offset, lat) for lon, lat in points]


def drop_consecutive_duplicates(points: Iterable[Point]) -> List[Point]:
    """
    Remove every point that is identical to the point before it.

    Args:
        points: (lon, lat) tuples

    Returns:
        New list with no two consecutive identical points
    """
    deduplicated = []
    for point in points:
        if not deduplicated or point != deduplicated[-1]:
            deduplicated.append(point)
    return deduplicated


def unwrap_longitudes(points: Iterable[Point]) -> List[Point]:
    """
    Make a path continuous across the antimeridian.

    Whenever a step jumps by more than 180 degrees of longitude, the rest of
    the path is shifted by 360 degrees so the step takes the short way
    round. The first point is kept as given.

    Args:
        points: (lon, lat) tuples in [-180, 180] range

    Returns:
        New list of (lon, lat) tuples, possibly outside [-180, 180]
    """
    unwrapped = []
    offset = 0.0
    previous = None
    for lon, lat in points:
        if previous is not None:
            if lon - previous > 180.0:
                offset -= 360.0
            elif previous - lon > 180.0:
                offset += 360.0
        previous = lon
        unwrapped.append((lon + offset, lat))
    return unwrapped
