"""
Great-circle interpolation between two points on the sphere.

The interpolated line is returned either as a single Polyline or, when the
line crosses the antimeridian, as a MultiPolyline split at +/-180 degrees.
The splitting rule is the dateline handling used by GDAL's
OGRGeometryFactory (and by the arc.js port of it): a line is only split when
it has at least one jump of nearly 360 degrees between the two border bands
and every other step is small, so lines that merely run close to the seam
are left alone.
"""

import logging
import math
from typing import List

from funcy import pairwise
from pyproj import Geod

from nsidc.cellviz import constants
from nsidc.cellviz.models import Arc, MultiPolyline, Point, Polyline

logger = logging.getLogger(__name__)

SPHERE = Geod(ellps="sphere")

# Metres; endpoints closer than this are the same point.
COINCIDENT_DISTANCE = 1e-6
# Metres short of half the circumference at which endpoints are antipodal.
ANTIPODAL_DISTANCE = 1.0


def great_circle(
    start: Point,
    end: Point,
    num_points: int = 100,
    offset: float = constants.DATELINE_OFFSET,
) -> Arc:
    """
    Interpolate the great-circle arc from start to end.

    Args:
        start: (lon, lat) of the first endpoint in degrees
        end: (lon, lat) of the last endpoint in degrees
        num_points: Number of points on the returned arc, endpoints included
        offset: Width in degrees of the border bands either side of the
                antimeridian used to recognize a dateline jump

    Returns:
        Polyline, or MultiPolyline when the arc was split at the antimeridian

    Raises:
        ValueError: If the endpoints are antipodal (the great circle is not
                    unique) or fewer than 2 points are requested
    """
    if num_points < 2:
        raise ValueError(f"Need at least 2 points to describe an arc, got {num_points}")

    points = interpolate(start, end, num_points)
    return split_at_antimeridian(points, offset)


def interpolate(start: Point, end: Point, num_points: int) -> List[Point]:
    """
    Great-circle interpolation of num_points points from start to end.

    Interior points come from pyproj's geodesic on a sphere. The first and
    last points are the endpoints exactly as given. Interior points that
    land on the antimeridian take the sign of the point before them, so a
    line running along the seam stays on one side of it.
    """
    start = (float(start[0]), float(start[1]))
    end = (float(end[0]), float(end[1]))
    if start == end:
        return [start] * num_points

    _, _, distance = SPHERE.inv(start[0], start[1], end[0], end[1])
    if distance < COINCIDENT_DISTANCE:
        return [start] * (num_points - 1) + [end]
    if math.pi * SPHERE.a - distance < ANTIPODAL_DISTANCE:
        raise ValueError(
            f"Endpoints {start} and {end} are antipodal; the great circle is undefined"
        )

    points = [start]
    interior = SPHERE.npts(start[0], start[1], end[0], end[1], num_points - 2) if num_points > 2 else []
    for lon, lat in interior:
        if abs(abs(lon) - 180.0) <= constants.SEAM_TOLERANCE:
            lon = -180.0 if points[-1][0] < 0 else 180.0
        points.append((float(lon), float(lat)))
    points.append(end)

    return points


def has_dateline_jump(points: List[Point], offset: float = constants.DATELINE_OFFSET) -> bool:
    """
    Check whether a point sequence jumps across the antimeridian.

    Returns True if at least one step jumps by more than (360 - offset)
    degrees between the border bands and every other step is shorter than
    offset degrees.

    Args:
        points: List of (lon, lat) tuples in [-180, 180] range
        offset: Border band width in degrees

    Returns:
        True if the sequence should be split at the antimeridian
    """
    left_border = 180.0 - offset
    right_border = -180.0 + offset
    diff_space = 360.0 - offset

    big_diff = False
    max_small_diff = 0.0
    for (prev_lon, _), (lon, _) in pairwise(points):
        diff = abs(lon - prev_lon)
        if diff > diff_space and (
            (lon > left_border and prev_lon < right_border)
            or (prev_lon > left_border and lon < right_border)
        ):
            big_diff = True
        elif diff > max_small_diff:
            max_small_diff = diff

    return big_diff and max_small_diff < offset


def split_at_antimeridian(points: List[Point], offset: float = constants.DATELINE_OFFSET) -> Arc:
    """
    Split a point sequence wherever it jumps across the antimeridian.

    At each jump the crossing latitude is interpolated linearly in unwrapped
    longitude. The current part ends at the crossing on the side of the
    previous point (+180 or -180) and the next part starts at the crossing on
    the opposite side.

    Args:
        points: List of (lon, lat) tuples in [-180, 180] range
        offset: Border band width in degrees

    Returns:
        Polyline if no split was needed, MultiPolyline otherwise
    """
    if not has_dateline_jump(points, offset):
        return Polyline(points)

    diff_space = 360.0 - offset
    parts = [[points[0]]]
    for (prev_lon, prev_lat), (lon, lat) in pairwise(points):
        if abs(lon - prev_lon) > diff_space:
            side = 180.0 if prev_lon > 0 else -180.0
            unwrapped = lon + 360.0 if prev_lon > 0 else lon - 360.0
            if unwrapped == prev_lon:
                ratio = 0.0
            else:
                ratio = (side - prev_lon) / (unwrapped - prev_lon)
            crossing_lat = prev_lat + ratio * (lat - prev_lat)

            parts[-1].append((side, crossing_lat))
            parts.append([(-side, crossing_lat)])
        parts[-1].append((lon, lat))

    logger.debug(f"Arc split into {len(parts)} parts at the antimeridian")
    return MultiPolyline(parts)
