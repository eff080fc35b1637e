"""
Planar boundary rings for spherical quadrilateral cells.

A cell's four edges are great-circle arcs. Drawing them on an
equirectangular map needs care at three singularities:

- the poles, where a corner's longitude is undefined;
- the antimeridian, where longitude jumps from +180 to -180;
- the two polar root faces, whose corners share one latitude and whose
  interior contains a pole.

cell_ring runs the correction steps in order:

    1. resolve_poles            give pole corners a usable longitude
    2. normalize_false_seam     fix +180/-180 sign ambiguity on seam corners
    3. assemble_arcs            interpolate each edge as a great-circle arc
    4. remove_redundant_segments, patch_polar_face
                                repair interpolation artifacts
    5. unwrap_antimeridian, assemble_ring
                                make one closed ring in (possibly
                                overflowing) longitude space

The result may have longitudes outside [-180, 180]; renderers that wrap
world copies draw such a ring as one simple polygon.

LIMITATIONS:
    The polar-face patch assumes each edge crosses the antimeridian at most
    once. The false-seam normalizer only handles one exact corner pattern,
    and the unwrap models a single wrap per traversal direction. Inputs
    outside those shapes are passed through unchanged.
"""

import logging
import math
from typing import Callable, List, Sequence

from funcy import lcat

from nsidc.cellviz import constants
from nsidc.cellviz.models import Arc, MultiPolyline, Point, Polyline, Ring
from nsidc.cellviz.spatial.great_circle import great_circle
from nsidc.cellviz.spatial.spatial_utils import (
    drop_consecutive_duplicates,
    is_on_seam,
    shift_longitude,
)

logger = logging.getLogger(__name__)

Interpolator = Callable[[Point, Point, int], Arc]


def resolve_poles(vertices: Sequence[Point]) -> List[Point]:
    """
    Give every pole corner the longitude of the corner before it.

    Longitude is undefined at a pole; the value reported for it (typically
    0 or +/-180) would otherwise send the adjacent arcs on long detours.
    The corner before the first one is the last one.

    Args:
        vertices: Cell corners as (lon, lat) tuples, in cell order

    Returns:
        New list of corners with pole longitudes replaced
    """
    resolved = list(vertices)
    for i, (lon, lat) in enumerate(resolved):
        if abs(lat) == 90.0:
            resolved[i] = (resolved[i - 1][0], lat)
    return resolved


def normalize_false_seam(vertices: Sequence[Point]) -> List[Point]:
    """
    Fix corners reported on the wrong side of the antimeridian.

    A corner lying exactly on the seam may come back as +180 or -180
    depending on the sign of a floating point zero. The pattern handled is:
    exactly two corners at the same seam longitude (+180, or -180) while the
    other two corners share one sign. The two seam corners are then moved to
    the side of the other two. Any other arrangement is returned unchanged.

    Args:
        vertices: Four cell corners as (lon, lat) tuples

    Returns:
        New list of corners
    """
    normalized = list(vertices)
    for seam_lon in (180.0, -180.0):
        seam = [i for i, (lon, _) in enumerate(normalized) if lon == seam_lon]
        interior = [i for i in range(len(normalized)) if i not in seam]
        if len(seam) != 2 or len(interior) != 2:
            continue

        signs = {normalized[i][0] < 0 for i in interior}
        if len(signs) != 1:
            continue

        target = -180.0 if signs.pop() else 180.0
        if target == seam_lon:
            continue

        logger.debug(f"Moving seam corners {seam} from {seam_lon} to {target}")
        for i in seam:
            normalized[i] = (target, normalized[i][1])
        break

    return normalized


def interpolation_points(level: int) -> int:
    """
    Number of points to interpolate along each edge of a cell at level.

    Coarser cells have longer edges and get more points.
    """
    return constants.BASE_INTERPOLATION_POINTS + (constants.MAX_LEVEL - level) * constants.POINTS_PER_LEVEL


def assemble_arcs(
    vertices: Sequence[Point],
    num_points: int,
    interpolate: Interpolator = great_circle,
) -> List[Arc]:
    """
    Interpolate the arcs v0->v1, v1->v2, v2->v3 and v3->v0.

    Args:
        vertices: Four cell corners as (lon, lat) tuples
        num_points: Points per arc
        interpolate: Great-circle routine returning a Polyline or MultiPolyline

    Returns:
        List of four arcs in traversal order
    """
    count = len(vertices)
    return [
        interpolate(vertices[i], vertices[(i + 1) % count], num_points)
        for i in range(count)
    ]


def _is_degenerate(segment: List[Point]) -> bool:
    return len(segment) == 2 and segment[0] == segment[1]


def remove_redundant_segments(arcs: List[Arc]) -> List[Arc]:
    """
    Drop zero-length pieces from arcs that were split in two.

    When an arc endpoint sits on the seam, the split can leave a two-point
    segment whose points are identical. Such a segment would be counted as
    a seam crossing later, so it is removed. Arcs split into any other
    number of parts are left alone.

    Args:
        arcs: Interpolated arcs

    Returns:
        New list of arcs
    """
    cleaned = []
    for arc in arcs:
        if isinstance(arc, MultiPolyline) and len(arc.parts) == 2:
            kept = [part for part in arc.parts if not _is_degenerate(part)]
            if len(kept) == 1:
                arc = Polyline(kept[0])
        cleaned.append(arc)
    return cleaned


def patch_polar_face(arcs: List[Arc]) -> List[Arc]:
    """
    Route seam-split arcs of a polar face over the pole.

    A polar root face contains a pole. Its edge that crosses the
    antimeridian is split into two parts; joining them directly would leave
    the pole outside the drawn ring. For each arc split into exactly two
    parts at +/-180, two points at the pole latitude are inserted so the
    arc becomes A -> (A.lon, pole) -> (B.lon, pole) -> B, and the parts are
    merged into one line.

    Args:
        arcs: Interpolated arcs of a polar-face cell

    Returns:
        New list of arcs
    """
    patched = []
    for arc in arcs:
        if isinstance(arc, MultiPolyline) and len(arc.parts) == 2:
            first, second = arc.parts
            a, b = first[-1], second[0]
            if is_on_seam(a[0]) and is_on_seam(b[0]):
                pole = math.copysign(90.0, a[1])
                logger.debug(f"Routing split arc over the pole at latitude {pole}")
                arc = Polyline(list(first) + [(a[0], pole), (b[0], pole)] + list(second))
        patched.append(arc)
    return patched


def _crosses_seam(last: Point, first: Point) -> bool:
    return (last[0] == 180.0 and first[0] == -180.0) or (last[0] == -180.0 and first[0] == 180.0)


def unwrap_antimeridian(segments: List[List[Point]]) -> List[List[Point]]:
    """
    Shift the segments between seam crossings into overflow longitude space.

    A crossing is a segment ending on one side of the seam and the next
    segment starting on the other. Each crossing toggles a wrapped state;
    wrapped segments are shifted by 360 degrees, towards the direction of
    travel at the crossing that entered the wrapped state (+360 after a
    +180 -> -180 crossing). The last segment precedes the first one.

    With four or fewer segments no arc was split and the segments are
    returned unchanged.

    Args:
        segments: Flattened arc segments in traversal order

    Returns:
        New list of segments
    """
    if len(segments) <= 4:
        return segments

    wrapped = False
    offset = 0.0
    unwrapped = []
    for previous, segment in zip([segments[-1]] + segments[:-1], segments):
        if _crosses_seam(previous[-1], segment[0]):
            wrapped = not wrapped
            offset = 360.0 if previous[-1][0] > 0 else -360.0
        unwrapped.append(shift_longitude(segment, offset) if wrapped else list(segment))

    return unwrapped


def assemble_ring(segments: List[List[Point]]) -> Ring:
    """
    Concatenate segments into one closed ring.

    Shared endpoints between consecutive segments, and any other run of
    identical points, collapse to a single point. The ring is closed by
    repeating its first point if the segments did not already end there.
    """
    ring = drop_consecutive_duplicates(lcat(segments))
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def cell_ring(
    vertices: Sequence[Point],
    level: int,
    polar_face: bool = False,
    interpolate: Interpolator = great_circle,
) -> Ring:
    """
    Build the planar boundary ring for a cell.

    Args:
        vertices: The cell's four corners as (lon, lat) tuples in cell order
        level: The cell's subdivision level, 0-30
        polar_face: True for the level-0 cells of the two polar faces
        interpolate: Great-circle routine

    Returns:
        Closed ring of (lon, lat) tuples; longitudes may leave [-180, 180]
    """
    if len(vertices) != 4:
        raise ValueError(f"A cell has exactly 4 corners, got {len(vertices)}")

    corners = normalize_false_seam(resolve_poles(vertices))
    arcs = assemble_arcs(corners, interpolation_points(level), interpolate)
    arcs = remove_redundant_segments(arcs)
    if polar_face:
        arcs = patch_polar_face(arcs)

    segments = lcat(arc.segments() for arc in arcs)
    return assemble_ring(unwrap_antimeridian(segments))
