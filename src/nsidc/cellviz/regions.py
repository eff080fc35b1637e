"""
Region building and covering.

Turns user-drawn shapes into regions the s2sphere RegionCoverer understands
and computes the union of their coverings.
"""

import logging
from typing import Iterable, List

import s2sphere
from shapely.affinity import translate
from shapely.geometry import Polygon
from shapely.validation import make_valid

from nsidc.cellviz import cells, constants
from nsidc.cellviz.models import Ring, Shape, ShapeMode
from nsidc.cellviz.spatial.cell_boundary import cell_ring
from nsidc.cellviz.spatial.spatial_utils import unwrap_longitudes, wrap_longitude

logger = logging.getLogger(__name__)


def lat_lng_rect(lat_lo: float, lng_lo: float, lat_hi: float, lng_hi: float) -> s2sphere.LatLngRect:
    """
    Build a LatLngRect from degree bounds, keeping the longitude endpoints.

    Longitudes are wrapped into [-180, 180] without reordering them, so
    bounds drawn past the antimeridian (e.g. 170 to 190) give an inverted
    longitude interval that crosses the seam. Bounds spanning 360 degrees or
    more give the full longitude range.
    """
    if lng_hi - lng_lo >= 360.0:
        lng_lo, lng_hi = -180.0, 180.0
    else:
        lng_lo, lng_hi = wrap_longitude(lng_lo), wrap_longitude(lng_hi)

    return s2sphere.LatLngRect(
        s2sphere.LatLng.from_degrees(lat_lo, lng_lo),
        s2sphere.LatLng.from_degrees(lat_hi, lng_hi),
    )


def rect_region(ring: Ring) -> s2sphere.LatLngRect:
    """
    Region for a drawn rectangle, taken from its opposite corners 0 and 2.
    """
    if len(ring) < 3:
        raise ValueError(f"A rectangle needs at least 3 ring points, got {len(ring)}")

    (lng0, lat0), (lng2, lat2) = ring[0], ring[2]
    return lat_lng_rect(min(lat0, lat2), min(lng0, lng2), max(lat0, lat2), max(lng0, lng2))


class PolygonRegion:
    """
    An s2sphere region backed by a planar shapely Polygon.

    The RegionCoverer only asks a region for its bounding cap and whether
    it may intersect or contains a cell. Cells are compared through their
    corrected boundary ring, shifted by -360, 0 and +360 degrees so that
    rings in overflow longitude space meet the polygon wherever it was
    drawn.

    The drawn ring is unwrapped first so that an edge between, say, 170 and
    -170 takes the short way across the antimeridian.
    """

    def __init__(self, ring: Ring):
        self.polygon = make_valid(Polygon(unwrap_longitudes(ring)))
        minx, miny, maxx, maxy = self.polygon.bounds
        self.bound = lat_lng_rect(max(miny, -90.0), minx, min(maxy, 90.0), maxx)

    def get_rect_bound(self) -> s2sphere.LatLngRect:
        return self.bound

    def get_cap_bound(self) -> s2sphere.Cap:
        return self.bound.get_cap_bound()

    def _footprints(self, cell: s2sphere.Cell) -> List:
        ring = cell_ring(cells.corners(cell), cell.level(), cells.is_polar_face(cell))
        footprint = make_valid(Polygon(ring))
        return [footprint] + [translate(footprint, xoff=offset) for offset in (-360.0, 360.0)]

    def may_intersect(self, cell: s2sphere.Cell) -> bool:
        return any(self.polygon.intersects(f) for f in self._footprints(cell))

    def contains(self, cell: s2sphere.Cell) -> bool:
        return any(self.polygon.contains(f) for f in self._footprints(cell))


def shape_region(shape: Shape):
    """
    Region for a drawn shape: a LatLngRect for rectangles, a PolygonRegion
    for every other mode.
    """
    if shape.mode == ShapeMode.RECTANGLE:
        logger.debug("rectangle covering")
        return rect_region(shape.ring)

    logger.debug(f"{shape.mode.value} covering")
    return PolygonRegion(shape.ring)


def union(cell_ids: Iterable[s2sphere.CellId]) -> List[s2sphere.CellId]:
    """
    Merge cell ids from several coverings.

    Duplicates and cells contained in another cell of the set are removed;
    the result is sorted by position along the curve.
    """
    ordered = sorted(
        cell_ids, key=lambda c: (c.range_min().id(), c.level())
    )
    merged = []
    for cell_id in ordered:
        if merged and merged[-1].range_max().id() >= cell_id.id():
            continue
        merged.append(cell_id)
    return merged


def covering(
    shapes: Iterable[Shape],
    min_level: int = constants.DEFAULT_MIN_LEVEL,
    max_level: int = constants.DEFAULT_MAX_LEVEL,
    max_cells: int = constants.DEFAULT_MAX_CELLS,
) -> List[s2sphere.CellId]:
    """
    Cover each shape independently and return the union of the coverings.

    Args:
        shapes: Drawn shapes
        min_level: Coarsest level of cells to return
        max_level: Finest level of cells to return
        max_cells: Maximum number of cells per shape

    Returns:
        List of CellIds
    """
    coverer = s2sphere.RegionCoverer()
    coverer.min_level = min_level
    coverer.max_level = max_level
    coverer.max_cells = max_cells

    cell_ids = []
    for shape in shapes:
        cell_ids.extend(coverer.get_covering(shape_region(shape)))

    result = union(cell_ids)
    logger.info(f"Covering contains {len(result)} cells")
    return result
