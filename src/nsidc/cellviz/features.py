"""
Feature assembly: one CellFeature per cell, collected into GeoJSON.
"""

import functools
import logging
from typing import Iterable, List, Optional

import s2sphere

from nsidc.cellviz import cells, constants
from nsidc.cellviz.models import CellFeature, Theme
from nsidc.cellviz.spatial.cell_boundary import cell_ring

logger = logging.getLogger(__name__)


def theme(name: str) -> Theme:
    """
    Look up a map theme by name ('day' or 'night').
    """
    if name not in constants.THEMES:
        raise ValueError(f"Unknown theme '{name}', expected one of {sorted(constants.THEMES)}")
    colors = constants.THEMES[name]
    return Theme(name, colors["basemap"], colors["cell_color"], constants.FILL_OPACITY)


@functools.lru_cache(maxsize=4096)
def _cell_feature(cell_id_value: int) -> CellFeature:
    cell_id = s2sphere.CellId(cell_id_value)
    cell = s2sphere.Cell(cell_id)
    ring = cell_ring(cells.corners(cell), cell.level(), cells.is_polar_face(cell))
    center_lng, center_lat = cells.center(cell)

    return CellFeature(
        id=str(cell_id.id()),
        ring=tuple(ring),
        level=cell.level(),
        token=cells.token_from_cell_id(cell_id),
        center_lng=center_lng,
        center_lat=center_lat,
    )


def cell_feature(cell_id: s2sphere.CellId) -> CellFeature:
    """
    The renderable feature for one cell.

    A pure function of the cell id; results are cached.
    """
    return _cell_feature(cell_id.id())


def cell_features(cell_ids: Iterable[s2sphere.CellId]) -> List[CellFeature]:
    """
    Features for every cell that can be rendered.

    A cell whose feature cannot be built is logged and skipped so that the
    remaining cells are still drawn.
    """
    features = []
    for cell_id in cell_ids:
        try:
            features.append(cell_feature(cell_id))
        except Exception as e:
            logger.error(f"Unable to build feature for cell {cell_id.id()}: {e}")
    return features


def feature_collection(features: Iterable[CellFeature], map_theme: Optional[Theme] = None) -> dict:
    """
    GeoJSON FeatureCollection of cell features.

    When a theme is given its colors are attached as a top-level 'style'
    member for the map's fill and line layers.
    """
    collection = {
        "type": "FeatureCollection",
        "features": [feature.to_geojson() for feature in features],
    }
    if map_theme is not None:
        collection["style"] = map_theme.style()
    return collection
