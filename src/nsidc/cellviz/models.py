"""
Data models for the cellviz package.

This module contains the dataclasses and type aliases passed between the
covering, boundary and feature assembly steps.
"""

import dataclasses
from enum import Enum
from typing import List, Tuple, Union

# (longitude, latitude) in degrees
Point = Tuple[float, float]
Ring = List[Point]


@dataclasses.dataclass(frozen=True)
class Polyline:
    """An interpolated arc returned as one continuous line."""

    points: List[Point]

    def segments(self) -> List[List[Point]]:
        return [list(self.points)]


@dataclasses.dataclass(frozen=True)
class MultiPolyline:
    """
    An interpolated arc the interpolator split at the antimeridian.

    Concatenating the parts in order gives the logical arc.
    """

    parts: List[List[Point]]

    def segments(self) -> List[List[Point]]:
        return [list(part) for part in self.parts]


# Result of a great-circle interpolation; the class is the tag.
Arc = Union[Polyline, MultiPolyline]


@dataclasses.dataclass(frozen=True)
class CellFeature:
    """
    The renderable boundary of one cell plus the metadata shown on the map.

    Features are cached and shared, so the ring is held as a tuple.
    """

    id: str  # 64-bit cell id, stringified
    ring: Tuple[Point, ...]
    level: int
    token: str
    center_lng: float
    center_lat: float

    def properties(self) -> dict:
        return {
            "level": self.level,
            "token": self.token,
            "centerLng": self.center_lng,
            "centerLat": self.center_lat,
        }

    def to_geojson(self) -> dict:
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[lng, lat] for lng, lat in self.ring]],
            },
            "properties": self.properties(),
        }


class ShapeMode(Enum):
    """Drawing mode that produced a shape."""

    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    ANGLED_RECTANGLE = "angled-rectangle"
    CIRCLE = "circle"


@dataclasses.dataclass(frozen=True)
class Shape:
    """A user-drawn shape: its drawing mode and its outer ring in degrees."""

    mode: ShapeMode
    ring: Ring


@dataclasses.dataclass(frozen=True)
class Theme:
    name: str
    basemap: str
    cell_color: str
    fill_opacity: float

    def style(self) -> dict:
        return {
            "basemap": self.basemap,
            "fill-color": self.cell_color,
            "fill-opacity": self.fill_opacity,
            "line-color": self.cell_color,
        }
