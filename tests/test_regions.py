import math

import pytest
import s2sphere

from nsidc.cellviz import regions
from nsidc.cellviz.models import Shape, ShapeMode

# Unit tests for the 'regions' module functions.
#
# The RegionCoverer itself is not mocked: coverings are computed for small
# shapes with low cell limits so the tests stay fast.


def face_cell(face):
    return s2sphere.Cell(s2sphere.CellId((face << 61) | (1 << 60)))


@pytest.fixture
def rectangle():
    ring = [(-105.5, 39.5), (-104.5, 39.5), (-104.5, 40.5), (-105.5, 40.5), (-105.5, 39.5)]
    return Shape(ShapeMode.RECTANGLE, ring)


@pytest.fixture
def triangle():
    ring = [(10.0, 10.0), (12.0, 10.0), (11.0, 12.0), (10.0, 10.0)]
    return Shape(ShapeMode.POLYGON, ring)


@pytest.fixture
def seam_triangle():
    ring = [(170.0, -20.0), (190.0, -20.0), (180.0, -10.0), (170.0, -20.0)]
    return Shape(ShapeMode.POLYGON, ring)


@pytest.fixture
def wrapped_seam_triangle():
    ring = [(170.0, -20.0), (-170.0, -20.0), (180.0, -10.0), (170.0, -20.0)]
    return Shape(ShapeMode.POLYGON, ring)


def test_lat_lng_rect_keeps_bounds():
    rect = regions.lat_lng_rect(10.0, 20.0, 30.0, 40.0)

    assert math.degrees(rect.lat().lo()) == pytest.approx(10.0)
    assert math.degrees(rect.lat().hi()) == pytest.approx(30.0)
    assert math.degrees(rect.lng().lo()) == pytest.approx(20.0)
    assert math.degrees(rect.lng().hi()) == pytest.approx(40.0)


def test_lat_lng_rect_past_antimeridian_is_inverted():
    rect = regions.lat_lng_rect(-10.0, 170.0, 10.0, 190.0)

    assert rect.lng().is_inverted()
    assert math.degrees(rect.lng().lo()) == pytest.approx(170.0)
    assert math.degrees(rect.lng().hi()) == pytest.approx(-170.0)


def test_lat_lng_rect_full_longitude():
    rect = regions.lat_lng_rect(-10.0, -200.0, 10.0, 200.0)
    assert rect.lng().is_full()


def test_rect_region_uses_opposite_corners(rectangle):
    rect = regions.rect_region(rectangle.ring)

    assert math.degrees(rect.lat().lo()) == pytest.approx(39.5)
    assert math.degrees(rect.lat().hi()) == pytest.approx(40.5)
    assert math.degrees(rect.lng().lo()) == pytest.approx(-105.5)
    assert math.degrees(rect.lng().hi()) == pytest.approx(-104.5)


def test_rect_region_needs_corners():
    with pytest.raises(ValueError):
        regions.rect_region([(0.0, 0.0), (1.0, 1.0)])


def test_shape_region_dispatch(rectangle, triangle):
    assert isinstance(regions.shape_region(rectangle), s2sphere.LatLngRect)
    assert isinstance(regions.shape_region(triangle), regions.PolygonRegion)


def test_polygon_region_face_cell(triangle):
    region = regions.PolygonRegion(triangle.ring)

    assert region.may_intersect(face_cell(0))
    assert not region.contains(face_cell(0))
    assert not region.may_intersect(face_cell(3))


def test_polygon_region_across_antimeridian(seam_triangle):
    region = regions.PolygonRegion(seam_triangle.ring)

    assert region.may_intersect(face_cell(3))
    assert not region.may_intersect(face_cell(0))


def test_polygon_region_with_wrapped_longitudes(wrapped_seam_triangle):
    region = regions.PolygonRegion(wrapped_seam_triangle.ring)

    assert region.polygon.area == pytest.approx(100.0)
    assert region.bound.lng().is_inverted()
    assert region.may_intersect(face_cell(3))
    assert not region.may_intersect(face_cell(0))


def test_covering_polygon_across_antimeridian(wrapped_seam_triangle):
    cell_ids = regions.covering([wrapped_seam_triangle], max_level=8, max_cells=50)

    assert len(cell_ids) > 0
    centers = [s2sphere.LatLng.from_point(s2sphere.Cell(c).get_center()) for c in cell_ids]
    assert all(abs(ll.lng().degrees) > 160.0 for ll in centers)
    assert all(-30.0 < ll.lat().degrees < 0.0 for ll in centers)


def test_polygon_region_cap_bound_contains_polygon(triangle):
    cap = regions.PolygonRegion(triangle.ring).get_cap_bound()

    for lon, lat in triangle.ring:
        assert cap.contains(s2sphere.LatLng.from_degrees(lat, lon).to_point())


def test_union_drops_duplicates_and_descendants():
    leaf = s2sphere.CellId.from_lat_lng(s2sphere.LatLng.from_degrees(39.74, -104.99))
    parent = leaf.parent(5)
    child = leaf.parent(9)
    other = s2sphere.CellId.from_lat_lng(s2sphere.LatLng.from_degrees(-33.9, 18.4)).parent(5)

    merged = regions.union([child, other, parent, parent])

    assert sorted(c.id() for c in merged) == sorted([parent.id(), other.id()])


def test_covering_rectangle(rectangle):
    cell_ids = regions.covering([rectangle], min_level=0, max_level=10, max_cells=8)

    assert 0 < len(cell_ids) <= 8
    assert all(c.level() <= 10 for c in cell_ids)
    assert all(c.is_valid() for c in cell_ids)


def test_covering_polygon(triangle):
    cell_ids = regions.covering([triangle], min_level=2, max_level=8, max_cells=10)

    assert len(cell_ids) > 0
    assert all(2 <= c.level() <= 8 for c in cell_ids)
    centers = [s2sphere.LatLng.from_point(s2sphere.Cell(c).get_center()) for c in cell_ids]
    assert all(5.0 < ll.lat().degrees < 17.0 for ll in centers)
    assert all(5.0 < ll.lng().degrees < 17.0 for ll in centers)


def test_covering_several_shapes(rectangle, triangle):
    both = regions.covering([rectangle, triangle], max_level=8, max_cells=8)
    rectangle_only = regions.covering([rectangle], max_level=8, max_cells=8)

    assert len(both) > len(rectangle_only)
