"""
Tests for the spatial_utils module.
"""

from nsidc.cellviz.spatial.spatial_utils import (
    drop_consecutive_duplicates,
    unwrap_longitudes,
    wrap_longitude,
)


class TestWrapLongitude:
    """Test suite for longitude wrapping."""

    def test_in_range_unchanged(self):
        assert wrap_longitude(180.0) == 180.0
        assert wrap_longitude(-180.0) == -180.0
        assert wrap_longitude(12.5) == 12.5

    def test_overflow_wrapped(self):
        assert wrap_longitude(190.0) == -170.0
        assert wrap_longitude(-190.0) == 170.0


class TestUnwrapLongitudes:
    """Test suite for making paths continuous across the antimeridian."""

    def test_eastward_crossing(self):
        ring = [(170.0, -20.0), (-170.0, -20.0), (180.0, -10.0), (170.0, -20.0)]

        assert unwrap_longitudes(ring) == [(170.0, -20.0), (190.0, -20.0), (180.0, -10.0), (170.0, -20.0)]

    def test_westward_crossing(self):
        ring = [(-170.0, 0.0), (170.0, 0.0), (170.0, 5.0), (-170.0, 5.0), (-170.0, 0.0)]

        unwrapped = unwrap_longitudes(ring)

        assert [lon for lon, _ in unwrapped] == [-170.0, -190.0, -190.0, -170.0, -170.0]

    def test_continuous_path_unchanged(self):
        ring = [(170.0, -20.0), (190.0, -20.0), (180.0, -10.0), (170.0, -20.0)]
        assert unwrap_longitudes(ring) == ring


class TestDropConsecutiveDuplicates:
    """Test suite for duplicate point removal."""

    def test_runs_collapse(self):
        points = [(0.0, 0.0), (0.0, 0.0), (1.0, 0.0), (1.0, 0.0), (0.0, 0.0)]
        assert drop_consecutive_duplicates(points) == [(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)]
