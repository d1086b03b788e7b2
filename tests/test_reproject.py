"""Tests for the equal-area reprojection."""

import numpy as np
import pandas as pd
import pytest

from hailgrid.pipeline.reproject import (
    EQUAL_AREA_CRS,
    _point_transformer,
    project_boundaries,
    project_lonlat,
    project_observations,
)


class TestProjectLonLat:
    """Lambert azimuthal equal-area centered at 45N, 100W on the 6370997 m sphere."""

    def test_projection_center_maps_to_origin(self):
        x, y = project_lonlat(-100.0, 45.0)
        assert x == pytest.approx(0.0, abs=1e-6)
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_distance_along_central_meridian(self):
        """On the central meridian y = 2R sin(dlat / 2)."""
        x, y = project_lonlat(-100.0, 50.0)
        assert x == pytest.approx(0.0, abs=1e-6)
        assert y == pytest.approx(2 * 6_370_997 * np.sin(np.radians(2.5)), abs=1e-3)

    def test_axis_orientation(self):
        x_east, _ = project_lonlat(-90.0, 45.0)
        x_west, _ = project_lonlat(-110.0, 45.0)
        _, y_south = project_lonlat(-100.0, 35.0)
        assert x_east > 0 > x_west
        assert y_south < 0

    def test_deterministic(self):
        lon = np.array([-98.5, -75.2, -120.1])
        lat = np.array([38.5, 40.0, 35.3])
        first = project_lonlat(lon, lat)
        second = project_lonlat(lon, lat)
        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_inverse_returns_input(self):
        lon = np.array([-124.7, -98.5, -75.2, -67.0, -100.0])
        lat = np.array([48.9, 38.5, 40.0, 44.8, 25.1])
        x, y = project_lonlat(lon, lat)
        back_lon, back_lat = _point_transformer.transform(x, y, direction="INVERSE")
        np.testing.assert_allclose(back_lon, lon, rtol=0, atol=1e-9)
        np.testing.assert_allclose(back_lat, lat, rtol=0, atol=1e-9)


class TestProjectFrames:
    """Projecting observation frames and boundary layers."""

    def test_observations_gain_x_and_y(self):
        df = pd.DataFrame({"lon": [-100.0, -90.0], "lat": [45.0, 40.0], "max_size": [1.0, 2.0]})
        out = project_observations(df)
        assert {"x", "y"} <= set(out.columns)
        assert "x" not in df.columns
        assert out["x"].iloc[0] == pytest.approx(0.0, abs=1e-6)
        assert out["max_size"].tolist() == [1.0, 2.0]

    def test_boundaries_change_crs(self, kansas):
        planar = project_boundaries(kansas)
        assert planar.crs == EQUAL_AREA_CRS
        xmin, ymin, xmax, ymax = planar.total_bounds
        # Kansas straddles 100W and sits south of 45N
        assert xmin < 0 < xmax
        assert ymax < 0
