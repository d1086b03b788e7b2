"""Tests for the max-size and hail-day reductions."""

import numpy as np
import xarray as xr

from hailgrid.models.observation import SEASON_ORDER
from hailgrid.pipeline.aggregator import hail_days_grid, max_size_grid
from tests.conftest import make_points


class TestMaxSize:
    """Per-cell maximum of MEHS."""

    def test_max_of_cell(self, small_grid):
        points = make_points([
            (1, 1, 5, 5, 1.0, "Spring"),
            (1, 1, 5, 5, 2.0, "Spring"),
            (1, 1, 5, 6, 0.5, "Spring"),
        ])
        da = max_size_grid(points, small_grid)
        assert da.dims == ("y", "x")
        assert da.shape == (3, 3)
        assert float(da.values[1, 1]) == 2.0

    def test_empty_cells_are_nan(self, small_grid):
        points = make_points([(0, 2, 6, 1, 1.75, "Summer")])
        da = max_size_grid(points, small_grid)
        assert float(da.values[2, 0]) == 1.75
        assert int(da.notnull().sum()) == 1

    def test_no_points_gives_all_nan(self, small_grid):
        da = max_size_grid(make_points([]), small_grid)
        assert bool(da.isnull().all())

    def test_coordinates_are_cell_centers(self, small_grid):
        da = max_size_grid(make_points([]), small_grid)
        np.testing.assert_array_equal(da["x"].values, [5.0, 15.0, 25.0])
        np.testing.assert_array_equal(da["y"].values, [5.0, 15.0, 25.0])


class TestHailDays:
    """Distinct (month, day) pairs per cell."""

    def test_same_day_counts_once(self, small_grid):
        """Day 5 twice and day 6 once → 2 hail days; max size 2.0."""
        points = make_points([
            (1, 1, 5, 5, 1.0, "Spring"),
            (1, 1, 5, 5, 2.0, "Spring"),
            (1, 1, 5, 6, 0.5, "Spring"),
        ])
        assert float(hail_days_grid(points, small_grid).values[1, 1]) == 2
        assert float(max_size_grid(points, small_grid).values[1, 1]) == 2.0

    def test_different_days_count_separately(self, small_grid):
        points = make_points([
            (0, 0, 5, 5, 1.0, "Spring"),
            (0, 0, 5, 6, 1.0, "Spring"),
        ])
        assert float(hail_days_grid(points, small_grid).values[0, 0]) == 2

    def test_same_day_in_different_cells_counts_in_each(self, small_grid):
        points = make_points([
            (0, 0, 7, 4, 1.0, "Summer"),
            (2, 2, 7, 4, 1.0, "Summer"),
        ])
        da = hail_days_grid(points, small_grid)
        assert float(da.values[0, 0]) == 1
        assert float(da.values[2, 2]) == 1
        assert int(da.notnull().sum()) == 2

    def test_same_day_number_in_different_months(self, small_grid):
        points = make_points([
            (0, 0, 5, 5, 1.0, "Spring"),
            (0, 0, 6, 5, 1.0, "Summer"),
        ])
        assert float(hail_days_grid(points, small_grid).values[0, 0]) == 2


class TestSeasonalStratification:
    """Layers split by season."""

    POINTS = [
        (1, 1, 4, 10, 1.0, "Spring"),
        (1, 1, 4, 10, 1.5, "Spring"),
        (1, 1, 7, 2, 3.0, "Summer"),
        (2, 0, 10, 20, 0.75, "Fall"),
    ]

    def test_season_dimension_has_all_seasons_in_order(self, small_grid):
        da = hail_days_grid(make_points(self.POINTS), small_grid, by_season=True)
        assert da.dims == ("season", "y", "x")
        assert da["season"].values.tolist() == SEASON_ORDER

    def test_values_per_season(self, small_grid):
        points = make_points(self.POINTS)
        days = hail_days_grid(points, small_grid, by_season=True)
        sizes = max_size_grid(points, small_grid, by_season=True)
        assert float(days.sel(season="Spring").values[1, 1]) == 1
        assert float(sizes.sel(season="Spring").values[1, 1]) == 1.5
        assert float(sizes.sel(season="Summer").values[1, 1]) == 3.0
        assert float(days.sel(season="Fall").values[0, 2]) == 1

    def test_season_without_data_is_all_nan(self, small_grid):
        da = max_size_grid(make_points(self.POINTS), small_grid, by_season=True)
        assert bool(da.sel(season="Winter").isnull().all())

    def test_seasonal_days_sum_to_annual(self, small_grid):
        points = make_points(self.POINTS)
        annual = hail_days_grid(points, small_grid)
        seasonal = hail_days_grid(points, small_grid, by_season=True).sum("season", min_count=1)
        xr.testing.assert_equal(annual, seasonal)


class TestOrderIndependence:
    """Results do not depend on input row order."""

    def test_shuffled_input_gives_identical_grids(self, small_grid):
        points = make_points([
            (0, 0, 5, 5, 1.0, "Spring"),
            (0, 0, 5, 5, 2.5, "Spring"),
            (1, 2, 6, 1, 0.75, "Summer"),
            (1, 2, 6, 2, 1.25, "Summer"),
            (2, 1, 12, 24, 0.5, "Winter"),
        ])
        shuffled = points.sample(frac=1.0, random_state=7)
        for fn in (max_size_grid, hail_days_grid):
            xr.testing.assert_identical(fn(points, small_grid), fn(shuffled, small_grid))
            xr.testing.assert_identical(
                fn(points, small_grid, by_season=True), fn(shuffled, small_grid, by_season=True)
            )
