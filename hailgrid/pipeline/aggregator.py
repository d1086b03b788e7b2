"""Reduce assigned points to per-cell layers.

Two layers are produced:
  - max_size  : largest MEHS (inches) detected in the cell
  - hail_days : number of distinct calendar days (month/day) with a detection

Both reductions are order-independent, so the result does not depend on the
order of the input rows. Cells without detections hold NaN.
"""

from collections.abc import Callable

import numpy as np
import pandas as pd
import xarray as xr

from hailgrid.models.grid import Grid
from hailgrid.models.observation import SEASON_ORDER
from hailgrid.pipeline.reproject import EQUAL_AREA_CRS

CELL_KEYS = ["col", "row"]
DAY_KEYS = ["month", "day"]


def _max_size(points: pd.DataFrame) -> pd.Series:
    return points.groupby(CELL_KEYS)["max_size"].max()


def _hail_days(points: pd.DataFrame) -> pd.Series:
    days = points.drop_duplicates(subset=CELL_KEYS + DAY_KEYS)
    return days.groupby(CELL_KEYS).size()


def _scatter(per_cell: pd.Series, grid: Grid) -> np.ndarray:
    """Place a (col, row)-indexed series into a (nrow, ncol) array."""
    out = np.full(grid.shape, np.nan)
    if len(per_cell):
        cols = per_cell.index.get_level_values("col").to_numpy(dtype=int)
        rows = per_cell.index.get_level_values("row").to_numpy(dtype=int)
        out[rows, cols] = per_cell.to_numpy(dtype=float)
    return out


def _to_dataarray(
    points: pd.DataFrame,
    grid: Grid,
    reducer: Callable[[pd.DataFrame], pd.Series],
    name: str,
    units: str,
    by_season: bool,
) -> xr.DataArray:
    coords = {"y": grid.y_centers, "x": grid.x_centers}
    attrs = {"units": units, "resolution_m": grid.resolution, "crs": EQUAL_AREA_CRS.to_proj4()}

    if not by_season:
        return xr.DataArray(
            _scatter(reducer(points), grid),
            dims=("y", "x"),
            coords=coords,
            name=name,
            attrs=attrs,
        )

    layers = [_scatter(reducer(points.loc[points["season"] == season]), grid) for season in SEASON_ORDER]
    return xr.DataArray(
        np.stack(layers),
        dims=("season", "y", "x"),
        coords={"season": SEASON_ORDER, **coords},
        name=name,
        attrs=attrs,
    )


def max_size_grid(points: pd.DataFrame, grid: Grid, by_season: bool = False) -> xr.DataArray:
    """Maximum estimated hail size per cell, optionally one layer per season."""
    return _to_dataarray(points, grid, _max_size, "max_size", "inches", by_season)


def hail_days_grid(points: pd.DataFrame, grid: Grid, by_season: bool = False) -> xr.DataArray:
    """Count of distinct (month, day) pairs with a detection in each cell.

    Several detections in one cell on the same day count once.
    """
    return _to_dataarray(points, grid, _hail_days, "hail_days", "days", by_season)
