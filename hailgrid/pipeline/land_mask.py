"""Mask grid cells that fall off land.

A cell is kept when its center intersects the union of the (planar)
boundary polygons. Boundaries must already be in the grid's CRS.
"""

import logging

import geopandas as gpd
import numpy as np
import shapely
import xarray as xr

from hailgrid.models.grid import Grid

logger = logging.getLogger(__name__)


def land_mask(grid: Grid, boundaries: gpd.GeoDataFrame) -> np.ndarray:
    """Boolean (nrow, ncol) array, True where the cell center is on land."""
    land = boundaries.geometry.union_all()
    shapely.prepare(land)

    xx, yy = np.meshgrid(grid.x_centers, grid.y_centers)
    mask = shapely.intersects_xy(land, xx, yy)

    logger.info("Land mask keeps %d of %d cells", int(mask.sum()), mask.size)
    return mask


def apply_land_mask(layer: xr.DataArray, mask: np.ndarray) -> xr.DataArray:
    """Set off-land cells to NaN. Broadcasts over any leading dimension."""
    on_land = xr.DataArray(mask, dims=("y", "x"), coords={"y": layer["y"], "x": layer["x"]})
    return layer.where(on_land)
