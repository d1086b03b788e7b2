"""Hail grid pipeline: the end-to-end transformation from raw inputs to masked grids.

This module:
1. Cleans the raw hail detections and the state boundaries.
2. Projects both into the equal-area CRS.
3. Builds the grid over the boundary extent and assigns points to cells.
4. Aggregates max hail size and hail days, annually and by season.
5. Masks every layer to land.

The run is a pure function of its inputs: tabular and vector I/O happen in
``run_from_files`` (or the caller), never inside ``build_hail_grids``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import geopandas as gpd
import pandas as pd
import xarray as xr

from hailgrid.core.config import settings
from hailgrid.core.errors import ConfigurationError
from hailgrid.models.grid import Grid
from hailgrid.pipeline.aggregator import hail_days_grid, max_size_grid
from hailgrid.pipeline.boundaries import clean_boundaries, read_boundaries
from hailgrid.pipeline.cell_assigner import assign_cells
from hailgrid.pipeline.grid_builder import build_grid
from hailgrid.pipeline.land_mask import apply_land_mask, land_mask
from hailgrid.pipeline.observations import CleaningReport, clean_observations, read_observations
from hailgrid.pipeline.reproject import project_boundaries, project_observations

logger = logging.getLogger(__name__)


@dataclass
class HailGridResult:
    """Everything a renderer needs to draw the hail maps."""

    max_size: xr.DataArray
    hail_days: xr.DataArray
    max_size_by_season: xr.DataArray
    hail_days_by_season: xr.DataArray
    grid: Grid
    boundaries: gpd.GeoDataFrame
    bounds: tuple[float, float, float, float]
    cleaning: CleaningReport
    outside_grid: int

    def to_dataset(self) -> xr.Dataset:
        """Bundle the four layers into one Dataset (annual layers without a season dim)."""
        return xr.Dataset(
            {
                "max_size": self.max_size,
                "hail_days": self.hail_days,
                "max_size_by_season": self.max_size_by_season,
                "hail_days_by_season": self.hail_days_by_season,
            },
            attrs={
                "resolution_m": self.grid.resolution,
                "bounds": list(self.bounds),
                "rows_kept": self.cleaning.rows_kept,
                "outside_grid": self.outside_grid,
            },
        )


def build_hail_grids(
    observations: pd.DataFrame,
    boundaries: gpd.GeoDataFrame,
    resolution: float | None = None,
    extent: tuple[float, float] | None = None,
    strict: bool = False,
) -> HailGridResult:
    """Run the full pipeline on in-memory inputs.

    Args:
        observations: Raw SWDI hail records (raw or renamed columns).
        boundaries: Raw state polygons in a geographic CRS.
        resolution: Cell size in metres. Defaults to ``settings.resolution_m``.
        extent: Optional (width, height) grid override in metres.
        strict: Abort on unparseable timestamps instead of dropping them.

    Raises:
        ConfigurationError: For an invalid grid or an empty boundary set.
        ObservationParseError: In strict mode, for unparseable timestamps.
    """
    if resolution is None:
        resolution = settings.resolution_m
    if extent is None:
        extent = settings.grid_extent

    cleaned, report = clean_observations(observations, strict=strict)

    states = clean_boundaries(boundaries)
    if states.empty:
        raise ConfigurationError("No contiguous-state boundaries left after filtering")
    planar_states = project_boundaries(states)
    bounds = tuple(float(v) for v in planar_states.total_bounds)

    # Grid validation happens before any aggregation work.
    grid = build_grid(bounds, resolution, extent)

    planar_points = project_observations(cleaned)
    assigned, outside = assign_cells(planar_points, grid)

    mask = land_mask(grid, planar_states)
    result = HailGridResult(
        max_size=apply_land_mask(max_size_grid(assigned, grid), mask),
        hail_days=apply_land_mask(hail_days_grid(assigned, grid), mask),
        max_size_by_season=apply_land_mask(max_size_grid(assigned, grid, by_season=True), mask),
        hail_days_by_season=apply_land_mask(hail_days_grid(assigned, grid, by_season=True), mask),
        grid=grid,
        boundaries=planar_states,
        bounds=bounds,
        cleaning=report,
        outside_grid=outside,
    )

    logger.info(
        "Gridded %d detections into %d cells with hail (%d x %d grid)",
        len(assigned),
        int(result.hail_days.notnull().sum()),
        grid.ncol,
        grid.nrow,
    )
    return result


def run_from_files(
    observations_path: Path,
    boundaries_path: Path,
    resolution: float | None = None,
    extent: tuple[float, float] | None = None,
    strict: bool = False,
) -> HailGridResult:
    """Read both inputs from disk and run ``build_hail_grids``."""
    logger.info("Reading observations from %s", observations_path)
    observations = read_observations(observations_path)
    logger.info("Reading boundaries from %s", boundaries_path)
    boundaries = read_boundaries(boundaries_path)
    return build_hail_grids(observations, boundaries, resolution, extent, strict)
