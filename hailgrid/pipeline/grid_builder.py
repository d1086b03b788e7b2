"""Build the fixed-resolution aggregation grid over the boundary extent."""

import logging
import math

import numpy as np

from hailgrid.core.errors import ConfigurationError
from hailgrid.models.grid import Grid

logger = logging.getLogger(__name__)


def _cell_count(span: float, extent: float | None, resolution: float, axis: str) -> int:
    if extent is None:
        count = max(1, math.ceil(span / resolution))
        # span / resolution can round down to an integer just below the span
        return count + 1 if count * resolution < span else count
    if extent < span:
        raise ConfigurationError(
            f"Grid extent along {axis} ({extent:.0f} m) does not cover the boundary span ({span:.0f} m)"
        )
    return math.ceil(extent / resolution)


def build_grid(
    bounds: tuple[float, float, float, float],
    resolution: float,
    extent: tuple[float, float] | None = None,
) -> Grid:
    """Construct a grid anchored at the lower-left corner of ``bounds``.

    Args:
        bounds: (xmin, ymin, xmax, ymax) of the planar boundary polygons.
        resolution: Cell edge length in metres.
        extent: Optional (width, height) override. Each value is rounded up to
            a whole number of cells and must cover the bounding-box span.

    Returns:
        Grid whose edge vectors run from the bbox origin in steps of
        ``resolution``.

    Raises:
        ConfigurationError: If the resolution is non-positive or larger than
            the bounding box, or the extent override is too small.
    """
    xmin, ymin, xmax, ymax = (float(v) for v in bounds)
    width = xmax - xmin
    height = ymax - ymin

    if not resolution > 0:
        raise ConfigurationError(f"Resolution must be positive, got {resolution}")
    if resolution > width or resolution > height:
        raise ConfigurationError(
            f"Resolution {resolution:.0f} m exceeds the boundary extent ({width:.0f} m x {height:.0f} m)"
        )

    ext_x, ext_y = extent if extent is not None else (None, None)
    ncol = _cell_count(width, ext_x, resolution, "x")
    nrow = _cell_count(height, ext_y, resolution, "y")

    x_edges = xmin + np.arange(ncol + 1, dtype=float) * resolution
    y_edges = ymin + np.arange(nrow + 1, dtype=float) * resolution

    grid = Grid(
        xmin=xmin,
        ymin=ymin,
        resolution=float(resolution),
        ncol=ncol,
        nrow=nrow,
        x_edges=x_edges,
        y_edges=y_edges,
    )
    logger.info(
        "Built %d x %d grid at %.0f m (extent %.0f km x %.0f km)",
        ncol,
        nrow,
        resolution,
        (grid.xmax - xmin) / 1000,
        (grid.ymax - ymin) / 1000,
    )
    return grid
