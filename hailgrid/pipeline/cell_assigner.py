"""Assign planar points to grid cells.

Edge vectors hold cell boundaries, so a point belongs to the cell whose
half-open interval ``[edges[i], edges[i + 1])`` contains it. Matching a
point to its nearest boundary instead would push points in the upper half
of a cell into the next one.
"""

import logging

import numpy as np
import pandas as pd

from hailgrid.models.grid import Grid

logger = logging.getLogger(__name__)


def floor_index(edges, values) -> np.ndarray:
    """Largest index ``i < len(edges) - 1`` with ``edges[i] <= value``.

    A value equal to the last edge belongs to the last real cell.

    >>> floor_index([0, 10, 20, 30], [9.999, 10.0, 30.0])
    array([0, 1, 2])

    Raises:
        ValueError: If any value lies outside ``[edges[0], edges[-1]]``.
    """
    edges = np.asarray(edges, dtype=float)
    values = np.asarray(values, dtype=float)
    if edges.ndim != 1 or len(edges) < 2:
        raise ValueError("edges must be a 1-D vector with at least two boundaries")

    outside = (values < edges[0]) | (values > edges[-1]) | np.isnan(values)
    if np.any(outside):
        raise ValueError(
            f"{int(np.count_nonzero(outside))} value(s) outside [{edges[0]}, {edges[-1]}]"
        )

    idx = np.searchsorted(edges, values, side="right") - 1
    return np.minimum(idx, len(edges) - 2)


def assign_cells(points: pd.DataFrame, grid: Grid) -> tuple[pd.DataFrame, int]:
    """Add ``col`` and ``row`` to every point inside the grid extent.

    Points outside the extent cannot be assigned and are dropped.

    Returns:
        (assigned points, number of points excluded as outside the grid)
    """
    inside = grid.contains(points["x"].to_numpy(), points["y"].to_numpy())
    outside = int(np.count_nonzero(~inside))
    if outside:
        logger.warning(
            "Excluded %d of %d point(s) outside the grid extent; check the grid extent and projection",
            outside,
            len(points),
        )

    assigned = points.loc[inside].copy()
    assigned["col"] = floor_index(grid.x_edges, assigned["x"].to_numpy())
    assigned["row"] = floor_index(grid.y_edges, assigned["y"].to_numpy())
    return assigned.reset_index(drop=True), outside
