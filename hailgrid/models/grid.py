"""Regular planar grid used as the aggregation lattice."""

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class Grid:
    """An axis-aligned lattice of square cells in the equal-area CRS.

    ``x_edges`` and ``y_edges`` hold cell boundaries (count + 1 values each).
    Cell ``(col, row)`` covers ``[x_edges[col], x_edges[col + 1])`` by
    ``[y_edges[row], y_edges[row + 1])``; row 0 is the southernmost row.
    """

    xmin: float
    ymin: float
    resolution: float
    ncol: int
    nrow: int
    x_edges: np.ndarray = field(repr=False)
    y_edges: np.ndarray = field(repr=False)

    @property
    def xmax(self) -> float:
        return float(self.x_edges[-1])

    @property
    def ymax(self) -> float:
        return float(self.y_edges[-1])

    @property
    def shape(self) -> tuple[int, int]:
        """Array shape as (rows, columns)."""
        return (self.nrow, self.ncol)

    @property
    def x_centers(self) -> np.ndarray:
        return self.x_edges[:-1] + self.resolution / 2.0

    @property
    def y_centers(self) -> np.ndarray:
        return self.y_edges[:-1] + self.resolution / 2.0

    def contains(self, x, y) -> np.ndarray:
        """Boolean mask of coordinates inside the closed grid extent."""
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        return (
            (x >= self.x_edges[0])
            & (x <= self.x_edges[-1])
            & (y >= self.y_edges[0])
            & (y <= self.y_edges[-1])
        )
