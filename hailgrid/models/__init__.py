from hailgrid.models.grid import Grid
from hailgrid.models.observation import Season, season_for_month

__all__ = [
    "Grid",
    "Season",
    "season_for_month",
]
