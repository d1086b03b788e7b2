"""Shared test fixtures for the hailgrid test suite.

Raw inputs are built in memory so the pipeline runs without network access
or files on disk. Geographic boxes stand in for state polygons.
"""

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

from hailgrid.models.grid import Grid
from hailgrid.models.observation import RAW_COLUMNS
from hailgrid.pipeline.grid_builder import build_grid
from hailgrid.pipeline.reproject import EQUAL_AREA_CRS


# ── Factory helpers ───────────────────────────────────────────────────────────


def make_record(
    ztime: str = "20150505183000",
    lon: float = -98.5,
    lat: float = 38.5,
    station_id: str = "KICT",
    cell_id: str = "Q7",
    range_nmi: float = 52.0,
    azimuth: float = 310.0,
    severity_prob: float = 30.0,
    hail_prob: float = 100.0,
    max_size: float = 1.0,
) -> dict:
    """Create one raw SWDI nx3hail record."""
    return dict(
        zip(
            RAW_COLUMNS,
            [ztime, lon, lat, station_id, cell_id, range_nmi, azimuth, severity_prob, hail_prob, max_size],
        )
    )


def make_raw_observations(records: list[dict] | None = None) -> pd.DataFrame:
    """Create a raw observation frame with the SWDI column layout."""
    return pd.DataFrame(records or [make_record()], columns=RAW_COLUMNS)


def make_states(names: list[str] | None = None) -> gpd.GeoDataFrame:
    """Create a NAD83 state layer from lon/lat boxes, in Census column layout."""
    boxes = {
        "Kansas": ("KS", box(-102.0, 37.0, -94.6, 40.0)),
        "Nebraska": ("NE", box(-104.0, 40.0, -95.3, 43.0)),
        "Alaska": ("AK", box(-170.0, 55.0, -140.0, 70.0)),
        "Hawaii": ("HI", box(-160.0, 19.0, -155.0, 22.0)),
        "Puerto Rico": ("PR", box(-67.3, 17.9, -65.6, 18.5)),
        "District of Columbia": ("DC", box(-77.12, 38.79, -76.91, 38.99)),
    }
    names = names or ["Kansas"]
    return gpd.GeoDataFrame(
        {
            "STATEFP": [str(i).zfill(2) for i in range(len(names))],
            "STUSPS": [boxes[n][0] for n in names],
            "NAME": names,
        },
        geometry=[boxes[n][1] for n in names],
        crs="EPSG:4269",
    )


def make_planar_boundaries(*polygons) -> gpd.GeoDataFrame:
    """Create a boundary layer already in the equal-area CRS."""
    return gpd.GeoDataFrame(
        {"region_code": [f"R{i}" for i in range(len(polygons))],
         "region_name": [f"Region {i}" for i in range(len(polygons))]},
        geometry=list(polygons),
        crs=EQUAL_AREA_CRS,
    )


def make_points(rows: list[tuple]) -> pd.DataFrame:
    """Create assigned points from (col, row, month, day, max_size, season) tuples."""
    return pd.DataFrame(rows, columns=["col", "row", "month", "day", "max_size", "season"])


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def small_grid() -> Grid:
    """A 3 x 3 grid of 10 m cells covering [0, 30] x [0, 30]."""
    return build_grid((0.0, 0.0, 30.0, 30.0), 10.0)


@pytest.fixture
def kansas() -> gpd.GeoDataFrame:
    return make_states(["Kansas"])
