"""Load US state boundaries and restrict them to the contiguous states."""

import logging
from pathlib import Path

import geopandas as gpd

from hailgrid.core.errors import InputError

logger = logging.getLogger(__name__)

# NAD83, the declared CRS of Census cartographic boundary files.
BOUNDARY_SOURCE_CRS = "EPSG:4269"

# 48 contiguous states plus DC. Alaska, Hawaii and the territories
# (PR, AS, VI, MP, GU) are outside the analysis region.
CONTIGUOUS_STATES: frozenset[str] = frozenset({
    "Alabama", "Arizona", "Arkansas", "California", "Colorado", "Connecticut",
    "Delaware", "District of Columbia", "Florida", "Georgia", "Idaho", "Illinois",
    "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana", "Maine", "Maryland",
    "Massachusetts", "Michigan", "Minnesota", "Mississippi", "Missouri", "Montana",
    "Nebraska", "Nevada", "New Hampshire", "New Jersey", "New Mexico", "New York",
    "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon", "Pennsylvania",
    "Rhode Island", "South Carolina", "South Dakota", "Tennessee", "Texas", "Utah",
    "Vermont", "Virginia", "Washington", "West Virginia", "Wisconsin", "Wyoming",
})

BOUNDARY_RENAMES: dict[str, str] = {
    "STUSPS": "region_code",
    "NAME": "region_name",
}


def read_boundaries(path: Path) -> gpd.GeoDataFrame:
    """Read a polygon layer, assuming NAD83 when the file declares no CRS."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"Boundary file not found: {path}")
    try:
        gdf = gpd.read_file(path)
    except (OSError, RuntimeError) as exc:
        raise InputError(f"Cannot read boundaries from {path}: {exc}") from exc
    if gdf.crs is None:
        gdf = gdf.set_crs(BOUNDARY_SOURCE_CRS)
    return gdf


def clean_boundaries(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Normalize column names and keep only the contiguous states."""
    gdf = gdf.rename(columns=BOUNDARY_RENAMES)
    missing = {"region_code", "region_name"} - set(gdf.columns)
    if missing:
        raise InputError(f"Boundary layer is missing columns {sorted(missing)}. Found: {list(gdf.columns)}")

    keep = gdf["region_name"].isin(CONTIGUOUS_STATES)
    dropped = sorted(gdf.loc[~keep, "region_name"].astype(str))
    if dropped:
        logger.info("Excluding %d non-contiguous region(s): %s", len(dropped), ", ".join(dropped))

    gdf = gdf.loc[keep, ["region_code", "region_name", gdf.geometry.name]]
    return gdf.reset_index(drop=True)
