"""Reproject points and polygons into the US National Atlas Equal Area CRS.

Lambert azimuthal equal-area centered at 45°N, 100°W on a sphere of radius
6 370 997 m (the former EPSG:2163). Equal area means every grid cell covers
the same ground area, so per-cell counts are comparable across the map.
"""

import geopandas as gpd
import pandas as pd
from pyproj import CRS, Transformer

POINT_SOURCE_CRS = "EPSG:4326"

EQUAL_AREA_CRS = CRS.from_proj4(
    "+proj=laea +lat_0=45 +lon_0=-100 +x_0=0 +y_0=0 "
    "+a=6370997 +b=6370997 +units=m +no_defs"
)

_point_transformer = Transformer.from_crs(POINT_SOURCE_CRS, EQUAL_AREA_CRS, always_xy=True)


def project_lonlat(lon, lat):
    """Forward-project longitude/latitude arrays to planar (x, y) metres."""
    return _point_transformer.transform(lon, lat)


def project_observations(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with planar ``x`` and ``y`` columns added."""
    out = df.copy()
    x, y = project_lonlat(out["lon"].to_numpy(dtype=float), out["lat"].to_numpy(dtype=float))
    out["x"] = x
    out["y"] = y
    return out


def project_boundaries(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Return boundaries transformed into the equal-area CRS."""
    return gdf.to_crs(EQUAL_AREA_CRS)
