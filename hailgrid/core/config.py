"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path("data")

    # NOAA SWDI NEXRAD Level-III hail signatures (nx3hail), one bulk file per year
    hail_year: int = 2015
    hail_url_template: str = (
        "https://www.ncei.noaa.gov/pub/data/swdi/database-csv/v2/hail-{year}.csv.gz"
    )

    # Census cartographic boundary file for US states
    states_url: str = "https://www2.census.gov/geo/tiger/GENZ2018/shp/cb_2018_us_state_500k.zip"
    states_shapefile: str = "cb_2018_us_state_500k.shp"

    # Grid tuning
    resolution_m: float = 25_000.0
    grid_extent_x_m: float | None = None  # None → bbox width rounded up to a multiple of resolution
    grid_extent_y_m: float | None = None

    download_timeout: float = 120.0

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def grid_extent(self) -> tuple[float, float] | None:
        if self.grid_extent_x_m is None or self.grid_extent_y_m is None:
            return None
        return (self.grid_extent_x_m, self.grid_extent_y_m)


settings = Settings()
