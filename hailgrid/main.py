"""Command-line entry point: fetch inputs, build the hail grids, write NetCDF.

Usage:
    hailgrid --year 2015 --resolution 25000 --output data/hail_grids_2015.nc

This command:
1. Downloads the SWDI hail file and the Census state boundaries (cached).
2. Cleans, projects and grids the detections.
3. Logs summary statistics and the top cells by hail days.
4. Writes the masked annual and seasonal layers to one NetCDF file.
"""

import argparse
import logging
import sys
from pathlib import Path

from hailgrid.core.config import settings
from hailgrid.core.errors import HailGridError
from hailgrid.pipeline.fetcher import InputPaths, fetch_inputs
from hailgrid.services.hail_grids import HailGridResult, run_from_files

logger = logging.getLogger("hailgrid")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid a year of NEXRAD hail detections")
    parser.add_argument("--year", type=int, default=settings.hail_year, help="Year of SWDI hail data")
    parser.add_argument(
        "--resolution", type=float, default=settings.resolution_m, help="Cell size in metres"
    )
    parser.add_argument(
        "--extent",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=settings.grid_extent,
        help="Grid extent override in metres (rounded up to whole cells)",
    )
    parser.add_argument("--data-dir", type=Path, default=settings.data_dir, help="Download directory")
    parser.add_argument("--output", type=Path, default=None, help="NetCDF output path")
    parser.add_argument(
        "--strict", action="store_true", help="Abort on unparseable timestamps instead of dropping"
    )
    parser.add_argument(
        "--no-fetch", action="store_true", help="Use files already in --data-dir, never download"
    )
    return parser.parse_args(argv)


def _local_inputs(data_dir: Path, year: int) -> InputPaths:
    hail_name = settings.hail_url_template.format(year=year).rsplit("/", 1)[-1]
    states_dir = data_dir / Path(settings.states_url.rsplit("/", 1)[-1]).stem
    return InputPaths(
        observations=data_dir / hail_name,
        boundaries=states_dir / settings.states_shapefile,
    )


def _log_summary(result: HailGridResult) -> None:
    report = result.cleaning
    logger.info(
        "Rows: %d read, %d kept (%d bad probability, %d bad timestamp, %d bad coordinates, "
        "%d outside grid)",
        report.rows_read,
        report.rows_kept,
        report.dropped_probability,
        report.dropped_unparseable,
        report.dropped_coordinates,
        result.outside_grid,
    )
    logger.info(
        "Grid: %d x %d cells at %.0f m; bounds %s",
        result.grid.ncol,
        result.grid.nrow,
        result.grid.resolution,
        ", ".join(f"{v:.0f}" for v in result.bounds),
    )

    days = result.hail_days.to_series().dropna().sort_values(ascending=False)
    logger.info("Top 10 cells by hail days:")
    for (y, x), n in days.head(10).items():
        size = float(result.max_size.sel(y=y, x=x))
        logger.info("  x=%.0f y=%.0f: %d days, max size %.2f in", x, y, n, size)

    for season in result.hail_days_by_season["season"].values:
        layer = result.hail_days_by_season.sel(season=season)
        logger.info(
            "  %-6s: %d cells with hail, max %d days",
            season,
            int(layer.notnull().sum()),
            int(layer.max().fillna(0)),
        )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    cfg = settings.model_copy(update={"hail_year": args.year, "data_dir": args.data_dir})
    try:
        if args.no_fetch:
            paths = _local_inputs(args.data_dir, args.year)
        else:
            paths = fetch_inputs(cfg)

        result = run_from_files(
            paths.observations,
            paths.boundaries,
            resolution=args.resolution,
            extent=tuple(args.extent) if args.extent else None,
            strict=args.strict,
        )
    except HailGridError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    _log_summary(result)

    output = args.output or args.data_dir / f"hail_grids_{args.year}.nc"
    output.parent.mkdir(parents=True, exist_ok=True)
    result.to_dataset().to_netcdf(output, engine="h5netcdf")
    logger.info("Wrote %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
