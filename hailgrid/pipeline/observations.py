"""Load and clean NEXRAD hail-signature records.

Cleaning keeps only detections with POH == 100 and a valid POSH, parses the
scan time into calendar fields, and labels each row with its season.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from hailgrid.core.errors import InputError, ObservationParseError
from hailgrid.models.observation import (
    COLUMN_RENAMES,
    RAW_COLUMNS,
    REQUIRED_HAIL_PROBABILITY,
    TIMESTAMP_FORMAT,
    season_for_month,
)

logger = logging.getLogger(__name__)


@dataclass
class CleaningReport:
    """Row counts from one cleaning pass, for diagnostics."""

    rows_read: int
    dropped_probability: int
    dropped_unparseable: int
    dropped_coordinates: int
    rows_kept: int


def read_observations(path: Path) -> pd.DataFrame:
    """Read a SWDI ``nx3hail`` CSV (plain or gzipped) into raw columns."""
    path = Path(path)
    if not path.is_file():
        raise InputError(f"Observation file not found: {path}")
    try:
        return pd.read_csv(
            path,
            comment="#",
            header=None,
            names=RAW_COLUMNS,
            dtype={"ZTIME": str, "WSR_ID": str, "CELL_ID": str},
        )
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise InputError(f"Cannot read observations from {path}: {exc}") from exc


def clean_observations(
    raw: pd.DataFrame,
    strict: bool = False,
) -> tuple[pd.DataFrame, CleaningReport]:
    """Filter, parse and label raw observations.

    Args:
        raw: Frame with the SWDI columns (either raw or already renamed).
        strict: Abort on the first unparseable timestamp instead of dropping.

    Returns:
        (cleaned frame, CleaningReport)

    Raises:
        ObservationParseError: In strict mode, if any timestamp fails to parse.
        InvariantViolation: If a parsed month has no season.
    """
    df = raw.rename(columns=COLUMN_RENAMES).copy()
    rows_read = len(df)

    for col in ("lon", "lat", "severity_prob", "hail_prob", "max_size"):
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # Sentinel -999 fails both comparisons, as does NaN.
    valid = (df["hail_prob"] == REQUIRED_HAIL_PROBABILITY) & (df["severity_prob"] >= 0)
    dropped_probability = int((~valid).sum())
    df = df.loc[valid]

    located = df["lon"].notna() & df["lat"].notna()
    dropped_coordinates = int((~located).sum())
    if dropped_coordinates:
        logger.warning("Dropping %d row(s) with missing or non-numeric LON/LAT", dropped_coordinates)
    df = df.loc[located]

    ts = pd.to_datetime(df["timestamp"].astype(str), format=TIMESTAMP_FORMAT, errors="coerce")
    bad = ts.isna()
    if bad.any():
        bad_rows = df.index[bad].tolist()
        if strict:
            raise ObservationParseError(
                f"{len(bad_rows)} row(s) have unparseable timestamps, first at row {bad_rows[0]}: "
                f"{df.loc[bad_rows[0], 'timestamp']!r}",
                rows=bad_rows,
            )
        logger.warning(
            "Dropping %d row(s) with unparseable timestamps (first at row %s: %r)",
            len(bad_rows),
            bad_rows[0],
            df.loc[bad_rows[0], "timestamp"],
        )
    dropped_unparseable = int(bad.sum())
    df = df.loc[~bad].copy()
    ts = ts.loc[~bad]

    df["timestamp"] = ts
    df["year"] = ts.dt.year
    df["month"] = ts.dt.month
    df["day"] = ts.dt.day
    df["hour"] = ts.dt.hour
    df["minute"] = ts.dt.minute
    df["second"] = ts.dt.second

    seasons = {month: season_for_month(month).value for month in df["month"].unique()}
    df["season"] = df["month"].map(seasons)

    years = sorted(df["year"].unique())
    if len(years) > 1:
        logger.warning(
            "Observations span %d years (%s); hail days are keyed by month/day only "
            "and will merge dates across years",
            len(years),
            ", ".join(str(y) for y in years),
        )

    df = df.reset_index(drop=True)
    report = CleaningReport(
        rows_read=rows_read,
        dropped_probability=dropped_probability,
        dropped_unparseable=dropped_unparseable,
        dropped_coordinates=dropped_coordinates,
        rows_kept=len(df),
    )
    logger.info(
        "Cleaned observations: %d read, %d dropped (probability), %d dropped (timestamp), "
        "%d dropped (coordinates), %d kept",
        report.rows_read,
        report.dropped_probability,
        report.dropped_unparseable,
        report.dropped_coordinates,
        report.rows_kept,
    )
    return df, report
