"""Hail observation schema and season derivation.

Records come from the NOAA Severe Weather Data Inventory (SWDI) ``nx3hail``
product: one row per storm cell flagged by the NEXRAD hail detection
algorithm on a single volume scan.
"""

import enum

from hailgrid.core.errors import InvariantViolation

# Column order of the SWDI bulk CSV. The file's own header and units lines
# start with '#' and are skipped as comments.
RAW_COLUMNS: list[str] = [
    "ZTIME",
    "LON",
    "LAT",
    "WSR_ID",
    "CELL_ID",
    "RANGE",
    "AZIMUTH",
    "SEVPROB",
    "PROB",
    "MAXSIZE",
]

COLUMN_RENAMES: dict[str, str] = {
    "ZTIME": "timestamp",
    "LON": "lon",
    "LAT": "lat",
    "WSR_ID": "station_id",
    "CELL_ID": "cell_id",
    "RANGE": "range",
    "AZIMUTH": "azimuth",
    "SEVPROB": "severity_prob",
    "PROB": "hail_prob",
    "MAXSIZE": "max_size",
}

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Missing-value marker used by SWDI for POH / POSH.
PROBABILITY_SENTINEL = -999

# Only detections with POH == 100 are kept.
REQUIRED_HAIL_PROBABILITY = 100


class Season(str, enum.Enum):
    WINTER = "Winter"  # Dec, Jan, Feb
    SPRING = "Spring"  # Mar, Apr, May
    SUMMER = "Summer"  # Jun, Jul, Aug
    FALL = "Fall"      # Sep, Oct, Nov


SEASON_MONTHS: dict[Season, frozenset[int]] = {
    Season.WINTER: frozenset({12, 1, 2}),
    Season.SPRING: frozenset({3, 4, 5}),
    Season.SUMMER: frozenset({6, 7, 8}),
    Season.FALL: frozenset({9, 10, 11}),
}

SEASON_BY_MONTH: dict[int, Season] = {
    month: season for season, months in SEASON_MONTHS.items() for month in months
}

SEASON_ORDER: list[str] = [season.value for season in Season]


def season_for_month(month: int) -> Season:
    """Return the meteorological season containing ``month`` (1-12).

    Raises:
        InvariantViolation: If the month is outside 1..12. Calendar dates
            that parsed cleanly never reach this branch.
    """
    try:
        return SEASON_BY_MONTH[int(month)]
    except (KeyError, TypeError, ValueError):
        raise InvariantViolation(f"No season defined for month {month!r}") from None
