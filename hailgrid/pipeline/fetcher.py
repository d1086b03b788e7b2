"""Download the raw inputs: SWDI hail signatures and Census state boundaries.

Both files are static archives, so every step is skipped when its output
already exists on disk:

    {data_dir}/hail-{year}.csv.gz
    {data_dir}/cb_2018_us_state_500k.zip  →  {data_dir}/cb_2018_us_state_500k/*.shp
"""

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path

import httpx

from hailgrid.core.config import Settings, settings
from hailgrid.core.errors import InputError

logger = logging.getLogger(__name__)


@dataclass
class InputPaths:
    """Local paths of the two pipeline inputs."""

    observations: Path
    boundaries: Path


def fetch_file(
    url: str,
    dest: Path,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> Path:
    """Stream ``url`` to ``dest`` unless ``dest`` already exists.

    The body is written to a ``.part`` file first and renamed on success, so
    an interrupted download never looks complete. ``timeout`` applies only
    when no ``client`` is passed and defaults to ``settings.download_timeout``.

    Raises:
        InputError: If the request fails or the file cannot be written.
    """
    if dest.exists():
        logger.info("Using cached %s", dest)
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(dest.name + ".part")

    owns_client = client is None
    if owns_client:
        if timeout is None:
            timeout = settings.download_timeout
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    logger.info("Fetching %s", url)
    try:
        with client.stream("GET", url) as resp:
            resp.raise_for_status()
            with open(tmp, "wb") as fh:
                for chunk in resp.iter_bytes():
                    fh.write(chunk)
    except (httpx.HTTPError, OSError) as exc:
        tmp.unlink(missing_ok=True)
        raise InputError(f"Failed to download {url}: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    tmp.replace(dest)
    logger.info("Downloaded %s (%.1f MB)", dest, dest.stat().st_size / 1e6)
    return dest


def extract_zip(archive: Path, dest_dir: Path, member: str) -> Path:
    """Extract ``archive`` into ``dest_dir`` unless ``member`` is already there."""
    target = dest_dir / member
    if target.exists():
        logger.info("Using extracted %s", target)
        return target

    dest_dir.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(dest_dir)
    except (zipfile.BadZipFile, OSError) as exc:
        raise InputError(f"Cannot extract {archive}: {exc}") from exc

    if not target.exists():
        raise InputError(f"{member} not found in {archive}")
    logger.info("Extracted %s", target)
    return target


def fetch_inputs(cfg: Settings = settings, client: httpx.Client | None = None) -> InputPaths:
    """Make sure both inputs are on disk and return their paths."""
    data_dir = Path(cfg.data_dir)

    hail_url = cfg.hail_url_template.format(year=cfg.hail_year)
    hail_path = fetch_file(
        hail_url, data_dir / hail_url.rsplit("/", 1)[-1], client, timeout=cfg.download_timeout
    )

    states_zip = fetch_file(
        cfg.states_url,
        data_dir / cfg.states_url.rsplit("/", 1)[-1],
        client,
        timeout=cfg.download_timeout,
    )
    shp = extract_zip(states_zip, data_dir / states_zip.stem, cfg.states_shapefile)

    return InputPaths(observations=hail_path, boundaries=shp)
