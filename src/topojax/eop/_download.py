"""Fetch the IERS finals file over HTTP."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

STANDARD_FILENAME = "finals.all.iau2000.txt"

IERS_STANDARD_URL = f"https://datacenter.iers.org/data/latestVersion/{STANDARD_FILENAME}"
"""IERS Rapid Service/Prediction Centre finals file (daily since 1973)."""


def download_standard_eop_file(
    filepath: str | Path,
    *,
    url: str = IERS_STANDARD_URL,
    timeout: float = 120.0,
) -> Path:
    """Download the IERS finals file to *filepath*.

    The file is only replaced once the whole body has arrived, so a failed
    download leaves any earlier copy intact.  HTTP and transport errors
    propagate.

    Args:
        filepath: Destination. Missing parent directories are created.
        url: Source URL. Default: :data:`IERS_STANDARD_URL`
        timeout: Request timeout [s]. Default: ``120.0``

    Returns:
        Absolute path of the written file.

    Raises:
        httpx.HTTPError: If the request fails or returns an error status.
    """
    target = Path(filepath)
    logger.info("Downloading EOP data from %s", url)

    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()
        body = response.text

    target.parent.mkdir(parents=True, exist_ok=True)
    staging = target.with_suffix(target.suffix + ".part")
    staging.write_text(body, encoding="utf-8")
    staging.replace(target)

    logger.info("Saved EOP data to %s", target)
    return target.resolve()
