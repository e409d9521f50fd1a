"""Ways to obtain an :class:`~topojax.eop.EOPData`."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
import jax.numpy as jnp
from jax.typing import ArrayLike

from topojax.config import get_dtype
from topojax.eop._download import STANDARD_FILENAME, download_standard_eop_file
from topojax.eop._parsers import parse_standard_file
from topojax.eop._types import EOPData
from topojax.errors import TimeResolutionError
from topojax.utils.caching import get_eop_cache_dir, is_file_stale

logger = logging.getLogger(__name__)


def _eop_from_table(mjd: ArrayLike, ut1_utc: ArrayLike) -> EOPData:
    dtype = get_dtype()
    mjd = jnp.asarray(mjd, dtype=dtype)
    return EOPData(
        mjd=mjd,
        ut1_utc=jnp.asarray(ut1_utc, dtype=dtype),
        mjd_min=mjd[0],
        mjd_max=mjd[-1],
    )


def static_eop(
    ut1_utc: float = 0.0,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> EOPData:
    """Constant UT1-UTC over ``[mjd_min, mjd_max]``.

    Args:
        ut1_utc: UT1-UTC [s]. Default: ``0.0``
        mjd_min: First valid date. Default: ``0.0``
        mjd_max: Last valid date. Default: ``99999.0``

    Returns:
        A two-point table holding *ut1_utc* at both ends.

    Examples:
        ```python
        from topojax.eop import static_eop
        eop = static_eop(ut1_utc=-0.4644, mjd_min=57000.0, mjd_max=57100.0)
        ```
    """
    return _eop_from_table([mjd_min, mjd_max], [ut1_utc, ut1_utc])


def zero_eop() -> EOPData:
    """UT1-UTC = 0 for every date, i.e. UT1 taken as UTC.

    The error this introduces is below 0.9 s of Earth rotation.
    """
    return static_eop()


def load_eop_from_file(filepath: str | Path) -> EOPData:
    """Read UT1-UTC from an IERS finals file.

    Args:
        filepath: Path of a ``finals.all.iau2000.txt`` style file.

    Returns:
        The tabulated UT1-UTC.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no usable UT1-UTC values.
    """
    mjd, ut1_utc = parse_standard_file(filepath)
    return _eop_from_table(mjd, ut1_utc)


def load_cached_eop(
    filepath: str | Path | None = None,
    *,
    max_age_days: float = 7.0,
) -> EOPData:
    """Read UT1-UTC from the local cache, refreshing it from IERS when old.

    A cached file older than *max_age_days* (or a missing one) is downloaded
    again.  When that download fails an existing stale file is still used,
    with a warning.

    Args:
        filepath: Cache file. Default: ``<cache>/eop/finals.all.iau2000.txt``
        max_age_days: Age at which the file is refreshed [days]. Default: ``7.0``

    Returns:
        The tabulated UT1-UTC.

    Raises:
        TimeResolutionError: If there is neither a downloaded nor a cached
            file, or the file cannot be read.

    Examples:
        ```python
        from topojax.eop import load_cached_eop
        eop = load_cached_eop(max_age_days=1.0)
        ```
    """
    path = get_eop_cache_dir() / STANDARD_FILENAME if filepath is None else Path(filepath)

    if is_file_stale(path, max_age_days * 86400.0):
        try:
            download_standard_eop_file(path)
        except (httpx.HTTPError, OSError) as err:
            if not path.exists():
                raise TimeResolutionError(
                    f"EOP data unavailable: download failed and {path} does not exist"
                ) from err
            logger.warning("EOP download failed; falling back to stale cached file %s", path, exc_info=True)

    try:
        return load_eop_from_file(path)
    except (OSError, ValueError) as err:
        raise TimeResolutionError(f"Failed to load EOP file {path}") from err
