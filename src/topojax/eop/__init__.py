"""UT1-UTC from IERS Earth Orientation Parameters.

Lookups are pure JAX and may be traced::

    from topojax.eop import load_cached_eop, get_ut1_utc
    eop = load_cached_eop()
    ut1_utc = get_ut1_utc(eop, 57028.5)
"""

from topojax.eop._download import IERS_STANDARD_URL, download_standard_eop_file
from topojax.eop._lookup import get_ut1_utc
from topojax.eop._providers import (
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)
from topojax.eop._types import EOPData, EOPExtrapolation

__all__ = [
    "EOPData",
    "EOPExtrapolation",
    "IERS_STANDARD_URL",
    "download_standard_eop_file",
    "get_ut1_utc",
    "load_cached_eop",
    "load_eop_from_file",
    "static_eop",
    "zero_eop",
]
