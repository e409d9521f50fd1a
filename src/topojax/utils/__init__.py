"""Shared utility functions for topojax.

Provides angle conversion helpers, input range checks and filesystem cache
management.
"""

from topojax.utils._angle import to_radians
from topojax.utils._validation import check_gmst_centuries, check_latitude, check_mjd_precision
from topojax.utils.caching import (
    file_age_seconds,
    get_cache_dir,
    get_eop_cache_dir,
    is_file_stale,
)

__all__ = [
    "check_gmst_centuries",
    "check_latitude",
    "check_mjd_precision",
    "file_age_seconds",
    "get_cache_dir",
    "get_eop_cache_dir",
    "is_file_stale",
    "to_radians",
]
