"""Time-scale and calendar conversions for Modified Julian Dates.

Every epoch in topojax is an MJD on an explicit time scale.  This module
provides the scale bridges used by the observer model:

- UTC <-> TT through the leap-second table (``TT = UTC + (TAI-UTC) + 32.184 s``)
- UTC -> UT1 through Earth Orientation Parameter data (:func:`resolve_ut1`)

plus Gregorian calendar conversions.  Calendar arithmetic is done on the
integer Julian Day Number so that the time of day is never rounded into
the date.
"""

from __future__ import annotations

import enum

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import JD_MJD_OFFSET, SECONDS_PER_DAY
from .eop._lookup import get_ut1_utc
from .eop._types import EOPData, EOPExtrapolation
from .errors import TimeResolutionError

TT_TAI: float = 32.184
"""TT - TAI in seconds, fixed by definition."""

_TAI_UTC_1972: float = 10.0
"""TAI-UTC at the start of the leap-second era (1972-01-01)."""

# MJD (UTC) at which each leap second takes effect. TAI-UTC is 10 s from
# the first entry and grows by exactly one second at each later entry.
# IERS Bulletin C; no leap second has been announced after 2017-01-01.
_LEAP_SECOND_MJDS: tuple[float, ...] = (
    41317.0, 41499.0,                     # 1972 Jan, Jul
    41683.0, 42048.0, 42413.0, 42778.0,   # 1973-1976
    43144.0, 43509.0, 43874.0, 44239.0,   # 1977-1980
    44786.0, 45151.0, 45516.0,            # 1981 Jul, 1982 Jul, 1983 Jul
    46247.0, 47161.0,                     # 1985 Jul, 1988
    47892.0, 48257.0,                     # 1990, 1991
    48804.0, 49169.0, 49534.0,            # 1992-1994 Jul
    50083.0, 50630.0, 51179.0,            # 1996, 1997 Jul, 1999
    53736.0, 54832.0,                     # 2006, 2009
    56109.0, 57204.0, 57754.0,            # 2012 Jul, 2015 Jul, 2017
)

# JD = MJD + 2400000.5, and the Julian Day Number of a civil date is the JD
# of its noon, so JDN = MJD(0h) + 2400001.
_JDN_MJD_OFFSET = 2400001


class TimeSystem(enum.Enum):
    """Time scale of a Modified Julian Date.

    Attributes:
        UTC: Coordinated Universal Time.
        TT: Terrestrial Time (the scale of ephemeris arguments).
        UT1: Universal Time tied to the Earth's rotation angle.
    """

    UTC = "UTC"
    TT = "TT"
    UT1 = "UT1"


def leap_seconds_tai_utc(mjd: ArrayLike) -> jax.Array:
    """Return TAI-UTC for a UTC MJD.

    Dates before 1972 get the initial 10 s; dates after the last table entry
    keep the most recent value.  Traceable (``jnp.searchsorted``).

    Args:
        mjd: Modified Julian Date (UTC), scalar or array.

    Returns:
        TAI-UTC in seconds.
    """
    dtype = get_dtype()
    mjd = jnp.asarray(mjd, dtype=dtype)
    breaks = jnp.asarray(_LEAP_SECOND_MJDS, dtype=dtype)

    # Number of leap seconds already in effect at mjd
    n = jnp.searchsorted(breaks, mjd, side="right")
    return _TAI_UTC_1972 + jnp.maximum(n - 1, 0).astype(dtype)


def mjd_utc_to_tt(mjd_utc: ArrayLike) -> jax.Array:
    """Convert an MJD from UTC to TT.

    Args:
        mjd_utc: Modified Julian Date (UTC).

    Returns:
        Modified Julian Date (TT).
    """
    mjd_utc = jnp.asarray(mjd_utc, dtype=get_dtype())
    return mjd_utc + (leap_seconds_tai_utc(mjd_utc) + TT_TAI) / SECONDS_PER_DAY


def mjd_tt_to_utc(mjd_tt: ArrayLike) -> jax.Array:
    """Convert an MJD from TT to UTC.

    The leap-second count is looked up at a first UTC estimate and then
    refined once, which is exact except within ~70 s of a leap second.

    Args:
        mjd_tt: Modified Julian Date (TT).

    Returns:
        Modified Julian Date (UTC).
    """
    mjd_tt = jnp.asarray(mjd_tt, dtype=get_dtype())
    utc_guess = mjd_tt - (leap_seconds_tai_utc(mjd_tt) + TT_TAI) / SECONDS_PER_DAY
    return mjd_tt - (leap_seconds_tai_utc(utc_guess) + TT_TAI) / SECONDS_PER_DAY


def ut1_minus_utc(
    eop: EOPData,
    mjd_utc: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> jax.Array:
    """Return UT1-UTC [s] at a UTC date, failing if it is unavailable.

    Outside ``jax.jit`` a missing correction raises immediately.  Under
    tracing the check cannot run and a missing correction propagates as NaN.

    Args:
        eop: EOP dataset providing UT1-UTC.
        mjd_utc: Modified Julian Date (UTC).
        extrapolation: Behaviour outside the dataset range. With
            ``EOPExtrapolation.ERROR`` out-of-range epochs are unresolvable.

    Returns:
        UT1-UTC in seconds.

    Raises:
        TimeResolutionError: If UT1-UTC is unavailable for *mjd_utc*.
    """
    mjd_utc = jnp.asarray(mjd_utc, dtype=get_dtype())
    ut1_utc = get_ut1_utc(eop, mjd_utc, extrapolation)

    if not isinstance(ut1_utc, jax.core.Tracer) and np.any(np.isnan(np.asarray(ut1_utc))):
        raise TimeResolutionError(
            f"No UT1-UTC correction available for MJD {np.asarray(mjd_utc)} (UTC); "
            f"EOP data covers [{float(eop.mjd_min)}, {float(eop.mjd_max)}]"
        )
    return ut1_utc


def resolve_ut1(
    eop: EOPData,
    mjd_utc: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> jax.Array:
    """Convert an MJD from UTC to UT1 using EOP data.

    ``UT1 = UTC + (UT1-UTC)``, see :func:`ut1_minus_utc`.

    Args:
        eop: EOP dataset providing UT1-UTC.
        mjd_utc: Modified Julian Date (UTC).
        extrapolation: Behaviour outside the dataset range.

    Returns:
        Modified Julian Date (UT1).

    Raises:
        TimeResolutionError: If UT1-UTC is unavailable for *mjd_utc*.

    Examples:
        ```python
        from topojax.eop import static_eop
        from topojax.time import resolve_ut1
        eop = static_eop(ut1_utc=-0.4)
        mjd_ut1 = resolve_ut1(eop, 57028.5)
        ```
    """
    mjd_utc = jnp.asarray(mjd_utc, dtype=get_dtype())
    return mjd_utc + ut1_minus_utc(eop, mjd_utc, extrapolation) / SECONDS_PER_DAY


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date and time of day to MJD.

    The date goes through the integer Julian Day Number (Fliegel & Van
    Flandern), so any proleptic Gregorian date after 4800 BC is handled.

    Args:
        year: Calendar year.
        month: Month, 1-12.
        day: Day of month.
        hour: Hour. Default: ``0``
        minute: Minute. Default: ``0``
        second: Second, may be fractional. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. H. F. Fliegel and T. C. Van Flandern, *A Machine Algorithm for
           Processing Calendar Dates*, Communications of the ACM 11, 657, 1968.
    """
    dtype = get_dtype()
    year = jnp.asarray(year, dtype=jnp.int32)
    month = jnp.asarray(month, dtype=jnp.int32)
    day = jnp.asarray(day, dtype=jnp.int32)

    # Shift the year to start in March so the leap day falls at its end
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    jdn = day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045

    second = jnp.asarray(second, dtype=dtype)
    frac_day = ((hour * 60 + minute) * 60 + second) / SECONDS_PER_DAY

    return (jdn - _JDN_MJD_OFFSET).astype(dtype) + frac_day


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Julian Date.

    See :func:`caldate_to_mjd` for the arguments.
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Julian Date to Modified Julian Date."""
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Modified Julian Date to Julian Date."""
    return mjd + JD_MJD_OFFSET


def mjd_to_caldate(
    mjd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Split an MJD into Gregorian calendar date and time of day.

    The time of day is rounded to the millisecond; a value that rounds up to
    24:00 rolls over to 00:00 of the next day.

    Args:
        mjd: Modified Julian Date.

    Returns:
        tuple: ``(year, month, day, hour, minute, second)``; the first five
        are int32 and *second* uses the configured float dtype.

    References:

        1. E. G. Richards, *Mapping Time: The Calendar and its History*,
           Oxford University Press, 1998, p. 324.
    """
    dtype = get_dtype()
    mjd = jnp.asarray(mjd, dtype=dtype)
    mjd_day = jnp.floor(mjd)

    ms = jnp.round((mjd - mjd_day) * 86400000.0).astype(jnp.int32)
    rollover = ms >= 86400000
    ms = jnp.where(rollover, ms - 86400000, ms)
    jdn = mjd_day.astype(jnp.int32) + _JDN_MJD_OFFSET + rollover.astype(jnp.int32)

    f = jdn + 1401 + (((4 * jdn + 274277) // 146097) * 3) // 4 - 38
    e = 4 * f + 3
    g = (e % 1461) // 4
    h = 5 * g + 2
    day = (h % 153) // 5 + 1
    month = (h // 153 + 2) % 12 + 1
    year = e // 1461 - 4716 + (14 - month) // 12

    hour = ms // 3600000
    minute = (ms // 60000) % 60
    second = (ms % 60000).astype(dtype) / 1000.0

    return year, month, day, hour, minute, second


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Split a Julian Date into calendar date and time of day.

    See :func:`mjd_to_caldate`.
    """
    return mjd_to_caldate(jnp.asarray(jd, dtype=get_dtype()) - JD_MJD_OFFSET)
