"""Greenwich sidereal time.

- :func:`gmst`, :func:`gmst_split`: Greenwich Mean Sidereal Time, IAU 1982 expression evaluated
  at 0h UT1 and advanced by the sidereal rate over the fraction of the day.
- :func:`equation_of_equinoxes`: nutation in longitude projected on the
  equator, ``dpsi * cos(eps)``.
- :func:`gast`: Greenwich Apparent Sidereal Time, the sum of the two.

All angles are in radians and every function is traceable by ``jax.jit``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax.config import get_dtype
from topojax.constants import DAYS_PER_CENTURY, DPI, RADSEC, SECONDS_PER_DAY, SIDEREAL_RATIO, T2000
from topojax.nutation import nutn80, obleq
from topojax.utils import check_gmst_centuries

# Coefficients of GMST at 0h UT1, in seconds of time
_GMST_C0 = 24110.54841
_GMST_C1 = 8640184.812866
_GMST_C2 = 9.3104e-2
_GMST_C3 = -6.2e-6

# Daily part of the linear term, split into whole and fractional seconds
_GMST_C1_WHOLE = 236.0
_GMST_C1_FRAC = _GMST_C1 / DAYS_PER_CENTURY - _GMST_C1_WHOLE


def gmst(mjd_ut1: ArrayLike) -> Array:
    """Compute Greenwich Mean Sidereal Time using the IAU 1982 model.

    The polynomial is evaluated at 0h UT1 of the day containing *mjd_ut1*
    and the fraction of the day is added at the sidereal rate, which keeps
    the large polynomial argument free of the time of day.

    Args:
        mjd_ut1: Modified Julian Date (UT1), scalar or array.

    Returns:
        GMST in radians, in the interval [0, 2pi).

    References:

        1. S. Aoki et al., *The new definition of Universal Time*, A&A 105,
           359-361, 1982.

    Examples:
        ```python
        from topojax.sidereal import gmst
        theta = gmst(51544.5)  # ~4.89496 rad
        ```
    """
    mjd_ut1 = jnp.asarray(mjd_ut1, dtype=get_dtype())
    whole = jnp.floor(mjd_ut1)
    return gmst_split(whole, (mjd_ut1 - whole) * SECONDS_PER_DAY)


def gmst_split(day_ut1: ArrayLike, seconds_ut1: ArrayLike) -> Array:
    """Compute GMST from a UT1 day number and the seconds into that day.

    Same model as :func:`gmst`, for times held as in
    :meth:`Epoch.day_seconds <topojax.epoch.Epoch.day_seconds>`.  The time
    of day never passes through a single large MJD float.

    Args:
        day_ut1: MJD (UT1) of 0h of the day.
        seconds_ut1: Seconds of UT1 since that 0h.

    Returns:
        GMST in radians, in the interval [0, 2pi).
    """
    dtype = get_dtype()
    day = jnp.asarray(day_ut1, dtype=dtype)
    seconds = jnp.asarray(seconds_ut1, dtype=dtype)

    d = day - T2000
    t = d / DAYS_PER_CENTURY
    check_gmst_centuries(t)

    # C1 * t == d * (236 s + frac); the whole seconds reduce exactly even in float32
    gmst0 = (_GMST_C0
             + jnp.remainder(d * _GMST_C1_WHOLE, SECONDS_PER_DAY)
             + d * _GMST_C1_FRAC
             + (_GMST_C3 * t + _GMST_C2) * t * t)
    theta = (gmst0 + seconds * SIDEREAL_RATIO) * (DPI / SECONDS_PER_DAY)

    theta = theta - jnp.floor(theta / DPI) * DPI
    # Rounding can land a tiny negative angle exactly on 2pi
    return jnp.where(theta >= DPI, theta - DPI, theta)


def equation_of_equinoxes(mjd: ArrayLike) -> Array:
    """Compute the equation of the equinoxes.

    Classical approximation ``dpsi * cos(eps)`` with the IAU 1976 mean
    obliquity and IAU 1980 nutation in longitude; the small complementary
    terms are neglected.

    Args:
        mjd: Modified Julian Date, scalar or array, on the scale used for the
            nutation argument.

    Returns:
        Equation of the equinoxes in radians.
    """
    oblm = obleq(mjd)
    dpsi, _ = nutn80(mjd)
    return RADSEC * dpsi * jnp.cos(oblm)


def gast(mjd_ut1: ArrayLike, mjd: ArrayLike) -> Array:
    """Compute Greenwich Apparent Sidereal Time.

    Args:
        mjd_ut1: Modified Julian Date (UT1) for the mean sidereal time.
        mjd: Modified Julian Date for the nutation argument.

    Returns:
        GAST in radians. Not reduced to [0, 2pi); the equation of the
        equinoxes may push it slightly outside.
    """
    return gmst(mjd_ut1) + equation_of_equinoxes(mjd)
