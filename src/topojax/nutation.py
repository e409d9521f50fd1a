"""Mean obliquity of the ecliptic and IAU 1980 nutation.

Implements the classical IAU 1976 obliquity polynomial and the 106-term
IAU 1980 nutation series used by the equinox-based (GMST + equation of the
equinoxes) Earth rotation model.

All functions take a Modified Julian Date and use only ``jnp`` operations,
so they are traceable by ``jax.jit``, ``jax.vmap`` and ``jax.grad``.
Precision follows :func:`~topojax.config.get_dtype`.

Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax._nutation80_data import NUTATION_1980_COEFFS
from topojax.config import get_dtype
from topojax.constants import DAYS_PER_CENTURY, DPI, OBLIQUITY_J2000, RADSEC, T2000, TURNAS

# Units of 0.1 milliarcsecond to arcseconds
_U2AS: float = 1e-4


def _centuries(mjd: ArrayLike) -> Array:
    """Julian centuries elapsed since J2000 for an MJD."""
    mjd = jnp.asarray(mjd, dtype=get_dtype())
    return (mjd - T2000) / DAYS_PER_CENTURY


# ---------------------------------------------------------------------------
# Obliquity
# ---------------------------------------------------------------------------


def obleq(mjd: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 1976 model.

    Args:
        mjd: Modified Julian Date (TT, or UTC where the sub-minute difference
            is negligible).

    Returns:
        Mean obliquity of date in radians.

    References:

        1. J. H. Lieske et al., A&A 58, 1-16, 1977.

    Examples:
        ```python
        from topojax.nutation import obleq
        eps = obleq(51544.5)  # ~0.40909 rad
        ```
    """
    t = _centuries(mjd)
    return (((0.00181 * t - 0.0006) * t - 46.815) * t + OBLIQUITY_J2000) * RADSEC


# ---------------------------------------------------------------------------
# Nutation
# ---------------------------------------------------------------------------


def fundamental_arguments_1980(t: ArrayLike) -> Array:
    """Delaunay arguments of the IAU 1980 nutation theory.

    Args:
        t: Julian centuries since J2000.0.

    Returns:
        Array ``[l, l', F, D, Omega]`` in radians.
    """
    t = jnp.asarray(t, dtype=get_dtype())

    # Mean anomaly of the Moon
    el = (
        jnp.fmod(485866.733 + (715922.633 + (31.310 + 0.064 * t) * t) * t, TURNAS) * RADSEC
        + jnp.fmod(1325.0 * t, 1.0) * DPI
    )
    # Mean anomaly of the Sun
    elp = (
        jnp.fmod(1287099.804 + (1292581.224 + (-0.577 - 0.012 * t) * t) * t, TURNAS) * RADSEC
        + jnp.fmod(99.0 * t, 1.0) * DPI
    )
    # Mean argument of the latitude of the Moon
    f = (
        jnp.fmod(335778.877 + (295263.137 + (-13.257 + 0.011 * t) * t) * t, TURNAS) * RADSEC
        + jnp.fmod(1342.0 * t, 1.0) * DPI
    )
    # Mean elongation of the Moon from the Sun
    d = (
        jnp.fmod(1072261.307 + (1105601.328 + (-6.891 + 0.019 * t) * t) * t, TURNAS) * RADSEC
        + jnp.fmod(1236.0 * t, 1.0) * DPI
    )
    # Longitude of the mean ascending node of the lunar orbit
    om = (
        jnp.fmod(450160.280 + (-482890.539 + (7.455 + 0.008 * t) * t) * t, TURNAS) * RADSEC
        + jnp.fmod(-5.0 * t, 1.0) * DPI
    )

    return jnp.stack([el, elp, f, d, om], axis=-1)


def nutn80(mjd: ArrayLike) -> tuple[Array, Array]:
    """Nutation in longitude and obliquity, IAU 1980 model.

    Args:
        mjd: Modified Julian Date, scalar or array.

    Returns:
        Tuple ``(dpsi, deps)`` in arcseconds, each shaped like *mjd*.

    References:

        1. P. K. Seidelmann, Celest. Mech. 27, 79-106, 1982.
        2. IAU SOFA routine ``iauNut80``.

    Examples:
        ```python
        from topojax.nutation import nutn80
        dpsi, deps = nutn80(57028.5)
        ```
    """
    dtype = get_dtype()
    t = _centuries(mjd)

    coeffs = jnp.asarray(NUTATION_1980_COEFFS, dtype=dtype)
    multipliers = coeffs[:, :5]
    sp, spt, ce, cet = coeffs[:, 5], coeffs[:, 6], coeffs[:, 7], coeffs[:, 8]

    # Term arguments, shape (..., n_terms)
    args = jnp.einsum("kj,...j->...k", multipliers, fundamental_arguments_1980(t))
    t = t[..., None]

    dpsi = jnp.sum((sp + spt * t) * jnp.sin(args), axis=-1)
    deps = jnp.sum((ce + cet * t) * jnp.cos(args), axis=-1)

    return dpsi * _U2AS, deps * _U2AS
