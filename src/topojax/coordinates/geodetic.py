"""Observatory coordinates from geodetic longitude, latitude and height.

Converts a geodetic site description into the parallax constants
``rho*cos(phi')`` and ``rho*sin(phi')`` and into an Earth body-fixed
Cartesian position expressed in astronomical units.

The ellipsoid is defined by :data:`~topojax.constants.EARTH_MAJOR_AXIS` and
:data:`~topojax.constants.EARTH_MINOR_AXIS`; heights are given in metres
and divided by the semi-major axis, so the parallax constants are
dimensionless and normalised to the equatorial radius.

References:
    1. P. K. Seidelmann, *Explanatory Supplement to the Astronomical
       Almanac*, 1992, Sec. 4.22.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax.config import get_dtype
from topojax.constants import EARTH_MAJOR_AXIS, EARTH_MINOR_AXIS, ERAU
from topojax.utils import check_latitude

# Polar to equatorial axis ratio
AXIS_RATIO = EARTH_MINOR_AXIS / EARTH_MAJOR_AXIS


def lat_alt_to_parallax(lat: ArrayLike, height: ArrayLike) -> tuple[Array, Array]:
    """Convert geodetic latitude and height to parallax constants.

    Uses the reduced latitude ``u = atan2(r*sin(lat), cos(lat))`` with
    ``r = b/a``:

    .. math::

        \\rho\\cos\\phi' = \\cos u + \\frac{h}{a}\\cos\\phi

        \\rho\\sin\\phi' = r\\sin u + \\frac{h}{a}\\sin\\phi

    Args:
        lat: Geodetic latitude in *rad*.
        height: Height above the ellipsoid in *m*.

    Returns:
        Tuple ``(rho_cos_phi, rho_sin_phi)``: normalised distance of the
        observer from the spin axis and from the equatorial plane.
    """
    lat = jnp.asarray(lat, dtype=get_dtype())
    check_latitude(lat, use_degrees=False)
    return _parallax(lat, height)


def _parallax(lat: Array, height: ArrayLike) -> tuple[Array, Array]:
    height = jnp.asarray(height, dtype=get_dtype())
    u = jnp.arctan2(jnp.sin(lat) * AXIS_RATIO, jnp.cos(lat))

    rho_sin_phi = AXIS_RATIO * jnp.sin(u) + (height / EARTH_MAJOR_AXIS) * jnp.sin(lat)
    rho_cos_phi = jnp.cos(u) + (height / EARTH_MAJOR_AXIS) * jnp.cos(lat)

    return rho_cos_phi, rho_sin_phi


def geodetic_to_parallax(lat: ArrayLike, height: ArrayLike) -> tuple[Array, Array]:
    """Convert geodetic latitude in degrees and height to parallax constants.

    Args:
        lat: Geodetic latitude in *deg*.
        height: Height above the ellipsoid in *m*.

    Returns:
        Tuple ``(rho_cos_phi, rho_sin_phi)``, see :func:`lat_alt_to_parallax`.

    Example:
        >>> from topojax.coordinates import geodetic_to_parallax
        >>> pxy, pz = geodetic_to_parallax(20.707233557, 3067.694)
    """
    lat = jnp.asarray(lat, dtype=get_dtype())
    check_latitude(lat)
    return _parallax(jnp.deg2rad(lat), height)


def body_fixed_coord(longitude: ArrayLike, latitude: ArrayLike, height: ArrayLike) -> Array:
    """Compute the Earth body-fixed position of an observatory.

    The position is not corrected for Earth rotation; it is fixed to the
    rotating Earth with the x-axis towards the Greenwich meridian.

    Args:
        longitude: East longitude in *deg*.
        latitude: Geodetic latitude in *deg*.
        height: Height above the ellipsoid in *m*.

    Returns:
        jax.Array: Body-fixed position ``[x, y, z]`` in *AU*.

    Example:
        >>> from topojax.coordinates import body_fixed_coord
        >>> x = body_fixed_coord(203.744090, 20.707233557, 3067.694)
    """
    pxy, pz = geodetic_to_parallax(latitude, height)
    lon = jnp.deg2rad(jnp.asarray(longitude, dtype=get_dtype()))

    return jnp.array([
        ERAU * pxy * jnp.cos(lon),
        ERAU * pxy * jnp.sin(lon),
        ERAU * pz,
    ])
