"""Heliocentric-frame state of a ground-based observer.

Combines the pieces of the Earth orientation chain into the position and
velocity of an observatory relative to the geocentre, expressed in the
ecliptic mean J2000 frame:

1. Geodetic site to Earth body-fixed position (AU).
2. Rigid-body Earth rotation gives the body-fixed velocity (AU/day).
3. UT1 from the observation time and EOP data.
4. Apparent sidereal time rotates body-fixed to true equator of date.
5. Nutation, precession and obliquity rotate true equator of date to
   ecliptic mean J2000.

The geocentric observer offset is what gets added to the Earth's
heliocentric state when computing topocentric astrometry.
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax.config import get_dtype
from topojax.constants import DPI, SIDEREAL_RATIO
from topojax.coordinates import body_fixed_coord
from topojax.eop import EOPData, EOPExtrapolation
from topojax.epoch import Epoch
from topojax.frames import EpochKind, ReferenceSystem, frame_rotation
from topojax.rotations import Rz
from topojax.sidereal import equation_of_equinoxes, gmst, gmst_split
from topojax.time import resolve_ut1
from topojax.utils import check_mjd_precision


class GeodeticLocation(NamedTuple):
    """Geodetic coordinates of an observing site.

    Attributes:
        longitude: East longitude [deg].
        latitude: Geodetic latitude [deg], expected in [-90, 90].
        height: Height above the reference ellipsoid [m]. May be negative.
    """

    longitude: float
    latitude: float
    height: float


class ObserverState(NamedTuple):
    """Geocentric observer state in the ecliptic mean J2000 frame.

    Attributes:
        position: Position [AU], shape ``(3,)``.
        velocity: Velocity [AU/day], shape ``(3,)``.
    """

    position: Array
    velocity: Array


def earth_angular_velocity() -> Array:
    """Return the Earth rotation vector in the body-fixed frame [rad/day]."""
    return jnp.array([0.0, 0.0, DPI * SIDEREAL_RATIO], dtype=get_dtype())


def _earth_angles(
    eop: EOPData,
    epoch: Epoch | ArrayLike,
    extrapolation: EOPExtrapolation,
) -> tuple[Array, Array]:
    """Return the UTC MJD and the Greenwich mean sidereal time of *epoch*."""
    if not isinstance(epoch, (Epoch, jax.Array)):
        # Python and NumPy scalars are split exactly into day and seconds
        epoch = Epoch(epoch)
    if isinstance(epoch, Epoch):
        utc = epoch.to_utc(eop)
        day_ut1, seconds_ut1 = utc.to_ut1(eop, extrapolation).day_seconds()
        return utc.mjd(), gmst_split(day_ut1, seconds_ut1)

    mjd_utc = jnp.asarray(epoch, dtype=get_dtype())
    check_mjd_precision(mjd_utc)
    return mjd_utc, gmst(resolve_ut1(eop, mjd_utc, extrapolation))


def rotation_earth_fixed_to_ecliptic(
    eop: EOPData,
    epoch: Epoch | ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> Array:
    """Compute the rotation from the Earth body-fixed frame to ecliptic mean J2000.

    The Earth rotation angle is the apparent sidereal time at UT1; nutation
    and precession are evaluated at the UTC date.

    Args:
        eop: EOP data providing UT1-UTC.
        epoch: Observation time, an :class:`~topojax.epoch.Epoch` or a bare
            MJD interpreted as UTC.
        extrapolation: Behaviour of the UT1-UTC lookup outside the EOP data.

    Returns:
        3x3 rotation matrix ``R`` with ``x_ecliptic = R @ x_body_fixed``.

    Raises:
        TimeResolutionError: If UT1 cannot be resolved for *epoch*.
    """
    mjd_utc, theta = _earth_angles(eop, epoch, extrapolation)

    R_earth = Rz(-(theta + equation_of_equinoxes(mjd_utc)))
    R_frame = frame_rotation(
        ReferenceSystem.EQUT, EpochKind.OFDATE,
        ReferenceSystem.ECLM, EpochKind.J2000,
        mjd_utc,
    )
    return R_frame @ R_earth


def pvobs(
    eop: EOPData,
    epoch: Epoch | ArrayLike,
    longitude: ArrayLike,
    latitude: ArrayLike,
    height: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> ObserverState:
    """Compute the geocentric position and velocity of a ground observer.

    Args:
        eop: EOP data providing UT1-UTC.
        epoch: Observation time, an :class:`~topojax.epoch.Epoch` or a bare
            MJD interpreted as UTC. A Python or NumPy MJD is split into day
            and seconds in float64; a JAX array MJD is used as is, and a
            :class:`~topojax.errors.DomainWarning` flags one coarser than
            float64.
        longitude: East longitude [deg].
        latitude: Geodetic latitude [deg].
        height: Height above the reference ellipsoid [m].
        extrapolation: Behaviour of the UT1-UTC lookup outside the EOP data.

    Returns:
        ObserverState: Position [AU] and velocity [AU/day] in the ecliptic
        mean J2000 frame.

    Raises:
        TimeResolutionError: If UT1 cannot be resolved for *epoch*.

    Examples:
        ```python
        from topojax.eop import zero_eop
        from topojax.observer import pvobs
        state = pvobs(zero_eop(), 57028.479297592596, 203.744090, 20.707233557, 3067.694)
        ```
    """
    x_bf = body_fixed_coord(longitude, latitude, height)
    v_bf = jnp.cross(earth_angular_velocity(), x_bf)

    R = rotation_earth_fixed_to_ecliptic(eop, epoch, extrapolation)

    return ObserverState(R @ x_bf, R @ v_bf)


def pvobs_location(
    eop: EOPData,
    epoch: Epoch | ArrayLike,
    location: GeodeticLocation,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> ObserverState:
    """Compute the observer state for a :class:`GeodeticLocation`.

    See :func:`pvobs` for details.
    """
    return pvobs(
        eop, epoch, location.longitude, location.latitude, location.height, extrapolation
    )
