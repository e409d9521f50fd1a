"""Rotations between named equatorial and ecliptic reference systems.

A reference system is identified by its fundamental plane and its epoch:

- **Plane**: ``ECLM`` (mean ecliptic), ``EQUM`` (mean equator) or ``EQUT``
  (true equator, i.e. including nutation).
- **Epoch**: ``J2000`` or ``OFDATE`` (the date of the computation).

:func:`frame_rotation` returns the matrix ``R`` such that
``x_target = R @ x_source``.  It is composed from three elementary steps:

- **Obliquity**: ``ECLM <-> EQUM`` at a fixed epoch, ``Rx(eps)`` with the
  IAU 1976 mean obliquity of that epoch.
- **Nutation**: ``EQUM <-> EQUT`` at a fixed epoch, IAU 1980 model.
- **Precession**: ``EQUM(J2000) <-> EQUM(of date)``, IAU 1976 model.

The chain is resolved at trace time from the Python enums, so the returned
matrix is traceable in the date argument.
"""

from __future__ import annotations

import enum

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax.config import get_dtype
from topojax.constants import DAYS_PER_CENTURY, RADSEC, T2000
from topojax.nutation import nutn80, obleq
from topojax.rotations import Rx, Ry, Rz


class ReferenceSystem(enum.Enum):
    """Fundamental plane of a reference system."""

    ECLM = "ECLM"
    EQUM = "EQUM"
    EQUT = "EQUT"


class EpochKind(enum.Enum):
    """Epoch of a reference system."""

    J2000 = "J2000"
    OFDATE = "OFDATE"


def _as_enum(value, enum_cls):
    """Accept either an enum member or its string name."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        raise ValueError(
            f"Unknown {enum_cls.__name__} {value!r}; "
            f"expected one of {[m.value for m in enum_cls]}"
        ) from None


# ---------------------------------------------------------------------------
# Elementary rotations
# ---------------------------------------------------------------------------


def rotation_precession(mjd: ArrayLike) -> Array:
    """Compute the precession matrix from mean equator J2000 to mean equator of date.

    Uses the IAU 1976 (Lieske) angles ``zeta``, ``z`` and ``theta``:
    ``P = Rz(-z) @ Ry(theta) @ Rz(-zeta)``.

    Args:
        mjd: Modified Julian Date of the target equator.

    Returns:
        3x3 rotation matrix (EQUM J2000 -> EQUM of date).

    References:

        1. J. H. Lieske et al., A&A 58, 1-16, 1977.
    """
    mjd = jnp.asarray(mjd, dtype=get_dtype())
    t = (mjd - T2000) / DAYS_PER_CENTURY

    zeta = ((0.017998 * t + 0.30188) * t + 2306.2181) * t * RADSEC
    z = ((0.018203 * t + 1.09468) * t + 2306.2181) * t * RADSEC
    theta = ((-0.041833 * t - 0.42665) * t + 2004.3109) * t * RADSEC

    return Rz(-z) @ Ry(theta) @ Rz(-zeta)


def rotation_nutation(mjd: ArrayLike) -> Array:
    """Compute the nutation matrix from mean equator of date to true equator of date.

    ``N = Rx(-(eps + deps)) @ Rz(-dpsi) @ Rx(eps)`` with the IAU 1976 mean
    obliquity ``eps`` and IAU 1980 nutation angles.

    Args:
        mjd: Modified Julian Date.

    Returns:
        3x3 rotation matrix (EQUM -> EQUT, both of date).
    """
    epsm = obleq(mjd)
    dpsi, deps = nutn80(mjd)
    epst = epsm + deps * RADSEC

    return Rx(-epst) @ Rz(-dpsi * RADSEC) @ Rx(epsm)


def rotation_equatorial_to_ecliptic(mjd: ArrayLike) -> Array:
    """Compute the rotation from mean equator to mean ecliptic at the same epoch.

    Args:
        mjd: Modified Julian Date at which the obliquity is evaluated.

    Returns:
        3x3 rotation matrix (EQUM -> ECLM).
    """
    return Rx(obleq(mjd))


# ---------------------------------------------------------------------------
# Named system conversion
# ---------------------------------------------------------------------------


def _type_change(source: ReferenceSystem, target: ReferenceSystem, mjd_epoch: Array) -> Array:
    """Rotation between two planes at the same epoch, routed through EQUM."""
    dtype = get_dtype()
    R = jnp.eye(3, dtype=dtype)

    # source -> EQUM
    if source == ReferenceSystem.ECLM:
        R = rotation_equatorial_to_ecliptic(mjd_epoch).T @ R
    elif source == ReferenceSystem.EQUT:
        R = rotation_nutation(mjd_epoch).T @ R

    # EQUM -> target
    if target == ReferenceSystem.ECLM:
        R = rotation_equatorial_to_ecliptic(mjd_epoch) @ R
    elif target == ReferenceSystem.EQUT:
        R = rotation_nutation(mjd_epoch) @ R

    return R


def frame_rotation(
    source_system: ReferenceSystem | str,
    source_epoch: EpochKind | str,
    target_system: ReferenceSystem | str,
    target_epoch: EpochKind | str,
    mjd: ArrayLike,
) -> Array:
    """Compute the rotation matrix between two named reference systems.

    Args:
        source_system: Plane of the source system (``"ECLM"``, ``"EQUM"``,
            ``"EQUT"`` or the corresponding :class:`ReferenceSystem`).
        source_epoch: Epoch of the source system (``"J2000"`` or ``"OFDATE"``).
        target_system: Plane of the target system.
        target_epoch: Epoch of the target system.
        mjd: Modified Julian Date used for every ``OFDATE`` system, scalar.
            Map over several dates with ``jax.vmap``.

    Returns:
        3x3 rotation matrix ``R`` with ``x_target = R @ x_source``.

    Raises:
        ValueError: If a system or epoch name is not recognised.

    Examples:
        ```python
        from topojax.frames import frame_rotation
        R = frame_rotation("EQUT", "OFDATE", "ECLM", "J2000", 57028.5)
        ```
    """
    source_system = _as_enum(source_system, ReferenceSystem)
    target_system = _as_enum(target_system, ReferenceSystem)
    source_epoch = _as_enum(source_epoch, EpochKind)
    target_epoch = _as_enum(target_epoch, EpochKind)

    mjd = jnp.asarray(mjd, dtype=get_dtype())
    mjd_j2000 = jnp.asarray(T2000, dtype=get_dtype())

    def epoch_mjd(kind: EpochKind) -> Array:
        return mjd_j2000 if kind == EpochKind.J2000 else mjd

    if source_epoch == target_epoch:
        return _type_change(source_system, target_system, epoch_mjd(source_epoch))

    # Epochs differ: move to EQUM at the source epoch, precess, then leave EQUM
    R = _type_change(source_system, ReferenceSystem.EQUM, epoch_mjd(source_epoch))

    P = rotation_precession(mjd)
    if source_epoch == EpochKind.J2000:
        R = P @ R
    else:
        R = P.T @ R

    return _type_change(ReferenceSystem.EQUM, target_system, epoch_mjd(target_epoch)) @ R
