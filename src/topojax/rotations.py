"""Elementary rotation matrices.

All matrices are *passive* (frame) rotations: ``Rz(a) @ x`` expresses the
vector ``x`` in a frame rotated counter-clockwise by ``a`` about the z-axis.
``Rz(-gast)`` therefore takes Earth-fixed coordinates to the true equator of
date.

References:

    1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
"""

import jax.numpy as jnp

from topojax.config import get_dtype
from topojax.utils import to_radians


def rotmt(angle: float, axis: int, use_degrees: bool = False) -> jnp.ndarray:
    """Frame rotation about coordinate axis *axis*.

    For axis ``i`` and the two axes ``j, k`` that follow it cyclically, the
    matrix is the identity on ``i`` and ``[[c, s], [-s, c]]`` on ``(j, k)``.

    Args:
        angle (float): Scalar rotation angle, counter-clockwise seen from the tip
            of the axis.
        axis (int): ``0`` (x), ``1`` (y) or ``2`` (z). Resolved at trace time.
        use_degrees (bool): *angle* is in degrees. Default: ``False``

    Returns:
        jnp.ndarray: 3x3 rotation matrix.

    Raises:
        ValueError: If *axis* is not 0, 1 or 2.
    """
    if axis not in (0, 1, 2):
        raise ValueError(f"Invalid rotation axis {axis}; must be 0, 1 or 2")

    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    j, k = (axis + 1) % 3, (axis + 2) % 3

    return (jnp.zeros((3, 3), dtype=c.dtype)
            .at[axis, axis].set(1.0)
            .at[j, j].set(c)
            .at[k, k].set(c)
            .at[j, k].set(s)
            .at[k, j].set(-s))


def Rx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Frame rotation about the x-axis. See :func:`rotmt`."""
    return rotmt(angle, 0, use_degrees)


def Ry(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Frame rotation about the y-axis. See :func:`rotmt`."""
    return rotmt(angle, 1, use_degrees)


def Rz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Frame rotation about the z-axis. See :func:`rotmt`."""
    return rotmt(angle, 2, use_degrees)
