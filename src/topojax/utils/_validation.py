"""Range checks that flag non-physical inputs with :class:`DomainWarning`.

Value checks only run on concrete inputs.  Inside ``jax.jit`` or ``jax.vmap``
the inputs are tracers and are passed through unchecked, so the numerical
functions stay traceable.  Dtype checks run in either case.
"""

from __future__ import annotations

import warnings

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from topojax.errors import DomainWarning

# GMST polynomial argument beyond which the IAU 1982 expression is a pure
# extrapolation (±1000 years from J2000).
MAX_GMST_CENTURIES = 10.0


def _concrete(value: ArrayLike) -> np.ndarray | None:
    """Return *value* as a NumPy array, or ``None`` if it is being traced."""
    if isinstance(value, jax.core.Tracer):
        return None
    return np.asarray(value, dtype=float)


def check_latitude(latitude: ArrayLike, use_degrees: bool = True) -> None:
    """Warn if *latitude* lies outside [-90°, 90°].

    Args:
        latitude: Geodetic latitude, scalar or array.
        use_degrees: If ``True`` (default) *latitude* is in degrees, else radians.
    """
    lat = _concrete(latitude)
    if lat is None:
        return
    limit = 90.0 if use_degrees else np.pi / 2.0
    if np.any(np.abs(lat) > limit):
        unit = "deg" if use_degrees else "rad"
        warnings.warn(
            f"Latitude {lat} {unit} is outside [-{limit}, {limit}]; "
            "the resulting position is not on the reference ellipsoid.",
            DomainWarning,
            stacklevel=3,
        )


def check_gmst_centuries(centuries: ArrayLike) -> None:
    """Warn if the GMST polynomial is evaluated far from J2000.

    Args:
        centuries: Julian centuries from J2000 of the 0h UT1 epoch.
    """
    t = _concrete(centuries)
    if t is None:
        return
    if np.any(np.abs(t) > MAX_GMST_CENTURIES):
        warnings.warn(
            f"GMST evaluated {t} Julian centuries from J2000; the IAU 1982 "
            f"polynomial is only meaningful within ±{MAX_GMST_CENTURIES:g} centuries.",
            DomainWarning,
            stacklevel=3,
        )


def check_mjd_precision(mjd: ArrayLike) -> None:
    """Warn if a bare MJD is held in a float coarser than float64.

    Only the dtype is inspected, so the check also runs while tracing.

    Args:
        mjd: Modified Julian Date array.
    """
    dtype = jnp.result_type(mjd)
    if jnp.finfo(dtype).bits < 64:
        warnings.warn(
            f"MJD held as {jnp.dtype(dtype).name} resolves only minutes near the present; "
            "pass an Epoch or use set_dtype(jnp.float64) for the time of day.",
            DomainWarning,
            stacklevel=3,
        )
