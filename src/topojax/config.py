"""Floating-point precision used by topojax.

All arrays created by the library take the dtype returned by
:func:`get_dtype`, ``jnp.float32`` unless changed with :func:`set_dtype`.

An MJD near 5e4 carries about 7 significant digits in float32, i.e. a few
minutes, which is far too coarse for an observer position.  An
:class:`~topojax.epoch.Epoch` keeps the time of day separately and is
safe at any dtype; for the rest of the computation astrometric work should
start with::

    import jax.numpy as jnp
    import topojax
    topojax.set_dtype(jnp.float64)

The dtype is read while tracing, so change it before the first
``jax.jit`` call.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

# Epoch equality tolerance [s] per supported dtype. Epoch seconds are held
# in at least float32, whose spacing near 86400 s is about 8 ms.
_EPOCH_EQ_TOLERANCE = {
    jnp.float16: 1e-2,
    jnp.bfloat16: 1e-2,
    jnp.float32: 1e-2,
    jnp.float64: 1e-6,
}

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Select the float dtype for all subsequent computations.

    ``jnp.float64`` also switches on ``jax_enable_x64``.

    Args:
        dtype: ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32`` or
            ``jnp.float64``.

    Raises:
        ValueError: For any other dtype.
    """
    global _dtype
    if dtype not in _EPOCH_EQ_TOLERANCE:
        supported = ", ".join(jnp.dtype(d).name for d in _EPOCH_EQ_TOLERANCE)
        raise ValueError(f"Unsupported dtype {dtype}; expected one of {supported}")
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """The active float dtype."""
    return _dtype


def get_epoch_eq_tolerance() -> float:
    """Tolerance [s] within which two epochs compare equal.

    1e-6 s for float64 and 1e-2 s otherwise, matching the resolution of the
    seconds-of-day part of an :class:`~topojax.epoch.Epoch`.
    """
    return _EPOCH_EQ_TOLERANCE[_dtype]
