"""Traceable UT1-UTC lookup."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from topojax.eop._types import EOPData, EOPExtrapolation


def get_ut1_utc(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
) -> Array:
    """Linearly interpolate UT1-UTC at a UTC date.

    Works under ``jax.jit``, ``jax.vmap`` and ``jax.grad``.

    Args:
        eop: Tabulated UT1-UTC.
        mjd: Modified Julian Date (UTC).
        extrapolation: Result outside the table. Default: ``HOLD``

    Returns:
        UT1-UTC [s]; NaN outside the table with ``EOPExtrapolation.ERROR``.

    Examples:
        ```python
        from topojax.eop import static_eop, get_ut1_utc
        get_ut1_utc(static_eop(ut1_utc=-0.46), 57028.5)  # -0.46
        ```
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)

    # jnp.interp clamps to the end values, which is HOLD
    value = jnp.interp(mjd, eop.mjd, eop.ut1_utc)
    if extrapolation is EOPExtrapolation.HOLD:
        return value

    fill = 0.0 if extrapolation is EOPExtrapolation.ZERO else jnp.nan
    inside = (mjd >= eop.mjd_min) & (mjd <= eop.mjd_max)
    return jnp.where(inside, value, fill)
