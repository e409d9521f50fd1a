"""Containers and options for UT1-UTC data."""

from __future__ import annotations

import enum
from typing import NamedTuple

from jax import Array


class EOPData(NamedTuple):
    """Tabulated UT1-UTC, ready for traced lookups.

    A ``NamedTuple`` is a pytree, so an ``EOPData`` can be passed straight
    through ``jax.jit`` and ``jax.vmap``.  Polar motion and celestial pole
    offsets are not stored.

    Attributes:
        mjd: Increasing Modified Julian Dates (UTC), shape ``(N,)``.
        ut1_utc: UT1-UTC at each date [s], shape ``(N,)``.
        mjd_min: First tabulated date.
        mjd_max: Last tabulated date.
    """

    mjd: Array
    ut1_utc: Array
    mjd_min: Array
    mjd_max: Array


class EOPExtrapolation(enum.Enum):
    """What a lookup returns outside ``[mjd_min, mjd_max]``.

    The choice is made while tracing, so each mode compiles separately.

    Attributes:
        HOLD: The value at the nearest end of the table.
        ZERO: Zero.
        ERROR: NaN. :func:`~topojax.time.resolve_ut1` raises
            :class:`~topojax.errors.TimeResolutionError` on it when run eagerly.
    """

    HOLD = "hold"
    ZERO = "zero"
    ERROR = "error"
