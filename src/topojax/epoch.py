"""The epoch module provides the ``Epoch`` class: an instant tagged with its time scale.

Mixing time scales silently is the main correctness hazard when reducing
observations (UTC observation times, TT ephemeris arguments, UT1 Earth
rotation), so every ``Epoch`` carries a :class:`~topojax.time.TimeSystem` and
conversions are explicit method calls.

An instant is held as an integer MJD day number plus seconds of that day,
with a Kahan compensator for the rounding of repeated additions.  A single
float32 MJD near 57000 only resolves about 6 minutes; the seconds of day
resolve about 8 ms, so leap-second, UT1 and arithmetic shifts of a few
seconds survive at the default precision.  Seconds are never held in less
than float32.

The Epoch class is registered as a JAX pytree.  The day, seconds and
compensator are leaves; the time system is static auxiliary data, so epochs
can be passed through ``jax.jit`` and ``jax.vmap`` and a change of scale
triggers a retrace rather than a silent mix-up.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from .config import get_dtype, get_epoch_eq_tolerance
from .constants import SECONDS_PER_DAY
from .eop._lookup import get_ut1_utc
from .eop._types import EOPData, EOPExtrapolation
from .time import (
    TT_TAI,
    TimeSystem,
    caldate_to_mjd,
    leap_seconds_tai_utc,
    mjd_to_caldate,
    ut1_minus_utc,
)

_MS_PER_DAY = 86_400_000


def _seconds_dtype():
    # Seconds of day reach 86400, past the useful range of 16-bit floats
    return jnp.promote_types(get_dtype(), jnp.float32)


def _split_mjd(mjd):
    """Split an MJD into an int32 day number and seconds of day.

    Python and NumPy values are split in float64, so an MJD given as a
    Python float keeps its full time of day whatever the configured dtype.
    """
    if isinstance(mjd, jax.Array):
        day = jnp.floor(mjd)
        frac = mjd - day
    else:
        mjd = np.asarray(mjd, dtype=np.float64)
        day = np.floor(mjd)
        frac = mjd - day
    return (jnp.asarray(day, dtype=jnp.int32),
            jnp.asarray(frac * SECONDS_PER_DAY, dtype=_seconds_dtype()))


def _tt_minus_utc(day_utc):
    # Leap seconds take effect at 0h UTC, so the UTC day number fixes TAI-UTC
    return leap_seconds_tai_utc(day_utc) + TT_TAI


class Epoch:
    """An instant on an explicit time scale.

    Constructors:
        Epoch(57028.5)                       # UTC
        Epoch(57028.5, TimeSystem.TT)
        Epoch.from_caldate(2015, 1, 7, 11, 30, 0.0, time_system=TimeSystem.UTC)
    """

    __slots__ = ('_day', '_seconds', '_kahan_c', '_time_system')

    def __init__(self, mjd, time_system: TimeSystem = TimeSystem.UTC) -> None:
        """Initialize Epoch.

        Args:
            mjd: Modified Julian Date, scalar.
            time_system: Time scale of *mjd*. Default: ``TimeSystem.UTC``.
        """
        if not isinstance(time_system, TimeSystem):
            raise ValueError(f"Unknown time system: {time_system!r}")
        self._day, self._seconds = _split_mjd(mjd)
        self._kahan_c = jnp.zeros_like(self._seconds)
        self._time_system = time_system

    @classmethod
    def _from_internal(cls, day, seconds, kahan_c, time_system):
        """Create an Epoch from raw arrays without normalization (pytree unflatten)."""
        obj = object.__new__(cls)
        obj._day = day
        obj._seconds = seconds
        obj._kahan_c = kahan_c
        obj._time_system = time_system
        return obj

    @classmethod
    def _normalized(cls, day, seconds, kahan_c, time_system):
        """Create an Epoch after carrying whole days out of *seconds*."""
        day_offset = jnp.floor(seconds / SECONDS_PER_DAY)
        seconds = seconds - day_offset * SECONDS_PER_DAY
        return cls._from_internal(day + day_offset.astype(jnp.int32), seconds, kahan_c, time_system)

    @classmethod
    def from_caldate(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
        time_system: TimeSystem = TimeSystem.UTC,
    ) -> Epoch:
        """Create an Epoch from calendar date components.

        Args:
            year, month, day, hour, minute, second: Gregorian date and time
                of day on *time_system*; *second* may be fractional.
            time_system (TimeSystem): Time scale. Default: ``TimeSystem.UTC``

        Returns:
            Epoch: The epoch at that instant.
        """
        if not isinstance(time_system, TimeSystem):
            raise ValueError(f"Unknown time system: {time_system!r}")
        # The MJD of 0h is a whole number, exact in any float dtype used here
        mjd0 = caldate_to_mjd(year, month, day)
        seconds = jnp.asarray((hour * 60 + minute) * 60 + second, dtype=_seconds_dtype())
        return cls._normalized(mjd0.astype(jnp.int32), seconds, jnp.zeros_like(seconds), time_system)

    # Accessors

    def _compensated_seconds(self) -> jax.Array:
        return self._seconds - self._kahan_c

    def day_seconds(self) -> tuple[jax.Array, jax.Array]:
        """Return the MJD day number (int32) and the seconds into that day."""
        return self._day, self._compensated_seconds()

    def mjd(self) -> jax.Array:
        """Return the Modified Julian Date on this epoch's own time scale.

        The result is a single float in the configured dtype; in float32 it
        only resolves a few minutes. Use :meth:`day_seconds` or epoch
        subtraction where the time of day matters.
        """
        dtype = get_dtype()
        return self._day.astype(dtype) + self._compensated_seconds().astype(dtype) / SECONDS_PER_DAY

    @property
    def time_system(self) -> TimeSystem:
        """Time scale of this epoch."""
        return self._time_system

    def _advance(self, delta, time_system: TimeSystem | None = None) -> Epoch:
        """Shift by *delta* seconds with Kahan compensated summation."""
        delta = jnp.asarray(delta, dtype=self._seconds.dtype)
        y = delta - self._kahan_c
        t = self._seconds + y
        kahan_c = (t - self._seconds) - y
        return Epoch._normalized(self._day, t, kahan_c, time_system or self._time_system)

    # Scale conversions

    def to_utc(self, eop: EOPData | None = None) -> Epoch:
        """Return this instant on the UTC scale.

        Args:
            eop: EOP data, required only when converting from UT1.

        Returns:
            Epoch: UTC epoch.

        Raises:
            ValueError: If converting from UT1 without EOP data.
        """
        if self._time_system == TimeSystem.UTC:
            return self
        if self._time_system == TimeSystem.TT:
            # TAI-UTC belongs to the UTC day, which can differ from the TT day
            guess = self._advance(-_tt_minus_utc(self._day))
            return self._advance(-_tt_minus_utc(guess._day), TimeSystem.UTC)
        if eop is None:
            raise ValueError("Converting UT1 to UTC requires EOP data")
        # UT1-UTC changes by < 3 ms/day, so evaluating it at UT1 is sufficient
        ut1_utc = get_ut1_utc(eop, self.mjd(), EOPExtrapolation.HOLD)
        return self._advance(-ut1_utc, TimeSystem.UTC)

    def to_tt(self, eop: EOPData | None = None) -> Epoch:
        """Return this instant on the TT scale.

        Args:
            eop: EOP data, required only when converting from UT1.

        Returns:
            Epoch: TT epoch.
        """
        if self._time_system == TimeSystem.TT:
            return self
        utc = self.to_utc(eop)
        return utc._advance(_tt_minus_utc(utc._day), TimeSystem.TT)

    def to_ut1(
        self,
        eop: EOPData,
        extrapolation: EOPExtrapolation = EOPExtrapolation.HOLD,
    ) -> Epoch:
        """Return this instant on the UT1 scale.

        Args:
            eop: EOP data providing UT1-UTC.
            extrapolation: Behaviour outside the EOP data range.

        Returns:
            Epoch: UT1 epoch.

        Raises:
            TimeResolutionError: If UT1-UTC is unavailable for this epoch.
        """
        if self._time_system == TimeSystem.UT1:
            return self
        utc = self.to_utc()
        return utc._advance(ut1_minus_utc(eop, utc.mjd(), extrapolation), TimeSystem.UT1)

    # Arithmetic operators

    def __add__(self, delta: float) -> Epoch:
        """Epoch *delta* seconds later, on the same scale."""
        return self._advance(delta)

    def __sub__(self, other: Epoch | float) -> Epoch | jax.Array:
        """Subtract seconds or compute the difference between Epochs.

        Args:
            other: If Epoch, returns the time difference in seconds; both
                epochs must share a time system. If numeric, returns a new
                Epoch with seconds subtracted.

        Returns:
            Elapsed seconds for an Epoch operand, otherwise the shifted Epoch.

        Raises:
            ValueError: If the two epochs are on different time scales.
        """
        if isinstance(other, Epoch):
            self._require_same_scale(other)
            days = (self._day - other._day).astype(self._seconds.dtype)
            return days * SECONDS_PER_DAY + (self._compensated_seconds() - other._compensated_seconds())
        return self._advance(-jnp.asarray(other, dtype=self._seconds.dtype))

    def _require_same_scale(self, other: Epoch) -> None:
        if self._time_system != other._time_system:
            raise ValueError(
                f"Cannot compare epochs on different time scales: "
                f"{self._time_system.value} and {other._time_system.value}"
            )

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.abs(self - other) < get_epoch_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return ~self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) < 0.0

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) > 0.0

    # String representations

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the calendar date components on this epoch's scale.

        The time of day is rounded to the millisecond. Extracts concrete
        Python values, so it is not traceable under ``jax.jit``.

        Returns:
            tuple: (year, month, day, hour, minute, second).
        """
        extra_days, ms = divmod(round(float(self._compensated_seconds()) * 1000.0), _MS_PER_DAY)
        year, month, day, _, _, _ = mjd_to_caldate(int(self._day) + extra_days)
        hour, ms = divmod(ms, 3_600_000)
        minute, ms = divmod(ms, 60_000)
        return int(year), int(month), int(day), hour, minute, ms / 1000.0

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return (f'{year:04d}-{month:02d}-{day:02d}T'
                f'{hour:02d}:{minute:02d}:{second:06.3f} {self._time_system.value}')

    def __repr__(self):
        mjd = int(self._day) + float(self._compensated_seconds()) / SECONDS_PER_DAY
        return f'Epoch(mjd={mjd!r}, time_system=TimeSystem.{self._time_system.name})'

    def __hash__(self):
        return hash((int(self._day), round(float(self._compensated_seconds()), 3), self._time_system))


# Register Epoch as a JAX pytree so it can be used with jit, vmap, scan, etc.
jax.tree_util.register_pytree_node(
    Epoch,
    lambda e: ((e._day, e._seconds, e._kahan_c), e._time_system),
    lambda time_system, children: Epoch._from_internal(*children, time_system),
)
