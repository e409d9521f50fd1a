"""Exception and warning types raised by topojax.

- :class:`TimeResolutionError`: UT1 could not be resolved from UTC because no
  usable Earth Orientation Parameter data is available for the epoch.
- :class:`DomainWarning`: an input lies far outside the range for which the
  models were built. The computation still runs.
"""

from __future__ import annotations


class TimeResolutionError(RuntimeError):
    """UTC to UT1 conversion failed.

    Raised when the EOP dataset cannot be downloaded or parsed, or when the
    requested epoch has no UT1-UTC correction. Callers may retry, fall back to
    another dataset, or drop the observation.
    """


class DomainWarning(UserWarning):
    """An input is outside the physically meaningful range of a model."""
