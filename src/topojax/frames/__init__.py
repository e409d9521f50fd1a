"""Frame transformations.

This sub-module provides rotations between the classical equinox-based
reference systems used in astrometric reduction:

- **Precession** (IAU 1976) between the mean equator of J2000 and of date.
- **Nutation** (IAU 1980) between the mean and true equator of date.
- **Obliquity** between the mean equator and the mean ecliptic.
- **Named-system conversion** (:func:`frame_rotation`) composing the above.
"""

from .reference_systems import (
    EpochKind,
    ReferenceSystem,
    frame_rotation,
    rotation_equatorial_to_ecliptic,
    rotation_nutation,
    rotation_precession,
)

__all__ = [
    "EpochKind",
    "ReferenceSystem",
    "frame_rotation",
    "rotation_equatorial_to_ecliptic",
    "rotation_nutation",
    "rotation_precession",
]
