"""Coordinate representations and transformations.

Geodetic site coordinates to parallax constants and Earth body-fixed
Cartesian positions.
"""

from .geodetic import (
    AXIS_RATIO,
    body_fixed_coord,
    geodetic_to_parallax,
    lat_alt_to_parallax,
)

__all__ = [
    "AXIS_RATIO",
    "body_fixed_coord",
    "geodetic_to_parallax",
    "lat_alt_to_parallax",
]
