"""
topojax computes the geocentric state of ground-based observers for astrometric reduction, implemented in JAX.
"""

from .constants import (
    DPI,
    DEG2RAD,
    RAD2DEG,
    RADSEC,
    JD_MJD_OFFSET,
    T2000,
    SIDEREAL_RATIO,
    AU_KM,
    EARTH_MAJOR_AXIS,
    EARTH_MINOR_AXIS,
    ERAU,
)

from .rotations import (
    Rx,
    Ry,
    Rz,
    rotmt,
)

from .config import set_dtype, get_dtype
from .errors import DomainWarning, TimeResolutionError
from .time import TimeSystem
from .epoch import Epoch

from .eop import (
    EOPData,
    EOPExtrapolation,
    load_cached_eop,
    static_eop,
    zero_eop,
)

from .nutation import obleq, nutn80

from .frames import (
    EpochKind,
    ReferenceSystem,
    frame_rotation,
)

from .coordinates import (
    body_fixed_coord,
    geodetic_to_parallax,
    lat_alt_to_parallax,
)

from .sidereal import (
    gmst,
    equation_of_equinoxes,
    gast,
)

from .observer import (
    GeodeticLocation,
    ObserverState,
    earth_angular_velocity,
    rotation_earth_fixed_to_ecliptic,
    pvobs,
    pvobs_location,
)
