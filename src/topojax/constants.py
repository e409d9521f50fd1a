"""
The `constants` module defines the mathematical, time and physical constants used
to place an observer on the Earth and rotate it into an inertial frame.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Full circle in radians. Equal to 2pi. Units: *rad*
"""
DPI = 2.0 * PI

"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
RADSEC = 2.0 * PI / 360.0 / 3600.0

"""
Arcseconds in a full circle. Units: *as*
"""
TURNAS = 1296000.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
T2000 = 51544.5

"""
Days per Julian century. Units: *days*
"""
DAYS_PER_CENTURY = 36525.0

"""
Seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Ratio between the mean sidereal day and the mean solar day. [dimensionless]

References:

1. P. K. Seidelmann, *Explanatory Supplement to the Astronomical Almanac*, 1992
"""
SIDEREAL_RATIO = 1.00273790934

# Physical Constants
"""
Astronomical Unit. Units: *km*

References:

1. IAU 2012 Resolution B2
"""
AU_KM = 149597870.7

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *m*

References:

1. NIMA Technical Report TR8350.2
"""
EARTH_MAJOR_AXIS = 6378137.0

"""
Earth's semi-minor axis. Units: *m*
"""
EARTH_MINOR_AXIS = 6356752.3

"""
Earth's equatorial radius expressed in astronomical units. Units: *AU*
"""
ERAU = (EARTH_MAJOR_AXIS / 1000.0) / AU_KM

"""
Mean obliquity of the ecliptic at J2000, IAU 1976 value. Units: *as*

References:

1. J. H. Lieske et al., *Expressions for the precession quantities based upon
   the IAU (1976) system of astronomical constants*, A&A 58, 1977.
"""
OBLIQUITY_J2000 = 84381.448
