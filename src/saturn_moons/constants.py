"""Fixed constants: body IDs, reference epochs, Saturn ring-plane orientation.

Series constants follow the Saturnian satellite theories as collected in
Meeus, Astronomical Algorithms (2nd ed.), chapter 46.
"""

import math

# Body IDs (NAIF)
EARTH_ID = 399
SATURN_ID = 699
SATURN_PLANET_NUM = 6

# Time
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25
DAYS_PER_CENTURY = 36525.0
J2000_JD = 2451545.0  # 2000 January 1.5 TDB
B1950_JD = 2433282.4235  # Besselian 1950.0, equinox of the ECLIPB1950 frame

# One-way light time Saturn -> Earth subtracted from the time argument (days)
SATURN_LIGHT_TIME_DAYS = 0.04942

# Equinox the satellite theories are referred to: 1950 January 1.5 (Gregorian)
REFERENCE_EPOCH_DATE = (1950, 1, 1.5)

# Saturn's ring plane relative to the ecliptic and equinox of 1950.0
RING_PLANE_INCLINATION = math.radians(28.0817)
RING_PLANE_NODE = math.radians(168.8112)

# Saturn equatorial radii per AU, used by the perspective correction
RADII_PER_AU = 2475.0

AU_KM = 149597870.7

# Years over which the perturbation series are trusted
VALID_YEAR_RANGE = (1600.0, 2400.0)

# Default time step when none is given (days)
DEFAULT_INTERVAL = 1.0
DEFAULT_MIN_INTERVAL_SECONDS = 1.0
