"""
===============================================================================
COSMORISK - Physical and Astronomical Constants
===============================================================================
Central repository for the constants used by the risk-assessment kernel.

Unlike a full SI mission simulation, the kernel works in heliocentric
ecliptic coordinates with distances in astronomical units and time in days,
so gravitational parameters are expressed in AU^3/day^2.  Conversions to SI
(km, m/s, joules) happen only at the display / energy boundary.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG2RAD = PI / 180.0

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================
AU_KM = 149597870.7                    # Astronomical Unit in kilometres
AU_M = AU_KM * 1000.0                  # Astronomical Unit in metres
AU_TO_LD = 389.17                      # Lunar distances per AU
SECONDS_PER_DAY = 86400.0
JOULES_PER_MEGATON = 4.184e15          # TNT equivalent

# =============================================================================
# GRAVITATIONAL PARAMETERS (AU^3 / day^2)
# =============================================================================
GM_SUN = 2.959e-4
GM_JUPITER = 2.82e-8

# =============================================================================
# JUPITER (simplified circular heliocentric orbit)
# =============================================================================
JUPITER_SMA_AU = 5.2                   # Semi-major axis (AU)
JUPITER_PERIOD_DAYS = 4332.59          # Sidereal period (days)
JUPITER_GUARD_AU = 0.1                 # Perturbation disabled inside this range

# =============================================================================
# SOLAR RADIATION PRESSURE
# =============================================================================
SRP_COEFFICIENT = 1e-11                # AU^3/day^2, scaled for small bodies

# =============================================================================
# EARTH ORBIT (fixed shape used for MOID)
# =============================================================================
EARTH_SMA_AU = 1.0
EARTH_ECCENTRICITY = 0.0167
EARTH_INCLINATION = 0.0
EARTH_RAAN = 0.0
EARTH_ARG_PERIHELION = 102.9 * DEG2RAD

# =============================================================================
# KERNEL TUNING
# =============================================================================
MOID_SAMPLES = 72                      # 5 deg increments
VISUAL_SAMPLES = 128
MOID_FLOOR_AU = 1e-4
PREVIEW_STEPS = 200
PREVIEW_DT_DAYS = 1.0
DELTA_V_SCALE = 1e-5                   # m/s impulse -> AU/day (modelling constant)

