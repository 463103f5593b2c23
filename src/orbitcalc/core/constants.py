"""
===============================================================================
ORBITCALC - Physical and Astronomical Constants
===============================================================================
Central repository for the constants shared by every computation in the
engine. Units at this boundary are kilometres, seconds and degrees; angles
are converted to radians inside the algorithms.

The governing body is described once by a CentralBody record and passed
read-only into the engines, so no module holds mutable global state.
===============================================================================
"""

from dataclasses import dataclass

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# EARTH PARAMETERS
# =============================================================================
EARTH_RADIUS = 6371.0                  # Mean radius (km)
EARTH_MU = 398600.4418                 # Gravitational parameter (km^3/s^2)
EARTH_J2 = 0.00108263                  # J2 oblateness coefficient (reserved)
EARTH_ROTATION_RATE = 7.2921159e-5     # rad/s (sidereal)

# =============================================================================
# ROOT SOLVER DEFAULTS
# =============================================================================
EPSILON = 1e-12                        # Newton-Raphson tolerance / degeneracy threshold
MAX_ITERATIONS = 50                    # Newton-Raphson iteration cap

# =============================================================================
# TIME SYSTEM
# =============================================================================
SECONDS_PER_DAY = 86400.0
J2000_EPOCH_UNIX = 946728000.0         # 2000-01-01T12:00:00 UTC in Unix seconds
GMST_AT_J2000_DEG = 280.46061837       # GMST at the J2000 epoch (deg)
GMST_RATE_DEG_PER_DAY = 360.98564736629

# =============================================================================
# MISSION PLANNING POLICY
# =============================================================================
STABLE_PERIGEE_ALTITUDE = 200.0        # km, above this an orbit is stable
MARGINAL_PERIGEE_ALTITUDE = 150.0      # km, above this an orbit is marginal
LAUNCH_WINDOW_SPACING = 5400.0         # s, candidate spacing (one LEO period estimate)
LAUNCH_WINDOW_TOLERANCE_DEG = 1.0      # deg, allowed RAAN offset at launch


@dataclass(frozen=True)
class CentralBody:
    """
    Constants of the body every orbit is computed around.

    Attributes
    ----------
    name : str
        Display name, used in validation messages.
    radius : float
        Mean surface radius (km).
    mu : float
        Gravitational parameter (km^3/s^2).
    j2 : float
        Oblateness coefficient. Carried for completeness; no computation
        in the engine models perturbations.
    rotation_rate : float
        Sidereal rotation rate (rad/s).
    """
    name: str
    radius: float
    mu: float
    j2: float = 0.0
    rotation_rate: float = 0.0


EARTH = CentralBody(
    name='Earth',
    radius=EARTH_RADIUS,
    mu=EARTH_MU,
    j2=EARTH_J2,
    rotation_rate=EARTH_ROTATION_RATE,
)
