"""
===============================================================================
ORBITCALC - Time System and Reference Frame Transformations
===============================================================================
Supports: Unix-epoch instants, Greenwich Mean Sidereal Time, ECI -> ECEF
rotation and the sub-satellite point (latitude, longitude, altitude).

Instants are plain floats (seconds since 1970-01-01T00:00:00 UTC). Nothing
in this module reads the wall clock; callers pass the instant explicitly.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.
    [2] Meeus, "Astronomical Algorithms", 2nd ed., Ch. 12.
===============================================================================
"""

from datetime import datetime, timezone
from typing import Tuple

import numpy as np

from orbitcalc.core.constants import (
    DEG2RAD,
    RAD2DEG,
    SECONDS_PER_DAY,
    J2000_EPOCH_UNIX,
    GMST_AT_J2000_DEG,
    GMST_RATE_DEG_PER_DAY,
    EARTH,
    CentralBody,
)


# =============================================================================
# TIME CONVERSIONS
# =============================================================================

def to_epoch_seconds(moment: datetime) -> float:
    """
    Convert a datetime to seconds since the Unix epoch.

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def from_epoch_seconds(instant: float) -> datetime:
    """Timezone-aware UTC datetime for a Unix-epoch instant."""
    return datetime.fromtimestamp(instant, tz=timezone.utc)


def days_since_j2000(instant: float) -> float:
    return (instant - J2000_EPOCH_UNIX) / SECONDS_PER_DAY


def gmst(instant: float) -> float:
    """
    Greenwich Mean Sidereal Time (deg) at a Unix-epoch instant.

    Linear J2000 model:

        GMST = 280.46061837 + 360.98564736629 * D      (mod 360)

    where D is the number of days (fractional) since 2000-01-01T12:00:00
    UTC. The result lies in [0, 360).
    """
    d = days_since_j2000(instant)
    return (GMST_AT_J2000_DEG + GMST_RATE_DEG_PER_DAY * d) % 360.0


# =============================================================================
# ROTATIONS
# =============================================================================

def Rz(angle: float) -> np.ndarray:
    """
    Elementary (passive) rotation matrix about the Z-axis.

    Parameters
    ----------
    angle : float
        Rotation angle (rad).
    """
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [  c,    s,  0.0],
        [ -s,    c,  0.0],
        [0.0,  0.0,  1.0],
    ], dtype=np.float64)


def eci_to_ecef(r_eci: np.ndarray, gmst_deg: float) -> np.ndarray:
    """
    Rotate an inertial position into the Earth-fixed frame.

        r_ecef = Rz(theta_GMST) * r_eci
    """
    return Rz(gmst_deg * DEG2RAD) @ np.asarray(r_eci, dtype=np.float64)


def eci_to_subpoint(
    r_eci: np.ndarray,
    gmst_deg: float,
    body: CentralBody = EARTH,
) -> Tuple[float, float, float]:
    """
    Spherical sub-satellite point of an inertial position.

    Latitude is geocentric, asin(z / r); longitude is the Earth-fixed
    azimuth atan2(y, x) after removing the sidereal angle, which lands in
    [-180, 180]; altitude is measured above the mean radius.

    Returns
    -------
    (lat_deg, lon_deg, altitude_km)
    """
    r_ecef = eci_to_ecef(r_eci, gmst_deg)
    r = np.linalg.norm(r_ecef)
    lat = np.arcsin(r_ecef[2] / r) * RAD2DEG
    lon = np.arctan2(r_ecef[1], r_ecef[0]) * RAD2DEG
    return float(lat), float(lon), float(r - body.radius)
