"""
===============================================================================
ORBITCALC - Launch Window Search
===============================================================================
Direct-ascent launch opportunities from a ground site into an orbit plane
of given inclination and RAAN.

A site can only reach planes whose inclination is at least its latitude.
For reachable planes the inertial launch azimuth follows from spherical
trigonometry:

    sin(beta) = cos(i) / cos(lat)

with beta for the ascending pass and 180 - beta for the descending pass.
A launch instant is accepted when the local sidereal time of the site is
within LAUNCH_WINDOW_TOLERANCE_DEG of the target RAAN.

An unreachable plane is reported as a LaunchWindowResult carrying an error
message and no windows; it is a result the caller checks, not an exception.
===============================================================================
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from orbitcalc.core.constants import (
    DEG2RAD,
    RAD2DEG,
    LAUNCH_WINDOW_SPACING,
    LAUNCH_WINDOW_TOLERANCE_DEG,
)
from orbitcalc.core.frames import gmst, from_epoch_seconds

logger = logging.getLogger(__name__)

UNREACHABLE_ORBIT_ERROR = (
    "Launch site latitude exceeds target inclination. Orbit not achievable."
)


class PassType(Enum):
    ASCENDING = 'Ascending'
    DESCENDING = 'Descending'


@dataclass(frozen=True)
class LaunchWindow:
    """
    One launch opportunity.

    Attributes
    ----------
    time : float
        Launch instant, seconds since the Unix epoch (UTC).
    azimuth_deg : float
        Launch azimuth, degrees clockwise from north.
    pass_type : PassType
        Whether the site crosses the plane on an ascending or
        descending pass.
    """
    time: float
    azimuth_deg: float
    pass_type: PassType

    @property
    def utc_datetime(self) -> datetime:
        return from_epoch_seconds(self.time)

    @property
    def iso_time(self) -> str:
        return self.utc_datetime.isoformat()


@dataclass(frozen=True)
class LaunchWindowResult:
    """Windows found by a search, or the reason none can exist."""
    windows: Tuple[LaunchWindow, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def launch_azimuth(latitude: float, inclination: float) -> Tuple[float, float]:
    """
    Ascending and descending launch azimuths (deg) for a site latitude and
    target inclination (deg).

    Only meaningful when |latitude| <= inclination; otherwise the ratio
    leaves [-1, 1] and NaN is returned.
    """
    lat = latitude * DEG2RAD
    inc = inclination * DEG2RAD
    with np.errstate(invalid='ignore'):
        beta = np.arcsin(np.cos(inc) / np.cos(lat))
    ascending = float(beta * RAD2DEG)
    return ascending, 180.0 - ascending


def launch_windows(
    latitude: float,
    longitude: float,
    target_inclination: float,
    target_raan: float,
    start_time: float,
    count: int = 10,
) -> LaunchWindowResult:
    """
    Scan for launch opportunities into a target plane.

    Candidates are spaced LAUNCH_WINDOW_SPACING seconds apart starting at
    *start_time*; at most 2 * count candidates are examined.  Even
    candidate indices are labelled ascending passes and odd indices
    descending passes.  The scan stops as soon as *count* windows are
    found.

    Parameters
    ----------
    latitude, longitude : float
        Launch site (deg; longitude east-positive).
    target_inclination, target_raan : float
        Target orbit plane (deg).
    start_time : float
        First candidate instant (Unix-epoch seconds).
    count : int
        Number of windows wanted.

    Returns
    -------
    LaunchWindowResult
        With error set, and no windows, if |latitude| > target_inclination.
    """
    if abs(latitude) > target_inclination:
        logger.debug(
            "Launch site latitude %.3f deg cannot reach inclination %.3f deg",
            latitude, target_inclination,
        )
        return LaunchWindowResult(error=UNREACHABLE_ORBIT_ERROR)

    azimuth_ascending, azimuth_descending = launch_azimuth(latitude, target_inclination)

    windows = []
    for k in range(count * 2):
        launch_time = start_time + k * LAUNCH_WINDOW_SPACING
        lst = gmst(launch_time) + longitude
        raan_diff = (target_raan - lst) % 360.0

        if raan_diff < LAUNCH_WINDOW_TOLERANCE_DEG or raan_diff > 360.0 - LAUNCH_WINDOW_TOLERANCE_DEG:
            ascending = k % 2 == 0
            windows.append(LaunchWindow(
                time=launch_time,
                azimuth_deg=azimuth_ascending if ascending else azimuth_descending,
                pass_type=PassType.ASCENDING if ascending else PassType.DESCENDING,
            ))
            logger.debug(
                "Launch window at candidate %d (t=%.0f s), RAAN offset %.3f deg",
                k, launch_time, raan_diff,
            )
            if len(windows) >= count:
                break

    return LaunchWindowResult(windows=tuple(windows))
