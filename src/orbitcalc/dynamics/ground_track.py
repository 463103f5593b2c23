"""
===============================================================================
ORBITCALC - Ground Track
===============================================================================
Sub-satellite latitude, longitude and altitude over one orbital period.

The sidereal angle is evaluated once, at the supplied instant, and applied
to every sample of the track.  Earth rotation during the orbit is therefore
not reflected in the longitudes: the track is the inertial orbit projected
onto a frozen Earth.  This is an intentional approximation of the model and
is kept as-is.
===============================================================================
"""

import logging
from typing import NamedTuple, Optional, Tuple

from orbitcalc.core.frames import gmst, eci_to_subpoint
from orbitcalc.dynamics.orbit_metrics import OrbitMetrics
from orbitcalc.dynamics.orbital_mechanics import OrbitalElements, OrbitalMechanics

logger = logging.getLogger(__name__)


class GroundTrackPoint(NamedTuple):
    time: float        # s since the start of the track
    lat: float         # deg, geocentric
    lon: float         # deg, [-180, 180]
    altitude: float    # km above the mean radius


def ground_track(
    elements: OrbitalElements,
    num_points: int = 100,
    instant: float = 0.0,
    mechanics: Optional[OrbitalMechanics] = None,
) -> Tuple[GroundTrackPoint, ...]:
    """
    Sample the ground track of one full period.

    Parameters
    ----------
    elements : OrbitalElements
        Orbit to track.
    num_points : int
        Number of integration steps over the period; num_points + 1
        samples are returned (both ends of the period included).
    instant : float
        Unix-epoch instant (s) at which GMST is evaluated.
    mechanics : OrbitalMechanics, optional
        Engine to propagate with (default: Earth).

    Raises
    ------
    ValueError
        If num_points < 1.
    """
    if num_points < 1:
        raise ValueError(f"num_points must be at least 1 (got {num_points}).")

    mechanics = mechanics or OrbitalMechanics()
    period = OrbitMetrics(mechanics.body).orbital_period(elements.a)
    trajectory = mechanics.propagate_steps(elements, period, num_points)

    theta = gmst(instant)
    logger.debug(
        "Ground track: %d samples over %.1f s, GMST %.4f deg",
        len(trajectory), period, theta,
    )

    track = []
    for point in trajectory:
        lat, lon, alt = eci_to_subpoint(point.position.to_array(), theta, mechanics.body)
        track.append(GroundTrackPoint(point.time, lat, lon, alt))
    return tuple(track)
