"""
===============================================================================
ORBITCALC - Maneuver Planner
===============================================================================
Delta-V computation for transfers between circular orbits.

Sign conventions and units:
    - Radii measured from the body centre (not altitude), in km
    - Velocities in km/s
    - Times in seconds
    - Delta-V values are magnitudes (always >= 0)
===============================================================================
"""

import logging
from dataclasses import dataclass

import numpy as np

from orbitcalc.core.constants import PI, EARTH, CentralBody

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferOrbit:
    """Shape of a transfer ellipse."""
    a: float    # semi-major axis (km)
    e: float    # eccentricity


@dataclass(frozen=True)
class TransferPlan:
    """
    Result of a two-impulse transfer computation.

    Attributes
    ----------
    delta_v1 : float
        Departure burn magnitude (km/s).
    delta_v2 : float
        Arrival burn magnitude (km/s).
    total_delta_v : float
        delta_v1 + delta_v2 (km/s).
    transfer_time : float
        Coast time between the burns (s).
    transfer_orbit : TransferOrbit
        The transfer ellipse.
    """
    delta_v1: float
    delta_v2: float
    total_delta_v: float
    transfer_time: float
    transfer_orbit: TransferOrbit


class ManeuverPlanner:
    """
    Computes delta-V requirements for orbital transfers.

    The planner is stateless apart from the body constants: all inputs are
    passed as arguments and results are returned directly.

    Typical usage:
        planner = ManeuverPlanner()
        plan = planner.hohmann_transfer(6778.0, 42164.0)
        plan.total_delta_v
    """

    def __init__(self, body: CentralBody = EARTH) -> None:
        self.body = body
        self.mu = body.mu

    # -------------------------------------------------------------------------
    # Hohmann Transfer
    # -------------------------------------------------------------------------

    def hohmann_transfer(self, r1: float, r2: float) -> TransferPlan:
        """
        Two-impulse Hohmann transfer between coplanar circular orbits.

        Equations:
            Transfer orbit semi-major axis:
                a_t = (r1 + r2) / 2

            Circular speeds:
                v_c1 = sqrt(mu / r1),  v_c2 = sqrt(mu / r2)

            Transfer orbit speeds at r1 and r2 (vis-viva):
                v_t1 = sqrt(mu * (2/r1 - 1/a_t))
                v_t2 = sqrt(mu * (2/r2 - 1/a_t))

            Burns:
                dv1 = |v_t1 - v_c1|
                dv2 = |v_c2 - v_t2|

            Time of flight (half the transfer ellipse period):
                tof = pi * sqrt(a_t^3 / mu)

            Transfer eccentricity:
                e_t = |r2 - r1| / (r1 + r2)

        Args:
            r1: Radius of the initial circular orbit (km).
            r2: Radius of the final circular orbit (km).

        Returns:
            TransferPlan
        """
        mu = self.mu
        r1 = np.float64(r1)
        r2 = np.float64(r2)

        with np.errstate(divide='ignore', invalid='ignore'):
            a_transfer = (r1 + r2) / 2.0

            v_circ_1 = np.sqrt(mu / r1)
            v_circ_2 = np.sqrt(mu / r2)

            v_transfer_periapsis = np.sqrt(mu * (2.0 / r1 - 1.0 / a_transfer))
            v_transfer_apoapsis = np.sqrt(mu * (2.0 / r2 - 1.0 / a_transfer))

            dv1 = float(abs(v_transfer_periapsis - v_circ_1))
            dv2 = float(abs(v_circ_2 - v_transfer_apoapsis))
            tof = float(PI * np.sqrt(a_transfer ** 3 / mu))
            e_transfer = float(abs(r2 - r1) / (r1 + r2))

        plan = TransferPlan(
            delta_v1=dv1,
            delta_v2=dv2,
            total_delta_v=dv1 + dv2,
            transfer_time=tof,
            transfer_orbit=TransferOrbit(a=float(a_transfer), e=e_transfer),
        )

        logger.debug(
            "Hohmann transfer: r1=%.1f km, r2=%.1f km, dv1=%.4f km/s, "
            "dv2=%.4f km/s, tof=%.1f s",
            r1, r2, dv1, dv2, tof,
        )
        return plan
