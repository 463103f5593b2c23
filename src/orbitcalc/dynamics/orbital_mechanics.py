"""
===============================================================================
ORBITCALC - Orbital Mechanics Engine
===============================================================================
Two-body propagation and Keplerian <-> Cartesian conversions.

This module is the computational heart of the engine.  It provides:

    1. **State representation** -- OrbitalElements, StateVector and
       TrajectoryPoint are immutable snapshots that can be passed between
       modules without defensive copying.

    2. **Element conversion** -- Keplerian elements to an inertial
       position/velocity pair and back.

    3. **Numerical propagation** -- Fixed-step classical RK4 under
       point-mass gravity, producing an eagerly materialised trajectory.

    4. **Analytic propagation** -- Advancing the true anomaly through
       Kepler's equation, used as the reference for the integrator.

Distances are in km, velocities in km/s and angles in degrees at the
public boundary; the algorithms work in radians.

Degenerate inputs (a <= 0, e = 1 in the closed-orbit formulas, a zero
radius) are not rejected here: they produce NaN/inf under numpy
floating-point rules.  Callers validate elements first with
orbit_metrics.OrbitMetrics.validate.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.
    [2] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.
===============================================================================
"""

import logging
import math
from dataclasses import dataclass, asdict, replace
from typing import Tuple

import numpy as np

from orbitcalc.core.constants import (
    DEG2RAD,
    RAD2DEG,
    EPSILON,
    EARTH,
    CentralBody,
)
from orbitcalc.core.vector import Vector3, Z_HAT
from orbitcalc.dynamics.kepler import true_to_mean_anomaly, mean_to_true_anomaly

logger = logging.getLogger(__name__)


# =============================================================================
# STATE DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical Keplerian elements.

    Attributes
    ----------
    a : float
        Semi-major axis (km).
    e : float
        Eccentricity (closed orbits need 0 <= e < 1).
    i : float
        Inclination (deg) in [0, 180].
    raan : float
        Right ascension of the ascending node (deg) in [0, 360).
    arg_pe : float
        Argument of periapsis (deg) in [0, 360).
    true_anomaly : float
        True anomaly (deg) in [0, 360).
    """
    a: float
    e: float
    i: float
    raan: float = 0.0
    arg_pe: float = 0.0
    true_anomaly: float = 0.0

    def replace(self, **changes) -> 'OrbitalElements':
        """Copy with some elements changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'OrbitalElements':
        return cls(**{k: float(v) for k, v in data.items()})


@dataclass(frozen=True)
class StateVector:
    """Inertial position (km) and velocity (km/s) at one instant."""
    position: Vector3
    velocity: Vector3

    @property
    def r_mag(self) -> float:
        """Magnitude of the position vector (km)."""
        return self.position.magnitude()

    @property
    def v_mag(self) -> float:
        """Magnitude of the velocity vector (km/s)."""
        return self.velocity.magnitude()


@dataclass(frozen=True)
class TrajectoryPoint:
    """
    One sample of a propagated trajectory.

    Attributes
    ----------
    time : float
        Seconds since the start of the propagation.
    position : Vector3
        Inertial position (km).
    velocity : Vector3
        Inertial velocity (km/s).
    """
    time: float
    position: Vector3
    velocity: Vector3

    @property
    def state(self) -> StateVector:
        return StateVector(self.position, self.velocity)


Trajectory = Tuple[TrajectoryPoint, ...]


# =============================================================================
# ORBITAL MECHANICS ENGINE
# =============================================================================

class OrbitalMechanics:
    """
    Element conversion and propagation about a single central body.

    The engine only stores the body constants it was built with; every
    method is a pure function of its arguments.
    """

    def __init__(self, body: CentralBody = EARTH) -> None:
        """
        Parameters
        ----------
        body : CentralBody
            Governing body (radius, gravitational parameter).
        """
        self.body = body
        self.mu = body.mu

    # =====================================================================
    # ACCELERATION MODEL
    # =====================================================================

    def two_body_acceleration(self, pos: np.ndarray) -> np.ndarray:
        """
        Point-mass gravitational acceleration:

            a = -mu / |r|^3 * r

        Parameters
        ----------
        pos : np.ndarray
            3-element position vector (km).

        Returns
        -------
        np.ndarray
            3-element acceleration vector (km/s^2).
        """
        r_mag = np.linalg.norm(pos)
        return -self.mu / (r_mag * r_mag * r_mag) * pos

    # =====================================================================
    # COORDINATE CONVERSIONS
    # =====================================================================

    def keplerian_to_cartesian(self, elements: OrbitalElements) -> StateVector:
        """
        Convert Keplerian elements to an inertial state.

        Perifocal (PQW) frame:

            p     = a * (1 - e^2)
            r     = p / (1 + e*cos(nu))
            r_pqw = r * [cos(nu), sin(nu), 0]
            v_pqw = sqrt(mu/p) * [-sin(nu), e + cos(nu), 0]

        The PQW vectors are rotated into the inertial frame with the 3-1-3
        sequence R3(-RAAN) R1(-i) R3(-omega).

        Parameters
        ----------
        elements : OrbitalElements
            Elements in km and degrees.

        Returns
        -------
        StateVector
        """
        a = np.float64(elements.a)
        e = np.float64(elements.e)
        inc = elements.i * DEG2RAD
        raan = elements.raan * DEG2RAD
        omega = elements.arg_pe * DEG2RAD
        nu = elements.true_anomaly * DEG2RAD

        with np.errstate(divide='ignore', invalid='ignore'):
            p = a * (1.0 - e * e)
            r_mag = p / (1.0 + e * np.cos(nu))

            cos_nu = np.cos(nu)
            sin_nu = np.sin(nu)

            r_pqw = r_mag * np.array([cos_nu, sin_nu, 0.0], dtype=np.float64)
            v_pqw = np.sqrt(self.mu / p) * np.array([-sin_nu, e + cos_nu, 0.0],
                                                   dtype=np.float64)

            cos_O = np.cos(raan)
            sin_O = np.sin(raan)
            cos_i = np.cos(inc)
            sin_i = np.sin(inc)
            cos_w = np.cos(omega)
            sin_w = np.sin(omega)

            R = np.array([
                [cos_O * cos_w - sin_O * sin_w * cos_i,
                 -cos_O * sin_w - sin_O * cos_w * cos_i,
                 sin_O * sin_i],
                [sin_O * cos_w + cos_O * sin_w * cos_i,
                 -sin_O * sin_w + cos_O * cos_w * cos_i,
                 -cos_O * sin_i],
                [sin_w * sin_i,
                 cos_w * sin_i,
                 cos_i],
            ], dtype=np.float64)

            r_eci = R @ r_pqw
            v_eci = R @ v_pqw

        return StateVector(Vector3.from_array(r_eci), Vector3.from_array(v_eci))

    def cartesian_to_keplerian(
        self, position: Vector3, velocity: Vector3
    ) -> OrbitalElements:
        """
        Convert an inertial state to classical Keplerian elements.

            h     = r x v                      (angular momentum)
            n     = z_hat x h                  (ascending node vector)
            e_vec = (v x h)/mu - r/|r|         (eccentricity vector)
            a     = -mu / (2*E),  E = v^2/2 - mu/r
            i     = arccos(h_z / |h|)

        Edge cases:
            - Equatorial orbit (|n| <= EPSILON): RAAN and omega set to 0.
            - Circular orbit (e <= EPSILON): omega and nu set to 0.

        The zero defaults are an approximation: for those orbits the
        angles are undefined, and the position along the orbit is not
        recovered from the returned elements.

        Parameters
        ----------
        position : Vector3
            Inertial position (km).
        velocity : Vector3
            Inertial velocity (km/s).

        Returns
        -------
        OrbitalElements
            Angles in degrees, in [0, 360) (inclination in [0, 180]).
        """
        mu = self.mu

        with np.errstate(divide='ignore', invalid='ignore'):
            r = np.float64(position.magnitude())
            v = np.float64(velocity.magnitude())

            h = position.cross(velocity)
            h_mag = np.float64(h.magnitude())

            n = Z_HAT.cross(h)
            n_mag = np.float64(n.magnitude())

            e_vec = velocity.cross(h).scale(1.0 / mu).subtract(position.normalize())
            e = np.float64(e_vec.magnitude())

            energy = 0.5 * v * v - mu / r
            a = -mu / (2.0 * energy)

            inc = np.arccos(np.clip(h.z / h_mag, -1.0, 1.0)) * RAD2DEG

            raan = 0.0
            if n_mag > EPSILON:
                raan = np.arccos(np.clip(n.x / n_mag, -1.0, 1.0)) * RAD2DEG
                if n.y < 0.0:
                    raan = 360.0 - raan

            arg_pe = 0.0
            if n_mag > EPSILON and e > EPSILON:
                cos_omega = n.dot(e_vec) / (n_mag * e)
                arg_pe = np.arccos(np.clip(cos_omega, -1.0, 1.0)) * RAD2DEG
                if e_vec.z < 0.0:
                    arg_pe = 360.0 - arg_pe

            nu = 0.0
            if e > EPSILON:
                cos_nu = e_vec.dot(position) / (e * r)
                nu = np.arccos(np.clip(cos_nu, -1.0, 1.0)) * RAD2DEG
                if position.dot(velocity) < 0.0:
                    nu = 360.0 - nu

        return OrbitalElements(
            a=float(a),
            e=float(e),
            i=float(inc),
            raan=float(raan % 360.0),
            arg_pe=float(arg_pe % 360.0),
            true_anomaly=float(nu % 360.0),
        )

    # =====================================================================
    # NUMERICAL PROPAGATION
    # =====================================================================

    def _rk4_arrays(
        self, r: np.ndarray, v: np.ndarray, dt: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        # Stage 1
        kr1 = v
        kv1 = self.two_body_acceleration(r)

        # Stage 2
        r2 = r + 0.5 * dt * kr1
        v2 = v + 0.5 * dt * kv1
        kr2 = v2
        kv2 = self.two_body_acceleration(r2)

        # Stage 3
        r3 = r + 0.5 * dt * kr2
        v3 = v + 0.5 * dt * kv2
        kr3 = v3
        kv3 = self.two_body_acceleration(r3)

        # Stage 4
        r4 = r + dt * kr3
        v4 = v + dt * kv3
        kr4 = v4
        kv4 = self.two_body_acceleration(r4)

        # Weighted combination
        r_new = r + (dt / 6.0) * (kr1 + 2.0 * kr2 + 2.0 * kr3 + kr4)
        v_new = v + (dt / 6.0) * (kv1 + 2.0 * kv2 + 2.0 * kv3 + kv4)
        return r_new, v_new

    def rk4_step(self, state: StateVector, dt: float) -> StateVector:
        """
        Advance a state by one classical 4th-order Runge-Kutta step.

        The equations of motion are:

            dr/dt = v
            dv/dt = a(r) = -mu * r / |r|^3

        RK4 evaluates the derivative at four points within the step:

            k1 = f(y_n)
            k2 = f(y_n + dt/2 * k1)
            k3 = f(y_n + dt/2 * k2)
            k4 = f(y_n + dt * k3)

            y_{n+1} = y_n + (dt/6) * (k1 + 2*k2 + 2*k3 + k4)

        Parameters
        ----------
        state : StateVector
            Current state.
        dt : float
            Time step (s).

        Returns
        -------
        StateVector
            State at t + dt.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            r_new, v_new = self._rk4_arrays(
                state.position.to_array(), state.velocity.to_array(), dt
            )
        return StateVector(Vector3.from_array(r_new), Vector3.from_array(v_new))

    def propagate_steps(
        self, elements: OrbitalElements, duration: float, steps: int
    ) -> Trajectory:
        """
        Integrate *elements* over *duration* seconds in exactly *steps*
        uniform RK4 steps.

        Returns steps + 1 points: the initial state at time 0 followed by
        one point per step, the last at time == duration.

        Raises
        ------
        ValueError
            If steps is negative.
        """
        if steps < 0:
            raise ValueError(f"Step count must be non-negative (got {steps}).")

        state = self.keplerian_to_cartesian(elements)
        points = [TrajectoryPoint(0.0, state.position, state.velocity)]
        if steps == 0:
            return tuple(points)

        dt = duration / steps
        logger.debug(
            "Propagating %d RK4 steps of %.3f s (duration %.1f s)",
            steps, dt, duration,
        )

        r = state.position.to_array()
        v = state.velocity.to_array()
        with np.errstate(divide='ignore', invalid='ignore'):
            for k in range(steps):
                r, v = self._rk4_arrays(r, v, dt)
                points.append(TrajectoryPoint(
                    time=(k + 1) * dt,
                    position=Vector3.from_array(r),
                    velocity=Vector3.from_array(v),
                ))

        return tuple(points)

    def propagate(
        self, elements: OrbitalElements, duration: float, step: float = 60.0
    ) -> Trajectory:
        """
        Propagate an orbit with fixed-step RK4.

        The step count is ceil(duration / step) and the actual step is
        duration / steps, so the last sample lands exactly on *duration*
        (the spacing can be slightly shorter than requested).  No
        stability or bounds checks happen inside the loop; propagating an
        invalid orbit yields numerically defined but meaningless output.

        Parameters
        ----------
        elements : OrbitalElements
            Initial orbit.
        duration : float
            Propagation time span (s).
        step : float
            Requested step size (s).  Must be positive.

        Returns
        -------
        tuple of TrajectoryPoint

        Raises
        ------
        ValueError
            If step <= 0.
        """
        if not step > 0:
            raise ValueError(f"Propagation step must be positive (got {step}).")
        steps = max(math.ceil(duration / step), 0)
        return self.propagate_steps(elements, duration, steps)

    # =====================================================================
    # ANALYTIC PROPAGATION
    # =====================================================================

    def kepler_propagate(self, elements: OrbitalElements, time: float) -> StateVector:
        """
        Two-body state *time* seconds after *elements*, from Kepler's
        equation rather than numerical integration (elliptic orbits).

            M(t) = M0 + sqrt(mu/a^3) * t
        """
        e = elements.e
        n = np.sqrt(self.mu / elements.a ** 3)
        M0 = true_to_mean_anomaly(elements.true_anomaly * DEG2RAD, e)
        nu = mean_to_true_anomaly(M0 + n * time, e)
        return self.keplerian_to_cartesian(
            elements.replace(true_anomaly=nu * RAD2DEG)
        )

    # =====================================================================
    # INVARIANTS
    # =====================================================================

    def specific_energy(self, state: StateVector) -> float:
        """
        Specific mechanical energy E = v^2/2 - mu/r (km^2/s^2).

        Constant along an unperturbed two-body trajectory; used to measure
        integrator drift.
        """
        v = state.v_mag
        return 0.5 * v * v - self.mu / state.r_mag
