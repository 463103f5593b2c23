"""
===============================================================================
ORBITCALC - Derived Orbit Quantities
===============================================================================
Scalar quantities derived from (a, e): period, apsis altitudes and speeds,
element validation and the orbit stability class.

Validation is advisory.  OrbitMetrics.validate never raises; it collects
every violated constraint so the caller can decide what to do (typically:
refuse to propagate and show the messages verbatim).
===============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

import numpy as np

from orbitcalc.core.constants import (
    TWO_PI,
    EARTH,
    STABLE_PERIGEE_ALTITUDE,
    MARGINAL_PERIGEE_ALTITUDE,
    CentralBody,
)
from orbitcalc.dynamics.orbital_mechanics import OrbitalElements


class ApsisAltitudes(NamedTuple):
    """Apogee and perigee altitudes above the mean surface (km)."""
    apogee: float
    perigee: float


class ApsisVelocities(NamedTuple):
    """Orbital speed at apogee and perigee (km/s)."""
    v_apogee: float
    v_perigee: float


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a set of orbital elements."""
    valid: bool
    errors: Tuple[str, ...] = ()


class OrbitStability(Enum):
    """Lifetime class of an orbit from its perigee altitude."""
    STABLE = 'stable'
    MARGINAL = 'marginal'
    DECAY = 'decay'

    @property
    def lifetime(self) -> str:
        return _LIFETIMES[self]

    def describe(self, perigee_altitude: float) -> str:
        """One-line summary suitable for display."""
        label = f"{self.value.capitalize()} orbit (perigee: {perigee_altitude:.1f} km"
        if self.lifetime:
            return f"{label}, {self.lifetime})"
        return f"{label})"


_LIFETIMES = {
    OrbitStability.STABLE: '',
    OrbitStability.MARGINAL: '~months lifespan',
    OrbitStability.DECAY: '~days to reentry',
}


def orbit_stability(perigee_altitude: float) -> OrbitStability:
    """
    Classify an orbit by perigee altitude (km).

        > 200 km : stable
        > 150 km : marginal
        otherwise: decay
    """
    if perigee_altitude > STABLE_PERIGEE_ALTITUDE:
        return OrbitStability.STABLE
    if perigee_altitude > MARGINAL_PERIGEE_ALTITUDE:
        return OrbitStability.MARGINAL
    return OrbitStability.DECAY


class OrbitMetrics:
    """
    Closed-orbit quantities about a central body.

    Typical usage:
        metrics = OrbitMetrics()
        T = metrics.orbital_period(6778.0)
        apo, peri = metrics.apogee_perigee(6778.0, 0.0001)
    """

    def __init__(self, body: CentralBody = EARTH) -> None:
        self.body = body
        self.mu = body.mu

    def orbital_period(self, a: float) -> float:
        """
        Kepler's third law:

            T = 2*pi * sqrt(a^3 / mu)

        Returns NaN for a < 0 rather than raising.
        """
        with np.errstate(invalid='ignore'):
            return float(TWO_PI * np.sqrt(np.float64(a) ** 3 / self.mu))

    def apogee_perigee(self, a: float, e: float) -> ApsisAltitudes:
        """
        Apsis altitudes above the body's mean radius R:

            apogee  = a(1 + e) - R
            perigee = a(1 - e) - R
        """
        R = self.body.radius
        return ApsisAltitudes(
            apogee=a * (1.0 + e) - R,
            perigee=a * (1.0 - e) - R,
        )

    def velocities(self, a: float, e: float) -> ApsisVelocities:
        """
        Vis-viva speed at the apsides:

            v = sqrt(mu * (2/r - 1/a)),  r_a = a(1+e), r_p = a(1-e)
        """
        a = np.float64(a)
        r_apogee = a * (1.0 + e)
        r_perigee = a * (1.0 - e)
        with np.errstate(divide='ignore', invalid='ignore'):
            v_apogee = np.sqrt(self.mu * (2.0 / r_apogee - 1.0 / a))
            v_perigee = np.sqrt(self.mu * (2.0 / r_perigee - 1.0 / a))
        return ApsisVelocities(float(v_apogee), float(v_perigee))

    def validate(self, elements: OrbitalElements) -> ValidationResult:
        """
        Check that *elements* describe a closed orbit clear of the surface.

        All applicable messages are collected, in this order:
            - a <= R
            - e outside [0, 1)
            - perigee radius a(1-e) below R
            - inclination outside [0, 180]
        """
        R = self.body.radius
        name = self.body.name
        errors = []

        if elements.a <= R:
            errors.append(
                f"Semi-major axis must be greater than {name}'s radius ({R:.0f} km)"
            )

        if elements.e < 0 or elements.e >= 1:
            errors.append(
                "Eccentricity must be between 0 (inclusive) and 1 (exclusive) "
                "for closed orbits"
            )

        perigee = elements.a * (1.0 - elements.e)
        if perigee < R:
            errors.append(
                f"Perigee altitude ({perigee - R:.1f} km) is below {name}'s surface"
            )

        if elements.i < 0 or elements.i > 180:
            errors.append("Inclination must be between 0° and 180°")

        return ValidationResult(valid=not errors, errors=tuple(errors))
