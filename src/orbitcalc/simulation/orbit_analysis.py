"""
===============================================================================
ORBITCALC - Orbit Analysis
===============================================================================
One-shot "calculate" pipeline: validate the elements, then derive the
period, apsis altitudes and speeds, stability class and a one-period
trajectory.

Validation gates the computation.  An invalid orbit yields a report that
carries only the validation result, so no meaningless numbers ever leave
this module.
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional

from orbitcalc.dynamics.orbit_metrics import (
    ApsisAltitudes,
    ApsisVelocities,
    OrbitMetrics,
    OrbitStability,
    ValidationResult,
    orbit_stability,
)
from orbitcalc.dynamics.orbital_mechanics import (
    OrbitalElements,
    OrbitalMechanics,
    Trajectory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitReport:
    """Everything computed for one set of elements."""
    elements: OrbitalElements
    validation: ValidationResult
    period: Optional[float] = None                 # s
    altitudes: Optional[ApsisAltitudes] = None     # km
    velocities: Optional[ApsisVelocities] = None   # km/s
    stability: Optional[OrbitStability] = None
    trajectory: Optional[Trajectory] = None

    @property
    def valid(self) -> bool:
        return self.validation.valid

    def summary(self) -> str:
        """Multi-line human-readable summary."""
        if not self.valid:
            return "Invalid orbit:\n" + "\n".join(
                f"  - {msg}" for msg in self.validation.errors
            )
        lines = [
            f"Orbital period     : {self.period / 60.0:.2f} min",
            f"Apogee altitude    : {self.altitudes.apogee:.1f} km",
            f"Perigee altitude   : {self.altitudes.perigee:.1f} km",
            f"Velocity at apogee : {self.velocities.v_apogee:.2f} km/s",
            f"Velocity at perigee: {self.velocities.v_perigee:.2f} km/s",
            self.stability.describe(self.altitudes.perigee),
        ]
        return "\n".join(lines)


def analyze_orbit(
    elements: OrbitalElements,
    samples_per_orbit: int = 100,
    mechanics: Optional[OrbitalMechanics] = None,
) -> OrbitReport:
    """
    Validate *elements* and, if valid, compute all derived quantities.

    The trajectory covers one period in samples_per_orbit RK4 steps of
    period / samples_per_orbit, giving samples_per_orbit + 1 points.

    Raises
    ------
    ValueError
        If samples_per_orbit < 1.
    """
    if samples_per_orbit < 1:
        raise ValueError(
            f"samples_per_orbit must be at least 1 (got {samples_per_orbit})."
        )

    mechanics = mechanics or OrbitalMechanics()
    metrics = OrbitMetrics(mechanics.body)

    validation = metrics.validate(elements)
    if not validation.valid:
        logger.info("Orbit rejected: %s", "; ".join(validation.errors))
        return OrbitReport(elements=elements, validation=validation)

    period = metrics.orbital_period(elements.a)
    altitudes = metrics.apogee_perigee(elements.a, elements.e)
    velocities = metrics.velocities(elements.a, elements.e)
    stability = orbit_stability(altitudes.perigee)
    trajectory = mechanics.propagate_steps(elements, period, samples_per_orbit)

    logger.info(
        "Orbit analysed: T=%.1f s, apogee=%.1f km, perigee=%.1f km, %s",
        period, altitudes.apogee, altitudes.perigee, stability.value,
    )
    return OrbitReport(
        elements=elements,
        validation=validation,
        period=period,
        altitudes=altitudes,
        velocities=velocities,
        stability=stability,
        trajectory=trajectory,
    )
