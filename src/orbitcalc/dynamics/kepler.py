"""
===============================================================================
ORBITCALC - Kepler's Equation
===============================================================================
Newton-Raphson solution of Kepler's equation for the elliptic and
hyperbolic cases, closed-form (Barker) solution for the parabolic case, and
the anomaly conversions built on top of it.

    Elliptic   (e < 1):  M = E - e*sin(E)
    Hyperbolic (e > 1):  M = e*sinh(H) - H
    Parabolic  (e = 1):  M = D/2 + D^3/6   with D = tan(nu/2)  (Barker)

The iterative branches never fail: if the iteration cap is reached before
the update falls below the tolerance, the last iterate is returned. The
convergence flag is reported by solve_kepler_detailed for callers (and
tests) that want to check it.
===============================================================================
"""

import logging
from typing import NamedTuple

import numpy as np

from orbitcalc.core.constants import PI, TWO_PI, EPSILON, MAX_ITERATIONS

logger = logging.getLogger(__name__)


class KeplerSolution(NamedTuple):
    """Result of one Kepler solve."""
    anomaly: float      # E, H or D depending on the conic (rad for E/H)
    iterations: int     # Newton updates performed (0 for the parabolic case)
    converged: bool


def solve_kepler_detailed(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = EPSILON,
    max_iterations: int = MAX_ITERATIONS,
) -> KeplerSolution:
    """
    Solve Kepler's equation and report how the iteration went.

    The mean anomaly is first reduced modulo one revolution.

    Elliptic seed:   E0 = M + e/2 if M < pi else M - e/2
    Hyperbolic seed: H0 = ln(2M/e + 1.8)

    Each Newton update is delta = f/f'; iteration stops as soon as
    |delta| < tolerance.

    Parameters
    ----------
    mean_anomaly : float
        Mean anomaly M (rad).
    eccentricity : float
        Eccentricity e >= 0.
    tolerance : float
        Convergence threshold on the Newton update.
    max_iterations : int
        Maximum number of Newton updates.

    Returns
    -------
    KeplerSolution
    """
    e = eccentricity
    M = mean_anomaly % TWO_PI

    if e < 1.0:
        E = M + e / 2.0 if M < PI else M - e / 2.0
        for iteration in range(1, max_iterations + 1):
            f = E - e * np.sin(E) - M
            f_prime = 1.0 - e * np.cos(E)
            delta = f / f_prime
            E -= delta
            if abs(delta) < tolerance:
                return KeplerSolution(float(E), iteration, True)
        logger.debug(
            "Elliptic Kepler solve did not converge: M=%.6f, e=%.6f "
            "after %d iterations",
            M, e, max_iterations,
        )
        return KeplerSolution(float(E), max_iterations, False)

    if e > 1.0:
        H = np.log(2.0 * M / e + 1.8)
        for iteration in range(1, max_iterations + 1):
            f = e * np.sinh(H) - H - M
            f_prime = e * np.cosh(H) - 1.0
            delta = f / f_prime
            H -= delta
            if abs(delta) < tolerance:
                return KeplerSolution(float(H), iteration, True)
        logger.debug(
            "Hyperbolic Kepler solve did not converge: M=%.6f, e=%.6f "
            "after %d iterations",
            M, e, max_iterations,
        )
        return KeplerSolution(float(H), max_iterations, False)

    # Parabolic: cubic in closed form
    B = np.cbrt(3.0 * M + np.sqrt(9.0 * M * M + 1.0))
    return KeplerSolution(float(B - 1.0 / B), 0, True)


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = EPSILON,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """Eccentric (e<1), hyperbolic (e>1) or parabolic (e=1) anomaly for M."""
    return solve_kepler_detailed(
        mean_anomaly, eccentricity, tolerance, max_iterations
    ).anomaly


# =============================================================================
# ANOMALY CONVERSIONS (elliptic orbits)
# =============================================================================

def eccentric_to_true_anomaly(E: float, e: float) -> float:
    """True anomaly (rad, in [0, 2*pi)) from eccentric anomaly."""
    nu = 2.0 * np.arctan2(
        np.sqrt(1.0 + e) * np.sin(E / 2.0),
        np.sqrt(1.0 - e) * np.cos(E / 2.0),
    )
    return float(nu % TWO_PI)


def true_to_eccentric_anomaly(nu: float, e: float) -> float:
    """Eccentric anomaly (rad, in [0, 2*pi)) from true anomaly."""
    E = 2.0 * np.arctan2(
        np.sqrt(1.0 - e) * np.sin(nu / 2.0),
        np.sqrt(1.0 + e) * np.cos(nu / 2.0),
    )
    return float(E % TWO_PI)


def true_to_mean_anomaly(nu: float, e: float) -> float:
    """Mean anomaly (rad, in [0, 2*pi)) from true anomaly."""
    E = true_to_eccentric_anomaly(nu, e)
    return float((E - e * np.sin(E)) % TWO_PI)


def mean_to_true_anomaly(
    M: float,
    e: float,
    tolerance: float = EPSILON,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """True anomaly (rad, in [0, 2*pi)) from mean anomaly."""
    E = solve_kepler(M, e, tolerance, max_iterations)
    return eccentric_to_true_anomaly(E, e)
