"""
===============================================================================
ORBITCALC - Kepler Solver Test Suite
===============================================================================
Tests for Kepler's equation in its elliptic, hyperbolic and parabolic forms,
iteration-cap behaviour and the anomaly conversions.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orbitcalc.dynamics.kepler import (
    solve_kepler,
    solve_kepler_detailed,
    eccentric_to_true_anomaly,
    true_to_eccentric_anomaly,
    true_to_mean_anomaly,
    mean_to_true_anomaly,
)


def wrap_angle(x):
    """Angle difference folded into [-pi, pi)."""
    return (x + np.pi) % (2.0 * np.pi) - np.pi


# =============================================================================
# Test: Elliptic case
# =============================================================================

class TestEllipticKepler:
    """M = E - e*sin(E)."""

    @pytest.mark.parametrize("e", [0.0, 0.01, 0.3, 0.7, 0.95])
    @pytest.mark.parametrize("M", [0.1, 1.0, np.pi - 0.01, np.pi + 0.5, 6.0])
    def test_residual(self, M, e):
        sol = solve_kepler_detailed(M, e)
        assert sol.converged
        assert_allclose(sol.anomaly - e * np.sin(sol.anomaly), M, atol=1e-10)

    def test_circular_orbit_anomaly_equals_mean(self):
        assert_allclose(solve_kepler(1.234, 0.0), 1.234, atol=1e-14)

    def test_mean_anomaly_reduced_modulo_two_pi(self):
        assert_allclose(
            solve_kepler(1.0 + 2.0 * np.pi, 0.4),
            solve_kepler(1.0, 0.4),
            atol=1e-12,
        )

    def test_negative_mean_anomaly(self):
        E = solve_kepler(-0.5, 0.2)
        assert_allclose(E - 0.2 * np.sin(E), 2.0 * np.pi - 0.5, atol=1e-10)

    def test_converges_quickly(self):
        sol = solve_kepler_detailed(1.0, 0.1)
        assert sol.iterations <= 6


# =============================================================================
# Test: Iteration cap
# =============================================================================

class TestIterationCap:
    """The solver returns its last iterate instead of failing."""

    def test_single_iteration_not_converged(self):
        sol = solve_kepler_detailed(0.1, 0.99, max_iterations=1)
        assert not sol.converged
        assert sol.iterations == 1
        assert np.isfinite(sol.anomaly)

    def test_zero_iterations_returns_seed(self):
        # Seed for M < pi is M + e/2
        sol = solve_kepler_detailed(1.0, 0.5, max_iterations=0)
        assert not sol.converged
        assert sol.iterations == 0
        assert_allclose(sol.anomaly, 1.25)

    def test_loose_tolerance_stops_early(self):
        loose = solve_kepler_detailed(1.0, 0.5, tolerance=1e-2)
        tight = solve_kepler_detailed(1.0, 0.5)
        assert loose.converged
        assert loose.iterations <= tight.iterations


# =============================================================================
# Test: Hyperbolic and parabolic cases
# =============================================================================

class TestHyperbolicKepler:
    """M = e*sinh(H) - H."""

    @pytest.mark.parametrize("e", [1.1, 1.5, 2.0, 5.0])
    @pytest.mark.parametrize("M", [0.1, 0.5, 2.0, 5.0])
    def test_residual(self, M, e):
        sol = solve_kepler_detailed(M, e)
        assert sol.converged
        H = sol.anomaly
        assert_allclose(e * np.sinh(H) - H, M, rtol=1e-10, atol=1e-10)


class TestParabolicKepler:
    """Barker's equation: D + D^3/3 = 2M."""

    @pytest.mark.parametrize("M", [0.0, 0.25, 1.0, 3.0])
    def test_barker_residual(self, M):
        sol = solve_kepler_detailed(M, 1.0)
        D = sol.anomaly
        assert sol.converged
        assert sol.iterations == 0
        assert_allclose(D + D ** 3 / 3.0, 2.0 * M, atol=1e-12)


# =============================================================================
# Test: Anomaly conversions
# =============================================================================

class TestAnomalyConversions:

    @pytest.mark.parametrize("nu", [0.0, 0.5, 2.0, np.pi, 4.0, 6.0])
    @pytest.mark.parametrize("e", [0.0, 0.2, 0.8])
    def test_true_mean_true(self, nu, e):
        M = true_to_mean_anomaly(nu, e)
        assert abs(wrap_angle(mean_to_true_anomaly(M, e) - nu)) < 1e-9

    @pytest.mark.parametrize("E", [0.3, 1.7, 3.5, 5.9])
    def test_eccentric_true_eccentric(self, E):
        nu = eccentric_to_true_anomaly(E, 0.4)
        assert_allclose(true_to_eccentric_anomaly(nu, 0.4), E, atol=1e-12)

    def test_periapsis_and_apoapsis_fixed(self):
        assert_allclose(eccentric_to_true_anomaly(0.0, 0.6), 0.0, atol=1e-14)
        assert_allclose(eccentric_to_true_anomaly(np.pi, 0.6), np.pi, atol=1e-12)

    def test_results_in_range(self):
        for nu in np.linspace(-10.0, 10.0, 41):
            M = true_to_mean_anomaly(nu, 0.3)
            assert 0.0 <= M < 2.0 * np.pi
