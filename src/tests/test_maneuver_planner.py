"""
===============================================================================
ORBITCALC - Maneuver Planner Test Suite
===============================================================================
Tests for the Hohmann transfer: LEO -> GEO reference values, same-orbit and
reversed transfers, and the transfer ellipse geometry.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orbitcalc.core.constants import EARTH_MU
from orbitcalc.guidance.maneuver_planner import ManeuverPlanner

LEO_RADIUS = 6778.0     # km
GEO_RADIUS = 42164.0    # km


@pytest.fixture
def planner():
    """Return a ManeuverPlanner instance."""
    return ManeuverPlanner()


class TestHohmannTransfer:

    def test_leo_to_geo(self, planner):
        plan = planner.hohmann_transfer(LEO_RADIUS, GEO_RADIUS)

        assert_allclose(plan.delta_v1, 2.397509, atol=1e-5)
        assert_allclose(plan.delta_v2, 1.456501, atol=1e-5)
        assert_allclose(plan.total_delta_v, 3.854009, atol=1e-5)
        assert_allclose(plan.transfer_time, 19048.40, rtol=1e-5)

    def test_transfer_orbit_geometry(self, planner):
        plan = planner.hohmann_transfer(LEO_RADIUS, GEO_RADIUS)
        orbit = plan.transfer_orbit
        assert_allclose(orbit.a, 24471.0, rtol=1e-14)
        assert_allclose(orbit.e, 0.723019, atol=1e-6)
        # Periapsis and apoapsis touch the two circular orbits
        assert_allclose(orbit.a * (1.0 - orbit.e), LEO_RADIUS, rtol=1e-12)
        assert_allclose(orbit.a * (1.0 + orbit.e), GEO_RADIUS, rtol=1e-12)

    def test_total_is_sum(self, planner):
        plan = planner.hohmann_transfer(7000.0, 9000.0)
        assert plan.total_delta_v == plan.delta_v1 + plan.delta_v2

    def test_same_orbit(self, planner):
        plan = planner.hohmann_transfer(7000.0, 7000.0)
        assert_allclose([plan.delta_v1, plan.delta_v2], [0.0, 0.0], atol=1e-12)
        assert plan.transfer_orbit.e == 0.0
        # Half of the circular period
        assert_allclose(plan.transfer_time, np.pi * np.sqrt(7000.0 ** 3 / EARTH_MU))

    def test_descending_transfer_mirrors_ascending(self, planner):
        up = planner.hohmann_transfer(LEO_RADIUS, GEO_RADIUS)
        down = planner.hohmann_transfer(GEO_RADIUS, LEO_RADIUS)
        assert_allclose(down.delta_v1, up.delta_v2, rtol=1e-12)
        assert_allclose(down.delta_v2, up.delta_v1, rtol=1e-12)
        assert_allclose(down.transfer_time, up.transfer_time, rtol=1e-12)
        assert_allclose(down.transfer_orbit.e, up.transfer_orbit.e, rtol=1e-12)

    @pytest.mark.parametrize("r2", [7000.0, 10000.0, 20000.0, 42164.0])
    def test_delta_v_grows_with_target(self, planner, r2):
        lower = planner.hohmann_transfer(LEO_RADIUS, r2 - 100.0).total_delta_v
        higher = planner.hohmann_transfer(LEO_RADIUS, r2).total_delta_v
        assert higher > lower

    def test_zero_radius_gives_non_finite(self, planner):
        plan = planner.hohmann_transfer(0.0, 7000.0)
        assert not np.isfinite(plan.delta_v1)
