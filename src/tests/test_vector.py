"""
===============================================================================
ORBITCALC - Vector Algebra Test Suite
===============================================================================
Tests for the immutable Vector3 type: magnitude, dot and cross products,
normalisation (including the zero vector), scaling, operator forms and
numpy interop.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orbitcalc.core.vector import Vector3, Z_HAT


X_HAT = Vector3(1.0, 0.0, 0.0)
Y_HAT = Vector3(0.0, 1.0, 0.0)


class TestVectorAlgebra:
    """Basic algebraic operations."""

    def test_magnitude(self):
        assert Vector3(3.0, 4.0, 0.0).magnitude() == 5.0

    def test_dot_product(self):
        assert Vector3(1.0, 2.0, 3.0).dot(Vector3(4.0, -5.0, 6.0)) == 12.0

    def test_cross_product_right_handed(self):
        assert X_HAT.cross(Y_HAT) == Z_HAT
        assert Y_HAT.cross(Z_HAT) == X_HAT
        assert Z_HAT.cross(X_HAT) == Y_HAT

    def test_cross_product_perpendicular(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(-2.0, 0.5, 4.0)
        c = a.cross(b)
        assert_allclose([c.dot(a), c.dot(b)], [0.0, 0.0], atol=1e-12)

    def test_cross_with_self_is_zero(self):
        a = Vector3(7.0, -1.0, 2.5)
        assert a.cross(a) == Vector3.zero()

    def test_scale_add_subtract(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, 0.5, 0.5)
        assert a.scale(2.0) == Vector3(2.0, 4.0, 6.0)
        assert a.add(b) == Vector3(1.5, 2.5, 3.5)
        assert a.subtract(b) == Vector3(0.5, 1.5, 2.5)

    def test_operator_forms(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(3.0, 2.0, 1.0)
        assert a + b == Vector3(4.0, 4.0, 4.0)
        assert a - b == Vector3(-2.0, 0.0, 2.0)
        assert 2.0 * a == a * 2.0 == Vector3(2.0, 4.0, 6.0)
        assert -a == Vector3(-1.0, -2.0, -3.0)


class TestNormalize:
    """Normalisation, including the zero vector."""

    @pytest.mark.parametrize("components", [
        (1.0, 0.0, 0.0),
        (3.0, 4.0, 0.0),
        (-2.0, 7.0, 1e-3),
        (1e-9, 1e-9, 1e-9),
    ])
    def test_unit_length(self, components):
        assert_allclose(Vector3(*components).normalize().magnitude(), 1.0, rtol=1e-14)

    def test_zero_vector_normalizes_to_zero(self):
        assert Vector3.zero().normalize() == Vector3.zero()


class TestNumpyInterop:

    def test_array_round_trip(self):
        v = Vector3(1.5, -2.5, 3.25)
        arr = v.to_array()
        assert isinstance(arr, np.ndarray)
        assert arr.shape == (3,)
        assert Vector3.from_array(arr) == v

    def test_iteration_unpacks(self):
        x, y, z = Vector3(1.0, 2.0, 3.0)
        assert (x, y, z) == (1.0, 2.0, 3.0)

    def test_immutable(self):
        v = Vector3(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            v.x = 5.0
