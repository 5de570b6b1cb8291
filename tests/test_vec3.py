"""Unit tests for the vec3 module.

Tests cover:
- Vec3 construction, float32 storage and value semantics
- Component-wise arithmetic (add, subtract, scale, Hadamard, divide)
- Length, dot and cross products with known results
- Algebraic laws over a set of sample vectors
- Division by zero and zero-length normalization
"""

import math

import numpy as np
import pytest

from raycam.core.vec3 import (
    Vec3,
    add,
    as_vec3,
    cross,
    divide_scalar,
    dot,
    is_finite,
    length,
    multiply_scalar,
    multiply_vector,
    near_zero,
    squared_length,
    subtract,
    subtract_scalar,
    unit,
)

SAMPLE_VECTORS = [
    Vec3(1.0, 2.0, 3.0),
    Vec3(-4.5, 0.25, 7.0),
    Vec3(0.1, -0.2, 0.3),
    Vec3(100.0, -50.0, 25.0),
    Vec3(-1.0, -1.0, -1.0),
]


def _close(a, b, tol=1e-5):
    return (
        abs(float(a.x) - float(b.x)) < tol
        and abs(float(a.y) - float(b.y)) < tol
        and abs(float(a.z) - float(b.z)) < tol
    )


class TestVec3Basics:
    """Tests for construction and value semantics."""

    def test_components_are_float32(self):
        """Test that integer and float inputs are stored as float32."""
        v = Vec3(1, 2.5, np.float64(3.0))
        assert isinstance(v.x, np.float32)
        assert isinstance(v.y, np.float32)
        assert isinstance(v.z, np.float32)

    def test_equal_components_are_equal(self):
        """Test value equality and hashing."""
        assert Vec3(1, 2, 3) == Vec3(1.0, 2.0, 3.0)
        assert hash(Vec3(1, 2, 3)) == hash(Vec3(1.0, 2.0, 3.0))
        assert Vec3(1, 2, 3) != Vec3(1, 2, 4)

    def test_immutable(self):
        """Test that components cannot be reassigned."""
        v = Vec3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5.0

    def test_operations_do_not_mutate_inputs(self):
        """Test that inputs are unchanged after an operation."""
        a = Vec3(1, 2, 3)
        b = Vec3(4, 5, 6)
        add(a, b)
        multiply_scalar(a, 3)
        assert a == Vec3(1, 2, 3)
        assert b == Vec3(4, 5, 6)

    def test_from_iterable(self):
        """Test building from tuples, lists and arrays."""
        assert Vec3.from_iterable((1, 2, 3)) == Vec3(1, 2, 3)
        assert Vec3.from_iterable([1.0, 2.0, 3.0]) == Vec3(1, 2, 3)
        assert Vec3.from_iterable(np.array([1, 2, 3])) == Vec3(1, 2, 3)

    def test_from_iterable_wrong_size(self):
        """Test that a 2-element iterable is rejected."""
        with pytest.raises(ValueError, match="Expected 3 components"):
            Vec3.from_iterable((1.0, 2.0))

    def test_as_vec3_passthrough(self):
        """Test that as_vec3 returns Vec3 inputs unchanged."""
        v = Vec3(1, 2, 3)
        assert as_vec3(v) is v
        assert as_vec3((1, 2, 3)) == v

    def test_conversions(self):
        """Test tuple, numpy and unpacking conversions."""
        v = Vec3(1.5, -2.0, 0.25)
        assert v.to_tuple() == (1.5, -2.0, 0.25)
        arr = v.to_numpy()
        assert arr.dtype == np.float32
        assert arr.shape == (3,)
        x, y, z = v
        assert (x, y, z) == (1.5, -2.0, 0.25)
        assert len(v) == 3

    def test_zero(self):
        """Test the zero vector constructor."""
        assert Vec3.zero() == Vec3(0, 0, 0)


class TestVectorArithmetic:
    """Tests for component-wise operations and their operators."""

    def test_add(self):
        """Test component-wise sum."""
        assert add(Vec3(1, 2, 3), Vec3(4, 5, 6)) == Vec3(5, 7, 9)
        assert Vec3(1, 2, 3) + Vec3(4, 5, 6) == Vec3(5, 7, 9)

    def test_subtract(self):
        """Test first minus second."""
        assert subtract(Vec3(4, 5, 6), Vec3(1, 2, 3)) == Vec3(3, 3, 3)
        assert Vec3(4, 5, 6) - Vec3(1, 2, 3) == Vec3(3, 3, 3)

    def test_subtract_scalar(self):
        """Test subtracting a scalar from every component."""
        assert subtract_scalar(Vec3(4, 5, 6), 1) == Vec3(3, 4, 5)
        assert Vec3(4, 5, 6) - 1.0 == Vec3(3, 4, 5)

    def test_multiply_scalar_int_and_float(self):
        """Test scaling by int and float gives float32 vectors."""
        v = multiply_scalar(Vec3(1, 2, 3), 2)
        assert v == Vec3(2, 4, 6)
        assert isinstance(v.x, np.float32)
        assert multiply_scalar(Vec3(1, 2, 3), 0.5) == Vec3(0.5, 1.0, 1.5)
        assert 2 * Vec3(1, 2, 3) == Vec3(2, 4, 6)
        assert Vec3(1, 2, 3) * 2.0 == Vec3(2, 4, 6)

    def test_numpy_scalar_on_left(self):
        """Test that a numpy scalar times a Vec3 returns a Vec3."""
        v = np.float32(2.0) * Vec3(1, 2, 3)
        assert isinstance(v, Vec3)
        assert v == Vec3(2, 4, 6)

    def test_multiply_vector(self):
        """Test Hadamard product."""
        assert multiply_vector(Vec3(1, 2, 3), Vec3(4, 5, 6)) == Vec3(4, 10, 18)
        assert Vec3(1, 2, 3) * Vec3(4, 5, 6) == Vec3(4, 10, 18)

    def test_divide_scalar(self):
        """Test component-wise division."""
        assert divide_scalar(Vec3(2, 4, 6), 2) == Vec3(1, 2, 3)
        assert Vec3(2, 4, 6) / 4.0 == Vec3(0.5, 1.0, 1.5)

    def test_divide_by_zero_gives_non_finite(self):
        """Test that dividing by zero yields inf/NaN instead of raising."""
        v = divide_scalar(Vec3(1, -1, 0), 0)
        assert math.isinf(v.x) and v.x > 0
        assert math.isinf(v.y) and v.y < 0
        assert math.isnan(v.z)
        assert not is_finite(v)

    def test_negate(self):
        """Test unary negation."""
        assert -Vec3(1, -2, 3) == Vec3(-1, 2, -3)

    def test_unsupported_operand(self):
        """Test that adding a tuple is a TypeError."""
        with pytest.raises(TypeError):
            Vec3(1, 2, 3) + (1, 2, 3)


class TestProducts:
    """Tests for length, dot and cross with known values."""

    def test_cross_x_y_is_z(self):
        """Test (1,0,0) x (0,1,0) == (0,0,1)."""
        assert cross(Vec3(1, 0, 0), Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_cross_right_handed(self):
        """Test the remaining right-handed axis identities."""
        assert cross(Vec3(0, 1, 0), Vec3(0, 0, 1)) == Vec3(1, 0, 0)
        assert cross(Vec3(0, 0, 1), Vec3(1, 0, 0)) == Vec3(0, 1, 0)

    def test_dot(self):
        """Test (1,2,3) . (4,5,6) == 32."""
        assert dot(Vec3(1, 2, 3), Vec3(4, 5, 6)) == 32.0

    def test_length(self):
        """Test |(3,4,0)| == 5."""
        assert length(Vec3(3, 4, 0)) == 5.0

    def test_squared_length(self):
        """Test squared length avoids the square root."""
        assert squared_length(Vec3(1, 2, 2)) == 9.0

    def test_unit(self):
        """Test normalization of an axis-aligned vector."""
        assert unit(Vec3(0, 0, 5)) == Vec3(0, 0, 1)

    def test_unit_of_zero_is_nan(self):
        """Test that normalizing the zero vector propagates NaN."""
        v = unit(Vec3.zero())
        assert math.isnan(v.x) and math.isnan(v.y) and math.isnan(v.z)

    def test_near_zero(self):
        """Test the near-zero check."""
        assert near_zero(Vec3(1e-10, -1e-10, 0))
        assert not near_zero(Vec3(1e-3, 0, 0))


class TestAlgebraLaws:
    """Property checks over a set of sample vectors."""

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_add_and_dot_commute(self, a, b):
        """Test add(a, b) == add(b, a) and dot(a, b) == dot(b, a)."""
        assert add(a, b) == add(b, a)
        assert dot(a, b) == dot(b, a)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_cross_anticommutes(self, a, b):
        """Test cross(a, b) == -cross(b, a)."""
        assert _close(cross(a, b), -cross(b, a), tol=1e-3)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("s", [-3.0, -0.5, 0.0, 2, 7.25])
    def test_length_scales(self, a, s):
        """Test length(a * s) == |s| * length(a)."""
        expected = abs(s) * float(length(a))
        actual = float(length(multiply_scalar(a, s)))
        assert actual == pytest.approx(expected, rel=1e-5, abs=1e-5)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    def test_squared_length_matches_length(self, a):
        """Test squared_length(a) == length(a)^2."""
        assert float(squared_length(a)) == pytest.approx(float(length(a)) ** 2, rel=1e-5)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    def test_unit_has_length_one(self, a):
        """Test that unit(a) has length 1 within float32 tolerance."""
        assert abs(float(length(unit(a))) - 1.0) < 1e-5
