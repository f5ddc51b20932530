"""Tests for Vec3 class."""

import pickle

import pytest
import math
import numpy as np

from pathlight.vec3 import Vec3, Point3, Color


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert (v.x, v.y, v.z) == (0.0, 0.0, 0.0)

    def test_from_array(self):
        v = Vec3.from_array(np.array([1.0, 2.0, 3.0]))
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_pickle_roundtrip_keeps_value(self):
        v = Vec3(1.5, -2.0, 3.25)
        assert pickle.loads(pickle.dumps(v)) == v


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        assert -Vec3(1, 2, 3) == Vec3(-1, -2, -3)

    def test_addition_and_subtraction(self):
        assert Vec3(1, 2, 3) + Vec3(4, 5, 6) == Vec3(5, 7, 9)
        assert Vec3(4, 5, 6) - Vec3(1, 2, 3) == Vec3(3, 3, 3)

    def test_scalar_multiplication_both_sides(self):
        assert Vec3(1, 2, 3) * 2 == Vec3(2, 4, 6)
        assert 2 * Vec3(1, 2, 3) == Vec3(2, 4, 6)

    def test_componentwise_multiplication(self):
        assert Color(0.5, 1.0, 2.0) * Color(2.0, 0.5, 0.25) == Color(1.0, 0.5, 0.5)

    def test_division(self):
        assert Vec3(2, 4, 6) / 2 == Vec3(1, 2, 3)

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        _ = v * 3
        assert v == Vec3(1, 2, 3)


class TestVec3Products:
    """Test dot, cross, length and reflection."""

    def test_dot(self):
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32

    def test_cross_is_right_handed(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_length(self):
        assert Vec3(3, 4, 0).length() == pytest.approx(5.0)
        assert Vec3(3, 4, 0).length_squared() == pytest.approx(25.0)

    def test_normalize(self):
        n = Vec3(0, 3, 4).normalize()
        assert n.length() == pytest.approx(1.0)
        assert n == Vec3(0, 0.6, 0.8)

    def test_normalize_zero(self):
        assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)

    def test_reflect(self):
        reflected = Vec3(1, -1, 0).reflect(Vec3(0, 1, 0))
        assert reflected == Vec3(1, 1, 0)


class TestVec3Random:
    """Test random sampling helpers."""

    def test_random_range(self):
        rng = np.random.default_rng(1)
        for _ in range(100):
            v = Vec3.random(rng, -2.0, 3.0)
            assert all(-2.0 <= c < 3.0 for c in (v.x, v.y, v.z))

    def test_random_in_unit_sphere(self):
        rng = np.random.default_rng(2)
        for _ in range(200):
            assert Vec3.random_in_unit_sphere(rng).length_squared() < 1.0

    def test_random_unit_vector(self):
        rng = np.random.default_rng(3)
        for _ in range(200):
            assert Vec3.random_unit_vector(rng).length() == pytest.approx(1.0)

    def test_random_unit_vector_covers_sphere(self):
        rng = np.random.default_rng(4)
        mean = np.mean([Vec3.random_unit_vector(rng).to_array() for _ in range(4000)], axis=0)
        assert np.all(np.abs(mean) < 0.05)

    def test_random_in_unit_disk(self):
        rng = np.random.default_rng(5)
        for _ in range(200):
            p = Vec3.random_in_unit_disk(rng)
            assert p.z == 0.0
            assert p.x * p.x + p.y * p.y < 1.0

    def test_same_seed_same_stream(self):
        a = np.random.default_rng(42)
        b = np.random.default_rng(42)
        for _ in range(10):
            assert Vec3.random_in_unit_disk(a) == Vec3.random_in_unit_disk(b)

    def test_default_generator_is_used_without_rng(self):
        p = Vec3.random_in_unit_sphere()
        assert p.length_squared() < 1.0
