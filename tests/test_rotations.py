"""Tests for the elementary rotations and the orbital-to-inertial rotation."""

import math

import jax.numpy as jnp

from keplax.rotations import Rx, Rz, rotation_orbital_to_inertial
from keplax.utils import from_radians, to_radians, wrap_to_2pi

ATOL = 1e-12
TWO_PI = 2.0 * math.pi


class TestElementaryRotations:
    def test_rx_90deg(self):
        R = Rx(90.0, use_degrees=True)
        expected = jnp.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, -1.0, 0.0]])
        assert jnp.allclose(R, expected, atol=ATOL)

    def test_rz_90deg(self):
        R = Rz(math.pi / 2.0)
        expected = jnp.array([[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        assert jnp.allclose(R, expected, atol=ATOL)

    def test_orthonormal(self):
        for R in (Rx(0.7), Rz(-2.3)):
            assert jnp.allclose(R @ R.T, jnp.eye(3), atol=ATOL)
            assert abs(float(jnp.linalg.det(R)) - 1.0) < ATOL


class TestOrbitalToInertial:
    def test_identity_for_zero_angles(self):
        assert jnp.allclose(rotation_orbital_to_inertial(0.0, 0.0, 0.0), jnp.eye(3), atol=ATOL)

    def test_radial_axis_along_argument_of_latitude(self):
        """With zero RAAN and inclination the radial axis lies at angle u in the x-y plane."""
        R = rotation_orbital_to_inertial(0.0, 0.0, 0.4)
        assert jnp.allclose(R[:, 0], jnp.array([math.cos(0.4), math.sin(0.4), 0.0]), atol=ATOL)

    def test_normal_axis_is_orbit_normal(self):
        raan, inc = 1.1, 0.6
        R = rotation_orbital_to_inertial(raan, inc, 2.0)
        normal = jnp.array([math.sin(inc) * math.sin(raan), -math.sin(inc) * math.cos(raan), math.cos(inc)])
        assert jnp.allclose(R[:, 2], normal, atol=ATOL)

    def test_ascending_node_direction(self):
        """At u = 0 the radial axis points at the ascending node."""
        R = rotation_orbital_to_inertial(2.5, 1.0, 0.0)
        assert jnp.allclose(R[:, 0], jnp.array([math.cos(2.5), math.sin(2.5), 0.0]), atol=ATOL)


class TestAngleHelpers:
    def test_degree_conversions(self):
        assert abs(float(to_radians(180.0, True)) - math.pi) < ATOL
        assert float(to_radians(1.5, False)) == 1.5
        assert abs(float(from_radians(math.pi, True)) - 180.0) < ATOL

    def test_wrap_range(self):
        for angle in (-10.0, -TWO_PI, -1e-20, 0.0, 3.0, TWO_PI, 50.0):
            w = float(wrap_to_2pi(angle))
            assert 0.0 <= w < TWO_PI

    def test_wrap_values(self):
        assert abs(float(wrap_to_2pi(-0.5)) - (TWO_PI - 0.5)) < ATOL
        assert abs(float(wrap_to_2pi(TWO_PI + 1.0)) - 1.0) < ATOL
        assert float(wrap_to_2pi(TWO_PI)) == 0.0

    def test_wrap_vectorized(self):
        w = wrap_to_2pi(jnp.array([-1.0, 1.0, 7.0]))
        assert w.shape == (3,)
        assert bool(jnp.all((w >= 0.0) & (w < TWO_PI)))
