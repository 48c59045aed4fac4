import logging

import jax.numpy as jnp
import pytest

from keplax.constants import AU, DEG2RAD, GM_EARTH, GM_MARS, GM_SUN
from keplax.coordinates import state_cartesian_to_koe, state_koe_to_cartesian
from keplax.errors import InvalidGeometryError, InvalidInputError

# Tolerances
_SIZE_REL_TOL = 1e-10  # relative, semi-major axis / semi-latus rectum
_ECC_TOL = 1e-10       # dimensionless
_ANGLE_TOL = 1e-10     # radians
_POS_TOL = 1e-6        # metres
_VEL_TOL = 1e-9        # m/s
_BOOK_TOL = 1e-4       # reference values quoted to four or five digits

_TWO_PI = 2.0 * jnp.pi

# Reference element sets [a or p, e, i, RAAN, omega, nu] and their gravitational parameters
_ELLIPTIC = (jnp.array([0.3 * AU, 0.2, jnp.pi / 4.0, jnp.pi / 8.0, 4.0 * jnp.pi / 3.0, jnp.pi / 3.0]), GM_EARTH)
_PARABOLIC = (jnp.array([4.0 * AU, 1.0, jnp.pi / 6.0, 8.0 * jnp.pi / 7.0, jnp.pi / 8.0, 7.0 * jnp.pi / 4.0]), GM_MARS)
_CIRCULAR_EQUATORIAL = (jnp.array([0.1 * AU, 0.0, 0.0, 0.0, 0.0, jnp.pi / 4.0]), GM_EARTH)
_HYPERBOLIC_EQUATORIAL = (jnp.array([-3.0 * AU, 2.0, 0.0, 0.0, 11.0 * jnp.pi / 8.0, 9.0 * jnp.pi / 16.0]), GM_SUN)
_GENERAL_LEO = (jnp.array([7000e3, 0.01, 1.2, 5.5, 0.7, 2.8]), GM_EARTH)
_RETROGRADE = (jnp.array([26560e3, 0.3, 2.6, 4.0, 3.3, 0.2]), GM_EARTH)
_POLAR_HYPERBOLIC = (jnp.array([-20000e3, 1.4, jnp.pi / 2.0, 1.0, 2.0, 5.0]), GM_EARTH)

_ROUNDTRIP_CASES = {
    "elliptic": _ELLIPTIC,
    "parabolic": _PARABOLIC,
    "circular_equatorial": _CIRCULAR_EQUATORIAL,
    "hyperbolic_equatorial": _HYPERBOLIC_EQUATORIAL,
    "general_leo": _GENERAL_LEO,
    "retrograde": _RETROGRADE,
    "polar_hyperbolic": _POLAR_HYPERBOLIC,
}


def _angle_diff(a, b):
    """Smallest absolute difference between two angles."""
    d = (float(a) - float(b)) % (2.0 * jnp.pi)
    return min(d, 2.0 * jnp.pi - d)


def _assert_elements_close(oe, oe_ref):
    assert abs(float(oe[0]) / float(oe_ref[0]) - 1.0) < _SIZE_REL_TOL
    assert abs(float(oe[1]) - float(oe_ref[1])) < _ECC_TOL
    for k in range(2, 6):
        assert _angle_diff(oe[k], oe_ref[k]) < _ANGLE_TOL, f"element {k}"


# ──────────────────────────────────────────────
# Keplerian -> Cartesian
# ──────────────────────────────────────────────

class TestKOEToCartesian:
    def test_circular_equatorial(self):
        """Circular equatorial orbit: r=[a,0,0], v=[0,v_circ,0]."""
        sma = 7000e3
        oe = jnp.array([sma, 0.0, 0.0, 0.0, 0.0, 0.0])
        state = state_koe_to_cartesian(oe, GM_EARTH)

        v_circ = float(jnp.sqrt(GM_EARTH / sma))
        assert jnp.abs(state[0] - sma) < _POS_TOL
        assert jnp.abs(state[1]) < _POS_TOL
        assert jnp.abs(state[2]) < _POS_TOL
        assert jnp.abs(state[3]) < _VEL_TOL
        assert jnp.abs(state[4] - v_circ) < _VEL_TOL
        assert jnp.abs(state[5]) < _VEL_TOL

    def test_polar_orbit(self):
        """i=90° orbit: r along x, v along z."""
        sma = 7000e3
        oe = jnp.array([sma, 0.0, 90.0, 0.0, 0.0, 0.0])
        state = state_koe_to_cartesian(oe, GM_EARTH, use_degrees=True)

        v_circ = float(jnp.sqrt(GM_EARTH / sma))
        assert jnp.abs(state[0] - sma) < _POS_TOL
        assert jnp.abs(state[1]) < _POS_TOL
        assert jnp.abs(state[2]) < _POS_TOL
        assert jnp.abs(state[3]) < _VEL_TOL
        assert jnp.abs(state[4]) < _VEL_TOL
        assert jnp.abs(state[5] - v_circ) < _VEL_TOL

    def test_elliptic_periapsis(self):
        sma, e = 10000e3, 0.1
        state = state_koe_to_cartesian(jnp.array([sma, e, 0.0, 0.0, 0.0, 0.0]), GM_EARTH)

        p = sma * (1.0 - e**2)
        v_peri = float(jnp.sqrt(GM_EARTH / p)) * (1.0 + e)
        assert jnp.abs(state[0] - sma * (1.0 - e)) < _POS_TOL
        assert jnp.abs(state[4] - v_peri) < _VEL_TOL
        assert jnp.abs(state[3]) < _VEL_TOL

    def test_hyperbolic_vis_viva(self):
        oe, gm = _POLAR_HYPERBOLIC
        state = state_koe_to_cartesian(oe, gm)
        r = float(jnp.linalg.norm(state[:3]))
        v2 = float(jnp.sum(state[3:] ** 2))
        assert v2 == pytest.approx(gm * (2.0 / r - 1.0 / float(oe[0])), rel=1e-12)

    def test_parabolic_escape_speed(self):
        oe, gm = _PARABOLIC
        state = state_koe_to_cartesian(oe, gm)
        r = float(jnp.linalg.norm(state[:3]))
        v2 = float(jnp.sum(state[3:] ** 2))
        assert v2 == pytest.approx(2.0 * gm / r, rel=1e-12)

    def test_use_degrees_consistent(self):
        """Degrees and radians inputs yield same Cartesian state."""
        sma = 7000e3
        oe_deg = jnp.array([sma, 0.001, 98.0, 15.0, 30.0, 45.0])
        oe_rad = jnp.array([
            sma, 0.001,
            98.0 * DEG2RAD, 15.0 * DEG2RAD,
            30.0 * DEG2RAD, 45.0 * DEG2RAD,
        ])

        state_deg = state_koe_to_cartesian(oe_deg, GM_EARTH, use_degrees=True)
        state_rad = state_koe_to_cartesian(oe_rad, GM_EARTH, use_degrees=False)

        assert jnp.allclose(state_deg[:3], state_rad[:3], atol=_POS_TOL)
        assert jnp.allclose(state_deg[3:], state_rad[3:], atol=_VEL_TOL)

    @pytest.mark.parametrize(
        "oe",
        [
            [7000e3, -0.1, 1.0, 0.0, 0.0, 0.0],       # negative eccentricity
            [7000e3, 0.1, 3.5, 0.0, 0.0, 0.0],        # inclination above pi
            [7000e3, 0.1, -0.2, 0.0, 0.0, 0.0],       # negative inclination
            [-7000e3, 0.1, 1.0, 0.0, 0.0, 0.0],       # elliptic with a < 0
            [7000e3, 1.5, 1.0, 0.0, 0.0, 0.0],        # hyperbolic with a > 0
            [0.0, 0.1, 1.0, 0.0, 0.0, 0.0],           # zero size
            [-7000e3, 2.0, 1.0, 0.0, 0.0, 2.5],       # beyond the asymptote
            [7000e3, 1.0, 1.0, 0.0, 0.0, jnp.pi],     # parabola at infinity
        ],
    )
    def test_invalid_elements(self, oe):
        with pytest.raises(InvalidInputError, match="state_koe_to_cartesian"):
            state_koe_to_cartesian(jnp.array(oe), GM_EARTH)

    @pytest.mark.parametrize("gm", [0.0, -GM_EARTH])
    def test_invalid_gm(self, gm):
        with pytest.raises(InvalidInputError, match="gravitational parameter"):
            state_koe_to_cartesian(_GENERAL_LEO[0], gm)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            state_koe_to_cartesian(jnp.array([7000e3, -0.1, 1.0, 0.0, 0.0, 0.0]), GM_EARTH)


# ──────────────────────────────────────────────
# Cartesian -> Keplerian
# ──────────────────────────────────────────────

class TestCartesianToKOE:
    def test_reference_state(self):
        """Textbook state with unit gravitational parameter."""
        state = jnp.array([1.0, 2.0, 1.0, -0.25, -0.25, 0.5])
        oe = state_cartesian_to_koe(state, 1.0)

        expected = [2.265, 0.185, 1.401, 1.0304, 2.6143, 4.0959]
        for k in range(6):
            assert abs(float(oe[k]) - expected[k]) < _BOOK_TOL, f"element {k}"

    def test_circular_equatorial_conventions(self):
        """RAAN and argument of periapsis are 0 when undefined."""
        sma = 7000e3
        v = float(jnp.sqrt(GM_EARTH / sma))
        c, s = jnp.cos(0.3), jnp.sin(0.3)
        state = jnp.array([sma * c, sma * s, 0.0, -v * s, v * c, 0.0])
        oe = state_cartesian_to_koe(state, GM_EARTH)

        assert abs(float(oe[0]) / sma - 1.0) < _SIZE_REL_TOL
        assert abs(float(oe[1])) < _ECC_TOL
        assert float(oe[2]) == 0.0
        assert float(oe[3]) == 0.0
        assert float(oe[4]) == 0.0
        assert abs(float(oe[5]) - 0.3) < _ANGLE_TOL

    def test_circular_inclined_true_anomaly_from_node(self):
        oe_in = jnp.array([7000e3, 0.0, 0.5, 1.0, 0.0, 2.0])
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, GM_EARTH), GM_EARTH)
        assert float(oe[4]) == 0.0
        assert _angle_diff(oe[3], 1.0) < _ANGLE_TOL
        assert _angle_diff(oe[5], 2.0) < _ANGLE_TOL

    def test_retrograde_equatorial(self):
        """i = pi measures angles about -z, from the x-axis."""
        oe_in = jnp.array([9000e3, 0.2, jnp.pi, 0.0, 1.0, 0.5])
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, GM_EARTH), GM_EARTH)
        assert abs(float(oe[2]) - jnp.pi) < _ANGLE_TOL
        assert float(oe[3]) == 0.0
        assert _angle_diff(oe[4], 1.0) < _ANGLE_TOL
        assert _angle_diff(oe[5], 0.5) < _ANGLE_TOL

    def test_parabolic_returns_semi_latus_rectum(self):
        oe_in, gm = _PARABOLIC
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, gm), gm)
        assert abs(float(oe[0]) / float(oe_in[0]) - 1.0) < _SIZE_REL_TOL

    def test_hyperbolic_negative_sma(self):
        oe_in, gm = _HYPERBOLIC_EQUATORIAL
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, gm), gm)
        assert float(oe[0]) < 0.0
        assert float(oe[1]) > 1.0

    def test_angles_wrapped(self):
        for oe_in, gm in _ROUNDTRIP_CASES.values():
            oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, gm), gm)
            for k in range(3, 6):
                assert 0.0 <= float(oe[k]) < _TWO_PI

    def test_use_degrees(self):
        oe_in, gm = _GENERAL_LEO
        state = state_koe_to_cartesian(oe_in, gm)
        oe_rad = state_cartesian_to_koe(state, gm)
        oe_deg = state_cartesian_to_koe(state, gm, use_degrees=True)
        assert jnp.allclose(oe_deg[:2], oe_rad[:2])
        assert jnp.allclose(oe_deg[2:] * DEG2RAD, oe_rad[2:], atol=_ANGLE_TOL)

    def test_zero_position_raises(self):
        state = jnp.array([0.0, 0.0, 0.0, 1000.0, 0.0, 0.0])
        with pytest.raises(InvalidGeometryError, match="position vector is zero"):
            state_cartesian_to_koe(state, GM_EARTH)

    @pytest.mark.parametrize(
        "state",
        [
            [7000e3, 0.0, 0.0, 1000.0, 0.0, 0.0],     # radial velocity only
            [7000e3, 0.0, 0.0, -3000.0, 0.0, 0.0],    # radial infall
            [7000e3, 1000e3, 0.0, 0.0, 0.0, 0.0],     # at rest
        ],
    )
    def test_rectilinear_raises(self, state):
        with pytest.raises(InvalidGeometryError, match="parallel"):
            state_cartesian_to_koe(jnp.array(state), GM_EARTH)

    def test_invalid_geometry_is_value_error(self):
        with pytest.raises(ValueError):
            state_cartesian_to_koe(jnp.zeros(6), GM_EARTH)

    def test_invalid_gm(self):
        state = state_koe_to_cartesian(_GENERAL_LEO[0], GM_EARTH)
        with pytest.raises(InvalidInputError):
            state_cartesian_to_koe(state, 0.0)


# ──────────────────────────────────────────────
# Round trips
# ──────────────────────────────────────────────

class TestKeplerianRoundTrip:
    @pytest.mark.parametrize("case", sorted(_ROUNDTRIP_CASES))
    def test_koe_cartesian_koe(self, case):
        oe_in, gm = _ROUNDTRIP_CASES[case]
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, gm), gm)
        _assert_elements_close(oe, oe_in)

    @pytest.mark.parametrize("case", sorted(_ROUNDTRIP_CASES))
    def test_cartesian_koe_cartesian(self, case):
        oe_in, gm = _ROUNDTRIP_CASES[case]
        state = state_koe_to_cartesian(oe_in, gm)
        state_back = state_koe_to_cartesian(state_cartesian_to_koe(state, gm), gm)
        r_scale = float(jnp.linalg.norm(state[:3]))
        v_scale = float(jnp.linalg.norm(state[3:]))
        assert float(jnp.max(jnp.abs(state_back[:3] - state[:3]))) < 1e-10 * r_scale
        assert float(jnp.max(jnp.abs(state_back[3:] - state[3:]))) < 1e-10 * v_scale

    def test_degrees_roundtrip(self):
        oe_deg = jnp.array([8000e3, 0.05, 63.4, 200.0, 270.0, 10.0])
        state = state_koe_to_cartesian(oe_deg, GM_EARTH, use_degrees=True)
        oe = state_cartesian_to_koe(state, GM_EARTH, use_degrees=True)
        assert abs(float(oe[0]) / 8000e3 - 1.0) < _SIZE_REL_TOL
        assert jnp.allclose(oe[2:], oe_deg[2:], atol=1e-8)


# ──────────────────────────────────────────────
# Logging
# ──────────────────────────────────────────────

class TestLogging:
    def test_convention_branches_logged(self, caplog):
        oe_in, gm = _CIRCULAR_EQUATORIAL
        state = state_koe_to_cartesian(oe_in, gm)
        with caplog.at_level(logging.DEBUG, logger="keplax"):
            state_cartesian_to_koe(state, gm)
        messages = " ".join(r.getMessage() for r in caplog.records)
        assert "equatorial" in messages
        assert "circular" in messages

    def test_failure_logged_before_raise(self, caplog):
        with caplog.at_level(logging.ERROR, logger="keplax"):
            with pytest.raises(InvalidGeometryError):
                state_cartesian_to_koe(jnp.zeros(6), GM_EARTH)
        assert any(
            r.levelno == logging.ERROR and "state_cartesian_to_koe" in r.getMessage()
            for r in caplog.records
        )
