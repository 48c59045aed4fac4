"""Keplerian orbital element ↔ inertial Cartesian state vector conversions.

Converts between Keplerian orbital elements
``[a, e, i, RAAN, omega, nu]`` and inertial Cartesian state vectors
``[x, y, z, vx, vy, vz]`` for elliptical, parabolic and hyperbolic orbits.

Element ordering:

| Index | Element                                      | Units         |
|-------|----------------------------------------------|---------------|
| 0     | *a* — semi-major axis (*p* when parabolic)   | m             |
| 1     | *e* — eccentricity                           | dimensionless |
| 2     | *i* — inclination                            | rad           |
| 3     | *Ω* — right ascension (RAAN)                 | rad           |
| 4     | *ω* — argument of periapsis                  | rad           |
| 5     | *ν* — true anomaly                           | rad           |

The semi-major axis is negative for hyperbolic orbits.  An orbit with
``|e - 1|`` below :func:`~keplax.config.get_singularity_tolerance` is
parabolic and carries its semi-latus rectum in slot 0.

Angles that are undefined for the orbit are set by convention when
converting from Cartesian state: RAAN is 0 for equatorial orbits (the
x-axis then replaces the line of nodes) and the argument of periapsis is
0 for circular orbits (the true anomaly is then measured from the line of
nodes).

All inputs and outputs use SI base units (metres, metres/second, radians)
and the gravitational parameter is passed explicitly.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 2.2.
    2. D. Vallado, *Fundamentals of Astrodynamics and Applications
       (4th Ed.)*, 2010, Algorithms 9 and 10.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax._validation import check_gm, check_inclination, conic_semi_latus_rectum, reject
from keplax.config import get_dtype, get_singularity_tolerance
from keplax.errors import InvalidGeometryError, InvalidInputError
from keplax.rotations import rotation_orbital_to_inertial
from keplax.utils import wrap_to_2pi

logger = logging.getLogger(__name__)


def _signed_angle(a: Array, b: Array, axis: Array) -> Array:
    """Angle from ``a`` to ``b`` measured counter-clockwise about ``axis``."""
    return jnp.arctan2(jnp.dot(axis, jnp.cross(a, b)), jnp.dot(a, b))


def state_koe_to_cartesian(
    x_oe: ArrayLike,
    gm: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert Keplerian orbital elements to a Cartesian state vector.

    Builds position and velocity in the rotating orbital frame (radial,
    transverse, normal) from the semi-latus rectum and true anomaly, then
    rotates them into the inertial frame through RAAN, inclination and
    argument of latitude.

    Args:
        x_oe: Orbital elements ``[a, e, i, RAAN, omega, nu]``.
            Size element in *m*, angles in *rad* (or *deg* if
            ``use_degrees=True``).
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret angular elements as degrees.

    Returns:
        Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.

    Raises:
        InvalidInputError: If ``e < 0``, ``i`` is outside ``[0, pi]``, the
            sign of ``a`` is inconsistent with ``e``, the true anomaly lies
            beyond the asymptotes of a hyperbola, or ``gm <= 0``.

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.constants import GM_EARTH
        from keplax.coordinates import state_koe_to_cartesian
        oe = jnp.array([7000e3, 0.01, 0.9, 0.0, 0.0, 0.0])
        state = state_koe_to_cartesian(oe, GM_EARTH)
        state.shape
        ```
    """
    x_oe = jnp.asarray(x_oe, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())

    size = x_oe[0]
    e = x_oe[1]
    i = x_oe[2]
    raan = x_oe[3]
    omega = x_oe[4]
    nu = x_oe[5]

    if use_degrees:
        i = jnp.deg2rad(i)
        raan = jnp.deg2rad(raan)
        omega = jnp.deg2rad(omega)
        nu = jnp.deg2rad(nu)

    check_gm(gm, "state_koe_to_cartesian")
    check_inclination(i, "state_koe_to_cartesian")
    p = conic_semi_latus_rectum(size, e, "state_koe_to_cartesian")

    denom = 1.0 + e * jnp.cos(nu)
    if not float(denom) > 0.0:
        raise reject(
            InvalidInputError,
            "true anomaly lies beyond the asymptotes of the hyperbola",
            "state_koe_to_cartesian",
            {"nu": nu, "e": e},
        )

    # Position and velocity in the orbital frame
    r = p / denom
    sqrt_gm_p = jnp.sqrt(gm / p)
    r_orb = jnp.array([r, 0.0, 0.0], dtype=get_dtype())
    v_orb = jnp.array([sqrt_gm_p * e * jnp.sin(nu), sqrt_gm_p * denom, 0.0], dtype=get_dtype())

    R = rotation_orbital_to_inertial(raan, i, omega + nu)

    return jnp.concatenate([R @ r_orb, R @ v_orb])


def state_cartesian_to_koe(
    x_cart: ArrayLike,
    gm: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert a Cartesian state vector to Keplerian orbital elements.

    Derives the elements from the angular momentum, eccentricity and node
    vectors.  Every angle is measured about the angular momentum
    direction, so the quadrant of each angle is resolved without
    case analysis.

    Args:
        x_cart: Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        Orbital elements ``[a, e, i, RAAN, omega, nu]``.
            Size element in *m*, angles in ``[0, 2pi)`` *rad* (or *deg*).

    Raises:
        InvalidGeometryError: If the position is zero or the position and
            velocity are parallel (no orbital plane).
        InvalidInputError: If ``gm <= 0``.

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.coordinates import state_cartesian_to_koe
        state = jnp.array([1.0, 2.0, 1.0, -0.25, -0.25, 0.5])
        oe = state_cartesian_to_koe(state, 1.0)
        ```
    """
    x_cart = jnp.asarray(x_cart, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())
    check_gm(gm, "state_cartesian_to_koe")

    tol = get_singularity_tolerance()
    r_vec = x_cart[:3]
    v_vec = x_cart[3:6]

    r_mag = jnp.linalg.norm(r_vec)
    if not float(r_mag) > 0.0:
        raise reject(InvalidGeometryError, "position vector is zero", "state_cartesian_to_koe", {"r": r_mag})

    h_vec = jnp.cross(r_vec, v_vec)
    h_mag = jnp.linalg.norm(h_vec)
    if not float(h_mag) > tol * float(r_mag) * float(jnp.linalg.norm(v_vec)):
        raise reject(
            InvalidGeometryError,
            "position and velocity are parallel, the orbital plane is undefined",
            "state_cartesian_to_koe",
            {"h": h_mag, "r": r_mag},
        )
    h_hat = h_vec / h_mag

    # Eccentricity vector and size
    e_vec = jnp.cross(v_vec, h_vec) / gm - r_vec / r_mag
    e = jnp.linalg.norm(e_vec)
    p = h_mag**2 / gm

    if abs(float(e) - 1.0) < tol:
        logger.debug("state_cartesian_to_koe: parabolic orbit, returning semi-latus rectum")
        size = p
    else:
        size = p / (1.0 - e**2)

    i = jnp.arccos(jnp.clip(h_hat[2], -1.0, 1.0))

    # Line of nodes, replaced by the x-axis for equatorial orbits
    n_vec = jnp.array([-h_hat[1], h_hat[0], 0.0], dtype=get_dtype())
    n_mag = jnp.linalg.norm(n_vec)
    if float(n_mag) < tol:
        logger.debug("state_cartesian_to_koe: equatorial orbit, RAAN set to 0")
        raan = jnp.zeros((), dtype=get_dtype())
        ref = jnp.array([1.0, 0.0, 0.0], dtype=get_dtype())
    else:
        raan = wrap_to_2pi(jnp.arctan2(n_vec[1], n_vec[0]))
        ref = n_vec / n_mag

    if float(e) < tol:
        logger.debug("state_cartesian_to_koe: circular orbit, argument of periapsis set to 0")
        omega = jnp.zeros((), dtype=get_dtype())
        nu = wrap_to_2pi(_signed_angle(ref, r_vec, h_hat))
    else:
        omega = wrap_to_2pi(_signed_angle(ref, e_vec, h_hat))
        nu = wrap_to_2pi(_signed_angle(e_vec, r_vec, h_hat))

    if use_degrees:
        i = jnp.rad2deg(i)
        raan = jnp.rad2deg(raan)
        omega = jnp.rad2deg(omega)
        nu = jnp.rad2deg(nu)

    return jnp.array([size, e, i, raan, omega, nu], dtype=get_dtype())
