"""Keplerian orbital element ↔ Unified State Model element conversions.

The Unified State Model (USM) describes an orbit with the velocity
hodograph and the attitude of the rotating orbital frame:

| Index | Element                                          | Units         |
|-------|--------------------------------------------------|---------------|
| 0     | *C* — velocity component normal to the radius    | m/s           |
|       | vector that is constant in magnitude             |               |
| 1     | *Rf1* — hodograph offset, first component        | m/s           |
| 2     | *Rf2* — hodograph offset, second component       | m/s           |
| 3-5   | *ε1, ε2, ε3* — vector part of the quaternion     | dimensionless |
| 6     | *η* — scalar part of the quaternion              | dimensionless |

``(ε1, ε2, ε3, η)`` is a unit quaternion and ``C > 0``.  The
representation is singular for a pure retrograde orbit (``i = pi``),
where ``ε3`` and ``η`` both vanish.

Keplerian elements follow the layout of
:mod:`keplax.coordinates.keplerian` (true anomaly in slot 5, semi-latus
rectum in slot 0 for parabolic orbits).

References:
    1. S. Altman, *A Unified State Model of Orbital Trajectory and
       Attitude Dynamics*, Celestial Mechanics 6, 1972.
    2. G. Vittaldev, E. Mooij and M.C. Naeije, *Unified State Model
       theory and application in Astrodynamics*, Celestial Mechanics and
       Dynamical Astronomy 112, 2012.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax._validation import check_gm, check_inclination, conic_semi_latus_rectum, reject
from keplax.config import get_dtype, get_singularity_tolerance, get_unit_norm_tolerance
from keplax.coordinates.keplerian import state_cartesian_to_koe, state_koe_to_cartesian
from keplax.errors import InvalidInputError, SingularGeometryError
from keplax.utils import wrap_to_2pi

logger = logging.getLogger(__name__)


def state_koe_to_usm(
    x_oe: ArrayLike,
    gm: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert Keplerian orbital elements to USM elements.

    Args:
        x_oe: Orbital elements ``[a, e, i, RAAN, omega, nu]``.
            Size element in *m*, angles in *rad* (or *deg* if
            ``use_degrees=True``).
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret angular elements as degrees.

    Returns:
        USM elements ``[C, Rf1, Rf2, eps1, eps2, eps3, eta]``.

    Raises:
        InvalidInputError: If ``e < 0``, ``i`` is outside ``[0, pi]``, the
            sign of ``a`` is inconsistent with ``e``, or ``gm <= 0``.

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.constants import GM_EARTH
        from keplax.coordinates import state_koe_to_usm
        oe = jnp.array([7000e3, 0.01, 0.9, 0.3, 0.5, 1.0])
        usm = state_koe_to_usm(oe, GM_EARTH)
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

    check_gm(gm, "state_koe_to_usm")
    check_inclination(i, "state_koe_to_usm")
    p = conic_semi_latus_rectum(size, e, "state_koe_to_usm")

    # Hodograph
    C = jnp.sqrt(gm / p)
    R = e * C
    Rf1 = -R * jnp.sin(raan + omega)
    Rf2 = R * jnp.cos(raan + omega)

    # Attitude quaternion of the orbital frame
    u = omega + nu
    sin_half_i = jnp.sin(0.5 * i)
    cos_half_i = jnp.cos(0.5 * i)
    eps1 = sin_half_i * jnp.cos(0.5 * (raan - u))
    eps2 = sin_half_i * jnp.sin(0.5 * (raan - u))
    eps3 = cos_half_i * jnp.sin(0.5 * (raan + u))
    eta = cos_half_i * jnp.cos(0.5 * (raan + u))

    return jnp.array([C, Rf1, Rf2, eps1, eps2, eps3, eta], dtype=get_dtype())


def state_usm_to_koe(
    x_usm: ArrayLike,
    gm: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert USM elements to Keplerian orbital elements.

    The orbital frame attitude gives the inclination, RAAN and the
    argument of latitude ``lambda``.  The hodograph, rotated into the
    orbital frame, gives the eccentricity, the size element and the true
    anomaly.

    RAAN is 0 for an equatorial prograde orbit and the argument of
    periapsis is 0 for a circular orbit, matching
    :func:`~keplax.coordinates.state_cartesian_to_koe`.

    Args:
        x_usm: USM elements ``[C, Rf1, Rf2, eps1, eps2, eps3, eta]``.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        Orbital elements ``[a, e, i, RAAN, omega, nu]``, angles in
            ``[0, 2pi)`` *rad* (or *deg*).

    Raises:
        InvalidInputError: If ``C <= 0``, the quaternion is not unit
            norm, or ``gm <= 0``.
        SingularGeometryError: If the orbit is pure retrograde
            (``eps3`` and ``eta`` both vanish).

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.constants import GM_EARTH
        from keplax.coordinates import state_usm_to_koe
        usm = jnp.array([7546.05, 0.0, 75.46, 0.0, 0.0, 0.0, 1.0])
        oe = state_usm_to_koe(usm, GM_EARTH)
        ```
    """
    x_usm = jnp.asarray(x_usm, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())
    check_gm(gm, "state_usm_to_koe")

    C = x_usm[0]
    Rf1 = x_usm[1]
    Rf2 = x_usm[2]
    eps1 = x_usm[3]
    eps2 = x_usm[4]
    eps3 = x_usm[5]
    eta = x_usm[6]

    if not float(C) > 0.0:
        raise reject(InvalidInputError, "C must be positive", "state_usm_to_koe", {"C": C})

    q_norm = jnp.sqrt(eps1**2 + eps2**2 + eps3**2 + eta**2)
    if not abs(float(q_norm) - 1.0) < get_unit_norm_tolerance():
        raise reject(
            InvalidInputError,
            "attitude quaternion is not unit norm",
            "state_usm_to_koe",
            {"norm": q_norm},
        )

    tol = get_singularity_tolerance()
    if abs(float(eps3)) < tol and abs(float(eta)) < tol:
        raise reject(
            SingularGeometryError,
            "pure retrograde orbit, argument of latitude is undefined",
            "state_usm_to_koe",
            {"eps3": eps3, "eta": eta},
        )

    # Argument of latitude
    den = eps3**2 + eta**2
    cos_lam = (eta**2 - eps3**2) / den
    sin_lam = 2.0 * eps3 * eta / den
    lam = jnp.arctan2(sin_lam, cos_lam)

    # Hodograph in the orbital frame
    ve1 = Rf1 * cos_lam + Rf2 * sin_lam
    ve2 = C - Rf1 * sin_lam + Rf2 * cos_lam
    R = jnp.hypot(Rf1, Rf2)
    e = R / C

    if abs(float(e) - 1.0) < tol:
        logger.debug("state_usm_to_koe: parabolic orbit, returning semi-latus rectum")
        size = gm / C**2
    else:
        size = gm / (2.0 * C * ve2 - (ve1**2 + ve2**2))

    i = jnp.arccos(jnp.clip(1.0 - 2.0 * (eps1**2 + eps2**2), -1.0, 1.0))

    sin_i = 2.0 * jnp.hypot(eps1, eps2) * jnp.hypot(eps3, eta)
    if float(sin_i) < tol:
        logger.debug("state_usm_to_koe: equatorial orbit, RAAN set to 0")
        raan = jnp.zeros((), dtype=get_dtype())
    else:
        raan = wrap_to_2pi(jnp.arctan2(eps1 * eps3 + eps2 * eta, eps1 * eta - eps2 * eps3))

    if float(e) < tol:
        logger.debug("state_usm_to_koe: circular orbit, argument of periapsis set to 0")
        omega = jnp.zeros((), dtype=get_dtype())
        nu = wrap_to_2pi(lam - raan)
    else:
        nu = wrap_to_2pi(jnp.arctan2(ve1, ve2 - C))
        omega = wrap_to_2pi(lam - raan - nu)

    if use_degrees:
        i = jnp.rad2deg(i)
        raan = jnp.rad2deg(raan)
        omega = jnp.rad2deg(omega)
        nu = jnp.rad2deg(nu)

    return jnp.array([size, e, i, raan, omega, nu], dtype=get_dtype())


def state_cartesian_to_usm(x_cart: ArrayLike, gm: ArrayLike) -> Array:
    """Convert a Cartesian state vector to USM elements.

    Composite conversion: Cartesian -> Keplerian -> USM.

    Args:
        x_cart: Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        USM elements ``[C, Rf1, Rf2, eps1, eps2, eps3, eta]``.
    """
    return state_koe_to_usm(state_cartesian_to_koe(x_cart, gm), gm)


def state_usm_to_cartesian(x_usm: ArrayLike, gm: ArrayLike) -> Array:
    """Convert USM elements to a Cartesian state vector.

    Composite conversion: USM -> Keplerian -> Cartesian.

    Args:
        x_usm: USM elements ``[C, Rf1, Rf2, eps1, eps2, eps3, eta]``.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Cartesian state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.
    """
    return state_koe_to_cartesian(state_usm_to_koe(x_usm, gm), gm)
