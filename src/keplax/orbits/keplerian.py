"""Mean motion and the relations between elapsed time and mean anomaly.

A positive semi-major axis denotes an elliptical orbit and a negative one
a hyperbolic orbit; both use the mean motion ``n = sqrt(gm / |a|^3)``.
The gravitational parameter is always passed explicitly.

Mean anomalies returned here are not wrapped.  Apply
:func:`keplax.utils.wrap_to_2pi` to an elliptical mean anomaly when a
value in ``[0, 2pi)`` is needed.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax._validation import check_gm, reject
from keplax.config import get_dtype
from keplax.errors import InvalidInputError
from keplax.utils import from_radians, to_radians


def _check_elliptic_sma(a, conversion: str) -> None:
    if not float(a) > 0.0:
        raise reject(
            InvalidInputError,
            "semi-major axis must be positive for an elliptical orbit",
            conversion,
            {"a": a},
        )


def _check_hyperbolic_sma(a, conversion: str) -> None:
    if not float(a) < 0.0:
        raise reject(
            InvalidInputError,
            "semi-major axis must be negative for a hyperbolic orbit",
            conversion,
            {"a": a},
        )


# ──────────────────────────────────────────────
# Mean motion and period
# ──────────────────────────────────────────────


def mean_motion(a: ArrayLike, gm: ArrayLike, use_degrees: bool = False) -> Array:
    """Compute the mean motion of an elliptical or hyperbolic orbit.

    Args:
        a: Semi-major axis, positive for elliptical and negative for
            hyperbolic orbits. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return mean motion in degrees per second.

    Returns:
        Mean motion. Units: *rad/s* or *deg/s*

    Raises:
        InvalidInputError: If ``a`` is zero or ``gm`` is not positive.

    Examples:
        ```python
        from keplax.constants import GM_EARTH
        from keplax.orbits import mean_motion
        n = mean_motion(7000e3, GM_EARTH)
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())
    check_gm(gm, "mean_motion")
    if float(a) == 0.0:
        raise reject(InvalidInputError, "semi-major axis must be non-zero", "mean_motion", {"a": a})

    n = jnp.sqrt(gm / jnp.abs(a) ** 3)
    return from_radians(n, use_degrees)


def orbital_period(a: ArrayLike, gm: ArrayLike) -> Array:
    """Compute the period of an elliptical orbit.

    Args:
        a: Semi-major axis. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Orbital period. Units: *s*

    Raises:
        InvalidInputError: If ``a`` or ``gm`` is not positive.

    Examples:
        ```python
        from keplax.constants import GM_EARTH
        from keplax.orbits import orbital_period
        T = orbital_period(7000e3, GM_EARTH)
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    _check_elliptic_sma(a, "orbital_period")
    check_gm(gm, "orbital_period")
    return 2.0 * jnp.pi / mean_motion(a, gm)


def semi_latus_rectum(a: ArrayLike, e: ArrayLike) -> Array:
    """Compute the semi-latus rectum ``p = a (1 - e^2)``.

    Valid for elliptical (``a > 0``, ``e < 1``) and hyperbolic
    (``a < 0``, ``e > 1``) orbits.  Parabolic orbits are described by
    ``p`` directly.

    Args:
        a: Semi-major axis. Units: *m*
        e: Eccentricity. Dimensionless.

    Returns:
        Semi-latus rectum. Units: *m*

    Raises:
        InvalidInputError: If ``e`` is negative or the sign of ``a`` is
            inconsistent with ``e`` (``p <= 0``).
    """
    a = jnp.asarray(a, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    p = a * (1.0 - e**2)
    if float(e) < 0.0 or not float(p) > 0.0:
        raise reject(
            InvalidInputError,
            "semi-major axis sign is inconsistent with eccentricity",
            "semi_latus_rectum",
            {"a": a, "e": e},
        )
    return p


# ──────────────────────────────────────────────
# Elapsed time and mean anomaly
# ──────────────────────────────────────────────


def elapsed_time_to_mean_anomaly(
    dt: ArrayLike, a: ArrayLike, gm: ArrayLike, use_degrees: bool = False
) -> Array:
    """Compute the mean anomaly swept in an elapsed time on an ellipse.

    ``M = n * dt``; the result is not wrapped.

    Args:
        dt: Elapsed time since periapsis passage. Units: *s*
        a: Semi-major axis, ``a > 0``. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return the mean anomaly in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``a`` or ``gm`` is not positive.

    Examples:
        ```python
        from keplax.constants import GM_EARTH
        from keplax.orbits import elapsed_time_to_mean_anomaly
        M = elapsed_time_to_mean_anomaly(4000.0, 2500e3, GM_EARTH)
        ```
    """
    dt = jnp.asarray(dt, dtype=get_dtype())
    a = jnp.asarray(a, dtype=get_dtype())
    _check_elliptic_sma(a, "elapsed_time_to_mean_anomaly")
    check_gm(gm, "elapsed_time_to_mean_anomaly")
    return from_radians(mean_motion(a, gm) * dt, use_degrees)


def mean_anomaly_to_elapsed_time(
    anm_mean: ArrayLike, a: ArrayLike, gm: ArrayLike, use_degrees: bool = False
) -> Array:
    """Compute the time needed to sweep a mean anomaly on an ellipse.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        a: Semi-major axis, ``a > 0``. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret the mean anomaly as degrees.

    Returns:
        Elapsed time since periapsis passage. Units: *s*

    Raises:
        InvalidInputError: If ``a`` or ``gm`` is not positive.
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    a = jnp.asarray(a, dtype=get_dtype())
    _check_elliptic_sma(a, "mean_anomaly_to_elapsed_time")
    check_gm(gm, "mean_anomaly_to_elapsed_time")
    return to_radians(anm_mean, use_degrees) / mean_motion(a, gm)


def elapsed_time_to_hyperbolic_mean_anomaly(
    dt: ArrayLike, a: ArrayLike, gm: ArrayLike, use_degrees: bool = False
) -> Array:
    """Compute the hyperbolic mean anomaly swept in an elapsed time.

    ``M = n * dt`` with ``n = sqrt(gm / (-a)^3)``.

    Args:
        dt: Elapsed time since periapsis passage. Units: *s*
        a: Semi-major axis, ``a < 0``. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, return the mean anomaly in degrees.

    Returns:
        Hyperbolic mean anomaly. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``a`` is not negative or ``gm`` is not positive.

    Examples:
        ```python
        from keplax.constants import GM_EARTH
        from keplax.orbits import elapsed_time_to_hyperbolic_mean_anomaly
        M = elapsed_time_to_hyperbolic_mean_anomaly(1000.0, -40000e3, GM_EARTH)
        ```
    """
    dt = jnp.asarray(dt, dtype=get_dtype())
    a = jnp.asarray(a, dtype=get_dtype())
    _check_hyperbolic_sma(a, "elapsed_time_to_hyperbolic_mean_anomaly")
    check_gm(gm, "elapsed_time_to_hyperbolic_mean_anomaly")
    return from_radians(mean_motion(a, gm) * dt, use_degrees)


def hyperbolic_mean_anomaly_to_elapsed_time(
    anm_mean: ArrayLike, a: ArrayLike, gm: ArrayLike, use_degrees: bool = False
) -> Array:
    """Compute the time needed to sweep a hyperbolic mean anomaly.

    Args:
        anm_mean: Hyperbolic mean anomaly. Units: *rad* or *deg*
        a: Semi-major axis, ``a < 0``. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        use_degrees: If ``True``, interpret the mean anomaly as degrees.

    Returns:
        Elapsed time since periapsis passage. Units: *s*

    Raises:
        InvalidInputError: If ``a`` is not negative or ``gm`` is not positive.
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    a = jnp.asarray(a, dtype=get_dtype())
    _check_hyperbolic_sma(a, "hyperbolic_mean_anomaly_to_elapsed_time")
    check_gm(gm, "hyperbolic_mean_anomaly_to_elapsed_time")
    return to_radians(anm_mean, use_degrees) / mean_motion(a, gm)
