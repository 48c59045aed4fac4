"""Conversions between true, eccentric, hyperbolic and mean anomalies.

Elliptic functions accept eccentricities in ``[0, 1)``; hyperbolic
functions accept eccentricities greater than 1.  An eccentricity outside
the branch domain raises :class:`~keplax.errors.InvalidInputError`.

Angles that are periodic (true and eccentric anomaly, the output of the
elliptic Kepler solver) are wrapped to ``[0, 2pi)``.  Mean anomalies
computed from Kepler's equation and hyperbolic anomalies are returned
unwrapped.

With ``use_degrees=True`` every anomaly argument and result, including the
hyperbolic anomaly and hyperbolic mean anomaly, is in degrees.

The inverse Kepler problems are solved with
:func:`keplax.root_finding.find_root`.  The validated functions in this
module run eagerly; they are not meant to be traced by ``jax.jit``.

References:
    1. D. Vallado, *Fundamentals of Astrodynamics and Applications
       (4th Ed.)*, 2010, Sec. 2.2.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, Sec. 2.2.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax._validation import (
    check_elliptic_eccentricity,
    check_hyperbolic_eccentricity,
    reject,
)
from keplax.config import DEFAULT_MAX_ITERATIONS, get_convergence_tolerance, get_dtype
from keplax.errors import InvalidInputError
from keplax.root_finding import find_root
from keplax.utils import from_radians, to_radians, wrap_to_2pi

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────
# Elliptic anomalies
# ──────────────────────────────────────────────


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e`` is outside ``[0, 1)``.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.

    Examples:
        ```python
        from keplax.orbits import anomaly_true_to_eccentric
        E = anomaly_true_to_eccentric(90.0, 0.1, use_degrees=True)
        ```
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_elliptic_eccentricity(e, "anomaly_true_to_eccentric")

    nu = to_radians(anm_true, use_degrees)
    E = jnp.arctan2(jnp.sin(nu) * jnp.sqrt(1.0 - e**2), jnp.cos(nu) + e)
    return from_radians(wrap_to_2pi(E), use_degrees)


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to true anomaly.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e`` is outside ``[0, 1)``.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.

    Examples:
        ```python
        from keplax.orbits import anomaly_eccentric_to_true
        nu = anomaly_eccentric_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_elliptic_eccentricity(e, "anomaly_eccentric_to_true")

    E = to_radians(anm_ecc, use_degrees)
    nu = jnp.arctan2(jnp.sin(E) * jnp.sqrt(1.0 - e**2), jnp.cos(E) - e)
    return from_radians(wrap_to_2pi(nu), use_degrees)


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.  The result is not
    wrapped.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e`` is outside ``[0, 1)``.

    References:
        O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
        Applications*, 2012. Eq. 2.65.

    Examples:
        ```python
        from keplax.orbits import anomaly_eccentric_to_mean
        M = anomaly_eccentric_to_mean(90.0, 0.1, use_degrees=True)
        ```
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_elliptic_eccentricity(e, "anomaly_eccentric_to_mean")

    E = to_radians(anm_ecc, use_degrees)
    M = E - e * jnp.sin(E)
    return from_radians(M, use_degrees)


def anomaly_mean_to_eccentric(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    tolerance: float | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    initial_guess: ArrayLike | None = None,
) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Solves Kepler's equation ``M = E - e * sin(E)`` for ``E`` with
    Newton-Raphson iteration.  ``M`` is first reduced to ``[0, 2pi)``.
    The default initial guess is ``M`` for ``e < 0.8`` and ``pi``
    otherwise.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input, output and ``initial_guess`` are
            in degrees.
        tolerance: Residual tolerance of the solver. Defaults to
            :func:`~keplax.config.get_convergence_tolerance`.
        max_iterations: Iteration cap of the solver.
        initial_guess: Starting eccentric anomaly.

    Returns:
        Eccentric anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e`` is outside ``[0, 1)``.
        NonConvergenceError: If the solver does not converge within
            ``max_iterations``.

    Examples:
        ```python
        from keplax.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(84.27, 0.1, use_degrees=True)
        ```
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_elliptic_eccentricity(e, "anomaly_mean_to_eccentric")

    M = wrap_to_2pi(to_radians(anm_mean, use_degrees))

    if initial_guess is None:
        E0 = jnp.where(e < 0.8, M, jnp.pi)
    else:
        E0 = to_radians(jnp.asarray(initial_guess, dtype=get_dtype()), use_degrees)

    E = find_root(
        lambda E: E - e * jnp.sin(E) - M,
        E0,
        fprime=lambda E: 1.0 - e * jnp.cos(E),
        tolerance=tolerance,
        max_iterations=max_iterations,
        conversion="anomaly_mean_to_eccentric",
        inputs={"M": M, "e": e},
    )
    return from_radians(wrap_to_2pi(E), use_degrees)


def anomaly_true_to_mean(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to mean anomaly.

    Composite conversion: true -> eccentric -> mean.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Examples:
        ```python
        from keplax.orbits import anomaly_true_to_mean
        M = anomaly_true_to_mean(90.0, 0.1, use_degrees=True)
        ```
    """
    return anomaly_eccentric_to_mean(
        anomaly_true_to_eccentric(anm_true, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_mean_to_true(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to true anomaly.

    Composite conversion: mean -> eccentric -> true.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Examples:
        ```python
        from keplax.orbits import anomaly_mean_to_true
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, use_degrees),
        e,
        use_degrees,
    )


# ──────────────────────────────────────────────
# Hyperbolic anomalies
# ──────────────────────────────────────────────


def anomaly_true_to_hyperbolic(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to hyperbolic anomaly.

    Uses ``sinh(H) = sqrt(e^2 - 1) sin(nu) / (1 + e cos(nu))``.  The true
    anomaly must lie between the asymptotes, ``1 + e cos(nu) > 0``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic anomaly, with the sign of ``sin(nu)``. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e <= 1`` or ``nu`` lies beyond the asymptotes.

    Examples:
        ```python
        from keplax.orbits import anomaly_true_to_hyperbolic
        H = anomaly_true_to_hyperbolic(0.5291, 3.0)
        ```
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_hyperbolic_eccentricity(e, "anomaly_true_to_hyperbolic")

    nu = to_radians(anm_true, use_degrees)
    denom = 1.0 + e * jnp.cos(nu)
    if not bool(jnp.all(denom > 0.0)):
        raise reject(
            InvalidInputError,
            "true anomaly lies beyond the asymptotes of the hyperbola",
            "anomaly_true_to_hyperbolic",
            {"nu": nu, "e": e},
        )

    H = jnp.arcsinh(jnp.sqrt(e**2 - 1.0) * jnp.sin(nu) / denom)
    return from_radians(H, use_degrees)


def anomaly_hyperbolic_to_true(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic anomaly to true anomaly.

    Args:
        anm_hyp: Hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``[0, 2pi)``. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e <= 1``.

    Examples:
        ```python
        from keplax.orbits import anomaly_hyperbolic_to_true
        nu = anomaly_hyperbolic_to_true(0.3879, 3.0)
        ```
    """
    anm_hyp = jnp.asarray(anm_hyp, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_hyperbolic_eccentricity(e, "anomaly_hyperbolic_to_true")

    H = to_radians(anm_hyp, use_degrees)
    nu = jnp.arctan2(jnp.sqrt(e**2 - 1.0) * jnp.sinh(H), e - jnp.cosh(H))
    return from_radians(wrap_to_2pi(nu), use_degrees)


def anomaly_hyperbolic_to_mean(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic anomaly to hyperbolic mean anomaly.

    Applies the hyperbolic Kepler equation ``M = e * sinh(H) - H``.

    Args:
        anm_hyp: Hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic mean anomaly (not wrapped). Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e <= 1``.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 56, eq. 2-38, 2010.

    Examples:
        ```python
        from keplax.orbits import anomaly_hyperbolic_to_mean
        M = anomaly_hyperbolic_to_mean(1.6, 2.4)
        ```
    """
    anm_hyp = jnp.asarray(anm_hyp, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_hyperbolic_eccentricity(e, "anomaly_hyperbolic_to_mean")

    H = to_radians(anm_hyp, use_degrees)
    M = e * jnp.sinh(H) - H
    return from_radians(M, use_degrees)


def anomaly_mean_to_hyperbolic(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    tolerance: float | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    initial_guess: ArrayLike | None = None,
) -> Array:
    """Convert hyperbolic mean anomaly to hyperbolic anomaly.

    Solves ``M = e * sinh(H) - H`` for ``H`` with Newton-Raphson
    iteration, starting from ``asinh(M / e)`` unless ``initial_guess`` is
    given.

    Args:
        anm_mean: Hyperbolic mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input, output and ``initial_guess`` are
            in degrees.
        tolerance: Residual tolerance of the solver. Defaults to
            :func:`~keplax.config.get_convergence_tolerance`
            scaled by ``max(1, |M|)``.
        max_iterations: Iteration cap of the solver.
        initial_guess: Starting hyperbolic anomaly.

    Returns:
        Hyperbolic anomaly. Units: *rad* or *deg*

    Raises:
        InvalidInputError: If ``e <= 1``.
        NonConvergenceError: If the solver does not converge within
            ``max_iterations``.

    Examples:
        ```python
        from keplax.orbits import anomaly_mean_to_hyperbolic
        H = anomaly_mean_to_hyperbolic(235.4, 2.4, use_degrees=True)
        ```
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    check_hyperbolic_eccentricity(e, "anomaly_mean_to_hyperbolic")

    M = to_radians(anm_mean, use_degrees)
    if tolerance is None:
        # e * sinh(H) carries a rounding error proportional to |M|
        tolerance = get_convergence_tolerance() * jnp.maximum(1.0, jnp.abs(M))

    if initial_guess is None:
        H0 = jnp.arcsinh(M / e)
    else:
        H0 = to_radians(jnp.asarray(initial_guess, dtype=get_dtype()), use_degrees)

    H = find_root(
        lambda H: e * jnp.sinh(H) - H - M,
        H0,
        fprime=lambda H: e * jnp.cosh(H) - 1.0,
        tolerance=tolerance,
        max_iterations=max_iterations,
        conversion="anomaly_mean_to_hyperbolic",
        inputs={"M": M, "e": e},
    )
    return from_radians(H, use_degrees)
