"""Angle and unit conversion helpers.

These helpers wrap the ``use_degrees`` convention used throughout
keplax, providing JAX-traceable degree/radian conversion via
``jnp.where``, and the canonical ``[0, 2π)`` wrap applied to every
angle documented as wrapped.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax.config import get_dtype


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def wrap_to_2pi(angle: ArrayLike) -> Array:
    """Wrap an angle to the interval [0, 2π).

    A tiny negative input rounds to exactly ``2π`` under ``jnp.mod``; such
    values are mapped to ``0`` so the result is always strictly below
    ``2π``.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Angle in radians, in ``[0, 2π)``.

    Examples:
        ```python
        from keplax.utils import wrap_to_2pi
        wrap_to_2pi(-0.5)
        ```
    """
    angle = jnp.asarray(angle, dtype=get_dtype())
    two_pi = jnp.asarray(2.0 * jnp.pi, dtype=get_dtype())
    wrapped = jnp.mod(angle, two_pi)
    return jnp.where(wrapped >= two_pi, jnp.zeros_like(wrapped), wrapped)
