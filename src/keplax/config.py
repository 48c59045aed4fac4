"""Module-wide floating-point precision and tolerance configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout keplax.  The default is ``jnp.float32`` for GPU/TPU
compatibility.  Switching to ``jnp.float64`` automatically enables
JAX's 64-bit mode (``jax_enable_x64``).

The tolerances used to detect degenerate orbit geometry and to stop the
Newton-Raphson root finder scale with the configured dtype, so that a
float32 computation does not chase precision it cannot represent.  All
tolerances are compared against dimensionless quantities (eccentricity,
sine of inclination, quaternion components, anomaly residuals).

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32

DEFAULT_MAX_ITERATIONS = 100
"""Default iteration cap of the Newton-Raphson root finder."""


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for keplax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype


def get_singularity_tolerance() -> float:
    """Return the threshold used to detect near-degenerate orbit geometry.

    Eccentricities below this value are treated as circular, ``|e - 1|``
    below it as parabolic, a node vector (sine of inclination) below it as
    equatorial, and USM quaternion components below it as zero.

    - ``float64``:  1e-12
    - ``float32``:  1e-6
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Dimensionless singularity tolerance.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-6
    # float16 and bfloat16
    return 1e-3


def get_convergence_tolerance() -> float:
    """Return the default residual tolerance of the root finder.

    - ``float64``:  1e-12
    - ``float32``:  1e-5
    - ``float16``:  1e-2
    - ``bfloat16``: 1e-2

    Returns:
        float: Absolute tolerance on ``|f(x)|``.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-5
    return 1e-2


def get_unit_norm_tolerance() -> float:
    """Return the tolerance on ``|q| - 1`` for USM attitude quaternions.

    - ``float64``:  1e-9
    - ``float32``:  1e-5
    - ``float16``:  1e-2
    - ``bfloat16``: 1e-2

    Returns:
        float: Absolute tolerance on the quaternion norm.
    """
    if _dtype == jnp.float64:
        return 1e-9
    if _dtype == jnp.float32:
        return 1e-5
    return 1e-2
