"""Newton-Raphson root finder.

:func:`newton_raphson` is the traceable kernel: it runs the iteration in a
``jax.lax.while_loop`` and reports the outcome in a :class:`RootResult`
without raising, so it can be used under ``jax.jit`` and ``jax.vmap``.
:func:`find_root` is the eager wrapper used by the anomaly conversions; it
turns a failed solve into a :class:`~keplax.errors.NonConvergenceError`.

Neither function holds state between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax._validation import reject
from keplax.config import DEFAULT_MAX_ITERATIONS, get_convergence_tolerance, get_dtype
from keplax.errors import InvalidInputError, NonConvergenceError
from keplax.root_finding._types import RootResult

logger = logging.getLogger(__name__)


def newton_raphson(
    f: Callable[[Array], Array],
    x0: ArrayLike,
    fprime: Callable[[Array], Array] | None = None,
    tolerance: float | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> RootResult:
    """Solve ``f(x) = 0`` for a scalar ``x`` with Newton-Raphson iteration.

    Iterates ``x <- x - f(x) / f'(x)`` until ``|f(x)| < tolerance`` or
    ``max_iterations`` steps have been taken.  A non-finite residual
    stops the loop and is reported as not converged.

    Args:
        f: Residual function of one scalar argument.
        x0: Initial guess.
        fprime: Derivative of ``f``. Defaults to ``jax.grad(f)``.
        tolerance: Absolute tolerance on ``|f(x)|``. Defaults to
            :func:`~keplax.config.get_convergence_tolerance`.
        max_iterations: Maximum number of Newton steps.

    Returns:
        RootResult: Last iterate, its residual, the step count and the
            convergence flag.

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.root_finding import newton_raphson
        result = newton_raphson(lambda x: x**2 - 2.0, 1.0)
        result.root
        ```
    """
    if fprime is None:
        fprime = jax.grad(f)
    if tolerance is None:
        tolerance = get_convergence_tolerance()

    x0 = jnp.asarray(x0, dtype=get_dtype())

    def residual(x):
        return jnp.asarray(f(x), dtype=x.dtype)

    def cond(carry):
        _, fx, k = carry
        return (jnp.abs(fx) >= tolerance) & (k < max_iterations)

    def step(carry):
        x, fx, k = carry
        x = jnp.asarray(x - fx / fprime(x), dtype=x.dtype)
        return x, residual(x), k + 1

    init = (x0, residual(x0), jnp.asarray(0, dtype=jnp.int32))
    x, fx, k = jax.lax.while_loop(cond, step, init)

    return RootResult(root=x, residual=fx, iterations=k, converged=jnp.abs(fx) < tolerance)


def find_root(
    f: Callable[[Array], Array],
    x0: ArrayLike,
    fprime: Callable[[Array], Array] | None = None,
    tolerance: float | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    conversion: str = "find_root",
    inputs: Mapping[str, Any] | None = None,
) -> Array:
    """Solve ``f(x) = 0`` and raise if the solve fails.

    Eager counterpart of :func:`newton_raphson`; the inputs must be
    concrete (not traced).

    Args:
        f: Residual function of one scalar argument.
        x0: Initial guess.
        fprime: Derivative of ``f``. Defaults to ``jax.grad(f)``.
        tolerance: Absolute tolerance on ``|f(x)|``.
        max_iterations: Maximum number of Newton steps. Must be positive.
        conversion: Name of the calling conversion, used in error messages.
        inputs: Inputs of the calling conversion, used in error messages.

    Returns:
        Array: The root.

    Raises:
        InvalidInputError: If ``max_iterations`` is not positive.
        NonConvergenceError: If the residual did not fall below the
            tolerance within ``max_iterations`` steps, or became
            non-finite.

    Examples:
        ```python
        import jax.numpy as jnp
        from keplax.root_finding import find_root
        x = find_root(jnp.cos, 1.0)
        ```
    """
    if max_iterations < 1:
        raise reject(
            InvalidInputError,
            "max_iterations must be positive",
            conversion,
            {"max_iterations": max_iterations},
        )

    result = newton_raphson(f, x0, fprime, tolerance, max_iterations)

    finite = bool(jnp.isfinite(result.root)) and bool(jnp.isfinite(result.residual))
    if not (finite and bool(result.converged)):
        if finite:
            message = f"root finder did not converge within {max_iterations} iterations"
        else:
            message = f"root finder produced a non-finite iterate after {int(result.iterations)} iterations"
        logger.error(
            "%s: Newton-Raphson failed after %d iterations (root=%s, residual=%s)",
            conversion,
            int(result.iterations),
            result.root,
            result.residual,
        )
        raise NonConvergenceError(
            message,
            conversion,
            inputs,
            root=float(result.root),
            residual=float(result.residual),
            iterations=int(result.iterations),
        )

    logger.debug("%s: converged in %d iterations", conversion, int(result.iterations))
    return result.root
