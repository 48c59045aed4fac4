"""Type definitions for the root finder.

:class:`RootResult` is a :class:`~typing.NamedTuple`, which JAX treats as
a pytree automatically, so it can be returned from ``jax.jit`` and
``jax.vmap`` transformed solves.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class RootResult(NamedTuple):
    """Outcome of a Newton-Raphson solve.

    Attributes:
        root: Last iterate. The root when ``converged`` is ``True``.
        residual: Residual ``f(root)``.
        iterations: Number of Newton steps taken.
        converged: ``True`` if ``|residual|`` fell below the tolerance
            within the iteration budget.
    """

    root: Array
    residual: Array
    iterations: Array
    converged: Array
