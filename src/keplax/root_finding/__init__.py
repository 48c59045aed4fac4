"""Scalar root finding.

Provides the Newton-Raphson solver used to invert Kepler's equation and
its hyperbolic analogue:

- :func:`newton_raphson` -- traceable kernel returning a :class:`RootResult`
- :func:`find_root` -- eager wrapper raising
  :class:`~keplax.errors.NonConvergenceError` on failure
"""

from keplax.root_finding._types import RootResult
from keplax.root_finding.newton_raphson import find_root, newton_raphson

__all__ = [
    "RootResult",
    "find_root",
    "newton_raphson",
]
