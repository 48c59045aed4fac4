"""Exceptions raised by the keplax conversions.

Every exception records the public conversion that failed and the inputs
that triggered the failure.  Each class also derives from the closest
built-in exception (``ValueError``, ``ArithmeticError``, ``RuntimeError``).
"""

from __future__ import annotations

from typing import Any, Mapping


def _format_value(value: Any) -> str:
    try:
        return f"{float(value):.17g}"
    except (TypeError, ValueError):
        return repr(value)


class ConversionError(Exception):
    """Base class for failures of an orbital-state conversion.

    Args:
        message (str): Human-readable description of the failure.
        conversion (str): Name of the public function that failed.
        inputs (Mapping[str, Any] | None): Offending input names and values.

    Attributes:
        conversion (str): Name of the public function that failed.
        inputs (dict[str, Any]): Offending input names and values.
    """

    def __init__(
        self,
        message: str,
        conversion: str,
        inputs: Mapping[str, Any] | None = None,
    ) -> None:
        self.conversion = conversion
        self.inputs = dict(inputs or {})
        details = ", ".join(f"{k}={_format_value(v)}" for k, v in self.inputs.items())
        text = f"{conversion}: {message}"
        if details:
            text = f"{text} ({details})"
        super().__init__(text)


class InvalidInputError(ConversionError, ValueError):
    """Raised when an element lies outside the domain of the requested branch."""


class InvalidGeometryError(ConversionError, ValueError):
    """Raised for a degenerate (zero-radius or rectilinear) Cartesian state."""


class SingularGeometryError(ConversionError, ArithmeticError):
    """Raised when the representation is singular for the given orbit.

    The only case is the pure-retrograde orbit (``i = pi``) in the USM to
    Keplerian conversion, where the auxiliary longitude is undefined.
    """


class NonConvergenceError(ConversionError, RuntimeError):
    """Raised when the root finder exhausts its iteration budget.

    Attributes:
        root (float): Last iterate.
        residual (float): Residual ``f(root)`` at the last iterate.
        iterations (int): Number of Newton steps taken.
    """

    def __init__(
        self,
        message: str,
        conversion: str,
        inputs: Mapping[str, Any] | None = None,
        root: Any = None,
        residual: Any = None,
        iterations: int = 0,
    ) -> None:
        self.root = root
        self.residual = residual
        self.iterations = iterations
        merged = dict(inputs or {})
        merged.update(root=root, residual=residual, iterations=iterations)
        super().__init__(message, conversion, merged)
