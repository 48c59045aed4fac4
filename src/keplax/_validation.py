"""Domain checks shared by the conversion functions.

The checks run eagerly on concrete values and raise the matching
:mod:`keplax.errors` exception after logging it at ``ERROR`` level.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from keplax.config import get_singularity_tolerance
from keplax.errors import ConversionError, InvalidInputError

logger = logging.getLogger(__name__)


def reject(
    error_cls: type[ConversionError],
    message: str,
    conversion: str,
    inputs: Mapping[str, Any] | None = None,
) -> ConversionError:
    """Build, log and return a conversion error for the caller to raise."""
    error = error_cls(message, conversion, inputs)
    logger.error("%s", error)
    return error


def check_gm(gm, conversion: str) -> None:
    if not float(gm) > 0.0:
        raise reject(InvalidInputError, "gravitational parameter must be positive", conversion, {"gm": gm})


def check_elliptic_eccentricity(e, conversion: str) -> None:
    if not 0.0 <= float(e) < 1.0:
        raise reject(InvalidInputError, "eccentricity must lie in [0, 1)", conversion, {"e": e})


def check_hyperbolic_eccentricity(e, conversion: str) -> None:
    if not float(e) > 1.0:
        raise reject(InvalidInputError, "eccentricity must be greater than 1", conversion, {"e": e})


def check_inclination(i, conversion: str) -> None:
    # Radians. The slack admits pi rounded up to the working dtype.
    tol = get_singularity_tolerance()
    if not -tol <= float(i) <= math.pi + tol:
        raise reject(InvalidInputError, "inclination must lie in [0, pi]", conversion, {"i": i})


def conic_semi_latus_rectum(size, e, conversion: str):
    """Validate the size/eccentricity pair of an element set and return ``p``.

    ``size`` is the semi-latus rectum for parabolic orbits
    (``|e - 1| < tol``) and the semi-major axis otherwise.
    """
    tol = get_singularity_tolerance()
    if not float(e) >= 0.0:
        raise reject(InvalidInputError, "eccentricity must be non-negative", conversion, {"e": e})

    if abs(float(e) - 1.0) < tol:
        logger.debug("%s: parabolic orbit, treating x_oe[0] as semi-latus rectum", conversion)
        p = size
    else:
        p = size * (1.0 - e**2)

    if not float(p) > 0.0:
        raise reject(
            InvalidInputError,
            "size element is inconsistent with eccentricity",
            conversion,
            {"size": size, "e": e},
        )
    return p
