"""Orbital state representation conversions.

This sub-module provides functions for converting between the three
orbital state representations supported by keplax:

- **Cartesian**: inertial position and velocity ``[x, y, z, vx, vy, vz]``
- **Keplerian**: orbital elements ``[a, e, i, Ω, ω, ν]``
- **USM**: Unified State Model elements ``[C, Rf1, Rf2, ε1, ε2, ε3, η]``
"""

from .keplerian import (
    state_cartesian_to_koe,
    state_koe_to_cartesian,
)
from .usm import (
    state_cartesian_to_usm,
    state_koe_to_usm,
    state_usm_to_cartesian,
    state_usm_to_koe,
)

__all__ = [
    "state_koe_to_cartesian",
    "state_cartesian_to_koe",
    "state_koe_to_usm",
    "state_usm_to_koe",
    "state_cartesian_to_usm",
    "state_usm_to_cartesian",
]
