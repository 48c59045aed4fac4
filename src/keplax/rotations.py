"""Elementary frame rotations and the orbital-to-inertial rotation.

The elementary matrices rotate the *frame* (passive convention): for a
vector expressed in frame A, ``Rz(θ) @ v`` expresses it in a frame B
rotated by θ about the common z-axis.  The orbital-to-inertial rotation
is the transpose chain of the classical 3-1-3 sequence
(RAAN, inclination, argument of latitude).

References:

    1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
       Applications*, 2012, p.27.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from keplax.config import get_dtype
from keplax.utils import to_radians


def Rx(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: Rotation matrix of shape ``(3, 3)``.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[1.0,  0.0,  0.0],
                      [0.0,   +c,   +s],
                      [0.0,   -s,   +c]], dtype=get_dtype())


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: Rotation matrix of shape ``(3, 3)``.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,   +s,  0.0],
                      [ -s,   +c,  0.0],
                      [0.0,  0.0,  1.0]], dtype=get_dtype())


def rotation_orbital_to_inertial(
    raan: ArrayLike,
    inclination: ArrayLike,
    arg_latitude: ArrayLike,
) -> Array:
    """Rotation from the rotating orbital frame to the inertial frame.

    The orbital frame has its x-axis along the radius vector, its z-axis
    along the angular momentum and its y-axis completing the triad (the
    transverse direction).  The result is
    ``Rz(raan)ᵀ @ Rx(inclination)ᵀ @ Rz(arg_latitude)ᵀ``.

    Args:
        raan (ArrayLike): Right ascension of the ascending node. Units: *rad*
        inclination (ArrayLike): Inclination. Units: *rad*
        arg_latitude (ArrayLike): Argument of latitude ``ω + ν``. Units: *rad*

    Returns:
        Array: Rotation matrix of shape ``(3, 3)``.
    """
    return Rz(raan).T @ Rx(inclination).T @ Rz(arg_latitude).T
