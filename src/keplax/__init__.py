"""
keplax is a small library of orbital state representation conversions implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AU,
    GM_EARTH,
    GM_SUN,
    GM_MOON,
    GM_MARS
)

from .config import (
    set_dtype,
    get_dtype,
    get_singularity_tolerance,
    get_convergence_tolerance,
    get_unit_norm_tolerance,
)

from .errors import (
    ConversionError,
    InvalidInputError,
    InvalidGeometryError,
    SingularGeometryError,
    NonConvergenceError,
)

from .utils import wrap_to_2pi

from .rotations import (
    Rx,
    Rz,
    rotation_orbital_to_inertial,
)

from .root_finding import (
    RootResult,
    newton_raphson,
    find_root,
)

from .orbits import (
    anomaly_true_to_eccentric,
    anomaly_eccentric_to_true,
    anomaly_eccentric_to_mean,
    anomaly_mean_to_eccentric,
    anomaly_true_to_mean,
    anomaly_mean_to_true,
    anomaly_true_to_hyperbolic,
    anomaly_hyperbolic_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_mean_to_hyperbolic,
    mean_motion,
    orbital_period,
    semi_latus_rectum,
    elapsed_time_to_mean_anomaly,
    mean_anomaly_to_elapsed_time,
    elapsed_time_to_hyperbolic_mean_anomaly,
    hyperbolic_mean_anomaly_to_elapsed_time,
)

from .coordinates import (
    state_koe_to_cartesian,
    state_cartesian_to_koe,
    state_koe_to_usm,
    state_usm_to_koe,
    state_cartesian_to_usm,
    state_usm_to_cartesian,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AU",
    "GM_EARTH",
    "GM_SUN",
    "GM_MOON",
    "GM_MARS",
    # Config
    "set_dtype",
    "get_dtype",
    "get_singularity_tolerance",
    "get_convergence_tolerance",
    "get_unit_norm_tolerance",
    # Errors
    "ConversionError",
    "InvalidInputError",
    "InvalidGeometryError",
    "SingularGeometryError",
    "NonConvergenceError",
    # Utils
    "wrap_to_2pi",
    # Rotations
    "Rx",
    "Rz",
    "rotation_orbital_to_inertial",
    # Root finding
    "RootResult",
    "newton_raphson",
    "find_root",
    # Anomalies
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_true",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_mean",
    "anomaly_mean_to_true",
    "anomaly_true_to_hyperbolic",
    "anomaly_hyperbolic_to_true",
    "anomaly_hyperbolic_to_mean",
    "anomaly_mean_to_hyperbolic",
    # Mean motion and elapsed time
    "mean_motion",
    "orbital_period",
    "semi_latus_rectum",
    "elapsed_time_to_mean_anomaly",
    "mean_anomaly_to_elapsed_time",
    "elapsed_time_to_hyperbolic_mean_anomaly",
    "hyperbolic_mean_anomaly_to_elapsed_time",
    # Coordinates
    "state_koe_to_cartesian",
    "state_cartesian_to_koe",
    "state_koe_to_usm",
    "state_usm_to_koe",
    "state_cartesian_to_usm",
    "state_usm_to_cartesian",
]
