"""Two-body orbit relations.

This sub-module provides functions for:

- **Anomaly conversions**: converting between true, eccentric, hyperbolic
  and mean anomalies, including Newton-Raphson solvers for Kepler's
  equation and its hyperbolic analogue.
- **Mean motion and period**: mean motion of elliptical and hyperbolic
  orbits, orbital period, and semi-latus rectum.
- **Elapsed time**: the linear relation between elapsed time and
  (hyperbolic) mean anomaly.
"""

from .anomalies import (
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_hyperbolic,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    anomaly_true_to_mean,
)
from .keplerian import (
    elapsed_time_to_hyperbolic_mean_anomaly,
    elapsed_time_to_mean_anomaly,
    hyperbolic_mean_anomaly_to_elapsed_time,
    mean_anomaly_to_elapsed_time,
    mean_motion,
    orbital_period,
    semi_latus_rectum,
)

__all__ = [
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
    "mean_motion",
    "orbital_period",
    "semi_latus_rectum",
    "elapsed_time_to_mean_anomaly",
    "mean_anomaly_to_elapsed_time",
    "elapsed_time_to_hyperbolic_mean_anomaly",
    "hyperbolic_mean_anomaly_to_elapsed_time",
]
