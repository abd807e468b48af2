"""
Batch driver for the linear Kalman filter.

Runs the per-tick recursion over recorded control inputs and sensor
readings and keeps the whole history, for offline evaluation, metrics and
plots.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..common.arrays import DTYPE
from ..errors import ShapeMismatch, SingularCovariance
from .estimate import Estimate
from .linear import apply_innovation, innovate, predict


_LOG = logging.getLogger(__name__)

SINGULAR_POLICIES = ('raise', 'skip')


@dataclass(frozen=True, eq=False)
class EstimateHistory:
    """
    Filter output over N ticks.

    Attributes
    ----------
    means : np.ndarray
        State means after each tick (N, dim_x)
    covariances : np.ndarray
        State covariances after each tick (N, dim_x, dim_x)
    innovations : np.ndarray
        Innovation vectors (N, dim_z), NaN on ticks without a correction
    innovation_covariances : np.ndarray
        Innovation covariances (N, dim_z, dim_z), NaN on ticks without a
        correction
    accepted : np.ndarray
        True where the reading was fused (N,)
    initial : Estimate
        Estimate before the first tick
    """

    means: np.ndarray
    covariances: np.ndarray
    innovations: np.ndarray
    innovation_covariances: np.ndarray
    accepted: np.ndarray
    initial: Estimate

    def __len__(self):
        return len(self.means)

    def __getitem__(self, k):
        """Estimate after tick ``k``."""
        return Estimate(self.means[k], self.covariances[k])

    @property
    def final(self):
        """Estimate after the last tick, or the initial one for an empty run."""
        if len(self) == 0:
            return self.initial
        return self[-1]


def run_filter(model, initial, controls, measurements, on_singular='raise'):
    """
    Run predict/correct over a recorded sequence.

    Tick k predicts with ``controls[k]`` and corrects with
    ``measurements[k]``.

    Parameters
    ----------
    model : LinearModel
        Process and sensor model
    initial : Estimate
        Estimate before the first tick
    controls : array_like or None
        Control inputs (N, dim_u). None applies no control on every tick.
    measurements : array_like
        Sensor readings (N, dim_z)
    on_singular : {'raise', 'skip'}, optional
        What to do when a correction has a singular innovation covariance.
        'raise' propagates SingularCovariance. 'skip' keeps the predicted
        estimate for that tick and marks it as not accepted.

    Returns
    -------
    EstimateHistory
        Estimates after each tick

    Raises
    ------
    ValueError
        If ``on_singular`` is not a known policy
    ShapeMismatch
        If controls and measurements have different lengths
    SingularCovariance
        With ``on_singular='raise'``
    """
    if on_singular not in SINGULAR_POLICIES:
        raise ValueError(
            f"on_singular must be one of {SINGULAR_POLICIES}, got {on_singular!r}")

    n_ticks = len(measurements)
    if controls is not None and len(controls) != n_ticks:
        raise ShapeMismatch(
            f"got {len(controls)} control inputs for {n_ticks} measurements")

    dim_x, dim_z = model.dim_x, model.dim_z
    initial.check_dimension(dim_x)

    means = np.zeros((n_ticks, dim_x), dtype=DTYPE)
    covariances = np.zeros((n_ticks, dim_x, dim_x), dtype=DTYPE)
    innovations = np.full((n_ticks, dim_z), np.nan, dtype=DTYPE)
    innovation_covariances = np.full((n_ticks, dim_z, dim_z), np.nan, dtype=DTYPE)
    accepted = np.zeros(n_ticks, dtype=bool)

    estimate = initial
    for k in range(n_ticks):
        u = None if controls is None else controls[k]
        predicted = predict(model, estimate, u)

        try:
            innovation = innovate(model, predicted, measurements[k])
        except SingularCovariance:
            if on_singular == 'raise':
                raise
            _LOG.warning("Tick %d: singular innovation covariance, "
                         "keeping the predicted estimate", k)
            estimate = predicted
        else:
            estimate = apply_innovation(model, predicted, innovation)
            innovations[k] = innovation.residual
            innovation_covariances[k] = innovation.covariance
            accepted[k] = True

        means[k] = estimate.mean
        covariances[k] = estimate.covariance

    _LOG.debug("Filtered %d ticks, %d corrections skipped",
               n_ticks, n_ticks - int(np.count_nonzero(accepted)))

    return EstimateHistory(means, covariances, innovations,
                           innovation_covariances, accepted, initial)
