"""
Linear Kalman filter.

The recursion is split into pure functions of (model, estimate, inputs):

- predict(model, estimate, u) extrapolates one fixed tick forward
- correct(model, estimate, z) fuses a sensor reading into a prediction
- step(model, estimate, u, z) is predict followed by correct

None of them keep state between calls; each returns a new Estimate.
KalmanFilter wraps them for callers who prefer an object that holds the
current estimate, with an API close to FilterPy's.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..common.arrays import DTYPE, as_vector, symmetrize
from ..errors import SingularCovariance
from .estimate import Estimate


_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Innovation:
    """
    Intermediate quantities of one correction.

    Attributes
    ----------
    residual : np.ndarray
        Innovation y = z - H x (M,)
    covariance : np.ndarray
        Innovation covariance S = H P H^T + R (M, M)
    gain : np.ndarray
        Kalman gain K = P H^T S^-1 (S, M)
    """

    residual: np.ndarray
    covariance: np.ndarray
    gain: np.ndarray

    @property
    def nis(self):
        """Normalized innovation squared y^T S^-1 y."""
        return float(self.residual @ np.linalg.solve(self.covariance, self.residual))


def predict(model, estimate, control=None):
    """
    Advance an estimate by one tick without a sensor reading.

    Used at cold start and for any tick that has no reading::

        x' = F x + B u
        P' = F P F^T + Q

    Parameters
    ----------
    model : LinearModel
        Process and sensor model
    estimate : Estimate
        Current estimate
    control : array_like, optional
        Control input (I,). None applies no control (zero vector).

    Returns
    -------
    Estimate
        Predicted estimate

    Raises
    ------
    ShapeMismatch
        If the estimate or control do not match the model
    InvalidInput
        If the control is not finite, or the prediction overflows
    """
    estimate.check_dimension(model.dim_x)

    if control is None:
        control = np.zeros(model.dim_u, dtype=DTYPE)
    else:
        control = as_vector(control, model.dim_u, 'control')

    F = model.prediction
    mean = F @ estimate.mean + model.control @ control
    covariance = F @ estimate.covariance @ F.T + model.process_noise

    return Estimate(mean, covariance)


def innovate(model, predicted, measurement):
    """
    Compare a sensor reading with a predicted estimate.

    Parameters
    ----------
    model : LinearModel
        Process and sensor model
    predicted : Estimate
        Predicted estimate
    measurement : array_like
        Sensor reading (M,)

    Returns
    -------
    Innovation
        Residual, innovation covariance and Kalman gain

    Raises
    ------
    SingularCovariance
        If the innovation covariance cannot be inverted
    ShapeMismatch
        If the estimate or measurement do not match the model
    InvalidInput
        If the measurement is not finite
    """
    predicted.check_dimension(model.dim_x)
    z = as_vector(measurement, model.dim_z, 'measurement')

    H = model.measurement
    P = predicted.covariance

    residual = z - H @ predicted.mean
    covariance = H @ P @ H.T + model.sensor_noise
    gain = P @ H.T @ _invert(covariance)

    return Innovation(residual, covariance, gain)


def correct(model, predicted, measurement):
    """
    Fuse a sensor reading into a predicted estimate.

    ::

        K  = P H^T (H P H^T + R)^-1
        x' = x + K (z - H x)
        P' = (I - K H) P, symmetrized

    Parameters
    ----------
    model : LinearModel
        Process and sensor model
    predicted : Estimate
        Predicted estimate, left untouched
    measurement : array_like
        Sensor reading (M,)

    Returns
    -------
    Estimate
        Corrected estimate

    Raises
    ------
    SingularCovariance
        If the innovation covariance cannot be inverted
    ShapeMismatch
        If the estimate or measurement do not match the model
    InvalidInput
        If the measurement is not finite
    """
    innovation = innovate(model, predicted, measurement)
    return apply_innovation(model, predicted, innovation)


def step(model, estimate, control, measurement):
    """
    Run one full tick: predict with ``control``, then correct with
    ``measurement``.

    Equivalent to ``correct(model, predict(model, estimate, control),
    measurement)`` and raises the same errors.
    """
    return correct(model, predict(model, estimate, control), measurement)


def apply_innovation(model, predicted, innovation):
    """Return the corrected estimate for an already computed innovation."""
    K = innovation.gain
    mean = predicted.mean + K @ innovation.residual

    I_KH = np.eye(model.dim_x, dtype=DTYPE) - K @ model.measurement
    covariance = symmetrize(I_KH @ predicted.covariance)

    return Estimate(mean, covariance)


def _invert(matrix):
    try:
        inverse = np.linalg.inv(matrix)
    except np.linalg.LinAlgError as exc:
        _LOG.debug("Innovation covariance not invertible: %s", exc)
        raise SingularCovariance("innovation covariance is singular") from exc

    if not np.all(np.isfinite(inverse)):
        _LOG.debug("Innovation covariance inverse is not finite")
        raise SingularCovariance("innovation covariance is singular")

    return inverse


class KalmanFilter:
    """
    Linear Kalman filter holding its current estimate.

    A thin stateful wrapper over predict / correct / step for control loops
    that keep the filter as an object. Every call replaces the held
    estimate with a new one; a failed update leaves it unchanged.

    Attributes
    ----------
    model : LinearModel
        Process and sensor model
    estimate : Estimate
        Current estimate
    innovation : Innovation or None
        Innovation of the last successful update

    Examples
    --------
    >>> kf = KalmanFilter(model, Estimate.prior(np.zeros(2), 500.0))
    >>> kf.predict()
    >>> for u, z in readings:
    ...     kf.step(u, z)
    >>> kf.x
    """

    def __init__(self, model, estimate):
        self.model = model
        self.estimate = estimate
        self.innovation = None

    @property
    def estimate(self):
        return self._estimate

    @estimate.setter
    def estimate(self, estimate):
        estimate.check_dimension(self.model.dim_x)
        self._estimate = estimate

    @property
    def x(self):
        """State mean (read-only)."""
        return self._estimate.mean

    @property
    def P(self):
        """State covariance (read-only)."""
        return self._estimate.covariance

    def predict(self, u=None):
        """
        Predict step.

        Parameters
        ----------
        u : array_like, optional
            Control input vector. None applies no control.

        Returns
        -------
        Estimate
            The new current estimate
        """
        self._estimate = predict(self.model, self._estimate, u)
        return self._estimate

    def update(self, z):
        """
        Update step.

        Parameters
        ----------
        z : array_like
            Measurement vector

        Returns
        -------
        Estimate
            The new current estimate

        Raises
        ------
        SingularCovariance
            The held estimate is left as it was
        """
        innovation = innovate(self.model, self._estimate, z)
        self._estimate = apply_innovation(self.model, self._estimate, innovation)
        self.innovation = innovation
        return self._estimate

    def step(self, u, z):
        """Predict with ``u`` and update with ``z`` as a single transaction."""
        predicted = predict(self.model, self._estimate, u)
        innovation = innovate(self.model, predicted, z)
        self._estimate = apply_innovation(self.model, predicted, innovation)
        self.innovation = innovation
        return self._estimate

    def get_innovation(self):
        """
        Get the innovation (residual) from the last update.

        Returns
        -------
        np.ndarray or None
            Innovation vector y, None before the first update
        """
        return None if self.innovation is None else self.innovation.residual

    def get_innovation_covariance(self):
        """
        Get the innovation covariance from the last update.

        Returns
        -------
        np.ndarray or None
            Innovation covariance matrix S, None before the first update
        """
        return None if self.innovation is None else self.innovation.covariance
