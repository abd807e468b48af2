"""
State estimate threaded through the Kalman recursion.
"""

from dataclasses import dataclass

import numpy as np

from ..common.arrays import DTYPE, as_matrix, as_vector, readonly
from ..errors import ShapeMismatch


@dataclass(frozen=True, eq=False)
class Estimate:
    """
    Gaussian state estimate: mean and covariance.

    Estimates are values. Both arrays are float32 copies marked read-only,
    so an estimate handed to an operation is never modified by it and stays
    valid if that operation fails.

    Parameters
    ----------
    mean : array_like
        State mean (S,) or (S, 1)
    covariance : array_like
        State covariance (S, S)

    Raises
    ------
    ShapeMismatch
        If the covariance is not square or does not match the mean
    InvalidInput
        If either array contains NaN or Inf
    """

    mean: np.ndarray
    covariance: np.ndarray

    def __post_init__(self):
        mean = np.asarray(self.mean)
        size = mean.shape[0] if mean.ndim > 0 else 1
        mean = as_vector(mean, size, 'mean')
        covariance = as_matrix(self.covariance, 'covariance', shape=(size, size))

        object.__setattr__(self, 'mean', readonly(mean))
        object.__setattr__(self, 'covariance', readonly(covariance))

    @classmethod
    def prior(cls, mean, variance):
        """
        Build an initial estimate with a diagonal covariance.

        A large variance expresses low confidence in the initial guess, so
        the first corrections lean towards the sensor readings.

        Parameters
        ----------
        mean : array_like
            Initial guess of the state (S,)
        variance : float or array_like
            Scalar variance for every state, or one variance per state (S,)

        Returns
        -------
        Estimate

        Examples
        --------
        >>> Estimate.prior(np.zeros(2), 500.0).covariance
        array([[500.,   0.],
               [  0., 500.]], dtype=float32)
        """
        mean = np.asarray(mean, dtype=DTYPE).reshape(-1)
        variance = np.broadcast_to(np.asarray(variance, dtype=DTYPE), mean.shape)
        return cls(mean, np.diag(variance))

    @property
    def dim_x(self):
        return self.mean.shape[0]

    def check_dimension(self, dim_x):
        """Raise ShapeMismatch unless this estimate has ``dim_x`` states."""
        if self.dim_x != dim_x:
            raise ShapeMismatch(
                f"estimate has {self.dim_x} states, model expects {dim_x}")

    def __eq__(self, other):
        if not isinstance(other, Estimate):
            return NotImplemented
        return (np.array_equal(self.mean, other.mean)
                and np.array_equal(self.covariance, other.covariance))

    __hash__ = None
