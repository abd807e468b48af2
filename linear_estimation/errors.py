"""
Exceptions raised by the linear estimator.

All estimator failures derive from EstimatorError so a control loop can
catch them in one place. Each concrete error also derives from the numpy /
builtin exception a caller would naturally expect for that condition.
"""

import numpy as np


class EstimatorError(Exception):
    """Base class for every error raised by the estimator."""


class ShapeMismatch(EstimatorError, ValueError):
    """
    Matrix or vector dimensions are inconsistent with the model.

    Raised when a LinearModel is built from matrices whose shapes do not
    agree, or when an estimate, control input or measurement of the wrong
    length is passed to an operation.
    """


class SingularCovariance(EstimatorError, np.linalg.LinAlgError):
    """
    The innovation covariance could not be inverted.

    The caller's estimate is left untouched. Typical recovery is to keep
    the predict-only estimate for this tick, or to widen the noise model.
    """


class InvalidInput(EstimatorError, ValueError):
    """A matrix, estimate, control or measurement contains NaN or Inf."""
