"""
Linear State Estimation Library

A discrete-time linear Kalman filter for constant-rate control loops
(robot and vehicle state estimation). The model is fixed at construction;
the recursion is a set of pure predict / correct / step functions over
immutable float32 estimates, with a FilterPy-inspired stateful wrapper.

License: MIT
"""

__version__ = "1.0.0"

from .errors import EstimatorError, InvalidInput, ShapeMismatch, SingularCovariance
from .filters.model import LinearModel
from .filters.estimate import Estimate
from .filters.linear import KalmanFilter, correct, predict, step
from .filters.runner import EstimateHistory, run_filter

__all__ = [
    'EstimatorError',
    'InvalidInput',
    'ShapeMismatch',
    'SingularCovariance',
    'LinearModel',
    'Estimate',
    'KalmanFilter',
    'correct',
    'predict',
    'step',
    'EstimateHistory',
    'run_filter',
]
