"""
Linear state estimation filters.

This module provides:
- LinearModel, the fixed process and sensor model
- Estimate, the (mean, covariance) pair threaded through the recursion
- predict / correct / step, the pure Kalman filter operations
- KalmanFilter, a stateful wrapper with a FilterPy-style API
- run_filter, a batch driver that records the estimate history
"""

from .model import LinearModel
from .estimate import Estimate
from .linear import (Innovation, KalmanFilter, apply_innovation, correct,
                     innovate, predict, step)
from .runner import EstimateHistory, run_filter

__all__ = [
    'LinearModel',
    'Estimate',
    'Innovation',
    'KalmanFilter',
    'apply_innovation',
    'correct',
    'innovate',
    'predict',
    'step',
    'EstimateHistory',
    'run_filter',
]
