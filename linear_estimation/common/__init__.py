"""
Common utilities for the linear estimator.

Includes float32 array coercion, shape checks and covariance symmetrization.
"""

from .arrays import DTYPE, as_matrix, as_vector, check_finite, readonly, symmetrize

__all__ = [
    'DTYPE',
    'as_matrix',
    'as_vector',
    'check_finite',
    'readonly',
    'symmetrize',
]
