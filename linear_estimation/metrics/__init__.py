"""
Performance metrics for state estimation evaluation.
"""

from .performance import (chi2_bounds, compute_all_metrics, history_metrics, mae,
                          nees, nis, print_metrics, rmse)

__all__ = [
    'rmse',
    'mae',
    'nees',
    'nis',
    'chi2_bounds',
    'compute_all_metrics',
    'history_metrics',
    'print_metrics',
]
