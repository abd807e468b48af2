"""
Visualization utilities for state estimation.
"""

from .estimates import plot_nis, plot_state_history

__all__ = [
    'plot_state_history',
    'plot_nis',
]
