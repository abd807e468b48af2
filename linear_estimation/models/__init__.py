"""
Kinematic models for state estimation.

This module provides ready-made linear models (transition, control,
measurement and noise matrices) that can be used with the filters.
"""

from .kinematics import (accelerating_body_model, constant_acceleration_model,
                         constant_velocity_model, discrete_white_noise)

__all__ = [
    'accelerating_body_model',
    'constant_acceleration_model',
    'constant_velocity_model',
    'discrete_white_noise',
]
