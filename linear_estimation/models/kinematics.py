"""
Kinematic models for the linear Kalman filter.

Builders for the textbook constant-velocity and constant-acceleration
trackers, discretized for a fixed time step, with position-only sensors.
Each builder returns a LinearModel ready to be filtered.

State layout is axis-major: for ``axes=2`` a constant-acceleration state is
[x, vx, ax, y, vy, ay].
"""

import numpy as np
from scipy.linalg import block_diag

from ..filters.model import LinearModel


def discrete_white_noise(order, dt, var=1.0, block_size=1):
    """
    Piecewise white noise process covariance Q.

    Models an unknown, constant-over-one-tick acceleration (order 2) or
    jerk-like change of acceleration (order 3) with variance ``var``.

    Parameters
    ----------
    order : int
        Number of kinematic states per axis: 2 for (position, velocity),
        3 for (position, velocity, acceleration)
    dt : float
        Time step
    var : float, optional
        Variance of the white noise
    block_size : int, optional
        Number of independent axes; the per-axis block is repeated along
        the diagonal

    Returns
    -------
    np.ndarray
        Process noise covariance (order * block_size, order * block_size)

    Examples
    --------
    >>> Q = discrete_white_noise(2, dt=0.1, var=0.1)
    >>> Q.shape
    (2, 2)
    """
    if order == 2:
        Q = np.array([[dt**4/4, dt**3/2],
                      [dt**3/2, dt**2]])
    elif order == 3:
        Q = np.array([[dt**4/4, dt**3/2, dt**2/2],
                      [dt**3/2, dt**2,   dt],
                      [dt**2/2, dt,      1.0]])
    else:
        raise ValueError(f"Order {order} not supported. Use 2 or 3.")

    if block_size < 1:
        raise ValueError(f"block_size must be at least 1, got {block_size}")

    return block_diag(*[Q * var] * block_size)


def constant_velocity_model(dt, sensor_variance, process_variance, axes=1):
    """
    Constant-velocity tracker with position sensors.

    Parameters
    ----------
    dt : float
        Time step
    sensor_variance : float
        Variance of each position reading
    process_variance : float
        Variance of the unmodelled acceleration
    axes : int, optional
        Number of independent spatial axes

    Returns
    -------
    LinearModel
        Model with dim_x = 2 * axes, dim_z = axes, no control input
    """
    F = np.array([[1.0, dt],
                  [0.0, 1.0]])
    return _kinematic_model(F, dt, sensor_variance, process_variance, axes, control=None)


def constant_acceleration_model(dt, sensor_variance, process_variance, axes=1,
                                control=None):
    """
    Constant-acceleration tracker with position sensors.

    Parameters
    ----------
    dt : float
        Time step
    sensor_variance : float
        Variance of each position reading
    process_variance : float
        Variance of the unmodelled change of acceleration
    axes : int, optional
        Number of independent spatial axes
    control : array_like, optional
        Control matrix (3 * axes, dim_u). Default: no control input.

    Returns
    -------
    LinearModel
        Model with dim_x = 3 * axes, dim_z = axes

    Examples
    --------
    A vehicle moving in a plane, position measured once per second:

    >>> model = constant_acceleration_model(1.0, 9.0, 0.04, axes=2)
    >>> model.dim_x, model.dim_z
    (6, 2)
    """
    F = np.array([[1.0, dt,  0.5 * dt**2],
                  [0.0, 1.0, dt],
                  [0.0, 0.0, 1.0]])
    return _kinematic_model(F, dt, sensor_variance, process_variance, axes, control)


def accelerating_body_model(dt, sensor_variance, process_variance):
    """
    Position/velocity tracker driven by a measured acceleration.

    The acceleration (e.g. from an accelerometer, gravity removed) is the
    control input, so the state is only [position, velocity] and the
    accelerometer error enters through the process noise.

    Parameters
    ----------
    dt : float
        Time step
    sensor_variance : float
        Variance of the position reading
    process_variance : float
        Variance of the acceleration input

    Returns
    -------
    LinearModel
        Model with dim_x = 2, dim_u = 1, dim_z = 1
    """
    F = np.array([[1.0, dt],
                  [0.0, 1.0]])
    B = np.array([[0.5 * dt**2],
                  [dt]])
    H = np.array([[1.0, 0.0]])
    R = np.array([[sensor_variance]])
    Q = discrete_white_noise(2, dt, var=process_variance)

    return LinearModel(F, H, B, R, Q)


def _kinematic_model(F_axis, dt, sensor_variance, process_variance, axes, control):
    if axes < 1:
        raise ValueError(f"axes must be at least 1, got {axes}")

    order = F_axis.shape[0]
    dim_x = order * axes

    F = block_diag(*[F_axis] * axes)

    # One position reading per axis
    H = np.zeros((axes, dim_x))
    for axis in range(axes):
        H[axis, axis * order] = 1.0

    R = np.eye(axes) * sensor_variance
    Q = discrete_white_noise(order, dt, var=process_variance, block_size=axes)

    if control is None:
        control = np.zeros((dim_x, 0))

    return LinearModel(F, H, control, R, Q)
