"""
Data sets for the examples.

Two recorded scenarios used to check the filter against known results
(numerical examples 9 and 10 of kalmanfilter.net) and a synthetic
constant-acceleration track with ground truth.
"""

import numpy as np


GRAVITY = 9.81


def load_rocket_flight():
    """
    Rocket climbing with roughly constant acceleration.

    The accelerometer reading (gravity removed) is the control input and an
    altimeter gives the measurement, 4 times per second.

    Returns
    -------
    dict
        'dt', 'controls' (30, 1) in m/s², 'measurements' (30, 1) in m
    """
    accelerometer = np.array([
        39.81, 39.67, 39.81, 39.84, 40.05, 39.85, 39.78, 39.65, 39.67, 39.78,
        39.59, 39.87, 39.85, 39.59, 39.84, 39.90, 39.63, 39.59, 39.76, 39.79,
        39.73, 39.93, 39.83, 39.85, 39.94, 39.86, 39.76, 39.86, 39.74, 39.94,
    ])
    altimeter = np.array([
        6.43, 1.3, 39.43, 45.89, 41.44, 48.7, 78.06, 80.08, 61.77, 75.15,
        110.39, 127.83, 158.75, 156.55, 213.32, 229.82, 262.8, 297.57, 335.69, 367.92,
        377.19, 411.18, 460.7, 468.39, 553.9, 583.97, 655.15, 723.09, 736.85, 787.22,
    ])

    return {
        'dt': 0.25,
        'controls': (accelerometer - GRAVITY).reshape(-1, 1),
        'measurements': altimeter.reshape(-1, 1),
    }


def load_vehicle_track():
    """
    Vehicle driving straight, then turning, measured by a position sensor
    once per second.

    Returns
    -------
    dict
        'dt', 'measurements' (35, 2) as [x, y] in m
    """
    positions = np.array([
        [301.5, -401.46], [298.23, -375.44], [297.83, -346.15], [300.42, -320.2],
        [301.94, -300.08], [299.5, -274.12], [305.98, -253.45], [301.25, -226.4],
        [299.73, -200.65], [299.2, -171.62], [298.62, -152.11], [301.84, -125.19],
        [299.6, -93.4], [295.3, -74.79], [299.3, -49.12], [301.95, -28.73],
        [296.3, 2.99], [295.11, 25.65], [295.12, 49.86], [289.9, 72.87],
        [283.51, 96.34], [276.42, 120.4], [264.22, 144.69], [250.25, 168.06],
        [236.66, 184.99], [217.47, 205.11], [199.75, 221.82], [179.7, 238.3],
        [160.0, 253.02], [140.92, 267.19], [113.53, 270.71], [93.68, 285.86],
        [69.71, 292.9], [45.93, 298.77], [20.87, 298.77],
    ])

    return {
        'dt': 1.0,
        'measurements': positions,
    }


def generate_constant_acceleration_track(N=200, dt=0.1, accel_std=0.5,
                                         sensor_std=2.0, seed=0):
    """
    Simulate a 2-D constant-acceleration target with noisy position readings.

    Parameters
    ----------
    N : int, optional
        Number of ticks
    dt : float, optional
        Time step (s)
    accel_std : float, optional
        Standard deviation of the random change of acceleration per tick
    sensor_std : float, optional
        Standard deviation of each position reading
    seed : int, optional
        Random seed

    Returns
    -------
    dict
        'time', 'dt', 'measurements' (N, 2), 'ground_truth' (N, 6) as
        [x, vx, ax, y, vy, ay]
    """
    rng = np.random.default_rng(seed)

    F_axis = np.array([[1.0, dt, 0.5 * dt**2],
                       [0.0, 1.0, dt],
                       [0.0, 0.0, 1.0]])

    ground_truth = np.zeros((N, 6))
    ground_truth[0] = [0.0, 5.0, 0.0, 0.0, 2.0, 0.0]

    for k in range(N - 1):
        for axis in (0, 3):
            state = F_axis @ ground_truth[k, axis:axis + 3]
            state[2] += rng.normal(0.0, accel_std) * dt
            ground_truth[k + 1, axis:axis + 3] = state

    positions = ground_truth[:, [0, 3]]
    measurements = positions + rng.normal(0.0, sensor_std, size=positions.shape)

    return {
        'time': np.arange(N) * dt,
        'dt': dt,
        'measurements': measurements,
        'ground_truth': ground_truth,
    }
