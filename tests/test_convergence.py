"""
End-to-end checks against the rocket (altitude/velocity) and vehicle
(2-D constant acceleration) numerical examples of kalmanfilter.net.

The published values are the one-tick-ahead forecasts after the last
reading. Each tick applies the control measured over the previous
interval, so the first step of a run carries no control.
"""

import unittest

import numpy as np

from linear_estimation.filters.estimate import Estimate
from linear_estimation.filters.linear import KalmanFilter, predict, step
from linear_estimation.filters.runner import run_filter
from linear_estimation.models.kinematics import (accelerating_body_model,
                                                 constant_acceleration_model)


GRAVITY = 9.81

ROCKET_ACCELERATIONS = [
    39.81, 39.67, 39.81, 39.84, 40.05, 39.85, 39.78, 39.65, 39.67, 39.78,
    39.59, 39.87, 39.85, 39.59, 39.84, 39.90, 39.63, 39.59, 39.76, 39.79,
    39.73, 39.93, 39.83, 39.85, 39.94, 39.86, 39.76, 39.86, 39.74, 39.94,
]

ROCKET_ALTITUDES = [
    6.43, 1.3, 39.43, 45.89, 41.44, 48.7, 78.06, 80.08, 61.77, 75.15,
    110.39, 127.83, 158.75, 156.55, 213.32, 229.82, 262.8, 297.57, 335.69, 367.92,
    377.19, 411.18, 460.7, 468.39, 553.9, 583.97, 655.15, 723.09, 736.85, 787.22,
]

VEHICLE_POSITIONS = [
    (301.5, -401.46), (298.23, -375.44), (297.83, -346.15), (300.42, -320.2),
    (301.94, -300.08), (299.5, -274.12), (305.98, -253.45), (301.25, -226.4),
    (299.73, -200.65), (299.2, -171.62), (298.62, -152.11), (301.84, -125.19),
    (299.6, -93.4), (295.3, -74.79), (299.3, -49.12), (301.95, -28.73),
    (296.3, 2.99), (295.11, 25.65), (295.12, 49.86), (289.9, 72.87),
    (283.51, 96.34), (276.42, 120.4), (264.22, 144.69), (250.25, 168.06),
    (236.66, 184.99), (217.47, 205.11), (199.75, 221.82), (179.7, 238.3),
    (160.0, 253.02), (140.92, 267.19), (113.53, 270.71), (93.68, 285.86),
    (69.71, 292.9), (45.93, 298.77), (20.87, 298.77),
]

# x, vx, ax, y, vy, ay
VEHICLE_FORECAST = [-7.05, -26.73, -0.74, 298.89, 0.17, -1.87]
VEHICLE_TOLERANCE = [0.1, 0.1, 0.1, 4.0, 0.6, 0.1]


def _rocket_model():
    return accelerating_body_model(0.25, sensor_variance=400.0, process_variance=0.01)


def _rocket_controls() -> np.ndarray:
    """Return the accelerometer readings with gravity removed, as (30, 1)."""
    return (np.array(ROCKET_ACCELERATIONS) - GRAVITY).reshape(-1, 1)


def _vehicle_model():
    return constant_acceleration_model(1.0, sensor_variance=9.0, process_variance=0.04,
                                       axes=2, control=np.eye(6))


class TestRocketAltitude(unittest.TestCase):
    """Two-state tracker with an accelerometer control input."""

    def test_step_sequence_converges(self) -> None:
        model = _rocket_model()
        controls = _rocket_controls()
        estimate = Estimate.prior(np.zeros(2), 500.0)

        previous = np.zeros(1)
        for k, altitude in enumerate(ROCKET_ALTITUDES):
            estimate = step(model, estimate, previous, [altitude])
            previous = controls[k]

        forecast = predict(model, estimate, previous)

        self.assertAlmostEqual(float(forecast.mean[0]), 851.9, delta=0.1)
        self.assertAlmostEqual(float(forecast.mean[1]), 223.2, delta=0.1)

    def test_uncertainty_shrinks(self) -> None:
        model = _rocket_model()
        controls = _rocket_controls()
        prior = Estimate.prior(np.zeros(2), 500.0)

        lagged = np.vstack([np.zeros((1, 1)), controls[:-1]])
        history = run_filter(model, prior, lagged, np.reshape(ROCKET_ALTITUDES, (-1, 1)))

        variances = history.covariances[:, 0, 0]
        self.assertTrue(np.all(history.accepted))
        self.assertLess(variances[-1], variances[0])
        self.assertLess(variances[-1], 400.0)

    def test_wrapper_matches_functions(self) -> None:
        model = _rocket_model()
        controls = _rocket_controls()
        prior = Estimate.prior(np.zeros(2), 500.0)

        kf = KalmanFilter(model, prior)
        estimate = prior
        previous = None
        for k, altitude in enumerate(ROCKET_ALTITUDES):
            kf.step(previous, [altitude])
            estimate = step(model, estimate, previous, [altitude])
            previous = controls[k]

        self.assertEqual(kf.estimate, estimate)
        self.assertAlmostEqual(float(kf.predict(previous).mean[0]), 851.9, delta=0.1)


class TestVehicleTracking(unittest.TestCase):
    """Six-state tracker with a two-component position sensor."""

    def test_step_sequence_converges(self) -> None:
        model = _vehicle_model()
        estimate = Estimate.prior(np.zeros(6), 500.0)
        no_control = np.zeros(6)

        for position in VEHICLE_POSITIONS:
            estimate = step(model, estimate, no_control, position)

        forecast = predict(model, estimate, no_control)

        for i, (expected, tolerance) in enumerate(zip(VEHICLE_FORECAST, VEHICLE_TOLERANCE)):
            with self.subTest(state=i):
                self.assertAlmostEqual(float(forecast.mean[i]), expected, delta=tolerance)

    def test_batch_run_matches_steps(self) -> None:
        model = _vehicle_model()
        prior = Estimate.prior(np.zeros(6), 500.0)
        controls = np.zeros((len(VEHICLE_POSITIONS), 6))

        history = run_filter(model, prior, controls, VEHICLE_POSITIONS)

        estimate = prior
        for position in VEHICLE_POSITIONS:
            estimate = step(model, estimate, np.zeros(6), position)

        np.testing.assert_array_equal(history.final.mean, estimate.mean)
        np.testing.assert_array_equal(history.final.covariance, estimate.covariance)


if __name__ == "__main__":
    unittest.main()
