import unittest

import numpy as np

from linear_estimation.errors import ShapeMismatch, SingularCovariance
from linear_estimation.filters.estimate import Estimate
from linear_estimation.filters.linear import KalmanFilter, correct, predict, step
from linear_estimation.filters.model import LinearModel


def _model(sensor_variance: float = 1.0) -> LinearModel:
    """Return a position/velocity model with a position sensor."""
    return LinearModel(
        prediction=[[1.0, 0.1], [0.0, 1.0]],
        measurement=[[1.0, 0.0]],
        control=[[0.005], [0.1]],
        sensor_noise=[[sensor_variance]],
        process_noise=np.eye(2) * 1e-3,
    )


def _singular_model() -> LinearModel:
    """Return a model whose sensor sees nothing and adds no noise."""
    return LinearModel(
        prediction=[[1.0, 0.1], [0.0, 1.0]],
        measurement=[[0.0, 0.0]],
        control=[[0.005], [0.1]],
        sensor_noise=[[0.0]],
        process_noise=np.eye(2) * 1e-3,
    )


class TestKalmanFilter(unittest.TestCase):
    """Tests for the stateful KalmanFilter wrapper."""

    def test_predict_and_update_match_functions(self) -> None:
        model = _model()
        prior = Estimate([1.0, 0.5], np.eye(2))
        kf = KalmanFilter(model, prior)

        kf.predict([2.0])
        kf.update([1.2])

        expected = correct(model, predict(model, prior, [2.0]), [1.2])
        self.assertEqual(kf.estimate, expected)
        np.testing.assert_array_equal(kf.x, expected.mean)
        np.testing.assert_array_equal(kf.P, expected.covariance)

    def test_step_matches_function(self) -> None:
        model = _model()
        prior = Estimate([1.0, 0.5], np.eye(2))
        kf = KalmanFilter(model, prior)

        returned = kf.step([2.0], [1.2])

        self.assertIs(returned, kf.estimate)
        self.assertEqual(returned, step(model, prior, [2.0], [1.2]))

    def test_innovation_is_recorded(self) -> None:
        kf = KalmanFilter(_model(), Estimate([0.0, 0.0], np.eye(2)))

        self.assertIsNone(kf.innovation)
        self.assertIsNone(kf.get_innovation())
        self.assertIsNone(kf.get_innovation_covariance())

        kf.update([3.0])

        np.testing.assert_allclose(kf.get_innovation(), [3.0])
        np.testing.assert_allclose(kf.get_innovation_covariance(), [[2.0]])

    def test_state_is_read_only(self) -> None:
        kf = KalmanFilter(_model(), Estimate([0.0, 0.0], np.eye(2)))

        with self.assertRaises(ValueError):
            kf.x[0] = 1.0
        with self.assertRaises(ValueError):
            kf.P[0, 0] = 1.0

    def test_failed_update_keeps_estimate(self) -> None:
        prior = Estimate([1.0, 0.5], np.zeros((2, 2)))
        kf = KalmanFilter(_singular_model(), prior)

        with self.assertRaises(SingularCovariance):
            kf.update([1.0])

        self.assertIs(kf.estimate, prior)
        self.assertIsNone(kf.innovation)

    def test_failed_step_keeps_estimate(self) -> None:
        prior = Estimate([1.0, 0.5], np.eye(2))
        kf = KalmanFilter(_singular_model(), prior)

        with self.assertRaises(SingularCovariance):
            kf.step([1.0], [1.0])

        self.assertIs(kf.estimate, prior)

        # Caller recovers with a predict-only tick
        kf.predict([1.0])
        self.assertEqual(kf.estimate, predict(_singular_model(), prior, [1.0]))

    def test_rejects_estimate_of_wrong_size(self) -> None:
        with self.assertRaises(ShapeMismatch):
            KalmanFilter(_model(), Estimate(np.zeros(3), np.eye(3)))

        kf = KalmanFilter(_model(), Estimate(np.zeros(2), np.eye(2)))
        with self.assertRaises(ShapeMismatch):
            kf.estimate = Estimate(np.zeros(1), np.eye(1))


if __name__ == "__main__":
    unittest.main()
