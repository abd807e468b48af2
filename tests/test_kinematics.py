import unittest

import numpy as np

from linear_estimation.models.kinematics import (accelerating_body_model,
                                                 constant_acceleration_model,
                                                 constant_velocity_model,
                                                 discrete_white_noise)


class TestDiscreteWhiteNoise(unittest.TestCase):
    """Tests for discrete_white_noise."""

    def test_second_order(self) -> None:
        Q = discrete_white_noise(2, dt=0.5, var=2.0)

        np.testing.assert_allclose(Q, [[0.03125, 0.125], [0.125, 0.5]])

    def test_third_order(self) -> None:
        Q = discrete_white_noise(3, dt=1.0, var=0.04)

        expected = np.array([[0.25, 0.5, 0.5], [0.5, 1.0, 1.0], [0.5, 1.0, 1.0]]) * 0.04
        np.testing.assert_allclose(Q, expected)

    def test_blocks_are_independent(self) -> None:
        Q = discrete_white_noise(3, dt=0.1, var=1.0, block_size=2)

        self.assertEqual(Q.shape, (6, 6))
        np.testing.assert_array_equal(Q[:3, 3:], np.zeros((3, 3)))
        np.testing.assert_array_equal(Q[:3, :3], Q[3:, 3:])

    def test_rejects_unsupported_arguments(self) -> None:
        with self.assertRaises(ValueError):
            discrete_white_noise(4, dt=0.1)
        with self.assertRaises(ValueError):
            discrete_white_noise(2, dt=0.1, block_size=0)


class TestKinematicModels(unittest.TestCase):
    """Tests for the model builders."""

    def test_constant_velocity(self) -> None:
        model = constant_velocity_model(0.1, sensor_variance=4.0, process_variance=1.0, axes=2)

        self.assertEqual((model.dim_x, model.dim_u, model.dim_z), (4, 0, 2))
        np.testing.assert_allclose(model.prediction[:2, :2], [[1.0, 0.1], [0.0, 1.0]])
        np.testing.assert_array_equal(model.measurement, [[1, 0, 0, 0], [0, 0, 1, 0]])
        np.testing.assert_array_equal(model.sensor_noise, np.eye(2) * 4.0)

    def test_constant_acceleration(self) -> None:
        model = constant_acceleration_model(1.0, sensor_variance=9.0, process_variance=0.04,
                                            axes=2, control=np.eye(6))

        self.assertEqual((model.dim_x, model.dim_u, model.dim_z), (6, 6, 2))
        np.testing.assert_allclose(model.prediction[3:, 3:],
                                   [[1.0, 1.0, 0.5], [0.0, 1.0, 1.0], [0.0, 0.0, 1.0]])
        np.testing.assert_array_equal(model.prediction[:3, 3:], np.zeros((3, 3)))
        np.testing.assert_array_equal(model.measurement[1], [0, 0, 0, 1, 0, 0])
        np.testing.assert_allclose(model.process_noise[:3, :3],
                                   discrete_white_noise(3, 1.0, var=0.04))

    def test_accelerating_body(self) -> None:
        model = accelerating_body_model(0.25, sensor_variance=400.0, process_variance=0.01)

        self.assertEqual((model.dim_x, model.dim_u, model.dim_z), (2, 1, 1))
        np.testing.assert_allclose(model.control, [[0.03125], [0.25]])
        np.testing.assert_allclose(model.sensor_noise, [[400.0]])
        np.testing.assert_allclose(model.process_noise,
                                   np.array([[0.0009765625, 0.0078125],
                                             [0.0078125, 0.0625]]) * 0.01, rtol=1e-6)

    def test_rejects_zero_axes(self) -> None:
        with self.assertRaises(ValueError):
            constant_velocity_model(0.1, 1.0, 1.0, axes=0)


if __name__ == "__main__":
    unittest.main()
