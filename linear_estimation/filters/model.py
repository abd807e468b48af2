"""
Static model of a linear, discrete-time process.

The model bundles the five matrices a Kalman filter needs and is fixed for
its lifetime: it describes how the state advances over one constant tick,
how control inputs push it, how sensors observe it, and how much noise the
process and the sensors add.
"""

from ..common.arrays import as_matrix, readonly
from ..errors import ShapeMismatch


class LinearModel:
    """
    Immutable linear process and sensor model.

    Dimensions are derived from the matrices and checked against each
    other once, at construction:

    - S state variables (``dim_x``)
    - I control inputs (``dim_u``, may be zero)
    - M sensor readings (``dim_z``)

    All matrices are copied, cast to float32 and made read-only.

    Parameters
    ----------
    prediction : array_like
        State transition matrix F (S, S)
    measurement : array_like
        Measurement matrix H (M, S)
    control : array_like
        Control matrix B (S, I)
    sensor_noise : array_like
        Measurement noise covariance R (M, M)
    process_noise : array_like
        Process noise covariance Q (S, S)

    Raises
    ------
    ShapeMismatch
        If any matrix is not 2-D or the shapes are inconsistent
    InvalidInput
        If any matrix contains NaN or Inf

    Examples
    --------
    >>> dt = 0.25
    >>> model = LinearModel(
    ...     prediction=[[1.0, dt], [0.0, 1.0]],
    ...     measurement=[[1.0, 0.0]],
    ...     control=[[0.5 * dt**2], [dt]],
    ...     sensor_noise=[[400.0]],
    ...     process_noise=np.eye(2) * 0.01,
    ... )
    >>> model.dim_x, model.dim_u, model.dim_z
    (2, 1, 1)
    """

    __slots__ = ('_prediction', '_measurement', '_control',
                 '_sensor_noise', '_process_noise')

    def __init__(self, prediction, measurement, control, sensor_noise, process_noise):
        prediction = as_matrix(prediction, 'prediction')
        dim_x = prediction.shape[0]
        if prediction.shape != (dim_x, dim_x):
            raise ShapeMismatch(f"prediction must be square, got shape {prediction.shape}")

        measurement = as_matrix(measurement, 'measurement', shape=(None, dim_x))
        dim_z = measurement.shape[0]

        control = as_matrix(control, 'control', shape=(dim_x, None))
        sensor_noise = as_matrix(sensor_noise, 'sensor_noise', shape=(dim_z, dim_z))
        process_noise = as_matrix(process_noise, 'process_noise', shape=(dim_x, dim_x))

        self._prediction = readonly(prediction)
        self._measurement = readonly(measurement)
        self._control = readonly(control)
        self._sensor_noise = readonly(sensor_noise)
        self._process_noise = readonly(process_noise)

    @property
    def prediction(self):
        """State transition matrix F (S, S)."""
        return self._prediction

    @property
    def measurement(self):
        """Measurement matrix H (M, S)."""
        return self._measurement

    @property
    def control(self):
        """Control matrix B (S, I)."""
        return self._control

    @property
    def sensor_noise(self):
        """Measurement noise covariance R (M, M)."""
        return self._sensor_noise

    @property
    def process_noise(self):
        """Process noise covariance Q (S, S)."""
        return self._process_noise

    @property
    def dim_x(self):
        return self._prediction.shape[0]

    @property
    def dim_u(self):
        return self._control.shape[1]

    @property
    def dim_z(self):
        return self._measurement.shape[0]

    def __repr__(self):
        return (f"LinearModel(dim_x={self.dim_x}, dim_u={self.dim_u}, "
                f"dim_z={self.dim_z})")

