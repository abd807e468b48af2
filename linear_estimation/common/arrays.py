"""
Array coercion and checks shared by the estimator.

Every matrix and vector that enters the estimator goes through these
helpers, so shapes are checked once at the boundary and everything inside
works on single-precision arrays.
"""

import numpy as np

from ..errors import InvalidInput, ShapeMismatch


DTYPE = np.float32


def as_matrix(value, name, shape=None):
    """
    Convert a value to a 2-D float32 array.

    Parameters
    ----------
    value : array_like
        Matrix to convert
    name : str
        Name used in error messages
    shape : tuple of int, optional
        Required shape. Only the dimensions that are not None are checked.

    Returns
    -------
    np.ndarray
        New float32 array (never a view of ``value``)

    Raises
    ------
    ShapeMismatch
        If the value is not 2-D or does not have the required shape
    InvalidInput
        If the value contains NaN or Inf
    """
    matrix = np.array(value, dtype=DTYPE)

    if matrix.ndim != 2:
        raise ShapeMismatch(f"{name} must be a 2-D matrix, got shape {matrix.shape}")

    if shape is not None:
        for axis, expected in enumerate(shape):
            if expected is not None and matrix.shape[axis] != expected:
                wanted = tuple('*' if dim is None else dim for dim in shape)
                raise ShapeMismatch(f"{name} must have shape {wanted}, got {matrix.shape}")

    check_finite(matrix, name)
    return matrix


def as_vector(value, size, name):
    """
    Convert a value to a 1-D float32 array of a given length.

    Flat vectors ``(size,)``, column vectors ``(size, 1)`` and, for a
    single element, plain scalars are accepted.

    Parameters
    ----------
    value : array_like
        Vector to convert
    size : int
        Required length
    name : str
        Name used in error messages

    Returns
    -------
    np.ndarray
        New float32 array of shape (size,)
    """
    vector = np.array(value, dtype=DTYPE)
    if vector.ndim == 0 and size == 1:
        vector = vector.reshape(1)

    if vector.shape not in ((size,), (size, 1)):
        raise ShapeMismatch(f"{name} must have length {size}, got shape {vector.shape}")

    vector = vector.reshape(size)
    check_finite(vector, name)
    return vector


def check_finite(array, name):
    """Raise InvalidInput if ``array`` holds NaN or Inf."""
    if not np.all(np.isfinite(array)):
        raise InvalidInput(f"{name} contains non-finite values")


def readonly(array):
    """Mark an array as read-only and return it."""
    array.flags.writeable = False
    return array


def symmetrize(matrix):
    """Return the symmetric part 0.5 * (A + A^T) of a square matrix."""
    return (0.5 * (matrix + matrix.T)).astype(DTYPE, copy=False)
