"""3x3 matrix application for RGB triples.

``apply_matrix_3x3`` is the scalar primitive used on every color query; the
array variant serves batch conversion.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from acesmod.lut.kernels import apply_matrix_numba


def _rows(matrix) -> tuple[Sequence[float], Sequence[float], Sequence[float]]:
    """Accept a nested 3x3 or a flat 9-element row-major matrix."""
    if len(matrix) == 9:
        return matrix[0:3], matrix[3:6], matrix[6:9]
    if len(matrix) != 3:
        raise ValueError(f"Expected a 3x3 or 9-element matrix, got length {len(matrix)}")
    return matrix[0], matrix[1], matrix[2]


def apply_matrix_3x3(rgb: Sequence[float], matrix) -> tuple[float, float, float]:
    """Apply a row-major 3x3 matrix: ``out[i] = sum_j M[i][j] * rgb[j]``.

    :param rgb: Input triple
    :param matrix: Nested 3x3 or flat 9-element row-major matrix
    :returns: Transformed triple
    """
    r, g, b = float(rgb[0]), float(rgb[1]), float(rgb[2])
    m0, m1, m2 = _rows(matrix)
    return (
        float(m0[0]) * r + float(m0[1]) * g + float(m0[2]) * b,
        float(m1[0]) * r + float(m1[1]) * g + float(m1[2]) * b,
        float(m2[0]) * r + float(m2[1]) * g + float(m2[2]) * b,
    )


def apply_matrix_array(rgb: np.ndarray, matrix) -> np.ndarray:
    """Apply a 3x3 matrix to every row of an [N, 3] array.

    :param rgb: Colors [N, 3]
    :param matrix: Nested 3x3 or flat 9-element row-major matrix
    :returns: New float64 array [N, 3]
    """
    m = np.ascontiguousarray(matrix, dtype=np.float64).reshape(3, 3)
    arr = np.ascontiguousarray(rgb, dtype=np.float64).reshape(-1, 3)
    out = np.empty_like(arr)
    apply_matrix_numba(arr, m, out)
    return out


def invert_matrix_3x3(matrix) -> np.ndarray:
    """Inverse of a 3x3 matrix as a float64 array.

    :raises numpy.linalg.LinAlgError: If the matrix is singular
    """
    return np.linalg.inv(np.asarray(matrix, dtype=np.float64).reshape(3, 3))
