"""Numba-optimized kernels for batched LUT sampling.

Batch counterparts of ``Spi3dTable.sample``, ``Spi1dTable.apply`` and
``apply_matrix_3x3``. Each kernel writes into a caller-allocated output
and follows the scalar algorithm step for step, so both paths agree to
float64 rounding.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(cache=True, nogil=True)
def _clamp01(v: float) -> float:
    # NaN falls through to 0.0
    if not v >= 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


# =============================================================================
# 3D LUT
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def trilinear_sample_numba(
    data: NDArray[np.float32],
    size: int,
    rgb: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Trilinear lookup of every row of ``rgb`` in a flat R-fastest cube.

    :param data: Flat LUT data [size**3 * 3]
    :param size: Grid edge length
    :param rgb: Inputs [N, 3], clamped to [0, 1] before lookup
    :param out: Output [N, 3]
    """
    N = rgb.shape[0]
    max_index = size - 1
    plane = size * size

    for i in prange(N):
        rs = _clamp01(rgb[i, 0]) * max_index
        gs = _clamp01(rgb[i, 1]) * max_index
        bs = _clamp01(rgb[i, 2]) * max_index

        r0 = int(np.floor(rs))
        g0 = int(np.floor(gs))
        b0 = int(np.floor(bs))
        r1 = min(r0 + 1, max_index)
        g1 = min(g0 + 1, max_index)
        b1 = min(b0 + 1, max_index)

        dr = rs - r0
        dg = gs - g0
        db = bs - b0

        i000 = (b0 * plane + g0 * size + r0) * 3
        i100 = (b0 * plane + g0 * size + r1) * 3
        i010 = (b0 * plane + g1 * size + r0) * 3
        i110 = (b0 * plane + g1 * size + r1) * 3
        i001 = (b1 * plane + g0 * size + r0) * 3
        i101 = (b1 * plane + g0 * size + r1) * 3
        i011 = (b1 * plane + g1 * size + r0) * 3
        i111 = (b1 * plane + g1 * size + r1) * 3

        for ch in range(3):
            c000 = np.float64(data[i000 + ch])
            c100 = np.float64(data[i100 + ch])
            c010 = np.float64(data[i010 + ch])
            c110 = np.float64(data[i110 + ch])
            c001 = np.float64(data[i001 + ch])
            c101 = np.float64(data[i101 + ch])
            c011 = np.float64(data[i011 + ch])
            c111 = np.float64(data[i111 + ch])

            # R axis
            c00 = c000 + dr * (c100 - c000)
            c01 = c010 + dr * (c110 - c010)
            c10 = c001 + dr * (c101 - c001)
            c11 = c011 + dr * (c111 - c011)

            # G axis
            c0 = c00 + dg * (c01 - c00)
            c1 = c10 + dg * (c11 - c10)

            # B axis
            out[i, ch] = c0 + db * (c1 - c0)


# =============================================================================
# 1D LUT
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def linear_sample_1d_numba(
    data: NDArray[np.float32],
    size: int,
    components: int,
    domain_min: float,
    domain_max: float,
    rgb: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Per-channel 1D lookup with linear interpolation.

    :param data: Flat LUT data [size * components], sample-major
    :param size: Number of samples
    :param components: 1 (shared curve) or 3 (one curve per channel)
    :param domain_min: Input mapped to the first sample
    :param domain_max: Input mapped to the last sample
    :param rgb: Inputs [N, 3]
    :param out: Output [N, 3]
    """
    N = rgb.shape[0]
    max_index = size - 1
    span = domain_max - domain_min

    for i in prange(N):
        for ch in range(3):
            t = _clamp01((rgb[i, ch] - domain_min) / span)
            scaled = t * max_index
            i0 = int(np.floor(scaled))
            i1 = min(i0 + 1, max_index)
            frac = scaled - i0

            c = ch if components == 3 else 0
            a = np.float64(data[i0 * components + c])
            b = np.float64(data[i1 * components + c])
            out[i, ch] = a + frac * (b - a)


# =============================================================================
# Matrix
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def apply_matrix_numba(
    rgb: NDArray[np.float64],
    matrix: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Apply a 3x3 matrix to every row: ``out[i, c] = sum_j M[c, j] * rgb[i, j]``.

    :param rgb: Inputs [N, 3]
    :param matrix: Row-major 3x3 matrix
    :param out: Output [N, 3]
    """
    N = rgb.shape[0]

    for i in prange(N):
        for c in range(3):
            val = 0.0
            for j in range(3):
                val += matrix[c, j] * rgb[i, j]
            out[i, c] = val
