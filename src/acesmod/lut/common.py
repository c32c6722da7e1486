"""Helpers shared by the spi3d and spi1d parsers and samplers."""

from __future__ import annotations

import logging
import warnings

import numpy as np

from acesmod.errors import FormatError, IncompleteDataWarning

logger = logging.getLogger(__name__)


def clamp01(v: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if not v >= 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


def as_rgb_array(rgb) -> np.ndarray:
    """Coerce input to a C-contiguous float64 array of shape [N, 3]."""
    arr = np.ascontiguousarray(rgb, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected colors of shape [N, 3], got {arr.shape}")
    return arr


def freeze(data: np.ndarray) -> np.ndarray:
    """Return ``data`` as a read-only, contiguous float32 array."""
    arr = np.ascontiguousarray(data, dtype=np.float32)
    if arr is data:
        arr = arr.copy()
    arr.flags.writeable = False
    return arr


def report_incomplete(kind: str, expected: int, actual: int, strict: bool) -> None:
    """Surface a short data block.

    Raises FormatError when ``strict``; otherwise logs and emits an
    IncompleteDataWarning and lets the zero-filled table through.
    """
    message = f"Expected {expected} {kind} entries, read {actual}"
    if strict:
        raise FormatError(message)
    logger.warning("[%s] %s; missing entries are zero", kind, message)
    warnings.warn(
        IncompleteDataWarning(message, expected=expected, actual=actual),
        stacklevel=3,
    )
