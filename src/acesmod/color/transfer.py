"""Transfer functions (encodings) and the polynomial LUT fallback.

Every function is a pure per-channel map. They accept Python floats or
NumPy arrays and return the same kind: a float for scalar input, an
ndarray otherwise. Inputs are never rejected; out-of-domain values fall
into the nearest defined segment.
"""

from __future__ import annotations

import numpy as np

from acesmod.config import FALLBACK_CONFIG
from acesmod.config.spaces import Encoding

# =============================================================================
# Constants
# =============================================================================

SRGB_EOTF_CUT = 0.04045
SRGB_OETF_CUT = 0.0031308

# (log2(2**-16) + 9.72) / 17.52
LOG_CC_FLOOR = -0.3584474886

ACESCCT_CUT = 0.0078125
ACESCCT_A = 10.5402377416545
ACESCCT_B = 0.0729055341958355
ACESCCT_CUT_ENCODED = ACESCCT_A * ACESCCT_CUT + ACESCCT_B

REC709_CUT = 0.018
REC709_CUT_ENCODED = 4.5 * REC709_CUT

_TINY = np.finfo(np.float64).tiny


def _result(value: np.ndarray, like) -> float | np.ndarray:
    if np.ndim(like) == 0:
        return float(value)
    return value


# =============================================================================
# sRGB
# =============================================================================


def srgb_to_linear(c):
    """sRGB EOTF: display-encoded to linear light."""
    c_arr = np.asarray(c, dtype=np.float64)
    out = np.where(
        c_arr <= SRGB_EOTF_CUT,
        c_arr / 12.92,
        ((np.maximum(c_arr, SRGB_EOTF_CUT) + 0.055) / 1.055) ** 2.4,
    )
    return _result(out, c)


def linear_to_srgb(x):
    """Inverse sRGB EOTF: linear light to display-encoded."""
    x_arr = np.asarray(x, dtype=np.float64)
    out = np.where(
        x_arr <= SRGB_OETF_CUT,
        x_arr * 12.92,
        1.055 * np.maximum(x_arr, SRGB_OETF_CUT) ** (1.0 / 2.4) - 0.055,
    )
    return _result(out, x)


# =============================================================================
# ACEScc / ACEScct
# =============================================================================


def log_cc_encode(x):
    """ACEScc: ``(log2(x) + 9.72) / 17.52``; ``x <= 0`` maps to LOG_CC_FLOOR."""
    x_arr = np.asarray(x, dtype=np.float64)
    out = np.where(
        x_arr <= 0.0,
        LOG_CC_FLOOR,
        (np.log2(np.maximum(x_arr, _TINY)) + 9.72) / 17.52,
    )
    return _result(out, x)


def log_cc_decode(y):
    """Inverse of log_cc_encode for values above the floor."""
    y_arr = np.asarray(y, dtype=np.float64)
    out = np.exp2(y_arr * 17.52 - 9.72)
    return _result(out, y)


def log_cct_encode(x):
    """ACEScct: linear toe up to 2**-7, then the ACEScc log curve."""
    x_arr = np.asarray(x, dtype=np.float64)
    out = np.where(
        x_arr <= ACESCCT_CUT,
        ACESCCT_A * x_arr + ACESCCT_B,
        (np.log2(np.maximum(x_arr, ACESCCT_CUT)) + 9.72) / 17.52,
    )
    return _result(out, x)


def log_cct_decode(y):
    """Inverse of log_cct_encode."""
    y_arr = np.asarray(y, dtype=np.float64)
    out = np.where(
        y_arr <= ACESCCT_CUT_ENCODED,
        (y_arr - ACESCCT_B) / ACESCCT_A,
        np.exp2(y_arr * 17.52 - 9.72),
    )
    return _result(out, y)


# =============================================================================
# Rec.709
# =============================================================================


def rec709_encode(x):
    """BT.709 camera OETF."""
    x_arr = np.asarray(x, dtype=np.float64)
    out = np.where(
        x_arr < REC709_CUT,
        4.5 * x_arr,
        1.099 * np.maximum(x_arr, REC709_CUT) ** 0.45 - 0.099,
    )
    return _result(out, x)


def rec709_decode(y):
    """Inverse BT.709 OETF."""
    y_arr = np.asarray(y, dtype=np.float64)
    out = np.where(
        y_arr < REC709_CUT_ENCODED,
        y_arr / 4.5,
        ((np.maximum(y_arr, REC709_CUT_ENCODED) + 0.099) / 1.099) ** (1.0 / 0.45),
    )
    return _result(out, y)


# =============================================================================
# Dispatch
# =============================================================================


def encode(x, encoding: Encoding):
    """Apply ``encoding`` to linear values.

    ``Encoding.DISPLAY`` re-encodes with the sRGB curve; the pipeline
    short-circuits display targets to return its input unchanged.
    """
    match Encoding(encoding):
        case Encoding.LOG_CC:
            return log_cc_encode(x)
        case Encoding.LOG_CCT:
            return log_cct_encode(x)
        case Encoding.VIDEO_OETF:
            return rec709_encode(x)
        case Encoding.DISPLAY:
            return linear_to_srgb(x)
        case _:
            return _result(np.asarray(x, dtype=np.float64), x)


def decode(y, encoding: Encoding):
    """Invert ``encoding`` back to linear values."""
    match Encoding(encoding):
        case Encoding.LOG_CC:
            return log_cc_decode(y)
        case Encoding.LOG_CCT:
            return log_cct_decode(y)
        case Encoding.VIDEO_OETF:
            return rec709_decode(y)
        case Encoding.DISPLAY:
            return srgb_to_linear(y)
        case _:
            return _result(np.asarray(y, dtype=np.float64), y)


# =============================================================================
# Fallback
# =============================================================================


def nuke_inverse_odt(x, coefficients: tuple[float, float, float] | None = None):
    """Degree-2 polynomial approximating the inverse output transform.

    Stands in for the 3D + 1D LUT chain while the LUTs are not loaded.
    Input is display sRGB clamped to [0, 1]; output is approximately linear
    ACES2065-1. Only an approximation: results differ from the LUT path.

    :param x: Display value(s)
    :param coefficients: (c0, c1, c2); defaults to FALLBACK_CONFIG
    """
    c0, c1, c2 = coefficients if coefficients is not None else FALLBACK_CONFIG.coefficients
    x_arr = np.clip(np.asarray(x, dtype=np.float64), 0.0, 1.0)
    out = c0 + c1 * x_arr + c2 * x_arr * x_arr
    return _result(out, x)


def nuke_odt(y, coefficients: tuple[float, float, float] | None = None):
    """Inverse of ``nuke_inverse_odt``: linear ACES2065-1 back to display.

    Takes the root of ``c0 + c1*x + c2*x**2 = y`` that lies on the increasing
    branch, written as ``2(y - c0) / (c1 + sqrt(disc))`` so the linear case
    (``c2 == 0``) needs no special handling. Values below the curve's range
    map to 0; results are clamped to [0, 1].

    :param y: Linear AP0 value(s)
    :param coefficients: (c0, c1, c2); defaults to FALLBACK_CONFIG
    """
    c0, c1, c2 = coefficients if coefficients is not None else FALLBACK_CONFIG.coefficients
    y_arr = np.asarray(y, dtype=np.float64)
    disc = np.maximum(c1 * c1 + 4.0 * c2 * (y_arr - c0), 0.0)
    denom = c1 + np.sqrt(disc)
    safe = np.where(denom > 0.0, denom, 1.0)
    out = np.where(denom > 0.0, 2.0 * (y_arr - c0) / safe, 0.0)
    return _result(np.clip(out, 0.0, 1.0), y)
