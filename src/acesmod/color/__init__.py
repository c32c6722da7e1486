"""Color math: matrices, transfer functions and color wheel helpers."""

from acesmod.color.matrix import apply_matrix_3x3, apply_matrix_array, invert_matrix_3x3
from acesmod.color.transfer import (
    LOG_CC_FLOOR,
    decode,
    encode,
    linear_to_srgb,
    log_cc_decode,
    log_cc_encode,
    log_cct_decode,
    log_cct_encode,
    nuke_inverse_odt,
    nuke_odt,
    rec709_decode,
    rec709_encode,
    srgb_to_linear,
)
from acesmod.color.wheel import (
    WheelSample,
    format_color_values,
    hex_to_rgb,
    hsv_to_rgb,
    rgb_to_hex,
    wheel_color_at,
)

__all__ = [
    # Matrix
    "apply_matrix_3x3",
    "apply_matrix_array",
    "invert_matrix_3x3",
    # Transfer
    "LOG_CC_FLOOR",
    "srgb_to_linear",
    "linear_to_srgb",
    "log_cc_encode",
    "log_cc_decode",
    "log_cct_encode",
    "log_cct_decode",
    "rec709_encode",
    "rec709_decode",
    "encode",
    "decode",
    "nuke_inverse_odt",
    "nuke_odt",
    # Wheel
    "WheelSample",
    "hsv_to_rgb",
    "rgb_to_hex",
    "hex_to_rgb",
    "wheel_color_at",
    "format_color_values",
]
