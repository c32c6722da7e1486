"""
acesmod - sRGB to ACES color transforms driven by SPI LUTs

Converts display sRGB colors into ACES working spaces the way color
pickers in compositing tools do: the official inverse output transform
(3D shaper LUT + 1D shaper-to-linear LUT + AP0->AP1 matrix) when the LUTs
are available, and a polynomial approximation until then.

Features:
- .spi3d / .spi1d parsing with trilinear and linear sampling
- Numba-compiled batch sampling for [N, 3] arrays
- Concurrent LUT loading from paths or URLs (asyncio)
- Color space registry: sRGB, Linear sRGB, Rec.709, ACEScg, ACEScc,
  ACEScct, ACES2065-1
- Hex and color wheel helpers for picker UIs

Example - Fallback, then official path:
    >>> import asyncio
    >>> from acesmod import TransformPipeline, LutLoader
    >>>
    >>> pipeline = TransformPipeline()
    >>> pipeline.convert(0.5, 0.5, 0.5)        # polynomial approximation
    >>> asyncio.run(pipeline.load(LutLoader("luts")))
    >>> pipeline.convert(0.5, 0.5, 0.5)        # 3D LUT -> 1D LUT -> AP0->AP1

Example - Other spaces and hex:
    >>> pipeline.convert(0.5, 0.5, 0.5, target="ACEScct")
    >>> pipeline.update_from_hex("#808080", target="ACEScc")
    >>> pipeline.to_hex(0.18, 0.18, 0.18, source_space="Linear sRGB")

Example - LUTs directly:
    >>> from acesmod import parse_spi3d, parse_spi1d
    >>> lut3d = parse_spi3d(open("InvRRT.sRGB.Log2_48_nits_Shaper.spi3d").read())
    >>> lut3d.sample(0.5, 0.5, 0.5)
"""

__version__ = "0.1.0"

from acesmod.color import (
    apply_matrix_3x3,
    apply_matrix_array,
    decode,
    encode,
    format_color_values,
    hex_to_rgb,
    hsv_to_rgb,
    linear_to_srgb,
    log_cc_decode,
    log_cc_encode,
    log_cct_decode,
    log_cct_encode,
    nuke_inverse_odt,
    nuke_odt,
    rec709_decode,
    rec709_encode,
    rgb_to_hex,
    srgb_to_linear,
    wheel_color_at,
)
from acesmod.config import (
    AP0_TO_AP1,
    AP1_TO_AP0,
    CONFIG,
    SPACES,
    AcesmodConfig,
    ColorSpaceSpec,
    Encoding,
    FallbackConfig,
    LutConfig,
    RGBValues,
)
from acesmod.errors import AcesmodError, FormatError, IncompleteDataWarning, ResourceError
from acesmod.loader import LutLoader, read_text
from acesmod.lut import (
    Spi1dTable,
    Spi3dTable,
    apply_lut1d,
    parse_spi1d,
    parse_spi3d,
    sample_lut1d,
    sample_lut3d,
)
from acesmod.pipeline import (
    Failed,
    Loading,
    PipelineState,
    Ready,
    TransformPipeline,
    Unloaded,
)
from acesmod.protocols import ColorConverter, TextFetcher

__all__ = [
    # Pipeline
    "TransformPipeline",
    "PipelineState",
    "Unloaded",
    "Loading",
    "Ready",
    "Failed",
    "LutLoader",
    "read_text",
    # LUTs
    "Spi3dTable",
    "Spi1dTable",
    "parse_spi3d",
    "parse_spi1d",
    "sample_lut3d",
    "sample_lut1d",
    "apply_lut1d",
    # Color math
    "apply_matrix_3x3",
    "apply_matrix_array",
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
    # Wheel / hex
    "hsv_to_rgb",
    "rgb_to_hex",
    "hex_to_rgb",
    "wheel_color_at",
    "format_color_values",
    # Config
    "AcesmodConfig",
    "LutConfig",
    "FallbackConfig",
    "ColorSpaceSpec",
    "Encoding",
    "RGBValues",
    "AP0_TO_AP1",
    "AP1_TO_AP0",
    "CONFIG",
    "SPACES",
    # Errors
    "AcesmodError",
    "FormatError",
    "ResourceError",
    "IncompleteDataWarning",
    # Protocols
    "TextFetcher",
    "ColorConverter",
    # Version
    "__version__",
]
