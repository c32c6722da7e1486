"""Configuration module for acesmod.

Usage:
    # Unified access
    from acesmod.config import CONFIG
    CONFIG.lut.spi3d_name
    CONFIG.spaces.get("ACEScct").encoding

    # Direct access
    from acesmod.config import SPACES, LUT_CONFIG
"""

from acesmod.config.config import (
    CONFIG,
    FALLBACK_CONFIG,
    LUT_CONFIG,
    SPACES,
    AcesmodConfig,
)
from acesmod.config.lut import (
    FallbackConfig,
    LutConfig,
    load_lut_config_json,
    lut_config_from_dict,
    lut_config_to_dict,
    save_lut_config_json,
)
from acesmod.config.spaces import (
    AP0_TO_AP1,
    AP1_TO_AP0,
    IDENTITY_3X3,
    SRGB_TO_AP0,
    SRGB_TO_AP1,
    ColorSpaceConfig,
    ColorSpaceSpec,
    Encoding,
)
from acesmod.config.values import RGBValues

__all__ = [
    # Core types
    "AcesmodConfig",
    "LutConfig",
    "FallbackConfig",
    "ColorSpaceConfig",
    "ColorSpaceSpec",
    "Encoding",
    "RGBValues",
    # Matrices
    "AP0_TO_AP1",
    "AP1_TO_AP0",
    "SRGB_TO_AP0",
    "SRGB_TO_AP1",
    "IDENTITY_3X3",
    # Loading functions
    "lut_config_from_dict",
    "lut_config_to_dict",
    "load_lut_config_json",
    "save_lut_config_json",
    # Singletons
    "CONFIG",
    "LUT_CONFIG",
    "FALLBACK_CONFIG",
    "SPACES",
]
