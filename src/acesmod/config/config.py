"""Unified acesmod configuration.

This module provides a top-level configuration dataclass that contains
the LUT, fallback and color space configurations as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass

from acesmod.config.lut import FallbackConfig, LutConfig
from acesmod.config.spaces import ColorSpaceConfig


@dataclass(frozen=True)
class AcesmodConfig:
    """Top-level configuration.

    Provides hierarchical access:
        CONFIG.lut.spi3d_name
        CONFIG.fallback.coefficients
        CONFIG.spaces.get("ACEScct")

    Attributes:
        lut: Where to fetch LUTs and how strictly to parse them
        fallback: Polynomial used while LUTs are not loaded
        spaces: Registry of target color spaces
    """

    lut: LutConfig = LutConfig()
    fallback: FallbackConfig = FallbackConfig()
    spaces: ColorSpaceConfig = ColorSpaceConfig()


# Main singleton instance
CONFIG = AcesmodConfig()

LUT_CONFIG = CONFIG.lut
FALLBACK_CONFIG = CONFIG.fallback
SPACES = CONFIG.spaces
