"""LUT acquisition and fallback configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path


@dataclass(frozen=True)
class LutConfig:
    """Where the official transform LUTs live and how strictly to parse them.

    Attributes:
        base: Directory path or URL prefix holding both LUT files
        spi3d_name: Display sRGB -> Log2 shaper 3D LUT
        spi1d_name: Log2 shaper -> linear ACES2065-1 1D LUT
        timeout: Seconds allowed per remote fetch
        strict: Treat incomplete LUT data as a FormatError instead of a warning
    """

    base: str = "luts"
    spi3d_name: str = "InvRRT.sRGB.Log2_48_nits_Shaper.spi3d"
    spi1d_name: str = "Log2_48_nits_Shaper_to_linear.spi1d"
    timeout: float = 30.0
    strict: bool = False


@dataclass(frozen=True)
class FallbackConfig:
    """Polynomial used in place of the LUT chain while LUTs are unavailable.

    ``nuke_inverse_odt(x) = c0 + c1*x + c2*x**2`` on display values clamped
    to [0, 1]; the result is treated as linear ACES2065-1.
    """

    coefficients: tuple[float, float, float] = (0.0, 0.124, 0.762)


def lut_config_from_dict(d: dict) -> LutConfig:
    """Create LutConfig from a dictionary, ignoring unknown keys.

    :param d: Dictionary with LutConfig fields
    :returns: LutConfig instance

    Example:
        >>> cfg = lut_config_from_dict({"base": "https://example.com/luts", "strict": True})
    """
    valid_fields = {"base", "spi3d_name", "spi1d_name", "timeout", "strict"}
    kwargs = {k: v for k, v in d.items() if k in valid_fields}
    if "timeout" in kwargs:
        kwargs["timeout"] = float(kwargs["timeout"])
    if "strict" in kwargs:
        kwargs["strict"] = bool(kwargs["strict"])
    return LutConfig(**kwargs)


def lut_config_to_dict(config: LutConfig) -> dict:
    """Convert LutConfig to a dictionary."""
    return asdict(config)


def load_lut_config_json(path: str | Path) -> LutConfig:
    """Load LutConfig from a JSON file.

    :param path: Path to JSON file
    :returns: LutConfig instance
    """
    with open(path) as f:
        d = json.load(f)
    return lut_config_from_dict(d)


def save_lut_config_json(config: LutConfig, path: str | Path) -> None:
    """Save LutConfig to a JSON file.

    :param config: LutConfig instance
    :param path: Output path
    """
    with open(path, "w") as f:
        json.dump(lut_config_to_dict(config), f, indent=2)
