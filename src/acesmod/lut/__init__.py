"""SPI LUT parsing and sampling.

- Spi3dTable / parse_spi3d: cubic 3D LUT with trilinear sampling
- Spi1dTable / parse_spi1d: 1D LUT with linear sampling
"""

from acesmod.lut.spi1d import Spi1dTable, apply_lut1d, parse_spi1d, sample_lut1d
from acesmod.lut.spi3d import Spi3dTable, parse_spi3d, sample_lut3d

__all__ = [
    "Spi3dTable",
    "Spi1dTable",
    "parse_spi3d",
    "parse_spi1d",
    "sample_lut3d",
    "sample_lut1d",
    "apply_lut1d",
]
