"""Color space registry.

Each named space declares the matrix that takes linear sRGB (Rec.709
primaries, D65) into its own primaries, plus the transfer encoding applied
afterwards. Matrices are row-major 3x3 tuples so descriptors stay immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from functools import cached_property

import numpy as np

Matrix3 = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]

IDENTITY_3X3: Matrix3 = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)

# ACES2065-1 (AP0) to ACEScg (AP1), from the ACES OCIO config
AP0_TO_AP1: Matrix3 = (
    (1.4514393161, -0.2365107469, -0.2149285693),
    (-0.0765537734, 1.1762296998, -0.0996759264),
    (0.0083161484, -0.0060324498, 0.9977163014),
)

AP1_TO_AP0: Matrix3 = (
    (0.6954522414, 0.1406786965, 0.1638690622),
    (0.0447945634, 0.8596711185, 0.0955343182),
    (-0.0055258826, 0.0040252103, 1.0015006723),
)

# Linear sRGB (D65) to AP1 / AP0 (D60), Bradford adapted
SRGB_TO_AP1: Matrix3 = (
    (0.6130973200, 0.3395228500, 0.0473792800),
    (0.0701942200, 0.9163555700, 0.0134502100),
    (0.0206156000, 0.1095698300, 0.8698151200),
)

SRGB_TO_AP0: Matrix3 = (
    (0.4396329800, 0.3829887000, 0.1773783200),
    (0.0897764400, 0.8134394300, 0.0967841300),
    (0.0175411700, 0.1115465500, 0.8709122800),
)


class Encoding(str, Enum):
    """Transfer encoding applied after the primaries matrix."""

    LINEAR = "linear"
    LOG_CC = "log-cc"
    LOG_CCT = "log-cct"
    VIDEO_OETF = "video-oetf"
    DISPLAY = "display"


@dataclass(frozen=True)
class ColorSpaceSpec:
    """Descriptor for a named color space.

    Attributes:
        name: Display name used for lookup (case-insensitive)
        to_target_matrix: Linear sRGB -> target primaries, row-major
        encoding: Transfer encoding applied to the linear target triple
        to_linear_srgb_matrix: Target primaries -> linear sRGB; derived by
            inversion when omitted
        description: Human-readable description
    """

    name: str
    to_target_matrix: Matrix3
    encoding: Encoding
    to_linear_srgb_matrix: Matrix3 | None = None
    description: str = ""

    @property
    def matrix(self) -> np.ndarray:
        """Forward matrix as a float64 array."""
        return np.array(self.to_target_matrix, dtype=np.float64)

    @cached_property
    def inverse_matrix(self) -> np.ndarray:
        """Inverse matrix (target -> linear sRGB) as a read-only float64 array."""
        if self.to_linear_srgb_matrix is not None:
            inverse = np.array(self.to_linear_srgb_matrix, dtype=np.float64)
        else:
            inverse = np.linalg.inv(self.matrix)
        inverse.flags.writeable = False
        return inverse

    def __repr__(self) -> str:
        return f"ColorSpaceSpec({self.name}, encoding={self.encoding.value})"


@dataclass(frozen=True)
class ColorSpaceConfig:
    """Registry of every color space the pipeline can target.

    Example:
        >>> SPACES.get("acescct").encoding
        <Encoding.LOG_CCT: 'log-cct'>
    """

    srgb: ColorSpaceSpec = ColorSpaceSpec(
        name="sRGB",
        to_target_matrix=IDENTITY_3X3,
        encoding=Encoding.DISPLAY,
        to_linear_srgb_matrix=IDENTITY_3X3,
        description="Display sRGB, returned unchanged",
    )

    linear_srgb: ColorSpaceSpec = ColorSpaceSpec(
        name="Linear sRGB",
        to_target_matrix=IDENTITY_3X3,
        encoding=Encoding.LINEAR,
        to_linear_srgb_matrix=IDENTITY_3X3,
        description="Scene-linear Rec.709 primaries, D65",
    )

    rec709: ColorSpaceSpec = ColorSpaceSpec(
        name="Rec.709",
        to_target_matrix=IDENTITY_3X3,
        encoding=Encoding.VIDEO_OETF,
        to_linear_srgb_matrix=IDENTITY_3X3,
        description="Rec.709 primaries with the BT.709 camera OETF",
    )

    acescg: ColorSpaceSpec = ColorSpaceSpec(
        name="ACEScg",
        to_target_matrix=SRGB_TO_AP1,
        encoding=Encoding.LINEAR,
        description="Linear AP1",
    )

    acescc: ColorSpaceSpec = ColorSpaceSpec(
        name="ACEScc",
        to_target_matrix=SRGB_TO_AP1,
        encoding=Encoding.LOG_CC,
        description="Pure log AP1 grading space",
    )

    acescct: ColorSpaceSpec = ColorSpaceSpec(
        name="ACEScct",
        to_target_matrix=SRGB_TO_AP1,
        encoding=Encoding.LOG_CCT,
        description="Log AP1 grading space with a linear toe",
    )

    aces2065_1: ColorSpaceSpec = ColorSpaceSpec(
        name="ACES2065-1",
        to_target_matrix=SRGB_TO_AP0,
        encoding=Encoding.LINEAR,
        description="Linear AP0 interchange space",
    )

    def get(self, name: str) -> ColorSpaceSpec:
        """Look up a space by name, ignoring case.

        :param name: Space name, e.g. "ACEScg" or "rec.709"
        :returns: Matching descriptor
        :raises KeyError: If no space has that name
        """
        key = name.strip().lower()
        for spec in self._specs():
            if spec.name.lower() == key:
                return spec
        raise KeyError(f"Unknown color space {name!r}; expected one of {self.names()}")

    def names(self) -> list[str]:
        """Names of all registered spaces, in declaration order."""
        return [spec.name for spec in self._specs()]

    def get_all_specs(self) -> dict[str, ColorSpaceSpec]:
        """All descriptors keyed by name."""
        return {spec.name: spec for spec in self._specs()}

    def _specs(self) -> list[ColorSpaceSpec]:
        return [getattr(self, f.name) for f in fields(self)]
