"""
TransformPipeline: display sRGB to ACES color conversion with LUT fallback.

The official display sRGB -> ACEScg transform runs three steps:

1. 3D LUT: display sRGB -> Log2 48-nit shaper space
2. 1D LUT: shaper -> linear ACES2065-1 (AP0), per channel
3. Matrix: AP0 -> AP1 (ACEScg)

Until both LUTs are loaded (or after a failed load) steps 1-2 are replaced
by the ``nuke_inverse_odt`` polynomial. The switch is transparent to
callers: "not ready" is a normal steady state, not an error.

Other target spaces go through linear sRGB, the registry matrix and the
space's encoding.

Example:
    >>> pipeline = TransformPipeline()
    >>> pipeline.convert(0.5, 0.5, 0.5)           # fallback polynomial
    >>> asyncio.run(pipeline.load(LutLoader("luts")))
    >>> pipeline.convert(0.5, 0.5, 0.5)           # official LUT chain
    >>> pipeline.convert(0.5, 0.5, 0.5, target="ACEScct")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from acesmod.color.matrix import apply_matrix_3x3, apply_matrix_array
from acesmod.color.transfer import (
    decode,
    encode,
    linear_to_srgb,
    nuke_inverse_odt,
    nuke_odt,
    srgb_to_linear,
)
from acesmod.config import CONFIG, AcesmodConfig, RGBValues
from acesmod.config.spaces import AP0_TO_AP1, AP1_TO_AP0, ColorSpaceSpec, Encoding
from acesmod.errors import FormatError, ResourceError
from acesmod.loader import LutLoader
from acesmod.lut.common import as_rgb_array
from acesmod.lut.spi1d import Spi1dTable, parse_spi1d
from acesmod.lut.spi3d import Spi3dTable, parse_spi3d

logger = logging.getLogger(__name__)

SOURCE_ENCODINGS = ("display", "linear")


# =============================================================================
# Pipeline state
# =============================================================================


@dataclass(frozen=True)
class Unloaded:
    """No load attempted yet."""


@dataclass(frozen=True)
class Loading:
    """A load is in progress."""


@dataclass(frozen=True, eq=False)
class Ready:
    """Both LUTs parsed; the official path is active."""

    lut3d: Spi3dTable
    lut1d: Spi1dTable


@dataclass(frozen=True, eq=False)
class Failed:
    """The load failed; the fallback stays active for this pipeline's lifetime."""

    error: BaseException


PipelineState = Unloaded | Loading | Ready | Failed


def _check_source(source: str) -> str:
    key = source.strip().lower()
    if key not in SOURCE_ENCODINGS:
        raise ValueError(f"source must be one of {SOURCE_ENCODINGS}, got {source!r}")
    return key


class TransformPipeline:
    """Color conversion pipeline holding the optional LUT pair.

    State moves Unloaded -> Loading -> Ready | Failed exactly once. Only
    Ready uses the LUTs; every other state uses the polynomial fallback.
    Conversions only read immutable tables, so they are safe to call from
    several threads.

    :param config: Configuration providing LUT locations, fallback
        coefficients and the color space registry
    """

    __slots__ = ("config", "_state")

    def __init__(self, config: AcesmodConfig = CONFIG):
        self.config = config
        self._state: PipelineState = Unloaded()

    # ========================================================================
    # State
    # ========================================================================

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def ready(self) -> bool:
        """True only when both LUTs loaded successfully."""
        return isinstance(self._state, Ready)

    @property
    def error(self) -> BaseException | None:
        """Error that caused the Failed state, if any."""
        match self._state:
            case Failed(error=error):
                return error
            case _:
                return None

    def status(self) -> dict[str, Any]:
        """Diagnostics snapshot: state name, LUT sizes and error message."""
        info: dict[str, Any] = {
            "state": type(self._state).__name__.lower(),
            "lut3d_size": None,
            "lut1d_size": None,
            "error": None,
        }
        match self._state:
            case Ready(lut3d=lut3d, lut1d=lut1d):
                info["lut3d_size"] = lut3d.size
                info["lut1d_size"] = lut1d.size
            case Failed(error=error):
                info["error"] = str(error)
        return info

    def _begin_load(self) -> None:
        match self._state:
            case Unloaded():
                self._state = Loading()
                logger.info("[Pipeline] Loading LUTs")
            case _:
                raise RuntimeError(
                    f"Pipeline already {type(self._state).__name__.lower()}; "
                    "create a new TransformPipeline to load again"
                )

    def _fail(self, error: BaseException) -> None:
        self._state = Failed(error)
        logger.error("[Pipeline] LUT load failed, using polynomial fallback: %s", error)

    def _install(self, spi3d_text: str, spi1d_text: str) -> bool:
        try:
            lut3d = parse_spi3d(spi3d_text, strict=self.config.lut.strict)
            lut1d = parse_spi1d(spi1d_text, strict=self.config.lut.strict)
        except FormatError as e:
            self._fail(e)
            return False
        except BaseException as e:
            self._fail(e)
            raise

        self._state = Ready(lut3d, lut1d)
        logger.info("[Pipeline] LUTs loaded: 3D=%d^3, 1D=%d entries", lut3d.size, lut1d.size)
        return True

    def load_text(self, spi3d_text: str, spi1d_text: str) -> bool:
        """Load from already-fetched LUT texts.

        :returns: True if the pipeline is now Ready, False if it Failed
        :raises RuntimeError: If a load was already attempted
        """
        self._begin_load()
        return self._install(spi3d_text, spi1d_text)

    async def load(self, loader: LutLoader | None = None) -> bool:
        """Fetch both LUTs concurrently, then parse them.

        Fetch or parse failures leave the pipeline Failed with the error
        retained; no retry is attempted.

        :param loader: LutLoader to use; built from ``config.lut`` if omitted
        :returns: True if the pipeline is now Ready, False if it Failed
        :raises RuntimeError: If a load was already attempted
        """
        self._begin_load()
        if loader is None:
            loader = LutLoader.from_config(self.config.lut)

        try:
            spi3d_text, spi1d_text = await loader.fetch()
        except ResourceError as e:
            self._fail(e)
            return False
        except BaseException as e:
            self._fail(e)
            raise

        return self._install(spi3d_text, spi1d_text)

    # ========================================================================
    # Official transform
    # ========================================================================

    def srgb_to_aces2065(self, r: float, g: float, b: float) -> tuple[float, float, float]:
        """Display sRGB -> linear AP0 via the LUT pair, or the polynomial fallback."""
        match self._state:
            case Ready(lut3d=lut3d, lut1d=lut1d):
                return lut1d.apply(lut3d.sample(r, g, b))
            case _:
                coefficients = self.config.fallback.coefficients
                return (
                    nuke_inverse_odt(float(r), coefficients),
                    nuke_inverse_odt(float(g), coefficients),
                    nuke_inverse_odt(float(b), coefficients),
                )

    def srgb_to_acescg(self, r: float, g: float, b: float) -> tuple[float, float, float]:
        """Display sRGB -> ACEScg (linear AP1) through the official chain."""
        return apply_matrix_3x3(self.srgb_to_aces2065(r, g, b), AP0_TO_AP1)

    def aces2065_to_srgb(self, r: float, g: float, b: float) -> tuple[float, float, float]:
        """Linear AP0 -> display sRGB, undoing whichever path ``srgb_to_aces2065`` takes.

        Ready: invert the 1D LUT per channel, then solve the 3D LUT for the
        display input. Otherwise: the closed-form root of the fallback
        polynomial. Results lie in [0, 1].
        """
        coefficients = self.config.fallback.coefficients
        estimate = (
            nuke_odt(float(r), coefficients),
            nuke_odt(float(g), coefficients),
            nuke_odt(float(b), coefficients),
        )
        match self._state:
            case Ready(lut3d=lut3d, lut1d=lut1d):
                return lut3d.invert(*lut1d.invert_rgb((r, g, b)), guess=estimate)
            case _:
                return estimate

    def acescg_to_srgb(self, r: float, g: float, b: float) -> tuple[float, float, float]:
        """ACEScg -> display sRGB; inverse of ``srgb_to_acescg``."""
        return self.aces2065_to_srgb(*apply_matrix_3x3((r, g, b), AP1_TO_AP0))

    def _srgb_to_aces2065_array(self, rgb: np.ndarray) -> np.ndarray:
        match self._state:
            case Ready(lut3d=lut3d, lut1d=lut1d):
                return lut1d.apply_array(lut3d.sample_array(rgb))
            case _:
                return nuke_inverse_odt(rgb, self.config.fallback.coefficients)

    # ========================================================================
    # Conversion
    # ========================================================================

    def _is_official(self, spec: ColorSpaceSpec) -> bool:
        spaces = self.config.spaces
        return spec.name in (spaces.acescg.name, spaces.aces2065_1.name)

    def convert(
        self,
        r: float,
        g: float,
        b: float,
        source: str = "display",
        target: str = "ACEScg",
    ) -> tuple[float, float, float]:
        """Convert one color into ``target``.

        :param r, g, b: Input channels
        :param source: "display" for sRGB-encoded input in [0, 1], "linear"
            for linear sRGB
        :param target: Registered color space name (case-insensitive)
        :returns: Converted triple; out-of-gamut values are not clamped
        :raises KeyError: If ``target`` is not registered
        :raises ValueError: If ``source`` is not a known encoding
        """
        source = _check_source(source)
        spec = self.config.spaces.get(target)

        if source == "display":
            if spec.encoding is Encoding.DISPLAY:
                return float(r), float(g), float(b)
            if spec.name == self.config.spaces.acescg.name:
                return self.srgb_to_acescg(r, g, b)
            if spec.name == self.config.spaces.aces2065_1.name:
                return self.srgb_to_aces2065(r, g, b)
            linear = (srgb_to_linear(float(r)), srgb_to_linear(float(g)), srgb_to_linear(float(b)))
        else:
            linear = (float(r), float(g), float(b))

        target_linear = apply_matrix_3x3(linear, spec.to_target_matrix)
        return (
            encode(target_linear[0], spec.encoding),
            encode(target_linear[1], spec.encoding),
            encode(target_linear[2], spec.encoding),
        )

    def convert_array(
        self,
        rgb: np.ndarray,
        source: str = "display",
        target: str = "ACEScg",
    ) -> np.ndarray:
        """Convert every row of an [N, 3] array; same semantics as ``convert``.

        :returns: New float64 array [N, 3]
        """
        source = _check_source(source)
        spec = self.config.spaces.get(target)
        arr = as_rgb_array(rgb)

        if source == "display":
            if spec.encoding is Encoding.DISPLAY:
                return arr.copy()
            if self._is_official(spec):
                aces2065 = self._srgb_to_aces2065_array(arr)
                if spec.name == self.config.spaces.aces2065_1.name:
                    return aces2065
                return apply_matrix_array(aces2065, AP0_TO_AP1)
            linear = srgb_to_linear(arr)
        else:
            linear = arr

        return encode(apply_matrix_array(linear, spec.to_target_matrix), spec.encoding)

    def to_display(
        self, r: float, g: float, b: float, source_space: str
    ) -> tuple[float, float, float]:
        """Convert a color in ``source_space`` back to display sRGB.

        ACEScg and ACES2065-1 undo the same path ``convert`` takes (LUT pair
        or polynomial), so ``to_display(convert(c))`` gives back ``c``. Other
        spaces decode their encoding, apply the inverse registry matrix and
        re-encode with the sRGB curve.

        :returns: Display sRGB; unclamped except for the ACES spaces
        """
        spec = self.config.spaces.get(source_space)
        if spec.encoding is Encoding.DISPLAY:
            return float(r), float(g), float(b)
        if spec.name == self.config.spaces.acescg.name:
            return self.acescg_to_srgb(r, g, b)
        if spec.name == self.config.spaces.aces2065_1.name:
            return self.aces2065_to_srgb(r, g, b)

        target_linear = (
            decode(float(r), spec.encoding),
            decode(float(g), spec.encoding),
            decode(float(b), spec.encoding),
        )
        linear = apply_matrix_3x3(target_linear, spec.inverse_matrix)
        return linear_to_srgb(linear[0]), linear_to_srgb(linear[1]), linear_to_srgb(linear[2])

    # ========================================================================
    # Hex helpers
    # ========================================================================

    def update_from_hex(self, text: str, target: str = "ACEScg") -> tuple[float, float, float]:
        """Convert a display hex color (``#rrggbb`` or ``#rgb``) into ``target``.

        :raises ValueError: If ``text`` is not a hex color
        """
        return self.convert(*RGBValues.from_hex(text), source="display", target=target)

    def to_hex(self, r: float, g: float, b: float, source_space: str) -> str:
        """Display hex for a color in ``source_space`` (clamped to the display gamut)."""
        return RGBValues.from_sequence(self.to_display(r, g, b, source_space)).to_hex()

    def __repr__(self) -> str:
        return f"TransformPipeline(state={type(self._state).__name__})"
