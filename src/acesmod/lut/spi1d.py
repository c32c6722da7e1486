"""Sony Pictures Imageworks 1D LUT (.spi1d): parsing and linear sampling.

Format:
    Version 1
    From {min} {max}
    Length {size}
    Components {1|3}
    {
        {value} ...
    }

Header keywords may come in any order before ``{``; the block holds
whitespace-separated floats, any number per line, sample-major.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from acesmod.errors import FormatError
from acesmod.lut.common import as_rgb_array, clamp01, freeze, report_incomplete
from acesmod.lut.kernels import linear_sample_1d_numba

logger = logging.getLogger(__name__)

SUPPORTED_COMPONENTS = (1, 3)


@dataclass(frozen=True, eq=False)
class Spi1dTable:
    """Parsed 1D LUT.

    With one component the same curve serves every channel; with three,
    channel ``c`` of sample ``i`` lives at ``data[i*3 + c]``.

    Attributes:
        min: Input value mapped to the first sample
        max: Input value mapped to the last sample
        size: Number of samples
        components: 1 or 3
        data: Read-only float32 array [size * components]
        version: Value of the Version header, if present
    """

    min: float
    max: float
    size: int
    components: int
    data: np.ndarray = field(repr=False)
    version: int | None = None

    def __post_init__(self):
        if self.components not in SUPPORTED_COMPONENTS:
            raise ValueError(f"components must be 1 or 3, got {self.components}")
        if self.size < 1:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.max == self.min:
            raise ValueError(f"Empty input domain [{self.min}, {self.max}]")
        data = np.asarray(self.data).reshape(-1)
        expected = self.size * self.components
        if data.shape[0] != expected:
            raise ValueError(f"Expected {expected} values, got {data.shape[0]}")
        object.__setattr__(self, "data", freeze(data))

    def sample(self, value: float, channel: int = 0) -> float:
        """Linear lookup of one value.

        :param value: Input in the table's domain (clamped to [min, max])
        :param channel: Curve to read when components == 3
        """
        t = clamp01((float(value) - self.min) / (self.max - self.min))
        max_index = self.size - 1
        scaled = t * max_index
        i0 = int(scaled)
        i1 = min(i0 + 1, max_index)
        frac = scaled - i0

        k = self.components
        c = channel if k == 3 else 0
        a = float(self.data[i0 * k + c])
        b = float(self.data[i1 * k + c])
        return a + frac * (b - a)

    def apply(self, rgb: Sequence[float]) -> tuple[float, float, float]:
        """Apply the curve(s) independently to R, G and B."""
        return (
            self.sample(rgb[0], 0),
            self.sample(rgb[1], 1),
            self.sample(rgb[2], 2),
        )

    def invert(self, value: float, channel: int = 0) -> float:
        """Input whose linear lookup gives ``value``.

        Exact for monotonic curves; values past either end of the curve map
        to the matching domain bound. Flat runs return their first input.
        """
        k = self.components
        if self.size == 1:
            return float(self.min)
        c = channel if k == 3 else 0
        curve = self.data[c::k].astype(np.float64)
        positions = np.linspace(self.min, self.max, self.size)
        if curve[-1] < curve[0]:
            curve = curve[::-1]
            positions = positions[::-1]
        return float(np.interp(float(value), curve, positions))

    def invert_rgb(self, rgb: Sequence[float]) -> tuple[float, float, float]:
        """Per-channel ``invert``; undoes ``apply``."""
        return (
            self.invert(rgb[0], 0),
            self.invert(rgb[1], 1),
            self.invert(rgb[2], 2),
        )

    def apply_array(self, rgb: np.ndarray) -> np.ndarray:
        """Apply the curve(s) to every row of an [N, 3] array.

        :returns: New float64 array [N, 3]
        """
        arr = as_rgb_array(rgb)
        out = np.empty_like(arr)
        linear_sample_1d_numba(
            self.data, self.size, self.components, float(self.min), float(self.max), arr, out
        )
        return out

    def to_text(self) -> str:
        """Serialize back to .spi1d text."""
        lines = [
            f"Version {self.version if self.version is not None else 1}",
            f"From {self.min:.8g} {self.max:.8g}",
            f"Length {self.size}",
            f"Components {self.components}",
            "{",
        ]
        k = self.components
        for i in range(self.size):
            row = self.data[i * k : (i + 1) * k]
            lines.append("    " + " ".join(f"{float(v):.8g}" for v in row))
        lines.append("}")
        return "\n".join(lines) + "\n"

    @classmethod
    def from_text(cls, text: str, strict: bool = False) -> Spi1dTable:
        return parse_spi1d(text, strict=strict)


class _Spi1dState(Enum):
    HEADER = auto()
    DATA_BLOCK = auto()
    DONE = auto()


def _header_args(keyword: str, args: list[str], count: int, line_number: int) -> list[str]:
    if len(args) < count:
        raise FormatError(f"{keyword} expects {count} value(s), got {len(args)}", line_number)
    return args[:count]


def parse_spi1d(text: str, strict: bool = False) -> Spi1dTable:
    """Parse .spi1d text into a Spi1dTable.

    :param text: Raw file content
    :param strict: Raise FormatError instead of warning when the block holds
        fewer than size*components values
    :returns: Parsed table; missing values are zero, extra and unparsable
        values ignored
    :raises FormatError: If no data block is found, no values were read, or a
        header is malformed
    """
    state = _Spi1dState.HEADER
    version: int | None = None
    domain_min, domain_max = 0.0, 1.0
    size = 0
    components = 1
    data: np.ndarray | None = None
    count = 0
    extra = 0

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if state is _Spi1dState.HEADER:
            if line == "{":
                if components not in SUPPORTED_COMPONENTS:
                    raise FormatError(f"Unsupported component count: {components}", line_number)
                if size < 1:
                    raise FormatError(f"Length must be positive, got {size}", line_number)
                if domain_max == domain_min:
                    raise FormatError(
                        f"Empty input domain: From {domain_min} {domain_max}", line_number
                    )
                data = np.zeros(size * components, dtype=np.float32)
                state = _Spi1dState.DATA_BLOCK
                continue

            keyword, *args = line.split()
            try:
                if keyword == "Version":
                    (v,) = _header_args(keyword, args, 1, line_number)
                    version = int(v)
                elif keyword == "From":
                    lo, hi = _header_args(keyword, args, 2, line_number)
                    domain_min, domain_max = float(lo), float(hi)
                elif keyword == "Length":
                    (v,) = _header_args(keyword, args, 1, line_number)
                    size = int(v)
                elif keyword == "Components":
                    (v,) = _header_args(keyword, args, 1, line_number)
                    components = int(v)
                else:
                    logger.debug("[Spi1d] Ignoring line %d: %r", line_number, line)
            except FormatError:
                raise
            except ValueError:
                raise FormatError(f"Invalid {keyword} header: {line!r}", line_number) from None

        elif state is _Spi1dState.DATA_BLOCK:
            if line == "}":
                state = _Spi1dState.DONE
                break
            for token in line.split():
                if count >= data.shape[0]:
                    extra += 1
                    continue
                try:
                    data[count] = float(token)
                except ValueError:
                    logger.debug(
                        "[Spi1d] Skipping unparsable value %r on line %d", token, line_number
                    )
                    continue
                count += 1

    if data is None:
        raise FormatError("Failed to parse spi1d data: no data block found")
    if count == 0:
        raise FormatError("Failed to parse spi1d data: data block is empty")
    if state is _Spi1dState.DATA_BLOCK:
        logger.debug("[Spi1d] Data block not closed with '}'")
    if extra:
        logger.debug("[Spi1d] Ignored %d values beyond Length*Components", extra)
    if count < data.shape[0]:
        report_incomplete("spi1d", data.shape[0], count, strict)

    logger.debug(
        "[Spi1d] Parsed %d samples x %d components over [%g, %g]",
        size,
        components,
        domain_min,
        domain_max,
    )
    return Spi1dTable(
        min=domain_min,
        max=domain_max,
        size=size,
        components=components,
        data=data,
        version=version,
    )


def sample_lut1d(lut: Spi1dTable, value: float, channel: int = 0) -> float:
    """Linear lookup of ``value`` in ``lut``."""
    return lut.sample(value, channel)


def apply_lut1d(lut: Spi1dTable, rgb: Sequence[float]) -> tuple[float, float, float]:
    """Apply ``lut`` independently to each channel of ``rgb``."""
    return lut.apply(rgb)
