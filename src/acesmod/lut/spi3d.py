"""Sony Pictures Imageworks 3D LUT (.spi3d): parsing and trilinear sampling.

Format:
    SPILUT 1.0
    3 3
    {N} {N} {N}
    {r_idx} {g_idx} {b_idx} {R} {G} {B}     (N**3 lines)

Blank lines and ``#`` comments are ignored anywhere. Data lines carry their
own grid coordinates, so line order does not matter.

Example:
    >>> lut = parse_spi3d(Path("InvRRT.sRGB.Log2_48_nits_Shaper.spi3d").read_text())
    >>> r, g, b = lut.sample(0.5, 0.5, 0.5)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from acesmod.errors import FormatError
from acesmod.lut.common import as_rgb_array, clamp01, freeze, report_incomplete
from acesmod.lut.kernels import trilinear_sample_numba

logger = logging.getLogger(__name__)

SPI3D_MAGIC = "SPILUT 1.0"
SPI3D_DIMENSIONS = "3 3"


@dataclass(frozen=True, eq=False)
class Spi3dTable:
    """Parsed cubic 3D LUT.

    Attributes:
        size: Grid edge length (size**3 nodes)
        data: Read-only float32 array [size**3 * 3], index
            ``(b*size*size + g*size + r)*3 + channel``
        entries_read: Data lines consumed while parsing
    """

    size: int
    data: np.ndarray = field(repr=False)
    entries_read: int = -1

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"size must be positive, got {self.size}")
        expected = self.size**3 * 3
        data = np.asarray(self.data).reshape(-1)
        if data.shape[0] != expected:
            raise ValueError(
                f"Expected {expected} values for a {self.size}^3 LUT, got {data.shape[0]}"
            )
        object.__setattr__(self, "data", freeze(data))
        if self.entries_read < 0:
            object.__setattr__(self, "entries_read", self.size**3)

    @property
    def max_index(self) -> int:
        return self.size - 1

    def node(self, ri: int, gi: int, bi: int) -> tuple[float, float, float]:
        """Stored value at integer grid coordinates."""
        idx = (bi * self.size * self.size + gi * self.size + ri) * 3
        d = self.data
        return float(d[idx]), float(d[idx + 1]), float(d[idx + 2])

    def sample(self, r: float, g: float, b: float) -> tuple[float, float, float]:
        """Trilinear lookup; inputs are clamped to [0, 1], output is not.

        Interpolates along R first (4 lerps), then G (2), then B (1).
        """
        max_index = self.size - 1
        rs = clamp01(float(r)) * max_index
        gs = clamp01(float(g)) * max_index
        bs = clamp01(float(b)) * max_index

        r0 = int(rs)
        g0 = int(gs)
        b0 = int(bs)
        r1 = min(r0 + 1, max_index)
        g1 = min(g0 + 1, max_index)
        b1 = min(b0 + 1, max_index)

        dr = rs - r0
        dg = gs - g0
        db = bs - b0

        c000 = self.node(r0, g0, b0)
        c100 = self.node(r1, g0, b0)
        c010 = self.node(r0, g1, b0)
        c110 = self.node(r1, g1, b0)
        c001 = self.node(r0, g0, b1)
        c101 = self.node(r1, g0, b1)
        c011 = self.node(r0, g1, b1)
        c111 = self.node(r1, g1, b1)

        result = []
        for ch in range(3):
            c00 = c000[ch] + dr * (c100[ch] - c000[ch])
            c01 = c010[ch] + dr * (c110[ch] - c010[ch])
            c10 = c001[ch] + dr * (c101[ch] - c001[ch])
            c11 = c011[ch] + dr * (c111[ch] - c011[ch])

            c0 = c00 + dg * (c01 - c00)
            c1 = c10 + dg * (c11 - c10)

            result.append(c0 + db * (c1 - c0))

        return result[0], result[1], result[2]

    def invert(
        self,
        r: float,
        g: float,
        b: float,
        guess: tuple[float, float, float] | None = None,
        max_iterations: int = 32,
        tolerance: float = 1e-10,
    ) -> tuple[float, float, float]:
        """Input in [0, 1]^3 whose trilinear lookup gives (r, g, b).

        Newton iteration with a one-sided finite-difference Jacobian, kept
        inside the unit cube. Converges for tables that are monotonic along
        each axis; otherwise the last iterate is returned.

        :param guess: Starting point; the cube center if omitted
        :param tolerance: Largest accepted per-channel output error
        """
        target = np.array([r, g, b], dtype=np.float64)
        x = np.full(3, 0.5) if guess is None else np.clip(np.asarray(guess, np.float64), 0.0, 1.0)
        h = 1e-6

        for _ in range(max_iterations):
            fx = np.array(self.sample(*x))
            residual = fx - target
            if np.abs(residual).max() <= tolerance:
                break
            jacobian = np.empty((3, 3))
            for axis in range(3):
                step = h if x[axis] < 0.5 else -h
                xh = x.copy()
                xh[axis] += step
                jacobian[:, axis] = (np.array(self.sample(*xh)) - fx) / step
            try:
                delta = np.linalg.solve(jacobian, residual)
            except np.linalg.LinAlgError:
                delta = np.linalg.lstsq(jacobian, residual, rcond=None)[0]
            x = np.clip(x - delta, 0.0, 1.0)

        return float(x[0]), float(x[1]), float(x[2])

    def sample_array(self, rgb: np.ndarray) -> np.ndarray:
        """Trilinear lookup for every row of an [N, 3] array.

        :param rgb: Display values [N, 3] (or a single triple)
        :returns: New float64 array [N, 3]
        """
        arr = as_rgb_array(rgb)
        out = np.empty_like(arr)
        trilinear_sample_numba(self.data, self.size, arr, out)
        return out

    def to_text(self) -> str:
        """Serialize back to .spi3d text (R fastest, then G, then B)."""
        n = self.size
        lines = [SPI3D_MAGIC, SPI3D_DIMENSIONS, f"{n} {n} {n}"]
        for bi in range(n):
            for gi in range(n):
                for ri in range(n):
                    R, G, B = self.node(ri, gi, bi)
                    lines.append(f"{ri} {gi} {bi} {R:.8g} {G:.8g} {B:.8g}")
        return "\n".join(lines) + "\n"

    @classmethod
    def identity(cls, size: int = 2) -> Spi3dTable:
        """Cube whose every node maps to its own normalized coordinates."""
        if size < 2:
            raise ValueError(f"identity LUT needs size >= 2, got {size}")
        ramp = np.linspace(0.0, 1.0, size, dtype=np.float32)
        b, g, r = np.meshgrid(ramp, ramp, ramp, indexing="ij")
        data = np.stack([r, g, b], axis=-1).reshape(-1)
        return cls(size=size, data=data)

    @classmethod
    def from_text(cls, text: str, strict: bool = False) -> Spi3dTable:
        return parse_spi3d(text, strict=strict)


class _Spi3dState(Enum):
    MAGIC = auto()
    DIMENSIONS = auto()
    SIZE = auto()
    DATA = auto()
    DONE = auto()


def _parse_size(line: str, line_number: int) -> int:
    parts = line.split()
    try:
        sizes = [int(p) for p in parts]
    except ValueError:
        raise FormatError(f"Invalid spi3d size line: {line!r}", line_number) from None
    if len(sizes) != 3 or sizes[0] != sizes[1] or sizes[1] != sizes[2]:
        raise FormatError(f"Non-uniform LUT size is not supported: {line!r}", line_number)
    if sizes[0] < 1:
        raise FormatError(f"LUT size must be positive: {line!r}", line_number)
    return sizes[0]


def parse_spi3d(text: str, strict: bool = False) -> Spi3dTable:
    """Parse .spi3d text into a Spi3dTable.

    :param text: Raw file content
    :param strict: Raise FormatError instead of warning when fewer than N**3
        entries are present
    :returns: Parsed table; unwritten nodes are zero. Unparsable data lines
        are skipped like missing ones.
    :raises FormatError: On a bad magic, dimension or size line
    """
    state = _Spi3dState.MAGIC
    size = 0
    total = 0
    entries = 0
    skipped = 0
    invalid = 0
    data: np.ndarray | None = None

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if state is _Spi3dState.MAGIC:
            if line != SPI3D_MAGIC:
                raise FormatError(f"Invalid spi3d magic number: {line!r}", line_number)
            state = _Spi3dState.DIMENSIONS

        elif state is _Spi3dState.DIMENSIONS:
            if line != SPI3D_DIMENSIONS:
                raise FormatError(f"Unexpected spi3d dimensions: {line!r}", line_number)
            state = _Spi3dState.SIZE

        elif state is _Spi3dState.SIZE:
            size = _parse_size(line, line_number)
            total = size**3
            data = np.zeros(total * 3, dtype=np.float32)
            state = _Spi3dState.DATA

        elif state is _Spi3dState.DATA:
            parts = line.split()
            if len(parts) < 6:
                continue
            try:
                ri, gi, bi = int(parts[0]), int(parts[1]), int(parts[2])
                values = (float(parts[3]), float(parts[4]), float(parts[5]))
            except ValueError:
                logger.debug("[Spi3d] Skipping unparsable line %d: %r", line_number, line)
                invalid += 1
                continue

            if not (0 <= ri < size and 0 <= gi < size and 0 <= bi < size):
                skipped += 1
                continue

            idx = (bi * size * size + gi * size + ri) * 3
            data[idx : idx + 3] = values
            entries += 1
            if entries == total:
                state = _Spi3dState.DONE
                break

    if state in (_Spi3dState.MAGIC, _Spi3dState.DIMENSIONS, _Spi3dState.SIZE):
        raise FormatError(f"Truncated spi3d header (stopped at {state.name.lower()})")

    if skipped:
        logger.debug("[Spi3d] Skipped %d entries with out-of-range coordinates", skipped)
    if invalid:
        logger.debug("[Spi3d] Skipped %d unparsable data lines", invalid)
    if entries < total:
        report_incomplete("spi3d", total, entries, strict)

    logger.debug("[Spi3d] Parsed %d^3 LUT (%d entries)", size, entries)
    return Spi3dTable(size=size, data=data, entries_read=entries)


def sample_lut3d(lut: Spi3dTable, r: float, g: float, b: float) -> tuple[float, float, float]:
    """Trilinear lookup of (r, g, b) in ``lut``."""
    return lut.sample(r, g, b)
