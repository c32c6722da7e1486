"""Shared LUT text fixtures."""

import pytest

RAMP_SPI3D = """SPILUT 1.0
3 3
2 2 2
0 0 0 0.0 0.0 0.0
1 0 0 1.0 0.0 0.0
0 1 0 0.0 1.0 0.0
1 1 0 1.0 1.0 0.0
0 0 1 0.0 0.0 1.0
1 0 1 1.0 0.0 1.0
0 1 1 0.0 1.0 1.0
1 1 1 1.0 1.0 1.0
"""

IDENTITY_SPI1D = """Version 1
From 0.0 1.0
Length 2
Components 1
{
    0.0
    1.0
}
"""


@pytest.fixture
def ramp_spi3d_text():
    """2x2x2 cube whose faces ramp linearly from (0,0,0) to (1,1,1)."""
    return RAMP_SPI3D


@pytest.fixture
def identity_spi1d_text():
    """Two-sample identity curve over [0, 1]."""
    return IDENTITY_SPI1D


@pytest.fixture
def make_spi3d_text():
    """Factory building .spi3d text from a size and a node -> value function."""

    def _make(size, value_fn):
        lines = ["SPILUT 1.0", "3 3", f"{size} {size} {size}"]
        for bi in range(size):
            for gi in range(size):
                for ri in range(size):
                    r, g, b = value_fn(ri, gi, bi)
                    lines.append(f"{ri} {gi} {bi} {float(r)!r} {float(g)!r} {float(b)!r}")
        return "\n".join(lines) + "\n"

    return _make
