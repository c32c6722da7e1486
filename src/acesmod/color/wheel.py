"""Color wheel picking and display helpers.

Pure functions behind the picker UI: HSV to 8-bit RGB, hex formatting and
parsing, mapping a point on the wheel to a color, and the text copied to
the clipboard. Rounding is half-up to match what the picker displays.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass


def to_byte(value: float) -> int:
    """Map a normalized channel to 0-255 with half-up rounding (no clamping)."""
    return int(math.floor(value * 255.0 + 0.5))


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[int, int, int]:
    """Convert HSV in [0, 1] to 8-bit RGB.

    :param h: Hue, 0..1 (1 wraps to red)
    :param s: Saturation, 0..1
    :param v: Value, 0..1
    :returns: (r, g, b) as 0-255 ints
    """
    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return to_byte(r), to_byte(g), to_byte(b)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format 8-bit channels as ``#rrggbb``."""
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(text: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb``, ``rrggbb``, ``#rgb`` or ``rgb``.

    :raises ValueError: If text is not a hex color
    """
    digits = text.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6 or not all(c in string.hexdigits for c in digits):
        raise ValueError(f"Invalid hex color: {text!r}")
    value = int(digits, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


@dataclass(frozen=True)
class WheelSample:
    """Color picked from the wheel.

    Attributes:
        hue: Hue in [0, 1]
        saturation: Distance from center over radius, in [0, 1]
        rgb: 8-bit display sRGB
    """

    hue: float
    saturation: float
    rgb: tuple[int, int, int]

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.rgb)

    @property
    def normalized(self) -> tuple[float, float, float]:
        """Display sRGB in [0, 1], the input the pipeline expects."""
        r, g, b = self.rgb
        return r / 255.0, g / 255.0, b / 255.0


def wheel_color_at(x: float, y: float, size: float) -> WheelSample | None:
    """Color under a point on a square wheel of side ``size``.

    Hue comes from the angle around the center, saturation from the
    distance, value is always 1.

    :returns: WheelSample, or None if the point lies outside the disc
    """
    radius = size / 2
    dx = x - size / 2
    dy = y - size / 2
    distance = math.hypot(dx, dy)
    if distance > radius:
        return None

    hue = (math.atan2(dy, dx) + math.pi) / (2 * math.pi)
    saturation = distance / radius if radius > 0 else 0.0
    return WheelSample(hue=hue, saturation=saturation, rgb=hsv_to_rgb(hue, saturation, 1.0))


def format_color_values(sample: WheelSample) -> str:
    """Clipboard text for a picked color.

    Example:
        >>> print(format_color_values(WheelSample(0.0, 1.0, (255, 0, 0))))
        RGB: 1.000 0.000 0.000 1
        HEX: #ff0000
        HSV: 0° 100% 100%
    """
    r, g, b = sample.normalized
    hue_deg = math.floor(sample.hue * 360 + 0.5)
    sat_pct = math.floor(sample.saturation * 100 + 0.5)
    return f"RGB: {r:.3f} {g:.3f} {b:.3f} 1\nHEX: {sample.hex}\nHSV: {hue_deg}° {sat_pct}% 100%"
