"""RGB triple value class.

``RGBValues`` is the currency between hex entry and the pipeline: a plain
(r, g, b) triple that converts to and from hex strings and NumPy arrays.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass
class RGBValues:
    """RGB triple in display or linear units.

    Example:
        >>> RGBValues.from_hex("#336699")
        RGBValues(r=0.2, g=0.4, b=0.6)
        >>> RGBValues(1.2, 0.5, -0.1).to_hex()
        '#ff8000'
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def clamp(self) -> RGBValues:
        """Clamp every channel to [0, 1].

        :returns: New RGBValues with clamped channels
        """
        return RGBValues(
            r=max(0.0, min(1.0, self.r)),
            g=max(0.0, min(1.0, self.g)),
            b=max(0.0, min(1.0, self.b)),
        )

    def to_hex(self) -> str:
        """Format the clamped triple as ``#rrggbb``."""
        from acesmod.color.wheel import rgb_to_hex, to_byte

        c = self.clamp()
        return rgb_to_hex(to_byte(c.r), to_byte(c.g), to_byte(c.b))

    @classmethod
    def from_hex(cls, text: str) -> RGBValues:
        """Parse ``#rrggbb``, ``rrggbb`` or ``#rgb`` into normalized [0, 1] values.

        :raises ValueError: If text is not a valid hex color
        """
        from acesmod.color.wheel import hex_to_rgb

        r, g, b = hex_to_rgb(text)
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_sequence(cls, values) -> RGBValues:
        """Build from any 3-element sequence or array."""
        r, g, b = (float(v) for v in values)
        return cls(r, g, b)
