"""
Protocol definitions for acesmod collaborator interfaces.

Defines the seams between the engine and its surroundings: the text
fetcher used by LutLoader and the converter interface a UI calls into.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextFetcher(Protocol):
    """Callable that returns the text content of a LUT resource.

    Implementations raise ResourceError when the resource is unavailable.
    """

    def __call__(self, location: str) -> str:
        """
        Fetch a resource.

        :param location: URL or filesystem path
        :returns: Decoded text content
        """
        ...


@runtime_checkable
class ColorConverter(Protocol):
    """Protocol for objects that convert display colors into target spaces."""

    @property
    def ready(self) -> bool:
        """True when the LUT path is active."""
        ...

    def convert(
        self, r: float, g: float, b: float, source: str = "display", target: str = "ACEScg"
    ) -> tuple[float, float, float]:
        """Convert one color into ``target``."""
        ...

    def to_display(
        self, r: float, g: float, b: float, source_space: str
    ) -> tuple[float, float, float]:
        """Convert one color from ``source_space`` back to display sRGB."""
        ...
