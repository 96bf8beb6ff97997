"""Pyramid level planning for Deep Zoom images.

Level ``levels - 1`` is the source at full resolution; each level below it
halves both dimensions, rounding up, until a 1x1 level is reached at index 0.
All arithmetic is integer so results do not depend on floating-point
``log2``/``ceil`` behaviour near powers of two.
"""

from __future__ import annotations

import logging
from typing import Iterator

from dzitiler.core.errors import InvalidLevel
from dzitiler.core.types import PyramidLevel

logger = logging.getLogger(__name__)


def level_count(width: int, height: int) -> int:
    """Number of pyramid levels for an image of the given size.

    Equal to ``ceil(log2(max(width, height))) + 1``, evaluated exactly with
    ``int.bit_length``. A 1x1 (or empty) image has a single level.

    Args:
        width: Source width in pixels
        height: Source height in pixels

    Returns:
        Level count, always >= 1
    """
    longest = max(width, height, 1)
    return (longest - 1).bit_length() + 1


def _ceil_shift(value: int, shift: int) -> int:
    """``ceil(value / 2**shift)`` for non-negative integers."""
    return (value + (1 << shift) - 1) >> shift


class LevelPlanner:
    """Computes pyramid depth and per-level geometry for one source size.

    Args:
        width: Source width in pixels
        height: Source height in pixels
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.levels = level_count(width, height)

    def check_level(self, level: int) -> None:
        """Raise InvalidLevel unless ``0 <= level < levels``."""
        if not 0 <= level < self.levels:
            raise InvalidLevel(
                f"Level {level} is outside the pyramid (0..{self.levels - 1})"
            )

    def _shift(self, level: int) -> int:
        self.check_level(level)
        return self.levels - 1 - level

    def scale(self, level: int) -> float:
        """Scale factor of a level relative to the source (1.0 at the top)."""
        return 0.5 ** self._shift(level)

    def dimensions(self, level: int) -> tuple[int, int]:
        """(width, height) in pixels of the image at ``level``.

        Rounds up, so no partial source pixel is dropped at any scale.
        """
        shift = self._shift(level)
        return _ceil_shift(self.width, shift), _ceil_shift(self.height, shift)

    def level(self, level: int) -> PyramidLevel:
        width, height = self.dimensions(level)
        return PyramidLevel(index=level, scale=self.scale(level), width=width, height=height)

    def iter_levels(self) -> Iterator[PyramidLevel]:
        """Yield every level, smallest first."""
        for index in range(self.levels):
            yield self.level(index)

    def __repr__(self) -> str:
        return f"LevelPlanner({self.width}x{self.height}, levels={self.levels})"
