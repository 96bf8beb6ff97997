"""Tile grid geometry for a pyramid level."""

from __future__ import annotations

from typing import Iterator

from dzitiler.core.errors import InvalidLevel
from dzitiler.core.types import Tile

from .planner import LevelPlanner


class TileGridCalculator:
    """Derives tile counts and overlapped tile boxes for each pyramid level.

    Interior tiles carry ``tile_overlap`` extra pixels on every shared edge.
    Tiles in the first column/row have no leading overlap, and tiles on the
    right/bottom edge are clipped flush to the level so no box leaves the
    image.

    Args:
        planner: Level geometry for the source image
        tile_size: Nominal tile edge length in pixels
        tile_overlap: Pixels shared with each neighbouring tile
    """

    def __init__(self, planner: LevelPlanner, tile_size: int, tile_overlap: int) -> None:
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        if not 0 <= tile_overlap <= tile_size:
            raise ValueError(
                f"tile_overlap must be in 0..{tile_size}, got {tile_overlap}"
            )
        self.planner = planner
        self.tile_size = tile_size
        self.tile_overlap = tile_overlap

    def tile_count(self, level: int) -> tuple[int, int]:
        """(number of columns, number of rows) for a level."""
        width, height = self.planner.dimensions(level)
        cols = (width + self.tile_size - 1) // self.tile_size
        rows = (height + self.tile_size - 1) // self.tile_size
        return cols, rows

    def tile_bounds(self, level: int, col: int, row: int) -> tuple[int, int, int, int]:
        """Pixel box (x0, y0, x1, y1) of a tile; x1/y1 are exclusive."""
        cols, rows = self.tile_count(level)
        if not (0 <= col < cols and 0 <= row < rows):
            raise InvalidLevel(
                f"Tile ({col}, {row}) is outside the {cols}x{rows} grid of level {level}"
            )
        level_width, level_height = self.planner.dimensions(level)

        offset_x = 0 if col == 0 else self.tile_overlap
        offset_y = 0 if row == 0 else self.tile_overlap
        x0 = col * self.tile_size - offset_x
        y0 = row * self.tile_size - offset_y

        width = self.tile_size + (1 if col == 0 else 2) * self.tile_overlap
        height = self.tile_size + (1 if row == 0 else 2) * self.tile_overlap

        # Edge tiles shrink instead of reading past the level
        width = min(width, level_width - x0)
        height = min(height, level_height - y0)
        return x0, y0, x0 + width, y0 + height

    def tile(self, level: int, col: int, row: int) -> Tile:
        x0, y0, x1, y1 = self.tile_bounds(level, col, row)
        return Tile(level, col, row, x0, y0, x1, y1)

    def iter_tiles(self, level: int) -> Iterator[Tile]:
        """Yield every tile of a level, column by column."""
        cols, rows = self.tile_count(level)
        for col in range(cols):
            for row in range(rows):
                yield self.tile(level, col, row)

    def total_tiles(self) -> int:
        """Number of tiles across all levels."""
        total = 0
        for level in range(self.planner.levels):
            cols, rows = self.tile_count(level)
            total += cols * rows
        return total
