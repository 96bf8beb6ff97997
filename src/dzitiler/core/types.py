"""Shared type definitions for dzitiler core module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from dzitiler.config import JPEG_QUALITY, TILE_FORMAT


@dataclass(frozen=True)
class TilerConfig:
    """Settings fixed for the duration of one tiling run.

    Attributes:
        tile_size: Nominal tile edge length in pixels (> 0)
        tile_overlap: Pixels shared with each neighbouring tile (0..tile_size)
        dest_path: Directory that receives ``<level>/<col>_<row>.jpg``
        dzi_file_path: Path of the ``.dzi`` descriptor to write
        jpeg_quality: JPEG quality for every tile (1-100)
    """

    tile_size: int
    tile_overlap: int
    dest_path: Path
    dzi_file_path: Path
    jpeg_quality: int = JPEG_QUALITY

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.tile_overlap < 0:
            raise ValueError(f"tile_overlap must be >= 0, got {self.tile_overlap}")
        if self.tile_overlap > self.tile_size:
            raise ValueError(
                f"tile_overlap ({self.tile_overlap}) must not exceed "
                f"tile_size ({self.tile_size})"
            )
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be in 1..100, got {self.jpeg_quality}")
        object.__setattr__(self, "dest_path", Path(self.dest_path))
        object.__setattr__(self, "dzi_file_path", Path(self.dzi_file_path))


@dataclass(frozen=True)
class PyramidLevel:
    """Information about a pyramid level.

    Attributes:
        index: Level index (0 = lowest resolution)
        scale: Scale factor relative to the source (1.0 = full res)
        width: Level width in pixels
        height: Level height in pixels
    """

    index: int
    scale: float
    width: int
    height: int

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height


class Tile(NamedTuple):
    """A single tile of the pyramid and its pixel box within its level.

    Attributes:
        level: Pyramid level (0 = lowest resolution)
        col: Column index (0-based)
        row: Row index (0-based)
        x0, y0: Top-left corner, inclusive
        x1, y1: Bottom-right corner, exclusive
    """

    level: int
    col: int
    row: int
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        return self.x0, self.y0, self.x1, self.y1

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def filename(self) -> str:
        return f"{self.col}_{self.row}.{TILE_FORMAT}"


@dataclass(frozen=True)
class Descriptor:
    """Contents of a ``.dzi`` descriptor."""

    tile_size: int
    overlap: int
    width: int
    height: int
    format: str = TILE_FORMAT
