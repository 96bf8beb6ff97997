"""Deep Zoom tile pyramid generation."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from PIL import Image

from dzitiler.config import DEFAULT_TILE_OVERLAP, DEFAULT_TILE_SIZE, JPEG_QUALITY
from dzitiler.core.errors import TilingIOError
from dzitiler.core.paths import output_paths_for_image
from dzitiler.core.types import Descriptor, TilerConfig

from .backends import DEFAULT_RESAMPLE, PillowBackend, RawRGB
from .descriptor import write_descriptor
from .grid import TileGridCalculator
from .planner import LevelPlanner
from .renderer import LevelRenderer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class TileCreator:
    """Builds a Deep Zoom tile pyramid and descriptor for one image.

    Tiles are written level by level, smallest first, to
    ``<dest_path>/<level>/<col>_<row>.jpg``; the ``.dzi`` descriptor is written
    once all levels succeed. The first failure aborts the run and leaves any
    tiles already written in place.

    Args:
        image: Full-resolution source (converted to RGB if needed)
        config: Tile geometry and output locations
        resample: Pillow filter used to render every level
    """

    def __init__(
        self,
        image: Image.Image,
        config: TilerConfig,
        resample: Image.Resampling = DEFAULT_RESAMPLE,
    ) -> None:
        self.image = PillowBackend.to_rgb(image)
        self.config = config
        self.planner = LevelPlanner(self.image.width, self.image.height)
        self.grid = TileGridCalculator(self.planner, config.tile_size, config.tile_overlap)
        self.renderer = LevelRenderer(self.image, self.planner, resample)

    @classmethod
    def from_image_path(
        cls,
        image_path: Path,
        tile_size: int = DEFAULT_TILE_SIZE,
        tile_overlap: int = DEFAULT_TILE_OVERLAP,
        jpeg_quality: int | None = None,
    ) -> TileCreator:
        """Load an image file and place outputs next to it.

        ``photo.png`` produces ``photo_files/`` and ``photo.dzi``.

        Raises:
            UnsupportedSourceImage: If the path has no parent/stem or is not an image
            TilingIOError: If the file cannot be opened
            CodecError: If the image cannot be decoded
        """
        image_path = Path(image_path)
        dest_path, dzi_file_path = output_paths_for_image(image_path)
        image = PillowBackend.load(image_path)
        logger.info("Loaded %s: %d x %d px", image_path.name, image.width, image.height)
        config = TilerConfig(
            tile_size=tile_size,
            tile_overlap=tile_overlap,
            dest_path=dest_path,
            dzi_file_path=dzi_file_path,
            jpeg_quality=JPEG_QUALITY if jpeg_quality is None else jpeg_quality,
        )
        return cls(image, config)

    @classmethod
    def from_rgb(
        cls,
        rgb_data: RawRGB,
        width: int,
        height: int,
        tile_size: int,
        tile_overlap: int,
        dest_path: Path,
        dzi_file_path: Path,
        jpeg_quality: int | None = None,
    ) -> TileCreator:
        """Tile a raw row-major RGB buffer of ``width * height * 3`` bytes.

        Raises:
            DimensionMismatch: If the buffer length does not match the dimensions
        """
        image = PillowBackend.from_rgb_bytes(rgb_data, width, height)
        config = TilerConfig(
            tile_size=tile_size,
            tile_overlap=tile_overlap,
            dest_path=Path(dest_path),
            dzi_file_path=Path(dzi_file_path),
            jpeg_quality=JPEG_QUALITY if jpeg_quality is None else jpeg_quality,
        )
        return cls(image, config)

    @property
    def levels(self) -> int:
        return self.planner.levels

    @property
    def dest_path(self) -> Path:
        return self.config.dest_path

    @property
    def dzi_file_path(self) -> Path:
        return self.config.dzi_file_path

    @property
    def descriptor(self) -> Descriptor:
        return Descriptor(
            tile_size=self.config.tile_size,
            overlap=self.config.tile_overlap,
            width=self.image.width,
            height=self.image.height,
        )

    def create_tiles(
        self, progress_callback: ProgressCallback | None = None
    ) -> tuple[Path, Path]:
        """Write every tile of every level, then the descriptor.

        Args:
            progress_callback: Optional callback(stage, current, total). Stages
                are ``"level"`` (level index of ``levels``), ``"tiles"``
                (tiles written of all tiles) and ``"descriptor"``.

        Returns:
            Tuple of (dzi_file_path, dest_path)

        Raises:
            TilingIOError: If a directory, tile or the descriptor cannot be written
            CodecError: If a tile cannot be encoded
        """
        logger.info(
            "Tiling %d x %d px into %d levels (tile %d, overlap %d)",
            self.image.width,
            self.image.height,
            self.levels,
            self.config.tile_size,
            self.config.tile_overlap,
        )
        total = self.grid.total_tiles()
        written = 0
        for level in range(self.levels):
            if progress_callback:
                progress_callback("level", level, self.levels)
            written = self._create_level(level, written, total, progress_callback)

        if progress_callback:
            progress_callback("descriptor", 0, 1)
        write_descriptor(self.descriptor, self.dzi_file_path)
        if progress_callback:
            progress_callback("descriptor", 1, 1)

        logger.info("Wrote %d tiles and %s", written, self.dzi_file_path)
        return self.dzi_file_path, self.dest_path

    async def create_tiles_async(
        self, progress_callback: ProgressCallback | None = None
    ) -> tuple[Path, Path]:
        """Run :meth:`create_tiles` in a worker thread without blocking the event loop.

        The run itself stays sequential; only the caller's scheduling changes.
        """
        return await asyncio.to_thread(self.create_tiles, progress_callback)

    def _level_dir(self, level: int) -> Path:
        """Create (if needed) and return the directory for a level's tiles."""
        level_dir = self.dest_path / str(level)
        try:
            level_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TilingIOError(f"Failed to create {level_dir}: {e}") from e
        return level_dir

    def _create_level(
        self,
        level: int,
        written: int,
        total: int,
        progress_callback: ProgressCallback | None,
    ) -> int:
        """Render one level and write its tiles. Returns the running tile count."""
        level_dir = self._level_dir(level)
        level_image = self.renderer.render(level)
        cols, rows = self.grid.tile_count(level)
        logger.info(
            "Level %d: %d x %d px, %d x %d tiles",
            level, level_image.width, level_image.height, cols, rows,
        )

        for tile in self.grid.iter_tiles(level):
            tile_image = PillowBackend.crop(level_image, tile.box)
            PillowBackend.save_jpeg(
                tile_image, level_dir / tile.filename, self.config.jpeg_quality
            )
            written += 1
            if progress_callback:
                progress_callback("tiles", written, total)
        return written


def create_dzi(
    image_path: Path,
    tile_size: int = DEFAULT_TILE_SIZE,
    tile_overlap: int = DEFAULT_TILE_OVERLAP,
    jpeg_quality: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> tuple[Path, Path]:
    """Build a Deep Zoom pyramid next to an image file.

    Args:
        image_path: Path to the source image
        tile_size: Tile size in pixels
        tile_overlap: Tile overlap in pixels
        jpeg_quality: JPEG quality (defaults to ``JPEG_QUALITY``)
        progress_callback: Progress callback function

    Returns:
        Tuple of (dzi_file_path, tiles_dir)
    """
    creator = TileCreator.from_image_path(
        image_path, tile_size=tile_size, tile_overlap=tile_overlap, jpeg_quality=jpeg_quality
    )
    return creator.create_tiles(progress_callback)
