"""Worker function for batch tiling from the CLI.

Keeps the per-image error capture out of ``__main__`` so it can be imported
and tested on its own.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dzitiler.core.errors import TilingError
from dzitiler.tiling.pipeline import ProgressCallback, TileCreator

logger = logging.getLogger(__name__)


def process_single_image(
    image_path: Path,
    tile_size: int,
    tile_overlap: int,
    jpeg_quality: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> tuple[Path | None, str | None]:
    """Tile a single image.

    Args:
        image_path: Path to the source image
        tile_size: Tile size in pixels
        tile_overlap: Tile overlap in pixels
        jpeg_quality: JPEG quality, or None for the configured default
        progress_callback: Optional callback(stage, current, total)

    Returns:
        Tuple of (dzi_path, error_message)
        - dzi_path: Path to the written .dzi, or None on error
        - error_message: Error string if failed, None otherwise
    """
    logger.info("Processing %s", image_path.name)
    try:
        creator = TileCreator.from_image_path(
            image_path,
            tile_size=tile_size,
            tile_overlap=tile_overlap,
            jpeg_quality=jpeg_quality,
        )
        dzi_path, _tiles_dir = creator.create_tiles(progress_callback)
        return dzi_path, None
    except (TilingError, ValueError) as e:
        logger.error("Failed to process %s: %s", image_path.name, e)
        return None, str(e)
