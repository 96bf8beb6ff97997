"""Centralized configuration for dzitiler.

All tunable parameters are defined here with sensible defaults.
Values can be overridden via environment variables.

Environment Variables:
    DZITILER_TILE_SIZE: Default tile edge length in pixels (default: 254)
    DZITILER_TILE_OVERLAP: Default tile overlap in pixels (default: 1)
    DZITILER_JPEG_QUALITY: JPEG quality for written tiles (default: 75)
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _get_env_int(name: str, default: int) -> int:
    """Get an integer from environment variable with fallback."""
    value = os.environ.get(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            logger.warning(
                "Invalid integer for %s: %r, using default %d", name, value, default
            )
    return default


# =============================================================================
# Tile Generation Defaults
# =============================================================================

#: Default tile size in pixels (256 minus one pixel of overlap on each side)
DEFAULT_TILE_SIZE: int = _get_env_int("DZITILER_TILE_SIZE", 254)

#: Default number of pixels shared between neighbouring tiles
DEFAULT_TILE_OVERLAP: int = _get_env_int("DZITILER_TILE_OVERLAP", 1)

#: JPEG quality for written tiles
JPEG_QUALITY: int = _get_env_int("DZITILER_JPEG_QUALITY", 75)


# =============================================================================
# Deep Zoom Format
# =============================================================================

#: Tile file extension, also written to the descriptor's Format attribute
TILE_FORMAT: str = "jpg"

#: XML namespace of the .dzi descriptor
DZI_NAMESPACE: str = "http://schemas.microsoft.com/deepzoom/2008"

#: Suffix appended to the source stem for the tile directory
TILES_DIR_SUFFIX: str = "_files"

#: Extension of the descriptor file
DZI_EXTENSION: str = ".dzi"


# =============================================================================
# Source Images
# =============================================================================

#: Background color used to flatten transparent sources (white)
BACKGROUND_COLOR: tuple[int, int, int] = (255, 255, 255)

#: RGB bytes per pixel (for raw buffer validation)
RGB_BYTES_PER_PIXEL: int = 3

#: Image file extensions picked up when the CLI is given a directory
IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".jpg", ".jpeg", ".png", ".tif", ".tiff", ".bmp", ".gif", ".webp"
})


# =============================================================================
# Validation
# =============================================================================


def _validate_config() -> None:
    """Validate configuration values and log warnings for out-of-range settings."""
    global DEFAULT_TILE_SIZE, DEFAULT_TILE_OVERLAP, JPEG_QUALITY

    if DEFAULT_TILE_SIZE < 1:
        logger.warning(
            "DEFAULT_TILE_SIZE=%d is too low, clamping to 1", DEFAULT_TILE_SIZE
        )
        DEFAULT_TILE_SIZE = 1

    if DEFAULT_TILE_OVERLAP < 0:
        logger.warning(
            "DEFAULT_TILE_OVERLAP=%d is negative, clamping to 0", DEFAULT_TILE_OVERLAP
        )
        DEFAULT_TILE_OVERLAP = 0

    if DEFAULT_TILE_OVERLAP > DEFAULT_TILE_SIZE:
        logger.warning(
            "DEFAULT_TILE_OVERLAP=%d exceeds tile size, clamping to %d",
            DEFAULT_TILE_OVERLAP,
            DEFAULT_TILE_SIZE,
        )
        DEFAULT_TILE_OVERLAP = DEFAULT_TILE_SIZE

    if not 1 <= JPEG_QUALITY <= 100:
        clamped = min(max(JPEG_QUALITY, 1), 100)
        logger.warning("JPEG_QUALITY=%d is out of range, clamping to %d", JPEG_QUALITY, clamped)
        JPEG_QUALITY = clamped


_validate_config()
