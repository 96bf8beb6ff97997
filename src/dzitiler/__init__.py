"""dzitiler - Deep Zoom (DZI) tile pyramid generator."""

__version__ = "0.1.0"

from dzitiler.core.errors import (
    CodecError,
    DimensionMismatch,
    InvalidLevel,
    TilingError,
    TilingIOError,
    UnsupportedSourceImage,
)
from dzitiler.core.types import TilerConfig
from dzitiler.tiling.pipeline import TileCreator, create_dzi

__all__ = [
    "CodecError",
    "DimensionMismatch",
    "InvalidLevel",
    "TileCreator",
    "TilerConfig",
    "TilingError",
    "TilingIOError",
    "UnsupportedSourceImage",
    "create_dzi",
]
