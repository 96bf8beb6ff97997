"""Core types, errors and path helpers for dzitiler."""

from .errors import (
    CodecError,
    DimensionMismatch,
    InvalidLevel,
    TilingError,
    TilingIOError,
    UnsupportedSourceImage,
)
from .paths import atomic_text_save, output_paths_for_image
from .types import Descriptor, PyramidLevel, Tile, TilerConfig

__all__ = [
    "CodecError",
    "Descriptor",
    "DimensionMismatch",
    "InvalidLevel",
    "PyramidLevel",
    "Tile",
    "TilerConfig",
    "TilingError",
    "TilingIOError",
    "UnsupportedSourceImage",
    "atomic_text_save",
    "output_paths_for_image",
]
