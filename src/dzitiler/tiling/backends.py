"""Image codec backend using Pillow.

This module provides a unified interface for the image operations the tiler
needs: decoding the source, wrapping raw RGB buffers, resampling, cropping
and JPEG encoding. Every codec failure is translated into the dzitiler
error types so the pipeline only ever propagates :class:`TilingError`.

Usage:
    from dzitiler.tiling.backends import PillowBackend

    img = PillowBackend.load(Path("input.png"))
    resized = PillowBackend.resize(img, (256, 256))
    PillowBackend.save_jpeg(resized, Path("output.jpg"), quality=75)
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from dzitiler.config import BACKGROUND_COLOR, RGB_BYTES_PER_PIXEL
from dzitiler.core.errors import (
    CodecError,
    DimensionMismatch,
    TilingIOError,
    UnsupportedSourceImage,
)

logger = logging.getLogger(__name__)

RawRGB = Union[bytes, bytearray, memoryview, np.ndarray]

#: Resampling filter used for every level of a run unless overridden
DEFAULT_RESAMPLE: Image.Resampling = Image.Resampling.NEAREST


class PillowBackend:
    """Pillow-based image codec.

    All images handed out by this backend are in ``RGB`` mode, which is what
    the JPEG encoder accepts without conversion.
    """

    @staticmethod
    def to_rgb(img: Image.Image) -> Image.Image:
        """Convert any Pillow mode to RGB, flattening alpha onto the background.

        Args:
            img: Decoded Pillow image

        Returns:
            Image in ``RGB`` mode
        """
        if img.mode == "RGB":
            return img
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, BACKGROUND_COLOR)
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return img.convert("RGB")

    @staticmethod
    def load(path: Path) -> Image.Image:
        """Decode an image file, detecting the format from its signature.

        Args:
            path: Path to the source image

        Returns:
            Fully loaded RGB Pillow image

        Raises:
            TilingIOError: If the file cannot be opened
            UnsupportedSourceImage: If Pillow does not recognise the format
            CodecError: If decoding fails after the format was recognised
        """
        try:
            with Image.open(path) as img:
                img.load()
                rgb = PillowBackend.to_rgb(img)
                # Closing the file invalidates img, so detach the pixels first
                return rgb.copy() if rgb is img else rgb
        except UnidentifiedImageError as e:
            raise UnsupportedSourceImage(f"Unsupported source image {path}: {e}") from e
        except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
            raise TilingIOError(f"Could not open {path}: {e}") from e
        except (OSError, EOFError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise CodecError(f"Failed to decode {path}: {e}") from e

    @staticmethod
    def from_rgb_bytes(data: RawRGB, width: int, height: int) -> Image.Image:
        """Wrap a row-major, unpadded RGB buffer as a Pillow image.

        Args:
            data: ``width * height * 3`` bytes, or a uint8 array of shape (h, w, 3)
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            RGB Pillow image (a copy; the caller's buffer is not referenced)

        Raises:
            DimensionMismatch: If the buffer size does not match the dimensions
        """
        if isinstance(data, np.ndarray):
            if data.dtype != np.uint8 or data.shape != (height, width, RGB_BYTES_PER_PIXEL):
                raise DimensionMismatch(
                    width * height * RGB_BYTES_PER_PIXEL, int(data.size)
                )
            return PillowBackend.from_numpy(data)

        raw = bytes(data)
        expected = width * height * RGB_BYTES_PER_PIXEL
        if len(raw) != expected:
            raise DimensionMismatch(expected, len(raw))
        return Image.frombytes("RGB", (width, height), raw)

    @staticmethod
    def from_numpy(arr: np.ndarray) -> Image.Image:
        """Convert a numpy array (H, W, 3) RGB uint8 to a Pillow image."""
        return Image.fromarray(np.ascontiguousarray(arr))

    @staticmethod
    def to_numpy(img: Image.Image) -> np.ndarray:
        """Convert a Pillow image to a numpy array (H, W, 3) RGB uint8."""
        return np.asarray(PillowBackend.to_rgb(img), dtype=np.uint8)

    @staticmethod
    def resize(
        img: Image.Image,
        size: tuple[int, int],
        resample: Image.Resampling = DEFAULT_RESAMPLE,
    ) -> Image.Image:
        """Resample an image to an exact size.

        Args:
            img: Pillow image to resize
            size: Target size as (width, height)
            resample: Pillow resampling filter

        Returns:
            Resized image (always a new object)
        """
        return img.resize(size, resample)

    @staticmethod
    def crop(img: Image.Image, box: tuple[int, int, int, int]) -> Image.Image:
        """Crop ``(x0, y0, x1, y1)`` from an image; x1/y1 are exclusive."""
        return img.crop(box)

    @staticmethod
    def encode_jpeg(img: Image.Image, quality: int) -> bytes:
        """Encode an image as baseline JPEG.

        Raises:
            CodecError: If Pillow fails to encode the image
        """
        buffer = io.BytesIO()
        try:
            img.save(buffer, format="JPEG", quality=quality)
        except (OSError, ValueError) as e:
            raise CodecError(f"Failed to encode JPEG tile: {e}") from e
        return buffer.getvalue()

    @staticmethod
    def save_jpeg(img: Image.Image, path: Path, quality: int) -> None:
        """Encode an image as JPEG and write it to ``path``.

        Raises:
            CodecError: If encoding fails
            TilingIOError: If the file cannot be written
        """
        data = PillowBackend.encode_jpeg(img, quality)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise TilingIOError(f"Failed to write tile {path}: {e}") from e
