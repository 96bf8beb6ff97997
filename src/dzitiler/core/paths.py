"""Path utilities for locating and writing Deep Zoom outputs."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from dzitiler.config import DZI_EXTENSION, TILES_DIR_SUFFIX

from .errors import UnsupportedSourceImage


def output_paths_for_image(image_path: str | Path) -> tuple[Path, Path]:
    """Derive the tile directory and descriptor path for a source image.

    Both outputs are siblings of the source: ``photo.png`` yields
    ``photo_files/`` and ``photo.dzi``.

    Args:
        image_path: Path to the source image

    Returns:
        Tuple of (tiles_dir, dzi_file_path)

    Raises:
        UnsupportedSourceImage: If the path has no parent directory or stem
    """
    image_path = Path(image_path)
    parent_dir = image_path.parent
    if not image_path.name or parent_dir == image_path:
        raise UnsupportedSourceImage(
            f"Could not find parent dir of image: {image_path}"
        )

    stem = image_path.stem
    if not stem or stem in (".", ".."):
        raise UnsupportedSourceImage(f"Could not find base name of image: {image_path}")

    return (
        parent_dir / f"{stem}{TILES_DIR_SUFFIX}",
        parent_dir / f"{stem}{DZI_EXTENSION}",
    )


def atomic_text_save(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Atomically write text to a file.

    Writes to a temp file in the same directory, then replaces the target.
    ``os.replace()`` is atomic on both POSIX and Windows (same filesystem).
    The text is written verbatim; no newline translation is applied.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent, suffix=".tmp", prefix=path.stem
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(text.encode(encoding))
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
