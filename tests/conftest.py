"""Test fixtures for dzitiler tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_rgb_array() -> np.ndarray:
    """Create a 600x400 RGB test image with colored quadrants.

    Deliberately not a multiple of the default tile size so the last
    column and row of tiles are clipped.
    """
    img = np.full((400, 600, 3), 255, dtype=np.uint8)

    # Top-left: red
    img[0:200, 0:300] = [200, 50, 50]

    # Top-right: green
    img[0:200, 300:600] = [50, 200, 50]

    # Bottom-left: blue
    img[200:400, 0:300] = [50, 50, 200]

    # Bottom-right: purple
    img[200:400, 300:600] = [150, 50, 150]

    return img


@pytest.fixture
def gradient_rgb_array() -> np.ndarray:
    """Create a 37x23 image where every pixel is distinct."""
    height, width = 23, 37
    ys, xs = np.mgrid[0:height, 0:width]
    img = np.stack(
        [xs * 6 % 256, ys * 11 % 256, (xs + ys) * 3 % 256], axis=-1
    ).astype(np.uint8)
    return img


@pytest.fixture
def sample_image_path(temp_dir: Path, sample_rgb_array: np.ndarray) -> Path:
    """Write the sample image as a PNG and return its path."""
    path = temp_dir / "sample.png"
    Image.fromarray(sample_rgb_array).save(path)
    return path
