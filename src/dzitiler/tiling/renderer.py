"""Per-level resampling of the source image."""

from __future__ import annotations

import logging

from PIL import Image

from .backends import DEFAULT_RESAMPLE, PillowBackend
from .planner import LevelPlanner

logger = logging.getLogger(__name__)


class LevelRenderer:
    """Produces the raster for a pyramid level from the full-resolution source.

    Every level is resampled directly from the source image, never from a
    previously rendered level, with one filter for the whole run. Nearest
    neighbour is the default: it is the fastest filter and its output is
    deterministic across Pillow builds.

    Args:
        source: Full-resolution RGB image (not modified)
        planner: Level geometry for ``source``
        resample: Pillow resampling filter applied to every level
    """

    def __init__(
        self,
        source: Image.Image,
        planner: LevelPlanner,
        resample: Image.Resampling = DEFAULT_RESAMPLE,
    ) -> None:
        if source.size != (planner.width, planner.height):
            raise ValueError(
                f"Planner is for {planner.width}x{planner.height}, "
                f"source is {source.width}x{source.height}"
            )
        self.source = source
        self.planner = planner
        self.resample = resample

    def render(self, level: int) -> Image.Image:
        """Return a new image of ``planner.dimensions(level)``."""
        size = self.planner.dimensions(level)
        if size == self.source.size:
            return self.source.copy()
        # Pillow cannot resample to an empty size; such levels have no tiles
        if 0 in size:
            return Image.new("RGB", size)
        logger.debug("Resampling level %d to %d x %d", level, size[0], size[1])
        return PillowBackend.resize(self.source, size, self.resample)
