"""Deep Zoom pyramid planning, rendering and tile writing."""

from .backends import PillowBackend
from .descriptor import read_descriptor, render_descriptor, write_descriptor
from .grid import TileGridCalculator
from .pipeline import TileCreator, create_dzi
from .planner import LevelPlanner, level_count
from .renderer import LevelRenderer

__all__ = [
    "LevelPlanner",
    "LevelRenderer",
    "PillowBackend",
    "TileCreator",
    "TileGridCalculator",
    "create_dzi",
    "level_count",
    "read_descriptor",
    "render_descriptor",
    "write_descriptor",
]
