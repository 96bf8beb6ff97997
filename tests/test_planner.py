"""Tests for pyramid level planning."""

from __future__ import annotations

import pytest

from dzitiler.core.errors import InvalidLevel
from dzitiler.core.types import PyramidLevel
from dzitiler.tiling.planner import LevelPlanner, level_count


class TestLevelCount:
    """Tests for the exact-integer level count."""

    @pytest.mark.parametrize(
        "width, height, expected",
        [
            (1, 1, 1),
            (0, 0, 1),
            (2, 1, 2),
            (3, 3, 3),
            (4, 4, 3),
            (1, 5, 4),
            (4096, 10, 13),
            (4097, 1, 14),
            (5184, 3456, 14),
            (3456, 5184, 14),
            (2**20 + 1, 7, 22),
        ],
        ids=[
            "1x1", "empty", "2x1", "3x3", "power-of-two", "tall",
            "exact-4096", "just-over-4096", "landscape", "portrait", "huge",
        ],
    )
    def test_level_count(self, width: int, height: int, expected: int) -> None:
        assert level_count(width, height) == expected

    def test_planner_exposes_levels(self) -> None:
        assert LevelPlanner(5184, 3456).levels == 14


class TestLevelPlanner:
    """Tests for per-level scale and dimensions."""

    @pytest.fixture
    def planner(self) -> LevelPlanner:
        return LevelPlanner(5184, 3456)

    def test_full_resolution_level(self, planner: LevelPlanner) -> None:
        """The top level is the source size at scale 1.0."""
        assert planner.dimensions(planner.levels - 1) == (5184, 3456)
        assert planner.scale(planner.levels - 1) == 1.0

    def test_level_one(self, planner: LevelPlanner) -> None:
        assert planner.dimensions(1) == (2, 1)

    def test_level_zero_is_one_pixel(self, planner: LevelPlanner) -> None:
        assert planner.dimensions(0) == (1, 1)

    def test_dimensions_round_up(self) -> None:
        """Odd sizes are rounded up, never to nearest."""
        planner = LevelPlanner(5, 3)
        assert planner.levels == 4
        assert [planner.dimensions(l) for l in range(4)] == [
            (1, 1), (2, 1), (3, 2), (5, 3),
        ]

    def test_scale_halves_per_level(self, planner: LevelPlanner) -> None:
        assert planner.scale(12) == 0.5
        assert planner.scale(11) == 0.25
        assert planner.scale(0) == 2.0 ** -13

    def test_dimensions_never_shrink_going_up(self, planner: LevelPlanner) -> None:
        previous = (0, 0)
        for info in planner.iter_levels():
            assert info.width >= previous[0]
            assert info.height >= previous[1]
            assert info.width >= 1 and info.height >= 1
            previous = info.dimensions

    def test_iter_levels_ascending(self, planner: LevelPlanner) -> None:
        levels = list(planner.iter_levels())
        assert [l.index for l in levels] == list(range(14))
        assert levels[-1] == PyramidLevel(index=13, scale=1.0, width=5184, height=3456)

    def test_exact_near_powers_of_two(self) -> None:
        """Sizes just above a power of two keep their extra pixel at every level."""
        planner = LevelPlanner(2**20 + 1, 1)
        assert planner.dimensions(planner.levels - 1) == (2**20 + 1, 1)
        assert planner.dimensions(planner.levels - 2) == (2**19 + 1, 1)
        assert planner.dimensions(1) == (2, 1)
        assert planner.dimensions(0) == (1, 1)

    @pytest.mark.parametrize("level", [-1, 14, 100])
    def test_out_of_range_level(self, planner: LevelPlanner, level: int) -> None:
        with pytest.raises(InvalidLevel):
            planner.dimensions(level)
        with pytest.raises(InvalidLevel):
            planner.scale(level)

    def test_negative_dimensions_rejected(self) -> None:
        with pytest.raises(ValueError):
            LevelPlanner(-1, 10)
