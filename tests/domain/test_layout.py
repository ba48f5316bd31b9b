"""Tests for the shuffle-and-layout engine."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from namebingo.domain.errors import ConfigurationError
from namebingo.domain.layout import center_index, check_fillable, layout, needs_padding
from namebingo.domain.types import Cell, CellKind, GridSpec


class TestCenterIndex:
    @pytest.mark.parametrize(
        ("width", "height", "expected"),
        [
            (3, 3, 4),
            (5, 5, 12),
            (2, 2, 3),
            (4, 4, 10),
            (2, 1, 1),
            (1, 1, 0),
            (4, 3, 6),
            (3, 4, 7),
        ],
    )
    def test_floor_division_formula(self, width: int, height: int, expected: int) -> None:
        assert center_index(GridSpec(width, height)) == expected

    def test_always_inside_non_empty_grid(self) -> None:
        for width in range(1, 8):
            for height in range(1, 8):
                spec = GridSpec(width, height)
                assert 0 <= center_index(spec) < spec.cell_count


class TestPaddingPolicy:
    def test_needs_padding(self) -> None:
        assert needs_padding(3, GridSpec(2, 2)) is True
        assert needs_padding(4, GridSpec(2, 2)) is False
        assert needs_padding(10, GridSpec(2, 2)) is False

    def test_check_fillable_without_default_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="no default name"):
            check_fillable(3, GridSpec(2, 2), None)

    def test_check_fillable_with_default_passes(self) -> None:
        check_fillable(0, GridSpec(5, 5), "Joker")

    def test_check_fillable_exact_pool_without_default(self) -> None:
        check_fillable(4, GridSpec(2, 2), None)


class TestLayoutCoverage:
    @pytest.mark.parametrize(
        ("pool_size", "width", "height"),
        [(0, 3, 3), (1, 2, 1), (4, 2, 2), (9, 3, 3), (30, 5, 5), (7, 4, 2)],
    )
    def test_returns_exactly_cell_count(
        self, rng: random.Random, pool_size: int, width: int, height: int
    ) -> None:
        pool = [f"n{i}" for i in range(pool_size)]
        spec = GridSpec(width, height)
        grid = layout(pool, spec, default_token="X", rng=rng)
        assert len(grid) == spec.cell_count
        assert all(isinstance(cell, Cell) for cell in grid)

    def test_fidelity_without_padding(self, rng: random.Random) -> None:
        pool = ["a", "b", "b", "c", "d", "e", "f", "g", "h", "i", "j"]
        grid = layout(pool, GridSpec(3, 3), rng=rng)
        drawn = Counter(cell.text for cell in grid)
        available = Counter(pool)
        assert sum(drawn.values()) == 9
        assert all(drawn[name] <= available[name] for name in drawn)

    def test_padding_fills_every_slot_past_pool(self, rng: random.Random) -> None:
        pool = ["a", "b", "c"]
        grid = layout(pool, GridSpec(3, 2), default_token="pad", rng=rng)
        assert {cell.text for cell in grid[:3]} == {"a", "b", "c"}
        assert [cell.text for cell in grid[3:]] == ["pad", "pad", "pad"]

    def test_duplicates_preserved(self, rng: random.Random) -> None:
        grid = layout(["same", "same", "same", "same"], GridSpec(2, 2), rng=rng)
        assert [cell.text for cell in grid] == ["same"] * 4

    def test_pool_not_mutated(self, rng: random.Random) -> None:
        pool = ["a", "b", "c", "d"]
        layout(pool, GridSpec(2, 2), rng=rng)
        assert pool == ["a", "b", "c", "d"]

    def test_insufficient_pool_without_default_fails_fast(self) -> None:
        with pytest.raises(ConfigurationError):
            layout(["a"], GridSpec(2, 2))


class TestCenterOverride:
    def test_center_cell_replaced_and_tagged(self, rng: random.Random) -> None:
        pool = [f"n{i}" for i in range(25)]
        spec = GridSpec(5, 5)
        grid = layout(pool, spec, center="FREE", rng=rng)
        assert grid[12] == Cell("FREE", CellKind.CENTER)
        others = [cell for i, cell in enumerate(grid) if i != 12]
        assert all(cell.kind is CellKind.NORMAL for cell in others)
        assert "FREE" not in {cell.text for cell in others}

    def test_no_center_means_all_normal(self, rng: random.Random) -> None:
        grid = layout(["a", "b", "c", "d"], GridSpec(2, 2), rng=rng)
        assert all(cell.kind is CellKind.NORMAL for cell in grid)

    def test_even_grid_uses_floor_formula(self, rng: random.Random) -> None:
        grid = layout(["a", "b", "c", "d"], GridSpec(2, 2), center="C", rng=rng)
        assert grid[3] == Cell("C", CellKind.CENTER)
        assert [cell.kind for cell in grid[:3]] == [CellKind.NORMAL] * 3


class TestScenarios:
    def test_scenario_a_exact_pool(self, rng: random.Random) -> None:
        pool = ["Alice", "Bob", "Carol", "Dave"]
        grid = layout(pool, GridSpec(2, 2), rng=rng)
        assert sorted(cell.text for cell in grid) == sorted(pool)
        assert all(cell.kind is CellKind.NORMAL for cell in grid)

    def test_scenario_b_single_name_padded(self) -> None:
        grid = layout(["Alice"], GridSpec(2, 1), default_token="Joker")
        assert grid == (Cell("Alice"), Cell("Joker"))

    def test_scenario_c_empty_pool_with_center(self) -> None:
        grid = layout([], GridSpec(3, 3), default_token="X", center="FREE")
        assert len(grid) == 9
        assert grid[4] == Cell("FREE", CellKind.CENTER)
        assert all(cell == Cell("X") for i, cell in enumerate(grid) if i != 4)

    @pytest.mark.parametrize(("width", "height"), [(0, 3), (3, 0), (0, 0)])
    def test_scenario_d_empty_grid(self, width: int, height: int) -> None:
        assert layout(["a", "b"], GridSpec(width, height), center="FREE") == ()

    def test_empty_grid_with_empty_pool_needs_no_default(self) -> None:
        assert layout([], GridSpec(0, 4)) == ()


class TestRandomness:
    def test_seeded_sources_are_reproducible(self) -> None:
        pool = [f"n{i}" for i in range(25)]
        first = layout(pool, GridSpec(5, 5), rng=random.Random(7))
        second = layout(pool, GridSpec(5, 5), rng=random.Random(7))
        assert first == second

    def test_unseeded_calls_produce_different_orders(self) -> None:
        pool = [f"n{i}" for i in range(25)]
        orders = {
            tuple(cell.text for cell in layout(pool, GridSpec(5, 5))) for _ in range(20)
        }
        # 25! orderings: twenty identical draws are practically impossible.
        assert len(orders) > 1

    def test_every_position_reachable(self) -> None:
        pool = ["a", "b", "c"]
        rng = random.Random(99)
        seen_first = {layout(pool, GridSpec(3, 1), rng=rng)[0].text for _ in range(200)}
        assert seen_first == {"a", "b", "c"}

    def test_padding_never_shuffled_into_pool_positions(self) -> None:
        rng = random.Random(3)
        for _ in range(50):
            grid = layout(["a", "b"], GridSpec(2, 2), default_token="pad", rng=rng)
            assert [cell.text for cell in grid[2:]] == ["pad", "pad"]
