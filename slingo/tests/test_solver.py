"""Tests for candidate generation, search strategies and recommendations."""

import time

import numpy as np
import pytest

from slingo.config import DEFAULT_CONFIG, SlingoConfig
from slingo.models.board import Board, random_board_numbers
from slingo.models.draw import DrawConfiguration, DrawRow
from slingo.models.enums import SearchMode
from slingo.solver.heuristics import (
    best_row_for_wild, cell_priority_grid, greedy_placement, rank_open_cells,
)
from slingo.solver.move_generator import (
    estimate_candidate_count, generate_placement_sets, placeable_super_wilds,
    unplaceable_wild_count, wild_options,
)
from slingo.solver.search import (
    exhaustive_search, heuristic_search, recommend_for_row, recommend_placements,
    search_best_placement, select_strategy,
)


@pytest.fixture(scope="module")
def numbers():
    return random_board_numbers()


@pytest.fixture
def diagonal_board(numbers):
    """Main diagonal missing (1,1) and (4,4)."""
    return Board.from_positions([[0, 0], [1, 3], [2, 2], [3, 3]], numbers)


def row(*labels):
    return DrawRow.from_labels(list(labels))


SUPER_AND_WILD = ("super_wild", "wild", "none", "none", "none")


# --- Move generation ---

class TestMoveGenerator:
    def test_wilds_stay_in_their_column(self, numbers):
        board = Board.from_positions([[0, 0], [1, 3]], numbers)
        draw = row("super_wild", "wild", "none", "wild", "none")
        count = 0
        for ps in generate_placement_sets(board, draw):
            count += 1
            assert [p.col for p in ps.wild_placements] == [1, 3]
        assert count > 0

    def test_no_shared_or_covered_cells(self, numbers):
        board = Board.from_positions([[0, 0], [1, 3], [2, 2]], numbers)
        draw = row("super_wild", "wild", "super_wild", "wild", "none")
        for ps in generate_placement_sets(board, draw):
            assert not ps.has_conflicts()
            assert not any(board.is_covered(r, c) for r, c in ps.cells)

    def test_super_wilds_are_combinations(self, numbers):
        board = Board.from_positions([], numbers)
        draw = row("super_wild", "super_wild", "none", "none", "none")
        sets = list(generate_placement_sets(board, draw))
        assert len(sets) == 25 * 24 // 2
        assert len({ps.cells for ps in sets}) == len(sets)

    def test_estimate_matches_enumeration(self, numbers):
        board = Board.from_positions([[0, 0], [1, 3]], numbers)
        draw = row("super_wild", "wild", "none", "wild", "none")
        assert estimate_candidate_count(board, draw) == 5 * 4 * 21
        assert sum(1 for _ in generate_placement_sets(board, draw)) == 5 * 4 * 21

    def test_wild_in_covered_column_is_skipped(self, numbers):
        board = Board.from_positions([[r, 0] for r in range(5)], numbers)
        draw = row("wild", "wild", "none", "none", "none")
        assert [col for col, _ in wild_options(board, draw)] == [1]
        assert unplaceable_wild_count(board, draw) == 1

    def test_super_wilds_capped_by_open_cells(self, numbers):
        covered = [[r, c] for r in range(5) for c in range(5)][:23]
        board = Board.from_positions(covered, numbers)
        draw = row("super_wild", "super_wild", "super_wild", "none", "none")
        assert placeable_super_wilds(board, draw) == 2


# --- Strategy selection ---

class TestStrategySelection:
    def test_small_row_is_exhaustive(self, diagonal_board):
        assert select_strategy(diagonal_board, row(*SUPER_AND_WILD)) is exhaustive_search

    def test_four_super_wilds_plus_wild_is_exhaustive(self, numbers):
        board = Board.from_positions([], numbers)
        draw = row("super_wild", "super_wild", "super_wild", "super_wild", "wild")
        assert estimate_candidate_count(board, draw) <= DEFAULT_CONFIG.exhaustive_candidate_limit
        assert select_strategy(board, draw) is exhaustive_search

    def test_five_super_wilds_is_heuristic(self, numbers):
        board = Board.from_positions([], numbers)
        assert select_strategy(board, row(*["super_wild"] * 5)) is heuristic_search

    def test_candidate_limit(self, diagonal_board):
        config = SlingoConfig(exhaustive_candidate_limit=10)
        assert select_strategy(diagonal_board, row(*SUPER_AND_WILD), config) is heuristic_search

    def test_custom_threshold(self, diagonal_board):
        config = SlingoConfig(heuristic_super_wild_threshold=1)
        assert select_strategy(diagonal_board, row(*SUPER_AND_WILD), config) is heuristic_search


# --- Exhaustive search ---

class TestExhaustiveSearch:
    def test_completes_main_diagonal(self, diagonal_board):
        result = search_best_placement(diagonal_board, row(*SUPER_AND_WILD))
        assert result.mode == SearchMode.EXHAUSTIVE
        assert [p.as_dict() for p in result.placement_set.wild_placements] == [{"row": 2, "column": 2}]
        assert [p.as_dict() for p in result.placement_set.super_wild_placements] == [{"row": 5, "column": 5}]
        assert result.breakdown.lines_completed == 1
        assert result.breakdown.diagonals_completed == 1
        assert result.score > 35000

    def test_prefers_diagonal_over_row(self, numbers):
        covered = [[0, 0], [0, 2], [0, 3], [0, 4], [1, 1], [2, 2], [3, 3]]
        board = Board.from_positions(covered, numbers)
        result = search_best_placement(board, row("super_wild", "none", "none", "none", "none"))
        assert result.placement_set.super_wild_placements[0].cell == (4, 4)

    def test_sparse_board_sets_up(self, numbers):
        board = Board.from_positions([[0, 0], [2, 2]], numbers)
        result = search_best_placement(board, row(*SUPER_AND_WILD))
        assert result.breakdown.lines_completed == 0
        assert 0 < result.score < DEFAULT_CONFIG.weights.line_completion

    def test_counts_candidates(self, diagonal_board):
        draw = row(*SUPER_AND_WILD)
        result = exhaustive_search(diagonal_board, draw)
        assert result.candidates_evaluated == estimate_candidate_count(diagonal_board, draw)

    def test_deterministic(self, diagonal_board):
        draw = row("super_wild", "wild", "super_wild", "none", "wild")
        a = search_best_placement(diagonal_board, draw)
        b = search_best_placement(diagonal_board, draw)
        assert a.placement_set == b.placement_set
        assert a.score == b.score

    def test_all_none_row(self, diagonal_board):
        assert search_best_placement(diagonal_board, row(*["none"] * 5)) is None

    def test_only_unplaceable_wild(self, numbers):
        board = Board.from_positions([[r, 2] for r in range(5)], numbers)
        assert search_best_placement(board, row("none", "none", "wild", "none", "none")) is None

    def test_full_board(self, numbers):
        board = Board.from_positions([[r, c] for r in range(5) for c in range(5)], numbers)
        assert search_best_placement(board, row(*SUPER_AND_WILD)) is None


# --- Heuristic search ---

class TestHeuristicSearch:
    def test_five_super_wilds_fast(self, numbers):
        board = Board.from_positions([[0, 0], [1, 1], [2, 3]], numbers)
        start = time.perf_counter()
        result = search_best_placement(board, row(*["super_wild"] * 5))
        elapsed = time.perf_counter() - start
        assert elapsed < 2.0
        assert result.mode == SearchMode.HEURISTIC
        placed = result.placement_set.super_wild_placements
        assert len(placed) == 5
        assert len({p.cell for p in placed}) == 5
        assert not any(board.is_covered(p.row, p.col) for p in placed)

    def test_fewer_open_cells_than_tokens(self, numbers):
        covered = [[r, c] for r in range(5) for c in range(5)][:22]
        board = Board.from_positions(covered, numbers)
        result = search_best_placement(board, row(*["super_wild"] * 5))
        assert len(result.placement_set.super_wild_placements) == 3

    def test_heuristic_completes_near_line(self, numbers):
        board = Board.from_positions([[0, c] for c in range(4)], numbers)
        result = heuristic_search(board, row(*["super_wild"] * 5))
        assert (0, 4) in result.placement_set.cells
        assert result.breakdown.lines_completed >= 1

    def test_priority_grid(self, numbers):
        board = Board.from_positions([[0, 0]], numbers)
        grid = cell_priority_grid(board, DEFAULT_CONFIG.priorities)
        assert grid.shape == (5, 5)
        assert np.isneginf(grid[0, 0])
        assert np.isfinite(grid[2, 2])

    def test_center_ranks_first_on_empty_board(self, numbers):
        board = Board.from_positions([], numbers)
        ranked = rank_open_cells(board, DEFAULT_CONFIG.priorities)
        assert ranked[0] == (2, 2)
        assert len(ranked) == 25

    def test_best_row_for_wild(self, numbers):
        board = Board.from_positions([[3, 1], [3, 2]], numbers)
        assert best_row_for_wild(board, 0) == 3
        full = Board.from_positions([[r, 0] for r in range(5)], numbers)
        assert best_row_for_wild(full, 0) is None

    def test_greedy_reports_unplaced_wilds(self, numbers):
        board = Board.from_positions([[r, 0] for r in range(5)], numbers)
        draw = row("wild", "super_wild", "super_wild", "super_wild", "super_wild")
        wild_cells, super_cells, unplaced = greedy_placement(board, draw, DEFAULT_CONFIG.priorities)
        assert wild_cells == ()
        assert unplaced == 1
        assert len(super_cells) == 4


# --- Recommendations ---

class TestRecommendations:
    def test_recommend_for_row(self, diagonal_board):
        rec = recommend_for_row(diagonal_board, row(*SUPER_AND_WILD), 1)
        d = rec.as_dict()
        assert d["row"] == 1
        assert d["positions"] == list(SUPER_AND_WILD)
        assert d["wild_placements"] == [{"row": 2, "column": 2}]
        assert d["super_wild_placements"] == [{"row": 5, "column": 5}]
        assert d["search_mode"] == "exhaustive"
        assert d["expected_score"] == round(d["expected_score"], 1)
        assert "Completes 1 Slingo" in d["reasoning"]

    def test_rows_without_tokens_are_skipped(self, diagonal_board):
        draws = DrawConfiguration.from_payload([
            ["none"] * 5,
            list(SUPER_AND_WILD),
            ["none", "none", "none", "none", "super_wild"],
        ])
        recs = recommend_placements(diagonal_board, draws)
        assert [r.row_index for r in recs] == [2, 3]

    def test_rows_are_independent(self, diagonal_board):
        draws = DrawConfiguration.from_payload([list(SUPER_AND_WILD), list(SUPER_AND_WILD)])
        first, second = recommend_placements(diagonal_board, draws)
        assert first.placement_set == second.placement_set

    def test_unplaced_wild_in_reasoning(self, numbers):
        board = Board.from_positions([[r, 0] for r in range(5)], numbers)
        rec = recommend_for_row(board, row("wild", "super_wild", "none", "none", "none"), 1)
        assert rec.wild_placements == []
        assert len(rec.super_wild_placements) == 1
        assert "1 wild card could not be placed" in rec.reasoning
