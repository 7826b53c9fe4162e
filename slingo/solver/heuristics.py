"""Greedy placement for draw rows too large to enumerate.

Cells are ranked once by a static priority grid built from the board's
coverage; plain wilds go first, super wilds take the top-ranked open cells.
"""

import numpy as np

from slingo.config import PriorityWeights
from slingo.models.board import Board
from slingo.models.draw import DrawRow

Cell = tuple[int, int]


def _line_priority(counts: np.ndarray, size: int, per_covered: float,
                   one_away_bonus: float) -> np.ndarray:
    """Priority contributed by lines with the given covered counts."""
    return counts * per_covered + np.where(counts == size - 1, one_away_bonus, 0.0)


def cell_priority_grid(board: Board, weights: PriorityWeights) -> np.ndarray:
    """Priority of every cell; covered cells are -inf.

    Each open cell collects priority from its row, its column and any
    diagonal it lies on: more covered neighbours rank higher, and a line one
    cell short of completion gets an outsized bonus. Diagonal lines weigh
    more per covered cell. Center and diagonal cells get a flat bonus, edge
    cells a small penalty.
    """
    size = board.size
    grid = board.coverage_grid().astype(np.float64)

    row_counts = grid.sum(axis=1)
    col_counts = grid.sum(axis=0)
    main_count = np.trace(grid)
    anti_count = np.trace(np.fliplr(grid))

    priority = (
        _line_priority(row_counts, size, weights.per_covered_in_line, weights.one_away_bonus)[:, None]
        + _line_priority(col_counts, size, weights.per_covered_in_line, weights.one_away_bonus)[None, :]
    )

    idx = np.arange(size)
    main_mask = idx[:, None] == idx[None, :]
    anti_mask = idx[:, None] + idx[None, :] == size - 1
    priority += main_mask * _line_priority(
        np.array(main_count), size, weights.per_covered_in_diagonal, weights.one_away_bonus)
    priority += anti_mask * _line_priority(
        np.array(anti_count), size, weights.per_covered_in_diagonal, weights.one_away_bonus)

    priority += (main_mask | anti_mask) * weights.diagonal_bonus
    if size % 2 == 1:
        priority[size // 2, size // 2] += weights.center_bonus

    edge = np.zeros((size, size), dtype=bool)
    edge[0, :] = edge[-1, :] = edge[:, 0] = edge[:, -1] = True
    priority -= edge * weights.edge_penalty

    priority[grid > 0] = -np.inf
    return priority


def rank_open_cells(board: Board, weights: PriorityWeights,
                    claimed: set[Cell] | frozenset[Cell] = frozenset()) -> list[Cell]:
    """Open cells, highest priority first; ties go to the lowest (row, column)."""
    priority = cell_priority_grid(board, weights)
    cells = board.open_cells(claimed)
    return sorted(cells, key=lambda rc: (-priority[rc[0], rc[1]], rc[0], rc[1]))


def best_row_for_wild(board: Board, col: int,
                      claimed: set[Cell] | frozenset[Cell] = frozenset()) -> int | None:
    """Open row in the column whose board row has the most covered cells.

    Returns None if the column has no open cell.
    """
    best_row = None
    best_count = -1
    for r, _ in board.open_cells_in_column(col, claimed):
        count = sum(1 for c in range(board.size) if board.is_covered(r, c))
        if count > best_count:
            best_row, best_count = r, count
    return best_row


def greedy_placement(board: Board, draw_row: DrawRow,
                     weights: PriorityWeights) -> tuple[tuple[Cell, ...], tuple[Cell, ...], int]:
    """Place plain wilds by row coverage, then super wilds on top-ranked cells.

    Returns (wild_cells, super_wild_cells, unplaced_wild_count).
    """
    claimed: set[Cell] = set()
    wild_cells: list[Cell] = []
    unplaced = 0
    for col in draw_row.wild_columns:
        row = best_row_for_wild(board, col, claimed)
        if row is None:
            unplaced += 1
            continue
        claimed.add((row, col))
        wild_cells.append((row, col))

    ranked = rank_open_cells(board, weights, claimed)
    super_cells = ranked[:draw_row.super_wild_count]
    return tuple(wild_cells), tuple(super_cells), unplaced
