"""Slingo board: a size x size card with covered cells and 12 winning lines."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from functools import lru_cache

import numpy as np

from slingo.config import BOARD_SIZE, NUMBERS_PER_COLUMN
from slingo.errors import InvalidBoardError
from slingo.models.draw import DrawRow, PlacementSet
from slingo.models.enums import LineKind


def cell_bit(row: int, col: int, size: int = BOARD_SIZE) -> int:
    """Bit for a cell in a row-major board bitmask."""
    return 1 << (row * size + col)


def cells_mask(cells, size: int = BOARD_SIZE) -> int:
    mask = 0
    for row, col in cells:
        mask |= cell_bit(row, col, size)
    return mask


@dataclass(frozen=True)
class Line:
    """One winning line: a row, a column, or one of the two diagonals."""
    kind: LineKind
    index: int
    cells: tuple[tuple[int, int], ...]
    mask: int

    @property
    def is_diagonal(self) -> bool:
        return self.kind.is_diagonal

    @property
    def label(self) -> str:
        if self.kind == LineKind.ROW:
            return f"row {self.index + 1}"
        if self.kind == LineKind.COLUMN:
            return f"column {self.index + 1}"
        if self.kind == LineKind.DIAGONAL:
            return "main diagonal"
        return "anti-diagonal"


@lru_cache(maxsize=None)
def board_lines(size: int = BOARD_SIZE) -> tuple[Line, ...]:
    """All winning lines for a board size: rows, columns, then both diagonals."""
    line_defs: list[tuple[LineKind, int, list[tuple[int, int]]]] = []
    for r in range(size):
        line_defs.append((LineKind.ROW, r, [(r, c) for c in range(size)]))
    for c in range(size):
        line_defs.append((LineKind.COLUMN, c, [(r, c) for r in range(size)]))
    line_defs.append((LineKind.DIAGONAL, 0, [(i, i) for i in range(size)]))
    line_defs.append((LineKind.ANTI_DIAGONAL, 0, [(i, size - 1 - i) for i in range(size)]))
    return tuple(
        Line(kind, idx, tuple(cells), cells_mask(cells, size))
        for kind, idx, cells in line_defs
    )


@lru_cache(maxsize=None)
def lines_through(row: int, col: int, size: int = BOARD_SIZE) -> tuple[Line, ...]:
    """Lines that contain a given cell (2 for most cells, 4 for the center)."""
    bit = cell_bit(row, col, size)
    return tuple(line for line in board_lines(size) if line.mask & bit)


def random_board_numbers(size: int = BOARD_SIZE,
                         rng: random.Random | None = None) -> list[list[int]]:
    """Generate a Slingo card: column c holds numbers from its own band of 15."""
    rng = rng or random.Random()
    numbers = []
    for _ in range(size):
        row = []
        for col in range(size):
            low = col * NUMBERS_PER_COLUMN + 1
            row.append(rng.randint(low, low + NUMBERS_PER_COLUMN - 1))
        numbers.append(row)
    return numbers


def _parse_position(position, size: int) -> tuple[int, int] | None:
    """Return (row, col) for a well-formed in-range pair, else None."""
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        return None
    row, col = position
    if isinstance(row, bool) or isinstance(col, bool):
        return None
    if not isinstance(row, int) or not isinstance(col, int):
        return None
    if not (0 <= row < size and 0 <= col < size):
        return None
    return (row, col)


@dataclass
class Board:
    """A Slingo card with its covered cells.

    Board numbers are display labels only; scoring looks at coverage alone.
    Treat instances as read-only during analysis: use ``with_placements`` to
    derive the board after a placement instead of mutating.
    """
    board_numbers: list[list]
    covered: frozenset[tuple[int, int]] = frozenset()  # any iterable of pairs; normalized on init
    size: int = BOARD_SIZE
    covered_mask: int = field(init=False, repr=False, default=0)

    def __post_init__(self):
        if len(self.board_numbers) != self.size or any(
            not isinstance(row, (list, tuple)) or len(row) != self.size
            for row in self.board_numbers
        ):
            raise InvalidBoardError(
                f"board_numbers must be a {self.size}x{self.size} grid"
            )
        self.board_numbers = [list(row) for row in self.board_numbers]
        self.covered = frozenset(
            cell for cell in (_parse_position(p, self.size) for p in self.covered)
            if cell is not None
        )
        self.covered_mask = cells_mask(self.covered, self.size)

    @classmethod
    def from_positions(cls, covered_positions, board_numbers=None,
                       size: int = BOARD_SIZE,
                       rng: random.Random | None = None) -> Board:
        """Build from request data.

        Malformed or out-of-range positions are dropped and duplicates
        collapse; a missing label grid is replaced by a random card.
        """
        if board_numbers is None:
            board_numbers = random_board_numbers(size, rng)
        return cls(board_numbers=board_numbers,
                   covered=list(covered_positions or []),
                   size=size)

    # --- Cell queries ---

    def is_covered(self, row: int, col: int) -> bool:
        return (row, col) in self.covered

    @property
    def covered_count(self) -> int:
        return len(self.covered)

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    def covered_positions(self) -> list[list[int]]:
        """Covered cells as sorted [row, col] pairs."""
        return [[r, c] for r, c in sorted(self.covered)]

    def open_cells(self, claimed: frozenset[tuple[int, int]] | set = frozenset()) -> list[tuple[int, int]]:
        """Uncovered, unclaimed cells in row-major order."""
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if (r, c) not in self.covered and (r, c) not in claimed
        ]

    def open_cells_in_column(self, col: int,
                             claimed: frozenset[tuple[int, int]] | set = frozenset()) -> list[tuple[int, int]]:
        return [
            (r, col) for r in range(self.size)
            if (r, col) not in self.covered and (r, col) not in claimed
        ]

    def coverage_grid(self) -> np.ndarray:
        """0/1 matrix of covered cells."""
        grid = np.zeros((self.size, self.size), dtype=np.int8)
        for r, c in self.covered:
            grid[r, c] = 1
        return grid

    # --- Line queries ---

    @property
    def lines(self) -> tuple[Line, ...]:
        return board_lines(self.size)

    def placement_mask(self, placement_set: PlacementSet | None) -> int:
        if placement_set is None:
            return 0
        return cells_mask(placement_set.cells, self.size)

    def line_fill(self, line: Line, extra_mask: int = 0) -> int:
        """Cells of the line that are covered or in the extra mask."""
        return ((self.covered_mask | extra_mask) & line.mask).bit_count()

    def is_line_complete(self, line: Line, extra_mask: int = 0) -> bool:
        return (self.covered_mask | extra_mask) & line.mask == line.mask

    def completed_lines(self, placement_set: PlacementSet | None = None) -> list[Line]:
        """Lines whose every cell is covered or placed."""
        extra = self.placement_mask(placement_set)
        return [line for line in self.lines if self.is_line_complete(line, extra)]

    def current_completed_lines(self) -> int:
        return len(self.completed_lines())

    def potential_lines(self, placement_set: PlacementSet) -> int:
        """Lines complete once the placement set is applied (includes lines already complete)."""
        return len(self.completed_lines(placement_set))

    def lines_completed_by(self, placement_set: PlacementSet) -> list[Line]:
        """Lines the placement set completes that were not complete before."""
        extra = self.placement_mask(placement_set)
        return [
            line for line in self.lines
            if self.is_line_complete(line, extra) and not self.is_line_complete(line)
        ]

    def reachable_lines(self, draw_row: DrawRow) -> int:
        """Incomplete lines whose every gap lies in a column the draw row marks.

        A coarse reachability count that ignores how many tokens the row
        actually holds.
        """
        count = 0
        for line in self.lines:
            gaps = [(r, c) for r, c in line.cells if not self.is_covered(r, c)]
            if gaps and all(draw_row.allows_column(c) for _, c in gaps):
                count += 1
        return count

    # --- Derived boards ---

    def with_placements(self, placement_set: PlacementSet) -> Board:
        """A new board with the placement set's cells covered."""
        return Board(
            board_numbers=self.board_numbers,
            covered=self.covered | placement_set.cells,
            size=self.size,
        )

    def state_snapshot(self) -> dict:
        return {
            "board_numbers": [list(row) for row in self.board_numbers],
            "covered_positions": self.covered_positions(),
            "current_slingos": self.current_completed_lines(),
        }
