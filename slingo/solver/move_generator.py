"""Enumerate candidate wild-token placements for one draw row."""

from math import comb, prod
from typing import Iterator

from slingo.models.board import Board
from slingo.models.draw import DrawRow, Placement, PlacementSet

Cell = tuple[int, int]
CandidateCells = tuple[tuple[Cell, ...], tuple[Cell, ...]]


def wild_options(board: Board, draw_row: DrawRow) -> list[tuple[int, list[Cell]]]:
    """(column, open cells) for every plain wild that has somewhere to go.

    A wild whose column is fully covered is left out; it is not an error.
    """
    options = []
    for col in draw_row.wild_columns:
        cells = board.open_cells_in_column(col)
        if cells:
            options.append((col, cells))
    return options


def unplaceable_wild_count(board: Board, draw_row: DrawRow) -> int:
    return len(draw_row.wild_columns) - len(wild_options(board, draw_row))


def placeable_super_wilds(board: Board, draw_row: DrawRow) -> int:
    """Super wilds that fit once every placeable plain wild has taken a cell."""
    free = len(board.open_cells()) - len(wild_options(board, draw_row))
    return max(0, min(draw_row.super_wild_count, free))


def estimate_candidate_count(board: Board, draw_row: DrawRow) -> int:
    """Upper bound on the placement sets the exhaustive search would score."""
    options = wild_options(board, draw_row)
    wild_product = prod(len(cells) for _, cells in options) if options else 1
    free = len(board.open_cells()) - len(options)
    supers = placeable_super_wilds(board, draw_row)
    return wild_product * comb(max(free, 0), supers)


def generate_candidate_cells(board: Board, draw_row: DrawRow) -> Iterator[CandidateCells]:
    """Depth-first expansion of every placement for the row's tokens.

    Plain wilds are placed first, each across the open cells of its own
    column. Super wilds then take any open cell not already claimed in the
    branch. Super wilds are interchangeable, so they are expanded in
    ascending cell order (combinations, not permutations).

    Yields (wild_cells, super_wild_cells) tuples, lowest rows first.
    """
    options = [cells for _, cells in wild_options(board, draw_row)]
    open_cells = board.open_cells()
    super_count = placeable_super_wilds(board, draw_row)
    claimed: set[Cell] = set()

    def _place_supers(start: int, wild_cells: tuple[Cell, ...],
                      super_cells: tuple[Cell, ...], remaining: int):
        if remaining == 0:
            yield wild_cells, super_cells
            return
        for idx in range(start, len(open_cells)):
            if len(open_cells) - idx < remaining:
                break
            cell = open_cells[idx]
            if cell in claimed:
                continue
            claimed.add(cell)
            yield from _place_supers(idx + 1, wild_cells, super_cells + (cell,), remaining - 1)
            claimed.discard(cell)

    def _place_wilds(depth: int, wild_cells: tuple[Cell, ...]):
        if depth == len(options):
            yield from _place_supers(0, wild_cells, (), super_count)
            return
        for cell in options[depth]:
            if cell in claimed:
                continue
            claimed.add(cell)
            yield from _place_wilds(depth + 1, wild_cells + (cell,))
            claimed.discard(cell)

    yield from _place_wilds(0, ())


def to_placement_set(wild_cells: tuple[Cell, ...], super_cells: tuple[Cell, ...]) -> PlacementSet:
    return PlacementSet(
        wild_placements=tuple(Placement(r, c) for r, c in wild_cells),
        super_wild_placements=tuple(Placement(r, c) for r, c in super_cells),
    )


def generate_placement_sets(board: Board, draw_row: DrawRow) -> Iterator[PlacementSet]:
    """Every candidate as a PlacementSet. Convenient for tests and small rows."""
    for wild_cells, super_cells in generate_candidate_cells(board, draw_row):
        yield to_placement_set(wild_cells, super_cells)
