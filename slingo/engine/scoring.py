"""Scoring ladder for a candidate placement set."""

from dataclasses import dataclass

from slingo.config import ScoringWeights
from slingo.models.board import Board, Line, cell_bit
from slingo.models.draw import PlacementSet
from slingo.models.enums import SearchMode


@dataclass
class ScoreBreakdown:
    """Per-tier score for one placement set.

    ``penalty`` is stored as a positive number and subtracted in ``total``.
    """
    completion: float = 0.0
    proximity: float = 0.0
    positional: float = 0.0
    multi_line: float = 0.0
    efficiency: float = 0.0
    penalty: float = 0.0
    tie_break: float = 0.0

    lines_completed: int = 0
    diagonals_completed: int = 0
    super_wilds_completing: int = 0

    @property
    def total(self) -> float:
        return (self.completion + self.proximity + self.positional +
                self.multi_line + self.efficiency - self.penalty +
                self.tie_break)

    def as_dict(self) -> dict[str, float]:
        return {
            "completion": self.completion,
            "proximity": round(self.proximity, 1),
            "positional": self.positional,
            "multi_line": self.multi_line,
            "efficiency": self.efficiency,
            "penalty": self.penalty,
            "lines_completed": self.lines_completed,
            "diagonals_completed": self.diagonals_completed,
            "super_wilds_completing": self.super_wilds_completing,
            "total": round(self.total, 1),
        }


def _proximity_points(filled: int, size: int, weights: ScoringWeights) -> float:
    """Points for an incomplete line with `filled` cells covered or placed."""
    gaps = size - filled
    if gaps == 1:
        return weights.near_completion
    if gaps == 2:
        return weights.three_of_five
    if gaps == 3:
        return weights.two_of_five
    return 0.0


def _positional_points(row: int, col: int, size: int, weights: ScoringWeights) -> float:
    mid = size // 2
    if size % 2 == 1 and row == mid and col == mid:
        return weights.center_cell
    if row == col or row + col == size - 1:
        return weights.diagonal_cell
    if size % 2 == 1 and (row == mid or col == mid):
        return weights.crosshair_cell
    return 0.0


def score_cells(board: Board,
                wild_cells: tuple[tuple[int, int], ...],
                super_cells: tuple[tuple[int, int], ...],
                weights: ScoringWeights) -> ScoreBreakdown:
    """Score placed cells against the board.

    Works on raw (row, col) tuples so the exhaustive search can score
    candidates without building PlacementSet objects.
    """
    size = board.size
    lines = board.lines
    placed = wild_cells + super_cells

    extra = 0
    for r, c in placed:
        extra |= cell_bit(r, c, size)
    covered = board.covered_mask
    filled_mask = covered | extra

    bd = ScoreBreakdown()

    # Tier 1 + 2: walk every line once
    completed: list[Line] = []
    fills: list[int] = []
    for line in lines:
        filled = (filled_mask & line.mask).bit_count()
        fills.append(filled)
        if filled == size:
            if covered & line.mask != line.mask:
                completed.append(line)
            continue
        points = _proximity_points(filled, size, weights)
        if points and line.is_diagonal:
            points *= weights.diagonal_proximity_multiplier
        bd.proximity += points

    bd.lines_completed = len(completed)
    bd.diagonals_completed = sum(1 for line in completed if line.is_diagonal)
    bd.completion = (bd.lines_completed * weights.line_completion +
                     bd.diagonals_completed * weights.diagonal_completion)

    for r, c in placed:
        bit = cell_bit(r, c, size)
        closing = sum(1 for line in completed if line.mask & bit)

        # Tier 3
        bd.positional += _positional_points(r, c, size, weights)

        # Tier 4
        if closing >= 2:
            bd.multi_line += weights.multi_line * closing

        # Tier 6: rows index 0..size-1, columns size..2*size-1
        row_gaps = size - fills[r]
        col_gaps = size - fills[size + c]
        penalized = False
        for gaps in (row_gaps, col_gaps):
            if gaps >= weights.gap_threshold:
                bd.penalty += weights.gap_penalty
                penalized = True
        if penalized and (r in (0, size - 1) or c in (0, size - 1)):
            bd.penalty += weights.edge_penalty

        # Tier 7
        bd.tie_break += (size * size - (r * size + c)) * weights.tie_break

    # Tier 1 (super wild share) + tier 5
    for r, c in super_cells:
        bit = cell_bit(r, c, size)
        if any(line.mask & bit for line in completed):
            bd.super_wilds_completing += 1
            bd.completion += weights.super_wild_completion
            bd.efficiency += weights.super_wild_efficiency
            continue
        if any(line.mask & bit and fills[i] == size - 1
               for i, line in enumerate(lines)):
            bd.efficiency += weights.super_wild_near_completion

    return bd


def score_placement(board: Board, placement_set: PlacementSet,
                    weights: ScoringWeights) -> ScoreBreakdown:
    """Score a placement set with the full tier ladder."""
    return score_cells(
        board,
        tuple(p.cell for p in placement_set.wild_placements),
        tuple(p.cell for p in placement_set.super_wild_placements),
        weights,
    )


def count_near_complete_lines(board: Board, placement_set: PlacementSet) -> int:
    """Incomplete lines left one cell short after the placements."""
    extra = board.placement_mask(placement_set)
    return sum(
        1 for line in board.lines
        if board.line_fill(line, extra) == board.size - 1
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def generate_reasoning(board: Board, placement_set: PlacementSet,
                       breakdown: ScoreBreakdown,
                       unplaced_wilds: int = 0,
                       mode: SearchMode = SearchMode.EXHAUSTIVE) -> str:
    """Short human-readable explanation of a placement set."""
    reasons: list[str] = []

    if breakdown.lines_completed > 0:
        text = f"Completes {_plural(breakdown.lines_completed, 'Slingo')}"
        if breakdown.diagonals_completed == 1:
            text += " including a diagonal"
        elif breakdown.diagonals_completed > 1:
            text += " including both diagonals"
        reasons.append(text)
    else:
        near = count_near_complete_lines(board, placement_set)
        text = "Sets up future Slingo opportunities"
        if near:
            text += f" ({_plural(near, 'line')} one away from completion)"
        reasons.append(text)

    wilds = len(placement_set.wild_placements)
    supers = len(placement_set.super_wild_placements)
    if wilds:
        reasons.append(f"Uses {_plural(wilds, 'wild card')}")
    if supers:
        reasons.append(f"Uses {_plural(supers, 'super wild card')}")
    if unplaced_wilds:
        reasons.append(
            f"{_plural(unplaced_wilds, 'wild card')} could not be placed (column already covered)"
        )
    if mode == SearchMode.HEURISTIC:
        reasons.append("placed by priority heuristic (too many combinations for exhaustive search)")

    return ", ".join(reasons)
