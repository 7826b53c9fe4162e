"""Best placement per draw row: exhaustive search or greedy heuristic."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from slingo.config import DEFAULT_CONFIG, SlingoConfig
from slingo.engine.scoring import (
    ScoreBreakdown, generate_reasoning, score_cells, score_placement,
)
from slingo.models.board import Board
from slingo.models.draw import DrawConfiguration, DrawRow, Placement, PlacementSet
from slingo.models.enums import SearchMode
from slingo.solver.heuristics import greedy_placement
from slingo.solver.move_generator import (
    estimate_candidate_count, generate_candidate_cells, to_placement_set,
    unplaceable_wild_count,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Best placement set found for one draw row."""
    placement_set: PlacementSet
    breakdown: ScoreBreakdown
    mode: SearchMode
    candidates_evaluated: int = 0
    unplaced_wilds: int = 0
    elapsed_ms: float = 0.0

    @property
    def score(self) -> float:
        return self.breakdown.total


SearchStrategy = Callable[[Board, DrawRow, SlingoConfig], SearchResult]


def exhaustive_search(board: Board, draw_row: DrawRow,
                      config: SlingoConfig = DEFAULT_CONFIG) -> SearchResult:
    """Score every candidate placement and keep the best.

    Ties keep the first candidate enumerated.
    """
    weights = config.weights
    best_cells = ((), ())
    best: ScoreBreakdown | None = None
    evaluated = 0

    for wild_cells, super_cells in generate_candidate_cells(board, draw_row):
        evaluated += 1
        bd = score_cells(board, wild_cells, super_cells, weights)
        if best is None or bd.total > best.total:
            best = bd
            best_cells = (wild_cells, super_cells)

    placement_set = to_placement_set(*best_cells)
    if best is None:
        best = score_placement(board, placement_set, weights)
    return SearchResult(
        placement_set=placement_set,
        breakdown=best,
        mode=SearchMode.EXHAUSTIVE,
        candidates_evaluated=evaluated,
        unplaced_wilds=unplaceable_wild_count(board, draw_row),
    )


def heuristic_search(board: Board, draw_row: DrawRow,
                     config: SlingoConfig = DEFAULT_CONFIG) -> SearchResult:
    """Greedy placement by cell priority, scored with the full ladder."""
    wild_cells, super_cells, unplaced = greedy_placement(board, draw_row, config.priorities)
    placement_set = to_placement_set(wild_cells, super_cells)
    return SearchResult(
        placement_set=placement_set,
        breakdown=score_placement(board, placement_set, config.weights),
        mode=SearchMode.HEURISTIC,
        candidates_evaluated=1,
        unplaced_wilds=unplaced,
    )


def select_strategy(board: Board, draw_row: DrawRow,
                    config: SlingoConfig = DEFAULT_CONFIG) -> SearchStrategy:
    """Exhaustive unless the row holds too many super wilds or too many candidates."""
    if draw_row.super_wild_count >= config.heuristic_super_wild_threshold:
        return heuristic_search
    if estimate_candidate_count(board, draw_row) > config.exhaustive_candidate_limit:
        return heuristic_search
    return exhaustive_search


def search_best_placement(board: Board, draw_row: DrawRow,
                          config: SlingoConfig = DEFAULT_CONFIG) -> SearchResult | None:
    """Best placement set for one draw row, or None if nothing can be placed."""
    if not draw_row.has_tokens:
        return None

    strategy = select_strategy(board, draw_row, config)
    start = time.perf_counter()
    result = strategy(board, draw_row, config)
    result.elapsed_ms = (time.perf_counter() - start) * 1000

    logger.debug(
        "%s search: %d candidates in %.1fms, best %.1f",
        result.mode.value, result.candidates_evaluated, result.elapsed_ms, result.score,
    )
    if result.placement_set.is_empty:
        return None
    return result


@dataclass
class Recommendation:
    """Best placement for one draw row, as shown to the player."""
    row_index: int  # 1-based draw row number
    position_labels: list[str]
    expected_score: float
    reasoning: str
    wild_placements: list[Placement] = field(default_factory=list)
    super_wild_placements: list[Placement] = field(default_factory=list)
    mode: SearchMode = SearchMode.EXHAUSTIVE
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    @property
    def placement_set(self) -> PlacementSet:
        return PlacementSet(tuple(self.wild_placements), tuple(self.super_wild_placements))

    @property
    def lines_completed(self) -> int:
        return self.breakdown.lines_completed

    @property
    def token_count(self) -> int:
        return len(self.wild_placements) + len(self.super_wild_placements)

    def as_dict(self) -> dict:
        return {
            "row": self.row_index,
            "positions": list(self.position_labels),
            "expected_score": self.expected_score,
            "reasoning": self.reasoning,
            "wild_placements": [p.as_dict() for p in self.wild_placements],
            "super_wild_placements": [p.as_dict() for p in self.super_wild_placements],
            "search_mode": self.mode.value,
        }


def recommend_for_row(board: Board, draw_row: DrawRow, row_index: int,
                      config: SlingoConfig = DEFAULT_CONFIG) -> Recommendation | None:
    result = search_best_placement(board, draw_row, config)
    if result is None:
        return None
    reasoning = generate_reasoning(
        board, result.placement_set, result.breakdown,
        unplaced_wilds=result.unplaced_wilds, mode=result.mode,
    )
    return Recommendation(
        row_index=row_index,
        position_labels=draw_row.labels,
        expected_score=round(result.score, 1),
        reasoning=reasoning,
        wild_placements=list(result.placement_set.wild_placements),
        super_wild_placements=list(result.placement_set.super_wild_placements),
        mode=result.mode,
        breakdown=result.breakdown,
    )


def recommend_placements(board: Board, draws: DrawConfiguration,
                         config: SlingoConfig = DEFAULT_CONFIG) -> list[Recommendation]:
    """One recommendation per draw row that has something to place.

    Rows are independent: each is searched against the same board.
    """
    recommendations = []
    for i, draw_row in enumerate(draws.rows):
        rec = recommend_for_row(board, draw_row, i + 1, config)
        if rec is None:
            logger.debug("Draw row %d has nothing to place", i + 1)
            continue
        recommendations.append(rec)
    return recommendations
