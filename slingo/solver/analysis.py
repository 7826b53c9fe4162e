"""Aggregate per-row recommendations into board-level statistics.

Draw rows are searched independently against the original board, while the
cell counts here are cumulative: every recommended token is counted as if all
rows were played on one card. ``projected_board_state`` shows that card.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from slingo.config import DEFAULT_CONFIG, SlingoConfig
from slingo.errors import InvalidBoardError
from slingo.models.board import Board
from slingo.models.draw import DrawConfiguration, DrawRow
from slingo.models.enums import OutcomeClass
from slingo.solver.search import Recommendation, recommend_placements

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSummary:
    """Board-level statistics for one analysis request."""
    current_lines_completed: int
    potential_lines_completed: int
    covered_cell_count: int
    original_covered_cell_count: int
    total_cells: int
    completion_percentage: float
    probability_breakdown: dict[str, float] = field(default_factory=dict)
    board_state_snapshot: dict = field(default_factory=dict)
    projected_board_state: dict = field(default_factory=dict)
    reachable_lines: list[int] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "current_lines_completed": self.current_lines_completed,
            "potential_lines_completed": self.potential_lines_completed,
            "covered_cell_count": self.covered_cell_count,
            "original_covered_cell_count": self.original_covered_cell_count,
            "total_cells": self.total_cells,
            "completion_percentage": self.completion_percentage,
            "probability_breakdown": dict(self.probability_breakdown),
            "board_state": self.board_state_snapshot,
            "projected_board_state": self.projected_board_state,
            "reachable_lines": list(self.reachable_lines),
        }


@dataclass
class AnalysisReport:
    recommendations: list[Recommendation]
    summary: AnalysisSummary

    def as_dict(self) -> dict:
        return {
            "recommendations": [r.as_dict() for r in self.recommendations],
            "analysis": self.summary.as_dict(),
        }


def classify_outcome(reachable_lines: int) -> OutcomeClass:
    if reachable_lines >= 2:
        return OutcomeClass.SLINGO_COMPLETION
    if reachable_lines == 1:
        return OutcomeClass.PARTIAL_COMPLETION
    return OutcomeClass.SETUP_MOVES


def probability_breakdown(lines_per_row: list[int]) -> dict[str, float]:
    """Share of draw rows in each outcome class, as percentages (1 decimal).

    ``lines_per_row`` holds the reachable line count of each draw row.
    """
    counts = {oc.value: 0 for oc in OutcomeClass}
    if not lines_per_row:
        return {k: 0.0 for k in counts}
    for lines in lines_per_row:
        counts[classify_outcome(lines).value] += 1
    total = len(lines_per_row)
    return {k: round(v / total * 100, 1) for k, v in counts.items()}


def projected_board(board: Board, recommendations: list[Recommendation]) -> Board:
    """The board with every recommendation applied in order."""
    projected = board
    for rec in recommendations:
        projected = projected.with_placements(rec.placement_set)
    return projected


def summarize(board: Board, recommendations: list[Recommendation],
              draw_rows: DrawConfiguration | list[DrawRow] | None = None) -> AnalysisSummary:
    """Aggregate statistics over the best placement of each draw row.

    Each draw row lands in an outcome class by the number of lines it could
    reach (``Board.reachable_lines``), whether or not it produced a
    recommendation. Without ``draw_rows`` the breakdown is all zero.
    """
    rows = list(draw_rows) if draw_rows is not None else []
    reachable = [board.reachable_lines(row) for row in rows]

    placed = sum(rec.token_count for rec in recommendations)
    covered = board.covered_count + placed
    total_cells = board.total_cells

    projected = projected_board(board, recommendations)
    projected_state = {
        "covered_positions": projected.covered_positions(),
        "covered_cells": projected.covered_count,
        "current_slingos": projected.current_completed_lines(),
    }

    return AnalysisSummary(
        current_lines_completed=board.current_completed_lines(),
        potential_lines_completed=sum(
            board.potential_lines(rec.placement_set) for rec in recommendations
        ),
        covered_cell_count=covered,
        original_covered_cell_count=board.covered_count,
        total_cells=total_cells,
        completion_percentage=round(covered / total_cells * 100, 1),
        probability_breakdown=probability_breakdown(reachable),
        board_state_snapshot=board.state_snapshot(),
        projected_board_state=projected_state,
        reachable_lines=reachable,
    )


def calculate_expected_value(board: Board, recommendations: list[Recommendation],
                             config: SlingoConfig = DEFAULT_CONFIG) -> float:
    """Points already on the card plus the expected score of each recommendation."""
    value = board.current_completed_lines() * config.slingo_points
    return value + sum(rec.expected_score for rec in recommendations)


def analyze_optimal_strategy(board_state: dict, draws: list,
                             config: SlingoConfig = DEFAULT_CONFIG,
                             rng: random.Random | None = None) -> AnalysisReport:
    """Validate request data, search each draw row, and summarize.

    ``board_state`` holds ``covered_positions`` and optionally
    ``board_numbers`` (a random card is generated when absent). ``draws`` is a
    list of ``{"positions": [...]}`` entries or bare label lists.
    """
    if not isinstance(board_state, dict):
        raise InvalidBoardError("board_state must be an object")
    draw_config = DrawConfiguration.from_payload(draws, config)
    board = Board.from_positions(
        board_state.get("covered_positions") or [],
        board_state.get("board_numbers"),
        size=config.board_size,
        rng=rng,
    )

    recommendations = recommend_placements(board, draw_config, config)
    summary = summarize(board, recommendations, draw_config)

    logger.info(
        "Analyzed %d draw row(s): %d recommendation(s), %d potential line(s), %.1f%% covered",
        len(draw_config), len(recommendations),
        summary.potential_lines_completed, summary.completion_percentage,
    )
    return AnalysisReport(recommendations=recommendations, summary=summary)
