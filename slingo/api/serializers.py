"""Convert between domain models and API schemas."""

from slingo.api.schemas import (
    AnalysisSchema, AnalyzeRequest, BoardSnapshotSchema, PlacementSchema,
    ProbabilityBreakdownSchema, ProjectedBoardSchema, RecommendationSchema,
)
from slingo.models.draw import Placement
from slingo.solver.analysis import AnalysisSummary
from slingo.solver.search import Recommendation


def placement_to_schema(placement: Placement) -> PlacementSchema:
    return PlacementSchema(**placement.as_dict())


def recommendation_to_schema(rec: Recommendation) -> RecommendationSchema:
    return RecommendationSchema(
        row=rec.row_index,
        positions=list(rec.position_labels),
        expected_score=rec.expected_score,
        reasoning=rec.reasoning,
        wild_placements=[placement_to_schema(p) for p in rec.wild_placements],
        super_wild_placements=[placement_to_schema(p) for p in rec.super_wild_placements],
        search_mode=rec.mode.value,
    )


def summary_to_schema(summary: AnalysisSummary) -> AnalysisSchema:
    return AnalysisSchema(
        current_lines_completed=summary.current_lines_completed,
        potential_lines_completed=summary.potential_lines_completed,
        covered_cell_count=summary.covered_cell_count,
        original_covered_cell_count=summary.original_covered_cell_count,
        total_cells=summary.total_cells,
        completion_percentage=summary.completion_percentage,
        probability_breakdown=ProbabilityBreakdownSchema(**summary.probability_breakdown),
        board_state=BoardSnapshotSchema(**summary.board_state_snapshot),
        projected_board_state=ProjectedBoardSchema(**summary.projected_board_state),
        reachable_lines=list(summary.reachable_lines),
    )


def request_to_payload(req: AnalyzeRequest) -> tuple[dict, list[dict]]:
    """Split a request into the (board_state, draws) dicts the analyzer takes."""
    board_state = {
        "covered_positions": [list(p) for p in req.board_state.covered_positions],
        "board_numbers": None,
    }
    if req.board_state.board_numbers is not None:
        board_state["board_numbers"] = [list(row) for row in req.board_state.board_numbers]
    draws = [{"positions": list(d.positions)} for d in req.draws]
    return board_state, draws
