"""Board analysis route."""

import logging
import time

from fastapi import APIRouter, HTTPException

from slingo.api.schemas import AnalyzeRequest, AnalyzeResponse
from slingo.api.serializers import recommendation_to_schema, request_to_payload, summary_to_schema
from slingo.config import DEFAULT_CONFIG
from slingo.errors import SlingoError
from slingo.solver.analysis import analyze_optimal_strategy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_board(req: AnalyzeRequest) -> AnalyzeResponse:
    """Recommend wild placements for each draw row and summarize the board.

    Plain ``def`` so the search runs in the threadpool instead of the event loop.
    """
    board_state, draws = request_to_payload(req)

    start = time.perf_counter()
    try:
        report = analyze_optimal_strategy(board_state, draws, DEFAULT_CONFIG)
    except SlingoError as exc:
        logger.warning("Analysis rejected: %s", exc)
        raise HTTPException(400, f"Analysis failed: {exc}")
    elapsed = (time.perf_counter() - start) * 1000

    return AnalyzeResponse(
        optimal_selections=[recommendation_to_schema(r) for r in report.recommendations],
        analysis=summary_to_schema(report.summary),
        evaluation_time_ms=round(elapsed, 1),
    )
