"""Placement search and reporting for Slingo draw rows."""

from slingo.solver.analysis import AnalysisReport, AnalysisSummary, analyze_optimal_strategy, summarize
from slingo.solver.search import Recommendation, SearchResult, recommend_placements, search_best_placement

__all__ = [
    "AnalysisReport",
    "AnalysisSummary",
    "Recommendation",
    "SearchResult",
    "analyze_optimal_strategy",
    "recommend_placements",
    "search_best_placement",
    "summarize",
]
