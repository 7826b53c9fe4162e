"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field


# --- Request schemas ---

class BoardStateSchema(BaseModel):
    covered_positions: list[list[int]] = Field(default_factory=list)  # [[row, col], ...] 0-indexed
    board_numbers: list[list[int | str]] | None = None  # random card when omitted


class DrawRowSchema(BaseModel):
    # Labels are checked by the engine so errors carry the row number.
    # Rows are numbered by their order in the request.
    positions: list[str]


class AnalyzeRequest(BaseModel):
    board_state: BoardStateSchema
    draws: list[DrawRowSchema]


# --- Response schemas ---

class PlacementSchema(BaseModel):
    row: int  # 1-indexed
    column: int  # 1-indexed


class RecommendationSchema(BaseModel):
    row: int
    positions: list[str]
    expected_score: float
    reasoning: str
    wild_placements: list[PlacementSchema]
    super_wild_placements: list[PlacementSchema]
    search_mode: str


class ProbabilityBreakdownSchema(BaseModel):
    slingo_completion: float = 0
    partial_completion: float = 0
    setup_moves: float = 0


class BoardSnapshotSchema(BaseModel):
    board_numbers: list[list[int | str]]
    covered_positions: list[list[int]]
    current_slingos: int


class ProjectedBoardSchema(BaseModel):
    covered_positions: list[list[int]]
    covered_cells: int
    current_slingos: int


class AnalysisSchema(BaseModel):
    current_lines_completed: int
    potential_lines_completed: int
    covered_cell_count: int
    original_covered_cell_count: int
    total_cells: int
    completion_percentage: float
    probability_breakdown: ProbabilityBreakdownSchema
    board_state: BoardSnapshotSchema
    projected_board_state: ProjectedBoardSchema
    reachable_lines: list[int] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    status: str = "success"
    optimal_selections: list[RecommendationSchema]
    analysis: AnalysisSchema
    evaluation_time_ms: float = 0
