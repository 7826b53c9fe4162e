from enum import Enum


class Mark(Enum):
    """What a draw row shows in one column."""
    NONE = "none"
    WILD = "wild"
    SUPER_WILD = "super_wild"


class LineKind(Enum):
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"  # top-left to bottom-right
    ANTI_DIAGONAL = "anti_diagonal"  # top-right to bottom-left

    @property
    def is_diagonal(self) -> bool:
        return self in (LineKind.DIAGONAL, LineKind.ANTI_DIAGONAL)


class SearchMode(Enum):
    EXHAUSTIVE = "exhaustive"
    HEURISTIC = "heuristic"


class OutcomeClass(Enum):
    """Bucket a draw row falls into by the number of lines it completes."""
    SLINGO_COMPLETION = "slingo_completion"
    PARTIAL_COMPLETION = "partial_completion"
    SETUP_MOVES = "setup_moves"


# Map from request label to Mark
MARK_LABELS = {m.value: m for m in Mark}
