import math
import os
from dataclasses import dataclass, field

# Board geometry
BOARD_SIZE = 5
TOTAL_CELLS = BOARD_SIZE * BOARD_SIZE

# Draw configuration limits
MIN_DRAW_ROWS = 1
MAX_DRAW_ROWS = 3

# Points per completed Slingo (used for expected value, not for ranking)
SLINGO_POINTS = 25

# Each board column draws numbers from its own band of 15: col 0 -> 1-15, col 1 -> 16-30, ...
NUMBERS_PER_COLUMN = 15

# Super wild count at which exhaustive search is abandoned for the greedy ranking
HEURISTIC_SUPER_WILD_THRESHOLD = 5

# Hard cap on enumerated placement sets in exhaustive mode
EXHAUSTIVE_CANDIDATE_LIMIT = 100_000

LOG_LEVEL = os.getenv("SLINGO_LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class ScoringWeights:
    """Point constants for the placement scoring ladder.

    Tiers, highest first:
      1. completed lines (+ diagonal bonus, + super wild that completed a line)
      2. proximity to completion (4/5, 3/5, 2/5 filled lines)
      3. positional value (center, diagonal, crosshair cells)
      4. multi-line cells (one placement closing several lines)
      5. super wild efficiency
      6. avoidance penalty (placements in sparse rows/columns)
      7. tie-break toward low (row, column) indices

    The magnitudes are tunable, but every point value of a tier must be a
    multiple of that tier's step, and the step must exceed the combined
    maximum of all tiers below it. Then any difference in a higher tier
    decides the comparison. ``ladder_violations`` checks this.
    """
    # Tier 1 (step 1e8)
    line_completion: float = 5_000_000_000.0
    diagonal_completion: float = 2_000_000_000.0
    super_wild_completion: float = 100_000_000.0

    # Tier 2 (step 500k, max 52M)
    near_completion: float = 4_000_000.0  # 4 of 5 filled
    three_of_five: float = 2_000_000.0
    two_of_five: float = 1_000_000.0
    diagonal_proximity_multiplier: float = 1.5

    # Tier 3 (step 25k, max 275k)
    center_cell: float = 75_000.0
    diagonal_cell: float = 50_000.0
    crosshair_cell: float = 25_000.0

    # Tier 4 (step 1000, max 20k)
    multi_line: float = 1000.0

    # Tier 5 (step 50, max 500)
    super_wild_efficiency: float = 100.0
    super_wild_near_completion: float = 50.0

    # Tier 6 (step 1, max 25)
    gap_penalty: float = 2.0
    edge_penalty: float = 1.0
    gap_threshold: int = 3

    # Tier 7 (max 0.115)
    tie_break: float = 0.001

    def tier_bounds(self, size: int = BOARD_SIZE,
                    max_tokens: int = BOARD_SIZE) -> list[tuple[float, float]]:
        """(step, maximum) for tiers 1-7 when one draw row places ``max_tokens`` tokens.

        The step is the largest unit all of a tier's point values are
        multiples of, so any nonzero difference within the tier is at least
        that large. Maxima are upper bounds, not attainable totals.
        """
        m = self.diagonal_proximity_multiplier
        lines = 2 * size + 2
        proximity = (self.two_of_five, self.three_of_five, self.near_completion)
        top_indices = sum(size * size - i for i in range(max_tokens))
        return [
            (_step(self.line_completion, self.diagonal_completion, self.super_wild_completion),
             lines * self.line_completion + 2 * self.diagonal_completion
             + max_tokens * self.super_wild_completion),
            (_step(*proximity, *(p * m for p in proximity)),
             2 * size * self.near_completion + 2 * self.near_completion * m),
            (_step(self.center_cell, self.diagonal_cell, self.crosshair_cell),
             self.center_cell + (max_tokens - 1) * self.diagonal_cell),
            # a cell lies on at most 4 lines
            (_step(self.multi_line), max_tokens * 4 * self.multi_line),
            (_step(self.super_wild_efficiency, self.super_wild_near_completion),
             max_tokens * max(self.super_wild_efficiency, self.super_wild_near_completion)),
            (_step(self.gap_penalty, self.edge_penalty),
             max_tokens * (2 * self.gap_penalty + self.edge_penalty)),
            (_step(self.tie_break), top_indices * self.tie_break),
        ]

    def ladder_violations(self, size: int = BOARD_SIZE,
                          max_tokens: int = BOARD_SIZE) -> list[str]:
        """Tiers whose step does not exceed everything below them."""
        bounds = self.tier_bounds(size, max_tokens)
        problems = []
        for tier, (step, _) in enumerate(bounds[:-1], start=1):
            below = sum(maximum for _, maximum in bounds[tier:])
            if step <= below:
                problems.append(f"tier {tier} step {step:g} <= {below:g} from lower tiers")
        return problems


def _step(*values: float) -> float:
    """Largest unit every nonzero value is a multiple of (to 1e-6)."""
    units = [round(abs(v) * 1_000_000) for v in values if v]
    return math.gcd(*units) / 1_000_000 if units else 0.0


@dataclass(frozen=True)
class PriorityWeights:
    """Cell priority weights for the greedy (heuristic) placement mode."""
    per_covered_in_line: float = 10.0
    per_covered_in_diagonal: float = 15.0
    one_away_bonus: float = 500.0
    center_bonus: float = 40.0
    diagonal_bonus: float = 20.0
    edge_penalty: float = 5.0


@dataclass(frozen=True)
class SlingoConfig:
    """Engine parameters. Pass an instance to swap constants in tests."""
    board_size: int = BOARD_SIZE
    min_draw_rows: int = MIN_DRAW_ROWS
    max_draw_rows: int = MAX_DRAW_ROWS
    heuristic_super_wild_threshold: int = HEURISTIC_SUPER_WILD_THRESHOLD
    exhaustive_candidate_limit: int = EXHAUSTIVE_CANDIDATE_LIMIT
    slingo_points: int = SLINGO_POINTS
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    priorities: PriorityWeights = field(default_factory=PriorityWeights)

    def __post_init__(self):
        problems = self.weights.ladder_violations(self.board_size, self.board_size)
        if problems:
            raise ValueError("Scoring weights break the tier ordering: " + "; ".join(problems))

    @property
    def total_cells(self) -> int:
        return self.board_size * self.board_size


DEFAULT_CONFIG = SlingoConfig()
