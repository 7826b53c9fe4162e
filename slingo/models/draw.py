"""Draw rows and the wild-token placements made for them."""

from __future__ import annotations

from dataclasses import dataclass, field

from slingo.config import BOARD_SIZE, DEFAULT_CONFIG, SlingoConfig
from slingo.errors import InvalidDrawConfigurationError
from slingo.models.enums import MARK_LABELS, Mark


@dataclass(frozen=True, order=True)
class Placement:
    """One wild token on one board cell (0-indexed)."""
    row: int
    col: int

    @property
    def cell(self) -> tuple[int, int]:
        return (self.row, self.col)

    def as_dict(self) -> dict[str, int]:
        """1-indexed form used in API responses."""
        return {"row": self.row + 1, "column": self.col + 1}


@dataclass(frozen=True)
class PlacementSet:
    """All tokens placed for a single draw row."""
    wild_placements: tuple[Placement, ...] = ()
    super_wild_placements: tuple[Placement, ...] = ()

    @property
    def placements(self) -> tuple[Placement, ...]:
        return self.wild_placements + self.super_wild_placements

    @property
    def cells(self) -> frozenset[tuple[int, int]]:
        return frozenset(p.cell for p in self.placements)

    @property
    def token_count(self) -> int:
        return len(self.wild_placements) + len(self.super_wild_placements)

    @property
    def is_empty(self) -> bool:
        return self.token_count == 0

    def has_conflicts(self) -> bool:
        """True if two tokens share a cell."""
        return len(self.cells) != self.token_count

    def contains(self, row: int, col: int) -> bool:
        return (row, col) in self.cells

    def is_super_wild(self, row: int, col: int) -> bool:
        return any(p.row == row and p.col == col for p in self.super_wild_placements)

    def as_dict(self) -> dict[str, list[dict[str, int]]]:
        return {
            "wild_placements": [p.as_dict() for p in self.wild_placements],
            "super_wild_placements": [p.as_dict() for p in self.super_wild_placements],
        }


EMPTY_PLACEMENT_SET = PlacementSet()


@dataclass(frozen=True)
class DrawRow:
    """A single row of the draw: one mark per board column."""
    marks: tuple[Mark, ...]

    @classmethod
    def from_labels(cls, labels, size: int = BOARD_SIZE) -> DrawRow:
        """Build from request labels ("none" / "wild" / "super_wild")."""
        labels = list(labels)
        if len(labels) != size:
            raise InvalidDrawConfigurationError(
                f"draw row must have exactly {size} positions, got {len(labels)}"
            )
        marks = []
        for label in labels:
            if isinstance(label, Mark):
                marks.append(label)
                continue
            mark = MARK_LABELS.get(label) if isinstance(label, str) else None
            if mark is None:
                raise InvalidDrawConfigurationError(f"Invalid position value: {label}")
            marks.append(mark)
        return cls(tuple(marks))

    @property
    def labels(self) -> list[str]:
        return [m.value for m in self.marks]

    @property
    def wild_columns(self) -> list[int]:
        """Columns a plain wild is restricted to, left to right."""
        return [i for i, m in enumerate(self.marks) if m == Mark.WILD]

    @property
    def super_wild_count(self) -> int:
        return sum(1 for m in self.marks if m == Mark.SUPER_WILD)

    @property
    def token_count(self) -> int:
        return len(self.wild_columns) + self.super_wild_count

    @property
    def has_tokens(self) -> bool:
        return self.token_count > 0

    def allows_column(self, col: int) -> bool:
        """Whether a token from this row could land in the column.

        Only plain wilds are tied to their column, but reachability follows
        the row's layout: a column marked "none" contributes no token.
        """
        return 0 <= col < len(self.marks) and self.marks[col] != Mark.NONE


@dataclass
class DrawConfiguration:
    """Ordered list of 1-3 draw rows."""
    rows: list[DrawRow] = field(default_factory=list)

    @classmethod
    def from_payload(cls, draws, config: SlingoConfig = DEFAULT_CONFIG) -> DrawConfiguration:
        """Parse and validate request draws.

        Each entry is either ``{"positions": [...]}`` or a bare list of labels.
        Raises InvalidDrawConfigurationError on any malformed input.
        """
        if not draws:
            raise InvalidDrawConfigurationError("At least one draw row is required")
        rows = []
        for index, draw in enumerate(draws):
            labels = draw.get("positions") if isinstance(draw, dict) else draw
            if labels is None or isinstance(labels, str) or not hasattr(labels, "__len__"):
                raise InvalidDrawConfigurationError(
                    f"Draw row {index + 1} is missing its positions"
                )
            if len(labels) != config.board_size:
                raise InvalidDrawConfigurationError(
                    f"Draw row {index + 1} must have exactly {config.board_size} positions"
                )
            rows.append(DrawRow.from_labels(labels, config.board_size))
        draw_config = cls(rows)
        draw_config.validate(config)
        return draw_config

    def add_row(self, labels, size: int = BOARD_SIZE) -> None:
        self.rows.append(DrawRow.from_labels(labels, size))

    def validate(self, config: SlingoConfig = DEFAULT_CONFIG) -> None:
        if len(self.rows) < config.min_draw_rows:
            raise InvalidDrawConfigurationError("At least one draw row is required")
        if len(self.rows) > config.max_draw_rows:
            raise InvalidDrawConfigurationError(
                f"Maximum {config.max_draw_rows} draw rows allowed"
            )
        for index, row in enumerate(self.rows):
            if len(row.marks) != config.board_size:
                raise InvalidDrawConfigurationError(
                    f"Draw row {index + 1} must have exactly {config.board_size} positions"
                )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)
