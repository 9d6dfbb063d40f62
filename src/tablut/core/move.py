"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from tablut.core.types import (
    Square,
    col_of,
    direction_between,
    is_valid_square,
    square_name,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable rook move from one square to another on the same line."""

    from_sq: Square
    to_sq: Square

    def __post_init__(self) -> None:
        if not (is_valid_square(self.from_sq) and is_valid_square(self.to_sq)):
            raise ValueError(f"Square out of range: {self.from_sq}, {self.to_sq}")
        if direction_between(self.from_sq, self.to_sq) is None:
            raise ValueError(
                "Not a rook move: "
                f"{square_name(self.from_sq)}-{square_name(self.to_sq)}"
            )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Abbreviated notation, e.g. 'd1-3' or 'e1-c'."""
        start = square_name(self.from_sq)
        target = square_name(self.to_sq)
        if col_of(self.from_sq) == col_of(self.to_sq):
            return f"{start}-{target[1]}"
        return f"{start}-{target[0]}"

    @property
    def long(self) -> str:
        """Full notation with both squares, e.g. 'd1-d3'."""
        return f"{square_name(self.from_sq)}-{square_name(self.to_sq)}"
