"""Square type alias and coordinate helpers.

Board layout (row-major, column letters a-i, rows 1-9):
    a1=0, b1=1, ..., i1=8
    a2=9, b2=10, ..., i2=17
    ...
    a9=72, b9=73, ..., i9=80
"""

from __future__ import annotations

from typing import Final, TypeAlias

from tablut.core.enums import Direction

Square: TypeAlias = int  # 0–80

BOARD_SIZE: Final = 9
NUM_SQUARES: Final = BOARD_SIZE * BOARD_SIZE

_COLUMNS: Final = "abcdefghi"


def col_of(sq: Square) -> int:
    """Column index 0–8 (a–i)."""
    return sq % BOARD_SIZE


def row_of(sq: Square) -> int:
    """Row index 0–8 (1–9)."""
    return sq // BOARD_SIZE


def make_square(col: int, row: int) -> Square:
    """Create square from column (0–8) and row (0–8)."""
    return row * BOARD_SIZE + col


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return 0 <= sq < NUM_SQUARES


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a1', 40 → 'e5'."""
    return _COLUMNS[col_of(sq)] + str(row_of(sq) + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e5' → 40."""
    if len(name) != 2 or name[0] not in _COLUMNS or name[1] not in "123456789":
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(_COLUMNS.index(name[0]), int(name[1]) - 1)


def is_on_edge(sq: Square) -> bool:
    """Whether *sq* lies in the outermost ring of the board."""
    col = col_of(sq)
    row = row_of(sq)
    return col in (0, BOARD_SIZE - 1) or row in (0, BOARD_SIZE - 1)


def step(sq: Square, direction: Direction, steps: int = 1) -> Square | None:
    """Square *steps* away from *sq* in *direction*, or None if off-board."""
    dc, dr = direction.delta
    col = col_of(sq) + dc * steps
    row = row_of(sq) + dr * steps
    if 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE:
        return make_square(col, row)
    return None


def direction_between(from_sq: Square, to_sq: Square) -> Direction | None:
    """Direction from *from_sq* to *to_sq*, or None if not on a shared line."""
    if from_sq == to_sq:
        return None
    fc, fr = col_of(from_sq), row_of(from_sq)
    tc, tr = col_of(to_sq), row_of(to_sq)
    if fc == tc:
        return Direction.NORTH if tr > fr else Direction.SOUTH
    if fr == tr:
        return Direction.EAST if tc > fc else Direction.WEST
    return None


def squares_between(from_sq: Square, to_sq: Square) -> list[Square]:
    """Squares strictly between two aligned squares (empty if not aligned)."""
    direction = direction_between(from_sq, to_sq)
    if direction is None:
        return []
    result: list[Square] = []
    current = step(from_sq, direction)
    while current is not None and current != to_sq:
        result.append(current)
        current = step(current, direction)
    return result


def _build_neighbors() -> tuple[tuple[Square, ...], ...]:
    table: list[tuple[Square, ...]] = []
    for sq in range(NUM_SQUARES):
        adjacent = (step(sq, direction) for direction in Direction)
        table.append(tuple(n for n in adjacent if n is not None))
    return tuple(table)


_NEIGHBORS = _build_neighbors()


def neighbors(sq: Square) -> tuple[Square, ...]:
    """On-board orthogonal neighbours in N, E, S, W order."""
    return _NEIGHBORS[sq]


def beyond(sq: Square, neighbor: Square) -> Square | None:
    """Square two steps from *sq* through its neighbour, or None if off-board."""
    direction = direction_between(sq, neighbor)
    if direction is None:
        return None
    return step(neighbor, direction)


# ── Named squares ────────────────────────────────────────────────────────────

THRONE: Final = make_square(4, 4)  # e5
THRONE_NEIGHBORS: Final = neighbors(THRONE)  # e6, f5, e4, d5
THRONE_AREA: Final = frozenset((THRONE, *THRONE_NEIGHBORS))
