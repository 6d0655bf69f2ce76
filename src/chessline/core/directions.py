"""Direction algebra over 0x88 squares.

A direction is a byte holding ``DIRECTION_BIAS + step``, taken modulo 256.
The bias keeps every step used by the pieces (at most ±0x21) inside one
unsigned byte, so directions compose by plain addition::

    combine(UP, RIGHT)          # one diagonal step, +0x11
    combine(UP, RIGHT, RIGHT)   # one knight jump,   +0x12

and a square moves by ``sq + direction - DIRECTION_BIAS``. Results wrap
modulo 256; a wrapped value always has bit 7 set and is therefore caught by
:func:`~chessline.core.types.off_the_board`.
"""

from __future__ import annotations

from functools import reduce
from typing import Final, TypeAlias

from chessline.core.types import Square

Direction: TypeAlias = int  # biased byte

DIRECTION_BIAS: Final = 0x77
_BYTE_MASK: Final = 0xFF


def _require_byte(value: int, what: str) -> int:
    if not 0 <= value <= _BYTE_MASK:
        raise ValueError(f"{what} must fit in one byte: {value!r}")
    return value


def _direction(step: int) -> Direction:
    return (DIRECTION_BIAS + step) & _BYTE_MASK


UP: Final = _direction(0x10)
DOWN: Final = _direction(-0x10)
RIGHT: Final = _direction(0x01)
LEFT: Final = _direction(-0x01)


def combine(*directions: Direction) -> Direction:
    """Compose directions into one, e.g. ``combine(UP, RIGHT, RIGHT)``."""
    if not directions:
        raise ValueError("combine() needs at least one direction")
    for d in directions:
        _require_byte(d, "Direction")
    return reduce(
        lambda lhs, rhs: (lhs + rhs - DIRECTION_BIAS) & _BYTE_MASK, directions
    )


def apply(sq: Square, direction: Direction) -> Square:
    """Move *sq* one step along *direction*. The result may be off the board."""
    _require_byte(sq, "Square")
    _require_byte(direction, "Direction")
    return (sq + direction - DIRECTION_BIAS) & _BYTE_MASK


def offset(direction: Direction) -> int:
    """Signed square delta represented by *direction*, e.g. ``offset(UP) == 16``."""
    step = (_require_byte(direction, "Direction") - DIRECTION_BIAS) & _BYTE_MASK
    return step - 0x100 if step & 0x80 else step


# ── Direction sets (order is the generation order) ───────────────────────────

ROOK_DIRECTIONS: Final[tuple[Direction, ...]] = (UP, DOWN, RIGHT, LEFT)
BISHOP_DIRECTIONS: Final[tuple[Direction, ...]] = (
    combine(UP, RIGHT),
    combine(DOWN, RIGHT),
    combine(UP, LEFT),
    combine(DOWN, LEFT),
)
QUEEN_DIRECTIONS: Final[tuple[Direction, ...]] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS
KING_DIRECTIONS: Final[tuple[Direction, ...]] = QUEEN_DIRECTIONS
KNIGHT_DIRECTIONS: Final[tuple[Direction, ...]] = (
    combine(UP, RIGHT, RIGHT),
    combine(DOWN, RIGHT, RIGHT),
    combine(UP, LEFT, LEFT),
    combine(DOWN, LEFT, LEFT),
    combine(RIGHT, UP, UP),
    combine(LEFT, UP, UP),
    combine(RIGHT, DOWN, DOWN),
    combine(LEFT, DOWN, DOWN),
)
