"""Move value objects: one primary relocation plus an optional secondary one."""

from __future__ import annotations

from dataclasses import dataclass

from chessline.core.piece import Piece
from chessline.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class MoveStage:
    """A single piece relocation from ``from_sq`` to ``to_sq``."""

    piece: Piece
    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        letter = str(self.piece).upper()
        return f"{letter}{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    ``first`` is the main relocation. ``second`` is the simultaneous
    auxiliary one: the rook when castling, or the captured pawn when taking
    en passant (moved onto the capturing pawn's destination so the overlay
    vacates its square).
    """

    first: MoveStage
    second: MoveStage | None = None

    @classmethod
    def single(cls, piece: Piece, from_sq: Square, to_sq: Square) -> Move:
        return cls(MoveStage(piece, from_sq, to_sq))

    @property
    def stages(self) -> tuple[MoveStage, ...]:
        """Present stages, primary first."""
        if self.second is None:
            return (self.first,)
        return (self.first, self.second)

    def __str__(self) -> str:
        if self.second is None:
            return str(self.first)
        return f"{self.first}+{self.second}"
