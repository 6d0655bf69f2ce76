"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from chessline.core.enums import Color, PieceType

# Indexed by PieceType - 1; uppercase for White in diagrams.
_LETTERS: Final = "pnbrqk"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, type) pair.

    Both fields are required: an empty square is ``None``, never a piece.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Diagram letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type - 1]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a diagram letter, e.g. 'N' → white knight."""
        index = _LETTERS.find(char.lower()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index + 1))
