"""Persistent game states — full snapshots and move overlays.

A line of play is a singly linked chain of immutable states, newest first::

    PartialGameState(e7e5) -> PartialGameState(e2e4) -> FullGameState(start)

Every state only points back at the state it was derived from, so any
number of lines may branch from a shared ancestor without copying it.
:func:`with_move` allocates one overlay node and is O(1); :func:`cell` walks
the chain until a stage or the root snapshot answers, which is O(depth).
Use :func:`materialize` to flatten a long line back into a snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from chessline.core.enums import Color, PieceType
from chessline.core.move import Move
from chessline.core.piece import Piece
from chessline.core.types import (
    BOARD_SIZE,
    ON_BOARD_SQUARES,
    Square,
    make_square,
    off_the_board,
)

if TYPE_CHECKING:
    from chessline.core.move_generator import MoveGenerator

_LOGGER = logging.getLogger(__name__)

Board: TypeAlias = tuple[Piece | None, ...]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class FullGameState:
    """Complete 128-slot 0x88 board. Off-board slots are always empty."""

    color_to_move: Color
    board: Board
    previous_state: GameState | None = None

    def __post_init__(self) -> None:
        board = tuple(self.board)
        if len(board) != BOARD_SIZE:
            raise ValueError(
                f"Board must have {BOARD_SIZE} slots, got {len(board)!r}"
            )
        for sq, piece in enumerate(board):
            if piece is not None and off_the_board(sq):
                raise ValueError(f"Off-board slot {sq:#04x} holds {piece!r}")
        object.__setattr__(self, "board", board)

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def from_pieces(
        cls,
        pieces: Mapping[Square, Piece],
        color_to_move: Color = Color.WHITE,
    ) -> FullGameState:
        """Snapshot holding exactly *pieces*, everything else empty."""
        board: list[Piece | None] = [None] * BOARD_SIZE
        for sq, piece in pieces.items():
            if not 0 <= sq < BOARD_SIZE or off_the_board(sq):
                raise ValueError(f"Square is off the board: {sq!r}")
            board[sq] = piece
        return cls(color_to_move, tuple(board))

    @classmethod
    def initial(cls) -> FullGameState:
        """Standard starting position, White to move."""
        pieces: dict[Square, Piece] = {}
        for f, pt in enumerate(_BACK_RANK):
            pieces[make_square(f, 0)] = Piece(Color.WHITE, pt)
            pieces[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            pieces[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            pieces[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls.from_pieces(pieces)

    # ── Shared API ───────────────────────────────────────────────────────

    def cell(self, sq: Square) -> Piece | None:
        return cell(self, sq)

    def with_move(self, move: Move) -> PartialGameState:
        return with_move(self, move)

    def available_moves(self) -> list[Move]:
        return _generator(self).generate_pseudo_legal_moves()

    def __repr__(self) -> str:
        return f"FullGameState({self.color_to_move!s} to move)\n{board_diagram(self)}"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class PartialGameState:
    """*move* applied on top of *previous_state*."""

    color_to_move: Color
    previous_state: GameState
    move: Move

    def __post_init__(self) -> None:
        if self.previous_state is None:
            raise ValueError("PartialGameState requires a previous state")

    def cell(self, sq: Square) -> Piece | None:
        return cell(self, sq)

    def with_move(self, move: Move) -> PartialGameState:
        return with_move(self, move)

    def available_moves(self) -> list[Move]:
        return _generator(self).generate_pseudo_legal_moves()

    def __repr__(self) -> str:
        return f"PartialGameState({self.color_to_move!s} to move, after {self.move})"


GameState: TypeAlias = FullGameState | PartialGameState


def _generator(state: GameState) -> MoveGenerator:
    from chessline.core.move_generator import MoveGenerator

    return MoveGenerator(state)


# ── Operations ───────────────────────────────────────────────────────────────


def cell(state: GameState, sq: Square) -> Piece | None:
    """Piece standing on *sq* in *state*, or ``None`` if the square is empty."""
    if not 0 <= sq < BOARD_SIZE or off_the_board(sq):
        return None

    current = state
    while isinstance(current, PartialGameState):
        for stage in current.move.stages:
            if stage.from_sq == sq:
                return None
            if stage.to_sq == sq:
                return stage.piece
        current = current.previous_state
    return current.board[sq]


def with_move(state: GameState, move: Move) -> PartialGameState:
    """New state after *move*; *state* itself is left untouched.

    No validation is performed, the move is overlaid as given.
    """
    return PartialGameState(state.color_to_move.opposite, state, move)


def history(state: GameState) -> Iterator[GameState]:
    """Yield *state* and then each ancestor back to the root."""
    current: GameState | None = state
    while current is not None:
        yield current
        current = current.previous_state


def ply_count(state: GameState) -> int:
    """Number of states between *state* and the root of its line."""
    return sum(1 for _ in history(state)) - 1


def materialize(state: GameState) -> FullGameState:
    """Flatten *state* into a snapshot with the same cells and parent."""
    if isinstance(state, FullGameState):
        return state

    board: list[Piece | None] = [None] * BOARD_SIZE
    for sq in ON_BOARD_SQUARES:
        board[sq] = cell(state, sq)

    if _LOGGER.isEnabledFor(logging.DEBUG):
        depth = 0
        for node in history(state):
            if isinstance(node, FullGameState):
                break
            depth += 1
        _LOGGER.debug("Materialized %d overlay(s) into a snapshot", depth)

    return FullGameState(state.color_to_move, tuple(board), state.previous_state)


def board_diagram(state: GameState) -> str:
    """Text diagram with rank 8 on top and '.' for empty squares."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        row = []
        for file in range(8):
            p = cell(state, make_square(file, rank))
            row.append(str(p) if p else ".")
        rows.append(f"{rank + 1} {' '.join(row)}")
    rows.append("  a b c d e f g h")
    return "\n".join(rows)
