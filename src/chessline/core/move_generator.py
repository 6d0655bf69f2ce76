"""Pseudo-legal move generation over persistent game states.

Moves respect board edges and occupancy only; whether a move leaves the
mover's own king attacked is for a rules layer on top to decide.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from chessline.core.directions import (
    BISHOP_DIRECTIONS,
    DOWN,
    KING_DIRECTIONS,
    KNIGHT_DIRECTIONS,
    LEFT,
    QUEEN_DIRECTIONS,
    RIGHT,
    ROOK_DIRECTIONS,
    UP,
    Direction,
    apply,
    combine,
)
from chessline.core.enums import Color, PieceType
from chessline.core.move import Move
from chessline.core.piece import Piece
from chessline.core.state import cell, with_move
from chessline.core.types import ON_BOARD_SQUARES, Square, off_the_board, rank_of

if TYPE_CHECKING:
    from chessline.core.state import GameState

_LOGGER = logging.getLogger(__name__)

MAX_RAY_LENGTH: Final = 7

PAWN_START_RANK: Final[dict[Color, int]] = {Color.WHITE: 1, Color.BLACK: 6}
_PAWN_FORWARD: Final[dict[Color, Direction]] = {Color.WHITE: UP, Color.BLACK: DOWN}
_PAWN_CAPTURES: Final[dict[Color, tuple[Direction, Direction]]] = {
    color: (combine(forward, LEFT), combine(forward, RIGHT))
    for color, forward in _PAWN_FORWARD.items()
}

_SLIDING_DIRECTIONS: Final[dict[PieceType, tuple[Direction, ...]]] = {
    PieceType.BISHOP: BISHOP_DIRECTIONS,
    PieceType.ROOK: ROOK_DIRECTIONS,
    PieceType.QUEEN: QUEEN_DIRECTIONS,
}
_LEAPING_DIRECTIONS: Final[dict[PieceType, tuple[Direction, ...]]] = {
    PieceType.KNIGHT: KNIGHT_DIRECTIONS,
    PieceType.KING: KING_DIRECTIONS,
}


def is_valid_move(state: GameState, move: Move) -> bool:
    """Every stage lands on the board, on an empty or an enemy square."""
    for stage in move.stages:
        if off_the_board(stage.to_sq):
            return False
        target = cell(state, stage.to_sq)
        if target is not None and target.color == stage.piece.color:
            return False
    return True


class MoveGenerator:
    """Generates pseudo-legal moves for a given game state.

    The state is never modified; candidates are plain :class:`Move` values
    to be fed to :meth:`GameState.with_move`.
    """

    __slots__ = ("_state",)

    def __init__(self, state: GameState) -> None:
        self._state = state

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All moves for the side to move, in board-scan order."""
        moves: list[Move] = []
        state = self._state
        color = state.color_to_move

        for sq in ON_BOARD_SQUARES:
            piece = cell(state, sq)
            if piece is None or piece.color != color:
                continue
            self._gen_piece(sq, piece, moves)

        _LOGGER.debug("Generated %d candidate move(s) for %s", len(moves), color)
        return moves

    def moves_from(self, sq: Square) -> list[Move]:
        """Moves of the side to move's piece on *sq* (empty if there is none)."""
        moves: list[Move] = []
        if off_the_board(sq):
            return moves
        piece = cell(self._state, sq)
        if piece is not None and piece.color == self._state.color_to_move:
            self._gen_piece(sq, piece, moves)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif ptype in _SLIDING_DIRECTIONS:
            self._gen_sliding(sq, piece, _SLIDING_DIRECTIONS[ptype], moves)
        else:
            self._gen_leaping(sq, piece, _LEAPING_DIRECTIONS[ptype], moves)

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        state = self._state
        color = piece.color
        forward = _PAWN_FORWARD[color]

        one_step = apply(sq, forward)
        move = Move.single(piece, sq, one_step)
        if is_valid_move(state, move) and cell(state, one_step) is None:
            moves.append(move)

        # Only the landing square is tested for the double step.
        if rank_of(sq) == PAWN_START_RANK[color]:
            two_step = apply(one_step, forward)
            move = Move.single(piece, sq, two_step)
            if is_valid_move(state, move) and cell(state, two_step) is None:
                moves.append(move)

        for direction in _PAWN_CAPTURES[color]:
            cap_sq = apply(sq, direction)
            move = Move.single(piece, sq, cap_sq)
            if is_valid_move(state, move) and cell(state, cap_sq) is not None:
                moves.append(move)

    def _gen_leaping(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[Direction, ...],
        moves: list[Move],
    ) -> None:
        state = self._state
        for direction in directions:
            move = Move.single(piece, sq, apply(sq, direction))
            if is_valid_move(state, move):
                moves.append(move)

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[Direction, ...],
        moves: list[Move],
    ) -> None:
        state = self._state
        for direction in directions:
            to_sq = sq
            for _ in range(MAX_RAY_LENGTH):
                to_sq = apply(to_sq, direction)
                move = Move.single(piece, sq, to_sq)
                if not is_valid_move(state, move):
                    break
                moves.append(move)
                if cell(state, to_sq) is not None:
                    break


def available_moves(state: GameState) -> list[Move]:
    """Pseudo-legal candidates for the side to move in *state*."""
    return MoveGenerator(state).generate_pseudo_legal_moves()


def count_nodes(state: GameState, depth: int) -> int:
    """Count pseudo-legal leaf states *depth* plies below *state*."""
    if depth == 0:
        return 1
    return sum(
        count_nodes(with_move(state, move), depth - 1)
        for move in available_moves(state)
    )
