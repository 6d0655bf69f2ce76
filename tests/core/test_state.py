"""Tests for persistent game states."""

import pytest

from chessline.core.enums import Color, PieceType
from chessline.core.move import Move, MoveStage
from chessline.core.piece import Piece
from chessline.core.state import (
    FullGameState,
    PartialGameState,
    board_diagram,
    cell,
    history,
    materialize,
    ply_count,
    with_move,
)
from chessline.core.types import (
    A1, A8, D1, D5, D6, D8, E1, E2, E4, E5, E7, E8, F1, F6, G1, G8, H1,
    BOARD_SIZE,
    ON_BOARD_SQUARES,
)

WHITE_PAWN = Piece(Color.WHITE, PieceType.PAWN)
BLACK_PAWN = Piece(Color.BLACK, PieceType.PAWN)
WHITE_KING = Piece(Color.WHITE, PieceType.KING)
WHITE_ROOK = Piece(Color.WHITE, PieceType.ROOK)


class TestFullGameState:
    def test_initial_back_ranks(self, initial_state: FullGameState) -> None:
        assert initial_state.cell(E1) == WHITE_KING
        assert initial_state.cell(E8) == Piece(Color.BLACK, PieceType.KING)
        assert initial_state.cell(D1) == Piece(Color.WHITE, PieceType.QUEEN)
        assert initial_state.cell(A8) == Piece(Color.BLACK, PieceType.ROOK)

    def test_initial_counts(self, initial_state: FullGameState) -> None:
        occupied = [sq for sq in ON_BOARD_SQUARES if initial_state.cell(sq)]
        assert len(occupied) == 32
        assert initial_state.color_to_move == Color.WHITE
        assert initial_state.previous_state is None

    def test_off_board_slots_empty(self, initial_state: FullGameState) -> None:
        for sq in range(BOARD_SIZE):
            if sq not in ON_BOARD_SQUARES:
                assert initial_state.board[sq] is None
                assert cell(initial_state, sq) is None

    def test_cell_beyond_board_array(self, initial_state: FullGameState) -> None:
        assert cell(initial_state, 0xF0) is None
        assert cell(initial_state, -1) is None

    def test_wrong_board_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="128 slots"):
            FullGameState(Color.WHITE, (None,) * 64)

    def test_occupied_off_board_slot_rejected(self) -> None:
        board = [None] * BOARD_SIZE
        board[0x08] = WHITE_KING
        with pytest.raises(ValueError, match="Off-board slot 0x08"):
            FullGameState(Color.WHITE, tuple(board))

    def test_from_pieces_rejects_off_board_key(self) -> None:
        with pytest.raises(ValueError, match="off the board"):
            FullGameState.from_pieces({0x78: WHITE_KING})

    def test_board_is_stored_as_tuple(self) -> None:
        state = FullGameState(Color.BLACK, [None] * BOARD_SIZE)
        assert isinstance(state.board, tuple)

    def test_repr_shows_diagram(self, initial_state: FullGameState) -> None:
        text = repr(initial_state)
        assert "white to move" in text
        assert "a b c d e f g h" in text


class TestWithMove:
    def test_turn_alternates(self, initial_state: FullGameState) -> None:
        after = with_move(initial_state, Move.single(WHITE_PAWN, E2, E4))
        assert after.color_to_move == Color.BLACK
        again = after.with_move(Move.single(BLACK_PAWN, E7, E5))
        assert again.color_to_move == Color.WHITE

    def test_returns_overlay_linked_to_caller(self, initial_state: FullGameState) -> None:
        move = Move.single(WHITE_PAWN, E2, E4)
        after = initial_state.with_move(move)
        assert isinstance(after, PartialGameState)
        assert after.previous_state is initial_state
        assert after.move == move

    def test_overlay_correctness(self, initial_state: FullGameState) -> None:
        after = initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        assert after.cell(E2) is None
        assert after.cell(E4) == WHITE_PAWN
        for sq in ON_BOARD_SQUARES:
            if sq not in (E2, E4):
                assert after.cell(sq) == initial_state.cell(sq)

    def test_caller_is_untouched(self, initial_state: FullGameState) -> None:
        initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        assert initial_state.cell(E2) == WHITE_PAWN
        assert initial_state.cell(E4) is None
        assert initial_state.color_to_move == Color.WHITE

    def test_capture_replaces_target(self, make_state) -> None:
        state = make_state({E4: "P", D5: "p"})
        after = state.with_move(Move.single(WHITE_PAWN, E4, D5))
        assert after.cell(D5) == WHITE_PAWN
        assert after.cell(E4) is None

    def test_secondary_stage_castling(self, make_state) -> None:
        state = make_state({E1: "K", H1: "R"})
        castle = Move(MoveStage(WHITE_KING, E1, G1), MoveStage(WHITE_ROOK, H1, F1))
        after = state.with_move(castle)
        assert after.cell(E1) is None
        assert after.cell(H1) is None
        assert after.cell(G1) == WHITE_KING
        assert after.cell(F1) == WHITE_ROOK

    def test_secondary_stage_en_passant(self, make_state) -> None:
        state = make_state({E5: "P", D5: "p"})
        ep = Move(MoveStage(WHITE_PAWN, E5, D6), MoveStage(BLACK_PAWN, D5, D6))
        after = state.with_move(ep)
        assert after.cell(D5) is None
        assert after.cell(E5) is None
        assert after.cell(D6) == WHITE_PAWN

    def test_no_validation_on_apply(self, make_state) -> None:
        state = make_state({A1: "R"})
        # Nothing stands on E2; the overlay still records the move as given.
        after = state.with_move(Move.single(WHITE_ROOK, E2, E4))
        assert after.cell(E4) == WHITE_ROOK
        assert after.cell(A1) == WHITE_ROOK

    def test_partial_requires_previous(self) -> None:
        with pytest.raises(ValueError, match="previous state"):
            PartialGameState(Color.WHITE, None, Move.single(WHITE_PAWN, E2, E4))  # type: ignore[arg-type]


class TestHistoryTree:
    def test_sibling_branches_share_ancestor(self, initial_state: FullGameState) -> None:
        left = initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        right = initial_state.with_move(Move.single(WHITE_KING, E1, E2))
        assert left.previous_state is right.previous_state is initial_state
        assert left.cell(E4) == WHITE_PAWN
        assert right.cell(E4) is None
        assert right.cell(E2) == WHITE_KING
        assert left.cell(E2) is None

    def test_history_walks_to_root(self, initial_state: FullGameState) -> None:
        s1 = initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        s2 = s1.with_move(Move.single(BLACK_PAWN, E7, E5))
        assert list(history(s2)) == [s2, s1, initial_state]
        assert ply_count(s2) == 2
        assert ply_count(initial_state) == 0

    def test_deep_chain_lookup(self, make_state) -> None:
        black_king = Piece(Color.BLACK, PieceType.KING)
        current = make_state({A1: "R", E8: "k"})
        for _ in range(1500):
            current = current.with_move(Move.single(WHITE_ROOK, A1, H1))
            current = current.with_move(Move.single(black_king, E8, D8))
            current = current.with_move(Move.single(WHITE_ROOK, H1, A1))
            current = current.with_move(Move.single(black_king, D8, E8))
        assert ply_count(current) == 6000
        assert current.cell(A1) == WHITE_ROOK
        assert current.cell(H1) is None
        assert current.cell(E8) == black_king
        assert current.color_to_move == Color.WHITE


class TestMaterialize:
    def test_same_cells_and_parent(self, initial_state: FullGameState) -> None:
        s1 = initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        s2 = s1.with_move(Move.single(BLACK_PAWN, E7, E5))
        flat = materialize(s2)
        assert isinstance(flat, FullGameState)
        assert flat.color_to_move == s2.color_to_move
        assert flat.previous_state is s1
        for sq in ON_BOARD_SQUARES:
            assert flat.cell(sq) == s2.cell(sq)

    def test_full_state_is_returned_as_is(self, initial_state: FullGameState) -> None:
        assert materialize(initial_state) is initial_state

    def test_diagram_matches_overlay(self, initial_state: FullGameState) -> None:
        after = initial_state.with_move(Move.single(WHITE_PAWN, E2, E4))
        lines = board_diagram(after).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[4] == "4 . . . . P . . ."
        assert lines[6] == "2 P P P P . P P P"
        assert board_diagram(materialize(after)) == board_diagram(after)

    def test_materialized_line_keeps_branching(self, initial_state: FullGameState) -> None:
        flat = materialize(initial_state.with_move(Move.single(WHITE_PAWN, E2, E4)))
        after = flat.with_move(Move.single(Piece(Color.BLACK, PieceType.KNIGHT), G8, F6))
        assert after.cell(F6) == Piece(Color.BLACK, PieceType.KNIGHT)
        assert after.cell(G8) is None
        assert after.cell(E4) == WHITE_PAWN
