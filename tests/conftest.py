"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest

from chessline.core.enums import Color
from chessline.core.piece import Piece
from chessline.core.state import FullGameState
from chessline.core.types import Square

StateFactory = Callable[..., FullGameState]


@pytest.fixture
def initial_state() -> FullGameState:
    """Standard starting position, White to move."""
    return FullGameState.initial()


@pytest.fixture
def make_state() -> StateFactory:
    """Build a snapshot from ``{square: 'K'}``-style diagram letters."""

    def _make(
        pieces: Mapping[Square, str],
        color_to_move: Color = Color.WHITE,
    ) -> FullGameState:
        return FullGameState.from_pieces(
            {sq: Piece.from_char(ch) for sq, ch in pieces.items()},
            color_to_move,
        )

    return _make
