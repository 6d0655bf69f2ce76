"""Core domain layer — 0x88 boards, persistent game states, move generation.

Quick start::

    from chessline.core import FullGameState, available_moves

    state = FullGameState.initial()
    for move in available_moves(state):
        child = state.with_move(move)
        print(move, child.color_to_move)
"""

from chessline.core.directions import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Direction,
    apply,
    combine,
)
from chessline.core.enums import Color, PieceType
from chessline.core.move import Move, MoveStage
from chessline.core.move_generator import (
    MoveGenerator,
    available_moves,
    count_nodes,
    is_valid_move,
)
from chessline.core.piece import Piece
from chessline.core.state import (
    FullGameState,
    GameState,
    PartialGameState,
    board_diagram,
    cell,
    history,
    materialize,
    ply_count,
    with_move,
)
from chessline.core.types import (
    Square,
    file_of,
    from_8x8,
    make_square,
    off_the_board,
    rank_of,
    square_name,
    to_8x8,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Coordinates
    "Square",
    "file_of",
    "from_8x8",
    "make_square",
    "off_the_board",
    "rank_of",
    "square_name",
    "to_8x8",
    # Directions
    "DOWN",
    "Direction",
    "LEFT",
    "RIGHT",
    "UP",
    "apply",
    "combine",
    # Domain objects
    "FullGameState",
    "GameState",
    "Move",
    "MoveGenerator",
    "MoveStage",
    "PartialGameState",
    "Piece",
    # Operations
    "available_moves",
    "board_diagram",
    "cell",
    "count_nodes",
    "history",
    "is_valid_move",
    "materialize",
    "ply_count",
    "with_move",
]
