"""Square type alias and 0x88 coordinate helpers.

Board layout (0x88, rank in the high nibble, file in the low nibble)::

    a1=0x00, b1=0x01, ..., h1=0x07   (0x08..0x0F off the board)
    a2=0x10, b2=0x11, ..., h2=0x17   (0x18..0x1F off the board)
    ...
    a8=0x70, b8=0x71, ..., h8=0x77   (0x78..0x7F off the board)

Bit 3 flags a file overflow, bit 7 a rank overflow, so a single
``sq & 0x88`` test rejects any result of coordinate arithmetic that left
the board.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Square: TypeAlias = int  # 0x88 byte

BOARD_SIZE: Final = 128
OFF_BOARD_MASK: Final = 0x88


def off_the_board(sq: Square) -> bool:
    """Whether *sq* lies outside the 8x8 playing area."""
    return (sq & OFF_BOARD_MASK) != 0


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq >> 4


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return (rank << 4) | file


def to_8x8(sq: Square) -> int:
    """Dense index 0–63 of an on-board square, e.g. 0x34 (e4) → 28."""
    if not 0 <= sq < BOARD_SIZE or off_the_board(sq):
        raise ValueError(f"Square is off the board: {sq!r}")
    return (sq + (sq & 7)) >> 1


def from_8x8(index: int) -> Square:
    """Inverse of :func:`to_8x8`, e.g. 28 → 0x34 (e4)."""
    if not 0 <= index < 64:
        raise ValueError(f"Invalid 8x8 index: {index!r}")
    return index + (index & ~7)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0x00 → 'a1', 0x77 → 'h8'."""
    return chr(ord("a") + file_of(sq)) + str(rank_of(sq) + 1)


ON_BOARD_SQUARES: Final[tuple[Square, ...]] = tuple(from_8x8(i) for i in range(64))


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0x00, 0x08)
A2, B2, C2, D2, E2, F2, G2, H2 = range(0x10, 0x18)
A3, B3, C3, D3, E3, F3, G3, H3 = range(0x20, 0x28)
A4, B4, C4, D4, E4, F4, G4, H4 = range(0x30, 0x38)
A5, B5, C5, D5, E5, F5, G5, H5 = range(0x40, 0x48)
A6, B6, C6, D6, E6, F6, G6, H6 = range(0x50, 0x58)
A7, B7, C7, D7, E7, F7, G7, H7 = range(0x60, 0x68)
A8, B8, C8, D8, E8, F8, G8, H8 = range(0x70, 0x78)
