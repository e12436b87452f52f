"""One-hot plane encoding of a board for downstream analysis tools."""

from __future__ import annotations

import numpy as np

from chessrules.game.board import BOARD_SIZE
from chessrules.game.state import Board, Color, PieceKind

NUM_PIECE_KINDS = len(PieceKind)
NUM_INPUT_PLANES = 2 * NUM_PIECE_KINDS


def _flip_row(row: int) -> int:
    return BOARD_SIZE - 1 - row


def board_to_planes(board: Board, perspective: Color = Color.WHITE) -> np.ndarray:
    """Convert a board to 12x8x8 planes.

    Planes 0-5 hold the perspective side's pieces by PieceKind, planes 6-11
    the opponent's. For Black the rows are flipped so the perspective side
    always moves "up".
    """
    planes = np.zeros((NUM_INPUT_PLANES, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    flip = perspective == Color.BLACK

    for (row, col), piece in board.pieces():
        r = _flip_row(row) if flip else row
        offset = 0 if piece.color == perspective else NUM_PIECE_KINDS
        planes[offset + int(piece.kind), r, col] = 1.0

    return planes
