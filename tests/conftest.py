"""Shared test fixtures for the rules engine tests."""

import pytest

from chessrules.game.board import notation_to_rc
from chessrules.game.state import PIECE_CHARS, Board, Color, Piece


def build_board(layout: dict) -> Board:
    """Build a board from {"e1": "K", "e8": "q"}; uppercase is White."""
    board = Board.empty()
    for square, char in layout.items():
        color = Color.WHITE if char.isupper() else Color.BLACK
        board.set_piece_at(notation_to_rc(square), Piece(PIECE_CHARS[char.upper()], color))
    return board


@pytest.fixture
def make_board():
    return build_board


@pytest.fixture
def initial_board():
    return Board.initial()
