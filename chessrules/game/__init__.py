"""Chess rules engine: board state, move validation, check and checkmate."""

from chessrules.game.errors import (
    ChessRulesError, OutOfRangeError, InvariantViolation, IllegalMoveError, GameOverError,
)
from chessrules.game.state import Board, Color, GameState, GameStatus, Move, Piece, PieceKind
from chessrules.game.rules import (
    is_legal_move, is_in_check, is_checkmate, hypothetical_move,
    legal_destinations, evaluate_status, apply_move, check_winner,
)
from chessrules.game.board import BOARD_SIZE, STARTING_POSITIONS, render_board
from chessrules.game.session import handle_square, SquareAction, SquareResult

__all__ = [
    "ChessRulesError", "OutOfRangeError", "InvariantViolation", "IllegalMoveError",
    "GameOverError",
    "Board", "Color", "GameState", "GameStatus", "Move", "Piece", "PieceKind",
    "is_legal_move", "is_in_check", "is_checkmate", "hypothetical_move",
    "legal_destinations", "evaluate_status", "apply_move", "check_winner",
    "BOARD_SIZE", "STARTING_POSITIONS", "render_board",
    "handle_square", "SquareAction", "SquareResult",
]
