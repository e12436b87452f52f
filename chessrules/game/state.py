"""Piece types, board state and game state for the chess rules engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, Optional

from chessrules.game.board import BOARD_SIZE, STARTING_POSITIONS, in_bounds
from chessrules.game.errors import InvariantViolation, OutOfRangeError

Position = tuple[int, int]


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> Color:
        return Color(1 - self)


class PieceKind(IntEnum):
    PAWN = 0
    ROOK = 1
    KNIGHT = 2
    BISHOP = 3
    QUEEN = 4
    KING = 5


# Map character codes to PieceKind
PIECE_CHARS = {
    "P": PieceKind.PAWN,
    "R": PieceKind.ROOK,
    "N": PieceKind.KNIGHT,
    "B": PieceKind.BISHOP,
    "Q": PieceKind.QUEEN,
    "K": PieceKind.KING,
}
PIECE_NAMES = {v: k for k, v in PIECE_CHARS.items()}

PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    @property
    def char(self) -> str:
        return PIECE_NAMES[self.kind]


@dataclass(frozen=True)
class Move:
    """Move a piece from one square to another."""
    from_rc: Position
    to_rc: Position


class GameStatus(Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"


def _require_in_range(pos: Position) -> tuple[int, int]:
    row, col = pos
    if not in_bounds(row, col):
        raise OutOfRangeError(f"Square {pos} is off the board")
    return row, col


class Board:
    """8x8 grid of optional pieces."""

    def __init__(self):
        self.grid: list[list[Optional[Piece]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Board with the standard starting arrangement."""
        board = cls()
        for (row, col), (char, player) in STARTING_POSITIONS.items():
            board.grid[row][col] = Piece(PIECE_CHARS[char], Color(player))
        return board

    def piece_at(self, pos: Position) -> Optional[Piece]:
        row, col = _require_in_range(pos)
        return self.grid[row][col]

    def set_piece_at(self, pos: Position, piece: Optional[Piece]) -> None:
        row, col = _require_in_range(pos)
        self.grid[row][col] = piece

    def find_king(self, color: Color) -> Position:
        """Locate the king of the given color.

        Raises:
            InvariantViolation: If that color has no king on the board.
        """
        for pos, piece in self.pieces(color):
            if piece.kind == PieceKind.KING:
                return pos
        raise InvariantViolation(f"No {color.name.lower()} king on the board")

    def pieces(self, color: Optional[Color] = None) -> Iterator[tuple[Position, Piece]]:
        """Yield (position, piece) for occupied squares, optionally of one color."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield (row, col), piece

    def clone(self) -> Board:
        new = Board.__new__(Board)
        # Pieces are immutable, so sharing them is safe
        new.grid = [row.copy() for row in self.grid]
        return new

    def to_tuple(self) -> tuple:
        """Hashable snapshot of every square, for equality checks."""
        return tuple(
            None if cell is None else (cell.kind, cell.color)
            for row in self.grid for cell in row
        )

    def to_display_board(self) -> list[list]:
        """Convert to the format expected by render_board."""
        display = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for (row, col), piece in self.pieces():
            display[row][col] = (piece.char, int(piece.color))
        return display

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self):
        return f"Board({len(list(self.pieces()))} pieces)"


class GameState:
    """Turn bookkeeping around a Board, threaded through the UI loop."""

    def __init__(self, board: Optional[Board] = None,
                 current_player: Color = Color.WHITE):
        self.board: Board = board if board is not None else Board.initial()
        self.current_player: Color = current_player
        self.turn: int = 1
        self.selected: Optional[Position] = None
        self.status: GameStatus = GameStatus.ONGOING
        self.done: bool = False
        self.winner: Optional[Color] = None
        self.move_history: list[Move] = []

    def clone(self) -> GameState:
        """Return a copy of this state (history is not copied)."""
        new = GameState.__new__(GameState)
        new.board = self.board.clone()
        new.current_player = self.current_player
        new.turn = self.turn
        new.selected = self.selected
        new.status = self.status
        new.done = self.done
        new.winner = self.winner
        new.move_history = []
        return new
