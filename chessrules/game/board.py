"""Board constants, starting positions, and text-based rendering."""

from __future__ import annotations

BOARD_SIZE = 8

# Back rank order from file a to file h
BACK_RANK = "RNBQKBNR"

# Starting positions: dict mapping (row, col) -> (piece_char, player)
# White on rows 0-1 (bottom), Black on rows 6-7 (top)
STARTING_POSITIONS: dict[tuple[int, int], tuple[str, int]] = {}
for _col, _char in enumerate(BACK_RANK):
    STARTING_POSITIONS[(0, _col)] = (_char, 0)
    STARTING_POSITIONS[(1, _col)] = ("P", 0)
    STARTING_POSITIONS[(6, _col)] = ("P", 1)
    STARTING_POSITIONS[(7, _col)] = (_char, 1)
del _col, _char

# Column labels for square names
COL_LABELS = "abcdefgh"
# Row labels (1-indexed, row 0 = "1", row 7 = "8")
ROW_LABELS = "12345678"


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def rc_to_notation(row: int, col: int) -> str:
    """Convert (row, col) to a square name like 'a1'."""
    return COL_LABELS[col] + ROW_LABELS[row]


def notation_to_rc(sq: str) -> tuple[int, int]:
    """Convert a square name like 'a1' to (row, col).

    Raises:
        ValueError: If the square name is invalid.
    """
    sq = sq.strip().lower()
    if len(sq) != 2 or sq[0] not in COL_LABELS or sq[1] not in ROW_LABELS:
        raise ValueError(f"Invalid square: {sq!r}")
    return (ROW_LABELS.index(sq[1]), COL_LABELS.index(sq[0]))


def render_board(board, highlights=None, check_square: tuple[int, int] | None = None,
                 turn: int | None = None, current_player: int | None = None) -> str:
    """Render the board as a text string.

    Args:
        board: 8x8 list of lists. Each cell is None or (piece_char, player).
        highlights: Optional iterable of (row, col) squares to mark with '*'.
        check_square: Optional king square to mark with '!'.
        turn: Optional turn number.
        current_player: Optional current player (0=White, 1=Black).
    """
    lines = []

    if turn is not None:
        player_name = "White" if current_player == 0 else "Black"
        lines.append(f"Turn {turn} - {player_name} to move")
        lines.append("")

    marked = set(highlights or ())

    lines.append("    a   b   c   d   e   f   g   h")
    lines.append("  +---+---+---+---+---+---+---+---+")

    for row in range(BOARD_SIZE - 1, -1, -1):
        row_str = f"{row + 1} |"
        for col in range(BOARD_SIZE):
            cell = board[row][col]
            pos = (row, col)
            if pos == check_square:
                marker = "!"
            elif pos in marked:
                marker = "*"
            else:
                marker = " "
            if cell is not None:
                piece_char, player = cell
                # Lowercase for black, uppercase for white
                display = piece_char if player == 0 else piece_char.lower()
                row_str += f"{marker}{display}{marker}|"
            else:
                row_str += f" {marker} |"
        row_str += f" {row + 1}"
        lines.append(row_str)
        lines.append("  +---+---+---+---+---+---+---+---+")

    lines.append("    a   b   c   d   e   f   g   h")

    return "\n".join(lines)
