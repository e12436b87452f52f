"""Move legality, check and checkmate detection, move application.

Standard chess piece movement without castling or en passant.
Pawns promote on the last row (Queen unless another kind is chosen).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from chessrules.game.board import BOARD_SIZE, in_bounds, rc_to_notation
from chessrules.game.errors import GameOverError, IllegalMoveError, InvariantViolation
from chessrules.game.state import (
    PROMOTION_KINDS, Board, Color, GameState, GameStatus, Move, Piece,
    PieceKind, Position,
)

logger = logging.getLogger("chessrules.rules")

# Pawn direction and starting row per color
PAWN_FORWARD = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_ROW = {Color.WHITE: 1, Color.BLACK: BOARD_SIZE - 2}
PROMOTION_ROW = {Color.WHITE: BOARD_SIZE - 1, Color.BLACK: 0}


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def is_path_clear(board: Board, origin: Position, destination: Position) -> bool:
    """Check that every square strictly between origin and destination is empty.

    Walks one unit step at a time toward the destination. The caller must
    only pass straight or diagonal lines; anything else is reported blocked.
    """
    fr, fc = origin
    tr, tc = destination
    dr, dc = tr - fr, tc - fc
    if dr != 0 and dc != 0 and abs(dr) != abs(dc):
        return False
    step_r, step_c = _sign(dr), _sign(dc)
    r, c = fr + step_r, fc + step_c
    while (r, c) != (tr, tc):
        if board.grid[r][c] is not None:
            return False
        r += step_r
        c += step_c
    return True


def _is_valid_pawn_move(board: Board, origin: Position, destination: Position,
                        color: Color) -> bool:
    """Pawn: 1 forward onto empty, 2 forward from the start row, diagonal capture."""
    fr, fc = origin
    tr, tc = destination
    forward = PAWN_FORWARD[color]

    # Forward movement (non-capture only)
    if fc == tc:
        if tr == fr + forward and board.grid[tr][tc] is None:
            return True
        if (fr == PAWN_START_ROW[color] and tr == fr + 2 * forward
                and board.grid[fr + forward][fc] is None
                and board.grid[tr][tc] is None):
            return True
        return False

    # Diagonal-forward capture; own pieces were already excluded
    if abs(tc - fc) == 1 and tr == fr + forward:
        return board.grid[tr][tc] is not None
    return False


def _is_valid_rook_move(origin: Position, destination: Position) -> bool:
    return origin[0] == destination[0] or origin[1] == destination[1]


def _is_valid_knight_move(origin: Position, destination: Position) -> bool:
    row_diff = abs(destination[0] - origin[0])
    col_diff = abs(destination[1] - origin[1])
    return (row_diff, col_diff) in ((1, 2), (2, 1))


def _is_valid_bishop_move(origin: Position, destination: Position) -> bool:
    return abs(destination[0] - origin[0]) == abs(destination[1] - origin[1])


def _is_valid_queen_move(origin: Position, destination: Position) -> bool:
    return _is_valid_rook_move(origin, destination) or _is_valid_bishop_move(origin, destination)


def _is_valid_king_move(origin: Position, destination: Position) -> bool:
    return abs(destination[0] - origin[0]) <= 1 and abs(destination[1] - origin[1]) <= 1


def is_legal_move(board: Board, origin: Position, destination: Position,
                  mover: Color) -> bool:
    """Decide whether moving the piece at origin to destination is legal.

    Does not consider whether the move leaves the mover's own king in check.
    Never mutates the board. Out-of-range squares are simply illegal.
    """
    if not (in_bounds(*origin) and in_bounds(*destination)):
        return False
    if origin == destination:
        return False

    piece = board.grid[origin[0]][origin[1]]
    if piece is None or piece.color != mover:
        return False

    # Cannot capture own piece
    target = board.grid[destination[0]][destination[1]]
    if target is not None and target.color == mover:
        return False

    kind = piece.kind

    # Knights jump, so they have no intermediate squares
    if kind == PieceKind.KNIGHT:
        return _is_valid_knight_move(origin, destination)

    if not is_path_clear(board, origin, destination):
        return False

    if kind == PieceKind.PAWN:
        return _is_valid_pawn_move(board, origin, destination, mover)
    elif kind == PieceKind.ROOK:
        return _is_valid_rook_move(origin, destination)
    elif kind == PieceKind.BISHOP:
        return _is_valid_bishop_move(origin, destination)
    elif kind == PieceKind.QUEEN:
        return _is_valid_queen_move(origin, destination)
    elif kind == PieceKind.KING:
        return _is_valid_king_move(origin, destination)
    return False


def legal_destinations(board: Board, origin: Position) -> list[Position]:
    """Return every square the piece at origin may legally move to."""
    piece = board.piece_at(origin)
    if piece is None:
        return []
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if is_legal_move(board, origin, (row, col), piece.color)
    ]


def is_in_check(board: Board, color: Color) -> bool:
    """Check if the given color's king is attacked by any opposing piece.

    Raises:
        InvariantViolation: If the color has no king.
    """
    king_pos = board.find_king(color)
    opponent = color.opponent
    for pos, _piece in board.pieces(opponent):
        if is_legal_move(board, pos, king_pos, opponent):
            return True
    return False


@contextmanager
def hypothetical_move(board: Board, origin: Position,
                      destination: Position) -> Iterator[Board]:
    """Apply a move to the board for the duration of the block.

    Both squares are restored on exit, even if the block raises.
    """
    moving_piece = board.piece_at(origin)
    captured_piece = board.piece_at(destination)
    board.set_piece_at(destination, moving_piece)
    board.set_piece_at(origin, None)
    try:
        yield board
    finally:
        board.set_piece_at(origin, moving_piece)
        board.set_piece_at(destination, captured_piece)


def is_checkmate(board: Board, color: Color) -> bool:
    """Check if no legal move by color gets its king out of check.

    Tries every (own piece, destination) pair on the board itself and
    rolls each trial back. Meaningful only when the color is in check.
    """
    # Snapshot first: trials move pieces around while we iterate
    own_pieces = list(board.pieces(color))
    for origin, _piece in own_pieces:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                destination = (row, col)
                if not is_legal_move(board, origin, destination, color):
                    continue
                with hypothetical_move(board, origin, destination):
                    still_in_check = is_in_check(board, color)
                if not still_in_check:
                    logger.debug(
                        f"{color.name} escapes check with "
                        f"{rc_to_notation(*origin)}-{rc_to_notation(*destination)}"
                    )
                    return False
    return True


def evaluate_status(board: Board, color: Color) -> GameStatus:
    """Return ONGOING, CHECK or CHECKMATE for the side about to move."""
    if not is_in_check(board, color):
        return GameStatus.ONGOING
    if is_checkmate(board, color):
        return GameStatus.CHECKMATE
    return GameStatus.CHECK


def needs_promotion(piece: Optional[Piece], destination: Position) -> bool:
    return (piece is not None and piece.kind == PieceKind.PAWN
            and destination[0] == PROMOTION_ROW[piece.color])


def apply_move(state: GameState, move: Move,
               promotion: Optional[PieceKind] = None) -> GameState:
    """Commit a validated move and evaluate the opponent's status.

    Modifies the state in place and returns it. A pawn reaching the last
    row becomes ``promotion`` (Queen when no choice is given).

    Raises:
        GameOverError: If the game has already ended.
        IllegalMoveError: If the validator rejects the move.
        InvariantViolation: If the move would remove a king (the side to
            move ignored check). The state is left as it was.
        ValueError: If ``promotion`` is not a kind a pawn can become.
    """
    if state.done:
        raise GameOverError("Game is already over")

    player = state.current_player
    if not is_legal_move(state.board, move.from_rc, move.to_rc, player):
        raise IllegalMoveError(
            f"Illegal move for {player.name}: "
            f"{rc_to_notation(*move.from_rc)}-{rc_to_notation(*move.to_rc)}"
        )

    piece = state.board.piece_at(move.from_rc)
    if needs_promotion(piece, move.to_rc):
        kind = PieceKind.QUEEN if promotion is None else PieceKind(promotion)
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {kind.name}")
        piece = Piece(kind, player)
        logger.info(f"{player.name} promotes on {rc_to_notation(*move.to_rc)} to {kind.name}")

    moving_piece = state.board.piece_at(move.from_rc)
    captured_piece = state.board.piece_at(move.to_rc)
    state.board.set_piece_at(move.to_rc, piece)
    state.board.set_piece_at(move.from_rc, None)

    # Status first, so a king capture leaves the state untouched
    opponent = player.opponent
    try:
        status = evaluate_status(state.board, opponent)
    except InvariantViolation:
        state.board.set_piece_at(move.from_rc, moving_piece)
        state.board.set_piece_at(move.to_rc, captured_piece)
        raise

    state.move_history.append(move)
    state.selected = None

    # Switch player and advance turn
    state.current_player = opponent
    if player == Color.BLACK:
        state.turn += 1

    state.status = status
    if state.status == GameStatus.CHECKMATE:
        state.done = True
        state.winner = player
        logger.info(f"Checkmate! {player.name} wins on turn {state.turn}")
    elif state.status == GameStatus.CHECK:
        logger.info(f"{opponent.name} is in check")

    return state


def check_winner(state: GameState) -> tuple[bool, Optional[Color]]:
    """Check if the game is over.

    Returns (is_done, winner).
    """
    return state.done, state.winner
