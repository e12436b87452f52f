"""Square-selection state machine for interactive play.

Each call to handle_square() corresponds to the user picking a square:

    NoSelection --own piece--> PieceSelected --legal target--> MoveCommitted
        -> CheckEvaluated -> {ONGOING, CHECK, CHECKMATE}

Picking anything else while a piece is selected drops the selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from chessrules.game.board import in_bounds
from chessrules.game.rules import apply_move, is_legal_move, legal_destinations, needs_promotion
from chessrules.game.state import GameState, GameStatus, Move, PieceKind, Position

logger = logging.getLogger("chessrules.session")

PromotionChoice = Callable[[Position], Optional[PieceKind]]


class SquareAction(Enum):
    IGNORED = "ignored"
    SELECTED = "selected"
    DESELECTED = "deselected"
    MOVED = "moved"


@dataclass
class SquareResult:
    """Outcome of picking one square."""
    action: SquareAction
    move: Optional[Move] = None
    status: Optional[GameStatus] = None
    destinations: list[Position] = field(default_factory=list)
    promoted_to: Optional[PieceKind] = None


def handle_square(state: GameState, pos: Position,
                  promotion_choice: Optional[PromotionChoice] = None) -> SquareResult:
    """Advance the selection state machine by one square pick.

    Args:
        state: Game state, modified in place.
        pos: The square picked.
        promotion_choice: Called with the destination when a pawn promotes.
            Returning None (or omitting the hook) promotes to a Queen.
    """
    if state.done:
        return SquareResult(SquareAction.IGNORED)

    # Off-board picks never change the selection
    if not in_bounds(*pos):
        return SquareResult(SquareAction.IGNORED)

    if state.selected is None:
        piece = state.board.piece_at(pos)
        if piece is None or piece.color != state.current_player:
            return SquareResult(SquareAction.IGNORED)
        state.selected = pos
        return SquareResult(SquareAction.SELECTED,
                            destinations=legal_destinations(state.board, pos))

    origin = state.selected
    if not is_legal_move(state.board, origin, pos, state.current_player):
        state.selected = None
        return SquareResult(SquareAction.DESELECTED)

    move = Move(origin, pos)
    promotion = None
    if needs_promotion(state.board.piece_at(origin), pos):
        promotion = promotion_choice(pos) if promotion_choice else None
        if promotion is None:
            promotion = PieceKind.QUEEN

    apply_move(state, move, promotion)
    logger.debug(f"Committed {move}, status now {state.status.value}")
    return SquareResult(SquareAction.MOVED, move=move, status=state.status,
                        promoted_to=promotion)
