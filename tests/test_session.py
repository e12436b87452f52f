"""Tests for the square-selection state machine."""

import pytest

from chessrules.game.board import notation_to_rc as sq
from chessrules.game.errors import InvariantViolation
from chessrules.game.session import SquareAction, handle_square
from chessrules.game.state import Color, GameState, GameStatus, Move, Piece, PieceKind


def pick(state, *squares, promotion_choice=None):
    result = None
    for square in squares:
        result = handle_square(state, sq(square), promotion_choice)
    return result


class TestSelection:
    def test_select_own_piece(self):
        state = GameState()
        result = pick(state, "b1")
        assert result.action == SquareAction.SELECTED
        assert state.selected == sq("b1")
        assert set(result.destinations) == {sq("a3"), sq("c3")}

    def test_empty_or_enemy_square_ignored(self):
        state = GameState()
        assert pick(state, "e4").action == SquareAction.IGNORED
        assert pick(state, "e7").action == SquareAction.IGNORED
        assert state.selected is None

    def test_illegal_target_clears_selection(self):
        state = GameState()
        result = pick(state, "e2", "e5")
        assert result.action == SquareAction.DESELECTED
        assert state.selected is None
        assert state.current_player == Color.WHITE

    def test_selecting_another_own_piece_deselects(self):
        state = GameState()
        result = pick(state, "e2", "d2")
        assert result.action == SquareAction.DESELECTED
        assert state.board.piece_at(sq("e2")) is not None


class TestCommit:
    def test_commit_move(self):
        state = GameState()
        result = pick(state, "e2", "e4")
        assert result.action == SquareAction.MOVED
        assert result.move == Move(sq("e2"), sq("e4"))
        assert result.status == GameStatus.ONGOING
        assert state.current_player == Color.BLACK
        assert state.selected is None

    def test_check_reported(self, make_board):
        state = GameState(make_board({"e1": "K", "a8": "k", "d1": "Q"}))
        result = pick(state, "d1", "d8")
        assert result.status == GameStatus.CHECK

    def test_checkmate_ends_game(self):
        state = GameState()
        pick(state, "f2", "f3", "e7", "e5", "g2", "g4", "d8")
        result = pick(state, "h4")
        assert result.status == GameStatus.CHECKMATE
        assert state.done
        assert state.winner == Color.BLACK
        assert pick(state, "a2").action == SquareAction.IGNORED

    def test_promotion_hook(self, make_board):
        state = GameState(make_board({"a7": "P", "e1": "K", "h8": "k"}))
        asked = []

        def choose(pos):
            asked.append(pos)
            return PieceKind.ROOK

        result = pick(state, "a7", "a8", promotion_choice=choose)
        assert asked == [sq("a8")]
        assert result.promoted_to == PieceKind.ROOK
        assert state.board.piece_at(sq("a8")) == Piece(PieceKind.ROOK, Color.WHITE)

    def test_promotion_without_hook_is_queen(self, make_board):
        state = GameState(make_board({"a7": "P", "e1": "K", "h8": "k"}))
        result = pick(state, "a7", "a8")
        assert result.promoted_to == PieceKind.QUEEN
        assert state.board.piece_at(sq("a8")).kind == PieceKind.QUEEN

    def test_hook_returning_none_is_queen(self, make_board):
        state = GameState(make_board({"a7": "P", "e1": "K", "h8": "k"}))
        pick(state, "a7", "a8", promotion_choice=lambda pos: None)
        assert state.board.piece_at(sq("a8")).kind == PieceKind.QUEEN

    def test_king_capture_raises_and_keeps_state(self):
        state = GameState()
        pick(state, "f2", "f3", "e7", "e5", "e1", "f2", "d8", "h4", "a2", "a3", "h4")
        board_before = state.board.to_tuple()

        with pytest.raises(InvariantViolation):
            pick(state, "f2")

        assert state.board.to_tuple() == board_before
        assert state.current_player == Color.BLACK
        assert len(state.move_history) == 5
        assert not state.done


class TestOffBoard:
    @pytest.mark.parametrize("pos", [(8, 0), (0, -1), (-1, 3), (3, 8)])
    def test_ignored_without_selection(self, pos):
        state = GameState()
        assert handle_square(state, pos).action == SquareAction.IGNORED
        assert state.selected is None

    @pytest.mark.parametrize("pos", [(8, 0), (0, -1), (-1, 3), (3, 8)])
    def test_ignored_with_selection(self, pos):
        state = GameState()
        pick(state, "e2")
        assert handle_square(state, pos).action == SquareAction.IGNORED
        assert state.selected == sq("e2")
        assert pick(state, "e4").action == SquareAction.MOVED
