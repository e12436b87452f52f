#!/usr/bin/env python3
"""Interactive CLI for playing chess (human vs human).

Pick a square to select a piece, then pick its destination.

Usage:
    python scripts/play.py
    python scripts/play.py --config configs/play.yaml --no-hints
"""

import argparse
import logging
import os
import sys

import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chessrules.game.board import render_board, notation_to_rc, rc_to_notation
from chessrules.game.errors import ChessRulesError
from chessrules.game.rules import check_winner
from chessrules.game.session import SquareAction, handle_square
from chessrules.game.state import PIECE_CHARS, PROMOTION_KINDS, Color, GameState, GameStatus

logger = logging.getLogger("chessrules.play")


def display_state(state: GameState, highlights=None):
    """Print the current board state."""
    check_square = None
    if state.status != GameStatus.ONGOING:
        check_square = state.board.find_king(state.current_player)
    print(render_board(state.board.to_display_board(),
                       highlights=highlights,
                       check_square=check_square,
                       turn=state.turn,
                       current_player=int(state.current_player)))
    print()


def make_promotion_prompt(default_char: str):
    """Build a promotion hook that asks the player on stdin."""
    default_kind = PIECE_CHARS[default_char.upper()]

    def choose(pos):
        while True:
            inp = input(f"Promote on {rc_to_notation(*pos)} to Q/R/B/N "
                        f"[{default_char.upper()}]: ").strip().upper()
            if not inp:
                return default_kind
            kind = PIECE_CHARS.get(inp)
            if kind in PROMOTION_KINDS:
                return kind
            print("Choose one of Q, R, B, N.")

    return choose


def play_game(config: dict):
    """Play a full game."""
    state = GameState()
    promote = make_promotion_prompt(config.get("default_promotion", "Q"))
    show_hints = config.get("show_legal_moves", True)
    highlights = None

    print("=" * 60)
    print("  Chess - pick a square (e.g. e2), 'q' to quit")
    print("=" * 60)

    while not state.done:
        display_state(state, highlights)
        player_name = "White" if state.current_player == Color.WHITE else "Black"
        prompt = "to" if state.selected is not None else "select"
        inp = input(f"{player_name} {prompt}> ").strip()
        if inp.lower() == "q":
            print("Game aborted.")
            return

        try:
            pos = notation_to_rc(inp)
        except ValueError as e:
            print(e)
            continue

        try:
            result = handle_square(state, pos, promote)
        except ChessRulesError as e:
            print(f"Move refused: {e}")
            continue

        highlights = None
        if result.action == SquareAction.SELECTED:
            if show_hints:
                highlights = result.destinations
            if not result.destinations:
                print("That piece has no legal moves.")
        elif result.action == SquareAction.IGNORED:
            print("Select one of your own pieces.")
        elif result.action == SquareAction.DESELECTED:
            print("Illegal move, selection cleared.")
        elif result.status == GameStatus.CHECK:
            checked = "White" if state.current_player == Color.WHITE else "Black"
            print(f"{checked} is in check!")

    display_state(state)
    _, winner = check_winner(state)
    print(f"Checkmate! {'White' if winner == Color.WHITE else 'Black'} wins!")
    print(f"Game ended on turn {state.turn} ({len(state.move_history)} moves)")


def main():
    parser = argparse.ArgumentParser(description="Play chess in the terminal")
    parser.add_argument(
        "--config", default="configs/play.yaml",
        help="Path to CLI config YAML (default: configs/play.yaml)",
    )
    parser.add_argument("--log-level", default=None, help="Override log level")
    parser.add_argument("--no-hints", action="store_true",
                        help="Do not mark legal destinations")
    args = parser.parse_args()

    config = {}
    if os.path.exists(args.config):
        with open(args.config) as f:
            config = yaml.safe_load(f) or {}

    if args.no_hints:
        config["show_legal_moves"] = False

    logging.basicConfig(
        level=(args.log_level or config.get("log_level", "WARNING")).upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.debug(f"Loaded config: {config}")

    play_game(config)


if __name__ == "__main__":
    main()
