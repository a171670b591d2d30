from __future__ import annotations

import logging
from dataclasses import replace

from .board import Board
from .cards import DRAGON_COLORS
from .state import GameState, GameStatus

logger = logging.getLogger(__name__)


def is_won(board: Board) -> bool:
    """All suits at 9, flower played, every dragon color collected."""
    return (
        board.foundations.suits_complete()
        and board.foundations.flower
        and all(board.dragon_collected(c) for c in DRAGON_COLORS)
    )


def check_win(state: GameState) -> GameState:
    """Moves a playing state to `won` (and stops the timer) when the board is complete."""
    if state.status != GameStatus.PLAYING or not is_won(state.board):
        return state
    logger.info("game %d won after %d history entries", state.game_id, len(state.history))
    return replace(state, status=GameStatus.WON, timer_running=False)
