from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional

from .cascade import auto_move_ones
from .config import EngineConfig
from .deal import deal_board
from .state import GameState, GameStatus

logger = logging.getLogger(__name__)


def new_game(
    state: GameState,
    config: Optional[EngineConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    skip_auto_move: bool = False,
) -> GameState:
    """Deals a fresh board, clears history and starts play.

    The post-deal cascade leaves no history entry, since the player has not
    made a decision yet.
    """
    if state.status == GameStatus.PAUSED:
        return state
    cfg = config or EngineConfig()
    board = deal_board(
        seed=seed,
        no_auto_move_first_move=cfg.no_auto_move_first_move,
        max_attempts=cfg.max_deal_attempts,
        rng=rng,
    )
    fresh = GameState(
        board=board,
        status=GameStatus.PLAYING,
        history=(),
        dev_mode=state.dev_mode,
        game_id=state.game_id + 1,
        initial_board=board,
        timer_running=True,
    )
    logger.info("new game %d", fresh.game_id)
    return fresh if skip_auto_move else auto_move_ones(fresh)


def restart_game(state: GameState, skip_auto_move: bool = False) -> GameState:
    """Replays the current deal from the start without reshuffling."""
    if state.initial_board is None or state.status == GameStatus.PAUSED:
        return state
    fresh = replace(
        state,
        board=state.initial_board,
        status=GameStatus.PLAYING,
        history=(),
        timer_running=True,
    )
    logger.info("restart game %d", state.game_id)
    return fresh if skip_auto_move else auto_move_ones(fresh)


def pause_game(state: GameState) -> GameState:
    if state.status != GameStatus.PLAYING:
        return state
    return replace(state, status=GameStatus.PAUSED, timer_running=False)


def resume_game(state: GameState) -> GameState:
    if state.status != GameStatus.PAUSED:
        return state
    return replace(state, status=GameStatus.PLAYING, timer_running=True)


def toggle_dev_mode(state: GameState) -> GameState:
    return replace(state, dev_mode=not state.dev_mode)


def trigger_auto_move(state: GameState) -> GameState:
    """Runs the cascade on demand, e.g. after the caller animated a move made with skip_auto_move."""
    if not state.can_mutate:
        return state
    return auto_move_ones(state)
