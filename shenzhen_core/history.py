from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .config import EngineConfig
from .state import GameState, GameStatus

logger = logging.getLogger(__name__)


def compute_undo_state(state: GameState, config: Optional[EngineConfig] = None) -> Optional[GameState]:
    """The state an undo would produce, or None when undo is unavailable.

    Auto-flagged snapshots are rewound together with the manual one beneath
    them, so a move and its whole cascade go back as one step.
    """
    if config is not None and not config.is_undo_enabled:
        return None
    if not state.history or state.status not in (GameStatus.PLAYING, GameStatus.WON):
        return None
    history = list(state.history)
    board = state.board
    while history:
        entry = history.pop()
        board = entry.board
        if not entry.is_auto:
            break
    return replace(
        state,
        board=board,
        history=tuple(history),
        status=GameStatus.PLAYING,
        timer_running=True,
    )


def undo(state: GameState, config: Optional[EngineConfig] = None) -> GameState:
    target = compute_undo_state(state, config)
    if target is None:
        return state
    logger.debug("undo: %d -> %d history entries", len(state.history), len(target.history))
    return target
