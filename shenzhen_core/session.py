from __future__ import annotations

import random
from typing import Optional

from .config import EngineConfig
from .dragons import can_collect_dragons, collect_dragons
from .engine import new_game, pause_game, restart_game, resume_game, toggle_dev_mode, trigger_auto_move
from .history import compute_undo_state, undo
from .moves import move_card
from .solver import auto_solve, auto_solve_moves
from .state import GameState, initial_state


class GameSession:
    """Holds the current snapshot for one player.

    Every command delegates to a pure engine function and reports whether the
    state actually changed.
    """

    def __init__(self, config: Optional[EngineConfig] = None, state: Optional[GameState] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.config = config or EngineConfig()
        self.state = state or initial_state(dev_mode=self.config.dev_mode)
        self._rng = rng

    def _commit(self, next_state: GameState) -> bool:
        changed = next_state is not self.state
        self.state = next_state
        return changed

    def new_game(self, seed: Optional[int] = None, skip_auto_move: bool = False) -> bool:
        return self._commit(new_game(self.state, self.config, seed=seed, rng=self._rng,
                                     skip_auto_move=skip_auto_move))

    def restart(self) -> bool:
        return self._commit(restart_game(self.state))

    def move(self, card_id: str, target_id: str, skip_auto_move: bool = False) -> bool:
        return self._commit(move_card(self.state, card_id, target_id, skip_auto_move))

    def auto_move(self) -> bool:
        return self._commit(trigger_auto_move(self.state))

    def collect(self, color: str) -> bool:
        return self._commit(collect_dragons(self.state, color))

    def auto_solve(self) -> bool:
        return self._commit(auto_solve(self.state))

    def undo(self) -> bool:
        return self._commit(undo(self.state, self.config))

    def pause(self) -> bool:
        return self._commit(pause_game(self.state))

    def resume(self) -> bool:
        return self._commit(resume_game(self.state))

    def toggle_dev_mode(self) -> bool:
        return self._commit(toggle_dev_mode(self.state))

    @property
    def can_undo(self) -> bool:
        return compute_undo_state(self.state, self.config) is not None

    @property
    def wand_available(self) -> bool:
        return self.state.can_mutate and auto_solve_moves(self.state) is not None

    def can_collect(self, color: str) -> bool:
        return can_collect_dragons(self.state, color)
