from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import Board


class GameStatus:
    IDLE = 'idle'
    PLAYING = 'playing'
    PAUSED = 'paused'
    WON = 'won'

    ALL = (IDLE, PLAYING, PAUSED, WON)


@dataclass(frozen=True)
class HistoryEntry:
    """A board snapshot taken before a change. `is_auto` marks cascade steps."""
    board: Board
    is_auto: bool = False


@dataclass(frozen=True)
class GameState:
    """Represents the whole engine state: current board, lifecycle status and undo history."""
    board: Board
    status: str = GameStatus.IDLE
    history: Tuple[HistoryEntry, ...] = ()
    dev_mode: bool = False
    game_id: int = 0
    initial_board: Optional[Board] = None  # the deal, for restart
    timer_running: bool = False

    def with_board(self, board: Board) -> 'GameState':
        return replace(self, board=board)

    def push_history(self, board: Board, is_auto: bool = False) -> 'GameState':
        return replace(self, history=self.history + (HistoryEntry(board, is_auto),))

    @property
    def can_mutate(self) -> bool:
        """Board-changing commands are only accepted while playing."""
        return self.status == GameStatus.PLAYING


def initial_state(dev_mode: bool = False) -> GameState:
    """The pre-deal state: idle, empty tableau."""
    return GameState(board=Board.empty(), status=GameStatus.IDLE, dev_mode=dev_mode)
