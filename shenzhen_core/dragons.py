from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from .board import Board
from .cards import DRAGON_COLORS, Suit, dragon_set, locked_marker
from .cascade import auto_move_ones
from .moves import CardLocation, locate_card
from .state import GameState
from .win import check_win

logger = logging.getLogger(__name__)


def _dragon_locations(board: Board, color: Suit, dev_mode: bool) -> Optional[List[CardLocation]]:
    """Where the four dragons of a color sit. Outside dev mode every one must be exposed."""
    found: List[CardLocation] = []
    for dragon in dragon_set(color):
        loc = locate_card(board, dragon)
        if loc is None:
            if dev_mode:
                continue
            return None
        if not loc.exposed and not dev_mode:
            return None
        found.append(loc)
    return found if found else None


def collection_plan(state: GameState, color: Suit) -> Optional[Tuple[List[CardLocation], int]]:
    """Returns (dragon locations, target free cell) or None when collection is not possible."""
    if color not in DRAGON_COLORS:
        return None
    board = state.board
    if board.dragon_collected(color):
        return None
    locations = _dragon_locations(board, color, state.dev_mode)
    if locations is None:
        return None
    staged = sorted(loc.index for loc in locations if loc.kind == 'free')
    if staged:
        return locations, staged[0]
    empty = board.free_cells.find(lambda c: c is None)
    if empty is None:
        return None
    return locations, empty


def can_collect_dragons(state: GameState, color: Suit) -> bool:
    return state.can_mutate and collection_plan(state, color) is not None


def collect_dragons(state: GameState, color: Suit) -> GameState:
    """Consolidates the four dragons of a color into a locked marker in one free cell."""
    if not state.can_mutate:
        return state
    plan = collection_plan(state, color)
    if plan is None:
        logger.debug("collect dragons %s rejected", color)
        return state
    locations, target = plan
    board = state.board
    columns = list(board.columns)
    free_cells = list(board.free_cells)
    for dragon in dragon_set(color):
        for i, col in enumerate(columns):
            if dragon in col:
                columns[i] = tuple(c for c in col if c != dragon)
        for i, cell in enumerate(free_cells):
            if cell == dragon:
                free_cells[i] = None
    free_cells[target] = locked_marker(color)
    board = replace(
        board,
        columns=board.columns.update(enumerate(columns)),
        free_cells=board.free_cells.update(enumerate(free_cells)),
    ).with_dragon_collected(color)
    logger.debug("collected dragons %s from %d location(s) into free-%d", color, len(locations), target)
    next_state = state.push_history(state.board).with_board(board)
    return check_win(auto_move_ones(next_state))
