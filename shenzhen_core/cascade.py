from __future__ import annotations

import logging
from typing import List, Tuple

from .board import Board, Foundations
from .cards import Card, FlowerCard, NormalCard
from .state import GameState
from .win import check_win

logger = logging.getLogger(__name__)


def is_trivial_movable(card: Card, foundations: Foundations) -> bool:
    """A 1 onto its empty foundation, or the flower while its slot is empty or every suit is done."""
    if isinstance(card, NormalCard):
        return card.rank == 1 and foundations.rank(card.suit) == 0
    if isinstance(card, FlowerCard):
        return not foundations.flower or foundations.suits_complete()
    return False


def trivial_moves(board: Board) -> List[Tuple[str, int, Card]]:
    """Every exposed card the cascade would take right now, free cells first."""
    return [
        (kind, index, card)
        for kind, index, card in board.exposed_cards()
        if is_trivial_movable(card, board.foundations)
    ]


def cascade_pass(board: Board) -> Tuple[Board, int]:
    """Moves all currently trivial cards at once. Returns the new board and how many moved."""
    moves = trivial_moves(board)
    for kind, index, card in moves:
        board = board.take_exposed(kind, index).place_on_foundation(card)
    return board, len(moves)


def auto_move_ones(state: GameState) -> GameState:
    """Runs cascade passes to a fixed point.

    Each productive pass records one auto-flagged snapshot, unless history is
    empty (the clean-up right after a deal is not undoable).
    """
    current = state
    while True:
        board, moved = cascade_pass(current.board)
        if not moved:
            break
        logger.debug("cascade moved %d card(s)", moved)
        if current.history:
            current = current.push_history(current.board, is_auto=True)
        current = current.with_board(board)
    return check_win(current)
