from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import Board
from .cards import Card, MAX_RANK, NormalCard, SUITS
from .cascade import auto_move_ones
from .refs import FoundationTarget
from .state import GameState
from .win import check_win

logger = logging.getLogger(__name__)

SolveStep = List[Tuple[str, int, Card]]


def _find_exposed(board: Board, card: Card) -> Optional[Tuple[str, int]]:
    for kind, index, exposed in board.exposed_cards():
        if exposed == card:
            return kind, index
    return None


def next_rank_step(board: Board) -> Optional[SolveStep]:
    """The exposed cards that lift every suit to the next common rank, or None.

    All lagging suits must be playable together; a partial rank is never taken.
    """
    next_rank = board.foundations.lowest_rank() + 1
    if next_rank > MAX_RANK:
        return None
    step: SolveStep = []
    for suit in SUITS:
        if board.foundations.rank(suit) >= next_rank:
            continue
        card = NormalCard(suit, next_rank)
        where = _find_exposed(board, card)
        if where is None:
            return None
        step.append((where[0], where[1], card))
    return step or None


def auto_solve_moves(state: GameState) -> Optional[List[Tuple[Card, FoundationTarget]]]:
    """What the next auto-solve rank step would play, as (card, foundation) pairs."""
    step = next_rank_step(state.board)
    if step is None:
        return None
    return [(card, FoundationTarget(card.suit)) for _, _, card in step]  # type: ignore[union-attr]


def auto_solve(state: GameState) -> GameState:
    """Drains all three suits rank by rank while every suit's next card is exposed.

    The whole run is one undo step, followed by one cascade.
    """
    if not state.can_mutate:
        return state
    board = state.board
    ranks = 0
    while True:
        step = next_rank_step(board)
        if step is None:
            break
        for kind, index, card in step:
            board = board.take_exposed(kind, index).place_on_foundation(card)
        ranks += 1
    if not ranks:
        return state
    logger.debug("auto-solve advanced %d rank(s)", ranks)
    next_state = state.push_history(state.board).with_board(board)
    return check_win(auto_move_ones(next_state))
