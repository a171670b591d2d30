from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .board import Board, NUM_COLUMNS
from .cards import Card, FlowerCard, NormalCard, full_deck
from .config import DEFAULT_MAX_DEAL_ATTEMPTS

logger = logging.getLogger(__name__)


def shuffle_deck(deck: Sequence[Card], rng: random.Random) -> List[Card]:
    """Uniform Fisher-Yates permutation; the input is left untouched."""
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def distribute(deck: Sequence[Card], num_columns: int = NUM_COLUMNS) -> Board:
    """Deals cards round-robin into the columns; free cells start empty."""
    columns: List[List[Card]] = [[] for _ in range(num_columns)]
    for index, card in enumerate(deck):
        columns[index % num_columns].append(card)
    return Board.from_columns(columns)


def has_free_first_move(board: Board) -> bool:
    """True if some column starts with a card the cascade would take at once (a 1 or the flower)."""
    for i in board.columns.indices():
        top = board.top(i)
        if isinstance(top, FlowerCard):
            return True
        if isinstance(top, NormalCard) and top.rank == 1:
            return True
    return False


def deal_board(
    seed: Optional[int] = None,
    no_auto_move_first_move: bool = False,
    max_attempts: int = DEFAULT_MAX_DEAL_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> Board:
    """Creates and deals a board from a freshly shuffled 40-card deck.

    With `no_auto_move_first_move` the deck is reshuffled until no column top is
    auto-movable, giving up after `max_attempts` and keeping the last layout.
    """
    rng = rng or random.Random(seed)
    deck = full_deck()
    board = distribute(shuffle_deck(deck, rng))
    if not no_auto_move_first_move:
        return board
    attempts = 1
    while has_free_first_move(board) and attempts < max_attempts:
        board = distribute(shuffle_deck(deck, rng))
        attempts += 1
    if has_free_first_move(board):
        logger.info("deal constraint not met after %d attempts; keeping last layout", attempts)
    else:
        logger.debug("deal accepted after %d attempt(s)", attempts)
    return board
