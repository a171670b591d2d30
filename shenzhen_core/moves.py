from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import Board
from .cards import Card, FlowerCard, NormalCard, can_stack, is_locked_marker, is_valid_run, parse_card
from .cascade import auto_move_ones
from .refs import ColumnTarget, FoundationTarget, FreeCellTarget, TargetRef, parse_target
from .state import GameState
from .win import check_win

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardLocation:
    kind: str  # 'free' or 'column'
    index: int
    position: int = 0  # depth inside the column, 0 = bottom
    exposed: bool = True


def locate_card(board: Board, card: Card) -> Optional[CardLocation]:
    """Finds a card, searching free cells before columns."""
    index = board.free_cells.find(lambda c: c == card)
    if index is not None:
        return CardLocation('free', index)
    for i, col in enumerate(board.columns):
        if card in col:
            pos = col.index(card)
            return CardLocation('column', i, pos, exposed=pos == len(col) - 1)
    return None


def _same_place(loc: CardLocation, target: TargetRef) -> bool:
    if loc.kind == 'column':
        return isinstance(target, ColumnTarget) and target.index == loc.index
    return isinstance(target, FreeCellTarget) and target.index == loc.index


def _to_foundation(card: Card, target: FoundationTarget, board: Board, dev_mode: bool) -> bool:
    if target.is_flower:
        return isinstance(card, FlowerCard) and not board.foundations.flower
    if not isinstance(card, NormalCard) or card.suit != target.slot:
        return False
    current = board.foundations.rank(card.suit)
    if dev_mode:
        return card.rank > current
    return card.rank == current + 1


def relocate(board: Board, card: Card, target: TargetRef, dev_mode: bool = False) -> Optional[Board]:
    """Applies one relocation to a board; None when the move is illegal.

    A card taken from a column brings every card stacked above it.
    """
    loc = locate_card(board, card)
    if loc is None or is_locked_marker(card):
        return None
    if _same_place(loc, target):
        return None

    unit: Tuple[Card, ...]
    if loc.kind == 'column':
        source_col = board.columns[loc.index]
        unit = source_col[loc.position:]
        if not dev_mode and not is_valid_run(unit):
            return None
        after = replace(board, columns=board.columns.replace(loc.index, source_col[:loc.position]))
    else:
        unit = (card,)
        after = board.take_exposed('free', loc.index)

    if isinstance(target, ColumnTarget):
        dest = after.columns[target.index]
        if dest and not dev_mode and not can_stack(dest[-1], unit[0]):
            return None
        return replace(after, columns=after.columns.replace(target.index, dest + unit))

    if len(unit) != 1:
        return None

    if isinstance(target, FreeCellTarget):
        occupant = after.free_cells[target.index]
        if is_locked_marker(occupant):
            return None
        if occupant is None:
            return replace(after, free_cells=after.free_cells.replace(target.index, card))
        if not dev_mode:
            return None
        # dev mode: the displaced card swaps into the vacated spot
        swapped = replace(after, free_cells=after.free_cells.replace(target.index, card))
        if loc.kind == 'free':
            return replace(swapped, free_cells=swapped.free_cells.replace(loc.index, occupant))
        col = swapped.columns[loc.index]
        return replace(swapped, columns=swapped.columns.replace(loc.index, col + (occupant,)))

    if not _to_foundation(card, target, after, dev_mode):
        return None
    return after.place_on_foundation(card)


def apply_move(state: GameState, card: Card, target: TargetRef, skip_auto_move: bool = False) -> GameState:
    """Typed move command. Returns the same object when the move is rejected."""
    if not state.can_mutate:
        logger.debug("move %s -> %s ignored in status %s", card.id, target.id, state.status)
        return state
    board = relocate(state.board, card, target, state.dev_mode)
    if board is None:
        logger.debug("move %s -> %s rejected", card.id, target.id)
        return state
    next_state = state.push_history(state.board).with_board(board)
    if not skip_auto_move:
        next_state = auto_move_ones(next_state)
    return check_win(next_state)


def move_card(state: GameState, card_id: str, target_id: str, skip_auto_move: bool = False) -> GameState:
    """Moves a card (and anything stacked on it) using the string identifier protocol."""
    card = parse_card(card_id)
    target = parse_target(target_id)
    if card is None or target is None:
        logger.debug("unparseable move %r -> %r", card_id, target_id)
        return state
    return apply_move(state, card, target, skip_auto_move)


def can_move_to_foundation(board: Board, card: Card) -> bool:
    """Hint predicate: the card is the next one its foundation accepts."""
    if isinstance(card, FlowerCard):
        return not board.foundations.flower
    if isinstance(card, NormalCard):
        return card.rank == board.foundations.rank(card.suit) + 1
    return False
