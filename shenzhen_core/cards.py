from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

Suit = str  # 'A', 'B', 'C'

SUITS: Tuple[Suit, ...] = ('A', 'B', 'C')
DRAGON_COLORS: Tuple[Suit, ...] = SUITS
MIN_RANK = 1
MAX_RANK = 9
DRAGONS_PER_COLOR = 4
FLOWER_ID = 'flower'


@dataclass(frozen=True)
class NormalCard:
    """A numbered card of one of the three suits."""
    suit: Suit
    rank: int

    @property
    def id(self) -> str:
        return f"normal-{self.suit}-{self.rank}"


@dataclass(frozen=True)
class DragonCard:
    """A dragon card. Collected dragons collapse into one locked marker (index None)."""
    color: Suit
    index: Optional[int] = None
    locked: bool = False

    @property
    def id(self) -> str:
        if self.locked:
            return f"dragon-{self.color}-locked"
        return f"dragon-{self.color}-{self.index}"


@dataclass(frozen=True)
class FlowerCard:
    @property
    def id(self) -> str:
        return FLOWER_ID


Card = Union[NormalCard, DragonCard, FlowerCard]


def locked_marker(color: Suit) -> DragonCard:
    return DragonCard(color=color, index=None, locked=True)


def is_locked_marker(card: Optional[Card]) -> bool:
    return isinstance(card, DragonCard) and card.locked


def dragon_set(color: Suit) -> Tuple[DragonCard, ...]:
    """The four loose dragons of one color."""
    return tuple(DragonCard(color=color, index=i) for i in range(DRAGONS_PER_COLOR))


def full_deck() -> List[Card]:
    """Builds the 40-card deck in a fixed order: normals by suit, dragons by color, flower."""
    deck: List[Card] = []
    for suit in SUITS:
        for rank in range(MIN_RANK, MAX_RANK + 1):
            deck.append(NormalCard(suit=suit, rank=rank))
    for color in DRAGON_COLORS:
        deck.extend(dragon_set(color))
    deck.append(FlowerCard())
    return deck


def parse_card(text: str) -> Optional[Card]:
    """Parses a card identifier ('normal-A-7', 'dragon-B-2', 'dragon-C-locked', 'flower').

    Returns None for anything that is not a well-formed identifier.
    """
    if not isinstance(text, str):
        return None
    if text == FLOWER_ID:
        return FlowerCard()
    parts = text.split('-')
    if len(parts) != 3:
        return None
    kind, color, tail = parts
    if color not in SUITS:
        return None
    if tail.isdigit() and str(int(tail)) != tail:
        return None
    if kind == 'normal':
        if not tail.isdigit():
            return None
        rank = int(tail)
        if rank < MIN_RANK or rank > MAX_RANK:
            return None
        return NormalCard(suit=color, rank=rank)
    if kind == 'dragon':
        if tail == 'locked':
            return locked_marker(color)
        if not tail.isdigit():
            return None
        index = int(tail)
        if index >= DRAGONS_PER_COLOR:
            return None
        return DragonCard(color=color, index=index)
    return None


def can_stack(bottom: Card, top: Card) -> bool:
    """True when `top` may rest directly on `bottom` in a column."""
    if not isinstance(bottom, NormalCard) or not isinstance(top, NormalCard):
        return False
    return bottom.rank == top.rank + 1 and bottom.suit != top.suit


def is_valid_run(cards: Tuple[Card, ...]) -> bool:
    """Every adjacent pair satisfies `can_stack`."""
    return all(can_stack(lower, upper) for lower, upper in zip(cards, cards[1:]))
