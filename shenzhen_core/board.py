from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .cards import (
    Card,
    DRAGONS_PER_COLOR,
    DRAGON_COLORS,
    DragonCard,
    FlowerCard,
    MAX_RANK,
    NormalCard,
    SUITS,
    Suit,
    full_deck,
    is_locked_marker,
)
from .slots import Slots

NUM_COLUMNS = 8
NUM_FREE_CELLS = 3
DECK_SIZE = 40

Column = Tuple[Card, ...]


@dataclass(frozen=True)
class Foundations:
    """Per-suit foundation ranks (0 = empty) plus the flower slot."""
    ranks: Tuple[int, int, int] = (0, 0, 0)
    flower: bool = False

    def rank(self, suit: Suit) -> int:
        return self.ranks[SUITS.index(suit)]

    def with_rank(self, suit: Suit, rank: int) -> 'Foundations':
        ranks = list(self.ranks)
        ranks[SUITS.index(suit)] = rank
        return Foundations(ranks=tuple(ranks), flower=self.flower)  # type: ignore[arg-type]

    def with_flower(self) -> 'Foundations':
        return Foundations(ranks=self.ranks, flower=True)

    def suits_complete(self) -> bool:
        return all(r == MAX_RANK for r in self.ranks)

    def lowest_rank(self) -> int:
        return min(self.ranks)


@dataclass(frozen=True)
class Board:
    """Represents the card layout: tableau columns, free cells, foundations and dragon flags."""
    columns: Slots[Column]
    free_cells: Slots[Optional[Card]]
    foundations: Foundations = Foundations()
    dragons: Tuple[int, int, int] = (0, 0, 0)  # collected flag per dragon color

    @classmethod
    def empty(cls) -> 'Board':
        return cls(
            columns=Slots.of(() for _ in range(NUM_COLUMNS)),
            free_cells=Slots.of(None for _ in range(NUM_FREE_CELLS)),
        )

    @classmethod
    def from_columns(cls, columns: Iterable[Iterable[Card]]) -> 'Board':
        cols = [tuple(col) for col in columns]
        if len(cols) != NUM_COLUMNS:
            raise ValueError(f"expected {NUM_COLUMNS} columns, got {len(cols)}")
        return cls(
            columns=Slots.of(cols),
            free_cells=Slots.of(None for _ in range(NUM_FREE_CELLS)),
        )

    def top(self, column: int) -> Optional[Card]:
        """The exposed card of a column, or None if the column is empty."""
        col = self.columns[column]
        return col[-1] if col else None

    def dragon_collected(self, color: Suit) -> bool:
        return self.dragons[DRAGON_COLORS.index(color)] == 1

    def with_dragon_collected(self, color: Suit) -> 'Board':
        flags = list(self.dragons)
        flags[DRAGON_COLORS.index(color)] = 1
        return replace(self, dragons=tuple(flags))

    def take_exposed(self, kind: str, index: int) -> 'Board':
        """Removes the exposed card at ('free', i) or ('column', i)."""
        if kind == 'free':
            return replace(self, free_cells=self.free_cells.replace(index, None))
        return replace(self, columns=self.columns.replace(index, self.columns[index][:-1]))

    def place_on_foundation(self, card: Card) -> 'Board':
        """Records a normal card or the flower as played; the caller has already removed it."""
        if isinstance(card, FlowerCard):
            return replace(self, foundations=self.foundations.with_flower())
        if isinstance(card, NormalCard):
            return replace(self, foundations=self.foundations.with_rank(card.suit, card.rank))
        raise ValueError(f"{card.id} cannot go to a foundation")

    def exposed_cards(self) -> Iterator[Tuple[str, int, Card]]:
        """Yields ('free', i, card) for occupied free cells, then ('column', i, card) for column tops."""
        for i, card in enumerate(self.free_cells):
            if card is not None:
                yield 'free', i, card
        for i in self.columns.indices():
            top = self.top(i)
            if top is not None:
                yield 'column', i, top

    def cards_in_play(self) -> List[Card]:
        """Every physical card still on the tableau or in a free cell (locked markers excluded)."""
        out: List[Card] = []
        for col in self.columns:
            out.extend(col)
        out.extend(c for c in self.free_cells if c is not None and not is_locked_marker(c))
        return out

    def pretty(self) -> str:
        """Generates a human-readable string representation of the board."""
        cells = ' '.join(f"[{_short(c) if c is not None else '  '}]" for c in self.free_cells)
        found = ' '.join(f"{s}:{self.foundations.rank(s)}" for s in SUITS)
        flower = 'FL' if self.foundations.flower else '--'
        dragons = ''.join(c if self.dragon_collected(c) else '.' for c in DRAGON_COLORS)
        lines: List[str] = [f"free {cells}   found {found} {flower}   dragons {dragons}"]
        lines.append(' '.join(f"{i:>3}" for i in self.columns.indices()))
        height = max((len(col) for col in self.columns), default=0)
        for row in range(height):
            cells_row = []
            for col in self.columns:
                cells_row.append(f"{_short(col[row]):>3}" if row < len(col) else '   ')
            lines.append(' '.join(cells_row).rstrip())
        return "\n".join(lines)


def _short(card: Card) -> str:
    if isinstance(card, NormalCard):
        return f"{card.suit}{card.rank}"
    if isinstance(card, DragonCard):
        return f"X{card.color}" if card.locked else f"D{card.color}"
    return 'FL'


def check_invariants(board: Board) -> List[str]:
    """Returns a list of conservation problems (empty when the board accounts for all 40 cards)."""
    problems: List[str] = []
    if len(board.columns) != NUM_COLUMNS:
        problems.append(f"expected {NUM_COLUMNS} columns")
    if len(board.free_cells) != NUM_FREE_CELLS:
        problems.append(f"expected {NUM_FREE_CELLS} free cells")

    seen: Set[Card] = set()
    for card in board.cards_in_play():
        if card in seen:
            problems.append(f"duplicate card {card.id}")
        seen.add(card)

    markers = [c for c in board.free_cells if is_locked_marker(c)]
    for color in DRAGON_COLORS:
        marker_count = sum(1 for m in markers if m.color == color)  # type: ignore[union-attr]
        if board.dragon_collected(color):
            if marker_count != 1:
                problems.append(f"dragon {color} collected but {marker_count} markers present")
            loose = [c for c in seen if isinstance(c, DragonCard) and c.color == color]
            if loose:
                problems.append(f"dragon {color} collected but loose dragons remain")
        elif marker_count:
            problems.append(f"locked marker for uncollected dragon {color}")
    for flag in board.dragons:
        if flag not in (0, 1):
            problems.append(f"dragon flag out of range: {flag}")

    for suit in SUITS:
        rank = board.foundations.rank(suit)
        if rank < 0 or rank > MAX_RANK:
            problems.append(f"foundation {suit} out of range: {rank}")
        for card in seen:
            if isinstance(card, NormalCard) and card.suit == suit and card.rank <= rank:
                problems.append(f"{card.id} on board but already on foundation")
    if board.foundations.flower and FlowerCard() in seen:
        problems.append("flower on board but already on foundation")

    expected = set(full_deck())
    accounted = set(seen)
    for suit in SUITS:
        accounted.update(NormalCard(suit, r) for r in range(1, board.foundations.rank(suit) + 1))
    if board.foundations.flower:
        accounted.add(FlowerCard())
    for color in DRAGON_COLORS:
        if board.dragon_collected(color):
            accounted.update(DragonCard(color, i) for i in range(DRAGONS_PER_COLOR))
    missing = expected - accounted
    if missing:
        problems.append("missing cards: " + ', '.join(sorted(c.id for c in missing)))
    stray = accounted - expected
    if stray:
        problems.append("unknown cards: " + ', '.join(sorted(c.id for c in stray)))
    return problems
