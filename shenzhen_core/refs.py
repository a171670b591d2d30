from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .board import NUM_COLUMNS, NUM_FREE_CELLS
from .cards import SUITS, Suit

FLOWER_SLOT = 'flower'


@dataclass(frozen=True)
class ColumnTarget:
    index: int

    @property
    def id(self) -> str:
        return f"col-{self.index}"


@dataclass(frozen=True)
class FreeCellTarget:
    index: int

    @property
    def id(self) -> str:
        return f"free-{self.index}"


@dataclass(frozen=True)
class FoundationTarget:
    slot: Suit  # one of SUITS or FLOWER_SLOT

    @property
    def id(self) -> str:
        return f"foundation-{self.slot}"

    @property
    def is_flower(self) -> bool:
        return self.slot == FLOWER_SLOT


TargetRef = Union[ColumnTarget, FreeCellTarget, FoundationTarget]


def _parse_index(text: str, limit: int) -> Optional[int]:
    if not text.isdigit() or str(int(text)) != text:
        return None
    value = int(text)
    return value if value < limit else None


def parse_target(text: str) -> Optional[TargetRef]:
    """Parses a destination identifier ('col-3', 'free-0', 'foundation-B', 'foundation-flower').

    Returns None for malformed or out-of-range identifiers.
    """
    if not isinstance(text, str):
        return None
    kind, sep, rest = text.partition('-')
    if not sep:
        return None
    if kind == 'col':
        index = _parse_index(rest, NUM_COLUMNS)
        return ColumnTarget(index) if index is not None else None
    if kind == 'free':
        index = _parse_index(rest, NUM_FREE_CELLS)
        return FreeCellTarget(index) if index is not None else None
    if kind == 'foundation':
        if rest == FLOWER_SLOT or rest in SUITS:
            return FoundationTarget(rest)
    return None
