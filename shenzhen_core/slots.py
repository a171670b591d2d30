from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Slots(Generic[T]):
    """Fixed-size, immutable, index-addressed collection.

    Updates return a new Slots that shares every untouched item with the
    original, so board snapshots are cheap to keep in history.
    """
    items: Tuple[T, ...]

    @classmethod
    def of(cls, values: Iterable[T]) -> 'Slots[T]':
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, index: int) -> T:
        if not self.has_index(index):
            raise IndexError(f"slot {index} out of range 0..{len(self.items) - 1}")
        return self.items[index]

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self.items)

    def indices(self) -> range:
        return range(len(self.items))

    def replace(self, index: int, value: T) -> 'Slots[T]':
        if not self.has_index(index):
            raise IndexError(f"slot {index} out of range 0..{len(self.items) - 1}")
        return Slots(self.items[:index] + (value,) + self.items[index + 1:])

    def update(self, changes: Iterable[Tuple[int, T]]) -> 'Slots[T]':
        """Applies several replacements at once; later entries win."""
        items = list(self.items)
        for index, value in changes:
            if not self.has_index(index):
                raise IndexError(f"slot {index} out of range 0..{len(self.items) - 1}")
            items[index] = value
        return Slots(tuple(items))

    def find(self, predicate: Callable[[T], bool]) -> Optional[int]:
        """Lowest index whose item satisfies the predicate."""
        for index, item in enumerate(self.items):
            if predicate(item):
                return index
        return None
