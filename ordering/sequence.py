"""
InvDB Display Sequence
======================
Resizable array of InventoryItems used to reorder records for listing.

Backed by a fixed-length Python list that doubles when full, so append is
amortized O(1) and indexed get/set are O(1). Slots past ``len()`` are kept
as None and never exposed.

The sequence has no ordering of its own; see ordering.sort.merge_sort.
"""

from typing import Iterable, Iterator, Optional

from storage.record import InventoryItem


DEFAULT_CAPACITY = 10


class RecordSequence:
    """Growable, index-addressable container of items."""

    def __init__(self, initial_capacity: int = DEFAULT_CAPACITY):
        if initial_capacity < 0:
            raise ValueError(f"Illegal capacity: {initial_capacity}")
        self._elements: list[Optional[InventoryItem]] = [None] * initial_capacity
        self._size = 0

    @classmethod
    def from_iterable(cls, items: Iterable[InventoryItem]) -> "RecordSequence":
        seq = cls()
        for item in items:
            seq.append(item)
        return seq

    @property
    def capacity(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    # ─── Growth ─────────────────────────────────────────────────────

    def _ensure_capacity(self, min_capacity: int) -> None:
        if min_capacity > len(self._elements):
            new_capacity = max(len(self._elements) * 2, min_capacity)
            grown: list[Optional[InventoryItem]] = [None] * new_capacity
            grown[:self._size] = self._elements[:self._size]
            self._elements = grown

    def append(self, item: InventoryItem) -> None:
        self._ensure_capacity(self._size + 1)
        self._elements[self._size] = item
        self._size += 1

    # ─── Indexed access ─────────────────────────────────────────────

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self._size:
            raise IndexError(f"Index: {index}, Size: {self._size}")

    def get(self, index: int) -> InventoryItem:
        self._check_index(index)
        return self._elements[index]

    def set(self, index: int, item: InventoryItem) -> None:
        self._check_index(index)
        self._elements[index] = item

    __getitem__ = get
    __setitem__ = set

    # ─── Removal / search ───────────────────────────────────────────

    def remove_at(self, index: int) -> InventoryItem:
        """Remove and return the item at index, shifting later items left."""
        self._check_index(index)
        removed = self._elements[index]
        for i in range(index, self._size - 1):
            self._elements[i] = self._elements[i + 1]
        self._size -= 1
        self._elements[self._size] = None
        return removed

    def remove(self, item: InventoryItem) -> bool:
        """Remove the first item equal to ``item``. Returns True if found."""
        idx = self.index_of(item)
        if idx < 0:
            return False
        self.remove_at(idx)
        return True

    def index_of(self, item: InventoryItem) -> int:
        for i in range(self._size):
            if self._elements[i] == item:
                return i
        return -1

    def __contains__(self, item: InventoryItem) -> bool:
        return self.index_of(item) >= 0

    def clear(self) -> None:
        for i in range(self._size):
            self._elements[i] = None
        self._size = 0

    # ─── Iteration ──────────────────────────────────────────────────

    def __iter__(self) -> Iterator[InventoryItem]:
        for i in range(self._size):
            yield self._elements[i]

    def to_list(self) -> list[InventoryItem]:
        return self._elements[:self._size]

    def __repr__(self) -> str:
        return f"RecordSequence(size={self._size}, capacity={self.capacity})"
