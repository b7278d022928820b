"""
InvDB Merge Sort
================
Stable in-place merge sort for RecordSequence.

Top-down: split at the midpoint, sort each half, merge through one
auxiliary buffer allocated once for the whole sequence. On ties the
element from the left half is taken first, so equal items keep their
input order.

Complexity: O(n log n) comparisons, O(n) extra space, recursion depth
O(log n).
"""

from typing import Callable

from ordering.sequence import RecordSequence
from storage.record import InventoryItem


Comparator = Callable[[InventoryItem, InventoryItem], int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def cmp_by(*fields: str) -> Comparator:
    """Three-way comparator over the given attribute names, in priority order."""
    def compare(a: InventoryItem, b: InventoryItem) -> int:
        for name in fields:
            result = _cmp(getattr(a, name), getattr(b, name))
            if result:
                return result
        return 0
    return compare


# Listing order: category, then name. Ordinal, case-sensitive.
compare_category_then_name: Comparator = cmp_by("category", "name")


def merge_sort(seq: RecordSequence, compare: Comparator) -> None:
    """Sort ``seq`` in place using ``compare`` (negative / zero / positive)."""
    if len(seq) <= 1:
        return
    temp: list = [None] * len(seq)
    _merge_sort(seq, 0, len(seq) - 1, temp, compare)


def _merge_sort(seq: RecordSequence, low: int, high: int,
                temp: list, compare: Comparator) -> None:
    if low < high:
        mid = low + (high - low) // 2
        _merge_sort(seq, low, mid, temp, compare)
        _merge_sort(seq, mid + 1, high, temp, compare)
        _merge(seq, low, mid, high, temp, compare)


def _merge(seq: RecordSequence, low: int, mid: int, high: int,
           temp: list, compare: Comparator) -> None:
    for i in range(low, high + 1):
        temp[i] = seq[i]

    i, j, k = low, mid + 1, low
    while i <= mid and j <= high:
        # <= keeps the left element first on ties (stability)
        if compare(temp[i], temp[j]) <= 0:
            seq[k] = temp[i]
            i += 1
        else:
            seq[k] = temp[j]
            j += 1
        k += 1

    while i <= mid:
        seq[k] = temp[i]
        i += 1
        k += 1
    while j <= high:
        seq[k] = temp[j]
        j += 1
        k += 1
