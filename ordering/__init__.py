"""
InvDB Display Ordering
======================
Resizable record sequence plus a stable merge sort, used to reorder
items by (category, name) for listing. The ordered index is keyed by id,
so listing order has to be produced separately.
"""

from ordering.sequence import RecordSequence, DEFAULT_CAPACITY
from ordering.sort import merge_sort, cmp_by, compare_category_then_name

__all__ = [
    "RecordSequence", "DEFAULT_CAPACITY",
    "merge_sort", "cmp_by", "compare_category_then_name",
]
