"""
InvDB Inventory Manager
=======================
The operations exposed to front ends (command line, tests, other callers).
Wires the partitioned file store, the ordered index and display ordering.

Every call goes back to disk; nothing is cached between calls.

Results:
  - read_item / find_item_by_name -> item or None
  - update_item / delete_item     -> True / False
  - list_items                    -> RecordSequence ordered by (category, name)
  - create_item / add_item        -> raise DuplicateKeyError / DuplicateNameError

Uniqueness:
  item ids are unique across all categories. Names are also unique across
  all categories (case-insensitive); this is checked here on create and
  update, not only by the front end.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

from catalog.categories import DEFAULT_DATA_DIR
from indexing.bst import BinarySearchTree
from ordering.sequence import RecordSequence
from ordering.sort import compare_category_then_name, merge_sort
from storage.errors import DuplicateKeyError, DuplicateNameError, RecordNotFoundError
from storage.record import InventoryItem
from storage.store import InventoryStore

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    # bool is an int subclass but would be written as True/False
    return isinstance(value, int) and not isinstance(value, bool)


def validate_item(item: InventoryItem) -> None:
    """Raise ValueError if an item could not be stored and read back."""
    if not _is_int(item.item_id) or item.item_id < 1:
        raise ValueError(f"Item id must be a positive integer, got {item.item_id!r}")
    for field in ("name", "category", "supplier"):
        if not getattr(item, field):
            raise ValueError(f"{field.capitalize()} cannot be empty.")
    if not _is_int(item.quantity) or item.quantity < 0:
        raise ValueError(f"Quantity must be a non-negative integer, got {item.quantity!r}")
    if isinstance(item.price, bool) or not isinstance(item.price, (int, float)):
        raise ValueError(f"Price must be a number, got {item.price!r}")
    if not math.isfinite(item.price) or item.price < 0:
        raise ValueError(f"Price cannot be negative, got {item.price!r}")


class InventoryManager:
    """
    Front-end facing API over an InventoryStore.

    Usage:
        with InventoryManager("path/to/data") as mgr:
            item = mgr.add_item("Widget", "Tools", 5, 9.99, "Acme")
            mgr.read_item(item.item_id)
    """

    def __init__(self, data_dir: str = DEFAULT_DATA_DIR):
        self.store = InventoryStore(data_dir)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    # ─── Create ─────────────────────────────────────────────────────

    def _check_name_free(self, index: BinarySearchTree, name: str,
                         item_id: Optional[int] = None) -> None:
        clash = index.find_by_name(name)
        if clash is not None and clash.item_id != item_id:
            raise DuplicateNameError(name, clash.item_id)

    def create_item(self, item: InventoryItem) -> None:
        """Store a new item. Its id and name must not be in use."""
        validate_item(item)
        index = self.store.read_all()
        if item.item_id in index:
            raise DuplicateKeyError(item.item_id)
        self._check_name_free(index, item.name)
        self.store.write_or_update(item)
        logger.info("Created item %d in '%s'", item.item_id, item.category)

    def add_item(self, name: str, category: str, quantity: int,
                 price: float, supplier: str) -> InventoryItem:
        """Create an item under the next available id and return it."""
        index = self.store.read_all()
        max_key = index.max_key()
        item = InventoryItem(
            item_id=1 if max_key is None else max_key + 1,
            name=name, category=category, quantity=quantity,
            price=float(price), supplier=supplier,
        )
        validate_item(item)
        self._check_name_free(index, name)
        self.store.write_or_update(item)
        logger.info("Created item %d in '%s'", item.item_id, item.category)
        return item

    # ─── Read ───────────────────────────────────────────────────────

    def read_item(self, item_id: int) -> Optional[InventoryItem]:
        return self.store.find_by_id(item_id)

    def require_item(self, item_id: int) -> InventoryItem:
        item = self.read_item(item_id)
        if item is None:
            raise RecordNotFoundError(item_id)
        return item

    def find_item_by_name(self, name: str) -> Optional[InventoryItem]:
        return self.store.find_by_name(name)

    def next_available_id(self) -> int:
        return self.store.next_available_id()

    def list_items(self) -> RecordSequence:
        """All items, ordered by category then name."""
        index = self.store.read_all()
        seq = RecordSequence()
        for item in index.in_order():
            seq.append(item)
        merge_sort(seq, compare_category_then_name)
        return seq

    # ─── Update / Delete ────────────────────────────────────────────

    def update_item(self, item_id: int, item: InventoryItem) -> bool:
        """
        Replace the stored item ``item_id`` with ``item``.

        The stored item always carries ``item_id``. If the category
        changed, the item moves: it is written to the new category file
        first and then removed from the old one.
        Returns False if no item has that id.
        """
        index = self.store.read_all()
        existing = index.find(item_id)
        if existing is None:
            return False

        if item.item_id != item_id:
            item = replace(item, item_id=item_id)
        validate_item(item)
        self._check_name_free(index, item.name, item_id)

        self.store.write_or_update(item)
        if existing.category != item.category:
            self.store.delete_from(existing.category, item_id)
            logger.info("Moved item %d from '%s' to '%s'",
                        item_id, existing.category, item.category)
        logger.info("Updated item %d", item_id)
        return True

    def delete_item(self, item_id: int) -> bool:
        existing = self.store.find_by_id(item_id)
        if existing is None:
            return False
        removed = self.store.delete_from(existing.category, item_id)
        if removed:
            logger.info("Deleted item %d from '%s'", item_id, existing.category)
        return removed
