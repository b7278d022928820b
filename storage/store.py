"""
InvDB Partitioned File Store
============================
Persists InventoryItems as one flat text file per category.

File layout:
  line 1:    HEADER (id,name,category,quantity,price,supplier)
  line 2..N: one encoded item per logical line, ascending id order

Persistence protocol (read-modify-rewrite):
  1. Load the whole category file into a fresh BinarySearchTree
  2. Mutate the tree (insert-or-replace / remove)
  3. Rewrite the whole file: header, then the tree's in-order traversal

There is no append or in-place update: with quoting and variable-width
fields a record has no stable offset. The rewrite is a plain truncate and
write, so an interrupted rewrite can leave the file truncated.

Nothing is cached between calls. Every operation rebuilds its tree from
disk.

Error policy:
  - A line that fails to decode is skipped and logged with its physical
    line number; the read goes on.
  - Any OSError surfaces as StorageIOError and aborts only the current
    operation. Other categories' files are not touched.
"""

import itertools
import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from catalog.categories import CategoryCatalog
from indexing.bst import BinarySearchTree
from storage.codec import HEADER, LogicalLine, decode_record, encode_record, iter_logical_lines
from storage.errors import DecodeError, DuplicateKeyError, StorageIOError
from storage.record import InventoryItem

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Category-partitioned record store.

    Provides:
    - read_category(): load one category into an index
    - read_all(): merge every category into one index
    - write_or_update(): insert-or-replace one item, rewrite its category
    - delete_from(): remove one item, rewrite its category
    - find_by_id() / find_by_name(): lookups over the merged index
    - next_available_id(): max id + 1 across all categories
    """

    def __init__(self, data_dir: str, *, catalog: Optional[CategoryCatalog] = None):
        self.catalog = catalog or CategoryCatalog(data_dir)
        self.catalog.bootstrap()

    @property
    def data_dir(self) -> Path:
        return self.catalog.data_dir

    def categories(self) -> List[str]:
        return self.catalog.list_categories()

    # ─── Reads ──────────────────────────────────────────────────────

    def read_category(self, category: str) -> BinarySearchTree:
        """
        Load one category file into a new index.
        A missing file yields an empty index.
        """
        tree = BinarySearchTree()
        path = self.catalog.path_for(category)
        if not path.exists():
            return tree

        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                lines = iter_logical_lines(f)
                header = next(lines, None)
                if header is not None and header.text != HEADER:
                    logger.warning("Unexpected header in %s: %r", path.name, header.text)
                for line_number, item in self._decode_lines(path, f, lines):
                    if item.category != category:
                        logger.warning("%s line %d: item %d has category %r",
                                       path.name, line_number, item.item_id, item.category)
                    tree.insert(item)
        except OSError as e:
            raise StorageIOError(path, e) from e

        logger.debug("Loaded %d item(s) from %s", tree.size, path.name)
        return tree

    @staticmethod
    def _decode_lines(path: Path, physical: Iterator[str],
                      records: Iterator[LogicalLine]) -> Iterator[Tuple[int, InventoryItem]]:
        """
        Yield (physical line number, item) for every decodable record.

        ``records`` is the logical-line view of ``physical``. A record that
        fails to decode is logged and skipped. If it spanned several physical
        lines, only its first line is dropped: joining restarts from the
        second line, so a broken opening quote does not take the records
        after it down too.
        """
        while True:
            record = next(records, None)
            if record is None:
                return
            if not record.text:
                continue
            try:
                item = decode_record(record.text, record.line_number)
            except DecodeError as e:
                logger.warning("Skipping %s line %d: %s", path.name, e.line_number, e.reason)
                if len(record.parts) > 1:
                    records = iter_logical_lines(
                        itertools.chain(record.parts[1:], physical),
                        start=record.line_number + 1,
                    )
                continue
            yield record.line_number, item

    def read_all(self) -> BinarySearchTree:
        """
        Merge every category into one index.
        Raises DuplicateKeyError if one id appears in two category files.
        """
        merged = BinarySearchTree()
        seen: Dict[int, str] = {}
        for category in self.categories():
            for item in self.read_category(category).in_order():
                if item.item_id in seen:
                    raise DuplicateKeyError(
                        item.item_id,
                        f"found in both '{seen[item.item_id]}' and '{category}'",
                    )
                seen[item.item_id] = category
                merged.insert(item)
        return merged

    def find_by_id(self, item_id: int) -> Optional[InventoryItem]:
        return self.read_all().find(item_id)

    def find_by_name(self, name: str) -> Optional[InventoryItem]:
        return self.read_all().find_by_name(name)

    def next_available_id(self) -> int:
        """One greater than the largest id in any category, or 1 if empty."""
        max_key = self.read_all().max_key()
        return 1 if max_key is None else max_key + 1

    # ─── Writes ─────────────────────────────────────────────────────

    def write_or_update(self, item: InventoryItem) -> None:
        """Insert or replace ``item`` in its category file."""
        tree = self.read_category(item.category)
        tree.insert(item)
        self._rewrite(item.category, tree)

    def delete_from(self, category: str, item_id: int) -> bool:
        """
        Remove ``item_id`` from a category file.
        Returns False (and leaves the file alone) if the file or id is missing.
        """
        if not self.catalog.exists(category):
            return False
        tree = self.read_category(category)
        if not tree.remove(item_id):
            return False
        self._rewrite(category, tree)
        return True

    def _rewrite(self, category: str, tree: BinarySearchTree) -> None:
        """Overwrite a category file with the header and the tree's items."""
        path = self.catalog.path_for(category)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(HEADER + os.linesep)
                for item in tree.in_order():
                    f.write(encode_record(item) + os.linesep)
        except OSError as e:
            raise StorageIOError(path, e) from e
        logger.debug("Rewrote %s with %d item(s)", path.name, tree.size)
