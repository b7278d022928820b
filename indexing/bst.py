"""
InvDB Ordered Index
===================
In-memory binary search tree of InventoryItems keyed by item_id.

Operations:
  - insert(item):        insert-or-replace (existing key keeps its node)
  - remove(item_id):     delete with successor promotion for two children
  - find(item_id):       exact lookup
  - find_by_name(name):  case-insensitive linear scan (tree is not keyed by name)
  - in_order():          lazy ascending-id traversal

Invariant: for every node, keys in the left subtree < node key < keys in the
right subtree. No duplicate keys; size == number of reachable nodes.

Balancing: none. Sorted insertion (which is what sequential id allocation
produces) degrades the tree to a linked list and every operation to O(n).
Descent and traversal therefore use loops and an explicit stack instead of
recursion, so a long degenerate tree cannot exhaust the interpreter stack.
"""

from typing import Iterator, Optional

from storage.record import InventoryItem


class _Node:
    """One tree node. Each parent solely owns its two child links."""
    __slots__ = ('item', 'left', 'right')

    def __init__(self, item: InventoryItem):
        self.item = item
        self.left: Optional['_Node'] = None
        self.right: Optional['_Node'] = None

    @property
    def key(self) -> int:
        return self.item.item_id


class BinarySearchTree:
    """
    Unbalanced BST keyed by item_id.

    Usage:
        tree = BinarySearchTree()
        tree.insert(item)
        for item in tree.in_order():
            ...
    """

    def __init__(self):
        self._root: Optional[_Node] = None
        self._size = 0

    # ─── Size ───────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    # ─── Insert ─────────────────────────────────────────────────────

    def insert(self, item: InventoryItem) -> bool:
        """
        Insert an item, or replace the stored item with the same id.
        Returns True if a new node was added, False if an item was replaced.
        """
        key = item.item_id
        if self._root is None:
            self._root = _Node(item)
            self._size += 1
            return True

        current = self._root
        while True:
            if key < current.key:
                if current.left is None:
                    current.left = _Node(item)
                    self._size += 1
                    return True
                current = current.left
            elif key > current.key:
                if current.right is None:
                    current.right = _Node(item)
                    self._size += 1
                    return True
                current = current.right
            else:
                current.item = item
                return False

    # ─── Remove ─────────────────────────────────────────────────────

    def remove(self, item_id: int) -> bool:
        """Remove the item with the given id. Returns True if one was removed."""
        parent: Optional[_Node] = None
        current = self._root
        while current is not None and current.key != item_id:
            parent = current
            current = current.left if item_id < current.key else current.right

        if current is None:
            return False

        if current.left is not None and current.right is not None:
            # Two children: pull up the in-order successor (min of right
            # subtree), then splice the successor's original node out.
            succ_parent = current
            successor = current.right
            while successor.left is not None:
                succ_parent = successor
                successor = successor.left
            current.item = successor.item
            parent, current = succ_parent, successor

        # At most one child left: promote it into the parent's slot
        child = current.left if current.left is not None else current.right
        if parent is None:
            self._root = child
        elif parent.left is current:
            parent.left = child
        else:
            parent.right = child

        self._size -= 1
        return True

    # ─── Lookup ─────────────────────────────────────────────────────

    def find(self, item_id: int) -> Optional[InventoryItem]:
        current = self._root
        while current is not None:
            if item_id == current.key:
                return current.item
            current = current.left if item_id < current.key else current.right
        return None

    def __contains__(self, item_id: int) -> bool:
        return self.find(item_id) is not None

    def find_by_name(self, name: str) -> Optional[InventoryItem]:
        """
        Case-insensitive name lookup. Full pre-order scan, O(n).
        Returns the first match or None.
        """
        target = name.casefold()
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if node.item.name.casefold() == target:
                return node.item
            # Right pushed first so the left subtree is visited first
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return None

    def max_key(self) -> Optional[int]:
        """Largest id in the tree, or None when empty."""
        current = self._root
        if current is None:
            return None
        while current.right is not None:
            current = current.right
        return current.key

    # ─── Traversal ──────────────────────────────────────────────────

    def in_order(self) -> Iterator[InventoryItem]:
        """
        Yield items in ascending id order (left, node, right).
        Each call starts a fresh traversal.
        """
        stack: list[_Node] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current.item
            current = current.right

    def __iter__(self) -> Iterator[InventoryItem]:
        return self.in_order()

    def __repr__(self) -> str:
        return f"BinarySearchTree(size={self._size})"
