"""
InvDB Indexing Module
=====================
In-memory ordered index over inventory items.

Components:
  - bst: unbalanced binary search tree keyed by item_id
"""

from indexing.bst import BinarySearchTree

__all__ = ["BinarySearchTree"]
