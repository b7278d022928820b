"""
InvDB Inventory Package
=======================
Operations exposed to front ends: create, read, update, delete, list,
find-by-name and next-id allocation.
"""

from inventory.manager import InventoryManager, validate_item

__all__ = ["InventoryManager", "validate_item"]
