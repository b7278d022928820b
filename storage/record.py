"""
InvDB Inventory Item
====================
The record type stored by InvDB: one inventory item per record.

An item is a plain immutable value. The store never mutates an item in place;
an update replaces the stored item wholesale with a new one sharing the same
``item_id`` (``dataclasses.replace`` is the convenient way to build it).

Field order here is the column order in every category file.
"""

from dataclasses import dataclass


FIELD_NAMES = ("id", "name", "category", "quantity", "price", "supplier")


@dataclass(frozen=True)
class InventoryItem:
    """A single inventory record, keyed by ``item_id``."""
    item_id: int
    name: str
    category: str
    quantity: int
    price: float
    supplier: str

    def as_row(self) -> tuple:
        """Field values in file column order."""
        return (self.item_id, self.name, self.category,
                self.quantity, self.price, self.supplier)

    def __str__(self) -> str:
        return (f"InventoryItem(id={self.item_id}, name={self.name!r}, "
                f"category={self.category!r}, quantity={self.quantity}, "
                f"price={self.price}, supplier={self.supplier!r})")
