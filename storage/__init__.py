"""
InvDB Storage Engine
====================
Public API for the storage layer.

Usage:
    from storage import InventoryItem
    from storage.store import InventoryStore
    from storage import encode_record, decode_record, DecodeError
"""

from storage.record import InventoryItem, FIELD_NAMES
from storage.errors import (
    StoreError, RecordNotFoundError, DuplicateKeyError, DuplicateNameError,
    DecodeError, StorageIOError,
)
from storage.codec import (
    DELIMITER, QUOTE, HEADER,
    encode_field, encode_record, split_fields, decode_record,
    LogicalLine, iter_logical_lines,
)

__all__ = [
    "InventoryItem", "FIELD_NAMES",
    "StoreError", "RecordNotFoundError", "DuplicateKeyError", "DuplicateNameError",
    "DecodeError", "StorageIOError",
    "DELIMITER", "QUOTE", "HEADER",
    "encode_field", "encode_record", "split_fields", "decode_record",
    "LogicalLine", "iter_logical_lines",
]
