"""
InvDB Storage Errors
====================
Error hierarchy for the record store.

  StoreError
  ├── RecordNotFoundError   absent id where one was required
  ├── DuplicateKeyError     id collision (create, or merged read)
  │   └── DuplicateNameError  name collision, case-insensitive
  ├── DecodeError           malformed line in a category file
  └── StorageIOError        file could not be opened / read / written

Plain lookups report absence as None / False; RecordNotFoundError is only
raised by callers that demand an item.
"""

from typing import Optional


class StoreError(Exception):
    """Base class for all record store errors."""
    pass


class RecordNotFoundError(StoreError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found.")


class DuplicateKeyError(StoreError):
    def __init__(self, item_id: int, detail: str = "", message: Optional[str] = None):
        self.item_id = item_id
        if message is None:
            message = f"Item id {item_id} already exists"
            if detail:
                message += f" ({detail})"
            message += "."
        super().__init__(message)


class DuplicateNameError(DuplicateKeyError):
    def __init__(self, name: str, existing_id: int):
        self.name = name
        super().__init__(
            existing_id,
            message=f"An item named '{name}' already exists (ID: {existing_id}).",
        )


class DecodeError(StoreError):
    """A stored line could not be parsed into a valid item."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason}: {line!r}")


class StorageIOError(StoreError):
    """Wraps the OSError raised while touching a store file."""

    def __init__(self, path: str, cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"I/O error on '{self.path}': {cause}")
