"""
InvDB Result Renderer
=====================
Formats inventory items for the terminal.

Features:
  - Table mode: aligned ASCII table, widths taken from the rows
  - Vertical mode: one "field: value" block per item
  - Numbers right-aligned, text left-aligned and truncated at max width
  - Line breaks inside values shown as \\n so every item stays on one row
  - Messages and classified errors
"""

import sys
from typing import Dict, Iterable, List, Optional, TextIO

from storage.record import InventoryItem


COLUMNS = ["ID", "Name", "Category", "Quantity", "Price", "Supplier"]


class Renderer:
    """Renders items, messages and errors to a text stream."""

    def __init__(self, output: TextIO = None):
        self.output = output or sys.stdout
        self.mode: str = "table"        # table, vertical
        self.show_headers: bool = True
        self.max_col_width: int = 40

    # ─── Public API ─────────────────────────────────────────────────

    def render_items(self, items: Iterable[InventoryItem]) -> int:
        """Render a sequence of items. Returns the number rendered."""
        rows = [self._item_values(item) for item in items]
        if self.mode == "vertical":
            for i, vals in enumerate(rows, start=1):
                self._print(f"*** Item {i} ***")
                self._render_block(vals)
        elif rows:
            self._render_table(rows)

        self._print(f"\n{len(rows)} item(s)")
        return len(rows)

    def render_item(self, item: Optional[InventoryItem]) -> None:
        """Render one item as a detail block, or 'Item not found.'."""
        if item is None:
            self._print("Item not found.")
            return
        self._print("----- Item Details -----")
        self._render_block(self._item_values(item))
        self._print("------------------------")

    def render_message(self, message: str):
        if message:
            self._print(message)

    def render_error(self, error: Exception):
        """Render an error with classification prefix."""
        prefix = self._classify_error(type(error).__name__)
        self._print(f"{prefix}: {error}")

    # ─── Table Mode ─────────────────────────────────────────────────

    def _render_table(self, rows: List[Dict]) -> None:
        widths = self._calculate_widths(rows)
        if self.show_headers:
            self._print_table_separator(widths)
            self._print_table_row(widths, {h: h for h in COLUMNS}, align_numbers=False)
            self._print_table_separator(widths)
        for vals in rows:
            self._print_table_row(widths, vals)
        if self.show_headers:
            self._print_table_separator(widths)

    def _calculate_widths(self, rows: List[Dict]) -> Dict[str, int]:
        widths = {h: min(len(h), self.max_col_width) for h in COLUMNS}
        for row in rows:
            for h in COLUMNS:
                val = self._format_value(row[h])
                widths[h] = max(widths[h], min(len(val), self.max_col_width))
        return widths

    def _print_table_separator(self, widths: Dict[str, int]):
        """Print +----+------+ separator line."""
        parts = ["+"]
        for h in COLUMNS:
            parts.append("-" * (widths[h] + 2) + "+")
        self._print("".join(parts))

    def _print_table_row(self, widths: Dict[str, int], vals: Dict,
                         align_numbers: bool = True):
        """Print | col1 | col2 | row."""
        parts = ["|"]
        for h in COLUMNS:
            raw_val = vals[h]
            val_str = self._format_value(raw_val)
            if len(val_str) > self.max_col_width:
                val_str = val_str[:self.max_col_width - 3] + "..."
            w = widths[h]
            if align_numbers and isinstance(raw_val, (int, float)):
                parts.append(f" {val_str:>{w}} |")
            else:
                parts.append(f" {val_str:<{w}} |")
        self._print("".join(parts))

    # ─── Vertical Mode ──────────────────────────────────────────────

    def _render_block(self, vals: Dict) -> None:
        width = max(len(h) for h in COLUMNS)
        for h in COLUMNS:
            self._print(f"  {h:>{width}}: {self._format_value(vals[h])}")

    # ─── Helpers ────────────────────────────────────────────────────

    def _item_values(self, item: InventoryItem) -> Dict[str, object]:
        return dict(zip(COLUMNS, item.as_row()))

    def _format_value(self, value) -> str:
        if isinstance(value, float):
            return f"{value:.2f}"
        text = str(value)
        return text.replace("\r", "\\r").replace("\n", "\\n")

    def _classify_error(self, error_type: str) -> str:
        """Map error class name to user-friendly prefix."""
        mapping = {
            "RecordNotFoundError": "NotFound",
            "DuplicateKeyError": "DuplicateKey",
            "DuplicateNameError": "DuplicateKey",
            "DecodeError": "DecodeError",
            "StorageIOError": "StorageError",
            "ValueError": "InvalidInput",
            "KeyboardInterrupt": "Interrupted",
        }
        return mapping.get(error_type, f"Error[{error_type}]")

    def _print(self, text: str):
        """Print a line to the output stream."""
        print(text, file=self.output)
