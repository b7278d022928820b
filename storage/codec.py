"""
InvDB Record Codec
==================
Converts an InventoryItem to and from one delimited text line.

Line format:
  id,name,category,quantity,price,supplier

Quoting rules:
  - A field containing the delimiter, the quote character, CR or LF is
    wrapped in quotes; quotes inside it are doubled ("" -> ").
  - Everything else is written bare.
  - Integers are written with str(), price with repr(float). Both are
    locale-independent and repr() is the shortest string that parses back
    to the same float.

A quoted field may contain line breaks, so one record can span several
physical lines in a file. iter_logical_lines() stitches them back together:
a record continues onto the next physical line only while it is inside a
quoted span that opened at the start of a field. A stray quote in the middle
of a bare field never joins lines, so one damaged line cannot swallow the
records after it.

Round-trip law: decode_record(encode_record(item)) == item for every valid
item.
"""

import math
from typing import Iterable, Iterator, List, NamedTuple, Optional

from storage.errors import DecodeError
from storage.record import FIELD_NAMES, InventoryItem


DELIMITER = ","
QUOTE = '"'
HEADER = DELIMITER.join(FIELD_NAMES)

_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n", "\r")
_LINE_TERMINATORS = "\r\n"


# ─── Encoding ───────────────────────────────────────────────────────────────

def encode_field(value: str) -> str:
    """Quote a single field value if it contains a special character."""
    if any(ch in value for ch in _NEEDS_QUOTING):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def encode_record(item: InventoryItem) -> str:
    """Serialize an item to one logical line (no trailing terminator)."""
    fields = [
        str(item.item_id),
        encode_field(item.name),
        encode_field(item.category),
        str(item.quantity),
        repr(float(item.price)),
        encode_field(item.supplier),
    ]
    return DELIMITER.join(fields)


# ─── Decoding ───────────────────────────────────────────────────────────────

def split_fields(line: str) -> list[str]:
    """
    Split a logical line on delimiters that are outside quoted spans.

    A field is quoted only if its first character is the quote character.
    Inside a quoted span a doubled quote stands for one literal quote; the
    closing quote must be followed by a delimiter or the end of the line.
    """
    fields: list[str] = []
    current: list[str] = []
    i = 0
    n = len(line)
    at_field_start = True

    while i < n:
        ch = line[i]
        if at_field_start and ch == QUOTE:
            # Quoted field: scan to the matching close quote
            i += 1
            while True:
                if i >= n:
                    raise DecodeError(line, "unterminated quoted field")
                ch = line[i]
                if ch == QUOTE:
                    if i + 1 < n and line[i + 1] == QUOTE:
                        current.append(QUOTE)
                        i += 2
                        continue
                    i += 1
                    break
                current.append(ch)
                i += 1
            if i < n and line[i] != DELIMITER:
                raise DecodeError(line, f"unexpected character after quoted field at column {i + 1}")
            at_field_start = False
            continue

        if ch == DELIMITER:
            fields.append("".join(current))
            current = []
            at_field_start = True
        elif ch == QUOTE:
            raise DecodeError(line, f"stray quote in unquoted field at column {i + 1}")
        else:
            current.append(ch)
            at_field_start = False
        i += 1

    fields.append("".join(current))
    return fields


def _parse_int(line: str, field: str, text: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise DecodeError(line, f"{field} is not an integer: {text!r}") from None
    if value < minimum:
        raise DecodeError(line, f"{field} must be >= {minimum}, got {value}")
    return value


def _parse_price(line: str, text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise DecodeError(line, f"price is not a number: {text!r}") from None
    if not math.isfinite(value):
        raise DecodeError(line, f"price must be finite, got {text!r}")
    if value < 0:
        raise DecodeError(line, f"price must be >= 0, got {value}")
    return value


def _require_text(line: str, field: str, text: str) -> str:
    if not text:
        raise DecodeError(line, f"{field} must not be empty")
    return text


def decode_record(line: str, line_number: Optional[int] = None) -> InventoryItem:
    """
    Parse one logical line into an InventoryItem.
    Raises DecodeError on any malformed input, tagged with ``line_number``
    when the caller knows where the line came from.
    """
    try:
        return _decode_fields(line)
    except DecodeError as e:
        if line_number is None:
            raise
        raise DecodeError(line, e.reason, line_number) from None


def _decode_fields(line: str) -> InventoryItem:
    fields = split_fields(line)
    if len(fields) != len(FIELD_NAMES):
        raise DecodeError(
            line, f"expected {len(FIELD_NAMES)} fields, got {len(fields)}"
        )

    raw_id, name, category, raw_qty, raw_price, supplier = fields
    return InventoryItem(
        item_id=_parse_int(line, "id", raw_id, 1),
        name=_require_text(line, "name", name),
        category=_require_text(line, "category", category),
        quantity=_parse_int(line, "quantity", raw_qty, 0),
        price=_parse_price(line, raw_price),
        supplier=_require_text(line, "supplier", supplier),
    )


# ─── Physical → logical lines ──────────────────────────────────────────────

class LogicalLine(NamedTuple):
    """One record's text plus where it sits in the file."""
    line_number: int     # physical line the record starts on (1-based)
    text: str            # record text, closing terminator removed
    parts: List[str]     # physical lines the record was built from


def _ends_inside_quotes(physical: str, in_quotes: bool) -> bool:
    """
    Scan one physical line and report whether it ends inside a quoted span.
    Quotes open only at the start of a field, as in split_fields(); a quote
    anywhere else is left for the decoder to reject.
    """
    at_field_start = not in_quotes
    i = 0
    n = len(physical)
    while i < n:
        ch = physical[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < n and physical[i + 1] == QUOTE:
                    i += 2
                    continue
                in_quotes = False
        elif ch == DELIMITER:
            at_field_start = True
        elif ch == QUOTE and at_field_start:
            in_quotes = True
            at_field_start = False
        else:
            at_field_start = False
        i += 1
    return in_quotes


def iter_logical_lines(lines: Iterable[str], start: int = 1) -> Iterator[LogicalLine]:
    """
    Join physical lines into logical record lines.

    Input lines keep their terminators (as produced by iterating a file
    opened with newline=""). A line break inside a quoted span belongs to
    the field value and is kept; the terminator ending a record is dropped.
    A trailing unterminated record is yielded as-is so the decoder can
    report it. ``start`` is the physical number of the first input line.
    """
    pending: List[str] = []
    in_quotes = False
    line_number = start

    for physical in lines:
        pending.append(physical)
        in_quotes = _ends_inside_quotes(physical, in_quotes)
        if not in_quotes:
            yield LogicalLine(line_number, "".join(pending).rstrip(_LINE_TERMINATORS), pending)
            line_number += len(pending)
            pending = []

    if pending:
        yield LogicalLine(line_number, "".join(pending), pending)
