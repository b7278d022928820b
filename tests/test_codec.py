"""
InvDB Record Codec Tests
========================
Quoting, field splitting, numeric parsing, malformed input handling and
joining of records that span several physical lines.
"""

import pytest

from storage.codec import (
    HEADER, encode_field, encode_record, split_fields, decode_record,
    iter_logical_lines,
)
from storage.errors import DecodeError
from storage.record import InventoryItem


@pytest.fixture
def widget():
    return InventoryItem(1, "Widget", "Tools", 5, 9.99, "Acme")


# ═══════════════════════════════════════════════════════════════════
# Encoding
# ═══════════════════════════════════════════════════════════════════

class TestEncode:

    def test_header(self):
        assert HEADER == "id,name,category,quantity,price,supplier"

    def test_plain_record(self, widget):
        assert encode_record(widget) == "1,Widget,Tools,5,9.99,Acme"

    def test_bare_field_untouched(self):
        assert encode_field("Acme Corp") == "Acme Corp"

    def test_comma_is_quoted(self):
        assert encode_field("Acme, Inc") == '"Acme, Inc"'

    def test_quote_is_doubled(self):
        assert encode_field('The "Best"') == '"The ""Best"""'

    def test_newline_is_quoted(self):
        assert encode_field("line1\nline2") == '"line1\nline2"'
        assert encode_field("a\rb") == '"a\rb"'

    def test_price_locale_independent(self):
        item = InventoryItem(2, "Bolt", "Hardware", 0, 1234.5, "X")
        assert encode_record(item).split(",")[4] == "1234.5"

    def test_integer_price_written_as_float(self):
        item = InventoryItem(2, "Bolt", "Hardware", 0, 3, "X")
        assert encode_record(item) == "2,Bolt,Hardware,0,3.0,X"


# ═══════════════════════════════════════════════════════════════════
# Decoding
# ═══════════════════════════════════════════════════════════════════

class TestDecode:

    def test_plain_record(self, widget):
        assert decode_record("1,Widget,Tools,5,9.99,Acme") == widget

    def test_round_trip_with_special_characters(self):
        item = InventoryItem(
            item_id=42,
            name='Hammer "XL"',
            category="Tools, Hand",
            quantity=0,
            price=0.1,
            supplier='Acme, "Global"\nDivision\r\nEast',
        )
        assert decode_record(encode_record(item)) == item

    def test_round_trip_float_precision(self):
        item = InventoryItem(3, "N", "C", 1, 0.1 + 0.2, "S")
        assert decode_record(encode_record(item)).price == 0.1 + 0.2

    def test_split_respects_quotes(self):
        assert split_fields('a,"b,c",d') == ["a", "b,c", "d"]
        assert split_fields('"x""y"') == ['x"y']
        assert split_fields('a,,b') == ["a", "", "b"]
        assert split_fields('a,') == ["a", ""]

    @pytest.mark.parametrize("line, reason", [
        ("1,Widget,Tools,5,9.99", "expected 6 fields"),
        ("1,Widget,Tools,5,9.99,Acme,extra", "expected 6 fields"),
        ("x,Widget,Tools,5,9.99,Acme", "id is not an integer"),
        ("0,Widget,Tools,5,9.99,Acme", "id must be >= 1"),
        ("1,Widget,Tools,-1,9.99,Acme", "quantity must be >= 0"),
        ("1,Widget,Tools,five,9.99,Acme", "quantity is not an integer"),
        ("1,Widget,Tools,5,cheap,Acme", "price is not a number"),
        ("1,Widget,Tools,5,-0.5,Acme", "price must be >= 0"),
        ("1,Widget,Tools,5,nan,Acme", "price must be finite"),
        ("1,,Tools,5,9.99,Acme", "name must not be empty"),
        ("1,Widget,,5,9.99,Acme", "category must not be empty"),
        ("1,Widget,Tools,5,9.99,", "supplier must not be empty"),
        ('1,"Widget,Tools,5,9.99,Acme', "unterminated quoted field"),
        ('1,"Widget"x,Tools,5,9.99,Acme', "unexpected character after quoted field"),
        ('1,Wid"get,Tools,5,9.99,Acme', "stray quote"),
    ])
    def test_malformed_lines(self, line, reason):
        with pytest.raises(DecodeError, match=reason) as exc_info:
            decode_record(line)
        assert exc_info.value.line == line

    def test_empty_line(self):
        with pytest.raises(DecodeError):
            decode_record("")


# ═══════════════════════════════════════════════════════════════════
# Logical lines
# ═══════════════════════════════════════════════════════════════════

class TestLogicalLines:

    @staticmethod
    def texts(physical):
        return [record.text for record in iter_logical_lines(physical)]

    def test_terminators_stripped(self):
        physical = ["a,b\r\n", "c,d\n", "e,f"]
        assert self.texts(physical) == ["a,b", "c,d", "e,f"]

    def test_quoted_line_break_joined(self):
        physical = ['1,"multi\n', 'line",x\n', "2,y\n"]
        assert self.texts(physical) == ['1,"multi\nline",x', "2,y"]

    def test_encoded_record_survives_split(self):
        item = InventoryItem(7, "N", "C", 1, 2.0, "first\nsecond\nthird")
        text = encode_record(item) + "\n"
        physical = text.splitlines(keepends=True)
        assert len(physical) == 3
        (record,) = list(iter_logical_lines(physical))
        assert decode_record(record.text) == item
        assert record.parts == physical

    def test_unterminated_tail_yielded(self):
        physical = ['1,"open\n', "never closed\n"]
        (record,) = list(iter_logical_lines(physical))
        with pytest.raises(DecodeError, match="unterminated"):
            decode_record(record.text)

    def test_stray_quote_does_not_join(self):
        physical = ["1,ok,x\n", '2,Bad"Name,x\n', "3,ok,x\n", "4,ok,x\n"]
        assert self.texts(physical) == ["1,ok,x", '2,Bad"Name,x', "3,ok,x", "4,ok,x"]

    def test_escaped_quote_across_lines(self):
        physical = ['1,"say ""hi""\n', '""bye""",x\n', "2,y\n"]
        assert self.texts(physical) == ['1,"say ""hi""\n""bye""",x', "2,y"]

    def test_physical_line_numbers(self):
        physical = ["h\n", '1,"two\n', 'lines",x\n', "2,y\n", "3,z\n"]
        numbers = [record.line_number for record in iter_logical_lines(physical)]
        assert numbers == [1, 2, 4, 5]

    def test_start_offset(self):
        records = list(iter_logical_lines(["a\n", "b\n"], start=10))
        assert [r.line_number for r in records] == [10, 11]

    def test_decode_error_carries_line_number(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_record("1,Widget,Tools,lots,1.0,Acme", line_number=7)
        assert exc_info.value.line_number == 7
        assert str(exc_info.value).startswith("line 7: quantity is not an integer")
