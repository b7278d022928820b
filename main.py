"""
InvDB: Persistent Inventory Record Store
=======================================
Entry point for one-shot inventory commands.

Usage:
    python main.py [--data DIR] [--verbose] COMMAND

Default:
    Data directory ./invdb_data
"""

import logging
import os
import sys

from catalog.categories import DEFAULT_DATA_DIR
from cli.renderer import Renderer
from storage.codec import split_fields
from storage.errors import StoreError
from storage.record import InventoryItem


def print_help():
    print("""
InvDB: Persistent Inventory Record Store

Usage:
    python main.py [options] COMMAND

Commands:
    --list                  List all items (ordered by category, then name)
    --show ID               Show one item
    --find NAME             Find an item by name (case-insensitive)
    --add "NAME,CATEGORY,QTY,PRICE,SUPPLIER"
                            Create an item with the next available ID
                            e.g. '"Bolt, M6",Hardware,100,0.05,Acme'
    --update ID "NAME,CATEGORY,QTY,PRICE,SUPPLIER"
                            Replace an item; a new category moves it
    --delete ID             Delete an item
    --next-id               Print the next available ID

Options:
    --help          Show this help
    --data DIR      Data directory (default: ./invdb_data)
    --verbose       Log store activity to stderr
""")


def _parse_id(text: str) -> int:
    try:
        item_id = int(text)
    except ValueError:
        raise ValueError(f"Invalid item ID: {text!r}") from None
    if item_id < 1:
        raise ValueError(f"Item ID must be positive, got {item_id}")
    return item_id


def _parse_add(text: str):
    """Split an --add/--update argument into (name, category, quantity, price, supplier)."""
    try:
        fields = split_fields(text)
    except StoreError as e:
        raise ValueError(f"Malformed item: {e}") from None
    if len(fields) != 5:
        raise ValueError(f"Expected NAME,CATEGORY,QTY,PRICE,SUPPLIER, got {len(fields)} field(s)")
    name, category, qty, price, supplier = (f.strip() for f in fields)
    try:
        quantity = int(qty)
    except ValueError:
        raise ValueError(f"Invalid quantity: {qty!r}") from None
    try:
        price_value = float(price)
    except ValueError:
        raise ValueError(f"Invalid price: {price!r}") from None
    return name, category, quantity, price_value, supplier


def run_command(data_dir: str, command: str, argument, renderer: Renderer) -> int:
    """Execute one command against the store. Returns the exit code."""
    from inventory.manager import InventoryManager

    try:
        with InventoryManager(data_dir) as manager:
            if command == "--list":
                renderer.render_items(manager.list_items())
            elif command == "--show":
                item = manager.read_item(_parse_id(argument))
                renderer.render_item(item)
                return 0 if item is not None else 1
            elif command == "--find":
                item = manager.find_item_by_name(argument)
                renderer.render_item(item)
                return 0 if item is not None else 1
            elif command == "--add":
                item = manager.add_item(*_parse_add(argument))
                renderer.render_message(
                    f"Item created with ID: {item.item_id} and saved successfully!")
            elif command == "--update":
                id_text, item_text = argument
                item_id = _parse_id(id_text)
                item = InventoryItem(item_id, *_parse_add(item_text))
                if manager.update_item(item_id, item):
                    renderer.render_message("Item updated successfully.")
                else:
                    renderer.render_message("Item not found.")
                    return 1
            elif command == "--delete":
                if manager.delete_item(_parse_id(argument)):
                    renderer.render_message("Item deleted successfully.")
                else:
                    renderer.render_message("Item not found.")
                    return 1
            elif command == "--next-id":
                renderer.render_message(str(manager.next_available_id()))
    except (StoreError, ValueError) as e:
        renderer.render_error(e)
        return 1
    return 0


COMMANDS_WITH_ARG = ("--show", "--find", "--add", "--delete")
COMMANDS_NO_ARG = ("--list", "--next-id")
COMMANDS_TWO_ARGS = ("--update",)


def main(argv=None) -> int:
    """Parse CLI arguments and dispatch."""
    args = sys.argv[1:] if argv is None else list(argv)

    if not args or "--help" in args or "-h" in args:
        print_help()
        return 0

    data_dir = None
    verbose = False
    command = None
    argument = None

    i = 0
    while i < len(args):
        if args[i] == "--data" and i + 1 < len(args):
            data_dir = args[i + 1]
            i += 2
        elif args[i] == "--verbose":
            verbose = True
            i += 1
        elif args[i] in COMMANDS_WITH_ARG and i + 1 < len(args) and command is None:
            command, argument = args[i], args[i + 1]
            i += 2
        elif args[i] in COMMANDS_TWO_ARGS and i + 2 < len(args) and command is None:
            command, argument = args[i], (args[i + 1], args[i + 2])
            i += 3
        elif args[i] in COMMANDS_NO_ARG and command is None:
            command = args[i]
            i += 1
        else:
            print(f"Unknown or incomplete option: {args[i]}", file=sys.stderr)
            print_help()
            return 2

    if command is None:
        print("No command given.", file=sys.stderr)
        print_help()
        return 2

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if data_dir is None:
        data_dir = os.path.join(os.getcwd(), DEFAULT_DATA_DIR)

    return run_command(data_dir, command, argument, Renderer())


if __name__ == "__main__":
    sys.exit(main())
