"""jotbox command-line interface."""

import argparse
import os
import sys

from loguru import logger

from .catalog import Catalog
from .config import Settings, load_settings
from .core import fields_to_note
from .errors import JotboxError
from .logs import setup_logging
from .models import CATEGORY_ORDER, DEFAULT_CONFIG, FIELD_LAYOUTS, Category
from .render import browse_fragments
from .storage import RecordStore, ensure_dir_exists

LIST_WIDTH = 80


def parse_category(value: str) -> Category:
    for c in CATEGORY_ORDER:
        if c.value.lower() == value.lower():
            return c
    raise argparse.ArgumentTypeError(
        f"unknown category {value!r} (choose from {', '.join(c.value for c in CATEGORY_ORDER)})"
    )


def print_catalog(catalog: Catalog, fold: bool, theme) -> None:
    """Print a catalog the way the browsing view shows it."""
    print(f"== {catalog.category} ({len(catalog)}) ==")
    frags = browse_fragments(
        catalog.category, catalog.visible(), LIST_WIDTH, fold, theme.done_mark, theme.not_done_mark
    )
    print("".join(f.text for f in frags), end="")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    store = RecordStore(settings.notes_dir)
    categories = [args.category] if args.category else CATEGORY_ORDER
    for category in categories:
        print_catalog(Catalog.load(category, store), args.fold, settings.theme)


def cmd_add(args: argparse.Namespace, settings: Settings) -> None:
    layout = FIELD_LAYOUTS[args.category]
    if len(args.fields) > len(layout):
        labels = ", ".join(spec.label for spec in layout)
        sys.exit(f"{args.category} takes at most {len(layout)} fields: {labels}")
    values = args.fields + [""] * (len(layout) - len(args.fields))
    snapshot = {spec.label: value for spec, value in zip(layout, values)}

    catalog = Catalog.load(args.category, RecordStore(settings.notes_dir))
    note = fields_to_note(args.category, snapshot, catalog.next_available_id())
    catalog.add(note)
    print(f"Added {args.category} {note.id}: {note.title}")


def cmd_toggle(args: argparse.Namespace, settings: Settings) -> None:
    catalog = Catalog.load(Category.TASK, RecordStore(settings.notes_dir))
    note = catalog.toggle_done(args.id)
    print(f"Task {note.id} marked {'done' if note.done else 'not done'}: {note.summary}")


def cmd_delete(args: argparse.Namespace, settings: Settings) -> None:
    catalog = Catalog.load(args.category, RecordStore(settings.notes_dir))
    note = catalog.remove(args.id)
    print(f"Deleted {args.category} {note.id}.")


def cmd_path(args: argparse.Namespace, settings: Settings) -> None:
    print(os.path.abspath(settings.notes_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="jotbox", description="Tasks, journal lines, research notes and events in your terminal."
    )
    p.add_argument(
        "-d",
        "--dir",
        default=None,
        help="Directory holding the records (default: notes_dir from config, ~/.jotbox)",
    )
    p.add_argument(
        "--config",
        default=None,
        help=f"Path to YAML config (default: {DEFAULT_CONFIG})",
    )
    sub = p.add_subparsers(dest="cmd")

    s_list = sub.add_parser("list", help="Print entries (all categories by default)")
    s_list.add_argument("category", nargs="?", type=parse_category)
    s_list.add_argument("--fold", action="store_true", help="Hide descriptions and notes")
    s_list.set_defaults(func=cmd_list)

    s_add = sub.add_parser("add", help="Add an entry from field values in form order")
    s_add.add_argument("category", type=parse_category)
    s_add.add_argument("fields", nargs="+", help="e.g. for Task: TASK [DESCRIPTION] [TAGS]")
    s_add.set_defaults(func=cmd_add)

    s_toggle = sub.add_parser("toggle", help="Toggle a task between done and not done")
    s_toggle.add_argument("id", type=int)
    s_toggle.set_defaults(func=cmd_toggle)

    s_delete = sub.add_parser("delete", help="Delete an entry and its file")
    s_delete.add_argument("category", type=parse_category)
    s_delete.add_argument("id", type=int)
    s_delete.set_defaults(func=cmd_delete)

    s_path = sub.add_parser("path", help="Show the absolute path to the records directory")
    s_path.set_defaults(func=cmd_path)

    return p


def main(argv=None) -> None:
    """CLI entry point. Launches TUI if no subcommand given."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except JotboxError as err:
        sys.exit(f"jotbox: {err}")
    if args.dir:
        settings.notes_dir = os.path.expanduser(args.dir)
    setup_logging(settings.log_file, settings.log_level, to_stderr=args.cmd is not None)
    ensure_dir_exists(settings.notes_dir)

    try:
        if args.cmd is None:
            from .tui import main as tui_main

            tui_main(settings)
        else:
            args.func(args, settings)
    except JotboxError as err:
        logger.info("Command failed: {}", err)
        sys.exit(f"jotbox: {err}")


if __name__ == "__main__":
    main()
