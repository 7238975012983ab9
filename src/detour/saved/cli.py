"""CLI for browsing saved detours in the terminal."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import math
import os
import sys

from detour.saved.rows import DetourRow
from detour.saved.settings import SettingsManager
from detour.saved.store import DetourStore, StorageError
from detour.saved.types import DETOUR_STATUSES, detour_to_dict
from detour.virtual.components.virtual_list import VirtualList
from detour.virtual.errors import VirtualizationError
from detour.virtual.keys import key_by_field

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="detours", description="Browse saved detours")
    parser.add_argument("--store", help="Saved detours JSON file (default from settings)")
    parser.add_argument("--cwd", default=os.getcwd(), help="Project directory for settings")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="Render a window of saved detours")
    ls.add_argument("--offset", type=int, default=0, help="Scroll offset in rows")
    ls.add_argument("--rows", type=int, help="Viewport height in rows")
    ls.add_argument("--width", type=int, default=80, help="Viewport width in columns")
    ls.add_argument("--item-height", type=int, help="Rows per detour")
    ls.add_argument("--overscan", type=int, help="Extra detours rendered beyond the viewport")

    show = sub.add_parser("show", help="Print one saved detour as JSON")
    show.add_argument("id")

    rm = sub.add_parser("remove", help="Delete a saved detour")
    rm.add_argument("id")

    status = sub.add_parser("status", help="Mark a detour planned or completed")
    status.add_argument("id")
    status.add_argument("status", choices=DETOUR_STATUSES)

    sub.add_parser("clear", help="Delete all saved detours")
    return parser.parse_args(argv)


async def run_list(store: DetourStore, settings: SettingsManager, args: argparse.Namespace) -> None:
    detours = await store.list_detours()
    if not detours:
        print("No saved detours.")
        return

    settings.apply_overrides(
        {
            "itemHeight": args.item_height,
            "viewportHeight": args.rows,
            "overscanItems": args.overscan,
        }
    )
    view = VirtualList(
        detours,
        DetourRow(),
        item_height=settings.get_item_height(),
        viewport_height=settings.get_viewport_height(),
        overscan_items=settings.get_overscan_items(),
        key_extractor=key_by_field("id"),
    )
    view.scroll_to(args.offset)
    for line in view.render(args.width):
        print(line.rstrip())

    output = view.last_output
    logger.debug(
        "Rendered %d of %d detours (keys %s)",
        len(output.visible_items),
        output.item_count,
        ", ".join(output.keys),
    )
    first = view.scroll_offset // view.item_height + 1
    last = min(len(detours), math.ceil((view.scroll_offset + view.viewport_height) / view.item_height))
    print(f"({first}-{last}/{len(detours)})")


async def run(args: argparse.Namespace) -> int:
    settings = SettingsManager.create(args.cwd)
    if settings.load_error:
        logger.warning("Ignoring unreadable settings: %s", settings.load_error)
    store = DetourStore(args.store or settings.get_store_path())

    if args.command == "list":
        await run_list(store, settings, args)
    elif args.command == "show":
        detour = await store.get_detour(args.id)
        if detour is None:
            print(f"Error: no saved detour {args.id!r}", file=sys.stderr)
            return 1
        print(json.dumps(detour_to_dict(detour), indent=2, ensure_ascii=False))
    elif args.command == "remove":
        remaining = await store.remove_detour(args.id)
        print(f"{len(remaining)} saved detours left.")
    elif args.command == "status":
        detour = await store.update_status(args.id, args.status)
        if detour is None:
            print(f"Error: no saved detour {args.id!r}", file=sys.stderr)
            return 1
        print(f"{detour.name}: {detour.status}")
    elif args.command == "clear":
        await store.clear_all()
        print("Cleared saved detours.")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        code = asyncio.run(run(args))
    except (StorageError, VirtualizationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
