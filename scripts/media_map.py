#!/usr/bin/env python3
# =============================================================================
# scripts/media_map.py - Media Map Maintenance CLI
# =============================================================================
# Operator commands for the placeholder inventory.
#
# Usage:
#   # Scan the pages tree and write the media map
#   python scripts/media_map.py generate --pages-dir site/pages
#
#   # Upsert the map's placeholders into Supabase (batches of 50)
#   python scripts/media_map.py sync
#
#   # Report duplicate IDs (exit 1 if any)
#   python scripts/media_map.py check-duplicates
#
#   # Rename duplicates, move their links, save the map
#   python scripts/media_map.py fix-duplicates
#
# Exit codes: 0 success, 1 duplicates found (check) or unrecoverable error.
#
# Prerequisites:
#   - Environment variables must be set (.env file) for sync/fix-duplicates
# =============================================================================

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from core.services.media_map_service import MediaMapService
from lib.utils import ApplicationError

logger = logging.getLogger("media_map")


def _get_store():
    from lib.supabase_client import SupabaseClient

    return SupabaseClient


def cmd_generate(args: argparse.Namespace) -> int:
    summary = MediaMapService.generate(args.pages_dir, args.map)
    print(
        f"Wrote {summary.path}: {summary.pages} pages, {summary.sections} sections, "
        f"{summary.placeholders} placeholders ({summary.renamed} renamed)"
    )
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    summary = MediaMapService.sync(args.map, _get_store(), batch_size=args.batch_size)
    print(f"Synced {summary.written}/{summary.total} placeholders in {summary.batches} batch(es)")
    if not summary.ok:
        print(f"Failed batches: {summary.failed_batches}")
        return 1
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    conflicts = MediaMapService.check(args.map)
    if not conflicts:
        print("No duplicate IDs found")
        return 0

    print(f"Found {len(conflicts)} duplicate ID(s):")
    for conflict in conflicts:
        print(f'  "{conflict.id}" appears {conflict.count} times')
        for loc in conflict.locations:
            print(f"    - {loc.page} / {loc.section}")
    return 1


def cmd_fix(args: argparse.Namespace) -> int:
    result = MediaMapService.fix(args.map, _get_store())
    if not result.repair.changed:
        print("No duplicate IDs found")
        return 0

    for rename in result.report.applied:
        print(f"  {rename.old_id} -> {rename.new_id}")
    for rename, error in result.report.failed:
        print(f"  FAILED {rename.old_id} -> {rename.new_id}: {error}")
    print(
        f"Applied {len(result.report.applied)} rename(s), "
        f"{len(result.report.failed)} failed"
    )
    # Per-ID failures are retried on the next run; nothing applied means the
    # store was unreachable
    return 0 if result.report.applied else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maintain the media placeholder map")
    parser.add_argument("--map", default=settings.MEDIA_MAP_PATH,
                        help="Path to the media map JSON file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Discover placeholders and write the map")
    generate.add_argument("--pages-dir", default=settings.PAGES_DIR,
                          help="Root of the site's pages tree")
    generate.set_defaults(func=cmd_generate)

    sync = subparsers.add_parser("sync", help="Upsert map placeholders into Supabase")
    sync.add_argument("--batch-size", type=int, default=50)
    sync.set_defaults(func=cmd_sync)

    check = subparsers.add_parser("check-duplicates", help="Report duplicate placeholder IDs")
    check.set_defaults(func=cmd_check)

    fix = subparsers.add_parser("fix-duplicates", help="Rename duplicate IDs and move their links")
    fix.set_defaults(func=cmd_fix)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        return args.func(args)
    except ApplicationError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
