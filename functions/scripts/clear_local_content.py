"""
Remove portfolio content from local storage, e.g. after a successful migration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.config import get_settings
from portfolio.dependencies import get_local_store
from portfolio.registry import ALL_CONTENT_TYPES, get_content_type

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Clear locally stored portfolio content")
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        choices=[content_type.name for content_type in ALL_CONTENT_TYPES],
        help="Content type to clear (repeatable, default: all)",
    )
    parser.add_argument(
        "--local-dir",
        type=str,
        default=None,
        help="Override the local storage directory",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the keys that would be removed without removing them",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    if args.local_dir:
        get_settings().local_storage_dir = args.local_dir

    content_types = (
        [get_content_type(name) for name in args.types]
        if args.types
        else ALL_CONTENT_TYPES
    )
    local = get_local_store()

    if args.dry_run:
        present = set(local.storage.keys())
        for content_type in content_types:
            if content_type.local_key in present:
                logger.info("Would remove %s", content_type.local_key)
        return 0

    removed = local.clear(content_types)
    for key in removed:
        logger.info("Removed %s", key)
    logger.info("Cleared %d local key(s)", len(removed))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
