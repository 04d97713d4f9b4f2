"""
Copy content saved in local storage into the remote database.

Safe to re-run: rows are upserted by id and local data is left in place.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.config import get_settings
from portfolio.dependencies import get_local_store, get_remote_store, remote_enabled
from portfolio.migration import DEFAULT_BATCH_SIZE, migrate_local_to_remote
from portfolio.registry import ALL_CONTENT_TYPES, get_content_type

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Migrate locally stored portfolio content to the remote database"
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        choices=[content_type.name for content_type in ALL_CONTENT_TYPES],
        help="Content type to migrate (repeatable, default: all)",
    )
    parser.add_argument(
        "--local-dir",
        type=str,
        default=None,
        help="Override the local storage directory",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help="Rows per upsert call",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    if args.local_dir:
        get_settings().local_storage_dir = args.local_dir

    if not remote_enabled():
        logger.error(
            "Remote backend is not configured; set PORTFOLIO_REMOTE_URL and "
            "PORTFOLIO_REMOTE_KEY"
        )
        return 1
    remote = get_remote_store()
    if remote is None:
        logger.error("Remote backend could not be set up")
        return 1

    content_types = (
        [get_content_type(name) for name in args.types]
        if args.types
        else ALL_CONTENT_TYPES
    )
    report = migrate_local_to_remote(
        get_local_store(),
        remote,
        content_types,
        batch_size=args.batch_size,
    )
    print(json.dumps(report.as_dict(), indent=2))
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
