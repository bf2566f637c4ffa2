#!/usr/bin/env python3
"""
Apply or revert the asset_files migration.
Runs in a single transaction; any failure rolls everything back.

Usage:
    python -m scripts.migrate_asset_files [--down]
"""
import os
import sys
import argparse

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import logger
from migrations import add_asset_files_table


def run_migration(direction: str = "up", bind=None) -> None:
    """Run the migration in one transaction on `bind` (defaults to the app engine)"""
    if direction not in ("up", "down"):
        raise ValueError(f"unknown direction: {direction}")
    if bind is None:
        from core.database import engine
        bind = engine

    step = add_asset_files_table.up if direction == "up" else add_asset_files_table.down
    logger.info(f"[migration] {add_asset_files_table.NAME} {direction}: starting")
    try:
        with bind.begin() as conn:
            step(conn)
    except Exception as ex:
        logger.error(f"[migration] {add_asset_files_table.NAME} {direction} failed: {ex}")
        raise
    logger.info(f"[migration] {add_asset_files_table.NAME} {direction}: done")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Move preview/thumbnail paths into asset_files")
    parser.add_argument("--down", action="store_true", help="Revert the migration")
    args = parser.parse_args()

    try:
        run_migration("down" if args.down else "up")
    except Exception:
        sys.exit(1)
