"""Backfill overall_progress for stored vision boards.

Boards written under older completion rules (the completed flag alone) carry
stale values. This recomputes every board with the current rules.

Usage:
    python scripts/recompute_progress.py \\
        --mongodb-url mongodb://localhost:27017 \\
        [--db-name visionboard] [--user-id <user-id>] [--dry-run]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from app.utils.progress import recompute_overall_progress

logger = logging.getLogger("recompute_progress")


class ProgressBackfill:
    """Recomputes and stores overall progress for every matching board."""

    def __init__(self, mongodb_url: str, db_name: str, user_id: Optional[str], dry_run: bool):
        self.mongodb_url = mongodb_url
        self.db_name = db_name
        self.user_id = user_id
        self.dry_run = dry_run
        self.stats = {"total": 0, "changed": 0, "unchanged": 0}

    async def run(self) -> dict:
        """Scan boards and fix stale progress values."""
        client = AsyncIOMotorClient(self.mongodb_url)
        boards = client[self.db_name]["vision_boards"]
        query = {"user_id": self.user_id} if self.user_id else {}

        try:
            async for doc in boards.find(query):
                self.stats["total"] += 1
                fresh = recompute_overall_progress(doc)
                stored = doc.get("overall_progress")

                if stored == fresh:
                    self.stats["unchanged"] += 1
                    continue

                self.stats["changed"] += 1
                logger.info("Board %s: %s -> %s", doc["_id"], stored, fresh)
                if not self.dry_run:
                    await boards.update_one(
                        {"_id": doc["_id"]},
                        {"$set": {"overall_progress": fresh}},
                    )
        finally:
            client.close()

        return self.stats


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Recompute vision board progress")
    parser.add_argument(
        "--mongodb-url",
        default="mongodb://localhost:27017",
        help="MongoDB connection URL",
    )
    parser.add_argument("--db-name", default="visionboard", help="Database name")
    parser.add_argument("--user-id", help="Only recompute this user's boards")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report changes without writing them",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    backfill = ProgressBackfill(
        mongodb_url=args.mongodb_url,
        db_name=args.db_name,
        user_id=args.user_id,
        dry_run=args.dry_run,
    )
    stats = await backfill.run()

    mode = "DRY RUN" if args.dry_run else "APPLIED"
    logger.info(
        "%s: %s boards scanned, %s changed, %s unchanged",
        mode,
        stats["total"],
        stats["changed"],
        stats["unchanged"],
    )


if __name__ == "__main__":
    asyncio.run(main())
