#!/usr/bin/env python
"""Script to manually run poll cycles.

Usage:
    python scripts/run_cycle.py [--feed URL ...] [--cycles N]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from rsspoll.config.settings import settings
from rsspoll.main import create_fetcher, create_poll_service
from rsspoll.utils.logger import configure_logging, get_logger


async def main(feeds: list[str], cycles: int, interval: float):
    """Run poll cycles back to back against the given feeds."""
    configure_logging(log_level=settings.log_level)
    logger = get_logger("run_cycle")

    fetcher = create_fetcher(settings)
    poll_service = create_poll_service(settings, fetcher)
    if feeds:
        poll_service.set_sources(feeds)

    logger.info("Running poll cycles", cycles=cycles, source_count=len(poll_service.sources))

    for i in range(cycles):
        if i:
            await asyncio.sleep(interval)
        stats = await poll_service.run_cycle()
        print(f"\nCycle {stats['cycle']}:")
        print(f"  items fetched: {stats['items_fetched']}")
        print(f"  new items: {len(stats['new_links'])}")
        print(f"  notification status: {stats['notification_status']}")
        for error in stats["errors"]:
            print(f"  error: {error}")


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Run rsspoll cycles manually")
    arg_parser.add_argument(
        "--feed",
        action="append",
        default=[],
        help="Feed URL to poll (repeatable, defaults to FEED_URLS)",
    )
    arg_parser.add_argument("--cycles", type=int, default=1, help="Number of cycles to run")
    arg_parser.add_argument(
        "--interval",
        type=float,
        default=settings.poll_interval_seconds,
        help="Seconds to wait between cycles",
    )
    args = arg_parser.parse_args()

    asyncio.run(main(args.feed, args.cycles, args.interval))
