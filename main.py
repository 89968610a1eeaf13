"""
AuctionFinder - eBay UK Auction Monitor
Main entry point and orchestration loop.
"""

import sys
import time
import signal
import logging
import argparse
from datetime import datetime
from typing import List

from config import (
    LOG_FILE,
    CHECK_INTERVAL_SECONDS,
    RETENTION_DAYS,
    SEARCH_TERMS,
    SEARCH_DEBUG,
    MAX_PAGES,
    DEBUG_NONE,
)
from database import ensure_schema, get_seen_ids, store_listings, cleanup_old_listings, get_listing_count
from scrapers import EbayUKScraper

logger = logging.getLogger("AuctionFinder")


# Global flag for graceful shutdown
running = True


def setup_logging(debug: int = DEBUG_NONE):
    """Log to file and stdout; debug tiers lower the level to DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if debug > DEBUG_NONE else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler(sys.stdout),
        ],
    )


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    global running
    if not running:
        # Second Ctrl+C = force exit immediately
        logger.info("Force exit...")
        sys.exit(1)
    logger.info("Shutdown signal received, stopping... (press Ctrl+C again to force)")
    running = False


def run_search(queries: List[str], scraper: EbayUKScraper, search_description: bool = False,
               store: bool = True) -> int:
    """
    Run each query once and print what was found.

    Returns:
        Number of listings found
    """
    seen_ids = get_seen_ids() if store else None
    total = 0

    for query in queries:
        listings = scraper.get_listings(query, seen_ids, search_description=search_description)
        for listing in listings:
            print(f"{listing.title}\n  {listing.url}\n  {listing.description}; started {listing.change_date}")
        if store:
            stored = store_listings(listings)
            logger.info(f"Stored {stored} listings in database")
        total += len(listings)

    if scraper.approximate_result_count is not None:
        logger.info(f"eBay reported about {scraper.approximate_result_count} matching items")
    return total


def run_monitor(queries: List[str], scraper: EbayUKScraper, search_description: bool = False):
    """
    Main monitoring loop.

    Args:
        queries: Search terms to poll
        scraper: Scraper used for every check
        search_description: Also match item descriptions
    """
    global running

    logger.info("=" * 50)
    logger.info("AuctionFinder Starting")
    logger.info("=" * 50)

    logger.info("Initializing database...")
    ensure_schema()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Monitoring {queries}. Check interval: {CHECK_INTERVAL_SECONDS}s")
    logger.info("Press Ctrl+C to stop")

    check_count = 0
    last_cleanup = datetime.now()

    try:
        while running:
            check_count += 1
            logger.info(f"--- Check #{check_count} at {datetime.now().strftime('%H:%M:%S')} ---")

            total_new = 0
            for query in queries:
                if not running:
                    break
                try:
                    # Get seen IDs upfront so scraper can stop early
                    seen_ids = get_seen_ids()
                    new_listings = scraper.get_listings(query, seen_ids, search_description=search_description)

                    if not new_listings:
                        logger.debug(f"'{query}': No new listings")
                        continue

                    for listing in new_listings:
                        logger.info(f"New: {listing.title} | {listing.description} | {listing.url}")

                    stored = store_listings(new_listings)
                    logger.info(f"Stored {stored} listings in database")
                    total_new += len(new_listings)

                except Exception as e:
                    logger.error(f"Error searching '{query}': {e}", exc_info=True)

            logger.info(f"Total new this check: {total_new} | DB total: {get_listing_count()}")

            # Daily cleanup (every 24 hours)
            hours_since_cleanup = (datetime.now() - last_cleanup).total_seconds() / 3600
            if hours_since_cleanup >= 24:
                removed = cleanup_old_listings(days=RETENTION_DAYS)
                logger.info(f"Cleanup: removed {removed} old listings")
                last_cleanup = datetime.now()

            # Wait for next check (use short sleeps so Ctrl+C responds quickly)
            if running:
                logger.debug(f"Sleeping {CHECK_INTERVAL_SECONDS}s until next check...")
                for _ in range(CHECK_INTERVAL_SECONDS):
                    if not running:
                        break
                    time.sleep(1)

    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        logger.info("AuctionFinder stopped")


def main():
    """Entry point with argument parsing."""
    parser = argparse.ArgumentParser(description="AuctionFinder - eBay UK Auction Monitor")
    parser.add_argument("queries", nargs="*", help="Search terms (defaults to SEARCH_TERMS)")
    parser.add_argument("--desc", action="store_true", help="Search titles and descriptions")
    parser.add_argument(
        "--debug",
        type=int,
        choices=[0, 1, 2],
        default=SEARCH_DEBUG,
        help="0 = quiet, 1 = trace parsing, 2 = also dump raw page markup",
    )
    parser.add_argument("--max-pages", type=int, default=MAX_PAGES, help="Result pages to follow per query")
    parser.add_argument("--monitor", action="store_true", help="Keep polling for new auctions")
    parser.add_argument("--no-store", action="store_true", help="Don't record results in the database")

    args = parser.parse_args()
    setup_logging(args.debug)

    queries = args.queries or SEARCH_TERMS
    scraper = EbayUKScraper(debug=args.debug, max_pages=args.max_pages)
    try:
        if args.monitor:
            run_monitor(queries, scraper, search_description=args.desc)
        else:
            run_search(queries, scraper, search_description=args.desc, store=not args.no_store)
    finally:
        scraper.close()


if __name__ == "__main__":
    main()
