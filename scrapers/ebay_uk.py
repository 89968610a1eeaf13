"""
AuctionFinder eBay UK Scraper
requests-based search driver that follows eBay UK result pages.
"""

import logging
import time
from typing import Dict, List, Set, Optional
from urllib.parse import urlencode

import requests

from .base import BaseScraper, PaginationError
from .ebay_page import interpret_page
from database import ListingRecord
from config import (
    EBAY_SEARCH_URL,
    SEARCH_DEBUG,
    MAX_PAGES,
    REQUEST_TIMEOUT_SECONDS,
    REQUEST_DELAY_SECONDS,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class EbayUKScraper(BaseScraper):
    """Scraper for current auctions on www.ebay.co.uk, youngest first."""

    def __init__(self, session=None, debug: int = SEARCH_DEBUG, max_pages: int = MAX_PAGES,
                 delay: float = REQUEST_DELAY_SECONDS):
        """
        Initialize eBay UK scraper.

        Args:
            session: Optional requests.Session (or compatible) to fetch with
            debug: Verbosity tier passed through to the page interpreter
            max_pages: Stop following next links after this many pages
            delay: Seconds to wait between page requests
        """
        super().__init__("ebay_uk")
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.debug = debug
        self.max_pages = max_pages
        self.delay = delay
        self.approximate_result_count: Optional[int] = None
        self.results_seen = 0

    def _build_search_url(self, query: str, search_description: bool = False,
                          options: Optional[Dict[str, str]] = None) -> str:
        """Build the first results page URL for a query."""
        params = {
            "MfcISAPICommand": "GetResult",
            "ht": 1,
            "SortProperty": "MetaNewSort",  # Youngest auctions first
            "query": query,
        }
        if search_description:
            params["srchdesc"] = "y"
        if options:
            params.update({k: v for k, v in options.items() if v is not None})
        return f"{EBAY_SEARCH_URL}?{urlencode(params)}"

    def _fetch(self, url: str) -> str:
        """Fetch one results page."""
        logger.debug(f"Fetching {url}")
        response = self.session.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text

    def get_listings(self, query: str, seen_ids: Optional[Set[str]] = None,
                     search_description: bool = False,
                     options: Optional[Dict[str, str]] = None) -> List[ListingRecord]:
        """
        Search eBay UK and follow the result pages.

        Args:
            query: Search terms (matched against titles)
            seen_ids: Optional set of listing IDs already in database.
                      Results are newest-first, so the first known ID ends the search.
            search_description: Also match item descriptions
            options: Extra query-string options copied into the search URL

        Returns:
            List of ListingRecord objects in page order
        """
        url = self._build_search_url(query, search_description, options)
        listings = []
        pages = 0
        self.approximate_result_count = None
        self.results_seen = 0

        while url and pages < self.max_pages:
            pages += 1
            logger.info(f"Searching eBay UK: '{query}' page {pages}")

            try:
                html = self._fetch(url)
            except requests.RequestException as e:
                logger.error(f"Error fetching page {pages} for '{query}': {e}")
                url = None
                break

            try:
                result = interpret_page(html, url, self.debug)
                next_url = result.next_url
            except PaginationError as e:
                logger.error(f"Could not resolve next page for '{query}': {e}")
                result = e.partial
                next_url = None

            if self.approximate_result_count is None and result.approximate_count is not None:
                self.approximate_result_count = result.approximate_count
                logger.info(f"eBay UK '{query}': about {result.approximate_count} items found")

            for record in result.records:
                # Early stop: everything below a known listing is older
                if seen_ids and record.id in seen_ids:
                    logger.debug(f"Early stop: hit known listing {record.id}")
                    next_url = None
                    break
                listings.append(record)
                self.results_seen += 1

            logger.debug(f"eBay UK '{query}': {len(result.records)} listings parsed on page {pages}")

            url = next_url
            if url and self.delay:
                time.sleep(self.delay)

        if url:
            logger.warning(f"Stopped '{query}' after {self.max_pages} pages")

        logger.info(f"eBay UK: Found {len(listings)} new listings for '{query}'")
        return listings

    def close(self):
        """Close the HTTP session."""
        try:
            if self._owns_session and self.session:
                self.session.close()
            logger.info("eBay UK session closed")
        except Exception as e:
            logger.error(f"Error closing eBay UK session: {e}")
