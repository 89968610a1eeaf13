"""
AuctionFinder Base Scraper
Abstract base class for paginated marketplace search scrapers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Set, Optional

from database import ListingRecord


@dataclass
class PageResult:
    """Everything interpreted from one results page."""
    records: List[ListingRecord] = field(default_factory=list)
    approximate_count: Optional[int] = None
    next_url: Optional[str] = None


class PaginationError(ValueError):
    """The next-page link could not be resolved to an absolute URL.

    ``partial`` holds the PageResult built before resolution failed, so the
    rows of the current page are not lost.
    """

    def __init__(self, message: str, partial: Optional[PageResult] = None):
        super().__init__(message)
        self.partial = partial


class BaseScraper(ABC):
    """Abstract base class for marketplace scrapers."""

    def __init__(self, platform: str):
        """
        Initialize the scraper.

        Args:
            platform: Platform identifier (e.g., 'ebay_uk')
        """
        self.platform = platform

    @abstractmethod
    def get_listings(self, query: str, seen_ids: Optional[Set[str]] = None) -> List[ListingRecord]:
        """
        Run a search and follow its result pages.

        Args:
            query: Search terms
            seen_ids: Optional set of listing IDs already in database.
                      If provided, scraper will stop early when it hits a known ID.

        Returns:
            List of ListingRecord objects (only new ones if seen_ids provided)
        """
        pass

    @abstractmethod
    def close(self):
        """Clean up any resources (sessions, connections, etc.)."""
        pass
