"""AuctionFinder Scrapers Package"""

from .base import BaseScraper, PageResult, PaginationError
from .ebay_page import interpret_page
from .ebay_uk import EbayUKScraper

__all__ = ["BaseScraper", "PageResult", "PaginationError", "interpret_page", "EbayUKScraper"]
