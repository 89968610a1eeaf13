"""
AuctionFinder eBay UK field heuristics
Markers and small parsers for the cells of an eBay UK results table.
"""

import re
from typing import Optional

# Marketplace-specific markers
DETAIL_PAGE_MARKER = "ViewItem"
THUMBNAIL_PATTERNS = [
    re.compile(r"thumbs\.ebay\.com"),
    re.compile(r"thumbs\.ebay\.co\.uk"),
]
PICTURE_PLACEHOLDER_PATTERN = re.compile(r'alt="\[Picture!\]"', re.I)
BUY_IT_NOW_BADGE_PATTERN = re.compile(r'alt="BuyItNow"', re.I)
ITEM_NUMBER_PATTERN = re.compile(r"item=(\d+)")

# HTML whitespace, including the non-breaking space eBay pads cells with
HTML_WHITESPACE = r"[ \t\r\n\xa0]"

# Add new currencies here; anything else passes through unannotated
CURRENCY_MARKERS = [r"\$", "C", "EUR", "GBP", "£"]
CURRENCY = "(?:" + "|".join(CURRENCY_MARKERS) + ")"
BUY_IT_NOW_PATTERN = re.compile(
    rf"(\d){HTML_WHITESPACE}*({CURRENCY}{HTML_WHITESPACE}*[\d.,]+)"
)
NO_BIDS_PATTERN = re.compile(rf"\A{HTML_WHITESPACE}*-?{HTML_WHITESPACE}*\Z")

NO_BIDS = "no"
UNKNOWN_PRICE = "$unknown"
UNKNOWN_DATE = "unknown"


def is_listing_cell(markup: str) -> bool:
    """Check whether a serialized table cell holds listing content.

    Decoration cells (thumbnails, picture icons, Buy-It-Now badges) link to
    the item page too, so they are ruled out by what else they contain.
    """
    if DETAIL_PAGE_MARKER not in markup:
        return False
    if any(pattern.search(markup) for pattern in THUMBNAIL_PATTERNS):
        return False
    if PICTURE_PLACEHOLDER_PATTERN.search(markup):
        return False
    if BUY_IT_NOW_BADGE_PATTERN.search(markup):
        return False
    return True


def extract_item_number(url: str) -> Optional[int]:
    """Extract the item number from a ViewItem URL."""
    match = ITEM_NUMBER_PATTERN.search(url or "")
    if match:
        return int(match.group(1))
    return None


def normalize_bid_count(text: Optional[str]) -> str:
    """Blank cells and a lone hyphen both mean no bids."""
    if text is None or NO_BIDS_PATTERN.match(text):
        return NO_BIDS
    return text


def annotate_price(text: str) -> str:
    """Mark a trailing Buy-It-Now amount.

    '5$12.50' becomes '5 (Buy-It-Now for $12.50)'.
    """
    return BUY_IT_NOW_PATTERN.sub(r"\1 (Buy-It-Now for \2)", text, count=1)
