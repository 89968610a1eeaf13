"""
AuctionFinder eBay UK page interpreter
BeautifulSoup-based parsing of one eBay UK search results page.

The results table carries no class names or ids: a listing is a <td> whose
<font> holds the ViewItem link, and the price, bid count and start date sit
in the sibling cells to its right.
"""

import re
import logging
from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from .base import PageResult, PaginationError
from .ebay_fields import (
    DETAIL_PAGE_MARKER,
    HTML_WHITESPACE,
    UNKNOWN_PRICE,
    UNKNOWN_DATE,
    NO_BIDS,
    is_listing_cell,
    extract_item_number,
    normalize_bid_count,
    annotate_price,
)
from database import ListingRecord
from config import DEBUG_NONE, DEBUG_TRACE, DEBUG_DUMP

logger = logging.getLogger(__name__)

# eBay closes some cells twice; collapse any run of pairs into one
DOUBLE_CLOSE_PATTERN = re.compile(r"(?:</font></td>){2,}", re.I)
HIT_COUNT_PATTERN = re.compile(r"(\d[\d,]*) items found")
NEXT_LINK_PATTERN = re.compile(rf"Next{HTML_WHITESPACE}+(?:>|&gt;|»|&raquo;)", re.I)
EMPHASIS_TAG = "font"


def normalize_markup(html: str, debug: int = DEBUG_NONE) -> str:
    """Repair the malformed closing tags eBay sends before parsing."""
    html, subs = DOUBLE_CLOSE_PATTERN.subn(lambda m: m.group(0)[:12], html)
    if debug >= DEBUG_TRACE:
        logger.debug(f"Deleted {subs} extraneous tag sequences")
    if debug >= DEBUG_DUMP:
        logger.debug(f"RawHTML ===>{html}<=== RawHTML")
    return html


def scan_hit_count(soup: BeautifulSoup, debug: int = DEBUG_NONE) -> Optional[int]:
    """Find the 'N items found' banner. First match wins."""
    for font in soup.find_all(EMPHASIS_TAG):
        text = font.get_text()
        if debug >= DEBUG_TRACE:
            logger.debug(f"Try FONT ==={text}===")
        match = HIT_COUNT_PATTERN.search(text)
        if match:
            return int(match.group(1).replace(",", ""))
    return None


def _parse_row(td: Tag, debug: int) -> Optional[ListingRecord]:
    """Build a record from one candidate cell, or None if it isn't a listing."""
    font = td.find(EMPHASIS_TAG)
    if font is None:
        return None
    link = font.find("a")
    if link is None:
        return None
    url = link.get("href") or ""
    if DETAIL_PAGE_MARKER not in url:
        return None

    raw = str(td)
    if debug >= DEBUG_TRACE:
        logger.debug(f"TD ==={raw}===")

    price, bids, date = UNKNOWN_PRICE, NO_BIDS, UNKNOWN_DATE

    # Price, then bid count, then (last) the start date
    siblings = [s for s in td.next_siblings if isinstance(s, Tag)]
    if siblings:
        cell = siblings.pop(0)
        if debug >= DEBUG_TRACE:
            logger.debug(f"TDprice ==={cell}===")
        price = annotate_price(cell.get_text())
    if siblings:
        cell = siblings.pop(0)
        if debug >= DEBUG_TRACE:
            logger.debug(f"TDbids ==={cell}===")
        bids = cell.get_text()
    bids = normalize_bid_count(bids).strip()
    if siblings:
        cell = siblings.pop()
        if debug >= DEBUG_TRACE:
            logger.debug(f"TDdate ==={cell}===")
        date = cell.get_text().strip()

    return ListingRecord(
        url=url,
        title=link.get_text().strip(),
        item_number=extract_item_number(url),
        bid_count=bids,
        price=price,
        change_date=date,
        raw_fragment=raw,
    )


def extract_rows(soup: BeautifulSoup, debug: int = DEBUG_NONE) -> Tuple[List[ListingRecord], int]:
    """
    Extract listing records from the results table.

    Each consumed cell is removed from the tree. The candidate list is a
    snapshot taken before any removal; cells nested inside an already
    removed cell are skipped.

    Returns:
        Tuple of (records in page order, number of rows found)
    """
    candidates = [td for td in soup.find_all("td") if is_listing_cell(str(td))]
    records = []
    found = 0

    for td in candidates:
        if td.decomposed:
            continue
        record = _parse_row(td, debug)
        if record is None:
            continue
        records.append(record)
        found += 1
        td.decompose()

    return records, found


def resolve_next_url(soup: BeautifulSoup, page_url: str, debug: int = DEBUG_NONE) -> Optional[str]:
    """
    Find the 'Next >' link and make it absolute.

    Links are scanned from the end of the page. Reaching a ViewItem link
    means the scan is back inside the listings, so there is no pager.

    Raises:
        PaginationError: if the link cannot be resolved against page_url
    """
    for link in reversed(soup.find_all("a")):
        if debug >= DEBUG_TRACE:
            logger.debug(f"Try NEXT A ==={link}===")
        href = link.get("href")
        if not href:
            continue
        if DETAIL_PAGE_MARKER in href:
            break
        if NEXT_LINK_PATTERN.search(link.get_text()):
            try:
                next_url = urljoin(page_url, href)
                parsed = urlparse(next_url)
            except ValueError as e:
                raise PaginationError(f"Cannot resolve {href!r} against {page_url!r}: {e}") from e
            if not parsed.scheme or not parsed.netloc:
                raise PaginationError(f"Next link {href!r} is not absolute against {page_url!r}")
            if debug >= DEBUG_TRACE:
                logger.debug(f"Got NEXT A ==={next_url}===")
            return next_url
    return None


def interpret_page(html: str, page_url: str, debug: int = DEBUG_NONE) -> PageResult:
    """
    Interpret one results page.

    Args:
        html: Raw page text
        page_url: URL the page was fetched from, used to resolve the next link
        debug: Verbosity tier (see config.DEBUG_*)

    Returns:
        PageResult with the page's records, hit count and next-page URL

    Raises:
        ValueError: if html is None
        PaginationError: if the next link is unresolvable; ``partial`` holds
            the rows already extracted
    """
    if html is None:
        raise ValueError("No page text to interpret")

    soup = BeautifulSoup(normalize_markup(html, debug), "html.parser")
    if debug >= DEBUG_DUMP:
        logger.debug(f"HTML tree dump:\n{soup.prettify()}")

    result = PageResult(approximate_count=scan_hit_count(soup, debug))
    result.records, found = extract_rows(soup, debug)
    if debug >= DEBUG_TRACE:
        logger.debug(f"Found {found} rows on {page_url}")

    try:
        result.next_url = resolve_next_url(soup, page_url, debug)
    except PaginationError as e:
        e.partial = result
        raise
    return result
