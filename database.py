"""
AuctionFinder Database Module
SQLite operations for tracking seen auction listings.
"""

import sqlite3
from datetime import datetime, timedelta
from typing import Set, List, Optional
from dataclasses import dataclass

from config import DATABASE_FILE


@dataclass(frozen=True)
class ListingRecord:
    """One auction entry parsed from a search results page."""
    url: str
    title: str
    item_number: Optional[int] = None
    bid_count: str = "no"
    price: str = "$unknown"
    change_date: str = "unknown"
    raw_fragment: str = ""

    @property
    def id(self) -> str:
        """Stable key: the item number when known, otherwise the URL."""
        if self.item_number is not None:
            return str(self.item_number)
        return self.url

    @property
    def description(self) -> str:
        """Human-readable summary, e.g. 'Item #123; 2 bids; current bid £5.00'."""
        item = "" if self.item_number is None else self.item_number
        desc = f"Item #{item}; {self.bid_count} bid"
        if self.bid_count != "1":
            desc += "s"
        state = "current" if self.bid_count != "no" else "starting"
        return f"{desc}; {state} bid {self.price}"


def get_connection():
    """Get a database connection."""
    return sqlite3.connect(DATABASE_FILE)


def ensure_schema():
    """Create the listings table if it doesn't exist."""
    conn = get_connection()
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS listings (
            id TEXT PRIMARY KEY,
            url TEXT NOT NULL,
            title TEXT NOT NULL,
            item_number INTEGER,
            bid_count TEXT,
            price TEXT,
            change_date TEXT,
            description TEXT,
            first_seen TEXT NOT NULL
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_first_seen ON listings(first_seen)")

    conn.commit()
    conn.close()


def get_seen_ids() -> Set[str]:
    """
    Get set of already-seen listing IDs.

    Returns:
        Set of listing IDs (see ListingRecord.id)
    """
    ensure_schema()
    conn = get_connection()
    cursor = conn.cursor()

    cursor.execute("SELECT id FROM listings")

    rows = cursor.fetchall()
    conn.close()

    return set(row[0] for row in rows)


def store_listings(listings: List[ListingRecord]) -> int:
    """
    Store new listings in the database.

    Args:
        listings: List of ListingRecord objects to store

    Returns:
        Number of new listings stored
    """
    if not listings:
        return 0

    ensure_schema()
    conn = get_connection()
    cursor = conn.cursor()

    stored = 0
    now = datetime.now().isoformat()

    for listing in listings:
        try:
            cursor.execute(
                """
                INSERT INTO listings (id, url, title, item_number, bid_count, price,
                                      change_date, description, first_seen)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    listing.id,
                    listing.url,
                    listing.title,
                    listing.item_number,
                    listing.bid_count,
                    listing.price,
                    listing.change_date,
                    listing.description,
                    now
                )
            )
            stored += 1
        except sqlite3.IntegrityError:
            # Duplicate ID, skip
            pass

    conn.commit()
    conn.close()

    return stored


def cleanup_old_listings(days: int = 14) -> int:
    """
    Remove listings older than specified days.

    Args:
        days: Number of days to keep listings

    Returns:
        Number of listings removed
    """
    ensure_schema()
    conn = get_connection()
    cursor = conn.cursor()

    cutoff = (datetime.now() - timedelta(days=days)).isoformat()

    cursor.execute("SELECT COUNT(*) FROM listings WHERE first_seen < ?", (cutoff,))
    count = cursor.fetchone()[0]

    cursor.execute("DELETE FROM listings WHERE first_seen < ?", (cutoff,))

    conn.commit()
    conn.close()

    return count


def get_listing_count() -> int:
    """Get total number of stored listings."""
    ensure_schema()
    conn = get_connection()
    cursor = conn.cursor()

    cursor.execute("SELECT COUNT(*) FROM listings")
    count = cursor.fetchone()[0]
    conn.close()

    return count
