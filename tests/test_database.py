from database import (
    ListingRecord,
    ensure_schema,
    get_seen_ids,
    store_listings,
    cleanup_old_listings,
    get_listing_count,
)


def _record(item, url=None):
    return ListingRecord(
        url=url or f"http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem&item={item}",
        title=f"Item {item}",
        item_number=item,
        bid_count="2",
        price="£1.50",
        change_date="01-Mar 10:00",
    )


def test_store_and_seen_ids(temp_db):
    ensure_schema()
    assert store_listings([_record(1), _record(2)]) == 2
    assert get_seen_ids() == {"1", "2"}
    assert get_listing_count() == 2


def test_duplicates_are_skipped(temp_db):
    store_listings([_record(1)])
    assert store_listings([_record(1), _record(3)]) == 1
    assert get_listing_count() == 2


def test_record_without_item_number_keyed_by_url(temp_db):
    record = ListingRecord(url="http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem", title="odd")
    store_listings([record])
    assert get_seen_ids() == {"http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem"}


def test_store_nothing(temp_db):
    assert store_listings([]) == 0


def test_cleanup(temp_db):
    store_listings([_record(1)])
    assert cleanup_old_listings(days=30) == 0
    assert cleanup_old_listings(days=-1) == 1
    assert get_listing_count() == 0
