import pytest

from database import ListingRecord
from scrapers.ebay_fields import (
    is_listing_cell,
    extract_item_number,
    normalize_bid_count,
    annotate_price,
)

LINK = '<a href="http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem&amp;item=42">'


def test_listing_cell_needs_detail_link():
    assert is_listing_cell(f"<td><font>{LINK}Pocket watch</a></font></td>")
    assert not is_listing_cell('<td><font><a href="/help">Help</a></font></td>')


@pytest.mark.parametrize("decoration", [
    '<img src="http://thumbs.ebay.com/pict/42.jpg">',
    '<img src="http://thumbs.ebay.co.uk/pict/42.jpg">',
    '<img alt="[Picture!]" src="/pic.gif">',
    '<img ALT="buyitnow" src="/bin.gif">',
])
def test_decoration_cells_are_rejected(decoration):
    assert not is_listing_cell(f"<td>{LINK}{decoration}</a></td>")


def test_item_number():
    assert extract_item_number("http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem&item=1234567") == 1234567
    assert extract_item_number("http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem") is None


@pytest.mark.parametrize("text", ["", "   ", "-", " - ", "\xa0-\xa0", "\n\t-\r\n", "\xa0"])
def test_blank_or_hyphen_means_no_bids(text):
    assert normalize_bid_count(text) == "no"


def test_bid_count_passes_other_text_through():
    assert normalize_bid_count("3") == "3"
    assert normalize_bid_count("--") == "--"
    assert normalize_bid_count(None) == "no"


def test_buy_it_now_annotation():
    assert annotate_price("5$12.50") == "5 (Buy-It-Now for $12.50)"
    assert annotate_price("£1.00 £5.00") == "£1.00 (Buy-It-Now for £5.00)"
    assert annotate_price("1EUR 9,99") == "1 (Buy-It-Now for EUR 9,99)"


def test_plain_prices_are_unchanged():
    assert annotate_price("£4.20") == "£4.20"
    assert annotate_price("12.50") == "12.50"
    assert annotate_price("5¥12") == "5¥12"


class TestDescription:
    def _record(self, bids, item=123, price="£2.00"):
        return ListingRecord(url="http://x/ViewItem&item=123", title="t",
                             item_number=item, bid_count=bids, price=price)

    def test_single_bid_is_not_pluralized(self):
        assert self._record("1").description == "Item #123; 1 bid; current bid £2.00"

    def test_several_bids(self):
        assert self._record("5").description == "Item #123; 5 bids; current bid £2.00"

    def test_no_bids_shows_starting_bid(self):
        assert self._record("no").description == "Item #123; no bids; starting bid £2.00"

    def test_missing_item_number(self):
        assert self._record("2", item=None).description == "Item #; 2 bids; current bid £2.00"

    def test_record_id_falls_back_to_url(self):
        assert self._record("1").id == "123"
        assert self._record("1", item=None).id == "http://x/ViewItem&item=123"
