import main
from database import ListingRecord, get_listing_count


class StubScraper:
    approximate_result_count = 12

    def __init__(self):
        self.calls = []

    def get_listings(self, query, seen_ids=None, search_description=False):
        self.calls.append((query, seen_ids, search_description))
        return [ListingRecord(url=f"http://x/ViewItem&item={len(self.calls)}", title=query,
                              item_number=len(self.calls), bid_count="1", price="£1.00",
                              change_date="01-Mar")]


def test_run_search_prints_and_stores(temp_db, capsys):
    scraper = StubScraper()

    total = main.run_search(["clock", "pen"], scraper, search_description=True)

    assert total == 2
    assert get_listing_count() == 2
    assert [c[0] for c in scraper.calls] == ["clock", "pen"]
    assert scraper.calls[0][2] is True
    out = capsys.readouterr().out
    assert "Item #1; 1 bid; current bid £1.00" in out


def test_run_search_without_store(temp_db):
    scraper = StubScraper()

    main.run_search(["clock"], scraper, store=False)

    assert scraper.calls[0][1] is None
    assert get_listing_count() == 0
