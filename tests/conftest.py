"""Shared fixtures: hand-built eBay UK results pages."""

import pytest

import database

PAGE_URL = "http://search.ebay.co.uk/search/search.dll?MfcISAPICommand=GetResult&query=pocket+watch"
VIEW_ITEM = "http://cgi.ebay.co.uk/ws/eBayISAPI.dll?ViewItem&amp;item={item}"


def make_row(item, title, cells):
    """One results table row: thumbnail cell, title cell, then the given cells."""
    link = VIEW_ITEM.format(item=item)
    tail = "".join(f"<td>{cell}</td>" for cell in cells)
    return (
        f'<tr><td><a href="{link}"><img src="http://thumbs.ebay.co.uk/pict/{item}.jpg"></a></td>'
        f'<td><font size="3"><a href="{link}">{title}</a></font></td>{tail}</tr>'
    )


def make_page(rows, hit_count="2 items found ", pager='<a href="search.dll?query=pocket+watch&amp;page=2">Next &gt;</a>'):
    return (
        "<html><body>"
        '<a href="/help">Help</a> <a href="/next-promo">Next &gt;</a>'
        f'<font size="2"><b>{hit_count}</b>for <b>pocket watch</b></font>'
        f"<table>{''.join(rows)}</table>"
        f"<p>{pager}</p>"
        "</body></html>"
    )


@pytest.fixture
def two_row_page():
    """A full row followed by a row missing its date cell."""
    return make_page([
        make_row(111, "Antique pocket watch", ["£4.20", "3", "12-Feb 10:30"]),
        make_row(222, "Silver fob chain", ["£1.00", "&nbsp;-&nbsp;"]),
    ])


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the database module at a throwaway file."""
    path = tmp_path / "test.db"
    monkeypatch.setattr(database, "DATABASE_FILE", path)
    return path
