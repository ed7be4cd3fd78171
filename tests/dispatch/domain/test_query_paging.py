"""Tests for reading a query page by page."""

from dispatch.utils.query import fetch_all
from protean.core.queryset import ResultSet


class RecordingQuery:
    """Stands in for a Protean QuerySet over ``rows``, recording each page read."""

    def __init__(self, rows, _offset=0, _limit=None, pages=None):
        self.rows = rows
        self._offset = _offset
        self._limit = _limit
        self.pages = pages if pages is not None else []

    def offset(self, offset):
        return RecordingQuery(self.rows, offset, self._limit, self.pages)

    def limit(self, limit):
        return RecordingQuery(self.rows, self._offset, limit, self.pages)

    def all(self):
        self.pages.append((self._offset, self._limit))
        items = self.rows[self._offset : self._offset + self._limit]
        return ResultSet(offset=self._offset, limit=self._limit, total=len(self.rows), items=items)


class TestFetchAll:
    def test_reads_until_the_last_page(self):
        query = RecordingQuery(list(range(250)))
        assert fetch_all(query) == list(range(250))
        assert query.pages == [(0, 100), (100, 100), (200, 100)]

    def test_exact_multiple_of_page_size(self):
        query = RecordingQuery(list(range(200)))
        assert len(fetch_all(query)) == 200
        assert query.pages == [(0, 100), (100, 100)]

    def test_empty_query(self):
        query = RecordingQuery([])
        assert fetch_all(query) == []
        assert query.pages == [(0, 100)]

    def test_custom_page_size(self):
        query = RecordingQuery(list(range(5)))
        assert fetch_all(query, page_size=2) == [0, 1, 2, 3, 4]
        assert len(query.pages) == 3
