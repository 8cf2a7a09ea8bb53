"""
Unit tests for local transaction windowing, stripping and search
"""
import copy

import pytest

from lunchmoney_mcp.windowing import (
    matches_query,
    search_transactions,
    strip_plaid_metadata,
    window_transactions,
)


def _records(n):
    return [{"id": i} for i in range(n)]


class TestWindowTransactions:
    """Tests for offset/limit windowing"""

    @pytest.mark.parametrize("n,offset,limit,returned,has_more", [
        (1500, 0, 1000, 1000, True),
        (1500, 1000, 1000, 500, False),
        (5, 10, 1000, 0, False),
        (5, 5, 1000, 0, False),
        (10, 0, 10, 10, False),
        (11, 0, 10, 10, True),
        (10, 3, 0, 0, True),
        (0, 0, 1000, 0, False),
        (0, 0, 0, 0, False),
    ])
    def test_window_sizes(self, n, offset, limit, returned, has_more):
        window = window_transactions(_records(n), offset, limit)
        assert window.total_count == n
        assert len(window.transactions) == returned
        assert len(window.transactions) == min(limit, max(n - offset, 0))
        assert window.has_more is has_more
        assert window.offset == offset
        assert window.limit == limit

    def test_window_keeps_order_from_offset(self):
        window = window_transactions(_records(20), offset=5, limit=3)
        assert [tx["id"] for tx in window.transactions] == [5, 6, 7]

    def test_defaults(self):
        window = window_transactions(_records(1001))
        assert window.offset == 0
        assert window.limit == 1000
        assert len(window.transactions) == 1000
        assert window.has_more is True

    def test_to_dict_shape(self):
        assert window_transactions(_records(2), 1, 5).to_dict() == {
            "transactions": [{"id": 1}],
            "total_count": 2,
            "offset": 1,
            "limit": 5,
            "has_more": False,
        }

    @pytest.mark.parametrize("offset,limit", [(-1, 10), (0, -1)])
    def test_negative_values_rejected(self, offset, limit):
        with pytest.raises(ValueError):
            window_transactions(_records(3), offset, limit)

    def test_input_not_modified(self):
        records = _records(5)
        window_transactions(records, 2, 1)
        assert records == _records(5)


class TestStripPlaidMetadata:
    """Tests for dropping plaid_metadata"""

    def test_key_removed(self, sample_transactions):
        stripped = strip_plaid_metadata(sample_transactions)
        assert all("plaid_metadata" not in tx for tx in stripped)
        assert [tx["id"] for tx in stripped] == [1, 2, 3]

    def test_originals_untouched(self, sample_transactions):
        before = copy.deepcopy(sample_transactions)
        strip_plaid_metadata(sample_transactions)
        assert sample_transactions == before

    def test_other_fields_kept(self, sample_transactions):
        stripped = strip_plaid_metadata(sample_transactions)[0]
        assert stripped == {k: v for k, v in sample_transactions[0].items() if k != "plaid_metadata"}


class TestSearch:
    """Tests for case-insensitive local search"""

    @pytest.mark.parametrize("query", ["coffee", "COFFEE", "Coffee Sh"])
    def test_payee_match_ignores_case(self, sample_transactions, query):
        assert matches_query(sample_transactions[0], query)

    def test_non_matching_excluded(self, sample_transactions):
        assert not matches_query(sample_transactions[1], "coffee")

    def test_matches_notes_and_original_name(self, sample_transactions):
        results = search_transactions(sample_transactions, "coffee")
        assert [tx["id"] for tx in results] == [1, 3]
        assert [tx["id"] for tx in search_transactions(sample_transactions, "bakery")] == [2]

    def test_missing_fields_do_not_match(self):
        assert not matches_query({"id": 9}, "anything")
        assert not matches_query({"payee": None, "notes": None, "original_name": None}, "x")
