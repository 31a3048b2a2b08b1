"""Tests for journal filtering and sorting.

**Feature: trade-journal**
"""

from datetime import date, datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.engine.journal import SORT_FIELDS, JournalFilter, filter_trades, sort_trades
from tradejournal.engine.pnl import calculate_pnl
from tradejournal.models import Trade

prices = st.floats(min_value=1.0, max_value=1000.0, allow_nan=False, allow_infinity=False)


def trade_strategy():
    return st.builds(
        Trade,
        id=st.none(),
        symbol=st.sampled_from(["AAPL", "MSFT", "TSLA", "AMD"]),
        side=st.sampled_from(["long", "short"]),
        quantity=st.integers(min_value=1, max_value=100).map(float),
        entry_price=prices,
        current_price=prices,
        exit_price=st.one_of(st.none(), prices),
        created_at=st.one_of(
            st.none(),
            st.datetimes(min_value=datetime(2024, 1, 1), max_value=datetime(2024, 12, 31)),
        ),
    )


@pytest.fixture
def journal() -> list[Trade]:
    return [
        Trade(id=1, symbol="AAPL", side="long", quantity=10, entry_price=100, current_price=110,
              created_at=datetime(2024, 1, 5, 10, 0)),
        Trade(id=2, symbol="MSFT", side="short", quantity=5, entry_price=300, current_price=300,
              exit_price=310, created_at=datetime(2024, 2, 10, 11, 0)),
        Trade(id=3, symbol="AMD", side="long", quantity=20, entry_price=150, current_price=140,
              created_at=datetime(2024, 3, 15, 12, 0)),
        Trade(id=4, symbol="AAPL", side="short", quantity=8, entry_price=120, current_price=120,
              exit_price=115, created_at=datetime(2024, 3, 31, 23, 30)),
    ]


class TestJournalFilter:
    """
    **Feature: trade-journal, Property 19: Journal Filtering**

    *For any* filter, every returned trade matches every active criterion
    and input order is preserved.
    """

    def test_default_filter_matches_everything(self, journal):
        criteria = JournalFilter()
        assert criteria.active_count() == 0
        assert filter_trades(journal, criteria) == journal

    def test_symbol_is_case_insensitive_substring(self, journal):
        result = filter_trades(journal, JournalFilter(symbol="ap"))
        assert [t.id for t in result] == [1, 4]

    def test_side_and_status(self, journal):
        assert [t.id for t in filter_trades(journal, JournalFilter(side="short"))] == [2, 4]
        assert [t.id for t in filter_trades(journal, JournalFilter(status="open"))] == [1, 3]
        assert [t.id for t in filter_trades(journal, JournalFilter(status="closed"))] == [2, 4]

    def test_date_range_is_inclusive(self, journal):
        criteria = JournalFilter(start=date(2024, 2, 10), end=date(2024, 3, 31))
        assert [t.id for t in filter_trades(journal, criteria)] == [2, 3, 4]

    def test_profitability(self, journal):
        profitable = filter_trades(journal, JournalFilter(profitability="profitable"))
        unprofitable = filter_trades(journal, JournalFilter(profitability="unprofitable"))
        assert [t.id for t in profitable] == [1, 4]
        assert [t.id for t in unprofitable] == [2, 3]

    def test_active_count(self):
        criteria = JournalFilter(symbol="A", side="long", start=date(2024, 1, 1), end=date(2024, 2, 1))
        assert criteria.active_count() == 3

    def test_undated_trades_fail_date_filter(self):
        trade = Trade(symbol="AAPL", quantity=1, entry_price=10, current_price=10)
        assert filter_trades([trade], JournalFilter(start=date(2024, 1, 1))) == []

    @given(
        trades=st.lists(trade_strategy(), max_size=30),
        side=st.sampled_from(["all", "long", "short"]),
        status=st.sampled_from(["all", "open", "closed"]),
        profitability=st.sampled_from(["all", "profitable", "unprofitable"]),
    )
    @settings(max_examples=100)
    def test_results_match_criteria(self, trades, side, status, profitability):
        criteria = JournalFilter(side=side, status=status, profitability=profitability)
        result = filter_trades(trades, criteria)

        # Input order preserved
        kept = {id(t) for t in result}
        assert [id(t) for t in result] == [id(t) for t in trades if id(t) in kept]

        for trade in result:
            if side != "all":
                assert trade.side == side
            if status == "open":
                assert not trade.is_closed
            if status == "closed":
                assert trade.is_closed
            amount = calculate_pnl(trade).amount
            if profitability == "profitable":
                assert amount > 0
            if profitability == "unprofitable":
                assert amount < 0


class TestJournalSort:
    """
    **Feature: trade-journal, Property 20: Journal Sorting**

    *For any* sort column, trades come back ordered by that column.
    """

    def test_default_is_newest_first(self, journal):
        assert [t.id for t in sort_trades(journal)] == [4, 3, 2, 1]

    def test_symbol_ascending(self, journal):
        result = sort_trades(journal, "symbol", descending=False)
        assert [t.symbol for t in result] == ["AAPL", "AAPL", "AMD", "MSFT"]

    def test_pnl_descending(self, journal):
        result = sort_trades(journal, "pnl")
        amounts = [calculate_pnl(t).amount for t in result]
        assert amounts == sorted(amounts, reverse=True)

    def test_unknown_field_raises(self, journal):
        with pytest.raises(ValueError):
            sort_trades(journal, "colour")

    @given(trades=st.lists(trade_strategy(), max_size=30), field=st.sampled_from(SORT_FIELDS))
    @settings(max_examples=100)
    def test_sort_is_permutation(self, trades, field):
        result = sort_trades(trades, field)
        assert len(result) == len(trades)
        assert sorted(t.model_dump_json() for t in result) == sorted(t.model_dump_json() for t in trades)

    @given(trades=st.lists(trade_strategy(), max_size=30))
    @settings(max_examples=50)
    def test_undated_trades_sort_last_when_newest_first(self, trades):
        result = sort_trades(trades, "date")
        dated = [t.created_at is not None for t in result]
        assert dated == sorted(dated, reverse=True)
