"""Property-based tests for account value projection.

**Feature: trade-journal**
"""

from datetime import datetime, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.engine.account import (
    CURRENT_LABEL,
    START_LABEL,
    account_summary,
    current_account_value,
    project_value_series,
)
from tradejournal.engine.pnl import calculate_pnl
from tradejournal.models import AccountSettings, Trade

prices = st.floats(min_value=1.0, max_value=1000.0, allow_nan=False, allow_infinity=False)


def trade_strategy():
    return st.builds(
        Trade,
        id=st.none(),
        symbol=st.sampled_from(["AAPL", "MSFT", "TSLA"]),
        side=st.sampled_from(["long", "short"]),
        quantity=st.integers(min_value=1, max_value=500).map(float),
        entry_price=prices,
        current_price=prices,
        exit_price=st.one_of(st.none(), prices),
        created_at=st.datetimes(min_value=datetime(2023, 1, 1), max_value=datetime(2024, 12, 31)),
    )


def make_trade(created_at, entry=100.0, exit_price=None, current=None, side="long", qty=10.0):
    return Trade(
        symbol="AAPL",
        side=side,
        quantity=qty,
        entry_price=entry,
        current_price=current if current is not None else entry,
        exit_price=exit_price,
        created_at=created_at,
    )


class TestCurrentAccountValue:
    """
    **Feature: trade-journal, Property 5: Account Value Derivation**

    *For any* set of trades, current account value is the base value plus
    the total P&L of every trade.
    """

    def test_no_trades_is_base(self):
        assert current_account_value([], 50000.0) == 50000.0

    @given(
        trades=st.lists(trade_strategy(), max_size=20),
        base=st.floats(min_value=1000.0, max_value=1e7, allow_nan=False),
    )
    @settings(max_examples=100)
    def test_base_plus_pnl(self, trades: list[Trade], base: float):
        expected = base + sum(calculate_pnl(t).amount for t in trades)
        assert current_account_value(trades, base) == pytest.approx(expected)

    @given(trades=st.lists(trade_strategy(), max_size=20))
    @settings(max_examples=50)
    def test_recomputing_is_idempotent(self, trades: list[Trade]):
        """*For any* trades, recomputing from the same inputs gives the same value."""
        assert current_account_value(trades, 100000.0) == current_account_value(trades, 100000.0)


class TestValueSeries:
    """
    **Feature: trade-journal, Property 6: Value Series Projection**

    *For any* set of dated trades, the series starts at the base value,
    adds each trade's P&L in creation order, and ends at the current value.
    """

    def test_empty_series_is_start_only(self):
        series = project_value_series([], 100000.0)
        assert [p.label for p in series.points] == [START_LABEL]
        assert series.points[0].value == 100000.0

    def test_points_follow_creation_order(self):
        day = datetime(2024, 3, 4, 10, 0)
        later = make_trade(day + timedelta(days=1), exit_price=90.0)  # -100
        earlier = make_trade(day, exit_price=105.0)  # +50

        series = project_value_series([later, earlier], 1000.0)
        labels = [p.label for p in series.points]
        values = [p.value for p in series.points]

        assert labels == [START_LABEL, "2024-03-04", "2024-03-05"]
        assert values == pytest.approx([1000.0, 1050.0, 950.0])

    def test_current_point_added_when_value_differs(self):
        trade = make_trade(datetime(2024, 3, 4, 10, 0), exit_price=105.0)
        series = project_value_series([trade], 1000.0, current_value=1200.0)
        assert series.points[-1].label == CURRENT_LABEL
        assert series.points[-1].value == 1200.0

    def test_no_current_point_when_value_matches(self):
        trade = make_trade(datetime(2024, 3, 4, 10, 0), exit_price=105.0)
        series = project_value_series([trade], 1000.0)
        assert series.points[-1].label != CURRENT_LABEL
        assert series.points[-1].value == pytest.approx(1050.0)

    def test_undated_trades_only_affect_current_point(self):
        dated = make_trade(datetime(2024, 3, 4, 10, 0), exit_price=105.0)
        undated = make_trade(None, exit_price=110.0)

        series = project_value_series([dated, undated], 1000.0)
        assert [p.label for p in series.points] == [START_LABEL, "2024-03-04", CURRENT_LABEL]
        assert series.points[-1].value == pytest.approx(1150.0)

    @given(trades=st.lists(trade_strategy(), max_size=25))
    @settings(max_examples=100)
    def test_series_ends_at_current_value(self, trades: list[Trade]):
        base = 100000.0
        series = project_value_series(trades, base)
        assert series.points[0].label == START_LABEL
        assert series.points[0].value == base
        assert series.points[-1].value == pytest.approx(current_account_value(trades, base))

    @given(trades=st.lists(trade_strategy(), max_size=25))
    @settings(max_examples=50)
    def test_series_is_order_independent(self, trades: list[Trade]):
        forward = project_value_series(trades, 100000.0)
        backward = project_value_series(list(reversed(trades)), 100000.0)
        assert forward.points[-1].value == pytest.approx(backward.points[-1].value)
        assert len(forward.points) == len(backward.points)

    @given(trades=st.lists(trade_strategy(), max_size=25))
    @settings(max_examples=100)
    def test_domain_contains_every_point(self, trades: list[Trade]):
        base = 100000.0
        series = project_value_series(trades, base)
        assert series.domain_low <= base <= series.domain_high
        for point in series.points:
            assert series.domain_low <= point.value <= series.domain_high
        assert series.domain_low % 100 == 0
        assert series.domain_high % 100 == 0

    def test_domain_is_symmetric_around_base(self):
        trade = make_trade(datetime(2024, 1, 2), exit_price=130.0)  # +300
        series = project_value_series([trade], 10000.0)
        assert series.domain_low == 9700.0
        assert series.domain_high == 10300.0


class TestAccountSummary:
    """
    **Feature: trade-journal, Property 7: Account Summary**

    *For any* settings, changing the base value shifts the current value
    by the same amount without changing trade P&L.
    """

    def test_summary_values(self):
        trade = make_trade(datetime(2024, 1, 2), exit_price=110.0)  # +100
        summary = account_summary([trade], AccountSettings(base_account_value=1000.0))
        assert summary.current_account_value == pytest.approx(1100.0)
        assert summary.pnl == pytest.approx(100.0)
        assert summary.pnl_percent == pytest.approx(10.0)

    @given(
        trades=st.lists(trade_strategy(), max_size=15),
        base=st.floats(min_value=1000.0, max_value=1e6, allow_nan=False),
        delta=st.floats(min_value=1.0, max_value=1e5, allow_nan=False),
    )
    @settings(max_examples=50)
    def test_base_change_does_not_rescale_pnl(self, trades, base, delta):
        before = account_summary(trades, AccountSettings(base_account_value=base))
        after = account_summary(trades, AccountSettings(base_account_value=base + delta))
        assert after.pnl == pytest.approx(before.pnl, abs=1e-6)
        assert after.current_account_value - before.current_account_value == pytest.approx(delta)
