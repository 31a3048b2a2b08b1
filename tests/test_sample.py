"""Property-based tests for sample data generation.

**Feature: trade-journal**
"""

import random
import tempfile
from datetime import datetime
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.db.store import DataStore
from tradejournal.io.sample import SAMPLE_SYMBOLS, generate_sample_trades, generate_trade, populate_sample_data
from tradejournal.models import TradeInput

END = datetime(2024, 6, 14, 17, 0)


class TestGeneratedTrades:
    """
    **Feature: trade-journal, Property 32: Sample Trades Are Valid**

    *For any* seed, every generated trade passes entry validation and an
    exit, when present, lies between the stop and the target.
    """

    @given(seed=st.integers(min_value=0, max_value=2**32))
    @settings(max_examples=100)
    def test_generated_trade_is_valid(self, seed: int):
        trade, created_at = generate_trade(random.Random(seed), END)
        assert isinstance(trade, TradeInput)
        assert created_at == END
        assert trade.validate_levels() is trade
        assert trade.symbol in SAMPLE_SYMBOLS

        if trade.exit_price is not None:
            low = min(trade.stop_loss, trade.take_profit)
            high = max(trade.stop_loss, trade.take_profit)
            assert low <= trade.exit_price <= high
            assert trade.current_price == trade.exit_price


class TestSampleSchedule:
    """
    **Feature: trade-journal, Property 33: Sample Trading Calendar**

    *For any* seed, trades fall on weekdays during market hours within the
    requested window, in chronological order.
    """

    @given(seed=st.integers(min_value=0, max_value=1000))
    @settings(max_examples=10)
    def test_schedule(self, seed: int):
        trades = generate_sample_trades(end=END, months=3, rng=random.Random(seed))
        assert trades

        times = [created_at for _, created_at in trades]
        assert times == sorted(times)
        for created_at in times:
            assert created_at.weekday() < 5
            assert 9 <= created_at.hour <= 15
            assert datetime(2024, 3, 14) <= created_at <= END

    def test_same_seed_same_trades(self):
        a = generate_sample_trades(end=END, rng=random.Random(7))
        b = generate_sample_trades(end=END, rng=random.Random(7))
        assert a == b

    def test_recent_month_is_busier(self):
        trades = generate_sample_trades(end=END, months=3, rng=random.Random(1))
        oldest = [t for _, t in trades if t < datetime(2024, 4, 1)]
        latest = [t for _, t in trades if t >= datetime(2024, 6, 1)]
        # 1-2 trades a day in March, 3-5 a day in June
        assert len(latest) / 10 >= 3
        assert len(oldest) / 12 <= 2


class TestPopulateSampleData:
    """
    **Feature: trade-journal, Property 34: Sample Data Replaces Trades**

    *For any* existing journal, loading sample data replaces its trades
    and keeps account settings.
    """

    def test_replaces_existing_trades(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            store.update_settings(base_account_value=25000.0)
            store.create_trade(TradeInput(
                symbol="ZZZ", quantity=1, entry_price=10, stop_loss=9, take_profit=12,
            ))

            created = populate_sample_data(store, end=END, months=1, rng=random.Random(3))
            stored = store.list_trades()

            assert len(stored) == len(created) > 0
            assert all(t.symbol != "ZZZ" for t in stored)
            assert [t.created_at for t in stored] == sorted(t.created_at for t in stored)
            assert store.get_settings().base_account_value == 25000.0
