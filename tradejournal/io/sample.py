"""Sample trade generator for trying out the journal."""

import random
from datetime import datetime, timedelta
from typing import Optional

from tradejournal.db.store import DataStore
from tradejournal.models import LONG, SHORT, Trade, TradeInput

SAMPLE_SYMBOLS = ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "AMD", "JPM", "BAC"]

CLOSE_PROBABILITY = 0.7
WIN_PROBABILITY = 0.4


def _months_before(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, 28)
    return moment.replace(year=year, month=month, day=day, hour=0, minute=0, second=0, microsecond=0)


def _trades_per_day(rng: random.Random, months_ago: int) -> int:
    if months_ago >= 2:
        return rng.randint(1, 2)
    if months_ago >= 1:
        return rng.randint(2, 3)
    return rng.randint(3, 5)


def generate_trade(rng: random.Random, created_at: datetime) -> tuple[TradeInput, datetime]:
    """Generate one plausible trade opened at created_at."""
    side = LONG if rng.random() > 0.5 else SHORT
    symbol = rng.choice(SAMPLE_SYMBOLS)
    entry = round(rng.uniform(50, 500), 2)
    quantity = rng.randint(10, 99)
    mark = round(entry + entry * rng.uniform(-0.05, 0.05), 2)

    if side == LONG:
        stop_loss = round(entry * 0.98, 2)
        take_profit = round(entry * 1.04, 2)
    else:
        stop_loss = round(entry * 1.02, 2)
        take_profit = round(entry * 0.96, 2)

    exit_price = None
    if rng.random() < CLOSE_PROBABILITY:
        winner = rng.random() > 1 - WIN_PROBABILITY
        if side == LONG:
            low, high = (entry, take_profit) if winner else (stop_loss, entry)
        else:
            low, high = (take_profit, entry) if winner else (entry, stop_loss)
        exit_price = round(rng.uniform(low, high), 2)

    trade = TradeInput(
        symbol=symbol,
        side=side,
        quantity=quantity,
        entry_price=entry,
        current_price=exit_price or mark,
        exit_price=exit_price,
        stop_loss=stop_loss,
        take_profit=take_profit,
    )
    return trade, created_at


def generate_sample_trades(
    end: Optional[datetime] = None,
    months: int = 3,
    rng: Optional[random.Random] = None,
) -> list[tuple[TradeInput, datetime]]:
    """Generate weekday trades over the last few months.

    Trading gets busier toward the end date: 1-2 trades a day in the
    oldest month, 2-3 in the middle, 3-5 in the latest. Trade times fall
    between 09:00 and 16:00 and never after the end date.

    Returns:
        Pairs of trade input and creation time, in chronological order.
    """
    rng = rng or random.Random()
    end = end or datetime.now()
    day = _months_before(end, months)

    trades = []
    while day <= end:
        if day.weekday() < 5:
            months_ago = (end.year - day.year) * 12 + end.month - day.month
            times = sorted(
                (rng.randint(9, 15), rng.randint(0, 59))
                for _ in range(_trades_per_day(rng, months_ago))
            )
            for hour, minute in times:
                created_at = day.replace(hour=hour, minute=minute)
                if created_at <= end:
                    trades.append(generate_trade(rng, created_at))
        day += timedelta(days=1)
    return trades


def populate_sample_data(
    store: DataStore,
    end: Optional[datetime] = None,
    months: int = 3,
    rng: Optional[random.Random] = None,
) -> list[Trade]:
    """Replace the journal's trades with generated sample trades."""
    store.clear_trades()
    return [
        store.create_trade(trade, created_at=created_at)
        for trade, created_at in generate_sample_trades(end=end, months=months, rng=rng)
    ]
