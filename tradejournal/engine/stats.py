"""Performance statistics: win rate, profit factor, best/worst trades and periods."""

import calendar
from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from tradejournal.engine.pnl import calculate_pnl
from tradejournal.models import (
    PerformanceStats,
    PeriodBreakdown,
    PeriodExtremes,
    PeriodProfit,
    Trade,
    TradeResult,
)

TOP_N = 5


def day_label(day: date) -> str:
    return day.isoformat()


def week_label(day: date) -> str:
    """Week-of-year label, e.g. 'Week 12, 2024'.

    Weeks run Sunday to Saturday and week 1 is the week containing
    January 1, so the first week of a year may be partial. This is a
    grouping label, not ISO-8601 week numbering.
    """
    jan1 = date(day.year, 1, 1)
    offset = (jan1.weekday() + 1) % 7  # Sunday = 0
    day_of_year = day.timetuple().tm_yday
    week = (day_of_year - 1 + offset) // 7 + 1
    return f"Week {week}, {day.year}"


def month_label(day: date) -> str:
    return f"{calendar.month_name[day.month]} {day.year}"


def trade_results(trades: Sequence[Trade]) -> list[TradeResult]:
    """Pair each trade with its P&L, preserving input order."""
    return [TradeResult(trade=t, pnl=calculate_pnl(t)) for t in trades]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _bucket_profits(
    results: Sequence[TradeResult], label: Callable[[date], str]
) -> dict[str, float]:
    buckets: dict[str, float] = defaultdict(float)
    for result in results:
        created_at = result.trade.created_at
        if created_at is None:
            continue
        buckets[label(created_at.date())] += result.pnl.amount
    return dict(buckets)


def most_least_profitable(buckets: dict[str, float]) -> PeriodExtremes:
    """Pick the most and least profitable bucket.

    A single bucket is reported only once: as most profitable when its
    sum is non-negative, otherwise as least profitable.
    """
    if not buckets:
        return PeriodExtremes()

    ranked = sorted(
        (PeriodProfit(period=k, profit=v) for k, v in buckets.items()),
        key=lambda p: p.profit,
        reverse=True,
    )
    if len(ranked) == 1:
        only = ranked[0]
        if only.profit >= 0:
            return PeriodExtremes(most=only)
        return PeriodExtremes(least=only)
    return PeriodExtremes(most=ranked[0], least=ranked[-1])


def period_breakdown(trades: Sequence[Trade]) -> PeriodBreakdown:
    """Best and worst day, week and month by summed P&L."""
    return _period_breakdown(trade_results(trades))


def _period_breakdown(results: Sequence[TradeResult]) -> PeriodBreakdown:
    return PeriodBreakdown(
        daily=most_least_profitable(_bucket_profits(results, day_label)),
        weekly=most_least_profitable(_bucket_profits(results, week_label)),
        monthly=most_least_profitable(_bucket_profits(results, month_label)),
    )


def performance_stats(trades: Sequence[Trade]) -> PerformanceStats:
    """Compute win/loss statistics for a set of trades.

    Args:
        trades: Trades in insertion order; ties in the gainer/loser
            rankings keep this order.

    Returns:
        PerformanceStats. Trades with zero P&L count toward the total
        but neither as wins nor as losses.
    """
    results = trade_results(trades)
    winners = [r for r in results if r.pnl.amount > 0]
    losers = [r for r in results if r.pnl.amount < 0]

    total = len(results)
    win_rate = len(winners) / total * 100 if total > 0 else 0.0

    avg_gain = _mean([r.pnl.amount for r in winners])
    avg_gain_percent = _mean([r.pnl.percent for r in winners])
    avg_loss = _mean([abs(r.pnl.amount) for r in losers])
    profit_factor = avg_gain / avg_loss if avg_loss > 0 else 0.0

    top_gainers = sorted(winners, key=lambda r: r.pnl.amount, reverse=True)[:TOP_N]
    top_losers = sorted(losers, key=lambda r: r.pnl.amount)[:TOP_N]

    return PerformanceStats(
        total_trades=total,
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=win_rate,
        avg_gain=avg_gain,
        avg_gain_percent=avg_gain_percent,
        avg_loss=avg_loss,
        profit_factor=profit_factor,
        total_pnl=sum((r.pnl.amount for r in results), 0.0),
        top_gainers=top_gainers,
        top_losers=top_losers,
        periods=_period_breakdown(results),
    )


def todays_trades(trades: Sequence[Trade], now: Optional[datetime] = None) -> list[Trade]:
    """Trades created on the current local calendar day."""
    today = (now or datetime.now()).date()
    return [t for t in trades if t.created_at is not None and t.created_at.date() == today]
