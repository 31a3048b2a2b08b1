"""Analytics engine for the trade journal.

Every function in this package is a pure function of its inputs: trades
and settings are passed in, computed models come out, and nothing is
cached or read from storage.
"""

from tradejournal.engine.pnl import (
    calculate_pnl,
    position_value,
    total_market_value,
    total_pnl,
    valuation_price,
)
from tradejournal.engine.account import (
    account_summary,
    current_account_value,
    project_value_series,
)
from tradejournal.engine.risk import (
    heat_level,
    risk_category,
    risk_level,
    risk_report,
    risk_score,
    trade_risk,
)
from tradejournal.engine.stats import (
    performance_stats,
    period_breakdown,
    todays_trades,
    trade_results,
)
from tradejournal.engine.sizing import (
    size_position,
    suggest_levels,
    take_profit_from_stop,
)
from tradejournal.engine.journal import JournalFilter, filter_trades, sort_trades

__all__ = [
    "calculate_pnl",
    "position_value",
    "total_market_value",
    "total_pnl",
    "valuation_price",
    "account_summary",
    "current_account_value",
    "project_value_series",
    "heat_level",
    "risk_category",
    "risk_level",
    "risk_report",
    "risk_score",
    "trade_risk",
    "performance_stats",
    "period_breakdown",
    "todays_trades",
    "trade_results",
    "size_position",
    "suggest_levels",
    "take_profit_from_stop",
    "JournalFilter",
    "filter_trades",
    "sort_trades",
]
