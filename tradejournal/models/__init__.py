"""Data models for the trade journal."""

from tradejournal.models.trade import (
    LONG,
    SHORT,
    ClosedState,
    InvalidTradeError,
    OpenState,
    Side,
    Trade,
    TradeInput,
    TradeState,
)
from tradejournal.models.settings import AccountSettings
from tradejournal.models.analytics import (
    AccountSummary,
    PerformanceStats,
    PeriodBreakdown,
    PeriodExtremes,
    PeriodProfit,
    PnL,
    PositionSize,
    RiskCategory,
    RiskReport,
    SuggestedLevels,
    TradeResult,
    TradeRisk,
    ValuePoint,
    ValueSeries,
)

__all__ = [
    "LONG",
    "SHORT",
    "Side",
    "Trade",
    "TradeInput",
    "TradeState",
    "OpenState",
    "ClosedState",
    "InvalidTradeError",
    "AccountSettings",
    "AccountSummary",
    "PerformanceStats",
    "PeriodBreakdown",
    "PeriodExtremes",
    "PeriodProfit",
    "PnL",
    "PositionSize",
    "RiskCategory",
    "RiskReport",
    "SuggestedLevels",
    "TradeResult",
    "TradeRisk",
    "ValuePoint",
    "ValueSeries",
]
