"""Result models produced by the analytics engine."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.models.trade import Trade

RiskCategory = Literal["low", "medium", "high"]


class PnL(BaseModel):
    """Profit/loss of a single trade."""

    amount: float = Field(..., description="P&L in account currency")
    percent: float = Field(..., description="P&L as a percentage of entry price")

    model_config = {"frozen": True}


class TradeResult(BaseModel):
    """A trade paired with its computed P&L."""

    trade: Trade
    pnl: PnL

    model_config = {"frozen": True}


class ValuePoint(BaseModel):
    """One point of the account value series."""

    label: str = Field(..., description="'Start', a calendar date, or 'Current'")
    value: float = Field(..., description="Account value at this point")

    model_config = {"frozen": True}


class ValueSeries(BaseModel):
    """Running account value plus a display domain centred on the base value."""

    points: list[ValuePoint] = Field(default_factory=list)
    domain_low: float = Field(..., description="Lower display bound")
    domain_high: float = Field(..., description="Upper display bound")

    model_config = {"frozen": True}


class AccountSummary(BaseModel):
    """Base and current account value with the total P&L between them."""

    base_account_value: float
    current_account_value: float
    pnl: float
    pnl_percent: float

    model_config = {"frozen": True}


class TradeRisk(BaseModel):
    """Risk exposure of a single trade."""

    risk_amount: float = Field(..., ge=0, description="|entry - stop| * quantity")
    position_value: float = Field(..., gt=0, description="entry * quantity")
    risk_percent: float = Field(..., ge=0, description="Risk as percent of position value")
    category: RiskCategory

    model_config = {"frozen": True}


class RiskReport(BaseModel):
    """Portfolio-level risk profile."""

    avg_risk_per_trade: float = 0.0
    portfolio_heat: float = 0.0
    low_risk: float = 0.0
    medium_risk: float = 0.0
    high_risk: float = 0.0
    trade_count: int = Field(default=0, ge=0, description="Trades included in the ratios")

    model_config = {"frozen": True}


class PeriodProfit(BaseModel):
    """Summed P&L of one calendar bucket."""

    period: str
    profit: float

    model_config = {"frozen": True}


class PeriodExtremes(BaseModel):
    """Most and least profitable bucket of one granularity."""

    most: Optional[PeriodProfit] = None
    least: Optional[PeriodProfit] = None

    model_config = {"frozen": True}


class PeriodBreakdown(BaseModel):
    """Best and worst day, week and month."""

    daily: PeriodExtremes = Field(default_factory=PeriodExtremes)
    weekly: PeriodExtremes = Field(default_factory=PeriodExtremes)
    monthly: PeriodExtremes = Field(default_factory=PeriodExtremes)

    model_config = {"frozen": True}


class PerformanceStats(BaseModel):
    """Win/loss statistics for a set of trades."""

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    avg_gain: float = 0.0
    avg_gain_percent: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    total_pnl: float = 0.0
    top_gainers: list[TradeResult] = Field(default_factory=list)
    top_losers: list[TradeResult] = Field(default_factory=list)
    periods: PeriodBreakdown = Field(default_factory=PeriodBreakdown)

    model_config = {"frozen": True}


class PositionSize(BaseModel):
    """Share quantity and dollar risk for a proposed entry/stop."""

    shares: int = Field(..., ge=0)
    total_position_value: float
    dollar_risk: float
    risk_per_share: float

    model_config = {"frozen": True}


class SuggestedLevels(BaseModel):
    """Stop-loss and take-profit derived from a risk budget."""

    stop_loss: float
    take_profit: float
    risk_per_share: float
    max_shares: int = Field(..., ge=0)

    model_config = {"frozen": True}
