"""Risk metrics for individual trades and the whole portfolio."""

import math
from typing import Optional, Sequence

from tradejournal.models import RiskCategory, RiskReport, Trade, TradeRisk

LOW_RISK_THRESHOLD = 1.0
MEDIUM_RISK_THRESHOLD = 2.0

# Portfolio heat bands (percent of position value at risk)
LOW_HEAT_THRESHOLD = 15.0
MEDIUM_HEAT_THRESHOLD = 25.0

# Weights used by the composite risk score
RISK_SCORE_WEIGHTS = {"low": 0.8, "medium": 0.5, "high": 0.2}


def risk_category(risk_percent: float) -> RiskCategory:
    """Band a per-trade risk percentage: <=1 low, <=2 medium, otherwise high."""
    if risk_percent <= LOW_RISK_THRESHOLD:
        return "low"
    if risk_percent <= MEDIUM_RISK_THRESHOLD:
        return "medium"
    return "high"


def trade_risk(trade: Trade) -> Optional[TradeRisk]:
    """Risk exposure of a trade, measured from entry to stop-loss.

    Returns:
        TradeRisk, or None when the entry price or quantity is not positive
        or a figure is not finite; such trades are left out of every
        portfolio ratio.
    """
    if trade.entry_price <= 0 or trade.quantity <= 0:
        return None

    risk_amount = abs(trade.entry_price - trade.stop_loss) * trade.quantity
    position_value = trade.entry_price * trade.quantity

    if not (math.isfinite(risk_amount) and math.isfinite(position_value)):
        return None
    if position_value <= 0:
        return None

    risk_percent = risk_amount / position_value * 100
    return TradeRisk(
        risk_amount=risk_amount,
        position_value=position_value,
        risk_percent=risk_percent,
        category=risk_category(risk_percent),
    )


def risk_report(trades: Sequence[Trade]) -> RiskReport:
    """Aggregate risk profile of a set of trades.

    Portfolio heat is weighted by position value (total risk over total
    value), while the average risk per trade weights each trade equally.
    """
    risks = [r for r in (trade_risk(t) for t in trades) if r is not None]
    if not risks:
        return RiskReport()

    total = len(risks)
    total_risk = sum(r.risk_amount for r in risks)
    total_value = sum(r.position_value for r in risks)

    counts = {"low": 0, "medium": 0, "high": 0}
    for r in risks:
        counts[r.category] += 1

    return RiskReport(
        avg_risk_per_trade=sum(r.risk_percent for r in risks) / total,
        portfolio_heat=total_risk / total_value * 100 if total_value > 0 else 0.0,
        low_risk=counts["low"] / total * 100,
        medium_risk=counts["medium"] / total * 100,
        high_risk=counts["high"] / total * 100,
        trade_count=total,
    )


def risk_score(report: RiskReport) -> int:
    """Composite 0-100 score from the category mix; 0 when nothing is at risk."""
    if report.trade_count == 0:
        return 0
    weighted = (
        report.low_risk * RISK_SCORE_WEIGHTS["low"]
        + report.medium_risk * RISK_SCORE_WEIGHTS["medium"]
        + report.high_risk * RISK_SCORE_WEIGHTS["high"]
    )
    return int(math.floor(100 - weighted + 0.5))


def risk_level(score: int) -> str:
    if score <= 33:
        return "Low"
    if score <= 66:
        return "Medium"
    return "High"


def heat_level(portfolio_heat: float) -> RiskCategory:
    if portfolio_heat <= LOW_HEAT_THRESHOLD:
        return "low"
    if portfolio_heat <= MEDIUM_HEAT_THRESHOLD:
        return "medium"
    return "high"
