"""Position sizing from an account risk budget."""

import math

from tradejournal.models import LONG, PositionSize, Side, SuggestedLevels


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def dollar_risk(account_value: float, risk_percentage: float) -> float:
    """Amount of the account risked on one trade."""
    risk = account_value * risk_percentage / 100
    return risk if math.isfinite(risk) else 0.0


def size_position(
    account_value: float,
    risk_percentage: float,
    entry_price: float,
    stop_loss: float,
) -> PositionSize:
    """Size a position so that hitting the stop loses the risk budget.

    Args:
        account_value: Account value to size against.
        risk_percentage: Percent of the account to risk.
        entry_price: Planned entry price.
        stop_loss: Planned stop-loss price.

    Returns:
        PositionSize with whole shares; zero shares when the entry and stop
        coincide or any input is not a finite number.
    """
    risk = dollar_risk(account_value, risk_percentage)
    if not _finite(entry_price, stop_loss):
        return PositionSize(shares=0, total_position_value=0.0, dollar_risk=risk, risk_per_share=0.0)

    risk_per_share = abs(entry_price - stop_loss)
    raw_shares = risk / risk_per_share if risk_per_share > 0 else 0.0
    shares = max(math.floor(raw_shares), 0) if math.isfinite(raw_shares) else 0
    return PositionSize(
        shares=shares,
        total_position_value=shares * entry_price,
        dollar_risk=risk,
        risk_per_share=risk_per_share,
    )


def suggest_levels(
    account_value: float,
    risk_percentage: float,
    entry_price: float,
    side: Side = LONG,
    profit_risk_ratio: float = 2.0,
) -> SuggestedLevels:
    """Suggest stop-loss and take-profit from the entry price alone.

    Assumes the whole account goes into the position: the risk budget is
    spread across the maximum affordable shares to get a per-share risk,
    and the target sits profit_risk_ratio times that distance away.
    Prices are clamped at zero and rounded to cents.
    """
    if not _finite(account_value, risk_percentage, entry_price, profit_risk_ratio) or entry_price <= 0:
        return SuggestedLevels(stop_loss=0.0, take_profit=0.0, risk_per_share=0.0, max_shares=0)

    max_shares = math.floor(account_value / entry_price)
    if max_shares <= 0:
        return SuggestedLevels(stop_loss=0.0, take_profit=0.0, risk_per_share=0.0, max_shares=0)

    risk_per_share = dollar_risk(account_value, risk_percentage) / max_shares
    if side == LONG:
        stop_loss = entry_price - risk_per_share
        take_profit = entry_price + risk_per_share * profit_risk_ratio
    else:
        stop_loss = entry_price + risk_per_share
        take_profit = entry_price - risk_per_share * profit_risk_ratio

    return SuggestedLevels(
        stop_loss=round(max(0.0, stop_loss), 2),
        take_profit=round(max(0.0, take_profit), 2),
        risk_per_share=risk_per_share,
        max_shares=max_shares,
    )


def take_profit_from_stop(
    entry_price: float,
    stop_loss: float,
    side: Side = LONG,
    profit_risk_ratio: float = 2.0,
) -> float:
    """Target price profit_risk_ratio times the stop distance from entry."""
    profit = abs(entry_price - stop_loss) * profit_risk_ratio
    target = entry_price + profit if side == LONG else entry_price - profit
    return target if math.isfinite(target) else 0.0
