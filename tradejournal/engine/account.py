"""Account value projection.

Account value is never stored as a running balance; it is always derived
from the base value and the full set of trades.
"""

import math
from typing import Optional, Sequence

from tradejournal.engine.pnl import calculate_pnl, total_pnl
from tradejournal.models import AccountSettings, AccountSummary, Trade, ValuePoint, ValueSeries

START_LABEL = "Start"
CURRENT_LABEL = "Current"
DOMAIN_STEP = 100


def current_account_value(trades: Sequence[Trade], base_account_value: float) -> float:
    """Base account value plus the P&L of every trade."""
    value = base_account_value + total_pnl(trades)
    return value if math.isfinite(value) else base_account_value


def _value_domain(values: list[float], base_account_value: float) -> tuple[float, float]:
    """Display bounds centred on the base value, rounded out to DOMAIN_STEP."""
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return base_account_value, base_account_value
    value_range = max(
        abs(max(finite) - base_account_value),
        abs(base_account_value - min(finite)),
    )
    low = math.floor((base_account_value - value_range) / DOMAIN_STEP) * DOMAIN_STEP
    high = math.ceil((base_account_value + value_range) / DOMAIN_STEP) * DOMAIN_STEP
    return float(low), float(high)


def project_value_series(
    trades: Sequence[Trade],
    base_account_value: float,
    current_value: Optional[float] = None,
) -> ValueSeries:
    """Build the running account value series.

    Args:
        trades: Trades in any order.
        base_account_value: Starting capital.
        current_value: Current account value. Computed from all trades
            when not given.

    Returns:
        ValueSeries starting at the base value, one point per dated trade,
        ending at the current account value.
    """
    if current_value is None:
        current_value = current_account_value(trades, base_account_value)

    charted = [
        t for t in trades
        if t.created_at is not None and math.isfinite(calculate_pnl(t).amount)
    ]
    charted.sort(key=lambda t: t.created_at)

    points = [ValuePoint(label=START_LABEL, value=base_account_value)]
    for trade in charted:
        value = points[-1].value + calculate_pnl(trade).amount
        if math.isfinite(value):
            points.append(ValuePoint(label=trade.created_at.date().isoformat(), value=value))

    last = points[-1].value
    if math.isfinite(current_value) and not math.isclose(
        current_value, last, rel_tol=1e-12, abs_tol=1e-9
    ):
        points.append(ValuePoint(label=CURRENT_LABEL, value=current_value))

    low, high = _value_domain([p.value for p in points], base_account_value)
    return ValueSeries(points=points, domain_low=low, domain_high=high)


def account_summary(trades: Sequence[Trade], settings: AccountSettings) -> AccountSummary:
    """Base and current account value with the P&L between them."""
    base = settings.base_account_value
    current = current_account_value(trades, base)
    pnl = current - base
    pnl_percent = pnl / base * 100 if base > 0 else 0.0
    return AccountSummary(
        base_account_value=base,
        current_account_value=current,
        pnl=pnl,
        pnl_percent=pnl_percent,
    )
