"""Profit and loss calculations.

Every function here is pure and returns finite numbers: operands that
would produce NaN or infinity fall back to zero.
"""

import math
from typing import Iterable

from tradejournal.models import LONG, ClosedState, OpenState, PnL, Trade

ZERO_PNL = PnL(amount=0.0, percent=0.0)


def valuation_price(trade: Trade) -> float:
    """Price a trade is valued at: exit price when closed, mark when open."""
    state = trade.state
    if isinstance(state, ClosedState):
        return state.price
    if isinstance(state, OpenState):
        return state.price
    raise TypeError(f"Unknown trade state: {state!r}")


def direction(trade: Trade) -> int:
    """+1 for long positions, -1 for short."""
    return 1 if trade.side == LONG else -1


def calculate_pnl(trade: Trade) -> PnL:
    """Calculate the P&L of a single trade.

    Args:
        trade: Trade to value.

    Returns:
        PnL with the amount and the percent move from entry, signed by side.
    """
    price = valuation_price(trade)
    entry = trade.entry_price
    quantity = trade.quantity

    if not all(math.isfinite(v) for v in (price, entry, quantity)):
        return ZERO_PNL
    if entry <= 0 or quantity <= 0:
        return ZERO_PNL

    multiplier = direction(trade)
    amount = (price - entry) * quantity * multiplier
    percent = (price - entry) / entry * 100 * multiplier

    if not (math.isfinite(amount) and math.isfinite(percent)):
        return ZERO_PNL
    return PnL(amount=amount, percent=percent)


def total_pnl(trades: Iterable[Trade]) -> float:
    """Sum of P&L amounts across trades."""
    return sum((calculate_pnl(t).amount for t in trades), 0.0)


def position_value(trade: Trade) -> float:
    """Market value of a trade at its valuation price."""
    value = trade.quantity * valuation_price(trade)
    return value if math.isfinite(value) else 0.0


def total_market_value(trades: Iterable[Trade]) -> float:
    """Sum of market values across trades."""
    return sum((position_value(t) for t in trades), 0.0)
