"""Journal filtering and sorting."""

from datetime import date, datetime
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field

from tradejournal.engine.pnl import calculate_pnl, valuation_price
from tradejournal.models import Trade

SortField = Literal["date", "symbol", "side", "quantity", "entry_price", "price", "pnl"]

SORT_FIELDS: tuple[str, ...] = ("date", "symbol", "side", "quantity", "entry_price", "price", "pnl")


class JournalFilter(BaseModel):
    """Criteria for narrowing the journal view."""

    symbol: str = Field(default="", description="Case-insensitive symbol substring")
    side: Literal["all", "long", "short"] = Field(default="all")
    status: Literal["all", "open", "closed"] = Field(default="all")
    start: Optional[date] = Field(default=None, description="Earliest creation date, inclusive")
    end: Optional[date] = Field(default=None, description="Latest creation date, inclusive")
    profitability: Literal["all", "profitable", "unprofitable"] = Field(default="all")

    model_config = {"frozen": True}

    def active_count(self) -> int:
        """Number of criteria that narrow the view."""
        count = 0
        if self.symbol:
            count += 1
        if self.side != "all":
            count += 1
        if self.status != "all":
            count += 1
        if self.start is not None or self.end is not None:
            count += 1
        if self.profitability != "all":
            count += 1
        return count


def _matches(trade: Trade, criteria: JournalFilter) -> bool:
    if criteria.symbol and criteria.symbol.lower() not in trade.symbol.lower():
        return False
    if criteria.side != "all" and trade.side != criteria.side:
        return False
    if criteria.status == "open" and trade.is_closed:
        return False
    if criteria.status == "closed" and not trade.is_closed:
        return False

    if criteria.start is not None or criteria.end is not None:
        if trade.created_at is None:
            return False
        created = trade.created_at.date()
        if criteria.start is not None and created < criteria.start:
            return False
        if criteria.end is not None and created > criteria.end:
            return False

    if criteria.profitability != "all":
        amount = calculate_pnl(trade).amount
        if criteria.profitability == "profitable" and amount <= 0:
            return False
        if criteria.profitability == "unprofitable" and amount >= 0:
            return False
    return True


def filter_trades(trades: Sequence[Trade], criteria: JournalFilter) -> list[Trade]:
    """Trades matching every active criterion, in input order."""
    return [t for t in trades if _matches(t, criteria)]


def _sort_key(field: str):
    if field == "date":
        # Undated trades sort first
        return lambda t: (t.created_at is not None, t.created_at or datetime.min)
    if field == "symbol":
        return lambda t: t.symbol
    if field == "side":
        return lambda t: t.side
    if field == "quantity":
        return lambda t: t.quantity
    if field == "entry_price":
        return lambda t: t.entry_price
    if field == "price":
        return valuation_price
    if field == "pnl":
        return lambda t: calculate_pnl(t).amount
    raise ValueError(f"Unknown sort field: {field}")


def sort_trades(
    trades: Sequence[Trade], field: SortField = "date", descending: bool = True
) -> list[Trade]:
    """Sort trades by a journal column."""
    return sorted(trades, key=_sort_key(field), reverse=descending)
