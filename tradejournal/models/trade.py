"""Trade (position) data models."""

import math
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

Side = Literal["long", "short"]

LONG: Side = "long"
SHORT: Side = "short"


class InvalidTradeError(ValueError):
    """Raised when a new trade fails entry validation."""


class OpenState(BaseModel):
    """An open trade, valued at its last known mark."""

    status: Literal["open"] = "open"
    price: float = Field(..., description="Current mark price")

    model_config = {"frozen": True}


class ClosedState(BaseModel):
    """A closed trade, valued at its exit price."""

    status: Literal["closed"] = "closed"
    price: float = Field(..., description="Exit price")

    model_config = {"frozen": True}


TradeState = Union[OpenState, ClosedState]


class Trade(BaseModel):
    """Represents a journaled position, open or closed."""

    id: Optional[int] = Field(default=None, description="Database ID")
    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    side: Side = Field(default=LONG, description="Position side (long/short)")
    quantity: float = Field(..., description="Units held")
    entry_price: float = Field(..., description="Price the position was opened at")
    current_price: float = Field(default=0.0, description="Last known mark price")
    exit_price: Optional[float] = Field(
        default=None, description="Exit price; set once the trade is closed"
    )
    stop_loss: float = Field(default=0.0, description="Planned stop-loss price")
    take_profit: float = Field(default=0.0, description="Planned take-profit price")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = {"frozen": True}

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("Symbol must not be empty")
        return value

    @property
    def state(self) -> TradeState:
        """Open or closed state carrying the valuation price."""
        if self.exit_price is not None:
            return ClosedState(price=self.exit_price)
        return OpenState(price=self.current_price)

    @property
    def is_closed(self) -> bool:
        return isinstance(self.state, ClosedState)


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


class TradeInput(BaseModel):
    """Payload for creating a new trade.

    Validation is strict: bad prices or stop/target levels on the wrong
    side of the entry are rejected with a message suitable for the user.
    """

    symbol: str = Field(..., description="Instrument symbol")
    side: Side = Field(default=LONG, description="Position side (long/short)")
    quantity: float = Field(..., description="Units to hold")
    entry_price: float = Field(..., description="Entry price")
    current_price: Optional[float] = Field(
        default=None, description="Mark price; defaults to the entry price"
    )
    exit_price: Optional[float] = Field(default=None, description="Exit price for closed trades")
    stop_loss: float = Field(..., description="Stop-loss price")
    take_profit: float = Field(..., description="Take-profit price")

    model_config = {"frozen": True}

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="before")
    @classmethod
    def _default_current_price(cls, data):
        if isinstance(data, dict) and data.get("current_price") is None:
            data = {**data, "current_price": data.get("entry_price")}
        return data

    def validate_levels(self) -> "TradeInput":
        """Check the entry rules, raising InvalidTradeError on the first failure."""
        if not self.symbol:
            raise InvalidTradeError("Please enter a symbol")
        if not _is_positive(self.quantity):
            raise InvalidTradeError("Please enter a valid quantity")
        if not _is_positive(self.entry_price):
            raise InvalidTradeError("Please enter a valid entry price")
        if not _is_positive(self.stop_loss):
            raise InvalidTradeError("Please enter a valid stop loss")
        if not _is_positive(self.take_profit):
            raise InvalidTradeError("Please enter a valid take profit")
        if self.exit_price is not None and not _is_positive(self.exit_price):
            raise InvalidTradeError("Please enter a valid exit price")
        # Zero is allowed: imported rows without a mark default to it
        if self.current_price is None or not math.isfinite(self.current_price) or self.current_price < 0:
            raise InvalidTradeError("Please enter a valid current price")

        if self.side == LONG:
            if self.stop_loss >= self.entry_price:
                raise InvalidTradeError("Stop loss must be below entry price for long positions")
            if self.take_profit <= self.entry_price:
                raise InvalidTradeError("Take profit must be above entry price for long positions")
        else:
            if self.stop_loss <= self.entry_price:
                raise InvalidTradeError("Stop loss must be above entry price for short positions")
            if self.take_profit >= self.entry_price:
                raise InvalidTradeError("Take profit must be below entry price for short positions")
        return self
