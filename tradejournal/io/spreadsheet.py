"""Spreadsheet import and export of trades.

Rows are flat mappings of column name to value. Column names are matched
case- and spacing-insensitively, so ``Entry Price``, ``EntryPrice`` and
``entry_price`` all map to the entry price.
"""

import logging
import math
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from tradejournal.db.store import DataStore
from tradejournal.models import InvalidTradeError, Trade, TradeInput

logger = logging.getLogger(__name__)

# Normalized column name -> TradeInput field
COLUMN_ALIASES = {
    "symbol": "symbol",
    "type": "side",
    "side": "side",
    "quantity": "quantity",
    "entryprice": "entry_price",
    "currentprice": "current_price",
    "exitprice": "exit_price",
    "stoploss": "stop_loss",
    "takeprofit": "take_profit",
}

NUMERIC_FIELDS = ("quantity", "entry_price", "current_price", "stop_loss", "take_profit")

EXPORT_COLUMNS = [
    "Symbol",
    "Type",
    "Quantity",
    "Entry Price",
    "Current Price",
    "Exit Price",
    "Stop Loss",
    "Take Profit",
    "Created At",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls")


class ImportFailure(BaseModel):
    """A row that could not be imported."""

    row: int = Field(..., ge=1, description="1-based row number in the source")
    message: str

    model_config = {"frozen": True}


class ImportResult(BaseModel):
    """Outcome of a best-effort bulk import."""

    created: list[Trade] = Field(default_factory=list)
    failed: list[ImportFailure] = Field(default_factory=list)

    model_config = {"frozen": True}


def _normalize_key(key: Any) -> str:
    return "".join(str(key).split()).replace("_", "").lower()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _to_float(value: Any) -> float:
    if _is_blank(value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def normalize_row(row: Mapping[str, Any]) -> dict:
    """Map a spreadsheet row onto TradeInput fields.

    Missing numeric fields become 0, a missing type becomes "long", the
    symbol is upper-cased, and a blank or zero exit price marks the trade
    as open.
    """
    values: dict[str, Any] = {}
    for key, value in row.items():
        field = COLUMN_ALIASES.get(_normalize_key(key))
        if field is not None and field not in values:
            values[field] = value

    side = values.get("side")
    normalized = {
        "symbol": "" if _is_blank(values.get("symbol")) else str(values["symbol"]).strip().upper(),
        "side": "long" if _is_blank(side) else str(side).strip().lower(),
    }
    for field in NUMERIC_FIELDS:
        normalized[field] = _to_float(values.get(field))

    exit_price = _to_float(values.get("exit_price"))
    normalized["exit_price"] = exit_price if exit_price else None
    return normalized


def read_rows(path: Path) -> list[dict]:
    """Read trade rows from a CSV or Excel file (first sheet).

    Raises:
        ValueError: If the file type is not supported.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        frame = pd.read_csv(path)
    elif suffix in (".xlsx", ".xls"):
        frame = pd.read_excel(path, sheet_name=0)
    else:
        raise ValueError(
            f"Unsupported file type '{suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return frame.to_dict(orient="records")


def _error_message(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return f"{location}: {first['msg']}" if location else first["msg"]
    return str(error)


def import_trades(store: DataStore, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
    """Create a trade for each row, one at a time and in order.

    A row that fails validation is recorded and skipped; trades created
    from earlier rows are kept.

    Args:
        store: Data store to create trades in.
        rows: Spreadsheet rows.

    Returns:
        ImportResult with the created trades and the failed rows.
    """
    created: list[Trade] = []
    failed: list[ImportFailure] = []
    for number, row in enumerate(rows, start=1):
        try:
            trade_input = TradeInput(**normalize_row(row))
            created.append(store.create_trade(trade_input))
        except (InvalidTradeError, ValidationError) as e:
            message = _error_message(e)
            logger.warning("Skipping row %d: %s", number, message)
            failed.append(ImportFailure(row=number, message=message))
    logger.info("Imported %d trades, %d rows failed", len(created), len(failed))
    return ImportResult(created=created, failed=failed)


def export_rows(trades: Sequence[Trade]) -> list[dict]:
    """Flatten trades into rows keyed by EXPORT_COLUMNS."""
    return [
        {
            "Symbol": t.symbol,
            "Type": t.side,
            "Quantity": t.quantity,
            "Entry Price": t.entry_price,
            "Current Price": t.current_price,
            "Exit Price": t.exit_price if t.exit_price is not None else "",
            "Stop Loss": t.stop_loss,
            "Take Profit": t.take_profit,
            "Created At": t.created_at.strftime("%Y-%m-%d %H:%M:%S") if t.created_at else "",
        }
        for t in trades
    ]


def write_trades(trades: Sequence[Trade], path: Path) -> Path:
    """Write trades to a CSV or Excel file.

    Raises:
        ValueError: If the file type is not supported.
    """
    path = Path(path)
    frame = pd.DataFrame(export_rows(trades), columns=EXPORT_COLUMNS)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        frame.to_csv(path, index=False)
    elif suffix == ".xlsx":
        frame.to_excel(path, sheet_name="Trades", index=False)
    else:
        raise ValueError(f"Unsupported export type '{suffix}'. Use .csv or .xlsx")
    logger.info("Exported %d trades to %s", len(trades), path)
    return path


def default_export_name(today: Optional[date] = None) -> str:
    return f"trades_{(today or date.today()).isoformat()}.xlsx"
