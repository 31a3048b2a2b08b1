"""Tests for spreadsheet import and export.

**Feature: trade-journal**
"""

import math
import tempfile
from datetime import date, datetime
from pathlib import Path

import pandas as pd
import pytest

from tradejournal.db.store import DataStore
from tradejournal.io.spreadsheet import (
    EXPORT_COLUMNS,
    default_export_name,
    export_rows,
    import_trades,
    normalize_row,
    read_rows,
    write_trades,
)
from tradejournal.models import Trade


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db(temp_dir):
    return DataStore(temp_dir / "test.db")


def good_row(**overrides):
    row = {
        "Symbol": "aapl",
        "Type": "Long",
        "Quantity": 10,
        "Entry Price": 100,
        "Current Price": 101,
        "Exit Price": "",
        "Stop Loss": 98,
        "Take Profit": 104,
    }
    row.update(overrides)
    return row


class TestRowNormalization:
    """
    **Feature: trade-journal, Property 29: Spreadsheet Row Normalization**

    *For any* spreadsheet row, column names are matched loosely and
    missing values get their defaults.
    """

    def test_display_headers(self):
        row = normalize_row(good_row())
        assert row == {
            "symbol": "AAPL",
            "side": "long",
            "quantity": 10.0,
            "entry_price": 100.0,
            "current_price": 101.0,
            "stop_loss": 98.0,
            "take_profit": 104.0,
            "exit_price": None,
        }

    def test_snake_case_headers(self):
        row = normalize_row({"symbol": "msft", "side": "short", "entry_price": 50, "exit_price": 45})
        assert row["side"] == "short"
        assert row["entry_price"] == 50.0
        assert row["exit_price"] == 45.0

    def test_missing_values_default(self):
        row = normalize_row({"Symbol": "tsla"})
        assert row["side"] == "long"
        assert row["quantity"] == 0.0
        assert row["stop_loss"] == 0.0
        assert row["exit_price"] is None

    def test_zero_or_nan_exit_means_open(self):
        assert normalize_row(good_row(**{"Exit Price": 0}))["exit_price"] is None
        assert normalize_row(good_row(**{"Exit Price": float("nan")}))["exit_price"] is None

    def test_garbage_number_becomes_nan(self):
        assert math.isnan(normalize_row(good_row(Quantity="ten"))["quantity"])

    def test_unknown_columns_ignored(self):
        row = normalize_row(good_row(Notes="breakout"))
        assert "Notes" not in row and "notes" not in row


class TestImport:
    """
    **Feature: trade-journal, Property 30: Best-Effort Import**

    *For any* batch of rows, valid rows are created in order and invalid
    rows are reported by their 1-based position.
    """

    def test_partial_import(self, temp_db):
        rows = [
            good_row(),
            good_row(Quantity="ten"),
            good_row(Symbol="msft", **{"Stop Loss": 105}),
            good_row(Symbol="nvda", Type="short", **{"Stop Loss": 102, "Take Profit": 95, "Exit Price": 97}),
            good_row(Type="sideways"),
        ]
        result = import_trades(temp_db, rows)

        assert [t.symbol for t in result.created] == ["AAPL", "NVDA"]
        assert [f.row for f in result.failed] == [2, 3, 5]
        assert "quantity" in result.failed[0].message
        assert "Stop loss must be below entry price" in result.failed[1].message
        assert result.failed[2].message.startswith("side")

        stored = temp_db.list_trades()
        assert [t.symbol for t in stored] == ["AAPL", "NVDA"]
        assert stored[1].is_closed

    def test_unreadable_current_price_skips_only_that_row(self, temp_db):
        rows = [good_row(**{"Current Price": "n/a"}), good_row(Symbol="msft")]
        result = import_trades(temp_db, rows)

        assert [f.row for f in result.failed] == [1]
        assert "current price" in result.failed[0].message
        assert [t.symbol for t in temp_db.list_trades()] == ["MSFT"]

    def test_missing_current_price_defaults_to_zero(self, temp_db):
        row = good_row()
        del row["Current Price"]
        result = import_trades(temp_db, [row])
        assert result.failed == []
        assert result.created[0].current_price == 0.0

    def test_empty_import(self, temp_db):
        result = import_trades(temp_db, [])
        assert result.created == [] and result.failed == []


class TestFileRoundTrip:
    """
    **Feature: trade-journal, Property 31: Export Then Import**

    *For any* journal, exporting then importing reproduces the trades.
    """

    def _seed(self, store: DataStore) -> list[Trade]:
        import_trades(store, [
            good_row(),
            good_row(Symbol="nvda", Type="short", **{"Stop Loss": 102, "Take Profit": 95, "Exit Price": 97}),
        ])
        return store.list_trades()

    @pytest.mark.parametrize("suffix", [".csv", ".xlsx"])
    def test_round_trip(self, temp_dir, temp_db, suffix):
        trades = self._seed(temp_db)
        path = write_trades(trades, temp_dir / f"out{suffix}")
        assert path.exists()

        rows = read_rows(path)
        assert list(rows[0].keys()) == EXPORT_COLUMNS

        target = DataStore(temp_dir / "copy.db")
        result = import_trades(target, rows)
        assert result.failed == []

        copied = target.list_trades()
        for original, copy in zip(trades, copied):
            assert copy.symbol == original.symbol
            assert copy.side == original.side
            assert copy.quantity == original.quantity
            assert copy.entry_price == original.entry_price
            assert copy.current_price == original.current_price
            assert copy.exit_price == original.exit_price

    def test_excel_sheet_name(self, temp_dir, temp_db):
        path = write_trades(self._seed(temp_db), temp_dir / "out.xlsx")
        assert pd.ExcelFile(path).sheet_names == ["Trades"]

    def test_unsupported_suffix(self, temp_dir):
        with pytest.raises(ValueError, match="Unsupported"):
            read_rows(temp_dir / "trades.json")
        with pytest.raises(ValueError, match="Unsupported"):
            write_trades([], temp_dir / "trades.json")

    def test_export_rows_format(self):
        trade = Trade(
            symbol="AAPL", quantity=1, entry_price=10, current_price=11,
            created_at=datetime(2024, 1, 2, 3, 4, 5),
        )
        row = export_rows([trade])[0]
        assert row["Exit Price"] == ""
        assert row["Created At"] == "2024-01-02 03:04:05"
        assert row["Type"] == "long"

    def test_default_export_name(self):
        assert default_export_name(date(2024, 6, 1)) == "trades_2024-06-01.xlsx"
