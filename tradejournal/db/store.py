"""SQLite data store for the trade journal."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from tradejournal.models import AccountSettings, Trade, TradeInput

logger = logging.getLogger(__name__)

# Columns a caller may change through update_trade
UPDATABLE_TRADE_FIELDS = (
    "symbol",
    "side",
    "quantity",
    "entry_price",
    "current_price",
    "exit_price",
    "stop_loss",
    "take_profit",
)

SETTINGS_FIELDS = (
    "base_account_value",
    "risk_percentage",
    "profit_risk_ratio",
    "loss_risk_ratio",
    "setup_completed",
)


class DataStore:
    """SQLite-based store for trades and account settings.

    Every method opens its own connection, so a store instance holds no
    state beyond the database path.
    """

    REQUIRED_TABLES = [
        "trades",
        "settings",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    symbol TEXT NOT NULL,
                    side TEXT NOT NULL,
                    quantity REAL NOT NULL,
                    entry_price REAL NOT NULL,
                    current_price REAL NOT NULL,
                    exit_price REAL,
                    stop_loss REAL NOT NULL,
                    take_profit REAL NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Single-row table, id is always 1
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    base_account_value REAL NOT NULL,
                    risk_percentage REAL NOT NULL,
                    profit_risk_ratio REAL NOT NULL,
                    loss_risk_ratio REAL NOT NULL,
                    setup_completed INTEGER NOT NULL DEFAULT 0,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            symbol=row["symbol"],
            side=row["side"],
            quantity=row["quantity"],
            entry_price=row["entry_price"],
            current_price=row["current_price"],
            exit_price=row["exit_price"],
            stop_loss=row["stop_loss"],
            take_profit=row["take_profit"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def list_trades(self) -> list[Trade]:
        """Get all trades in insertion order.

        Returns:
            List of trades.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades ORDER BY id")
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        """Get a trade by ID.

        Args:
            trade_id: Trade ID.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            if row:
                return self._row_to_trade(row)
            return None
        finally:
            conn.close()

    def create_trade(
        self, trade: TradeInput, created_at: Optional[datetime] = None
    ) -> Trade:
        """Validate and save a new trade.

        Args:
            trade: Trade to create.
            created_at: Creation timestamp. Defaults to now.

        Returns:
            The stored trade with its ID and timestamps.

        Raises:
            InvalidTradeError: If the trade fails entry validation.
        """
        trade.validate_levels()
        created_at = created_at or datetime.now()

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades
                (symbol, side, quantity, entry_price, current_price, exit_price,
                 stop_loss, take_profit, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.symbol,
                    trade.side,
                    trade.quantity,
                    trade.entry_price,
                    trade.current_price,
                    trade.exit_price,
                    trade.stop_loss,
                    trade.take_profit,
                    created_at.isoformat(),
                    created_at.isoformat(),
                ),
            )
            conn.commit()
            trade_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Created trade %s (%s %s)", trade_id, trade.side, trade.symbol)
        return Trade(
            id=trade_id,
            symbol=trade.symbol,
            side=trade.side,
            quantity=trade.quantity,
            entry_price=trade.entry_price,
            current_price=trade.current_price,
            exit_price=trade.exit_price,
            stop_loss=trade.stop_loss,
            take_profit=trade.take_profit,
            created_at=created_at,
            updated_at=created_at,
        )

    def update_trade(self, trade_id: int, **fields: Any) -> bool:
        """Update fields of a trade.

        Args:
            trade_id: Trade ID.
            **fields: Columns to change, from UPDATABLE_TRADE_FIELDS.

        Returns:
            True if the trade was updated, False if it does not exist.

        Raises:
            ValueError: On unknown fields, or when clearing the exit price
                of a closed trade.
        """
        unknown = set(fields) - set(UPDATABLE_TRADE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update trade fields: {', '.join(sorted(unknown))}")

        existing = self.get_trade(trade_id)
        if existing is None:
            return False

        if existing.is_closed and "exit_price" in fields and fields["exit_price"] is None:
            raise ValueError(f"Trade {trade_id} is closed and cannot be reopened")

        if not fields:
            return True

        # Run the merged record through the model so symbol/side stay valid
        updated = Trade(**{**existing.model_dump(), **fields, "updated_at": datetime.now()})

        columns = list(fields) + ["updated_at"]
        values = [getattr(updated, c) for c in fields] + [updated.updated_at.isoformat()]
        assignments = ", ".join(f"{c} = ?" for c in columns)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE trades SET {assignments} WHERE id = ?",
                (*values, trade_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete_trade(self, trade_id: int) -> bool:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.

        Returns:
            True if a trade was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def clear_trades(self) -> int:
        """Delete every trade.

        Returns:
            Number of trades deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades")
            conn.commit()
            logger.info("Cleared %d trades", cursor.rowcount)
            return cursor.rowcount
        finally:
            conn.close()

    # ==================== Settings ====================

    def _insert_default_settings(self, cursor: sqlite3.Cursor) -> AccountSettings:
        settings = AccountSettings(updated_at=datetime.now())
        cursor.execute(
            """
            INSERT OR REPLACE INTO settings
            (id, base_account_value, risk_percentage, profit_risk_ratio,
             loss_risk_ratio, setup_completed, updated_at)
            VALUES (1, ?, ?, ?, ?, ?, ?)
            """,
            (
                settings.base_account_value,
                settings.risk_percentage,
                settings.profit_risk_ratio,
                settings.loss_risk_ratio,
                1 if settings.setup_completed else 0,
                settings.updated_at.isoformat(),
            ),
        )
        return settings

    def get_settings(self) -> AccountSettings:
        """Get account settings, creating the defaults on first access."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM settings WHERE id = 1")
            row = cursor.fetchone()
            if row is None:
                settings = self._insert_default_settings(cursor)
                conn.commit()
                logger.debug("Created default account settings")
                return settings
            return AccountSettings(
                base_account_value=row["base_account_value"],
                risk_percentage=row["risk_percentage"],
                profit_risk_ratio=row["profit_risk_ratio"],
                loss_risk_ratio=row["loss_risk_ratio"],
                setup_completed=bool(row["setup_completed"]),
                updated_at=datetime.fromisoformat(row["updated_at"]),
            )
        finally:
            conn.close()

    def update_settings(self, **fields: Any) -> AccountSettings:
        """Update account settings in place.

        Args:
            **fields: Settings to change, from SETTINGS_FIELDS.

        Returns:
            The updated settings.

        Raises:
            ValueError: On unknown fields.
            pydantic.ValidationError: If a value is out of range.
        """
        unknown = set(fields) - set(SETTINGS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        current = self.get_settings()
        settings = AccountSettings(
            **{**current.model_dump(), **fields, "updated_at": datetime.now()}
        )

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE settings SET
                    base_account_value = ?,
                    risk_percentage = ?,
                    profit_risk_ratio = ?,
                    loss_risk_ratio = ?,
                    setup_completed = ?,
                    updated_at = ?
                WHERE id = 1
                """,
                (
                    settings.base_account_value,
                    settings.risk_percentage,
                    settings.profit_risk_ratio,
                    settings.loss_risk_ratio,
                    1 if settings.setup_completed else 0,
                    settings.updated_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return settings

    def clear_data(self) -> None:
        """Delete all trades and reset settings to their defaults."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades")
            self._insert_default_settings(cursor)
            conn.commit()
        finally:
            conn.close()
        logger.info("Cleared all journal data")

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
