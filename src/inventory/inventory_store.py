"""
SQLite record store for user inventories.

Holds one row per owned item in the econ_user_inventory table:
    { entry_id, owner_user_id, item_id, timestamp, expiration, value }

entry_id is assigned by the database on insert and never supplied by the
caller.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from src.data_models import Currency, InventoryRecord, as_currency

logger = logging.getLogger(__name__)

_COLUMNS = "entry_id, owner_user_id, item_id, timestamp, expiration, value"


class InventoryStore:
    """
    Ordered relation of inventory records stored in SQLite.

    Supports insert, delete by entry id, selection by owner with an optional
    item id range, value sums and the distinct set of owners.
    """

    TABLE_NAME = "econ_user_inventory"

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            db_path: Path to SQLite database file. If None, uses in-memory database.
        """
        self.db_path = db_path or Path(":memory:")
        self._memory_conn: Optional[sqlite3.Connection] = None

        self._init_database()

        logger.info(f"InventoryStore initialized with database: {self.db_path}")

    def _init_database(self) -> None:
        """Initialize the SQLite database schema."""
        if str(self.db_path) != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.TABLE_NAME} (
                    entry_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_user_id INTEGER NOT NULL,
                    item_id INTEGER NOT NULL,
                    timestamp INTEGER NOT NULL,
                    expiration INTEGER,
                    value REAL NOT NULL DEFAULT 0
                )
            """)

            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_inventory_owner
                ON {self.TABLE_NAME}(owner_user_id)
            """)
            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_inventory_owner_item
                ON {self.TABLE_NAME}(owner_user_id, item_id)
            """)

            conn.commit()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        if str(self.db_path) == ":memory:":
            # For in-memory database, maintain a single connection
            if self._memory_conn is None:
                self._memory_conn = sqlite3.connect(":memory:")
            return self._memory_conn
        return sqlite3.connect(str(self.db_path))

    def close(self) -> None:
        """Close the in-memory connection, discarding its data."""
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None

    # =========================================================================
    # MUTATION
    # =========================================================================

    def insert(
        self,
        owner_user_id: int,
        item_id: int,
        timestamp: int,
        expiration: Optional[int] = None,
        value: Currency = 0,
    ) -> int:
        """
        Insert a new inventory record.

        Returns:
            The entry_id assigned by the database
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                INSERT INTO {self.TABLE_NAME}
                (owner_user_id, item_id, timestamp, expiration, value)
                VALUES (?, ?, ?, ?, ?)
            """, (owner_user_id, item_id, timestamp, expiration, value))
            conn.commit()
            entry_id = cursor.lastrowid

        logger.debug(
            f"Inserted entry {entry_id}: user={owner_user_id} item={item_id:#06x} value={value}"
        )
        return entry_id

    def delete(self, entry_id: int) -> int:
        """
        Delete the record with the given entry id.

        Returns:
            Number of rows deleted (0 if no such record)
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                DELETE FROM {self.TABLE_NAME}
                WHERE entry_id = ?
            """, (entry_id,))
            conn.commit()
            deleted = cursor.rowcount

        logger.debug(f"Deleted entry {entry_id} ({deleted} rows)")
        return deleted

    # =========================================================================
    # QUERIES
    # =========================================================================

    def select(
        self,
        owner_user_id: int,
        item_id_range: Optional[tuple[int, int]] = None,
    ) -> list[InventoryRecord]:
        """
        Get all records owned by a user.

        Args:
            owner_user_id: Owning user
            item_id_range: Optional half-open (low, high) item id range

        Returns:
            List of records, in insertion order
        """
        query = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE owner_user_id = ?"
        params: list[int] = [owner_user_id]

        if item_id_range is not None:
            low, high = item_id_range
            query += " AND item_id >= ? AND item_id < ?"
            params.extend([low, high])

        query += " ORDER BY entry_id ASC"

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            columns = [column[0] for column in cursor.description]
            rows = cursor.fetchall()

        return [InventoryRecord.from_row(dict(zip(columns, row))) for row in rows]

    def sum_value(self, owner_user_id: int) -> Currency:
        """Sum the value of every record owned by a user (0 if none)."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                SELECT TOTAL(value)
                FROM {self.TABLE_NAME}
                WHERE owner_user_id = ?
            """, (owner_user_id,))
            total = cursor.fetchone()[0]

        return as_currency(total)

    def distinct_owners(self) -> set[int]:
        """Get every user id that owns at least one record."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT DISTINCT owner_user_id FROM {self.TABLE_NAME}")
            return {row[0] for row in cursor.fetchall()}

    def count(self, owner_user_id: Optional[int] = None) -> int:
        """Count records, optionally only those owned by one user."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            if owner_user_id is None:
                cursor.execute(f"SELECT COUNT(*) FROM {self.TABLE_NAME}")
            else:
                cursor.execute(f"""
                    SELECT COUNT(*)
                    FROM {self.TABLE_NAME}
                    WHERE owner_user_id = ?
                """, (owner_user_id,))
            return cursor.fetchone()[0]
