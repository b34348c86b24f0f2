"""Row repository: timestamped columns and row tombstones."""

from typing import Dict, List, Optional

from common.logging_config import get_logger
from common.types import Column, KeySlice
from storenode.database import get_db_connection

logger = get_logger(__name__)


class RowRepository:
    """
    Sparse rows stored as one SQL row per column.

    Writes are last-write-wins by timestamp. Removing a row leaves a tombstone
    that shadows every column written at or before its timestamp while keeping
    the row key visible to range scans.

    Tombstones are never compacted: a removed key keeps its range-scan slot
    and its row_tombstones entry until the column family is dropped.
    """

    @staticmethod
    def put_column(
        keyspace: str,
        column_family: str,
        row_key: bytes,
        name: bytes,
        value: bytes,
        timestamp: int,
    ) -> bool:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            tombstone = RowRepository._tombstone(cursor, keyspace, column_family, row_key)
            if tombstone is not None and timestamp <= tombstone:
                logger.debug(
                    f"Write shadowed by tombstone [cf={column_family}] "
                    f"timestamp={timestamp} tombstone={tombstone}"
                )
                return False

            cursor.execute(
                """
                INSERT INTO columns (keyspace, column_family, row_key, name, value, timestamp)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(keyspace, column_family, row_key, name) DO UPDATE SET
                    value = excluded.value,
                    timestamp = excluded.timestamp
                WHERE excluded.timestamp >= columns.timestamp
                """,
                (keyspace, column_family, row_key, name, value, timestamp)
            )
            applied = cursor.rowcount > 0
            conn.commit()
        return applied

    @staticmethod
    def remove_row(keyspace: str, column_family: str, row_key: bytes, timestamp: int) -> None:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO row_tombstones (keyspace, column_family, row_key, timestamp)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(keyspace, column_family, row_key) DO UPDATE SET
                    timestamp = MAX(row_tombstones.timestamp, excluded.timestamp)
                """,
                (keyspace, column_family, row_key, timestamp)
            )
            cursor.execute(
                """
                DELETE FROM columns
                WHERE keyspace = ? AND column_family = ? AND row_key = ? AND timestamp <= ?
                """,
                (keyspace, column_family, row_key, timestamp)
            )
            removed = cursor.rowcount
            conn.commit()
        logger.debug(f"Row tombstoned [cf={column_family}] columns_removed={removed}")

    @staticmethod
    def get_slice(keyspace: str, column_family: str, row_key: bytes) -> List[Column]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT name, value, timestamp FROM columns
                WHERE keyspace = ? AND column_family = ? AND row_key = ?
                ORDER BY name
                """,
                (keyspace, column_family, row_key)
            )
            return [
                Column(name=bytes(row["name"]), value=bytes(row["value"]), timestamp=row["timestamp"])
                for row in cursor.fetchall()
            ]

    @staticmethod
    def get_count(keyspace: str, column_family: str, row_key: bytes) -> int:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT COUNT(*) AS count FROM columns
                WHERE keyspace = ? AND column_family = ? AND row_key = ?
                """,
                (keyspace, column_family, row_key)
            )
            return cursor.fetchone()["count"]

    @staticmethod
    def range_slice(
        keyspace: str,
        column_family: str,
        start_key: bytes,
        end_key: Optional[bytes],
        limit: int,
    ) -> List[KeySlice]:
        """
        Return up to `limit` rows with start_key <= key (<= end_key), in key order.

        Tombstoned rows are included with an empty column list.
        """
        end_clause = "AND row_key <= ?" if end_key else ""
        bounds = [start_key, end_key] if end_key else [start_key]

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT row_key FROM (
                    SELECT row_key FROM columns
                    WHERE keyspace = ? AND column_family = ? AND row_key >= ? {end_clause}
                    UNION
                    SELECT row_key FROM row_tombstones
                    WHERE keyspace = ? AND column_family = ? AND row_key >= ? {end_clause}
                )
                ORDER BY row_key
                LIMIT ?
                """,
                (keyspace, column_family, *bounds, keyspace, column_family, *bounds, limit)
            )
            keys = [bytes(row["row_key"]) for row in cursor.fetchall()]
            if not keys:
                return []

            placeholders = ", ".join("?" for _ in keys)
            cursor.execute(
                f"""
                SELECT row_key, name, value, timestamp FROM columns
                WHERE keyspace = ? AND column_family = ? AND row_key IN ({placeholders})
                ORDER BY row_key, name
                """,
                (keyspace, column_family, *keys)
            )
            columns: Dict[bytes, List[Column]] = {key: [] for key in keys}
            for row in cursor.fetchall():
                columns[bytes(row["row_key"])].append(
                    Column(name=bytes(row["name"]), value=bytes(row["value"]), timestamp=row["timestamp"])
                )

        return [KeySlice(key=key, columns=columns[key]) for key in keys]

    @staticmethod
    def _tombstone(cursor, keyspace: str, column_family: str, row_key: bytes) -> Optional[int]:
        cursor.execute(
            """
            SELECT timestamp FROM row_tombstones
            WHERE keyspace = ? AND column_family = ? AND row_key = ?
            """,
            (keyspace, column_family, row_key)
        )
        row = cursor.fetchone()
        return row["timestamp"] if row else None
