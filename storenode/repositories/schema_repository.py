"""Keyspace and column family repository for database operations."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from common.logging_config import get_logger
from storenode.database import get_db_connection

logger = get_logger(__name__)


@dataclass
class ColumnFamily:
    keyspace: str
    name: str
    binary_columns: List[str]
    created_at: datetime


@dataclass
class Keyspace:
    name: str
    strategy_class: str
    strategy_options: Dict[str, str]
    created_at: datetime
    column_families: List[ColumnFamily] = field(default_factory=list)


class SchemaRepository:
    @staticmethod
    def create_keyspace(
        name: str,
        strategy_class: str,
        strategy_options: Dict[str, str],
        created_at: datetime,
    ) -> Keyspace:
        logger.debug(f"Creating keyspace: {name} [strategy={strategy_class}]")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO keyspaces (name, strategy_class, strategy_options, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (name, strategy_class, json.dumps(strategy_options), created_at.isoformat())
            )
            conn.commit()

        return Keyspace(
            name=name,
            strategy_class=strategy_class,
            strategy_options=dict(strategy_options),
            created_at=created_at,
        )

    @staticmethod
    def get_keyspace(name: str) -> Optional[Keyspace]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name, strategy_class, strategy_options, created_at FROM keyspaces WHERE name = ?",
                (name,)
            )
            row = cursor.fetchone()
            if row is None:
                return None

            keyspace = SchemaRepository._to_keyspace(row)
            keyspace.column_families = SchemaRepository._column_families(cursor, name)
            return keyspace

    @staticmethod
    def list_keyspaces() -> List[Keyspace]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name, strategy_class, strategy_options, created_at FROM keyspaces ORDER BY name"
            )
            keyspaces = [SchemaRepository._to_keyspace(row) for row in cursor.fetchall()]
            for keyspace in keyspaces:
                keyspace.column_families = SchemaRepository._column_families(cursor, keyspace.name)
            return keyspaces

    @staticmethod
    def delete_keyspace(name: str) -> bool:
        logger.debug(f"Dropping keyspace: {name}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM keyspaces WHERE name = ?", (name,))
            deleted = cursor.rowcount > 0
            conn.commit()
        return deleted

    @staticmethod
    def create_column_family(
        keyspace: str,
        name: str,
        binary_columns: List[str],
        created_at: datetime,
    ) -> ColumnFamily:
        logger.debug(f"Creating column family: {keyspace}.{name}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO column_families (keyspace, name, binary_columns, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (keyspace, name, json.dumps(binary_columns), created_at.isoformat())
            )
            conn.commit()

        return ColumnFamily(
            keyspace=keyspace,
            name=name,
            binary_columns=list(binary_columns),
            created_at=created_at,
        )

    @staticmethod
    def get_column_family(keyspace: str, name: str) -> Optional[ColumnFamily]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT keyspace, name, binary_columns, created_at
                FROM column_families WHERE keyspace = ? AND name = ?
                """,
                (keyspace, name)
            )
            row = cursor.fetchone()
            return SchemaRepository._to_column_family(row) if row else None

    @staticmethod
    def delete_column_family(keyspace: str, name: str) -> bool:
        logger.debug(f"Dropping column family: {keyspace}.{name}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM column_families WHERE keyspace = ? AND name = ?",
                (keyspace, name)
            )
            deleted = cursor.rowcount > 0
            conn.commit()
        return deleted

    @staticmethod
    def _column_families(cursor, keyspace: str) -> List[ColumnFamily]:
        cursor.execute(
            """
            SELECT keyspace, name, binary_columns, created_at
            FROM column_families WHERE keyspace = ? ORDER BY name
            """,
            (keyspace,)
        )
        return [SchemaRepository._to_column_family(row) for row in cursor.fetchall()]

    @staticmethod
    def _to_keyspace(row) -> Keyspace:
        return Keyspace(
            name=row["name"],
            strategy_class=row["strategy_class"],
            strategy_options=json.loads(row["strategy_options"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    @staticmethod
    def _to_column_family(row) -> ColumnFamily:
        return ColumnFamily(
            keyspace=row["keyspace"],
            name=row["name"],
            binary_columns=json.loads(row["binary_columns"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
