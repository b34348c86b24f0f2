"""Keyspace and column family management."""

import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from common.logging_config import get_logger
from storenode.exceptions import (
    ColumnFamilyAlreadyExistsError,
    ColumnFamilyNotFoundError,
    KeyspaceAlreadyExistsError,
    KeyspaceNotFoundError,
)
from storenode.repositories.schema_repository import ColumnFamily, Keyspace, SchemaRepository

logger = get_logger(__name__)


class SchemaService:
    def __init__(self):
        self.schema_repo = SchemaRepository()

    def list_keyspaces(self) -> List[Keyspace]:
        return self.schema_repo.list_keyspaces()

    def describe_keyspace(self, name: str) -> Keyspace:
        keyspace = self.schema_repo.get_keyspace(name)
        if keyspace is None:
            raise KeyspaceNotFoundError(f"Keyspace '{name}' does not exist")
        return keyspace

    def add_keyspace(
        self,
        name: str,
        strategy_class: str,
        strategy_options: Optional[Dict[str, str]] = None,
    ) -> Keyspace:
        if self.schema_repo.get_keyspace(name) is not None:
            raise KeyspaceAlreadyExistsError(f"Keyspace '{name}' already exists")
        try:
            keyspace = self.schema_repo.create_keyspace(
                name=name,
                strategy_class=strategy_class,
                strategy_options=strategy_options or {},
                created_at=datetime.utcnow(),
            )
        except sqlite3.IntegrityError:
            raise KeyspaceAlreadyExistsError(f"Keyspace '{name}' already exists")
        logger.info(f"Keyspace created: {name} [strategy={strategy_class}]")
        return keyspace

    def drop_keyspace(self, name: str) -> None:
        if not self.schema_repo.delete_keyspace(name):
            raise KeyspaceNotFoundError(f"Keyspace '{name}' does not exist")
        logger.info(f"Keyspace dropped: {name}")

    def add_column_family(self, keyspace: str, name: str, binary_columns: List[str]) -> ColumnFamily:
        self.describe_keyspace(keyspace)
        if self.schema_repo.get_column_family(keyspace, name) is not None:
            raise ColumnFamilyAlreadyExistsError(f"Column family '{name}' already exists in '{keyspace}'")
        try:
            column_family = self.schema_repo.create_column_family(
                keyspace=keyspace,
                name=name,
                binary_columns=binary_columns,
                created_at=datetime.utcnow(),
            )
        except sqlite3.IntegrityError:
            raise ColumnFamilyAlreadyExistsError(f"Column family '{name}' already exists in '{keyspace}'")
        logger.info(f"Column family created: {keyspace}.{name}")
        return column_family

    def drop_column_family(self, keyspace: str, name: str) -> None:
        self.describe_keyspace(keyspace)
        if not self.schema_repo.delete_column_family(keyspace, name):
            raise ColumnFamilyNotFoundError(f"Column family '{name}' not defined in '{keyspace}'")
        logger.info(f"Column family dropped: {keyspace}.{name}")

    def require_column_family(self, keyspace: str, name: str) -> ColumnFamily:
        column_family = self.schema_repo.get_column_family(keyspace, name)
        if column_family is None:
            self.describe_keyspace(keyspace)
            raise ColumnFamilyNotFoundError(f"Column family '{name}' not defined in '{keyspace}'")
        return column_family
