"""Repository layer for data access."""

from storenode.repositories.user_repository import UserRepository
from storenode.repositories.schema_repository import SchemaRepository
from storenode.repositories.row_repository import RowRepository

__all__ = [
    "UserRepository",
    "SchemaRepository",
    "RowRepository",
]
