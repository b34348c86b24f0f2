"""Service layer for business logic."""

from storenode.services.auth_service import AuthService
from storenode.services.schema_service import SchemaService
from storenode.services.row_service import RowService

__all__ = [
    "AuthService",
    "SchemaService",
    "RowService",
]
