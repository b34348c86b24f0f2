"""API routes package."""

from storenode.routes.auth_routes import router as auth_router
from storenode.routes.schema_routes import router as schema_router
from storenode.routes.row_routes import router as row_router

__all__ = ["auth_router", "schema_router", "row_router"]
