"""Entry point for the store node service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from storenode import config
from storenode.database import get_db_connection, init_database
from storenode.exceptions import (
    StoreException,
    KeyspaceAlreadyExistsError,
    KeyspaceNotFoundError,
    ColumnFamilyAlreadyExistsError,
    ColumnFamilyNotFoundError,
    InvalidRequestError,
    InvalidCredentialsError,
    InvalidAPIKeyError,
)
from storenode.routes.auth_routes import router as auth_router
from storenode.routes.row_routes import router as row_router
from storenode.routes.schema_routes import router as schema_router
from storenode.schemas.common import ErrorResponse
from storenode.services.auth_service import AuthService

logger = setup_logging('storenode')

app = FastAPI(
    title="widerow store node",
    description="Sorted column-family store over SQLite",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.debug(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize database and bootstrap the admin user on application startup.
    """
    logger.info("Store node starting up...")

    init_database()
    logger.info("Database initialized")

    if config.ADMIN_USERNAME and config.ADMIN_PASSWORD:
        AuthService().ensure_user(config.ADMIN_USERNAME, config.ADMIN_PASSWORD)
        logger.info(f"Admin user ready: {config.ADMIN_USERNAME}")

    if config.AUTH_REQUIRED:
        logger.info("Authentication required for all schema and row operations")


def _error(request: Request, status_code: int, code: str, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"{code}: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code, request_id=request_id).model_dump()
    )


@app.exception_handler(KeyspaceAlreadyExistsError)
async def keyspace_exists_handler(request: Request, exc: KeyspaceAlreadyExistsError):
    return _error(request, status.HTTP_409_CONFLICT, "ALREADY_EXISTS", exc)


@app.exception_handler(ColumnFamilyAlreadyExistsError)
async def column_family_exists_handler(request: Request, exc: ColumnFamilyAlreadyExistsError):
    return _error(request, status.HTTP_409_CONFLICT, "ALREADY_EXISTS", exc)


@app.exception_handler(KeyspaceNotFoundError)
async def keyspace_not_found_handler(request: Request, exc: KeyspaceNotFoundError):
    return _error(request, status.HTTP_404_NOT_FOUND, "KEYSPACE_NOT_FOUND", exc)


@app.exception_handler(ColumnFamilyNotFoundError)
async def column_family_not_found_handler(request: Request, exc: ColumnFamilyNotFoundError):
    return _error(request, status.HTTP_404_NOT_FOUND, "COLUMN_FAMILY_NOT_FOUND", exc)


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return _error(request, status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", exc)


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return _error(request, status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", exc)


@app.exception_handler(InvalidAPIKeyError)
async def invalid_api_key_handler(request: Request, exc: InvalidAPIKeyError):
    return _error(request, status.HTTP_401_UNAUTHORIZED, "INVALID_API_KEY", exc)


@app.exception_handler(StoreException)
async def store_exception_handler(request: Request, exc: StoreException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Store exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "STORE_ERROR"}
    )


app.include_router(auth_router)
app.include_router(schema_router)
app.include_router(row_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "widerow store node", "status": "running"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint. Verifies database connectivity.
    """
    try:
        with get_db_connection() as conn:
            conn.execute("SELECT 1")
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {e}"

    ready = db_status == "ok"
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"ready": ready, "database": db_status}
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "storenode.main:app",
        host=config.STORE_HOST,
        port=config.STORE_PORT,
    )


if __name__ == "__main__":
    main()
