"""Error body returned by every store node exception handler."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    `code` is the machine-readable signal clients branch on (ALREADY_EXISTS,
    KEYSPACE_NOT_FOUND, COLUMN_FAMILY_NOT_FOUND, INVALID_REQUEST, ...).
    `request_id` matches the X-Request-ID header and the server log line.
    """
    detail: str
    code: str
    request_id: str
