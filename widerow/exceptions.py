"""Exception classes raised by the client library."""

from typing import Optional


class WiderowError(Exception):
    """
    Base exception class for all client library errors.
    """
    pass


class FaultError(WiderowError):
    """
    Raised when a store operation fails: transport or serialization faults,
    unexpected store responses, encoding faults and missing chunk rows.

    The underlying exception, if any, is available as `cause` and is also
    chained as __cause__.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class LoginError(WiderowError):
    """
    Raised only while establishing a connection, when the configured
    credentials are rejected or do not grant access.
    """
    pass


class SchemaConflictError(WiderowError):
    """
    Structured store signal: the keyspace or column family already exists.
    """
    pass


class SchemaNotFoundError(WiderowError):
    """
    Structured store signal: the keyspace or column family does not exist.
    """
    pass
