"""Custom exception classes for the store node."""


class StoreException(Exception):
    """
    Base exception class for all store node errors.
    """
    pass


class KeyspaceAlreadyExistsError(StoreException):
    """
    Raised when creating a keyspace whose name is already taken.
    """
    pass


class KeyspaceNotFoundError(StoreException):
    """
    Raised when a keyspace does not exist.
    """
    pass


class ColumnFamilyAlreadyExistsError(StoreException):
    """
    Raised when creating a column family that already exists in the keyspace.
    """
    pass


class ColumnFamilyNotFoundError(StoreException):
    """
    Raised when a column family is not defined in the keyspace.
    """
    pass


class InvalidRequestError(StoreException):
    """
    Raised when a request is malformed (bad encoding, consistency level, limit).
    """
    pass


class InvalidCredentialsError(StoreException):
    """
    Raised when login credentials are invalid.
    """
    pass


class InvalidAPIKeyError(StoreException):
    """
    Raised when an API Key is missing, invalid or unknown.
    """
    pass
